"""
C1 Recursive Descent Recognizer
===============================

This module implements a recursive descent parser for the C1 teaching
language. It does not build a tree: each grammar rule is one method that
consumes tokens from the lexer and either returns normally or raises a
C1SyntaxError for the first mismatch. There is no error recovery.

Grammar (EBNF)
--------------
program         ::= functiondef+ EOF
functiondef     ::= type ID '(' ')' '{' stmtlist '}'
stmtlist        ::= block*
block           ::= '{' stmtlist '}' | statement
statement       ::= ifstmt
                  | 'return' assignment? ';'
                  | 'printf' '(' assignment ')' ';'
                  | ID '=' assignment ';'
                  | ID '(' ')' ';'
ifstmt          ::= 'if' '(' assignment ')' block
type            ::= 'boolean' | 'float' | 'int' | 'void'
assignment      ::= ID '=' assignment | expr
expr            ::= simpexpr (relop simpexpr)?
simpexpr        ::= '-'? term (('+' | '-' | '||') term)*
term            ::= factor (('*' | '/' | '&&') factor)*
factor          ::= INT | FLOAT | BOOL | functioncall | ID | '(' assignment ')'
functioncall    ::= ID '(' ')'

Lookahead
---------
Three places need the token after the current one:

1. statement: ID '=' is an assignment, ID '(' a call, anything else
   is an error.
2. assignment: ID '=' is the assignment form, otherwise the ID starts
   an expression.
3. factor: ID '(' is a call, otherwise a variable reference.

A relational operator may appear at most once per expr, so ``a < b < c``
is rejected. Chained assignment ``a = b = c`` is accepted.

Example Usage
-------------
>>> from c1_sdk.c1.parser import parse
>>> parse('void main() { printf(1 + 2); }')
>>> parse('int f() { a; }')
Traceback (most recent call last):
    ...
c1_sdk.c1.errors.UnexpectedTokenError: Invalid statement, unexpected token found: "a" at line 1
"""

from c1_sdk.c1.lexer import (
    C1Lexer,
    C1Token,
    ADDITIVE_OPERATORS,
    MULTIPLICATIVE_OPERATORS,
    RELATIONAL_OPERATORS,
    TYPE_KEYWORDS,
)
from c1_sdk.c1.errors import (
    C1SyntaxError,
    EmptySourceError,
    LexicalError,
    MissingTokenError,
    NestingTooDeepError,
    UnexpectedTokenError,
)


# Deep enough for any hand-written program, shallow enough to stay well
# below Python's default recursion limit (each level costs up to 5 frames).
DEFAULT_MAX_DEPTH = 128

# How expected tokens are named in MissingTokenError messages
TOKEN_DESCRIPTIONS: dict[C1Token, str] = {
    C1Token.IDENTIFIER: "identifier",
    C1Token.LEFT_PARENTHESIS: "'('",
    C1Token.RIGHT_PARENTHESIS: "')'",
    C1Token.LEFT_BRACE: "'{'",
    C1Token.RIGHT_BRACE: "'}'",
    C1Token.SEMICOLON: "';'",
    C1Token.ASSIGN: "'='",
    C1Token.KW_IF: "'if'",
    C1Token.KW_RETURN: "'return'",
    C1Token.KW_PRINTF: "'printf'",
    C1Token.MINUS: "'-'",
}


class C1Parser:
    """
    Recursive descent recognizer for C1.

    The parser exclusively owns its lexer and holds no other state than
    the current nesting depth. It is meant for a single parse_program()
    call and is discarded afterwards.

    Attributes:
        lexer: The token source being consumed
        max_depth: Maximum nesting of blocks and assignments
    """

    def __init__(self, lexer: C1Lexer, max_depth: int = DEFAULT_MAX_DEPTH):
        self.lexer = lexer
        self.max_depth = max_depth
        self._depth = 0
        self._deepest = 0

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _check(self, *types: C1Token) -> bool:
        """Check if current token is one of the given types."""
        return self.lexer.current_token() in types

    def _expect(self, token_type: C1Token) -> None:
        """
        Expect and consume a specific token type.

        Raises:
            MissingTokenError: If the current token is something else
            LexicalError: If the current token is malformed
        """
        if self.lexer.current_token() is token_type:
            self.lexer.eat()
            return

        if self.lexer.current_token() is C1Token.ERROR:
            raise self._lexical_error()

        raise MissingTokenError(
            TOKEN_DESCRIPTIONS.get(token_type, token_type.name.lower()),
            self.lexer.current_text(),
            self.lexer.current_location(),
        )

    def _unexpected(self, rule: str) -> C1SyntaxError:
        """Build the error for a rule whose leading token matched nothing."""
        if self.lexer.current_token() is C1Token.ERROR:
            return self._lexical_error()
        return UnexpectedTokenError(
            rule,
            self.lexer.current_text(),
            self.lexer.current_location(),
        )

    def _lexical_error(self) -> LexicalError:
        return LexicalError(self.lexer.current_text(), self.lexer.current_location())

    def _enter(self) -> None:
        """Open one nesting level; called before the matching try/finally."""
        if self._depth >= self.max_depth:
            raise NestingTooDeepError(
                self.max_depth,
                self.lexer.current_text(),
                self.lexer.current_location(),
            )
        self._depth += 1
        self._deepest = max(self._deepest, self._depth)

    def _leave(self) -> None:
        self._depth -= 1

    # =========================================================================
    # Top-Level Parsing
    # =========================================================================

    def parse_program(self) -> None:
        """
        program ::= functiondef+ EOF

        Raises:
            EmptySourceError: If the source holds no tokens
            NestingTooDeepError: If nesting exceeds max_depth, or the
                interpreter stack runs out first
            C1SyntaxError: For the first mismatch in the source
        """
        if self._check(C1Token.EOF):
            raise EmptySourceError(self.lexer.current_location())

        try:
            self._parse_function_definition()
            while not self._check(C1Token.EOF):
                self._parse_function_definition()
        except RecursionError:
            # max_depth was set above what the Python stack can hold
            raise NestingTooDeepError(
                self._deepest,
                self.lexer.current_text(),
                self.lexer.current_location(),
            ) from None

    def _parse_function_definition(self) -> None:
        """functiondef ::= type ID '(' ')' '{' stmtlist '}'"""
        self._parse_type()
        self._expect(C1Token.IDENTIFIER)
        self._expect(C1Token.LEFT_PARENTHESIS)
        self._expect(C1Token.RIGHT_PARENTHESIS)
        self._expect(C1Token.LEFT_BRACE)
        self._parse_statement_list()
        self._expect(C1Token.RIGHT_BRACE)

    def _parse_type(self) -> None:
        """type ::= 'boolean' | 'float' | 'int' | 'void'"""
        if self.lexer.current_token() not in TYPE_KEYWORDS:
            raise self._unexpected("type")
        self.lexer.eat()

    # =========================================================================
    # Statement Parsing
    # =========================================================================

    def _parse_statement_list(self) -> None:
        """
        stmtlist ::= block*

        A statement list is always closed by '}', so that is what ends
        the loop. Hitting EOF instead fails inside _parse_statement.
        """
        while not self._check(C1Token.RIGHT_BRACE):
            self._parse_block()

    def _parse_block(self) -> None:
        """block ::= '{' stmtlist '}' | statement"""
        if not self._check(C1Token.LEFT_BRACE):
            self._parse_statement()
            return

        self._enter()
        try:
            self.lexer.eat()
            self._parse_statement_list()
            self._expect(C1Token.RIGHT_BRACE)
        finally:
            self._leave()

    def _parse_statement(self) -> None:
        """
        statement ::= ifstmt
                    | 'return' assignment? ';'
                    | 'printf' '(' assignment ')' ';'
                    | ID '=' assignment ';'
                    | ID '(' ')' ';'
        """
        current = self.lexer.current_token()

        if current is C1Token.KW_IF:
            self._parse_if_statement()
            return

        if current is C1Token.KW_RETURN:
            self._parse_return_statement()
        elif current is C1Token.KW_PRINTF:
            self._parse_printf()
        elif current is C1Token.IDENTIFIER:
            lookahead = self.lexer.peek_token()
            if lookahead is C1Token.ASSIGN:
                self._parse_statement_assignment()
            elif lookahead is C1Token.LEFT_PARENTHESIS:
                self._parse_function_call()
            else:
                raise self._unexpected("statement")
        else:
            raise self._unexpected("statement")

        self._expect(C1Token.SEMICOLON)

    def _parse_if_statement(self) -> None:
        """ifstmt ::= 'if' '(' assignment ')' block"""
        self._expect(C1Token.KW_IF)
        self._expect(C1Token.LEFT_PARENTHESIS)
        self._parse_assignment()
        self._expect(C1Token.RIGHT_PARENTHESIS)
        # The body is a nesting level of its own, braced or not
        self._enter()
        try:
            self._parse_block()
        finally:
            self._leave()

    def _parse_return_statement(self) -> None:
        """returnstatement ::= 'return' assignment?"""
        self._expect(C1Token.KW_RETURN)
        # The statement always ends in ';', so that decides the '?'
        if not self._check(C1Token.SEMICOLON):
            self._parse_assignment()

    def _parse_printf(self) -> None:
        """printf ::= 'printf' '(' assignment ')'"""
        self._expect(C1Token.KW_PRINTF)
        self._expect(C1Token.LEFT_PARENTHESIS)
        self._parse_assignment()
        self._expect(C1Token.RIGHT_PARENTHESIS)

    def _parse_statement_assignment(self) -> None:
        """statassignment ::= ID '=' assignment"""
        self._expect(C1Token.IDENTIFIER)
        self._expect(C1Token.ASSIGN)
        self._parse_assignment()

    def _parse_function_call(self) -> None:
        """functioncall ::= ID '(' ')'"""
        self._expect(C1Token.IDENTIFIER)
        self._expect(C1Token.LEFT_PARENTHESIS)
        self._expect(C1Token.RIGHT_PARENTHESIS)

    # =========================================================================
    # Expression Parsing
    # =========================================================================

    def _parse_assignment(self) -> None:
        """
        assignment ::= ID '=' assignment | expr

        An expression may also start with an ID, so only ID '=' selects
        the assignment form. Each further '=' of a chain is one nesting
        level.
        """
        if not (self._check(C1Token.IDENTIFIER)
                and self.lexer.peek_token() is C1Token.ASSIGN):
            self._parse_expression()
            return

        self.lexer.eat()
        self.lexer.eat()
        self._enter()
        try:
            self._parse_assignment()
        finally:
            self._leave()

    def _parse_expression(self) -> None:
        """expr ::= simpexpr (('==' | '!=' | '<=' | '>=' | '<' | '>') simpexpr)?"""
        self._parse_simple_expression()
        if self.lexer.current_token() in RELATIONAL_OPERATORS:
            self.lexer.eat()
            self._parse_simple_expression()

    def _parse_simple_expression(self) -> None:
        """simpexpr ::= '-'? term (('+' | '-' | '||') term)*"""
        if self._check(C1Token.MINUS):
            self.lexer.eat()
        self._parse_term()
        while self.lexer.current_token() in ADDITIVE_OPERATORS:
            self.lexer.eat()
            self._parse_term()

    def _parse_term(self) -> None:
        """term ::= factor (('*' | '/' | '&&') factor)*"""
        self._parse_factor()
        while self.lexer.current_token() in MULTIPLICATIVE_OPERATORS:
            self.lexer.eat()
            self._parse_factor()

    def _parse_factor(self) -> None:
        """
        factor ::= INT | FLOAT | BOOL | functioncall | ID | '(' assignment ')'
        """
        if self._check(C1Token.CONST_INT, C1Token.CONST_FLOAT, C1Token.CONST_BOOLEAN):
            self.lexer.eat()
        elif self._check(C1Token.IDENTIFIER):
            if self.lexer.peek_token() is C1Token.LEFT_PARENTHESIS:
                self._parse_function_call()
            else:
                self.lexer.eat()
        elif self._check(C1Token.LEFT_PARENTHESIS):
            self._enter()
            try:
                self.lexer.eat()
                self._parse_assignment()
                self._expect(C1Token.RIGHT_PARENTHESIS)
            finally:
                self._leave()
        else:
            raise self._unexpected("factor")


# =============================================================================
# Convenience Function
# =============================================================================

def parse(
    source: str,
    filename: str = "<input>",
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> None:
    """
    Check that source is a syntactically valid C1 program.

    Args:
        source: C1 source code
        filename: Source filename for error locations
        max_depth: Maximum nesting of blocks and assignments

    Raises:
        C1SyntaxError: For the first syntax error in the source
    """
    parser = C1Parser(C1Lexer(source, filename), max_depth=max_depth)
    parser.parse_program()
