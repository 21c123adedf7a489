"""
C1 Lexer (Tokenizer)
====================

This module implements the token source for the C1 teaching language.
Unlike a batch tokenizer, the lexer is consumed on demand: the parser asks
for the current token, peeks at the one after it, and eats tokens once it
has matched them.

Token Categories
----------------
- Keywords: if, return, printf, boolean (alias bool), float, int, void
- Identifiers: letters, digits and underscores, not starting with a digit
- Constants: integers (42), floats (3.14, .5, 1e10, 2.5E-3), booleans
  (true, false)
- Operators: + - * / = == != < <= > >= && ||
- Delimiters: ( ) { } ;

Comments
--------
- Single-line: // comment
- Multi-line: /* comment */

Error Token
-----------
The lexer never raises. Input it cannot classify (a stray '$', a lone '&'
or '|', an unterminated comment) becomes an ERROR token whose text is the
offending input; the parser reports it when it gets there.

Example Usage
-------------
>>> from c1_sdk.c1.lexer import C1Lexer
>>> lexer = C1Lexer('int main() { return 42; }')
>>> lexer.current_token(), lexer.peek_token()
(<C1Token.KW_INT: 9>, <C1Token.IDENTIFIER: 1>)
>>> lexer.eat()
>>> lexer.current_text(), lexer.current_line_number()
('main', 1)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional
import logging
import string

from c1_sdk.errors import SourceLocation

logger = logging.getLogger(__name__)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class C1Token(Enum):
    """
    Lexical categories of the C1 language.

    The set is closed: the parser dispatches on these values directly.
    EOF and ERROR are sentinels rather than source tokens.
    """

    # === Identifiers and Literals ===
    IDENTIFIER = auto()
    CONST_INT = auto()
    CONST_FLOAT = auto()
    CONST_BOOLEAN = auto()

    # === Keywords - Statements ===
    KW_IF = auto()
    KW_RETURN = auto()
    KW_PRINTF = auto()

    # === Keywords - Types ===
    KW_BOOLEAN = auto()
    KW_INT = auto()
    KW_FLOAT = auto()
    KW_VOID = auto()

    # === Delimiters ===
    LEFT_PARENTHESIS = auto()   # (
    RIGHT_PARENTHESIS = auto()  # )
    LEFT_BRACE = auto()         # {
    RIGHT_BRACE = auto()        # }
    SEMICOLON = auto()          # ;
    ASSIGN = auto()             # =

    # === Relational Operators ===
    EQUAL = auto()              # ==
    NOT_EQUAL = auto()          # !=
    LESS = auto()               # <
    LESS_EQUAL = auto()         # <=
    GREATER = auto()            # >
    GREATER_EQUAL = auto()      # >=

    # === Additive Operators ===
    PLUS = auto()               # +
    MINUS = auto()              # -
    OR = auto()                 # ||

    # === Multiplicative Operators ===
    ASTERISK = auto()           # *
    SLASH = auto()              # /
    AND = auto()                # &&

    # === Sentinels ===
    EOF = auto()                # no more input
    ERROR = auto()              # malformed lexeme


# =============================================================================
# Keyword and Operator Tables
# =============================================================================

KEYWORDS: dict[str, C1Token] = {
    "if": C1Token.KW_IF,
    "return": C1Token.KW_RETURN,
    "printf": C1Token.KW_PRINTF,
    "boolean": C1Token.KW_BOOLEAN,
    "bool": C1Token.KW_BOOLEAN,
    "float": C1Token.KW_FLOAT,
    "int": C1Token.KW_INT,
    "void": C1Token.KW_VOID,
    "true": C1Token.CONST_BOOLEAN,
    "false": C1Token.CONST_BOOLEAN,
}

TYPE_KEYWORDS = frozenset({
    C1Token.KW_BOOLEAN,
    C1Token.KW_FLOAT,
    C1Token.KW_INT,
    C1Token.KW_VOID,
})

RELATIONAL_OPERATORS = frozenset({
    C1Token.EQUAL,
    C1Token.NOT_EQUAL,
    C1Token.LESS,
    C1Token.LESS_EQUAL,
    C1Token.GREATER,
    C1Token.GREATER_EQUAL,
})

ADDITIVE_OPERATORS = frozenset({C1Token.PLUS, C1Token.MINUS, C1Token.OR})

MULTIPLICATIVE_OPERATORS = frozenset({C1Token.ASTERISK, C1Token.SLASH, C1Token.AND})

# Two-character operators are matched before their one-character prefixes
TWO_CHAR_OPERATORS: dict[str, C1Token] = {
    "==": C1Token.EQUAL,
    "!=": C1Token.NOT_EQUAL,
    "<=": C1Token.LESS_EQUAL,
    ">=": C1Token.GREATER_EQUAL,
    "&&": C1Token.AND,
    "||": C1Token.OR,
}

SINGLE_CHAR_TOKENS: dict[str, C1Token] = {
    "(": C1Token.LEFT_PARENTHESIS,
    ")": C1Token.RIGHT_PARENTHESIS,
    "{": C1Token.LEFT_BRACE,
    "}": C1Token.RIGHT_BRACE,
    ";": C1Token.SEMICOLON,
    "=": C1Token.ASSIGN,
    "<": C1Token.LESS,
    ">": C1Token.GREATER,
    "+": C1Token.PLUS,
    "-": C1Token.MINUS,
    "*": C1Token.ASTERISK,
    "/": C1Token.SLASH,
}


# =============================================================================
# Lexeme Data Class
# =============================================================================

@dataclass(frozen=True)
class Lexeme:
    """
    A classified token together with its source text and position.

    Attributes:
        token: The C1Token category
        text: The raw source text ("" for EOF)
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
    """
    token: C1Token
    text: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Lexeme({self.token.name}, {self.text!r}, {self.line}:{self.column})"


# =============================================================================
# Lexer Implementation
# =============================================================================

class C1Lexer:
    """
    On-demand token source for C1 source code.

    The lexer keeps two lexemes: the current one (not yet consumed by the
    parser) and a cached lookahead. Eating promotes the lookahead to
    current and scans a fresh lookahead. The lookahead is scanned exactly
    once, so line numbers always stay in step with the text.

    Usage:
        lexer = C1Lexer(source_text, filename)
        while lexer.current_token() is not C1Token.EOF:
            ...
            lexer.eat()

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for error reporting)
    """

    IDENT_START = string.ascii_letters + "_"
    IDENT_CHARS = string.ascii_letters + string.digits + "_"
    DIGITS = string.digits
    WHITESPACE = string.whitespace

    def __init__(self, source: str, filename: str = "<input>"):
        """
        Initialize the lexer and scan the first two tokens.

        Args:
            source: The C1 source code to tokenize
            filename: Name of the source file (for error messages)
        """
        self.source = source
        self.filename = filename

        # Scan cursor
        self._pos = 0
        self._line = 1
        self._column = 1

        self._current = self._scan()
        self._lookahead = self._scan()

    # =========================================================================
    # Token Source Interface
    # =========================================================================

    def current_token(self) -> C1Token:
        """Category of the token at the read cursor."""
        return self._current.token

    def peek_token(self) -> C1Token:
        """Category of the token after the current one (EOF at the end)."""
        return self._lookahead.token

    def current_text(self) -> str:
        """Source text of the current token."""
        return self._current.text

    def current_line_number(self) -> int:
        """Line number of the current token (1-indexed)."""
        return self._current.line

    def current_column(self) -> int:
        """Column number of the current token (1-indexed)."""
        return self._current.column

    def current_location(self) -> SourceLocation:
        """SourceLocation of the current token for error reporting."""
        return SourceLocation(self.filename, self._current.line, self._current.column)

    def eat(self) -> None:
        """
        Consume the current token.

        Past the end of input this does nothing: current_token() keeps
        reporting EOF.
        """
        if self._current.token is C1Token.EOF:
            return
        self._current = self._lookahead
        self._lookahead = self._scan()

    def tokenize(self) -> Iterator[Lexeme]:
        """
        Drain the remaining token stream.

        Yields:
            Every lexeme from the current one up to and including EOF
        """
        while True:
            lexeme = self._current
            yield lexeme
            if lexeme.token is C1Token.EOF:
                return
            self.eat()

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """
        Look at character at current position + offset without advancing.

        Returns empty string if past end of source.
        """
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Consume and return the current character, tracking line and column."""
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1

        return char

    def _consume_while(self, allowed: str) -> str:
        start = self._pos
        while self._peek() and self._peek() in allowed:
            self._advance()
        return self.source[start:self._pos]

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace_and_comments(self) -> Optional[Lexeme]:
        """
        Skip all whitespace and comments.

        Returns:
            An ERROR lexeme if a multi-line comment is never closed,
            None otherwise
        """
        while not self._at_end():
            char = self._peek()

            if char in self.WHITESPACE:
                self._advance()
                continue

            if char == "/" and self._peek(1) == "/":
                while not self._at_end() and self._peek() != "\n":
                    self._advance()
                continue

            if char == "/" and self._peek(1) == "*":
                error = self._skip_multi_line_comment()
                if error is not None:
                    return error
                continue

            break

        return None

    def _skip_multi_line_comment(self) -> Optional[Lexeme]:
        start_line = self._line
        start_column = self._column

        # Consume the /*
        self._advance()
        self._advance()

        while not self._at_end():
            if self._peek() == "*" and self._peek(1) == "/":
                self._advance()
                self._advance()
                return None
            self._advance()

        return self._error_lexeme("/*", start_line, start_column)

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan(self) -> Lexeme:
        """Scan the next lexeme from the cursor."""
        error = self._skip_whitespace_and_comments()
        if error is not None:
            return error

        start_line = self._line
        start_column = self._column

        if self._at_end():
            return Lexeme(C1Token.EOF, "", start_line, start_column)

        char = self._peek()

        if char in self.IDENT_START:
            return self._scan_word(start_line, start_column)

        if char in self.DIGITS or (char == "." and self._is_digit(self._peek(1))):
            return self._scan_number(start_line, start_column)

        return self._scan_operator(start_line, start_column)

    def _scan_word(self, start_line: int, start_column: int) -> Lexeme:
        """Scan an identifier, keyword or boolean constant."""
        word = self._consume_while(self.IDENT_CHARS)
        token = KEYWORDS.get(word, C1Token.IDENTIFIER)
        return Lexeme(token, word, start_line, start_column)

    def _scan_number(self, start_line: int, start_column: int) -> Lexeme:
        """
        Scan an integer or floating point constant.

        Handles:
        - Integer: 123
        - Float: 1.5, 1., .5
        - Exponent: 1e10, 2.5E-3, .5e+2
        """
        start = self._pos
        token = C1Token.CONST_INT

        self._consume_while(self.DIGITS)

        if self._peek() == ".":
            self._advance()
            self._consume_while(self.DIGITS)
            token = C1Token.CONST_FLOAT

        if self._at_exponent():
            self._advance()
            if self._peek() in ("+", "-"):
                self._advance()
            self._consume_while(self.DIGITS)
            token = C1Token.CONST_FLOAT

        return Lexeme(token, self.source[start:self._pos], start_line, start_column)

    def _at_exponent(self) -> bool:
        if self._peek() not in ("e", "E"):
            return False
        following = self._peek(1)
        if following in ("+", "-"):
            following = self._peek(2)
        return self._is_digit(following)

    def _is_digit(self, char: str) -> bool:
        # "" is a substring of every string, so guard the end-of-input case
        return bool(char) and char in self.DIGITS

    def _scan_operator(self, start_line: int, start_column: int) -> Lexeme:
        """Scan an operator or delimiter, preferring two-character operators."""
        pair = self._peek() + self._peek(1)
        if pair in TWO_CHAR_OPERATORS:
            self._advance()
            self._advance()
            return Lexeme(TWO_CHAR_OPERATORS[pair], pair, start_line, start_column)

        char = self._advance()
        if char in SINGLE_CHAR_TOKENS:
            return Lexeme(SINGLE_CHAR_TOKENS[char], char, start_line, start_column)

        return self._error_lexeme(char, start_line, start_column)

    def _error_lexeme(self, text: str, line: int, column: int) -> Lexeme:
        logger.debug(f"{self.filename}:{line}:{column}: unrecognized input {text!r}")
        return Lexeme(C1Token.ERROR, text, line, column)
