"""
C1 Parser Test Suite
====================

This module tests the recursive descent recognizer: which programs are
accepted, which are rejected, and what the first error reports.

Test Organization
-----------------
- TestAcceptedPrograms: valid C1 programs
- TestDisambiguation: the ID '=' / ID '(' lookahead decisions
- TestExpressions: operator levels and the single relational rule
- TestRejectedPrograms: invalid programs and their error kinds
- TestErrorMessages: stable message format and error locality
- TestTermination: truncated and unbalanced input
- TestNestingLimit: the recursion guard
"""

import pytest
from c1_sdk.c1.lexer import C1Lexer, C1Token
from c1_sdk.c1.parser import C1Parser, parse, DEFAULT_MAX_DEPTH
from c1_sdk.c1.errors import (
    ErrorKind,
    C1SyntaxError,
    EmptySourceError,
    LexicalError,
    MissingTokenError,
    NestingTooDeepError,
    UnexpectedTokenError,
)
from c1_sdk.errors import C1Error


SAMPLE_PROGRAM = """\
/* Sample C1 program exercising every statement form */
int fib() {
    n = 10;
    a = 0;
    b = 1;
    if (n <= 1) {
        return n;
    }
    // chained assignment
    t = a = b;
    printf(a + b * (c - 1) / 2);
    if (a == b && ready() || !=_ok()) return;
    return fib();
}

void main() {
    {
        x = -3.5e2 + .5;
        {}
    }
    done = true;
    flag = false || x > 2;
    fib();
    return;
}

boolean ok() { return 1 != 2; }
float half() { return 0.5; }
"""


def source_lines(source: str) -> list[str]:
    """Split source into lines without keeping line endings."""
    return source.splitlines()


def accepts(source: str) -> bool:
    """Return True if source parses without error."""
    try:
        parse(source)
    except C1SyntaxError:
        return False
    return True


def error_for(source: str) -> C1SyntaxError:
    """Parse source, expecting failure, and return the error."""
    with pytest.raises(C1SyntaxError) as exc_info:
        parse(source)
    return exc_info.value


# =============================================================================
# Accepted Programs
# =============================================================================

class TestAcceptedPrograms:
    """Tests for syntactically valid programs."""

    def test_empty_body(self):
        """An empty statement list is legal."""
        parse("void f(){}")

    def test_form_feed_between_tokens(self):
        parse("void f()\f{\v}")

    @pytest.mark.parametrize("type_name", ["boolean", "bool", "float", "int", "void"])
    def test_all_return_types(self, type_name):
        parse(f"{type_name} f() {{ }}")

    def test_multiple_functions(self):
        parse("int a() { return 1; } void b() { a(); } float c() {}")

    def test_nested_blocks(self):
        parse("void f() { { { x = 1; } } {} }")

    def test_if_with_block(self):
        parse("void f() { if (x) { y = 1; z = 2; } }")

    def test_if_with_single_statement(self):
        parse("void f() { if (x < 1) return; }")

    def test_nested_if(self):
        parse("void f() { if (a) if (b) if (c) printf(1); }")

    def test_return_without_value(self):
        parse("void f() { return; }")

    def test_return_with_assignment(self):
        parse("int f() { return x = 3; }")

    def test_printf(self):
        parse("void f() { printf(x); printf((1)); printf(a = b); }")

    def test_comments_and_whitespace(self):
        parse("// header\nvoid /* inline */ f(\n)\n{\n\t// body\n}\n")

    def test_sample_program_fails_only_on_bad_line(self):
        """The sample contains one deliberate error on line 12."""
        error = error_for(SAMPLE_PROGRAM)
        assert error.line == 12
        assert not isinstance(error, LexicalError)

    def test_sample_program_fixed(self):
        """The sample with its faulty condition replaced is accepted."""
        lines = source_lines(SAMPLE_PROGRAM)
        lines[11] = "    if (a == b && ready() || not_ok()) return;"
        parse("\n".join(lines))

    def test_parse_returns_none(self):
        assert parse("void f() {}") is None

    def test_deterministic(self):
        """Repeated parses of identical text give identical outcomes."""
        bad = "int f() { return 1 < 2 < 3; }"
        messages = {str(error_for(bad)) for _ in range(3)}
        assert len(messages) == 1
        assert all(accepts("void f() { x = 1; }") for _ in range(3))


# =============================================================================
# Disambiguation Tests
# =============================================================================

class TestDisambiguation:
    """Tests for the one-token lookahead decisions."""

    def test_call_statement(self):
        """ID followed by '(' is a function call statement."""
        parse("int f(){ a(); }")

    def test_assignment_statement(self):
        """ID followed by '=' is an assignment statement."""
        parse("int f(){ a = 1; }")

    def test_bare_identifier_statement_rejected(self):
        """A bare ID is not a legal statement."""
        error = error_for("int f(){ a; }")
        assert isinstance(error, UnexpectedTokenError)
        assert error.rule == "statement"
        assert error.lexeme == "a"

    def test_expression_statement_rejected(self):
        """Only assignments and calls may start with an ID."""
        error = error_for("int f(){ a + 1; }")
        assert error.kind is ErrorKind.UNEXPECTED_TOKEN
        assert error.lexeme == "a"

    def test_chained_assignment(self):
        parse("void f() { a = b = c = 1; }")

    def test_assignment_inside_parentheses(self):
        parse("void f() { x = (y = 2) + 1; }")

    def test_call_in_expression(self):
        parse("void f() { x = g() * h(); }")

    def test_variable_in_expression(self):
        parse("void f() { x = y; return y; }")

    def test_call_with_arguments_rejected(self):
        """C1 function calls take no arguments."""
        error = error_for("void f() { g(1); }")
        assert isinstance(error, MissingTokenError)
        assert error.expected == "')'"
        assert error.lexeme == "1"

    def test_assignment_to_non_identifier_rejected(self):
        error = error_for("void f() { x = 1 = 2; }")
        assert isinstance(error, MissingTokenError)
        assert error.lexeme == "="


# =============================================================================
# Expression Tests
# =============================================================================

class TestExpressions:
    """Tests for expression operator levels."""

    @pytest.mark.parametrize("expr", [
        "1",
        "2.5",
        "true",
        "x",
        "g()",
        "(1)",
        "-1",
        "-x + y - z || w",
        "a * b / c && d",
        "1 + 2 * 3",
        "(1 + 2) * 3",
        "a == b",
        "a != b",
        "a < b",
        "a <= b",
        "a > b",
        "a >= b",
        "-a * b + c <= (d || e) && f",
        "(a < b) < c",
        "((((x))))",
    ])
    def test_valid_expressions(self, expr):
        parse(f"int f() {{ return {expr}; }}")

    def test_relational_does_not_chain(self):
        """At most one comparison per expression."""
        error = error_for("int f(){ return 1<2<3; }")
        assert isinstance(error, MissingTokenError)
        assert error.expected == "';'"
        assert error.lexeme == "<"

    @pytest.mark.parametrize("expr,lexeme", [
        ("--1", "-"),       # only one leading minus
        ("1 + - 2", "-"),   # no unary minus inside a term
        ("1 +", ";"),
        ("* 2", "*"),
        ("()", ")"),
    ])
    def test_invalid_expressions(self, expr, lexeme):
        error = error_for(f"int f() {{ return {expr}; }}")
        assert error.lexeme == lexeme

    def test_unclosed_parenthesis(self):
        error = error_for("int f() { return (1 + 2; }")
        assert isinstance(error, MissingTokenError)
        assert error.expected == "')'"
        assert error.lexeme == ";"


# =============================================================================
# Rejected Programs
# =============================================================================

class TestRejectedPrograms:
    """Tests for invalid programs and their error kinds."""

    def test_empty_input(self):
        error = error_for("")
        assert isinstance(error, EmptySourceError)
        assert error.kind is ErrorKind.EMPTY_SOURCE
        assert "empty" in str(error).lower()

    def test_comment_only_input(self):
        error = error_for("// nothing here\n/* at all */\n")
        assert isinstance(error, EmptySourceError)
        assert error.line == 3

    def test_missing_type(self):
        error = error_for("main() {}")
        assert isinstance(error, UnexpectedTokenError)
        assert error.rule == "type"

    def test_trailing_garbage(self):
        error = error_for("void f() {} }")
        assert isinstance(error, UnexpectedTokenError)
        assert error.rule == "type"
        assert error.lexeme == "}"

    def test_parameters_rejected(self):
        error = error_for("int f(int x) {}")
        assert isinstance(error, MissingTokenError)
        assert error.lexeme == "int"

    def test_missing_function_name(self):
        error = error_for("int () {}")
        assert isinstance(error, MissingTokenError)
        assert error.expected == "identifier"

    def test_declaration_statement_rejected(self):
        """C1 has no local declarations."""
        error = error_for("void f() { int x; }")
        assert error.rule == "statement"

    def test_if_without_parentheses(self):
        error = error_for("void f() { if x return; }")
        assert isinstance(error, MissingTokenError)
        assert error.expected == "'('"

    def test_printf_without_argument(self):
        error = error_for("void f() { printf(); }")
        assert isinstance(error, UnexpectedTokenError)
        assert error.rule == "factor"

    def test_lexical_error_in_expression(self):
        error = error_for("void f() { x = 1 $ 2; }")
        assert isinstance(error, LexicalError)
        assert error.kind is ErrorKind.LEXICAL_ERROR
        assert error.lexeme == "$"

    def test_lexical_error_in_statement_position(self):
        error = error_for("void f() { @ }")
        assert isinstance(error, LexicalError)
        assert error.lexeme == "@"

    def test_lexical_error_at_top_level(self):
        error = error_for("#include <stdio.h>\nvoid f() {}")
        assert isinstance(error, LexicalError)
        assert error.lexeme == "#"

    def test_unterminated_comment(self):
        error = error_for("void f() {\n/* oops\n")
        assert isinstance(error, LexicalError)
        assert error.lexeme == "/*"
        assert error.line == 2

    def test_lexical_error_after_valid_prefix_not_reported_early(self):
        """Errors surface where the parser reaches them, not earlier."""
        error = error_for("void f() { a = b; c(); }\nvoid g() { ! }")
        assert error.line == 2

    def test_all_errors_share_base_class(self):
        error = error_for("void")
        assert isinstance(error, C1SyntaxError)
        assert isinstance(error, C1Error)


# =============================================================================
# Error Message Tests
# =============================================================================

class TestErrorMessages:
    """Tests for the stable message format and reported locations."""

    def test_message_shape(self):
        error = error_for("int f() {\n  a = 1\n}")
        assert str(error) == "Expected ';', unexpected token found: \"}\" at line 3"

    def test_unexpected_token_message(self):
        error = error_for("int f(){ a; }")
        assert str(error) == "Invalid statement, unexpected token found: \"a\" at line 1"

    def test_empty_source_message(self):
        error = error_for("")
        assert str(error) == "File is empty, no function definition found: \"\" at line 1"

    def test_lexical_error_message(self):
        error = error_for("void f() { x = a & b; }")
        assert str(error) == "Invalid lexeme, unrecognized input found: \"&\" at line 1"

    def test_missing_semicolon_reports_following_token_line(self):
        """The reported line is that of the token after the missing ';'."""
        source = "void f() {\n    x = 1\n\n\n    y = 2;\n}\n"
        error = error_for(source)
        assert error.lexeme == "y"
        assert error.line == 5
        assert error.column == 5

    def test_structured_fields(self):
        error = error_for("void f() { return 1 }")
        assert error.kind is ErrorKind.MISSING_TOKEN
        assert error.description == "Expected ';', unexpected token"
        assert error.lexeme == "}"
        assert error.location.filename == "<input>"

    def test_filename_in_location(self):
        with pytest.raises(C1SyntaxError) as exc_info:
            parse("void", filename="prog.c1")
        assert str(exc_info.value.location) == "prog.c1:1:5"

    def test_format_diagnostic_with_source_line(self):
        error = error_for("void f() {\n  x = ;\n}")
        report = error.format_diagnostic("  x = ;")
        assert report.splitlines() == [
            "<input>:2:7: error: Invalid factor, unexpected token found: \";\" at line 2",
            "      x = ;",
            "          ^",
        ]

    def test_format_diagnostic_without_source_line(self):
        error = error_for("")
        assert error.format_diagnostic() == (
            "<input>:1:1: error: File is empty, no function definition found: \"\" at line 1"
        )


# =============================================================================
# Termination Tests
# =============================================================================

class TestTermination:
    """Truncated and unbalanced input must fail, never hang."""

    @pytest.mark.parametrize("program", [
        "void f() {}",
        "int f() { return 1; }",
        "void f() { if (a) { x = y = 1; } }",
        "void f() { printf(g()); }",
        "void a() {} void b() { a(); }",
    ])
    def test_truncated_programs_rejected(self, program):
        """Dropping the last token of a valid program is always an error."""
        parse(program)
        lexemes = list(C1Lexer(program).tokenize())
        last = lexemes[-2]
        offset = sum(len(line) + 1 for line in program.split("\n")[:last.line - 1])
        truncated = program[:offset + last.column - 1]
        with pytest.raises(C1SyntaxError):
            parse(truncated)

    def test_unmatched_open_brace(self):
        error = error_for("void f() { { x = 1;")
        assert error.lexeme == ""
        assert error.rule == "statement"

    def test_missing_closing_brace_between_functions(self):
        error = error_for("void f() {\nvoid g() {}")
        assert error.rule == "statement"
        assert error.lexeme == "void"
        assert error.line == 2

    def test_only_open_brace(self):
        with pytest.raises(C1SyntaxError):
            parse("{")


# =============================================================================
# Nesting Limit Tests
# =============================================================================

class TestNestingLimit:
    """Tests for the recursion guard."""

    def test_default_limit(self):
        assert DEFAULT_MAX_DEPTH == 128

    def test_moderate_nesting_accepted(self):
        depth = 50
        parse("void f() " + "{" * depth + "}" * depth)
        parse("int f() { return " + "(" * depth + "1" + ")" * depth + "; }")

    def test_deep_blocks_rejected(self):
        depth = 5000
        error = error_for("void f() {" + "{" * depth + "}" * (depth + 1))
        assert isinstance(error, NestingTooDeepError)
        assert error.kind is ErrorKind.NESTING_TOO_DEEP
        assert error.limit == DEFAULT_MAX_DEPTH

    def test_deep_parentheses_rejected(self):
        depth = 5000
        error = error_for("int f() { return " + "(" * depth + "1" + ")" * depth + "; }")
        assert isinstance(error, NestingTooDeepError)

    def test_deep_if_chain_rejected(self):
        error = error_for("void f() { " + "if (x) " * 1000 + "return; }")
        assert isinstance(error, NestingTooDeepError)

    def test_custom_limit(self):
        source = "void f() { {{{ }}} }"
        parse(source, max_depth=3)
        with pytest.raises(NestingTooDeepError) as exc_info:
            parse(source, max_depth=2)
        assert "deeper than 2" in str(exc_info.value)

    def test_depth_resets_between_statements(self):
        """Depth counts nesting, not the number of statements."""
        parse("void f() { " + "{ x = (1); } " * 500 + "}", max_depth=3)

    def test_plain_statements_are_not_nesting(self):
        parse("void f() { x = 1; printf(2); g(); return 3; }", max_depth=1)

    def test_parentheses_count(self):
        source = "int f() { return ((1)); }"
        parse(source, max_depth=2)
        with pytest.raises(NestingTooDeepError):
            parse(source, max_depth=1)

    def test_if_body_counts(self):
        source = "void f() { if (x) if (y) return; }"
        parse(source, max_depth=2)
        with pytest.raises(NestingTooDeepError):
            parse(source, max_depth=1)

    def test_chained_assignment_counts(self):
        source = "void f() { a = b = c = 1; }"
        parse(source, max_depth=2)
        with pytest.raises(NestingTooDeepError):
            parse(source, max_depth=1)

    def test_limit_above_stack_capacity_parentheses(self):
        """A limit the interpreter cannot honour still ends in a syntax error."""
        source = "int f() { return " + "(" * 3000 + "1" + ")" * 3000 + "; }"
        with pytest.raises(NestingTooDeepError) as exc_info:
            parse(source, max_depth=100_000)
        assert exc_info.value.kind is ErrorKind.NESTING_TOO_DEEP
        assert exc_info.value.lexeme == "("

    def test_limit_above_stack_capacity_blocks(self):
        source = "void f() {" + "{" * 3000 + "}" * 3001
        with pytest.raises(NestingTooDeepError):
            parse(source, max_depth=100_000)


# =============================================================================
# Parser Class Tests
# =============================================================================

class TestParserClass:
    """Tests for using C1Parser directly with a lexer."""

    def test_parse_program(self):
        parser = C1Parser(C1Lexer("void f() {}"))
        parser.parse_program()
        assert parser.lexer.current_token() is C1Token.EOF

    def test_stops_at_first_error(self):
        lexer = C1Lexer("void f() { a; b; }")
        parser = C1Parser(lexer)
        with pytest.raises(UnexpectedTokenError):
            parser.parse_program()
        # No recovery: the lexer is left at the offending token
        assert lexer.current_text() == "a"
