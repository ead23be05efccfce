import io

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lumen.lumen_constants import keywords
from lumen.lumen_errors import DiagnosticBatch, ErrorReporter, ScanError
from lumen.lumen_lexer import CharacterStream, Lexer, Token, scan
from lumen.lumen_values import FALSE, NIL, TRUE, Number, Text


def types(source: str) -> list[str]:
    return [tok.type for tok in scan(source)]


def test_single_char_tokens() -> None:
    code = "( ) { } , . - + ; / * ! = < >"
    expected = [
        "LEFT_PAREN",
        "RIGHT_PAREN",
        "LEFT_BRACE",
        "RIGHT_BRACE",
        "COMMA",
        "DOT",
        "MINUS",
        "PLUS",
        "SEMICOLON",
        "SLASH",
        "STAR",
        "BANG",
        "EQUAL",
        "LESS",
        "GREATER",
        "EOF",
    ]
    assert types(code) == expected


def test_double_char_tokens() -> None:
    assert types("!= == <= >=") == [
        "BANG_EQUAL",
        "EQUAL_EQUAL",
        "LESS_EQUAL",
        "GREATER_EQUAL",
        "EOF",
    ]


def test_maximal_munch() -> None:
    assert types("!==") == ["BANG_EQUAL", "EQUAL", "EOF"]
    assert types("<<=") == ["LESS", "LESS_EQUAL", "EOF"]


def test_string_token() -> None:
    tok = scan('"hello world"')[0]
    assert tok.type == "STRING"
    assert tok.lexeme == '"hello world"'
    assert tok.literal == Text("hello world")


def test_string_keeps_backslashes() -> None:
    tok = scan(r'"a\nb"')[0]
    assert tok.literal == Text("a\\nb")


def test_string_with_unicode() -> None:
    tok = scan('"héllo ✓"')[0]
    assert tok.literal == Text("héllo ✓")


def test_multiline_string_advances_line() -> None:
    tokens = scan('x\n"a\nb"\ny')
    assert [(t.type, t.line) for t in tokens] == [
        ("IDENTIFIER", 1),
        ("STRING", 2),
        ("IDENTIFIER", 4),
        ("EOF", 4),
    ]


def test_number_token() -> None:
    tok = scan("123")[0]
    assert tok.type == "NUMBER"
    assert tok.lexeme == "123"
    assert tok.literal == Number(123.0)


def test_fractional_number() -> None:
    tok = scan("123.456")[0]
    assert tok.literal == Number(123.456)


def test_trailing_dot_is_not_part_of_number() -> None:
    tokens = scan("1.")
    assert [(t.type, t.lexeme) for t in tokens] == [
        ("NUMBER", "1"),
        ("DOT", "."),
        ("EOF", ""),
    ]


def test_leading_dot_is_not_part_of_number() -> None:
    assert types(".5") == ["DOT", "NUMBER", "EOF"]


@given(st.from_regex(r"\A[0-9]{1,12}(\.[0-9]{1,12})?\Z"))  # type: ignore[misc]
def test_every_numeric_literal_scans_to_one_number(text: str) -> None:
    tokens = scan(text)
    assert len(tokens) == 2
    assert tokens[0].type == "NUMBER"
    assert tokens[0].literal == Number(float(text))
    assert tokens[1].type == "EOF"


def test_identifier_token() -> None:
    tok = scan("_my_Var1")[0]
    assert tok.type == "IDENTIFIER"
    assert tok.lexeme == "_my_Var1"
    assert tok.literal is None


@pytest.mark.parametrize("word", sorted(keywords))  # type: ignore[misc]
def test_keywords(word: str) -> None:
    assert scan(word)[0].type == keywords[word]


def test_and_keyword_spelling() -> None:
    assert scan("and")[0].type == "AND"
    assert scan("add")[0].type == "IDENTIFIER"


def test_keyword_prefix_is_identifier() -> None:
    assert scan("variable")[0].type == "IDENTIFIER"
    assert scan("Print")[0].type == "IDENTIFIER"


def test_literal_keywords_carry_values() -> None:
    tokens = scan("true false nil")
    assert [t.literal for t in tokens[:3]] == [TRUE, FALSE, NIL]


def test_line_tracking() -> None:
    tokens = scan("x\ny\n\nz")
    assert [t.line for t in tokens] == [1, 2, 4, 4]


def test_line_comment_skipped() -> None:
    tokens = scan("// a comment\n123")
    assert tokens[0].type == "NUMBER"
    assert tokens[0].line == 2


def test_comment_at_end_of_input() -> None:
    assert types("1 // trailing") == ["NUMBER", "EOF"]


def test_nested_block_comment_produces_no_tokens() -> None:
    lexer = Lexer("/* outer /* inner */ still outer */")
    tokens = lexer.scan_tokens()
    assert [t.type for t in tokens] == ["EOF"]
    assert lexer.errors == []


def test_block_comment_counts_lines() -> None:
    tokens = scan("/* a\nb\n*/ x")
    assert tokens[0].line == 3


def test_unterminated_block_comment() -> None:
    lexer = Lexer("/* a /* b */\n")
    tokens = lexer.scan_tokens()
    assert [t.type for t in tokens] == ["EOF"]
    assert len(lexer.errors) == 1
    assert lexer.errors[0].message == "Unterminated block comment."
    assert lexer.errors[0].line == 2


def test_unterminated_string() -> None:
    with pytest.raises(DiagnosticBatch) as excinfo:
        scan('"abc')
    assert excinfo.value.message == "Unterminated string."
    assert excinfo.value.line == 1
    assert str(excinfo.value) == "[line 1] Error: Unterminated string."


def test_unterminated_string_reports_opening_line() -> None:
    lexer = Lexer('\n\n"abc\ndef')
    lexer.scan_tokens()
    assert lexer.errors[0].line == 3
    assert lexer.tokens[-1].line == 4


def test_unexpected_character() -> None:
    lexer = Lexer("@")
    tokens = lexer.scan_tokens()
    assert [t.type for t in tokens] == ["EOF"]
    assert isinstance(lexer.errors[0], ScanError)
    assert lexer.errors[0].message == "Unexpected character '@'."


def test_scanning_continues_after_errors() -> None:
    lexer = Lexer("@ 1 #\n2 $")
    tokens = lexer.scan_tokens()
    assert [t.lexeme for t in tokens] == ["1", "2", ""]
    assert [(e.line, e.message) for e in lexer.errors] == [
        (1, "Unexpected character '@'."),
        (1, "Unexpected character '#'."),
        (2, "Unexpected character '$'."),
    ]


def test_scan_returns_all_errors_and_reads_as_last() -> None:
    with pytest.raises(DiagnosticBatch) as excinfo:
        scan("@\n#")
    batch = excinfo.value
    assert len(batch.errors) == 2
    assert batch.line == 2
    assert batch.message == "Unexpected character '#'."


def test_errors_reported_as_found() -> None:
    stream = io.StringIO()
    reporter = ErrorReporter(stream)
    Lexer('@ "open', reporter).scan_tokens()
    assert stream.getvalue().splitlines() == [
        "[line 1] Error: Unexpected character '@'.",
        "[line 1] Error: Unterminated string.",
    ]
    assert reporter.had_error
    assert not reporter.had_runtime_error


def test_eof_token_on_final_line() -> None:
    tokens = scan("1\n2\n")
    assert tokens[-1] == Token.eof(3)
    assert tokens[-1].lexeme == ""


def test_empty_source() -> None:
    assert scan("") == [Token("EOF", "", None, 1)]


def test_whitespace_discarded() -> None:
    assert types(" \t\r\n 1 \t") == ["NUMBER", "EOF"]


def test_token_is_immutable() -> None:
    tok = Token("NUMBER", "1", Number(1.0), 1)
    with pytest.raises(AttributeError):
        tok.lexeme = "2"  # type: ignore[misc]


def test_token_equality_and_hash() -> None:
    a = Token("IDENTIFIER", "x", None, 1)
    b = Token("IDENTIFIER", "x", None, 1)
    assert a == b
    assert hash(a) == hash(b)
    assert a != Token("IDENTIFIER", "x", None, 2)
    assert a != "x"


def test_token_str_and_repr() -> None:
    tok = Token("NUMBER", "1", Number(1.0), 1)
    assert str(tok) == "NUMBER 1 1 1"
    assert repr(tok) == "Token(NUMBER, '1', 1)"
    assert str(Token("SEMICOLON", ";", None, 2)) == "SEMICOLON ; None 2"


def test_character_stream_reading() -> None:
    cs = CharacterStream("a\nb")
    assert cs.peek() == "a"
    assert cs.next() == "a"
    assert cs.next() == "\n"
    assert cs.line == 2
    assert cs.match("b")
    assert cs.end_of_file()
    assert cs.peek() == ""
    assert not cs.match("b")
    with pytest.raises(IndexError):
        cs.next()
