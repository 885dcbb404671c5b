import pytest

import json_lexer as jl


def _kinds(text):
    return [tok.kind for tok in jl.lex(text)]


def test_token_kinds_include_whitespace():
    assert _kinds('{"a": 1}') == ["LBRACE", "STRING", "COLON", "WS", "NUMBER", "RBRACE"]


def test_whitespace_run_is_one_token():
    toks = list(jl.lex(" \t  [ ]"))
    assert toks[0].kind == "WS"
    assert toks[0].text == " \t  "


def test_keywords():
    assert _kinds("null true false") == ["NULL", "WS", "BOOLEAN", "WS", "BOOLEAN"]


def test_punctuation():
    assert _kinds("{}[],:") == ["LBRACE", "RBRACE", "LBRACKET", "RBRACKET", "COMMA", "COLON"]


@pytest.mark.parametrize("text", ["0", "28", "-7", "+3", "3.25", ".5", "-.5", "007"])
def test_number_forms(text):
    toks = list(jl.lex(text))
    assert len(toks) == 1
    assert toks[0].kind == "NUMBER"
    assert toks[0].value == text


def test_string_value_has_quotes_stripped_only():
    tok = jl.Lexer(r'"say \"hi\" \\o/"').next()
    assert tok.kind == "STRING"
    assert tok.value == r'say \"hi\" \\o/'
    assert tok.text == r'"say \"hi\" \\o/"'


def test_newline_advances_line_and_resets_col():
    toks = list(jl.lex("[\n  1]"))
    assert [(t.kind, t.line, t.col) for t in toks] == [
        ("LBRACKET", 1, 1),
        ("NL", 1, 2),
        ("WS", 2, 1),
        ("NUMBER", 2, 3),
        ("RBRACKET", 2, 4),
    ]
    assert toks[3].offset == 4


def test_next_returns_none_when_exhausted():
    lexer = jl.Lexer("1")
    assert lexer.next().kind == "NUMBER"
    assert lexer.next() is None
    assert lexer.next() is None


def test_unmatched_input_reports_position():
    with pytest.raises(jl.JSONLexError) as ei:
        list(jl.lex("not valid"))
    exc = ei.value
    assert "invalid syntax at line 1 col 1" in str(exc)
    assert (exc.line, exc.col, exc.pos) == (1, 1, 0)
    assert exc.token is None
    assert exc.lineno is None and exc.offset is None
    assert str(exc) == exc.msg


def test_lex_error_is_a_syntax_error():
    with pytest.raises(SyntaxError):
        list(jl.lex("@"))


def test_exponent_is_not_part_of_a_number():
    lexer = jl.Lexer("1e5")
    assert lexer.next().value == "1"
    with pytest.raises(jl.JSONLexError) as ei:
        lexer.next()
    assert ei.value.col == 2


@pytest.mark.parametrize("text", [
    r'"a\nb"',        # only \" and \\ are escapes
    '"a\nb"',         # literal newline
    '"unterminated',
    "'single'",
    "\r",
    "-",
])
def test_rejected_input(text):
    with pytest.raises(jl.JSONLexError):
        list(jl.lex(text))


def test_format_error_points_at_token():
    lexer = jl.Lexer('[1,\n  ?]')
    with pytest.raises(jl.JSONLexError) as ei:
        list(lexer)
    msg = str(ei.value)
    assert "line 2 col 3 (offset 6)" in msg
    assert msg.endswith("\n\n    ?]\n    ^")


def test_format_error_with_token():
    lexer = jl.Lexer("[true, }")
    toks = list(lexer)
    msg = lexer.format_error(toks[-1], "unexpected")
    assert msg.startswith("unexpected at line 1 col 8 (offset 7):")
    assert msg.endswith("  [true, }\n         ^")
