import pytest

from akoconf.tokenizer import AkoError, Location, Token, TokenType, tokenize


def kinds(tokens):
    return [t.kind for t in tokens]


def test_empty_and_whitespace_give_no_tokens():
    assert tokenize("") == []
    assert tokenize("  \n\t ") == []


def test_dotted_key_with_vector():
    tokens = tokenize("window.size 180x190")
    assert kinds(tokens) == [
        TokenType.IDENT,
        TokenType.DOT,
        TokenType.IDENT,
        TokenType.INT,
        TokenType.VECTORCROSS,
        TokenType.INT,
    ]
    assert tokens[0].value == "window"
    assert tokens[2].value == "size"
    assert tokens[3].value == 180
    assert tokens[5].value == 190


def test_plus_minus_carry_bool_values():
    tokens = tokenize("+thing -other")
    assert kinds(tokens) == [
        TokenType.PLUS,
        TokenType.IDENT,
        TokenType.MINUS,
        TokenType.IDENT,
    ]
    assert tokens[0].value is True
    assert tokens[2].value is False


def test_single_and_double_braces():
    tokens = tokenize("[[ [ ] ]] ; &")
    assert kinds(tokens) == [
        TokenType.OPEN_D_BRACE,
        TokenType.OPEN_BRACE,
        TokenType.CLOSE_BRACE,
        TokenType.CLOSE_D_BRACE,
        TokenType.SEMICOLON,
        TokenType.AND,
    ]


def test_floats():
    tokens = tokenize("a 1.0 b 42.0 miku 39.39")
    floats = [t.value for t in tokens if t.kind is TokenType.FLOAT]
    assert floats == [1.0, 42.0, 39.39]


def test_string_escapes():
    tokens = tokenize('viva "viva \\"happy\\""')
    assert kinds(tokens) == [TokenType.IDENT, TokenType.STRING]
    assert tokens[1].value == 'viva "happy"'


def test_newline_and_tab_escapes():
    tokens = tokenize('s "a\\nb\\tc\\\\d"')
    assert tokens[1].value == "a\nb\tc\\d"


def test_unterminated_string_takes_rest():
    tokens = tokenize('s "open ended')
    assert tokens[-1].kind is TokenType.STRING
    assert tokens[-1].value == "open ended"


def test_comment_is_skipped():
    tokens = tokenize("# a comment + - [[\nkey 5")
    assert kinds(tokens) == [TokenType.IDENT, TokenType.INT]
    assert tokens[0].value == "key"


def test_ignore_floats_splits_on_dots():
    tokens = tokenize("a.1.2", ignore_floats=True)
    assert kinds(tokens) == [
        TokenType.IDENT,
        TokenType.DOT,
        TokenType.INT,
        TokenType.DOT,
        TokenType.INT,
    ]
    assert [tokens[2].value, tokens[4].value] == [1, 2]


def test_float_without_ignore_floats():
    tokens = tokenize("a.1.2")
    assert tokens[-1].kind is TokenType.FLOAT or kinds(tokens)[-1] is TokenType.INT
    with pytest.raises(AkoError):
        tokenize("x 1.2.3")


def test_leading_zero_is_octal():
    assert tokenize("007")[0].value == 7
    assert tokenize("010")[0].value == 8


def test_invalid_octal_fails():
    with pytest.raises(AkoError, match="Failed to parse number"):
        tokenize("09")


def test_int_range_limit():
    text = "9223372036854775807"
    assert tokenize(text)[0].value == int(text)
    with pytest.raises(AkoError, match="Failed to parse number"):
        tokenize("9223372036854775808")


def test_bad_vector_component():
    with pytest.raises(AkoError, match="Failed to parse vector"):
        tokenize("v 5xa")


def test_unknown_character():
    with pytest.raises(AkoError, match="Unknown character @"):
        tokenize("a @")
    with pytest.raises(AkoError, match="Unknown character"):
        tokenize("a\r\n")


def test_unknown_character_reports_location():
    with pytest.raises(AkoError, match="at 1:3$"):
        tokenize("a @")


def test_location_str():
    assert str(Location(3, 7, 0)) == "3:7"


def test_token_spans_match_source():
    source = "alpha beta_2 gamma"
    tokens = tokenize(source)
    for item in tokens:
        assert item.start.index == source.index(item.value)
        assert item.end.index - item.start.index == len(item.value)
        assert source[item.start.index : item.end.index] == item.value


def test_newline_and_tab_advance_line():
    tokens = tokenize("a\nb\tc")
    lines = [t.start.line for t in tokens]
    assert lines[1] == lines[0] + 1
    assert lines[2] == lines[1] + 1
    assert tokens[1].start.column == tokens[0].start.column


def test_text_after_nul_is_ignored():
    tokens = tokenize("a\0b")
    assert [t.value for t in tokens] == ["a"]


def test_tokens_are_immutable_records():
    item = tokenize("k")[0]
    assert item == Token(TokenType.IDENT, item.start, item.end, "k")
    with pytest.raises(AttributeError):
        item.value = 0