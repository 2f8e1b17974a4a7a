import pytest

from clasp.exceptions import TokenizeError
from clasp.parser import TokenizerOptions, join_tokens, tokenize
from clasp.parser.tokenizer import quote_token


@pytest.mark.parametrize(
    "line,expected",
    [
        ("", []),
        ("   ", []),
        ("a b  c", ["a", "b", "c"]),
        ('say "hello world"', ["say", "hello world"]),
        ('/name="a b"c', ["/name=a bc"]),
        ('""', [""]),
        ('a "" b', ["a", "", "b"]),
        ("\ta\nb ", ["a", "b"]),
        ('"say ""hi"""', ['say "hi"']),
        ('""""', ['"']),
        ('/name="a""b"', ['/name=a"b']),
    ],
)
def test_tokenize_texts(line, expected):
    assert [token.text for token in tokenize(line)] == expected


def test_token_offsets():
    tokens = tokenize('say "hello world"')
    assert (tokens[0].start, tokens[0].end, tokens[0].quoted) == (0, 3, False)
    assert (tokens[1].start, tokens[1].end, tokens[1].quoted) == (4, 17, True)
    assert tokens[1].length == 13
    assert str(tokens[1]) == "hello world"


def test_unterminated_quote_raises():
    with pytest.raises(TokenizeError) as error:
        tokenize('a "b')
    assert error.value.position == 2
    assert "column 3" in str(error.value)
    assert error.value.line == 'a "b'


def test_unterminated_quote_allowed_with_partial_input():
    tokens = tokenize('a "b c', TokenizerOptions.ALLOW_PARTIAL_INPUT)
    assert [token.text for token in tokens] == ["a", "b c"]
    assert tokens[-1].end == 6


@pytest.mark.parametrize(
    "texts",
    [
        ["a", "b"],
        ["hello world", "x"],
        ["", "y"],
        ["/name=a b"],
        ['say "hi"'],
        ['"', 'a""b'],
    ],
)
def test_join_tokens_tokenizes_back(texts):
    line = join_tokens(texts)
    assert [token.text for token in tokenize(line)] == texts


def test_to_source_quotes_whitespace():
    token = tokenize('"a b"')[0]
    assert token.to_source() == '"a b"'
    assert tokenize("plain")[0].to_source() == "plain"


def test_quote_token_doubles_embedded_quotes():
    assert quote_token('say "hi"') == '"say ""hi"""'
    assert quote_token('a"b') == '"a""b"'
    assert quote_token("") == '""'
