# tests/test_parser.py
import pytest

from minisearch.parser import Token, Tokenizer, WhitespaceTokenizer


@pytest.mark.parametrize("text,expected", [
    ("U.S.", ["U.S"]),
    ("COVID-19", ["COVID-19"]),
    ("foo-bar-baz", ["foo-bar-baz"]),
    ("3.1415926", ["3.1415926"]),
    ("foo, bar.", ["foo", "bar"]),
    ("foo--bar", ["foo", "bar"]),
    ("foo...bar", ["foo", "bar"]),
    ("abc! def? ghi...", ["abc", "def", "ghi"]),
    ("---foo---bar---", ["foo", "bar"]),
    ("...", []),
    ("", []),
    ("2023-10-06", ["2023-10-06"]),
    ("Tom &amp; Jerry", ["Tom", "Jerry"]),
    ("cafÃ© au lait", ["café", "au", "lait"]),
])
def test_tokenizer(text, expected):
    assert [t.surface for t in Tokenizer().tokenize(text)] == expected


def test_tokenizer_lowercase():
    assert [t.surface for t in Tokenizer(lowercase=True).tokenize("Cat DOG")] == ["cat", "dog"]


def test_token_offsets():
    assert Tokenizer().tokenize("  hello world") == [Token("hello", 2), Token("world", 8)]


def test_whitespace_tokenizer():
    toks = WhitespaceTokenizer().tokenize("cat  dog,\nbird")
    assert [t.surface for t in toks] == ["cat", "dog,", "bird"]
