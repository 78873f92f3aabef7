# tests/test_documents.py
import pytest

from minisearch.documents import DocInfo, list_documents, load_titles, parse_docid, read_document


def test_load_titles(tmp_path):
    p = tmp_path / "titles.tsv"
    p.write_text(
        "1\tx\thttp://a\tAlpha\n"
        "2\tx\thttp://b\tBeta\textra\tfields\r\n"
        "3\ttoo\tshort\n"
        "\n",
        encoding="utf-8",
    )
    titles = load_titles(str(p))
    assert titles == {"1": DocInfo("Alpha", "http://a"), "2": DocInfo("Beta", "http://b")}


def test_load_titles_missing(tmp_path):
    with pytest.raises(OSError):
        load_titles(str(tmp_path / "nope.tsv"))


@pytest.mark.parametrize("name,expected", [
    ("42", 42),
    ("007", 7),
    (" 7", 7),
    ("12abc", 12),
    ("-3", 0),
    ("abc", 0),
    ("", 0),
])
def test_parse_docid(name, expected):
    assert parse_docid(name) == expected


def test_parse_docid_strict():
    assert parse_docid("12", strict=True) == 12
    with pytest.raises(ValueError):
        parse_docid("abc", strict=True)


def test_list_and_read_documents(tmp_path):
    (tmp_path / "2").write_text("two", encoding="utf-8")
    (tmp_path / "10").write_bytes(b"ten \xff\xfe bytes\r\n")
    (tmp_path / "sub").mkdir()
    assert list_documents(str(tmp_path)) == ["10", "2"]
    assert read_document(str(tmp_path), "2") == "two"
    assert read_document(str(tmp_path), "10") == "ten  bytes\r\n"
