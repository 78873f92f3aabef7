# tests/conftest.py
import pytest

from minisearch.indexer import Indexer
from minisearch.lexicon import LoadedIndex
from minisearch.parser import WhitespaceTokenizer
from minisearch.searcher import SearchSession

# docid -> (url, title, body)
TOY_DOCS = {
    "1": ("http://example.com/1", "Cats", "\ncat dog\nThe cat sat on the mat."),
    "2": ("http://example.com/2", "Dogs", "\ndog bird"),
    "3": ("http://example.com/3", "Lone cat", "\ncat"),
}


def write_corpus(root, docs):
    """Write a title TSV + text dir under root; return (titles_path, text_dir)."""
    text_dir = root / "text"
    text_dir.mkdir()
    lines = []
    for docid, (url, title, body) in docs.items():
        lines.append(f"{docid}\tunused\t{url}\t{title}")
        (text_dir / docid).write_text(body, encoding="utf-8")
    titles = root / "titles.tsv"
    titles.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return str(titles), str(text_dir)


@pytest.fixture
def corpus(tmp_path):
    return write_corpus(tmp_path, TOY_DOCS)


@pytest.fixture
def make_session(tmp_path):
    """Build a SearchSession straight from {docid: body} with whitespace tokens."""
    def _make(bodies, titles=None, limit=5, codec="gaps"):
        text_dir = tmp_path / "session_text"
        text_dir.mkdir(exist_ok=True)
        for docid, body in bodies.items():
            (text_dir / docid).write_text(body, encoding="utf-8")
        indexer = Indexer(WhitespaceTokenizer(), codec=codec)
        index = indexer.build_from_texts(bodies)
        if titles is None:
            from minisearch.documents import DocInfo
            titles = {d: DocInfo(f"title {d}", f"http://example.com/{d}") for d in bodies}
        return SearchSession(LoadedIndex(index, codec), titles, str(text_dir), limit=limit)
    return _make
