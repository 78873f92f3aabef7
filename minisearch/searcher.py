# minisearch/searcher.py
"""
Single-term searcher over a fully loaded index.

- SearchSession holds everything a query needs (index, titles, text dir,
  page size). It is built once and passed around; nothing lives in module
  globals.
- Results come back in ascending docid order (decompression order), not
  ranked.
- A posting whose docid has no title record is dropped from the output
  but still counted in the total.
"""

from __future__ import annotations

import sys
from typing import Dict, List, NamedTuple, Optional, TextIO

from minisearch.documents import DocInfo, load_titles, read_document
from minisearch.lexicon import IndexStore, LoadedIndex
from minisearch.paths import DEFAULT_LIMIT, EXIT_COMMANDS, INDEX_PATH, PROMPT
from minisearch.snippet import extract_snippet


class Page(NamedTuple):
    items: List[int]
    total: int
    message: Optional[str]


class Result(NamedTuple):
    docid: int
    title: str
    url: str
    snippet: str


class SearchResponse(NamedTuple):
    term: str
    results: List[Result]
    total: int
    message: Optional[str]

    @property
    def matched(self) -> bool:
        return self.total > 0


def paginate(postings: List[int], term: str, limit: int = DEFAULT_LIMIT) -> Page:
    """
    First `limit` postings; a footer message only if there were more.
    limit must be >= 1.
    """
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")
    total = len(postings)
    if total > limit:
        return Page(postings[:limit], total, f"Results 1 - {limit}  of about {total} for {term}")
    return Page(list(postings), total, None)


def format_result(r: Result) -> str:
    return f'[{r.docid}] {r.title}\n{r.url}\n\n"{r.snippet}"\n\n\n'


class SearchSession:
    """
    Query-time context: a loaded index plus document metadata.

    Typical usage:
        s = SearchSession.open("titles.tsv", "text/")
        resp = s.search("cat")
        for r in resp.results: ...
    """

    def __init__(self, index: LoadedIndex, titles: Dict[str, DocInfo], text_dir: str,
                 limit: int = DEFAULT_LIMIT):
        self.index = index
        self.titles = titles
        self.text_dir = text_dir
        self.limit = limit

    @classmethod
    def open(cls, titles_path: str, text_dir: str, index_path: str = INDEX_PATH,
             limit: int = DEFAULT_LIMIT) -> "SearchSession":
        """Load titles, then the index. Any failure propagates."""
        titles = load_titles(titles_path)
        print(f"docs: {len(titles)}", file=sys.stderr)
        print("now index loading", file=sys.stderr)
        index = IndexStore(index_path).load()
        print(f"terms: {len(index)}", file=sys.stderr)
        return cls(index, titles, text_dir, limit)

    def resolve(self, term: str) -> Optional[List[int]]:
        """Decoded postings for term; None means no match."""
        return self.index.postings(term)

    def snippet(self, term: str, docid: str) -> str:
        try:
            text = read_document(self.text_dir, docid)
        except OSError:
            return ""
        return extract_snippet(term, text)

    def present(self, term: str, docid: int) -> Optional[Result]:
        key = str(docid)
        info = self.titles.get(key)
        if info is None:
            return None
        return Result(docid, info.title, info.url, self.snippet(term, key))

    def search(self, term: str, limit: Optional[int] = None) -> SearchResponse:
        limit = self.limit if limit is None else limit
        postings = self.resolve(term)
        if postings is None:
            return SearchResponse(term, [], 0, None)
        page = paginate(postings, term, limit)
        results = []
        for docid in page.items:
            r = self.present(term, docid)
            if r is not None:
                results.append(r)
        return SearchResponse(term, results, page.total, page.message)

    def run(self, stdin: TextIO = sys.stdin, stdout: TextIO = sys.stdout) -> None:
        """
        Interactive prompt loop. Stops on 'exit' / 'quit' or end of input.
        """
        while True:
            stdout.write(PROMPT)
            stdout.flush()
            line = stdin.readline()
            if not line:
                break  # EOF
            # a last line without "\n" is still answered
            term = line.strip()
            if not term:
                continue
            if term in EXIT_COMMANDS:
                break

            resp = self.search(term)
            if not resp.matched:
                stdout.write("No Match\n")
                continue
            for r in resp.results:
                stdout.write(format_result(r))
            if resp.message:
                stdout.write(resp.message + "\n")
            stdout.flush()
