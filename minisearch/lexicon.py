"""
minisearch/lexicon.py

Index store: the whole term -> postings mapping persisted as one pickle.

The pickle holds a single self-describing record:
    {
        "magic": "MSIX1",
        "codec": "gaps" | "varbyte",   # back end that produced the payloads
        "terms": { term: payload, ... }
    }

There are no partial writes and no per-term random access: a search
session loads the complete file before answering its first query.
"""

import pickle
import sys

from minisearch.codec import get_codec
from minisearch.paths import DEFAULT_CODEC, INDEX_PATH

MAGIC = "MSIX1"


class IndexFormatError(ValueError):
    """The index file exists but does not hold a valid index record."""


class LoadedIndex:
    """
    Read-only view over a loaded index.

    Typical usage:
        idx = IndexStore("index.data").load()
        if "cat" in idx:
            docids = idx.postings("cat")
    """

    def __init__(self, terms: dict, codec: str = DEFAULT_CODEC):
        self.map = terms
        self.codec_name = codec
        self.codec = get_codec(codec)

    def __contains__(self, term):
        return term in self.map

    def __len__(self):
        return len(self.map)

    def terms(self):
        return self.map.keys()

    def postings(self, term: str):
        """Decoded docids for term, or None if the term is not indexed."""
        payload = self.map.get(term)
        if payload is None:
            return None
        return self.codec.decode(payload)


class IndexStore:
    def __init__(self, path: str = INDEX_PATH):
        self.path = path

    def save(self, index: dict, codec: str = DEFAULT_CODEC):
        """
        Write the full index in one go. OSError / pickling errors propagate.
        """
        record = {"magic": MAGIC, "codec": get_codec(codec).name, "terms": dict(index)}
        with open(self.path, "wb") as f:
            pickle.dump(record, f, protocol=pickle.HIGHEST_PROTOCOL)
        print(f"[Store] Index saved: {len(record['terms'])} terms to {self.path}", file=sys.stderr)

    def _check_postings(self, term, idx: LoadedIndex):
        # every payload must decode to strictly increasing non-negative ints
        try:
            docids = idx.postings(term)
        except (TypeError, ValueError) as e:
            raise IndexFormatError(f"{self.path}: bad postings for term {term!r}: {e}") from e
        if not isinstance(term, str) or not docids:
            raise IndexFormatError(f"{self.path}: bad index entry for term {term!r}")
        prev = -1
        for d in docids:
            if not isinstance(d, int) or d <= prev:
                raise IndexFormatError(f"{self.path}: postings for term {term!r} are not ascending docids")
            prev = d

    def load(self) -> LoadedIndex:
        """
        Read and decode the full index.
        Missing / unreadable file -> OSError; malformed contents -> IndexFormatError.
        """
        with open(self.path, "rb") as f:
            try:
                record = pickle.load(f)
            except (pickle.UnpicklingError, EOFError, AttributeError, ImportError,
                    IndexError, KeyError, TypeError, ValueError) as e:
                raise IndexFormatError(f"{self.path}: cannot decode index: {e}") from e

        if not isinstance(record, dict) or record.get("magic") != MAGIC:
            raise IndexFormatError(f"{self.path}: not an index file (bad magic)")
        terms = record.get("terms")
        if not isinstance(terms, dict):
            raise IndexFormatError(f"{self.path}: index record has no term mapping")
        try:
            idx = LoadedIndex(terms, record.get("codec", DEFAULT_CODEC))
        except (ValueError, AttributeError) as e:
            raise IndexFormatError(f"{self.path}: {e}") from e
        for term in idx.terms():
            self._check_postings(term, idx)
        print(f"[Store] Index loaded: {len(idx)} terms from {self.path}", file=sys.stderr)
        return idx
