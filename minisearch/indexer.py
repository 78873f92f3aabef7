"""
minisearch/indexer.py

Builds the inverted index from a directory of raw documents.

For every document:
    text = title (if the title file knows the docid) + raw body
    every non-empty token surface -> append the integer docid to that term

After all documents, each term's list is sorted, de-duplicated and passed
through the postings codec. The result is handed to IndexStore.save().

Output shape:
    dict[str, payload]   # payload as produced by the chosen codec
"""

from __future__ import annotations

import sys
from collections import defaultdict
from concurrent.futures import ProcessPoolExecutor
from typing import Dict, Iterable, List, Optional, Tuple

from minisearch.codec import get_codec, unique_sorted
from minisearch.documents import DocInfo, list_documents, parse_docid, read_document
from minisearch.paths import DEFAULT_CODEC


def _doc_terms(tokenizer, text: str) -> List[str]:
    return [tok.surface for tok in tokenizer.tokenize(text) if tok.surface]


def _worker_tokenize(tokenizer, batch: List[Tuple[int, str]]) -> List[Tuple[int, List[str]]]:
    """
    Worker process: tokenize a batch of (docid, text) pairs.
    Returns each document's distinct terms; the main process does the merge.
    """
    out = []
    for docid, text in batch:
        out.append((docid, sorted(set(_doc_terms(tokenizer, text)))))
    return out


class Indexer:
    """
    In-memory inverted index builder.

    The term -> [docid, ...] accumulation map lives only for the duration of
    one build call; the Indexer keeps the finished, encoded index in
    self.index afterwards.

    Args:
        tokenizer: any object with tokenize(text) -> tokens exposing .surface
        codec: postings codec name ("gaps" | "varbyte")
        strict_ids: reject file names that are not decimal docids instead
                    of mapping them to 0
        workers: >1 tokenizes documents in that many processes
                 (the tokenizer must be picklable)
    """

    def __init__(self, tokenizer, codec: str = DEFAULT_CODEC, strict_ids: bool = False,
                 workers: int = 1, batch_size: int = 256):
        self.tokenizer = tokenizer
        self.codec = get_codec(codec)
        self.strict_ids = strict_ids
        self.workers = workers
        self.batch_size = batch_size
        self.index: Dict[str, object] = {}
        self.skipped: List[str] = []

    # -------------------------------
    # document sources
    # -------------------------------
    def _iter_dir(self, titles: Dict[str, DocInfo], text_dir: str):
        """Yield (docid:int, text) for every readable file in text_dir."""
        for name in list_documents(text_dir):
            try:
                body = read_document(text_dir, name)
            except OSError as e:
                print(f"[Indexer] Error reading file {name}: {e}", file=sys.stderr)
                self.skipped.append(name)
                continue
            info = titles.get(name)
            text = info.title + body if info is not None else body
            yield parse_docid(name, strict=self.strict_ids), text

    def _iter_texts(self, texts: Dict[str, str], titles: Dict[str, DocInfo]):
        for name, body in texts.items():
            info = titles.get(name)
            text = info.title + body if info is not None else body
            yield parse_docid(name, strict=self.strict_ids), text

    # -------------------------------
    # build
    # -------------------------------
    def build(self, titles: Dict[str, DocInfo], text_dir: str) -> Dict[str, object]:
        """
        Build the index from every file in text_dir.
        An unreadable text_dir raises OSError; an unreadable single document
        is reported and skipped.
        """
        self.skipped = []
        return self._build(self._iter_dir(titles, text_dir))

    def build_from_texts(self, texts: Dict[str, str],
                         titles: Optional[Dict[str, DocInfo]] = None) -> Dict[str, object]:
        """Same as build(), over in-memory {docid_str: body}."""
        self.skipped = []
        return self._build(self._iter_texts(texts, titles or {}))

    def _build(self, docs: Iterable[Tuple[int, str]]) -> Dict[str, object]:
        postings: Dict[str, List[int]] = defaultdict(list)
        if self.workers > 1:
            self._accumulate_parallel(docs, postings)
        else:
            for docid, text in docs:
                for term in _doc_terms(self.tokenizer, text):
                    postings[term].append(docid)

        self.index = {term: self.codec.encode(unique_sorted(plist))
                      for term, plist in postings.items()}
        print(f"[Indexer] {len(self.index)} terms", file=sys.stderr)
        return self.index

    def _accumulate_parallel(self, docs: Iterable[Tuple[int, str]], postings: Dict[str, List[int]]):
        # Each worker returns its own per-document terms; merging happens
        # here, before sort+dedup, so batch completion order does not matter.
        futures = []
        batch: List[Tuple[int, str]] = []
        with ProcessPoolExecutor(max_workers=self.workers) as ex:
            for item in docs:
                batch.append(item)
                if len(batch) >= self.batch_size:
                    futures.append(ex.submit(_worker_tokenize, self.tokenizer, batch))
                    batch = []
            if batch:
                futures.append(ex.submit(_worker_tokenize, self.tokenizer, batch))

            for fut in futures:
                for docid, terms in fut.result():
                    for term in terms:
                        postings[term].append(docid)

    def get_postings(self, term: str) -> List[int]:
        """
        Decoded postings for a term from the in-memory index.
        Returns an empty list if term not found.
        """
        payload = self.index.get(term)
        if payload is None:
            return []
        return self.codec.decode(payload)
