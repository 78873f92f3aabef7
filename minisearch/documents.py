# minisearch/documents.py
"""
Document-side I/O shared by the indexer and the searcher.

Title file (TSV), one line per document:
    docid <TAB> (unused) <TAB> url <TAB> title [<TAB> ...]
Lines with fewer than 4 fields are ignored; extra fields are ignored.

Text directory: one file per document, file name == docid string,
contents == raw body.
"""

from __future__ import annotations

import os
import re
import sys
from typing import Dict, List, NamedTuple

_LEADING_INT = re.compile(r"\s*(\d+)")
_DOCID = re.compile(r"\d+")


class DocInfo(NamedTuple):
    title: str
    url: str


def load_titles(path: str) -> Dict[str, DocInfo]:
    """
    Read the title file into {docid: DocInfo}.
    Any OSError (missing / unreadable file) propagates to the caller.
    """
    titles: Dict[str, DocInfo] = {}
    with open(path, "r", encoding="utf-8", errors="ignore") as f:
        for line in f:
            parts = line.rstrip("\n").rstrip("\r").split("\t")
            if len(parts) < 4:
                continue
            titles[parts[0]] = DocInfo(title=parts[3], url=parts[2])
    return titles


def parse_docid(name: str, strict: bool = False) -> int:
    """
    Turn a file name into an integer docid, reading the leading decimal
    number the way scanf("%d") does ("42", " 7", "12abc" -> 12).

    A name with no leading number maps to 0, which aliases every such file
    onto the same docid. Pass strict=True to get a ValueError for any name
    that is not all digits.
    """
    if strict:
        if not _DOCID.fullmatch(name):
            raise ValueError(f"Document name {name!r} is not a decimal docid")
        return int(name)
    m = _LEADING_INT.match(name)
    if m is None:
        print(f"[Documents] warning: {name!r} is not a decimal docid, using 0", file=sys.stderr)
        return 0
    return int(m.group(1))


def list_documents(text_dir: str) -> List[str]:
    """
    Return the docid strings (file names) of all regular files in text_dir,
    sorted by name. OSError propagates if the directory cannot be listed.
    """
    with os.scandir(text_dir) as it:
        names = [e.name for e in it if not e.is_dir()]
    return sorted(names)


def read_document(text_dir: str, docid: str) -> str:
    """Read one document body. Undecodable bytes are dropped."""
    with open(os.path.join(text_dir, docid), "r", encoding="utf-8", errors="ignore", newline="") as f:
        return f.read()
