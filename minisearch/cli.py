# minisearch/cli.py
"""
Command line entry points.

    minisearch-index  <titles_file> <text_dir>   -> writes index.data
    minisearch-search <titles_file> <text_dir>   -> interactive prompt
    vb-encode <data_file>                        -> binary frames on stdout
    vb-decode <binary_file>                      -> tag<TAB>csv lines on stdout

Every main() returns a process exit code: 0 on success, 1 on a fatal
error (message on stderr).
"""

import argparse
import pickle
import sys

from minisearch.codec import CODECS, TruncatedPayloadError
from minisearch.documents import load_titles
from minisearch.frames import TruncatedFrameError, decode_stream, encode_stream
from minisearch.indexer import Indexer
from minisearch.lexicon import IndexFormatError, IndexStore
from minisearch.parser import Tokenizer
from minisearch.paths import DEFAULT_CODEC, DEFAULT_LIMIT, INDEX_PATH
from minisearch.searcher import SearchSession


class _ArgumentParser(argparse.ArgumentParser):
    # usage errors exit 1, like every other fatal error of these tools
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def positive_int(s: str) -> int:
    try:
        n = int(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {s!r}") from None
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {n}")
    return n


def _fatal(what: str, err: BaseException) -> int:
    print(f"Error {what}: {err}", file=sys.stderr)
    return 1


def index_main(argv=None) -> int:
    ap = _ArgumentParser(prog="minisearch-index", description="Build the inverted index.")
    ap.add_argument("titles_file", help="TSV: docid, (unused), url, title")
    ap.add_argument("text_dir", help="Directory with one file per document")
    ap.add_argument("--index", default=INDEX_PATH, help="Output index file")
    ap.add_argument("--codec", default=DEFAULT_CODEC, choices=sorted(CODECS), help="Postings codec")
    ap.add_argument("--workers", type=positive_int, default=1, help="#processes for tokenization")
    ap.add_argument("--strict-ids", action="store_true",
                    help="Fail on file names that are not decimal docids instead of using 0")
    ap.add_argument("--lowercase", action="store_true", help="Lowercase terms while indexing")
    args = ap.parse_args(argv)

    try:
        titles = load_titles(args.titles_file)
    except OSError as e:
        return _fatal("opening title file", e)

    indexer = Indexer(Tokenizer(lowercase=args.lowercase), codec=args.codec,
                      strict_ids=args.strict_ids, workers=args.workers)
    try:
        index = indexer.build(titles, args.text_dir)
    except OSError as e:
        return _fatal("reading text directory", e)
    except ValueError as e:
        return _fatal("parsing document id", e)

    try:
        IndexStore(args.index).save(index, codec=args.codec)
    except OSError as e:
        return _fatal("creating index file", e)
    except pickle.PicklingError as e:
        return _fatal("encoding index", e)

    print(f"Index created successfully with {len(index)} terms")
    return 0


def search_main(argv=None, stdin=None, stdout=None) -> int:
    ap = _ArgumentParser(prog="minisearch-search", description="Interactive single-term search.")
    ap.add_argument("titles_file", help="TSV: docid, (unused), url, title")
    ap.add_argument("text_dir", help="Directory with one file per document")
    ap.add_argument("--index", default=INDEX_PATH, help="Index file written by minisearch-index")
    ap.add_argument("--limit", type=positive_int, default=DEFAULT_LIMIT, help="Results shown per query")
    args = ap.parse_args(argv)

    try:
        session = SearchSession.open(args.titles_file, args.text_dir, args.index, limit=args.limit)
    except OSError as e:
        return _fatal("opening file", e)
    except IndexFormatError as e:
        return _fatal("decoding index", e)

    session.run(stdin or sys.stdin, stdout or sys.stdout)
    return 0


def encode_main(argv=None, stdout=None) -> int:
    ap = _ArgumentParser(prog="vb-encode", description="tag<TAB>v1,v2,... lines -> VarByte frames")
    ap.add_argument("data_file")
    args = ap.parse_args(argv)
    out = stdout or sys.stdout.buffer

    try:
        with open(args.data_file, "rb") as f:
            encode_stream(f, out)
    except OSError as e:
        return _fatal("reading file", e)
    return 0


def decode_main(argv=None, stdout=None) -> int:
    ap = _ArgumentParser(prog="vb-decode", description="VarByte frames -> tag<TAB>v1,v2,... lines")
    ap.add_argument("binary_file")
    args = ap.parse_args(argv)
    out = stdout or sys.stdout.buffer

    try:
        with open(args.binary_file, "rb") as f:
            decode_stream(f, out)
    except OSError as e:
        return _fatal("opening file", e)
    except TruncatedFrameError as e:
        return _fatal("reading frame", e)
    except TruncatedPayloadError as e:
        return _fatal("decoding payload", e)
    return 0


def run_index():
    sys.exit(index_main())


def run_search():
    sys.exit(search_main())


def run_encode():
    sys.exit(encode_main())


def run_decode():
    sys.exit(decode_main())


if __name__ == "__main__":
    sys.exit(index_main())
