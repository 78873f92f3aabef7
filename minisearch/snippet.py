# minisearch/snippet.py
from minisearch.paths import SNIPPET_AFTER, SNIPPET_BEFORE, SNIPPET_FALLBACK


def extract_snippet(term: str, text: str,
                    before: int = SNIPPET_BEFORE,
                    after: int = SNIPPET_AFTER,
                    fallback: int = SNIPPET_FALLBACK) -> str:
    """
    Excerpt of text around the first literal occurrence of term.

    - found at p:  text[start : start + len(term) + after], start = max(0, p - before)
    - not found:   the first `fallback` characters
    Newlines are removed from the result. Offsets are str indices
    (code points), so a multi-byte character is never cut in half.
    """
    pos = text.find(term)
    if pos == -1:
        return text[:fallback].replace("\n", "")

    start = max(0, pos - before)
    end = min(len(text), start + len(term) + after)
    return text[start:end].replace("\n", "")
