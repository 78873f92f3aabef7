import re
import html
from typing import List, NamedTuple

from ftfy import fix_text

# keep U.S., 3.14, COVID-19 etc. as whole words
TOKEN_REGEX = re.compile(r"\w+(?:[.-]\w+)*")


class Token(NamedTuple):
    """A single token. The indexer only reads `surface`."""
    surface: str
    start: int


class Tokenizer:
    """
    Text cleaner + tokenizer used by the indexer.
    Uses ftfy + html to clean malformed text.

    What it does:
    - Turns dirty html code into regular chars
    - Funny looking chars like Ã¢\\x80\\x93 into regular chars
    - Splits on anything that is not a word char, keeping inner '.' and '-'
      (U.S. -> U.S    3-14 -> 3-14)
    - Surfaces keep their case unless lowercase=True, so a query term
      typed at the prompt matches exactly what is in the text

    Contract with the indexer:
        tokenize(text) -> list[Token], each exposing .surface
    """

    def __init__(self, lowercase: bool = False):
        self.lowercase = lowercase

    def clean(self, text: str) -> str:
        return fix_text(html.unescape(text))

    def tokenize(self, text: str) -> List[Token]:
        """
        Clean and tokenize a raw text string.
        Returns [] if nothing remains after tokenization.
        """
        text = self.clean(text)
        if self.lowercase:
            text = text.lower()
        return [Token(m.group(0), m.start()) for m in TOKEN_REGEX.finditer(text)]


class WhitespaceTokenizer:
    """Splits on whitespace only; no cleaning. Handy for toy corpora."""

    def tokenize(self, text: str) -> List[Token]:
        return [Token(m.group(0), m.start()) for m in re.finditer(r"\S+", text)]
