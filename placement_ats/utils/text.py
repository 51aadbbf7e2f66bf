"""
Document text normalization.

Turns text produced by the document extractor into the views the extractors
need: a whitespace-collapsed string with case preserved (name extraction
works on lines, so line breaks survive) and a lowercase view for keyword
search.
"""

import re
from typing import List, NamedTuple

from placement_ats.core.exceptions import require

_INLINE_SPACE = re.compile(r'[ \t\f\v\u00a0]+')
_BLANK_LINES = re.compile(r'\n{3,}')
_CONTROL_CHARS = re.compile(r'[\x00-\x08\x0b\x0e-\x1f\x7f]')


class NormalizedText(NamedTuple):
    text: str
    lower: str

    @property
    def lines(self) -> List[str]:
        return self.text.split('\n')


def clean_text(raw: str) -> str:
    """Collapse runs of spaces, unify line endings and drop control chars."""
    text = raw.replace('\r\n', '\n').replace('\r', '\n')
    text = _CONTROL_CHARS.sub(' ', text)
    text = _INLINE_SPACE.sub(' ', text)
    text = '\n'.join(line.strip() for line in text.split('\n'))
    text = _BLANK_LINES.sub('\n\n', text)
    return text.strip()


def normalize(raw: str) -> NormalizedText:
    require(isinstance(raw, str), "Document text must be a string", argument="text")
    text = clean_text(raw)
    return NormalizedText(text=text, lower=text.lower())
