"""Line cursor shared by the card text scanners."""

import re

from .errors import TruncatedInput

LINE_BREAK = re.compile(r'\r\n|\r|\n')
INTEGER = re.compile(r'[+-]?[0-9]+')


def parse_int(token: str) -> int | None:
    """Parse a bare (optionally signed) integer, or return None."""
    token = token.strip()
    if INTEGER.fullmatch(token):
        return int(token)
    return None


class Lines:
    """Physical lines of extracted text, addressed by position.

    Every line is returned trimmed; extractors pad with arbitrary runs of
    whitespace.
    """

    def __init__(self, text: str):
        self._lines = LINE_BREAK.split(text)

    def __len__(self) -> int:
        return len(self._lines)

    def has(self, pos: int) -> bool:
        return 0 <= pos < len(self._lines)

    def text(self, pos: int, expected: str = 'line') -> str:
        """Return the trimmed line at pos, raising TruncatedInput past the end."""
        if not self.has(pos):
            raise TruncatedInput(expected)
        return self._lines[pos].strip()
