"""Parse anomalies raised by the card text scanners.

The scanners raise these from their sub-scans; the public parse functions
catch them, log, and hand back whatever entries were complete.
"""


class CardParseError(Exception):
    """Base class for anything that stops a card parser."""


class TruncatedInput(CardParseError):
    """Input ended before the expected line was reached."""

    def __init__(self, expected: str):
        super().__init__(f"input ended before {expected}")
        self.expected = expected


class MalformedLine(CardParseError):
    """A line did not have the shape its position requires."""

    def __init__(self, line_no: int, line: str, reason: str):
        super().__init__(f"line {line_no + 1}: {reason}: {line!r}")
        self.line_no = line_no
        self.line = line
        self.reason = reason
