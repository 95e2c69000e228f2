"""Scanner for the text extracted from a comp card PDF.

A comp card block is an "ID <person id>" line, one more heading line, then
one line per event the person is entered in, closed by a blank line. Event
lines carry heat/lane style numbers that are not part of the event name.
"""

import logging

from .errors import CardParseError, MalformedLine
from .lines import Lines, parse_int
from .models import CompCardEntry

logger = logging.getLogger(__name__)

ID_MARKER = 'ID'
EVENT_LINES_OFFSET = 2    # id line -> first event line


def is_annotation(token: str) -> bool:
    """True for numeric tokens such as "3" or "12," printed beside an event."""
    if token.endswith(','):
        token = token[:-1]
    return parse_int(token) is not None


def _drop_annotations(name: str) -> str:
    kept = [token for token in name.split() if not is_annotation(token)]
    return ' '.join(kept).rstrip(', ')


def clean_event_name(line: str) -> str:
    """Drop numeric annotations from an event line.

    "200m Backstroke, 3" -> "200m Backstroke". The result may be empty.
    Trimming the trailing separator can expose another annotation ("x 3,,"),
    so the cleanup repeats until nothing changes.
    """
    name = _drop_annotations(line)
    while True:
        cleaned = _drop_annotations(name)
        if cleaned == name:
            return name
        name = cleaned


def find_id_line(lines: Lines, pos: int) -> tuple[int, int] | None:
    """Return (position, person_id) of the next ID line after pos, or None."""
    pos += 1
    while lines.has(pos):
        line = lines.text(pos)
        if line.startswith(ID_MARKER):
            tokens = line.split()
            person_id = parse_int(tokens[1]) if len(tokens) > 1 else None
            if person_id is None:
                raise MalformedLine(pos, line, 'expected "ID <person id>"')
            return pos, person_id
        pos += 1
    return None


def read_event_lines(lines: Lines, id_pos: int) -> tuple[int, list[str]]:
    """Collect the cleaned event names of the block opened at id_pos.

    Returns (position, events). The position is the blank line closing the
    block, or the line before the next ID line when the block had no
    closing blank line. In that case the last collected line belonged to
    the next card's heading and is dropped.
    """
    pos = id_pos + EVENT_LINES_OFFSET
    events = []
    while lines.has(pos):
        line = lines.text(pos)
        if not line:
            break
        if line.startswith(ID_MARKER):
            if events:
                events.pop()
            pos -= 1
            break
        events.append(clean_event_name(line))
        pos += 1
    return pos, events


def parse_comp_cards(text: str) -> list[CompCardEntry]:
    """Parse comp card text into entries in document order.

    Never raises on malformed text: the first anomaly is logged and the
    entries completed before it are returned.
    """
    lines = Lines(text)
    entries = []
    index = -1
    pos = -1

    try:
        while True:
            found = find_id_line(lines, pos)
            if found is None:
                break
            id_pos, person_id = found

            pos, events = read_event_lines(lines, id_pos)

            index += 1
            entries.append(CompCardEntry(
                index=index,
                person_id=person_id,
                event_list=tuple(events),
            ))
    except CardParseError as e:
        logger.warning("Comp card parsing stopped after %d entries: %s",
                       len(entries), e)

    logger.debug("Parsed %d comp cards", len(entries))
    return entries
