"""Scanner for the text extracted from a score card PDF.

Each score card prints, in extraction order:

    <serial id>            anchor line, a bare integer
    ...                    two lines of heading
    <event name> <group>   event line
    ...                    one line
    <person id> <name>     person line
    ...
    _                      sentinel closing the card

Score cards are printed 4 to a page and every event/group run starts on a
fresh page, so the slot index skips the unused slots left on the last page
of the previous run.
"""

import logging

from .errors import CardParseError, MalformedLine
from .lines import Lines, parse_int
from .models import ScoreCardEntry

logger = logging.getLogger(__name__)

SCORE_CARDS_PER_PAGE = 4
EVENT_LINE_OFFSET = 3     # anchor -> event line
PERSON_LINE_OFFSET = 2    # event line -> person line
SENTINEL = '_'


def find_anchor(lines: Lines, pos: int) -> int | None:
    """Return the position of the next serial id line after pos, or None."""
    pos += 1
    while lines.has(pos):
        if parse_int(lines.text(pos)) is not None:
            return pos
        pos += 1
    return None


def read_event_line(lines: Lines, anchor: int) -> tuple[int, str, str]:
    """Read the event line belonging to an anchor.

    Returns (position, event_name, group_no). The group is the last token,
    the event name everything before it.
    """
    pos = anchor + EVENT_LINE_OFFSET
    line = lines.text(pos, 'event line')
    tokens = line.split()
    if len(tokens) < 3:
        raise MalformedLine(pos, line, 'event line needs an event name and a group')
    return pos, ' '.join(tokens[:-1]), tokens[-1]


def read_person_line(lines: Lines, event_pos: int) -> tuple[int, int]:
    """Read the person line below an event line. Returns (position, person_id)."""
    pos = event_pos + PERSON_LINE_OFFSET
    line = lines.text(pos, 'person line')
    tokens = line.split()
    person_id = parse_int(tokens[0]) if tokens else None
    if person_id is None:
        raise MalformedLine(pos, line, 'person line must start with a person id')
    return pos, person_id


def skip_to_sentinel(lines: Lines, pos: int) -> int:
    """Return the position of the next sentinel after pos, or len(lines)."""
    pos += 1
    while lines.has(pos) and lines.text(pos) != SENTINEL:
        pos += 1
    return pos


def page_break_offset(index: int, slots_per_page: int = SCORE_CARDS_PER_PAGE) -> int:
    """Number of slots to skip so the slot after index starts a new page."""
    remainder = (index + 1) % slots_per_page
    if remainder == 0:
        return 0
    return slots_per_page - remainder


def parse_score_cards(text: str,
                      slots_per_page: int = SCORE_CARDS_PER_PAGE) -> list[ScoreCardEntry]:
    """Parse score card text into entries in document order.

    Never raises on malformed text: the first anomaly is logged and the
    entries completed before it are returned.
    """
    lines = Lines(text)
    entries = []
    index = -1
    station_no = 0
    current_run = None
    pos = -1

    try:
        while True:
            anchor = find_anchor(lines, pos)
            if anchor is None:
                break

            pos, event_name, group_no = read_event_line(lines, anchor)
            if (event_name, group_no) != current_run:
                station_no = 0
                index += page_break_offset(index, slots_per_page)
                current_run = (event_name, group_no)

            pos, person_id = read_person_line(lines, pos)

            station_no += 1
            index += 1
            entries.append(ScoreCardEntry(
                index=index,
                person_id=person_id,
                event_name=event_name,
                group_no=group_no,
                station_no=station_no,
            ))

            pos = skip_to_sentinel(lines, pos)
    except CardParseError as e:
        logger.warning("Score card parsing stopped after %d entries: %s",
                       len(entries), e)

    logger.debug("Parsed %d score cards", len(entries))
    return entries
