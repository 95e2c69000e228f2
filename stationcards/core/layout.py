"""Overlay positions for station numbers on score cards and comp cards.

All coordinates are PDF user space: origin at the bottom-left corner of the
page, y growing upwards. The stamper converts to PyMuPDF's top-left space.
"""

from dataclasses import dataclass
from enum import Enum

import fitz  # PyMuPDF

from .models import CompCardGrid

# --- Score cards (2 x 2 cards per page) ---
SCORE_CARD_ROWS = 2
SCORE_CARD_COLUMNS = 2
SCORE_CARD_RIGHT_INSET = 25     # stamp right edge, from the card's right edge
SCORE_CARD_TOP_INSET = 30       # stamp baseline, from the card's top edge
SCORE_CARD_FONT_SIZE = 11

# --- Comp cards (rows x columns per page) ---
COMP_CARD_BASE_X = 17.5         # card left edge to the event label column
COMP_CARD_COLUMN_TRIM = 3.5     # subtracted from page_width / columns
COMP_CARD_ROW_TRIM = 38.5       # subtracted from page_height / rows
COMP_CARD_EVENT_LINE_HEIGHT = 12.4
COMP_CARD_FONT_SIZE = 5
DEFAULT_TOP_MARGIN = 55

# Size the external system prints comp card event labels at
EVENT_LABEL_FONT_SIZE = 7.75

FONT = 'Helvetica'


class Alignment(Enum):
    LEFT = 'left'
    RIGHT = 'right'


@dataclass(frozen=True)
class Anchor:
    """Where a stamp goes: x is the left or right edge, y the baseline."""
    x: float
    y: float
    alignment: Alignment


def score_card_anchor(page_width: float, page_height: float, slot: int,
                      rows: int = SCORE_CARD_ROWS,
                      columns: int = SCORE_CARD_COLUMNS) -> Anchor:
    """Top-right corner of score card `slot` on its page."""
    row, column = divmod(slot, columns)
    x = page_width - SCORE_CARD_RIGHT_INSET
    x -= (page_width / columns) * (columns - 1 - column)
    y = page_height - SCORE_CARD_TOP_INSET
    y -= (page_height / rows) * row
    return Anchor(x, y, Alignment.RIGHT)


def comp_card_anchor(page_width: float, page_height: float, slot: int,
                     grid: CompCardGrid) -> Anchor:
    """Anchor of the first event line of comp card `slot` on its page.

    grid must have both margins set; see resolve_margins().
    """
    row, column = divmod(slot, grid.columns)
    column_step = page_width / grid.columns - COMP_CARD_COLUMN_TRIM
    row_step = page_height / grid.rows - COMP_CARD_ROW_TRIM
    x = COMP_CARD_BASE_X + grid.left_margin + column_step * column
    y = page_height - grid.top_margin - row_step * row
    return Anchor(x, y, Alignment.LEFT)


def comp_card_event_anchor(card: Anchor, position: int) -> Anchor:
    """Anchor of the event at `position` in a comp card's event list."""
    return Anchor(card.x, card.y - COMP_CARD_EVENT_LINE_HEIGHT * position,
                  card.alignment)


def text_width(text: str, fontsize: float) -> float:
    return fitz.get_text_length(text, fontname=FONT, fontsize=fontsize)


def auto_left_margin(event_names) -> float:
    """Widest event label, so stamps clear the printed event names."""
    widths = [text_width(name, EVENT_LABEL_FONT_SIZE) for name in set(event_names)]
    return max(widths, default=0.0)


def resolve_margins(grid: CompCardGrid, event_names) -> CompCardGrid:
    """Return a copy of grid with missing margins filled in."""
    left = grid.left_margin
    if left is None:
        left = auto_left_margin(event_names)
    top = grid.top_margin
    if top is None:
        top = DEFAULT_TOP_MARGIN
    return CompCardGrid(rows=grid.rows, columns=grid.columns,
                        left_margin=left, top_margin=top)
