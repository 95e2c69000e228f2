"""Stampers for the two card documents."""

import logging

from .base import BaseStamper, draw_text
from ..core.layout import (
    COMP_CARD_FONT_SIZE, SCORE_CARD_COLUMNS, SCORE_CARD_FONT_SIZE, SCORE_CARD_ROWS,
    comp_card_anchor, comp_card_event_anchor, resolve_margins, score_card_anchor,
)
from ..core.models import CompCardEntry, CompCardGrid, ScoreCardEntry
from ..core.resolver import StationLookup

logger = logging.getLogger(__name__)


def station_label(entry: ScoreCardEntry) -> str:
    return f'S{entry.station_no}'


class ScoreCardStamper(BaseStamper):
    """Stamp each score card with its own station number, top right."""

    slots_per_page = SCORE_CARD_ROWS * SCORE_CARD_COLUMNS

    def __init__(self, entries: list[ScoreCardEntry]):
        self.by_index = {e.index: e for e in entries}

    def _stamp_page(self, page, first_slot: int):
        width, height = page.mediabox.width, page.mediabox.height
        for slot in range(self.slots_per_page):
            entry = self.by_index.get(first_slot + slot)
            if entry is None:
                continue
            anchor = score_card_anchor(width, height, slot)
            draw_text(page, anchor, station_label(entry), SCORE_CARD_FONT_SIZE)


class CompCardStamper(BaseStamper):
    """Stamp the station number next to every event on each comp card.

    Args:
        entries: Parsed comp cards.
        score_entries: Parsed score cards, the source of station numbers.
        grid: Sheet geometry. Missing margins are filled in from the score
            card event names.
    """

    def __init__(self, entries: list[CompCardEntry],
                 score_entries: list[ScoreCardEntry], grid: CompCardGrid):
        self.by_index = {e.index: e for e in entries}
        self.lookup = StationLookup(score_entries)
        self.grid = resolve_margins(grid, (e.event_name for e in score_entries))
        self.slots_per_page = self.grid.slots_per_page

    def _stamp_page(self, page, first_slot: int):
        width, height = page.mediabox.width, page.mediabox.height
        for slot in range(self.slots_per_page):
            entry = self.by_index.get(first_slot + slot)
            if entry is None:
                continue
            card = comp_card_anchor(width, height, slot, self.grid)
            for position, match in enumerate(self.lookup.resolve(entry)):
                if match is None:
                    continue
                anchor = comp_card_event_anchor(card, position)
                draw_text(page, anchor, station_label(match), COMP_CARD_FONT_SIZE)
