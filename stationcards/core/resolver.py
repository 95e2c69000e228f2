"""Cross-reference comp card events to score card stations."""

import logging

from .models import CompCardEntry, ScoreCardEntry

logger = logging.getLogger(__name__)


def _event_key(event_name: str) -> str:
    return ' '.join(event_name.split())


class StationLookup:
    """(person_id, event_name) -> first score card entry in document order."""

    def __init__(self, score_entries: list[ScoreCardEntry]):
        self._entries = {}
        for entry in sorted(score_entries, key=lambda e: e.index):
            key = (entry.person_id, _event_key(entry.event_name))
            self._entries.setdefault(key, entry)

    def find(self, person_id: int, event_name: str) -> ScoreCardEntry | None:
        return self._entries.get((person_id, _event_key(event_name)))

    def resolve(self, comp_entry: CompCardEntry) -> list[ScoreCardEntry | None]:
        """One score card entry (or None) per event on the comp card."""
        matches = []
        for event_name in comp_entry.event_list:
            match = self.find(comp_entry.person_id, event_name)
            if match is None:
                logger.debug("No score card for person %d in %r",
                             comp_entry.person_id, event_name)
            matches.append(match)
        return matches


def resolve(comp_entry: CompCardEntry,
            score_entries: list[ScoreCardEntry]) -> list[ScoreCardEntry | None]:
    """Resolve a single comp card against the score cards."""
    return StationLookup(score_entries).resolve(comp_entry)
