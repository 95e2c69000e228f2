"""Data models for the station card stamping tool."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ScoreCardEntry:
    """One person's score card for one event/group run."""
    index: int                # physical slot in the score card document
    person_id: int
    event_name: str           # "100m Freestyle"
    group_no: str             # "A"
    station_no: int           # 1-based position within the event/group run


@dataclass(frozen=True)
class CompCardEntry:
    """One person's comp card listing every event they are entered in."""
    index: int                # physical slot in the comp card document
    person_id: int
    event_list: tuple[str, ...] = ()  # event names in printed order, duplicates kept


@dataclass
class CompCardGrid:
    """Comp card sheet geometry. Margins left as None are computed."""
    rows: int = 4
    columns: int = 3
    left_margin: float | None = None
    top_margin: float | None = None

    @property
    def slots_per_page(self) -> int:
        return self.rows * self.columns


@dataclass
class CardsConfig:
    """Configuration for a single stamping run."""
    score_card_path: str
    comp_card_path: str
    score_card_output: str
    comp_card_output: str
    grid: CompCardGrid = field(default_factory=CompCardGrid)
    debug: bool = False       # write raw text and parsed records next to the run
