"""Tests for the card text scanners and the station cross-reference."""

import logging
import os
import sys

import pytest

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from stationcards.core.models import CompCardEntry, ScoreCardEntry
from stationcards.core.score_card_parser import (
    page_break_offset, parse_score_cards
)
from stationcards.core.comp_card_parser import (
    clean_event_name, is_annotation, parse_comp_cards
)
from stationcards.core.lines import parse_int
from stationcards.core.resolver import StationLookup, resolve


def score_card(serial, event_line, person_line):
    """Lines of one score card as the extractor emits them."""
    return [str(serial), 'Station card', 'Judge', event_line,
            'Name', person_line, 'Club Aquatica', '_']


def score_text(*cards):
    lines = []
    for card in cards:
        lines.extend(score_card(*card))
    return '\n'.join(lines) + '\n'


def runs(*groups):
    """Score card text for consecutive (event line, person ids) runs."""
    cards = []
    serial = 1
    for event_line, person_ids in groups:
        for person_id in person_ids:
            cards.append((serial, event_line, f'{person_id} Swimmer {person_id}'))
            serial += 1
    return score_text(*cards)


# ─── Score cards ────────────────────────────────────────────────────

class TestScoreCardParser:
    def test_single_card(self):
        text = '12\nStation card\nJudge\n100m Freestyle A\nName\n4521 John Doe\nClub\n_\n'
        entries = parse_score_cards(text)
        assert entries == [ScoreCardEntry(index=0, person_id=4521,
                                          event_name='100m Freestyle',
                                          group_no='A', station_no=1)]

    def test_station_numbers_count_within_run(self):
        entries = parse_score_cards(runs(('100m Freestyle A', [1, 2, 3, 4])))
        assert [e.station_no for e in entries] == [1, 2, 3, 4]
        assert [e.index for e in entries] == [0, 1, 2, 3]

    def test_new_group_starts_new_page(self):
        entries = parse_score_cards(runs(
            ('100m Freestyle A', [1, 2, 3]),
            ('100m Freestyle B', [4, 5]),
        ))
        assert [e.index for e in entries] == [0, 1, 2, 4, 5]
        assert [e.station_no for e in entries] == [1, 2, 3, 1, 2]
        assert entries[3].group_no == 'B'
        assert entries[3].index % 4 == 0

    def test_new_event_same_group_starts_new_page(self):
        entries = parse_score_cards(runs(
            ('100m Freestyle A', [1]),
            ('200m Backstroke A', [1, 2]),
        ))
        assert [e.index for e in entries] == [0, 4, 5]
        assert [e.station_no for e in entries] == [1, 1, 2]

    def test_full_page_needs_no_skip(self):
        entries = parse_score_cards(runs(
            ('100m Freestyle A', [1, 2, 3, 4]),
            ('100m Freestyle B', [5]),
        ))
        assert [e.index for e in entries] == [0, 1, 2, 3, 4]

    def test_returning_to_earlier_run_resets(self):
        entries = parse_score_cards(runs(
            ('100m Freestyle A', [1, 2]),
            ('100m Freestyle B', [3]),
            ('100m Freestyle A', [4]),
        ))
        assert [e.station_no for e in entries] == [1, 2, 1, 1]
        assert [e.index for e in entries] == [0, 1, 4, 8]

    def test_run_invariants(self):
        entries = parse_score_cards(runs(
            ('50m Butterfly A', [1, 2, 3, 4, 5]),
            ('50m Butterfly B', [6, 7]),
            ('400m Medley A', [8, 9, 10]),
        ))
        indices = [e.index for e in entries]
        assert indices == sorted(set(indices))
        previous = None
        for e in entries:
            run = (e.event_name, e.group_no)
            if run != previous:
                assert e.station_no == 1
                assert e.index % 4 == 0
            else:
                assert e.station_no == last_station + 1
            previous, last_station = run, e.station_no

    def test_whitespace_runs_and_crlf(self):
        text = score_text((7, '   100m   Freestyle   A  ', '  88   Ann  Lee '))
        entries = parse_score_cards(text.replace('\n', '\r\n'))
        assert entries == [ScoreCardEntry(0, 88, '100m Freestyle', 'A', 1)]

    def test_text_before_first_anchor_is_ignored(self):
        text = 'Meet 2020\nScore cards\n' + score_text((1, '100m Freestyle A', '5 X'))
        assert [e.person_id for e in parse_score_cards(text)] == [5]

    def test_empty_text(self):
        assert parse_score_cards('') == []

    def test_malformed_event_line_stops(self, caplog):
        text = score_text(
            (1, '100m Freestyle A', '1 A'),
            (2, 'Freestyle A', '2 B'),
            (3, '100m Freestyle A', '3 C'),
        )
        with caplog.at_level(logging.WARNING):
            entries = parse_score_cards(text)
        assert [e.person_id for e in entries] == [1]
        assert 'event line' in caplog.text

    def test_malformed_person_line_stops(self, caplog):
        text = score_text(
            (1, '100m Freestyle A', '1 A'),
            (2, '100m Freestyle A', 'Jane Doe'),
        )
        with caplog.at_level(logging.WARNING):
            entries = parse_score_cards(text)
        assert [e.person_id for e in entries] == [1]
        assert 'person id' in caplog.text

    def test_truncated_card_keeps_earlier_entries(self, caplog):
        text = score_text((1, '100m Freestyle A', '1 A')) + '2\nStation card\nJudge\n100m Freestyle A\n'
        with caplog.at_level(logging.WARNING):
            entries = parse_score_cards(text)
        assert len(entries) == 1
        assert 'person line' in caplog.text

    def test_input_ends_before_event_line(self, caplog):
        with caplog.at_level(logging.WARNING):
            entries = parse_score_cards('1\nx\n')
        assert entries == []
        assert 'event line' in caplog.text

    def test_missing_sentinel_ends_input(self):
        text = '1\nStation card\nJudge\n100m Freestyle A\nName\n9 Z\n2\n3\n'
        assert [e.person_id for e in parse_score_cards(text)] == [9]


class TestPageBreakOffset:
    @pytest.mark.parametrize('index,expected', [
        (-1, 0), (0, 3), (1, 2), (2, 1), (3, 0), (4, 3), (7, 0),
    ])
    def test_offset(self, index, expected):
        assert page_break_offset(index) == expected

    @pytest.mark.parametrize('index', range(-1, 20))
    def test_next_slot_starts_page(self, index):
        assert (index + page_break_offset(index) + 1) % 4 == 0

    def test_other_page_sizes(self):
        assert page_break_offset(1, slots_per_page=6) == 4
        assert page_break_offset(5, slots_per_page=6) == 0


class TestParseInt:
    @pytest.mark.parametrize('token,expected', [
        ('12', 12), (' 7 ', 7), ('-3', -3), ('+4', 4), ('007', 7),
        ('', None), ('12a', None), ('1.5', None), ('1_000', None), ('_', None),
    ])
    def test_parse_int(self, token, expected):
        assert parse_int(token) == expected


# ─── Comp cards ─────────────────────────────────────────────────────

class TestCompCardParser:
    def test_single_card(self):
        text = 'ID 4521\n\n100m Freestyle\n200m Backstroke, 3\n\n'
        assert parse_comp_cards(text) == [
            CompCardEntry(index=0, person_id=4521,
                          event_list=('100m Freestyle', '200m Backstroke'))
        ]

    def test_cards_in_order(self):
        text = ('ID 1\nAnn Lee\n100m Freestyle 2 4\n\n'
                'ID 2\nBo Lund\n50m Butterfly, 1\n400m Medley 3\n\n')
        entries = parse_comp_cards(text)
        assert [(e.index, e.person_id) for e in entries] == [(0, 1), (1, 2)]
        assert entries[0].event_list == ('100m Freestyle',)
        assert entries[1].event_list == ('50m Butterfly', '400m Medley')

    def test_blank_line_runs_between_cards(self):
        text = 'ID 1\nx\n100m Freestyle\n\n\n\n\n  \nID 2\nx\n50m Butterfly\n'
        entries = parse_comp_cards(text)
        assert [e.person_id for e in entries] == [1, 2]
        assert entries[1].event_list == ('50m Butterfly',)

    def test_missing_blank_line_drops_overrun_and_rereads_id(self):
        text = ('ID 1\nAnn Lee\n100m Freestyle\n50m Butterfly\nBo Lund\n'
                'ID 2\nBo Lund\n400m Medley\n\n')
        entries = parse_comp_cards(text)
        assert entries == [
            CompCardEntry(0, 1, ('100m Freestyle', '50m Butterfly')),
            CompCardEntry(1, 2, ('400m Medley',)),
        ]

    def test_id_right_after_heading(self):
        text = 'ID 1\nAnn Lee\nID 2\nBo Lund\n400m Medley\n\n'
        entries = parse_comp_cards(text)
        assert entries == [
            CompCardEntry(0, 1, ()),
            CompCardEntry(1, 2, ('400m Medley',)),
        ]

    def test_duplicates_and_empty_names_kept(self):
        text = 'ID 3\nx\n100m Freestyle\n12, 4\n100m Freestyle\n\n'
        entries = parse_comp_cards(text)
        assert entries[0].event_list == ('100m Freestyle', '', '100m Freestyle')

    def test_malformed_id_stops(self, caplog):
        text = 'ID 1\nx\n100m Freestyle\n\nID abc\nx\n50m Butterfly\n\nID 3\nx\n400m Medley\n\n'
        with caplog.at_level(logging.WARNING):
            entries = parse_comp_cards(text)
        assert [e.person_id for e in entries] == [1]
        assert 'ID <person id>' in caplog.text

    def test_empty_text(self):
        assert parse_comp_cards('') == []
        assert parse_comp_cards('\n\n\n') == []


class TestCleanEventName:
    @pytest.mark.parametrize('line,expected', [
        ('100m Freestyle', '100m Freestyle'),
        ('200m Backstroke, 3', '200m Backstroke'),
        ('200m Backstroke 3, 4', '200m Backstroke'),
        ('4x50m Medley Relay 2 7', '4x50m Medley Relay'),
        ('  50m   Butterfly  ', '50m Butterfly'),
        ('3, 4', ''),
        ('', ''),
        ('Masters, Women 25+', 'Masters, Women 25+'),
        ('Relay 3,,', 'Relay'),
        ('3,, Relay', '3,, Relay'),
    ])
    def test_clean(self, line, expected):
        assert clean_event_name(line) == expected

    @pytest.mark.parametrize('line', [
        '200m Backstroke, 3', 'A , ,', 'Heat 1, Lane 4', '3,, Relay', 'x 3,,', ',',
    ])
    def test_idempotent(self, line):
        once = clean_event_name(line)
        assert clean_event_name(once) == once

    @pytest.mark.parametrize('token,expected', [
        ('3', True), ('12,', True), ('12,,', False), (',', False), ('Backstroke,', False),
    ])
    def test_single_trailing_comma(self, token, expected):
        assert is_annotation(token) is expected


# ─── Cross-reference ────────────────────────────────────────────────

SCORE_ENTRIES = [
    ScoreCardEntry(0, 10, '100m Freestyle', 'A', 1),
    ScoreCardEntry(1, 11, '100m Freestyle', 'A', 2),
    ScoreCardEntry(4, 10, '200m Backstroke', 'A', 1),
    ScoreCardEntry(8, 10, '100m Freestyle', 'B', 1),
]


class TestResolver:
    def test_resolve_per_event(self):
        comp = CompCardEntry(0, 10, ('200m Backstroke', '100m Freestyle'))
        matches = resolve(comp, SCORE_ENTRIES)
        assert [m.index for m in matches] == [4, 0]

    def test_miss_is_none(self):
        comp = CompCardEntry(0, 11, ('100m Freestyle', '200m Backstroke', ''))
        matches = resolve(comp, SCORE_ENTRIES)
        assert matches[0].station_no == 2
        assert matches[1:] == [None, None]

    def test_duplicate_prefers_lower_index(self):
        shuffled = list(reversed(SCORE_ENTRIES))
        lookup = StationLookup(shuffled)
        assert lookup.find(10, '100m Freestyle').index == 0

    def test_match_is_case_sensitive_and_whitespace_normalized(self):
        lookup = StationLookup(SCORE_ENTRIES)
        assert lookup.find(10, '100m  Freestyle ').index == 0
        assert lookup.find(10, '100M Freestyle') is None

    def test_unknown_person(self):
        comp = CompCardEntry(0, 99, ('100m Freestyle',))
        assert resolve(comp, SCORE_ENTRIES) == [None]
