#!/usr/bin/env python3
"""CLI entry point for stamping station numbers onto score and comp cards.

Usage:
    python stamp_cards.py scorecards.pdf compcards.pdf \\
        --rows 4 --columns 3 --top-margin 55 \\
        --score-output scorecards_out.pdf --comp-output compcards_out.pdf
"""

import argparse
import logging
import os
import sys

# Add parent directory to path for imports (skip when frozen by PyInstaller)
if not getattr(sys, 'frozen', False):
    sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from stationcards.core.models import CardsConfig, CompCardGrid
from stationcards.core.score_card_parser import parse_score_cards
from stationcards.core.comp_card_parser import parse_comp_cards
from stationcards.core.layout import DEFAULT_TOP_MARGIN, resolve_margins
from stationcards.core import debug_dump
from stationcards.adapters.pdf_text import pdf_to_text
from stationcards.adapters.pdf_stamper import CompCardStamper, ScoreCardStamper

APP_VERSION = '0.2.0'
OUTPUT_SUFFIX = '_out.pdf'


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value!r}")
    return number


def default_output_path(input_path: str) -> str:
    """scorecards.pdf -> scorecards_out.pdf"""
    return os.path.splitext(input_path)[0] + OUTPUT_SUFFIX


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='stamp-cards',
        description='Stamp cross-referenced station numbers onto score cards and comp cards')
    parser.add_argument('score_card_pdf', help='PDF file with score cards')
    parser.add_argument('comp_card_pdf', help='PDF file with comp cards')
    parser.add_argument('--rows', type=_positive_int, default=4,
                        help='Comp card rows per page (default 4)')
    parser.add_argument('--columns', type=_positive_int, default=3,
                        help='Comp card columns per page (default 3)')
    parser.add_argument('--left-margin', type=float, default=None,
                        help='Comp card left margin (default: widest event name)')
    parser.add_argument('--top-margin', type=float, default=None,
                        help=f'Comp card top margin (default {DEFAULT_TOP_MARGIN})')
    parser.add_argument('--score-output', default=None,
                        help='Score card output file (default: <input>_out.pdf)')
    parser.add_argument('--comp-output', default=None,
                        help='Comp card output file (default: <input>_out.pdf)')
    parser.add_argument('--debug', action='store_true',
                        help='Write extracted text and parsed records to the working directory')
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level (default WARNING)')
    parser.add_argument('--version', action='version',
                        version=f'%(prog)s {APP_VERSION}')
    return parser


def build_config(args) -> CardsConfig:
    return CardsConfig(
        score_card_path=args.score_card_pdf,
        comp_card_path=args.comp_card_pdf,
        score_card_output=args.score_output or default_output_path(args.score_card_pdf),
        comp_card_output=args.comp_output or default_output_path(args.comp_card_pdf),
        grid=CompCardGrid(rows=args.rows, columns=args.columns,
                          left_margin=args.left_margin, top_margin=args.top_margin),
        debug=args.debug,
    )


def run(config: CardsConfig):
    """Extract, parse, cross-reference and stamp both documents."""
    print(f"Reading {config.score_card_path}...")
    score_text = pdf_to_text(config.score_card_path)
    print(f"Reading {config.comp_card_path}...")
    comp_text = pdf_to_text(config.comp_card_path)

    score_entries = parse_score_cards(score_text)
    print(f"Parsed {len(score_entries)} score cards")
    comp_entries = parse_comp_cards(comp_text)
    print(f"Parsed {len(comp_entries)} comp cards")

    if config.debug:
        debug_dump.write_raw_text(debug_dump.SCORE_CARDS_RAW, score_text)
        debug_dump.write_raw_text(debug_dump.COMP_CARDS_RAW, comp_text)
        debug_dump.write_score_cards(debug_dump.SCORE_CARDS_DATA, score_entries)
        debug_dump.write_comp_cards(debug_dump.COMP_CARDS_DATA, comp_entries)

    ScoreCardStamper(score_entries).stamp(config.score_card_path,
                                          config.score_card_output)
    print(f"Generated {config.score_card_output}")

    grid = resolve_margins(config.grid, (e.event_name for e in score_entries))
    print(f"Comp card margins: left {grid.left_margin:.2f}, top {grid.top_margin:.2f}")
    CompCardStamper(comp_entries, score_entries, grid).stamp(config.comp_card_path,
                                                             config.comp_card_output)
    print(f"Generated {config.comp_card_output}")


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level),
                        format='%(levelname)s %(name)s: %(message)s')

    print(f"Station Cards - version {APP_VERSION}")
    print()

    for path in (args.score_card_pdf, args.comp_card_pdf):
        if not os.path.isfile(path):
            print(f"File not found: {path}")
            sys.exit(1)

    run(build_config(args))

    print("\nFinished!")


if __name__ == '__main__':
    main()
