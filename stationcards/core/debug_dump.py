"""Diagnostic dumps written in --debug mode.

Raw extracted text and the parsed records go to fixed file names in the
working directory so a run can be compared against the source PDFs.
"""

import csv

SCORE_CARDS_RAW = 'scorecards_raw.txt'
COMP_CARDS_RAW = 'compcards_raw.txt'
SCORE_CARDS_DATA = 'scorecards_data.txt'
COMP_CARDS_DATA = 'compcards_data.txt'


def write_raw_text(output_path: str, text: str):
    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(text)


def write_score_cards(output_path: str, entries):
    """Tab-separated score card records, one per line."""
    with open(output_path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f, delimiter='\t', lineterminator='\n')
        writer.writerow(['index', 'personId', 'eventName', 'group', 'stationNo'])
        for e in entries:
            writer.writerow([e.index, e.person_id, e.event_name, e.group_no,
                             e.station_no])


def write_comp_cards(output_path: str, entries):
    """Tab-separated comp card records, events joined with '|'."""
    with open(output_path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f, delimiter='\t', lineterminator='\n')
        writer.writerow(['index', 'personId', 'events'])
        for e in entries:
            writer.writerow([e.index, e.person_id, '|'.join(e.event_list)])
