"""
Label scanning primitives shared by every extractor.

Grid side: a RawGrid is a sequence of rows, each row a sequence of optional
cell values (str, int, float or None). Rows may be ragged. Nothing here
mutates the grid or raises on short rows.

Text side: PDF text is handled as a list of trimmed, non-empty lines.
"""
from __future__ import annotations

import math
from typing import Any, Iterable, List, Optional, Sequence

Grid = Sequence[Sequence[Any]]

PLACEHOLDERS = frozenset({'', 'N/A', 'NA', 'TBA', 'TBD', 'NONE'})

# Generic label words for text documents (containment test)
LINE_LABEL_WORDS = (
    'NAME', 'ADDRESS', 'PHONE', 'EMAIL', 'POSITION', 'DEPARTMENT',
    'EDUCATION', 'EXPERIENCE', 'SKILLS', 'DATE', 'PLACE', 'SEX',
    'CITIZENSHIP', 'STATUS', 'RELIGION',
)

RIGHT_SPAN = 5


def cell_text(value: Any) -> str:
    """Coerce a raw cell to trimmed text; None and NaN become ''."""
    if value is None:
        return ''
    if isinstance(value, float):
        if math.isnan(value):
            return ''
        if value.is_integer():
            return str(int(value))
    return str(value).strip()


def cell_at(grid: Grid, row: int, col: int) -> str:
    if row < 0 or col < 0 or row >= len(grid):
        return ''
    cells = grid[row]
    if cells is None or col >= len(cells):
        return ''
    return cell_text(cells[col])


def row_width(grid: Grid, row: int) -> int:
    if row < 0 or row >= len(grid) or grid[row] is None:
        return 0
    return len(grid[row])


def row_is_blank(grid: Grid, row: int) -> bool:
    return all(not cell_at(grid, row, j) for j in range(row_width(grid, row)))


def is_placeholder(text: str) -> bool:
    return text.strip().upper() in PLACEHOLDERS


def normalize_label(label: str) -> str:
    return label.strip().upper().rstrip(':').strip()


def matches_label(upper: str, label: str) -> bool:
    """
    Boundary-aware label test on already upper-cased text.

    'SURNAME' matches 'SURNAME', 'SURNAME:' and 'SURNAME (LAST)' but not
    'SURNAMES' or 'APPLICANT SURNAME'.
    """
    label = normalize_label(label)
    if not label:
        return False
    upper = upper.strip()
    return (upper == label
            or upper.startswith(label + ':')
            or upper.startswith(label + ' '))


def matches_any(upper: str, labels: Iterable[str]) -> bool:
    return any(matches_label(upper, label) for label in labels)


def looks_like_label(text: str, lexicon: Iterable[str] = ()) -> bool:
    """
    Lexicon membership test for a neighbouring cell.

    True when the cell ends with ':', is exactly a lexicon label, or starts
    with 'LABEL:'. A value such as 'Office of the Registrar' is not a label
    even though 'OFFICE' is one.
    """
    upper = text.strip().upper()
    if not upper:
        return False
    if upper.endswith(':'):
        return True
    labels = {normalize_label(label) for label in lexicon}
    if normalize_label(upper) in labels:
        return True
    head = upper.split(':', 1)[0].strip() if ':' in upper else ''
    return bool(head) and head in labels


def next_value_right(grid: Grid, row: int, col: int, span: int = 3,
                     min_length: int = 1, reject_numeric: bool = False) -> str:
    """First non-placeholder cell among the `span` cells right of (row, col)."""
    for k in range(col + 1, col + 1 + span):
        value = cell_at(grid, row, k)
        if not value or is_placeholder(value):
            continue
        if len(value) < min_length:
            continue
        if reject_numeric and value.isdigit():
            continue
        return value
    return ''


def resolve_value(grid: Grid, row: int, col: int, lexicon: Iterable[str] = ()) -> str:
    """
    Resolve the value that belongs to the label cell at (row, col).

    Order: text after the first ':' in the same cell, then the next
    RIGHT_SPAN cells to the right (blanks and placeholders skipped, another
    label stops the search), then the cell directly below.
    """
    lexicon = tuple(lexicon)
    text = cell_at(grid, row, col)

    if ':' in text:
        after = text.split(':', 1)[1].strip()
        if after and not is_placeholder(after):
            return after

    for k in range(col + 1, col + 1 + RIGHT_SPAN):
        value = cell_at(grid, row, k)
        if not value or is_placeholder(value):
            continue
        if looks_like_label(value, lexicon):
            break
        return value

    below = cell_at(grid, row + 1, col)
    if below and not is_placeholder(below) and not looks_like_label(below, lexicon):
        return below

    return ''


def find_labeled_value(grid: Grid, labels: Sequence[str], max_rows: int = 100,
                       max_cols: int = 10, lexicon: Optional[Iterable[str]] = None) -> str:
    """
    Scan the top-left window of the grid for any of `labels` and return its value.

    A label whose value cannot be resolved does not stop the scan; the next
    occurrence is tried. Returns '' when nothing resolves.
    """
    lexicon = tuple(lexicon) if lexicon is not None else tuple(labels)
    for i in range(min(max_rows, len(grid))):
        for j in range(min(max_cols, row_width(grid, i))):
            upper = cell_at(grid, i, j).upper()
            if not upper or not matches_any(upper, labels):
                continue
            value = resolve_value(grid, i, j, lexicon)
            if value:
                return value
    return ''


# ---------------------------------------------------------------- text side

def split_lines(text: str) -> List[str]:
    if not text:
        return []
    text = text.replace('\r\n', '\n').replace('\r', '\n')
    return [line.strip() for line in text.split('\n') if line.strip()]


def contains_label_word(line: str, words: Iterable[str] = LINE_LABEL_WORDS) -> bool:
    upper = line.upper()
    return any(word in upper for word in words)


def value_from_line(lines: Sequence[str], index: int,
                    words: Iterable[str] = LINE_LABEL_WORDS) -> str:
    """Value after the first ':' of lines[index], else the next line unless it is a label."""
    line = lines[index]
    colon = line.find(':')
    if -1 < colon < len(line) - 1:
        value = line[colon + 1:].strip()
        if value:
            return value

    if index + 1 < len(lines):
        next_line = lines[index + 1]
        if not contains_label_word(next_line, words):
            return next_line

    return ''
