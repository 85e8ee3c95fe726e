"""
Certificate of Registration (COR) sheets: program block plus class schedule.

COR layouts differ per registrar export, so nothing is positional: the
program block is found by keyword patterns, the schedule by its header row
(or by the first subject-code-looking row when the header is missing).
"""
from __future__ import annotations

import re
from pathlib import PurePath
from typing import Any, Dict, List, Optional

from ..log import get_logger
from .scanner import Grid, cell_at, row_is_blank, row_width
from .taxonomy import course_from_filename, department_from_program

logger = get_logger(__name__)

PROGRAM_INFO_ROWS = 30
PROGRAM_INFO_COLS = 15
HEADER_KEYWORDS = ('SUBJECT', 'CODE', 'DESCRIPTION', 'UNITS', 'DAY', 'TIME', 'ROOM')
HEADER_MIN_KEYWORDS = 4
HEADER_TEXT_COLS = 10
END_KEYWORDS = ('TOTAL', 'GENERATED', 'PRINTED', 'PAGE', 'END')

SUBJECT_CODE_RE = re.compile(r'^[A-Z]{2,4}\s*\d{3}[A-Z]?')
_SUBJECT_CODE_CELL_RE = re.compile(r'^[A-Z]{2,4}\s*\d{3}[A-Z]?$')
_YEAR_VALUE_RE = re.compile(r'^([1-4])(?:ST|ND|RD|TH)?(?:\s*(?:YEAR|YR))?$')
_NUMBER_RE = re.compile(r'^\d+(\.\d+)?$')
_TIME_RANGE_SPLIT = re.compile(r'\s*(?:-|–|\bto\b)\s*', re.IGNORECASE)

PROGRAM_FIELDS = ('Program', 'Year Level', 'Section', 'Adviser')

# (pattern, group); group 0 keeps the whole match. Anchored at the start of
# the cell so 'ACADEMIC YEAR 2024' does not read as a year level.
SEARCH_PATTERNS = {
    'Program': (
        (re.compile(r'^PROGRAM\s*[:\-]?\s*(.+)'), 1),
        (re.compile(r'^COURSE\s*[:\-]?\s*(.+)'), 1),
        (re.compile(r'^DEGREE\s*[:\-]?\s*(.+)'), 1),
        (re.compile(r'^(BS[A-Z]{2,4}|AB[A-Z]{2,4})$'), 0),
    ),
    'Year Level': (
        (re.compile(r'^YEAR\s*LEVEL\s*[:\-]?\s*(.+)'), 1),
        (re.compile(r'^YEAR\s*[:\-]?\s*(.+)'), 1),
        (re.compile(r'^LEVEL\s*[:\-]?\s*(.+)'), 1),
        (re.compile(r'^([1-4])(?:ST|ND|RD|TH)?\s*YEAR$'), 1),
        (re.compile(r'^([1-4])$'), 0),
    ),
    'Section': (
        (re.compile(r'^SECTION\s*[:\-]?\s*(.+)'), 1),
        (re.compile(r'^SEC\s*[:\-]?\s*(.+)'), 1),
        (re.compile(r'^CLASS\s*[:\-]?\s*(.+)'), 1),
        (re.compile(r'^([A-Z])$'), 0),
    ),
    'Adviser': (
        (re.compile(r'^ADVISER\s*[:\-]?\s*(.+)'), 1),
        (re.compile(r'^ADVISOR\s*[:\-]?\s*(.+)'), 1),
        (re.compile(r'^FACULTY\s*ADVISER\s*[:\-]?\s*(.+)'), 1),
        (re.compile(r'^INSTRUCTOR\s*[:\-]?\s*(.+)'), 1),
    ),
}

ADJACENT_KEYWORDS = {
    'Program': ('PROGRAM', 'COURSE', 'DEGREE'),
    'Year Level': ('YEAR', 'LEVEL'),
    'Section': ('SECTION', 'SEC', 'CLASS'),
    'Adviser': ('ADVISER', 'ADVISOR', 'FACULTY', 'INSTRUCTOR'),
}

# right, below, diagonal, two right, two below
ADJACENT_OFFSETS = ((0, 1), (1, 0), (1, 1), (0, 2), (2, 0))

# Fixed layouts tried in order when the schedule has no header row
COLUMN_ARRANGEMENTS = (
    {'Subject Code': 0, 'Description': 1, 'Type': 2, 'Units': 3, 'Day': 4,
     'Time Start': 5, 'Time End': 6, 'Room': 7},
    {'Subject Code': 0, 'Description': 1, 'Units': 2, 'Day': 3,
     'Time Start': 4, 'Time End': 5, 'Room': 6},
    {'Subject Code': 0, 'Description': 1, 'Type': 2, 'Units': 3, 'Day': 4, 'Time': 5, 'Room': 6},
    {'Subject Code': 0, 'Description': 1, 'Units': 2, 'Day': 3, 'Time': 4, 'Room': 5},
)


def clean_program_info_value(value: str, field: str) -> Optional[str]:
    if not value or not value.strip():
        return None
    value = value.strip()

    if field == 'Program':
        upper = value.upper()
        cleaned = re.sub(r'^(PROGRAM|COURSE|DEGREE)[:\s]*', '', upper)
        cleaned = re.sub(r'\s*(PROGRAM|COURSE|DEGREE)$', '', cleaned)
        cleaned = ' '.join(cleaned.split())
        if 2 <= len(cleaned) <= 50 and re.search(r'[A-Z]', cleaned):
            return cleaned
        return None

    if field == 'Year Level':
        match = _YEAR_VALUE_RE.match(value.upper())
        return match.group(1) if match else None

    if field == 'Section':
        upper = value.upper()
        cleaned = re.sub(r'^(SECTION|SEC)[:\s]*', '', upper)
        match = re.match(r'^([A-Z][0-9]?|[0-9][A-Z]?)$', cleaned)
        if match:
            return match.group(1)
        if 1 <= len(cleaned) <= 2 and cleaned.isalnum():
            return cleaned
        if len(value) <= 3:
            return re.sub(r'[^A-Z0-9]', '', upper) or None
        return None

    if field == 'Adviser':
        if len(value) > 3 and not any(ch.isdigit() for ch in value):
            return value.title()
        return None

    return value


def split_time_range(value: str):
    """'8:00 AM - 9:30 AM' -> ('8:00 AM', '9:30 AM'); no range -> (value, value)"""
    parts = _TIME_RANGE_SPLIT.split(value.strip(), maxsplit=1)
    if len(parts) == 2 and parts[0] and parts[1]:
        return parts[0].strip(), parts[1].strip()
    return value, value


def header_column(upper: str) -> Optional[str]:
    """COR subject key for one header cell"""
    if 'CODE' in upper:
        return 'Subject Code'
    if 'DESCRIPTION' in upper or 'TITLE' in upper:
        return 'Description'
    if 'TYPE' in upper:
        return 'Type'
    if 'UNIT' in upper:
        return 'Units'
    if 'DAY' in upper:
        return 'Day'
    if 'TIME' in upper:
        if 'START' in upper or 'FROM' in upper:
            return 'Time Start'
        if 'END' in upper or upper.endswith(' TO'):
            return 'Time End'
        return 'Time'
    if 'ROOM' in upper:
        return 'Room'
    if 'SUBJECT' in upper:
        return 'Subject'
    return None


class CORExtractor:
    data_type = 'cor_schedule'

    def extract(self, grid: Grid, source_file: str = '') -> Optional[Dict[str, Any]]:
        header_row = self.find_schedule_header(grid)
        program_info = self.scan_program_info(grid, source_file, header_row)
        if not program_info['Program']:
            logger.warning(f"⚠️ No program found in COR {source_file or 'sheet'}")
            return None

        schedule = self.scan_schedule(grid, header_row)
        total_units = self.scan_total_units(grid)
        department = department_from_program(program_info['Program'])

        logger.info(f"📋 COR {program_info['Program']}: {len(schedule)} subjects, "
                    f"{total_units or 'N/A'} units")

        cor_data = {
            'program_info': program_info,
            'schedule': schedule,
            'total_units': total_units,
        }
        return {
            'metadata': {
                'program': program_info['Program'],
                'year_level': program_info['Year Level'],
                'section': program_info['Section'],
                'adviser': program_info['Adviser'],
                'department': department,
                'total_units': total_units,
                'subject_count': len(schedule),
                'data_type': self.data_type,
                'source_file': PurePath(source_file).name if source_file else '',
            },
            'cor_data': cor_data,
            'formatted_text': self.format_cor(cor_data),
        }

    # ------------------------------------------------------------ program block

    def scan_program_info(self, grid: Grid, source_file: str = '',
                          header_row: int = -1) -> Dict[str, str]:
        """Program / Year Level / Section / Adviser from the block above the schedule"""
        program_info = {field: '' for field in PROGRAM_FIELDS}
        last_row = PROGRAM_INFO_ROWS if header_row == -1 else min(PROGRAM_INFO_ROWS, header_row)

        for i in range(min(last_row, len(grid))):
            for j in range(min(PROGRAM_INFO_COLS, row_width(grid, i))):
                upper = cell_at(grid, i, j).upper()
                if not upper:
                    continue

                for field, patterns in SEARCH_PATTERNS.items():
                    if program_info[field]:
                        continue
                    for pattern, group in patterns:
                        match = pattern.search(upper)
                        if not match:
                            continue
                        cleaned = clean_program_info_value(match.group(group).strip(), field)
                        if cleaned:
                            program_info[field] = cleaned
                            break

                if not all(program_info.values()):
                    self.check_adjacent_cells(grid, i, j, upper, program_info)

        if not program_info['Program']:
            program_info['Program'] = course_from_filename(source_file) or ''

        return program_info

    def check_adjacent_cells(self, grid: Grid, row: int, col: int, upper: str,
                             program_info: Dict[str, str]) -> None:
        for field, keywords in ADJACENT_KEYWORDS.items():
            if program_info[field] or not any(keyword in upper for keyword in keywords):
                continue
            for dr, dc in ADJACENT_OFFSETS:
                cleaned = clean_program_info_value(cell_at(grid, row + dr, col + dc), field)
                if cleaned:
                    program_info[field] = cleaned
                    break

    # ------------------------------------------------------------ schedule

    def find_schedule_header(self, grid: Grid) -> int:
        for i in range(len(grid)):
            row_text = ' '.join(cell_at(grid, i, j) for j in range(min(HEADER_TEXT_COLS, row_width(grid, i))))
            row_text = row_text.upper()
            if sum(1 for keyword in HEADER_KEYWORDS if keyword in row_text) >= HEADER_MIN_KEYWORDS:
                return i
        return -1

    def map_header_columns(self, grid: Grid, header_row: int) -> Dict[str, int]:
        columns: Dict[str, int] = {}
        for j in range(row_width(grid, header_row)):
            key = header_column(cell_at(grid, header_row, j).upper())
            if key and key not in columns:
                columns[key] = j

        # a bare SUBJECT column is the code column unless CODE exists
        subject_col = columns.pop('Subject', None)
        if subject_col is not None:
            if 'Subject Code' not in columns:
                columns['Subject Code'] = subject_col
            elif 'Description' not in columns:
                columns['Description'] = subject_col
        return columns

    def scan_schedule(self, grid: Grid, header_row: int = -1) -> List[Dict[str, str]]:
        if header_row >= 0:
            columns = self.map_header_columns(grid, header_row)
            if 'Subject Code' in columns:
                return self.read_schedule_rows(grid, header_row + 1, columns)
            logger.warning("⚠️ COR schedule header has no subject code column")
            return []

        start = -1
        for i in range(len(grid)):
            if _SUBJECT_CODE_CELL_RE.match(cell_at(grid, i, 0).upper()):
                start = i
                break
        if start == -1:
            return []

        for arrangement in COLUMN_ARRANGEMENTS:
            schedule = self.read_schedule_rows(grid, start, arrangement)
            if schedule:
                return schedule
        return []

    def is_schedule_end_row(self, grid: Grid, row: int) -> bool:
        if row >= len(grid) or row_is_blank(grid, row):
            return True
        first = cell_at(grid, row, 0).upper()
        return any(keyword in first for keyword in END_KEYWORDS)

    def read_schedule_rows(self, grid: Grid, start: int, columns: Dict[str, int]) -> List[Dict[str, str]]:
        schedule = []
        for i in range(start, len(grid)):
            if self.is_schedule_end_row(grid, i):
                break

            code = cell_at(grid, i, columns['Subject Code'])
            if not SUBJECT_CODE_RE.match(code.upper()):
                continue

            entry = {'Subject Code': code}
            for key in ('Description', 'Type', 'Units', 'Day', 'Time Start', 'Time End', 'Room'):
                if key not in columns:
                    continue
                value = cell_at(grid, i, columns[key])
                if not value or (key == 'Units' and not _NUMBER_RE.match(value)):
                    continue
                entry[key] = value

            if 'Time' in columns:
                value = cell_at(grid, i, columns['Time'])
                if value:
                    entry['Time Start'], entry['Time End'] = split_time_range(value)

            schedule.append(entry)
        return schedule

    # ------------------------------------------------------------ totals

    def scan_total_units(self, grid: Grid) -> Optional[str]:
        for i in range(len(grid)):
            for j in range(row_width(grid, i)):
                upper = cell_at(grid, i, j).upper()
                if 'TOTAL' not in upper or not ('UNIT' in upper or 'CREDIT' in upper):
                    continue
                # same row first, then below, then above
                for di in (0, 1, -1):
                    for dj in range(-1, 4):
                        value = cell_at(grid, i + di, j + dj)
                        if _NUMBER_RE.match(value):
                            return value
        return None

    # ------------------------------------------------------------ report

    def format_cor(self, cor_data: Dict[str, Any]) -> str:
        program_info = cor_data['program_info']
        schedule = cor_data['schedule']

        text = 'COR (Certificate of Registration) - Class Schedule\n\n'
        text += 'STUDENT INFORMATION:\n'
        for field in PROGRAM_FIELDS:
            text += f"  {field}: {program_info.get(field) or 'N/A'}\n"
        text += f"  Total Units: {cor_data.get('total_units') or 'N/A'}\n\n"

        text += f"ENROLLED SUBJECTS ({len(schedule)} subjects):\n"
        if not schedule:
            text += '\n  No subjects found in schedule.\n'
            return text

        for i, course in enumerate(schedule, 1):
            text += f"\n  Subject {i}:\n"
            text += f"  • Subject Code: {course.get('Subject Code', 'N/A')}\n"
            text += f"  • Description: {course.get('Description', 'N/A')}\n"
            text += f"  • Type: {course.get('Type', 'N/A')}\n"
            text += f"  • Units: {course.get('Units', 'N/A')}\n"
            text += (f"  • Schedule: {course.get('Day', 'N/A')} "
                     f"{course.get('Time Start', 'N/A')}-{course.get('Time End', 'N/A')}\n")
            text += f"  • Room: {course.get('Room', 'N/A')}\n"
        return text
