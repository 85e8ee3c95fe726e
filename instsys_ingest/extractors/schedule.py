from __future__ import annotations

import re
from pathlib import PurePath
from typing import Any, Dict, List, Tuple

from ..log import get_logger
from .scanner import Grid, cell_at, is_placeholder, next_value_right, row_width
from .taxonomy import UNKNOWN, standardize_non_teaching_department, title_words

logger = get_logger(__name__)

DAY_ORDER = ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday')

# Full names first so 'MONDAY' is not claimed through 'MON'
DAY_TOKENS = ('MONDAY', 'TUESDAY', 'WEDNESDAY', 'THURSDAY', 'FRIDAY', 'SATURDAY', 'SUNDAY',
              'MON', 'TUE', 'WED', 'THU', 'FRI', 'SAT', 'SUN')

_DAY_NAMES = {
    'MON': 'Monday', 'MONDAY': 'Monday',
    'TUE': 'Tuesday', 'TUES': 'Tuesday', 'TUESDAY': 'Tuesday',
    'WED': 'Wednesday', 'WEDNESDAY': 'Wednesday',
    'THU': 'Thursday', 'THURS': 'Thursday', 'THURSDAY': 'Thursday',
    'FRI': 'Friday', 'FRIDAY': 'Friday',
    'SAT': 'Saturday', 'SATURDAY': 'Saturday',
    'SUN': 'Sunday', 'SUNDAY': 'Sunday',
}

NAME_LABELS = ('NAME OF FACULTY', 'FACULTY NAME', 'NAME OF STAFF', 'STAFF NAME', 'NAME:')
DEPARTMENT_LABELS = ('DEPARTMENT:', 'DEPT:')
POSITION_LABELS = ('POSITION:', 'TITLE:')

STAFF_INFO_ROWS = 10
STAFF_INFO_COLS = 10
HEADER_SEARCH_ROWS = 15
MIN_DAY_COLUMNS = 3

_TIME_RE = re.compile(r'(\d+):?(\d*)')


def standardize_day_name(day: str) -> str:
    return _DAY_NAMES.get(day.upper().strip(), day)


def parse_time_minutes(time_text: str) -> int:
    """
    Minutes since midnight for sorting: '1:30 PM' -> 810, '12 AM' -> 0.

    The first number is the hour, an optional ':MM' the minute (default 0).
    """
    if not time_text:
        return 0

    upper = time_text.upper()
    hours, minutes = 0, 0
    match = _TIME_RE.search(upper)
    if match:
        hours = int(match.group(1))
        minutes = int(match.group(2)) if match.group(2) else 0

    if 'PM' in upper and hours != 12:
        hours += 12
    elif 'AM' in upper and hours == 12:
        hours = 0

    return hours * 60 + minutes


def is_time_cell(text: str) -> bool:
    if not text or is_placeholder(text):
        return False
    return bool(re.search(r'\d', text)) or ':' in text or bool(re.search(r'AM|PM', text, re.I))


class NonTeachingScheduleExtractor:
    """Weekly duty grid of a non-teaching staff member (TIME rows x day columns)"""

    data_type = 'non_teaching_faculty_schedule'

    def extract(self, grid: Grid, source_file: str = '') -> Dict[str, Any]:
        staff_info = self.extract_staff_info(grid)
        schedule = self.extract_schedule_data(grid)

        logger.info(f"🗓️ {staff_info['name']}: {len(schedule)} scheduled assignments")

        return {
            'metadata': {
                'staff_name': staff_info['name'],
                'full_name': staff_info['name'],
                'department': standardize_non_teaching_department(staff_info['department']),
                'position': staff_info['position'] or 'Staff',
                'data_type': self.data_type,
                'faculty_type': 'non_teaching_schedule',
                'total_shifts': len(schedule),
                'days_working': len({entry['day'] for entry in schedule}),
                'source_file': PurePath(source_file).name if source_file else '',
            },
            'schedule_data': {
                'schedule': schedule,
                'by_day': self.organize_by_day(schedule),
            },
            'formatted_text': self.format_schedule(staff_info, schedule),
        }

    def extract_staff_info(self, grid: Grid) -> Dict[str, str]:
        staff_info = {'name': 'Unknown Staff', 'department': UNKNOWN, 'position': ''}

        for i in range(min(STAFF_INFO_ROWS, len(grid))):
            for j in range(min(STAFF_INFO_COLS, row_width(grid, i))):
                upper = cell_at(grid, i, j).upper()
                if not upper:
                    continue

                if any(label in upper for label in NAME_LABELS):
                    name = next_value_right(grid, i, j, span=3, min_length=3)
                    if name:
                        staff_info['name'] = title_words(name)

                if any(label in upper for label in DEPARTMENT_LABELS):
                    department = next_value_right(grid, i, j, span=3, min_length=2)
                    if department:
                        staff_info['department'] = department.upper()

                if any(label in upper for label in POSITION_LABELS):
                    position = next_value_right(grid, i, j, span=3, min_length=3)
                    if position:
                        staff_info['position'] = title_words(position)

        return staff_info

    def find_schedule_header(self, grid: Grid) -> Tuple[int, int, Dict[int, str]]:
        """(header_row, time_column, {column: day}); header_row is -1 when absent"""
        for i in range(min(HEADER_SEARCH_ROWS, len(grid))):
            time_column = -1
            day_columns: Dict[int, str] = {}

            for j in range(row_width(grid, i)):
                upper = cell_at(grid, i, j).upper()
                if not upper:
                    continue
                if 'TIME' in upper and time_column == -1:
                    time_column = j
                    continue
                for token in DAY_TOKENS:
                    if token in upper:
                        day_columns[j] = standardize_day_name(token)
                        break

            if len(day_columns) >= MIN_DAY_COLUMNS and time_column >= 0:
                return i, time_column, day_columns

        return -1, -1, {}

    def extract_schedule_data(self, grid: Grid) -> List[Dict[str, str]]:
        header_row, time_column, day_columns = self.find_schedule_header(grid)
        if header_row == -1:
            logger.warning("⚠️ Could not find schedule table (TIME + 3 day columns)")
            return []

        start = header_row + 1
        end = len(grid)
        for i in range(start, len(grid)):
            if not is_time_cell(cell_at(grid, i, time_column)):
                end = i
                break

        schedule = []
        for col, day in day_columns.items():
            for i in range(start, end):
                time_text = cell_at(grid, i, time_column)
                assignment = cell_at(grid, i, col)
                if not assignment or is_placeholder(assignment):
                    continue
                schedule.append({
                    'day': day,
                    'time': time_text,
                    'duty': assignment if 'Task:' in assignment else f"Task: {assignment}",
                    'assignment': assignment,
                    'full_description': f"{day} {time_text} - {assignment}",
                })

        return schedule

    def organize_by_day(self, schedule: List[Dict[str, str]]) -> Dict[str, List[Dict[str, str]]]:
        by_day: Dict[str, List[Dict[str, str]]] = {}
        for entry in schedule:
            by_day.setdefault(entry.get('day') or 'Unknown', []).append(entry)
        for entries in by_day.values():
            entries.sort(key=lambda entry: parse_time_minutes(entry['time']))
        return by_day

    def format_schedule(self, staff_info: Dict[str, str], schedule: List[Dict[str, str]]) -> str:
        text = '=' * 60 + '\n'
        text += 'NON-TEACHING FACULTY WORK SCHEDULE\n'
        text += '=' * 60 + '\n\n'

        text += 'STAFF INFORMATION:\n'
        text += f"  Name: {staff_info['name']}\n"
        text += f"  Department: {staff_info['department']}\n"
        if staff_info.get('position'):
            text += f"  Position: {staff_info['position']}\n"
        text += '\n'

        text += f"WEEKLY WORK SCHEDULE ({len(schedule)} scheduled assignments):\n"
        text += '-' * 60 + '\n\n'

        if not schedule:
            text += '  No scheduled duties found.\n'
            return text

        by_day = self.organize_by_day(schedule)
        for day in DAY_ORDER:
            entries = by_day.get(day)
            if not entries:
                continue
            text += f"{day.upper()}:\n"
            for entry in entries:
                text += f"  • {entry['time']:<15} - {entry['assignment']}\n"
            text += '\n'

        return text
