from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import PurePath
from typing import Any, Dict, List, Optional, Tuple

from ..log import get_logger
from .scanner import Grid, cell_at, is_placeholder, next_value_right, row_is_blank, row_width
from .taxonomy import (KNOWN_PROGRAMS, UNKNOWN, classify_department, course_from_filename,
                       extract_course_code, normalize_subject_type, title_words)

logger = get_logger(__name__)

FIELD_SYNONYMS = {
    'year_level': ('YEAR LEVEL', 'YEAR', 'YR', 'LEVEL', 'YR LEVEL'),
    'semester': ('SEMESTER', 'SEM', 'TERM', 'PERIOD'),
    'subject_code': ('SUBJECT CODE', 'COURSE CODE', 'CODE', 'SUBJ CODE', 'SUBJ. CODE'),
    'subject_name': ('SUBJECT NAME', 'COURSE NAME', 'SUBJECT', 'COURSE TITLE', 'DESCRIPTION',
                     'TITLE', 'SUBJECT DESCRIPTION', 'SUBJ DESCRIPTION'),
    'type': ('TYPE', 'CATEGORY', 'CLASSIFICATION', 'KIND'),
    'hours_per_week': ('HOURS/WEEK', 'HOURS PER WEEK', 'HOURS', 'HRS/WK', 'CONTACT HOURS'),
    'units': ('UNITS', 'CREDITS', 'CREDIT UNITS', 'CR', 'UNIT'),
}

SUBJECT_DEFAULTS = {
    'subject_code': 'N/A',
    'subject_name': 'Unknown Subject',
    'type': 'Core',
    'hours_per_week': '3',
    'units': '3',
}

HEADER_SEARCH_ROWS = 15
HEADER_MIN_FIELDS = 3
METADATA_ROWS = 20
METADATA_COLS = 10

FIRST_SEMESTER = '1st Semester'
SECOND_SEMESTER = '2nd Semester'
SUMMER = 'Summer'

FOOTER_KEYWORDS = ('TOTAL', 'SUMMARY', 'NOTE', 'LEGEND', 'GRAND TOTAL')

_YEAR_MARKER = re.compile(r'^(\d+)(?:ST|ND|RD|TH)?(?:\s*YEAR)?$')
_SEMESTER_MARKERS = (
    (re.compile(r'^(1ST|FIRST|1)(\s*SEM(ESTER)?)?$'), FIRST_SEMESTER),
    (re.compile(r'^(2ND|SECOND|2)(\s*SEM(ESTER)?)?$'), SECOND_SEMESTER),
    (re.compile(r'^(SUM|SUMMER|MID)(\s*\w+)?$'), SUMMER),
)


@dataclass(frozen=True)
class CurriculumWalk:
    """Year / semester carried forward while walking the subject rows"""
    year: str = '1'
    semester: str = FIRST_SEMESTER

    def observe(self, year_cell: str, semester_cell: str) -> 'CurriculumWalk':
        year, semester = self.year, self.semester

        match = _YEAR_MARKER.match(year_cell.strip().upper())
        if match:
            year = match.group(1)

        marker = semester_cell.strip().upper()
        for pattern, label in _SEMESTER_MARKERS:
            if pattern.match(marker):
                semester = label
                break

        return CurriculumWalk(year, semester)


class CurriculumExtractor:
    """Curriculum sheet -> program metadata, subjects and a year/semester outline"""

    data_type = 'curriculum_excel'

    def extract(self, grid: Grid, source_file: str = '') -> Dict[str, Any]:
        metadata = self.extract_metadata(grid, source_file)
        subjects = self.extract_subjects(grid)
        organized = self.organize_curriculum(subjects)

        logger.info(f"📚 Curriculum {metadata['program'] or UNKNOWN}: {len(subjects)} subjects")

        return {
            'metadata': {
                'program': metadata['program'],
                'course': metadata['program'],
                'department': metadata['department'],
                'effective_year': metadata['effective_year'] or datetime.now().year,
                'curriculum_year': metadata['curriculum_year'] or 'Not specified',
                'revision': metadata['revision'],
                'total_subjects': len(subjects),
                'total_units': self.calculate_total_units(subjects),
                'subjects_by_year': self.count_subjects_by_year(subjects),
                'data_type': self.data_type,
                'source_file': PurePath(source_file).name if source_file else '',
            },
            'curriculum_data': {
                'curriculum': organized,
                'all_subjects': subjects,
            },
            'formatted_text': self.format_curriculum(organized, metadata),
        }

    # ------------------------------------------------------------ metadata

    def extract_metadata(self, grid: Grid, source_file: str = '') -> Dict[str, Any]:
        metadata = {
            'program': '',
            'department': '',
            'effective_year': None,
            'curriculum_year': '',
            'revision': '1.0',
        }
        program_text = ''

        for i in range(min(METADATA_ROWS, len(grid))):
            for j in range(min(METADATA_COLS, row_width(grid, i))):
                text = cell_at(grid, i, j)
                if not text:
                    continue
                upper = text.upper()

                if not program_text and any(key in upper for key in ('COURSE:', 'PROGRAM:', 'DEGREE:')):
                    value = next_value_right(grid, i, j, span=5, min_length=6, reject_numeric=True)
                    if not value and ':' in text:
                        value = text.split(':', 1)[1].strip()
                    if len(value) > 3:
                        program_text = value
                        metadata['program'] = extract_course_code(value)

                if not metadata['curriculum_year'] and ('YEAR LEVEL:' in upper or 'YEAR:' in upper):
                    value = cell_at(grid, i, j + 1)
                    if not value and ':' in text:
                        value = text.split(':', 1)[1].strip()
                    metadata['curriculum_year'] = value

                if metadata['effective_year'] is None and 'EFFECTIVE' in upper and 'YEAR' in upper:
                    match = re.search(r'\b(20\d{2})\b', text)
                    if match:
                        metadata['effective_year'] = int(match.group(1))

        if not metadata['program']:
            from_file = course_from_filename(source_file)
            if from_file:
                logger.info(f"🔍 Program taken from filename: {from_file}")
                metadata['program'] = from_file

        if metadata['program']:
            if metadata['program'] in KNOWN_PROGRAMS:
                metadata['department'] = KNOWN_PROGRAMS[metadata['program']]
            else:
                metadata['department'] = classify_department(program_text or metadata['program'])
        else:
            metadata['department'] = UNKNOWN

        return metadata

    # ------------------------------------------------------------ subjects

    def find_header_row(self, grid: Grid) -> int:
        """First row (top-down) naming at least HEADER_MIN_FIELDS distinct fields"""
        for i in range(min(HEADER_SEARCH_ROWS, len(grid))):
            row_text = ' '.join(cell_at(grid, i, j).upper() for j in range(row_width(grid, i)))
            hits = sum(1 for synonyms in FIELD_SYNONYMS.values()
                       if any(synonym in row_text for synonym in synonyms))
            if hits >= HEADER_MIN_FIELDS:
                return i
        return -1

    def map_columns(self, grid: Grid, header_row: int) -> Dict[str, int]:
        header_cells = []
        for j in range(row_width(grid, header_row)):
            text = cell_at(grid, header_row, j).upper()
            if text:
                header_cells.append((j, text))

        columns = {}
        for field, synonyms in FIELD_SYNONYMS.items():
            best_col, best_score = None, 0
            for col, text in header_cells:
                for synonym in synonyms:
                    if synonym not in text:
                        continue
                    score = len(synonym) if text == synonym else len(synonym) - 1
                    if score > best_score:
                        best_col, best_score = col, score
            if best_col is not None:
                columns[field] = best_col
        return columns

    def extract_subjects(self, grid: Grid) -> List[Dict[str, str]]:
        header_row = self.find_header_row(grid)
        if header_row == -1:
            logger.warning("⚠️ No curriculum header row found")
            return []

        columns = self.map_columns(grid, header_row)
        logger.debug(f"📋 Curriculum columns: {columns}")

        subjects = []
        seen = set()
        walk = CurriculumWalk()

        for i in range(header_row + 1, len(grid)):
            if row_is_blank(grid, i):
                continue

            walk = walk.observe(self._cell(grid, i, columns, 'year_level'),
                                self._cell(grid, i, columns, 'semester'))

            entry = self.build_subject(grid, i, columns, walk)
            if entry is None:
                continue

            key = subject_key(entry)
            if key in seen:
                continue
            seen.add(key)
            subjects.append(entry)

        return subjects

    def build_subject(self, grid: Grid, row: int, columns: Dict[str, int],
                      walk: CurriculumWalk) -> Optional[Dict[str, str]]:
        code_text = self._cell(grid, row, columns, 'subject_code').upper()
        if any(keyword in code_text for keyword in FOOTER_KEYWORDS):
            return None
        if code_text.isdecimal() and int(code_text) > 20:
            return None

        entry = {}
        valid = False
        for field, col in columns.items():
            value = cell_at(grid, row, col)
            if not value or is_placeholder(value):
                continue
            cleaned = self.clean_value(value, field)
            if cleaned:
                entry[field] = cleaned
                if field in ('subject_code', 'subject_name'):
                    valid = True

        if not valid:
            return None

        entry['year_level'] = walk.year
        entry['semester'] = walk.semester
        for field, default in SUBJECT_DEFAULTS.items():
            if not entry.get(field):
                entry[field] = default

        return {field: entry[field] for field in
                ('year_level', 'semester', 'subject_code', 'subject_name',
                 'type', 'hours_per_week', 'units')}

    @staticmethod
    def _cell(grid: Grid, row: int, columns: Dict[str, int], field: str) -> str:
        col = columns.get(field)
        return cell_at(grid, row, col) if col is not None else ''

    def clean_value(self, value: str, field: str) -> Optional[str]:
        value = (value or '').strip()
        if not value:
            return None

        if field == 'subject_name':
            if len(value) > 1 and not is_placeholder(value):
                return title_words(value)
            return None

        if field == 'subject_code':
            cleaned = re.sub(r'[^A-Z0-9-]', '', value.upper())
            return cleaned if len(cleaned) >= 2 else None

        if field == 'semester':
            upper = value.upper()
            if any(term in upper for term in ('1ST', 'FIRST', '1')):
                return FIRST_SEMESTER
            if any(term in upper for term in ('2ND', 'SECOND', '2')):
                return SECOND_SEMESTER
            if any(term in upper for term in ('SUMMER', 'SUM', 'MID')):
                return SUMMER
            return value

        if field == 'type':
            return normalize_subject_type(value)

        if field == 'year_level':
            match = re.search(r'([1-4])', value)
            return match.group(1) if match else '1'

        if field in ('hours_per_week', 'units'):
            match = re.search(r'(\d+(?:\.\d+)?)', value)
            return match.group(1) if match else '3'

        return value

    # ------------------------------------------------------------ outline

    def organize_curriculum(self, subjects: List[Dict[str, str]]) -> Dict[str, Dict[str, List[Dict[str, str]]]]:
        organized: Dict[str, Dict[str, List[Dict[str, str]]]] = {}
        for subject in subjects:
            year = subject.get('year_level') or '1'
            semester = subject.get('semester') or FIRST_SEMESTER
            organized.setdefault(year, {}).setdefault(semester, []).append(subject)
        return organized

    def count_subjects_by_year(self, subjects):
        counts = {}
        for subject in subjects:
            year = subject.get('year_level', '1')
            counts[year] = counts.get(year, 0) + 1
        return counts

    def calculate_total_units(self, subjects):
        total = 0.0
        for subject in subjects:
            try:
                total += float(subject.get('units', '3'))
            except (TypeError, ValueError):
                total += 3
        return int(total)

    def format_curriculum(self, curriculum, metadata) -> str:
        text = '=' * 60 + '\n'
        text += f"CURRICULUM: {metadata['program']}\n"
        text += f"DEPARTMENT: {metadata['department']}\n"
        if metadata.get('effective_year'):
            text += f"EFFECTIVE YEAR: {metadata['effective_year']}\n"
        text += '=' * 60 + '\n\n'

        for year in sorted(curriculum):
            text += f"\nYEAR {year}\n"
            text += '-' * 60 + '\n'

            for semester, subjects in curriculum[year].items():
                text += f"\n{semester}:\n"
                for subject in subjects:
                    text += f"  {subject['subject_code']:<12} | {subject['subject_name']:<40} | {subject['units']} units\n"

        return text


def subject_key(subject: Dict[str, str]) -> Tuple[str, str, str]:
    return subject['subject_code'], subject['year_level'], subject['semester']
