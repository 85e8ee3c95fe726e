from __future__ import annotations

import re
from collections import Counter
from pathlib import PurePath
from typing import Any, Dict, List, Optional

from ..log import get_logger
from .names import split_surname_first
from .scanner import Grid, cell_at, row_width
from .taxonomy import UNKNOWN, course_from_filename, department_from_program

logger = get_logger(__name__)

HEADER_SEARCH_ROWS = 10
HEADER_MIN_COLUMNS = 2

COLUMN_MAPPING = {
    'student id': 'student_id',
    'student no': 'student_id',
    'student number': 'student_id',
    'id no': 'student_id',
    'id': 'student_id',
    'full name': 'full_name',
    'student name': 'full_name',
    'name': 'full_name',
    'surname': 'surname',
    'last name': 'surname',
    'family name': 'surname',
    'first name': 'first_name',
    'given name': 'first_name',
    'firstname': 'first_name',
    'year': 'year',
    'year level': 'year',
    'yr': 'year',
    'level': 'year',
    'course': 'course',
    'program': 'course',
    'degree': 'course',
    'section': 'section',
    'sec': 'section',
    'class': 'section',
    'contact number': 'contact_number',
    'contact no': 'contact_number',
    'contact': 'contact_number',
    'phone': 'contact_number',
    'phone number': 'contact_number',
    'mobile': 'contact_number',
    'mobile number': 'contact_number',
    'guardian name': 'guardian_name',
    'guardian': 'guardian_name',
    'parent name': 'guardian_name',
    'parent': 'guardian_name',
    'guardian contact': 'guardian_contact',
    'guardian contact number': 'guardian_contact',
    'guardian contact no': 'guardian_contact',
    "guardian's contact": 'guardian_contact',
    "guardian's contact number": 'guardian_contact',
    'parent contact': 'guardian_contact',
    'parent contact number': 'guardian_contact',
    'emergency contact': 'guardian_contact',
    'emergency contact number': 'guardian_contact',
}

STUDENT_FIELDS = ('student_id', 'full_name', 'surname', 'first_name', 'year', 'course',
                  'section', 'contact_number', 'guardian_name', 'guardian_contact')

NAME_FIELDS = ('full_name', 'surname', 'first_name', 'guardian_name')
PHONE_FIELDS = ('contact_number', 'guardian_contact')

# Header words that show up in data rows of merged or repeated headers
HEADER_VALUES = frozenset({
    'SURNAME', 'FIRST NAME', 'GUARDIAN NAME', 'CONTACT NUMBER', 'STUDENT ID', 'YEAR',
    'COURSE', 'SECTION', 'ID', 'NAME', 'PROGRAM', 'FULL NAME', 'STUDENT', 'NO',
})


def clean_student_value(value: str, field: str) -> Optional[str]:
    """Normalize one cell for `field`; None when nothing plausible is left"""
    if not value:
        return None
    value = value.strip()
    if value.upper() in HEADER_VALUES:
        return None

    if field == 'student_id':
        cleaned = re.sub(r'[^A-Z0-9-]', '', value.upper())
        return cleaned or None

    if field in PHONE_FIELDS:
        cleaned = re.sub(r'[^\d+]', '', value)
        return cleaned if 7 <= len(cleaned) <= 15 else None

    if field in NAME_FIELDS:
        cleaned = re.sub(r'[^A-Za-z\s.,-]', '', value).title()
        # stray single letters, but keep initials such as 'D.'
        cleaned = re.sub(r'\b[A-Za-z]\b(?!\.)', '', cleaned)
        cleaned = re.sub(r'\s+', ' ', cleaned).strip()
        return cleaned if len(cleaned) > 1 else None

    if field == 'year':
        match = re.search(r'[1-4]', value)
        return match.group(0) if match else None

    if field in ('course', 'section'):
        cleaned = re.sub(r'[^A-Z0-9]', '', value.upper())
        return cleaned or None

    return value


class StudentListExtractor:
    """
    Tabular student lists: one header row, one student per row below it.

    Only the header row is searched (first 10 rows); everything below is data.
    Rows with neither a student id nor a name are dropped.
    """

    data_type = 'student_excel'

    def extract(self, grid: Grid, source_file: str = '') -> Optional[Dict[str, Any]]:
        header_row, columns = self.find_header(grid)
        if header_row == -1:
            logger.warning(f"⚠️ No student header row found in {source_file or 'sheet'}")
            return None

        students = self.extract_students(grid, header_row, columns, source_file)
        if not students:
            logger.warning(f"⚠️ Header found but no student rows in {source_file or 'sheet'}")

        courses = Counter(student['course'] for student in students if student['course'])
        course = courses.most_common(1)[0][0] if courses else (course_from_filename(source_file) or '')
        department = department_from_program(course) if course else UNKNOWN

        logger.info(f"🎓 {len(students)} students extracted ({course or 'no course'})")

        return {
            'metadata': {
                'course': course,
                'department': department,
                'student_count': len(students),
                'data_type': self.data_type,
                'source_file': PurePath(source_file).name if source_file else '',
            },
            'students': students,
            'formatted_text': self.format_students(students),
        }

    def find_header(self, grid: Grid):
        """(row, {column: field}) of the first row naming at least two student columns"""
        for i in range(min(HEADER_SEARCH_ROWS, len(grid))):
            columns = {}
            for j in range(row_width(grid, i)):
                field = COLUMN_MAPPING.get(cell_at(grid, i, j).lower())
                if field and field not in columns.values():
                    columns[j] = field
            if len(columns) >= HEADER_MIN_COLUMNS:
                return i, columns
        return -1, {}

    def extract_students(self, grid: Grid, header_row: int, columns: Dict[int, str],
                         source_file: str = '') -> List[Dict[str, Any]]:
        students = []
        filename_course = course_from_filename(source_file)

        for i in range(header_row + 1, len(grid)):
            student = {field: '' for field in STUDENT_FIELDS}
            for col, field in columns.items():
                cleaned = clean_student_value(cell_at(grid, i, col), field)
                if cleaned:
                    student[field] = cleaned

            if student['full_name'] and not (student['surname'] and student['first_name']):
                parts = split_surname_first(student['full_name'])
                student['surname'] = student['surname'] or parts['surname']
                student['first_name'] = student['first_name'] or parts['first_name']
            elif student['surname'] and student['first_name'] and not student['full_name']:
                student['full_name'] = f"{student['surname']}, {student['first_name']}"

            if not student['student_id'] and not student['full_name']:
                continue

            if not student['course'] and filename_course:
                student['course'] = filename_course
            student['department'] = department_from_program(student['course']) \
                if student['course'] else UNKNOWN
            students.append(student)

        return students

    def format_student(self, student: Dict[str, Any]) -> str:
        return '\n'.join((
            f"Student ID: {student.get('student_id') or 'N/A'}",
            f"Full Name: {student.get('full_name') or 'N/A'}",
            f"Surname: {student.get('surname') or 'N/A'}",
            f"First Name: {student.get('first_name') or 'N/A'}",
            f"Year: {student.get('year') or 'N/A'}",
            f"Course: {student.get('course') or 'N/A'}",
            f"Section: {student.get('section') or 'N/A'}",
            f"Contact Number: {student.get('contact_number') or 'N/A'}",
            f"Guardian Name: {student.get('guardian_name') or 'N/A'}",
            f"Guardian Contact: {student.get('guardian_contact') or 'N/A'}",
        ))

    def format_students(self, students: List[Dict[str, Any]]) -> str:
        text = '=' * 60 + '\n'
        text += f"STUDENT LIST ({len(students)} students)\n"
        text += '=' * 60 + '\n\n'
        for student in students:
            text += self.format_student(student) + '\n\n'
        return text
