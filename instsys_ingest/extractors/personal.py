"""
Personal data sheets (admin, teaching and non-teaching faculty).

The sheets are forms: labels sit anywhere in the first columns and the value
is in the same cell after ':', to the right, or below. Family sections reuse
generic labels ('DATE OF BIRTH', 'OCCUPATION') whose owner is only known from
the rows above, so those two labels are resolved with row context.
"""
from __future__ import annotations

from pathlib import PurePath
from typing import Any, Dict, Optional, Sequence, Tuple

from ..log import get_logger
from .names import build_full_name, split_surname_first
from .scanner import Grid, cell_at, matches_any, matches_label, normalize_label, resolve_value, row_width
from .taxonomy import (ADMIN_TYPE_DEPARTMENTS, SCHOOL_ADMINISTRATOR, UNKNOWN, classify_admin_type,
                       classify_department, match_non_teaching_department,
                       standardize_admin_department)

logger = get_logger(__name__)

MAX_ROWS = 100
MAX_COLS = 10

RELATIONS = ('father', 'mother', 'spouse')

FULL_NAME_LABELS = ('FULL NAME',)
BIRTH_DATE_LABELS = ('DATE OF BIRTH', 'BIRTHDATE', 'BIRTH DATE', 'DOB')
OCCUPATION_LABELS = ('OCCUPATION',)

# matched only as the whole cell or 'OFFICE: value'; 'OFFICE ADDRESS' is not a department
EXACT_LABELS = ('OFFICE',)

PERSON_FIELDS = (
    ('surname', ('SURNAME', 'LAST NAME', 'FAMILY NAME')),
    ('first_name', ('FIRST NAME', 'GIVEN NAME', 'FIRSTNAME')),
    ('middle_name', ('MIDDLE NAME', 'MIDDLENAME')),
    ('place_of_birth', ('PLACE OF BIRTH', 'BIRTHPLACE')),
    ('sex', ('SEX', 'GENDER')),
    ('citizenship', ('CITIZENSHIP', 'NATIONALITY')),
    ('height', ('HEIGHT',)),
    ('weight', ('WEIGHT',)),
    ('blood_type', ('BLOOD TYPE',)),
    ('religion', ('RELIGION',)),
    ('civil_status', ('CIVIL STATUS', 'MARITAL STATUS')),
    ('address', ('ADDRESS', 'RESIDENTIAL ADDRESS', 'HOME ADDRESS')),
    ('zip_code', ('ZIP CODE', 'ZIPCODE', 'POSTAL CODE')),
    ('phone', ('TELEPHONE', 'PHONE', 'CONTACT NUMBER', 'MOBILE', 'MOBILE NUMBER')),
    ('email', ('EMAIL', 'EMAIL ADDRESS', 'E-MAIL')),
    ('position', ('POSITION', 'JOB TITLE', 'DESIGNATION')),
    ('department', ('DEPARTMENT', 'OFFICE', 'DEPT')),
    ('employment_status', ('EMPLOYMENT STATUS', 'STATUS')),
    ('father_name', ("FATHER'S NAME", 'FATHER NAME', 'FATHERS NAME')),
    ('father_dob', ("FATHER'S DATE OF BIRTH", "FATHER'S DOB")),
    ('father_occupation', ("FATHER'S OCCUPATION",)),
    ('mother_name', ("MOTHER'S NAME", 'MOTHER NAME', 'MOTHERS NAME', "MOTHER'S MAIDEN NAME")),
    ('mother_dob', ("MOTHER'S DATE OF BIRTH", "MOTHER'S DOB")),
    ('mother_occupation', ("MOTHER'S OCCUPATION",)),
    ('spouse_name', ("SPOUSE'S NAME", 'SPOUSE NAME')),
    ('spouse_dob', ("SPOUSE'S DATE OF BIRTH", "SPOUSE'S DOB")),
    ('spouse_occupation', ("SPOUSE'S OCCUPATION",)),
    ('gsis', ('GSIS', 'GSIS NO', 'GSIS NO.', 'GSIS NUMBER')),
    ('philhealth', ('PHILHEALTH', 'PHILHEALTH NO', 'PHILHEALTH NO.', 'PHILHEALTH NUMBER')),
    ('sss', ('SSS', 'SSS NO', 'SSS NO.', 'SSS NUMBER')),
    ('tin', ('TIN', 'TIN NO', 'TIN NO.', 'TIN NUMBER')),
)

FACULTY_FIELDS = PERSON_FIELDS + (
    ('specialization', ('SPECIALIZATION', 'FIELD OF STUDY', 'EXPERTISE')),
)

FAMILY_FIELDS = tuple(f"{relation}_{part}" for relation in RELATIONS
                      for part in ('name', 'dob', 'occupation'))


def matches_field_label(upper: str, labels: Sequence[str]) -> bool:
    for label in labels:
        if label in EXACT_LABELS:
            text = upper.strip()
            if normalize_label(text) == label or text.startswith(label + ':'):
                return True
        elif matches_label(upper, label):
            return True
    return False


def format_field(value) -> str:
    if value and str(value) not in ('None', 'N/A', ''):
        return str(value)
    return 'N/A'


class PersonalInfoExtractor:
    """Shared label walk for one-person data sheets; subclasses add routing"""

    data_type = 'personal_excel'
    faculty_type = ''
    title = 'PERSONAL INFORMATION SHEET'
    unknown_name = 'Unknown Person'
    record_key = 'person_data'
    field_map: Sequence[Tuple[str, Sequence[str]]] = PERSON_FIELDS

    def __init__(self):
        self.lexicon = tuple(label for _, labels in self.field_map for label in labels) \
            + FULL_NAME_LABELS + BIRTH_DATE_LABELS + OCCUPATION_LABELS

    def extract(self, grid: Grid, source_file: str = '') -> Optional[Dict[str, Any]]:
        info = self.extract_info(grid)
        if info is None:
            logger.warning(f"⚠️ Missing surname and first name in {source_file or 'sheet'}")
            return None

        info['department'] = self.resolve_department(info)
        full_name = build_full_name(info, self.unknown_name)
        logger.info(f"✅ Extracted {self.faculty_type or 'person'}: {full_name}")

        return {
            'metadata': self.build_metadata(info, full_name, source_file),
            self.record_key: info,
            'formatted_text': self.format_info(info),
        }

    # ------------------------------------------------------------ label walk

    def extract_info(self, grid: Grid) -> Optional[Dict[str, str]]:
        info = {field: '' for field, _ in self.field_map}
        info['date_of_birth'] = ''

        for i in range(min(MAX_ROWS, len(grid))):
            for j in range(min(MAX_COLS, row_width(grid, i))):
                upper = cell_at(grid, i, j).upper()
                if upper:
                    self.read_cell(grid, i, j, upper, info)

        if not info.get('surname') and not info.get('first_name'):
            return None
        return info

    def read_cell(self, grid: Grid, i: int, j: int, upper: str, info: Dict[str, str]) -> None:
        if matches_any(upper, FULL_NAME_LABELS):
            if 'EMPLOYER' in upper or 'BUSINESS' in upper:
                return
            value = resolve_value(grid, i, j, self.lexicon)
            if value:
                for field, part in split_surname_first(value).items():
                    if part and not info.get(field):
                        info[field] = part
            return

        if matches_any(upper, BIRTH_DATE_LABELS):
            relation = self.relation_above(grid, i, 1)
            field = f"{relation}_dob" if relation else 'date_of_birth'
            self.set_once(info, field, grid, i, j)
            return

        if matches_any(upper, OCCUPATION_LABELS):
            if 'DATE OF BIRTH' in cell_at(grid, i - 1, 0).upper():
                relation = self.relation_above(grid, i, 2)
                if relation:
                    self.set_once(info, f"{relation}_occupation", grid, i, j)
            return

        for field, labels in self.field_map:
            if matches_field_label(upper, labels):
                self.set_once(info, field, grid, i, j)
                return

    @staticmethod
    def relation_above(grid: Grid, row: int, distance: int) -> Optional[str]:
        """Relation named in column 0 of the row `distance` rows above, if any"""
        if row - distance < 0:
            return None
        above = cell_at(grid, row - distance, 0).upper()
        for relation in RELATIONS:
            if relation.upper() in above:
                return relation
        return None

    def set_once(self, info: Dict[str, str], field: str, grid: Grid, i: int, j: int) -> None:
        if info.get(field):
            return
        value = resolve_value(grid, i, j, self.lexicon)
        if value:
            info[field] = value

    # ------------------------------------------------------------ routing

    def resolve_department(self, info: Dict[str, str]) -> str:
        return (info.get('department') or UNKNOWN).upper()

    def build_metadata(self, info: Dict[str, str], full_name: str, source_file: str) -> Dict[str, Any]:
        return {
            'full_name': full_name,
            'surname': info.get('surname', ''),
            'first_name': info.get('first_name', ''),
            'middle_name': info.get('middle_name', ''),
            'department': info['department'],
            'position': info.get('position', ''),
            'employment_status': info.get('employment_status', ''),
            'email': info.get('email', ''),
            'phone': info.get('phone', ''),
            'data_type': self.data_type,
            'faculty_type': self.faculty_type,
            'source_file': PurePath(source_file).name if source_file else '',
        }

    # ------------------------------------------------------------ report

    def professional_lines(self, info: Dict[str, str]):
        return [
            ('PROFESSIONAL INFORMATION:', None),
            ('Position', info.get('position')),
            ('Department', info.get('department')),
            ('Employment Status', info.get('employment_status')),
        ]

    def format_info(self, info: Dict[str, str]) -> str:
        text = '=' * 60 + '\n'
        text += f"{self.title}\n"
        text += '=' * 60 + '\n\n'

        text += 'PERSONAL INFORMATION:\n'
        text += f"  Surname: {format_field(info.get('surname'))}\n"
        text += f"  First Name: {format_field(info.get('first_name'))}\n"
        if info.get('middle_name'):
            text += f"  Middle Name: {info['middle_name']}\n"
        for label, field in (('Date of Birth', 'date_of_birth'), ('Place of Birth', 'place_of_birth'),
                             ('Citizenship', 'citizenship'), ('Sex', 'sex'), ('Height', 'height'),
                             ('Weight', 'weight'), ('Blood Type', 'blood_type'),
                             ('Religion', 'religion'), ('Civil Status', 'civil_status')):
            text += f"  {label}: {format_field(info.get(field))}\n"
        text += '\n'

        text += 'CONTACT INFORMATION:\n'
        text += f"  Address: {format_field(info.get('address'))}\n"
        text += f"  Zip Code: {format_field(info.get('zip_code'))}\n"
        text += f"  Phone: {format_field(info.get('phone'))}\n"
        text += f"  Email: {format_field(info.get('email'))}\n"
        text += '\n'

        for label, value in self.professional_lines(info):
            if value is None:
                text += f"{label}\n"
            else:
                text += f"  {label}: {format_field(value)}\n"

        if any(format_field(info.get(field)) != 'N/A' for field in FAMILY_FIELDS):
            text += '\nFAMILY INFORMATION:\n'
            for relation, label in (('father', "Father's"), ('mother', "Mother's"), ('spouse', "Spouse's")):
                if relation != 'father':
                    text += '\n'
                text += f"  {label} Name: {format_field(info.get(relation + '_name'))}\n"
                text += f"  {label} Date of Birth: {format_field(info.get(relation + '_dob'))}\n"
                text += f"  {label} Occupation: {format_field(info.get(relation + '_occupation'))}\n"

        ids = [(label, info.get(field)) for label, field in
               (('GSIS', 'gsis'), ('PhilHealth', 'philhealth'), ('SSS', 'sss'), ('TIN', 'tin'))
               if info.get(field)]
        if ids:
            text += '\nGOVERNMENT IDs:\n'
            for label, value in ids:
                text += f"  {label}: {format_field(value)}\n"

        return text


class AdminExtractor(PersonalInfoExtractor):
    """
    Board members and school administrators.

    The stored department follows the admin type (BOARD / SCHOOL_ADMIN).
    Only a position with no admin keyword at all falls back to the sheet's
    own department field.
    """

    data_type = 'admin_excel'
    faculty_type = 'admin'
    title = 'ADMINISTRATIVE STAFF INFORMATION'
    unknown_name = 'Unknown Administrator'
    record_key = 'admin_data'

    def resolve_department(self, info: Dict[str, str]) -> str:
        admin_type = classify_admin_type(info.get('position'))
        if admin_type == UNKNOWN:
            info['admin_type'] = SCHOOL_ADMINISTRATOR
            return standardize_admin_department(info.get('department'))
        info['admin_type'] = admin_type
        return ADMIN_TYPE_DEPARTMENTS[admin_type]

    def build_metadata(self, info, full_name, source_file):
        metadata = super().build_metadata(info, full_name, source_file)
        metadata['admin_type'] = info['admin_type']
        return metadata

    def professional_lines(self, info):
        return [
            ('ADMINISTRATIVE INFORMATION:', None),
            ('Position', info.get('position')),
            ('Admin Type', info.get('admin_type')),
            ('Department', 'Administration'),
            ('Employment Status', info.get('employment_status')),
        ]


class TeachingFacultyExtractor(PersonalInfoExtractor):
    data_type = 'teaching_faculty_excel'
    faculty_type = 'teaching'
    title = 'TEACHING FACULTY INFORMATION'
    unknown_name = 'Unknown Faculty'
    record_key = 'faculty_data'
    field_map = FACULTY_FIELDS

    def resolve_department(self, info):
        return infer_academic_department(info)

    def professional_lines(self, info):
        lines = super().professional_lines(info)
        if info.get('specialization'):
            lines.append(('Specialization', info['specialization']))
        return lines


class NonTeachingFacultyExtractor(PersonalInfoExtractor):
    data_type = 'non_teaching_faculty_excel'
    faculty_type = 'non_teaching'
    title = 'NON-TEACHING FACULTY INFORMATION'
    unknown_name = 'Unknown Staff'
    record_key = 'faculty_data'

    def resolve_department(self, info):
        return (match_non_teaching_department(info.get('department'))
                or match_non_teaching_department(info.get('position'))
                or 'ADMIN_SUPPORT')


def infer_academic_department(info: Dict[str, str]) -> str:
    """College code from position + specialization + department, else the raw department"""
    combined = ' '.join((info.get('position') or '', info.get('specialization') or '',
                         info.get('department') or ''))
    code = classify_department(combined)
    if code != UNKNOWN:
        return code
    return (info.get('department') or '').strip() or UNKNOWN
