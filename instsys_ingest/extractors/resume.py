from __future__ import annotations

import re
from pathlib import PurePath
from typing import Any, Dict, List, Optional

from ..log import get_logger
from .names import build_full_name, name_from_filename, name_from_structure, parse_full_name
from .personal import infer_academic_department
from .scanner import contains_label_word, matches_any, split_lines, value_from_line

logger = get_logger(__name__)

FULL_NAME_LABELS = ('FULL NAME', 'NAME')
EDUCATION_LABELS = ('EDUCATION', 'EDUCATIONAL BACKGROUND', 'EDUCATIONAL ATTAINMENT')

# Checked in order; the first field whose label starts the line claims it
RESUME_FIELDS = (
    ('surname', ('SURNAME', 'LAST NAME', 'FAMILY NAME')),
    ('first_name', ('FIRST NAME', 'GIVEN NAME', 'FIRSTNAME')),
    ('middle_name', ('MIDDLE NAME', 'MIDDLENAME')),
    ('date_of_birth', ('DATE OF BIRTH', 'BIRTHDATE', 'DOB', 'BIRTH DATE')),
    ('place_of_birth', ('PLACE OF BIRTH', 'BIRTHPLACE')),
    ('sex', ('SEX', 'GENDER')),
    ('citizenship', ('CITIZENSHIP', 'NATIONALITY')),
    ('civil_status', ('CIVIL STATUS', 'MARITAL STATUS')),
    ('religion', ('RELIGION',)),
    ('address', ('ADDRESS', 'RESIDENTIAL ADDRESS', 'HOME ADDRESS')),
    ('zip_code', ('ZIP CODE', 'ZIPCODE', 'POSTAL CODE')),
    ('phone', ('PHONE', 'TELEPHONE', 'CONTACT NUMBER', 'MOBILE', 'CELL')),
    ('email', ('EMAIL', 'E-MAIL', 'EMAIL ADDRESS')),
    ('position', ('POSITION', 'JOB TITLE', 'DESIGNATION', 'RANK')),
    ('department', ('DEPARTMENT', 'COLLEGE', 'SCHOOL', 'DEPT')),
    ('employment_status', ('EMPLOYMENT STATUS', 'STATUS')),
    ('specialization', ('SPECIALIZATION', 'FIELD OF STUDY', 'EXPERTISE')),
)

DEGREE_WORDS = ('MASTER', 'DOCTOR', 'BACHELOR', 'PHD', 'MA ', 'MS ', 'BS ', 'BA ')
EDUCATION_LOOKAHEAD = 20

EMAIL_RE = re.compile(r'[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}')
_LONG_DIGITS_RE = re.compile(r'\d{10,}')
PHONE_RE = re.compile(r'[\d\-+()\s]{10,}')


def extract_education(lines: List[str], start: int) -> str:
    """Degree lines under an EDUCATION heading, joined with '; '"""
    education = []
    for line in lines[start + 1:start + EDUCATION_LOOKAHEAD]:
        upper = line.upper()
        if contains_label_word(line) and not any(word in upper for word in ('DEGREE', 'UNIVERSITY', 'COLLEGE')):
            break
        if any(word in upper for word in DEGREE_WORDS):
            education.append(line)
    return '; '.join(education)


class ResumeExtractor:
    """Teaching faculty resumes (PDF text)"""

    data_type = 'teaching_faculty_resume_pdf'

    def extract(self, text: str, source_file: str = '') -> Optional[Dict[str, Any]]:
        if not text or not text.strip():
            logger.warning(f"❌ No text extracted from {source_file or 'resume'}")
            return None

        info = self.extract_faculty_info(text)

        if not info.get('surname') and not info.get('first_name'):
            logger.warning("⚠️ Name not found in labeled fields, trying document structure")
            info.update(name_from_structure(text) or {})
        if not info.get('surname') and not info.get('first_name'):
            logger.warning("⚠️ Could not extract faculty name, using filename as fallback")
            info.update(name_from_filename(source_file))

        full_name = build_full_name(info, 'Unknown Faculty')
        info['department'] = infer_academic_department(info)
        logger.info(f"✅ Extracted faculty: {full_name} ({info['department']})")

        return {
            'metadata': {
                'full_name': full_name,
                'surname': info.get('surname', ''),
                'first_name': info.get('first_name', ''),
                'middle_name': info.get('middle_name', ''),
                'department': info['department'],
                'position': info.get('position', ''),
                'email': info.get('email', ''),
                'phone': info.get('phone', ''),
                'data_type': self.data_type,
                'source_file': PurePath(source_file).name if source_file else '',
                'has_photo': False,
            },
            'faculty_data': info,
            'raw_text': text,
            'formatted_text': self.format_faculty_info(info),
        }

    def extract_faculty_info(self, text: str) -> Dict[str, str]:
        info: Dict[str, str] = {}
        lines = split_lines(text)

        for i, line in enumerate(lines):
            upper = line.upper()

            if matches_any(upper, FULL_NAME_LABELS):
                value = value_from_line(lines, i)
                if value:
                    for field, part in parse_full_name(value).items():
                        if part and not info.get(field):
                            info[field] = part
            elif matches_any(upper, EDUCATION_LABELS):
                if not info.get('education'):
                    info['education'] = extract_education(lines, i)
            else:
                for field, labels in RESUME_FIELDS:
                    if matches_any(upper, labels):
                        if not info.get(field):
                            value = value_from_line(lines, i)
                            if value:
                                info[field] = value
                        break

            if not info.get('email') and '@' in line:
                match = EMAIL_RE.search(line)
                if match:
                    info['email'] = match.group(0)

            if not info.get('phone') and _LONG_DIGITS_RE.search(line):
                match = PHONE_RE.search(line)
                if match:
                    info['phone'] = match.group(0).strip()

        return info

    def format_faculty_info(self, info: Dict[str, str]) -> str:
        def section(title, fields):
            body = ''.join(f"  {label}: {info[field]}\n" for label, field in fields if info.get(field))
            return f"{title}\n{body}"

        text = '=' * 60 + '\n'
        text += 'TEACHING FACULTY RESUME\n'
        text += '=' * 60 + '\n\n'
        text += section('PERSONAL INFORMATION:', (
            ('Surname', 'surname'), ('First Name', 'first_name'), ('Middle Name', 'middle_name'),
            ('Date of Birth', 'date_of_birth'), ('Place of Birth', 'place_of_birth'), ('Sex', 'sex'),
            ('Citizenship', 'citizenship'), ('Civil Status', 'civil_status'), ('Religion', 'religion'),
        )) + '\n'
        text += section('CONTACT INFORMATION:', (
            ('Address', 'address'), ('Zip Code', 'zip_code'), ('Phone', 'phone'), ('Email', 'email'),
        )) + '\n'
        text += section('PROFESSIONAL INFORMATION:', (
            ('Position', 'position'), ('Department', 'department'),
            ('Employment Status', 'employment_status'), ('Specialization', 'specialization'),
            ('Education', 'education'),
        ))
        return text
