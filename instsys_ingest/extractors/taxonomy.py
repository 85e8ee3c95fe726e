"""
Keyword-scored classification of free text into closed code sets, plus the
constant lookup tables the extractors share.
"""
from __future__ import annotations

import re
from typing import Mapping, Optional, Pattern, Sequence, Tuple

UNKNOWN = 'UNKNOWN'

# Academic departments. Declaration order is the tie-break order.
DEPARTMENT_KEYWORDS = {
    'CCS': ('COMPUTER', 'INFORMATION TECHNOLOGY', 'IT', 'INFORMATION SYSTEMS',
            'SOFTWARE', 'PROGRAMMING', 'DATA'),
    'CHTM': ('HOSPITALITY', 'HOTEL', 'TOURISM', 'TRAVEL', 'RESTAURANT', 'CULINARY'),
    'CBA': ('BUSINESS', 'ADMINISTRATION', 'MANAGEMENT', 'ACCOUNTANCY', 'ACCOUNTING',
            'OFFICE', 'ENTREPRENEURSHIP', 'MARKETING', 'FINANCE'),
    'CTE': ('EDUCATION', 'TEACHING', 'TEACHER', 'ELEMENTARY', 'SECONDARY'),
    'COE': ('ENGINEERING', 'CIVIL', 'ELECTRICAL', 'MECHANICAL', 'ELECTRONICS', 'INDUSTRIAL'),
    'CON': ('NURSING', 'NURSE', 'MIDWIFERY', 'HEALTH'),
    'CAS': ('ARTS', 'SCIENCES', 'LIBERAL', 'HUMANITIES', 'SOCIAL', 'PSYCHOLOGY',
            'BIOLOGY', 'CHEMISTRY', 'PHYSICS', 'MATHEMATICS', 'COMMUNICATION'),
}

DEPARTMENT_PREFIX_RULES = (
    (re.compile(r'^(CS|IT|IS)'), 'CCS'),
    (re.compile(r'^(HM|TM|HRM)'), 'CHTM'),
    (re.compile(r'^(BA|BS|ACC|FIN|MGT|MKT|OA)'), 'CBA'),
    (re.compile(r'^(ED|BSED|BEED)'), 'CTE'),
    (re.compile(r'^(CE|EE|ME|IE)'), 'COE'),
    (re.compile(r'^(NS|NUR)'), 'CON'),
)

KNOWN_PROGRAMS = {
    'BSCS': 'CCS', 'BSIT': 'CCS',
    'BSHM': 'CHTM', 'BSTM': 'CHTM',
    'BSBA': 'CBA', 'BSOA': 'CBA',
    'BECED': 'CTE', 'BTLE': 'CTE',
}

BOARD_MEMBER = 'Board Member'
SCHOOL_ADMINISTRATOR = 'School Administrator'

ADMIN_TYPE_KEYWORDS = {
    BOARD_MEMBER: ('BOARD MEMBER', 'BOARD DIRECTOR', 'BOARD OF DIRECTORS'),
    SCHOOL_ADMINISTRATOR: ('SCHOOL ADMINISTRATOR', 'SCHOOL ADMIN', 'ADMINISTRATOR', 'ADMIN'),
}

ADMIN_TYPE_DEPARTMENTS = {
    BOARD_MEMBER: 'BOARD',
    SCHOOL_ADMINISTRATOR: 'SCHOOL_ADMIN',
}

_ADMIN_DEPARTMENT_MAP = (
    ('SCHOOL ADMIN', 'SCHOOL_ADMIN'),
    ('SCHOOL ADMINISTRATOR', 'SCHOOL_ADMIN'),
    ('SCHOOL ADMINISTRATION', 'SCHOOL_ADMIN'),
    ('BOARD MEMBER', 'BOARD'),
    ('BOARD OF DIRECTORS', 'BOARD'),
    ('BOARD DIRECTOR', 'BOARD'),
    ('ADMINISTRATOR', 'ADMIN'),
    ('ADMINISTRATION', 'ADMIN'),
)

# Ordered: the first key contained in the text wins
NON_TEACHING_DEPARTMENTS = (
    ('REGISTRAR', 'REGISTRAR'),
    ('OFFICE OF THE REGISTRAR', 'REGISTRAR'),
    ('REGISTRAR OFFICE', 'REGISTRAR'),
    ('REGISTRATION', 'REGISTRAR'),
    ('LIBRARY', 'LIBRARY'),
    ('UNIVERSITY LIBRARY', 'LIBRARY'),
    ('FINANCE', 'FINANCE'),
    ('ACCOUNTING', 'FINANCE'),
    ('FINANCE OFFICE', 'FINANCE'),
    ('ACCOUNTING OFFICE', 'FINANCE'),
    ('TREASURY', 'FINANCE'),
    ('HR', 'HR'),
    ('HUMAN RESOURCES', 'HR'),
    ('HUMAN RESOURCE', 'HR'),
    ('PERSONNEL', 'HR'),
    ('HRD', 'HR'),
    ('ADMIN', 'ADMIN'),
    ('ADMINISTRATION', 'ADMIN'),
    ('ADMINISTRATIVE', 'ADMIN'),
    ('GENERAL SERVICES', 'ADMIN'),
    ('GUIDANCE', 'GUIDANCE'),
    ('GUIDANCE OFFICE', 'GUIDANCE'),
    ('COUNSELING', 'GUIDANCE'),
    ('CASHIER', 'CASHIER'),
    ('CASHIERING', 'CASHIER'),
    ('CLINIC', 'CLINIC'),
    ('MEDICAL', 'CLINIC'),
    ('HEALTH', 'CLINIC'),
    ('INFIRMARY', 'CLINIC'),
    ('SECURITY', 'SECURITY'),
    ('GUARD', 'SECURITY'),
    ('MAINTENANCE', 'MAINTENANCE'),
    ('FACILITIES', 'MAINTENANCE'),
    ('JANITORIAL', 'MAINTENANCE'),
    ('SCHOLARSHIP', 'SCHOLARSHIP'),
    ('STUDENT AFFAIRS', 'STUDENT_AFFAIRS'),
    ('STUDENT SERVICES', 'STUDENT_AFFAIRS'),
    ('SUPPLY', 'SUPPLY'),
    ('PROCUREMENT', 'SUPPLY'),
    # staff assigned to an academic college
    ('CCS', 'CCS_ADMIN'),
    ('CHTM', 'CHTM_ADMIN'),
    ('CBA', 'CBA_ADMIN'),
    ('CTE', 'CTE_ADMIN'),
    ('COE', 'COE_ADMIN'),
    ('CON', 'CON_ADMIN'),
    ('CAS', 'CAS_ADMIN'),
)

SUBJECT_TYPES = (
    (('MAJOR', 'CORE', 'PROFESSIONAL'), 'Major'),
    (('MINOR', 'ELECTIVE'), 'Elective'),
    (('GEN', 'GENERAL', 'EDUCATION'), 'General Education'),
    (('LAB', 'LABORATORY'), 'Laboratory'),
    (('PE',), 'Physical Education'),
    (('NSTP',), 'NSTP'),
)

_STOPWORDS = frozenset({'AND', 'THE', 'OF', 'IN', 'WITH'})

_ACRONYM_RE = re.compile(r'\b(BS[A-Z]{1,4}|AB[A-Z]{0,3}|BA[A-Z]{0,3})\b')
_DEGREE_PATTERNS = (
    ('BS', re.compile(r'(?:BACHELOR OF SCIENCE|BS)(?:\s+IN)?\s+(.+?)(?:\s*\(|$)')),
    ('AB', re.compile(r'(?:BACHELOR OF ARTS|AB)(?:\s+IN)?\s+(.+?)(?:\s*\(|$)')),
)

_FILENAME_DEGREE_RE = re.compile(r'\b((?:BS|AB|BA)[A-Z]{1,4})\b')
_FILENAME_COMMON_RE = re.compile(
    r'\b(BSCS|BSIT|BSIS|BSHM|BSTM|BSBA|BSA|BSOA|BSED|BEED|BSCE|BSEE|BSN|ABCOM|ABPSYCH)\b')
_FILENAME_SEPARATED_RE = re.compile(r'BS[_-]([A-Z]{2,4})')


def classify(text: Optional[str], keyword_sets: Mapping[str, Sequence[str]],
             prefix_rules: Sequence[Tuple[Pattern, str]] = (),
             default: str = UNKNOWN) -> str:
    """
    Score each category by the summed length of its keywords found in the
    text; the strictly highest score wins and ties keep declaration order.
    With no keyword hit the prefix rules decide, else `default`.
    """
    upper = (text or '').upper().strip()

    best_code = None
    best_score = 0
    for code, keywords in keyword_sets.items():
        score = sum(len(keyword) for keyword in keywords if keyword in upper)
        if score > best_score:
            best_code, best_score = code, score

    if best_code is not None:
        return best_code

    for pattern, code in prefix_rules:
        if pattern.match(upper):
            return code

    return default


def classify_department(text: Optional[str]) -> str:
    return classify(text, DEPARTMENT_KEYWORDS, DEPARTMENT_PREFIX_RULES)


def department_from_program(program: Optional[str]) -> str:
    """Known program codes first (BSCS -> CCS, also inside 'BSIT - 3A'), then keywords"""
    text = (program or '').upper().strip()
    if text in KNOWN_PROGRAMS:
        return KNOWN_PROGRAMS[text]
    code = extract_course_code(text) if text else UNKNOWN
    if code in KNOWN_PROGRAMS:
        return KNOWN_PROGRAMS[code]
    return classify_department(text)


def classify_admin_type(position: Optional[str]) -> str:
    """Board Member / School Administrator, or UNKNOWN when no keyword matched"""
    return classify(position, ADMIN_TYPE_KEYWORDS)


def standardize_admin_department(department: Optional[str]) -> str:
    if not department or not department.strip():
        return 'ADMIN'

    upper = department.upper().strip()
    for name, code in _ADMIN_DEPARTMENT_MAP:
        if name in upper:
            return code

    cleaned = re.sub(r'[^A-Z0-9]', '_', upper)
    cleaned = re.sub(r'_+', '_', cleaned).strip('_')
    return cleaned or 'ADMIN'


def match_non_teaching_department(text: Optional[str]) -> Optional[str]:
    upper = (text or '').upper()
    if not upper.strip():
        return None
    for key, code in NON_TEACHING_DEPARTMENTS:
        if key in upper:
            return code
    return None


def standardize_non_teaching_department(text: Optional[str]) -> str:
    if not text or not text.strip() or text.strip().upper() == UNKNOWN:
        return UNKNOWN
    return match_non_teaching_department(text) or text.strip().upper()


def title_words(value: str) -> str:
    """'intro to COMPUTING' -> 'Intro To Computing' (split on single spaces)"""
    return ' '.join(word[:1].upper() + word[1:].lower() for word in value.split(' '))


def normalize_subject_type(value: str) -> str:
    upper = value.upper()
    for keywords, label in SUBJECT_TYPES:
        if any(keyword in upper for keyword in keywords):
            return label
    return title_words(value.strip())


def _degree_acronym(prefix: str, program: str) -> Optional[str]:
    words = [w for w in program.split() if len(w) > 2 and w not in _STOPWORDS]
    if len(words) == 1:
        return prefix + words[0][:4]
    if len(words) > 1:
        return prefix + ''.join(w[0] for w in words)
    return None


def extract_course_code(program_name: Optional[str]) -> str:
    """
    Course code from a program title.

    'BSIT - Information Technology' -> 'BSIT'
    'Bachelor of Science in Computer Science' -> 'BSCS'
    'Bachelor of Arts in Psychology' -> 'ABPSYC'
    """
    if not program_name or not program_name.strip():
        return UNKNOWN

    upper = program_name.upper().strip()

    match = _ACRONYM_RE.search(upper)
    if match:
        return match.group(1)

    for prefix, pattern in _DEGREE_PATTERNS:
        match = pattern.search(upper)
        if match:
            acronym = _degree_acronym(prefix, match.group(1).strip())
            if acronym:
                return acronym

    return re.sub(r'[^A-Z0-9]', '', upper)[:10]


def course_from_filename(filename: Optional[str]) -> Optional[str]:
    if not filename:
        return None

    name = re.split(r'[/\\]', filename)[-1].upper()
    spaced = re.sub(r'[_\-.]+', ' ', name)

    match = _FILENAME_DEGREE_RE.search(spaced) or _FILENAME_COMMON_RE.search(spaced)
    if match:
        return match.group(1)

    match = _FILENAME_SEPARATED_RE.search(name)
    if match:
        return 'BS' + match.group(1)

    return None
