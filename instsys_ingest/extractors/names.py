from __future__ import annotations

import re
from pathlib import PurePath
from typing import Dict, List, Optional

from .scanner import split_lines

# Words that belong to the family name when they sit right before the last token
SURNAME_PARTICLES = frozenset({
    'DE', 'DEL', 'DELA', 'DELOS', 'DELAS', 'LA', 'LAS', 'LOS', 'SAN', 'STA', 'STA.',
    'STO', 'STO.', 'VAN', 'VON', 'DER', 'DEN', 'DI', 'DA', 'DOS', 'DAS', 'LE', 'MAC', 'MC',
})

JOB_TITLES = (
    'FLIGHT ATTENDANT', 'FLIGHT TRAINING', 'TEACHER', 'PROFESSOR', 'INSTRUCTOR', 'ENGINEER',
    'ACCOUNTANT', 'MANAGER', 'DIRECTOR', 'COORDINATOR', 'SPECIALIST',
    'ANALYST', 'DEVELOPER', 'DESIGNER', 'CONSULTANT', 'ADMINISTRATOR',
    'ASSISTANT', 'ASSOCIATE', 'SENIOR', 'JUNIOR', 'HEAD', 'CHIEF', 'TRAINING',
)

_NOT_A_NAME = ('CURRICULUM', 'VITAE', 'RESUME', 'CV', 'CONTACT', 'EDUCATION', 'EXPERIENCE')

_WORD_RE = re.compile(r"^[A-Za-z'-]+$")
_TITLE_PAIR_RE = re.compile(r'^[A-Z][a-z]+\s+[A-Z][a-z]+')


def _surname_start(tokens: List[str]) -> int:
    """Index where the family name starts in a 'First Middle Last' token list"""
    start = len(tokens) - 1
    while start > 1 and tokens[start - 1].upper() in SURNAME_PARTICLES:
        start -= 1
    return start


def parse_full_name(full_name: str) -> Dict[str, str]:
    """
    Split a person's name into surname / first_name / middle_name.

    'Dela Cruz, Juan Santos' and 'Juan Santos Dela Cruz' both give
    surname 'Dela Cruz', first_name 'Juan', middle_name 'Santos'.
    """
    result = {'surname': '', 'first_name': '', 'middle_name': ''}
    full_name = (full_name or '').strip()
    if not full_name:
        return result

    if ',' in full_name:
        surname, _, rest = full_name.partition(',')
        result['surname'] = surname.strip()
        given = rest.replace(',', ' ').split()
        if given:
            result['first_name'] = given[0]
            result['middle_name'] = ' '.join(given[1:])
        return result

    tokens = full_name.split()
    if len(tokens) >= 3:
        start = _surname_start(tokens)
        result['first_name'] = tokens[0]
        result['middle_name'] = ' '.join(tokens[1:start])
        result['surname'] = ' '.join(tokens[start:])
    elif len(tokens) == 2:
        result['first_name'], result['surname'] = tokens
    else:
        result['first_name'] = full_name
    return result


def split_surname_first(full_name: str) -> Dict[str, str]:
    """'Surname, Given Names' or 'Given Names Surname' -> surname / first_name"""
    full_name = (full_name or '').strip()
    if ',' in full_name:
        surname, _, rest = full_name.partition(',')
        return {'surname': surname.strip(), 'first_name': rest.strip()}

    tokens = full_name.split()
    if len(tokens) >= 2:
        start = _surname_start(tokens)
        return {'surname': ' '.join(tokens[start:]), 'first_name': ' '.join(tokens[:start])}
    return {'surname': '', 'first_name': full_name}


def _is_job_title(upper: str) -> bool:
    return any(title in upper for title in JOB_TITLES)


def name_from_structure(text: str) -> Optional[Dict[str, str]]:
    """
    Guess the owner's name from the top of an unlabeled document.

    First pass: within the first 10 lines, a 2-4 word alphabetic line that is
    not a job title, not a section header and not all caps. Second pass:
    within the first 15 lines, a 'Capitalized Capitalized' line under 40 chars.
    """
    lines = split_lines(text)

    for line in lines[:10]:
        upper = line.upper()
        if _is_job_title(upper):
            continue
        if len(line) > 50 or line.isdigit():
            continue
        if any(word in upper for word in _NOT_A_NAME):
            continue

        words = [w for w in line.split() if len(w) > 1]
        if 2 <= len(words) <= 4 and all(_WORD_RE.match(w) for w in words):
            if re.search(r'[a-z]', line) or re.match(r'^[A-Z][a-z]', line):
                return parse_full_name(line)

    for line in lines[:15]:
        if _is_job_title(line.upper()):
            continue
        if _TITLE_PAIR_RE.match(line) and len(line) < 40:
            if 2 <= len(line.split()) <= 4:
                return parse_full_name(line)

    return None


def name_from_filename(filename: str) -> Dict[str, str]:
    """'juan_dela-cruz.pdf' -> first_name 'juan', surname 'cruz'"""
    stem = PurePath(filename).stem if filename else ''
    parts = [p for p in re.split(r'[\s_-]+', stem) if p]
    if len(parts) >= 2:
        return {'first_name': parts[0], 'surname': parts[-1]}
    return {'first_name': parts[0] if parts else 'Unknown', 'surname': 'Faculty'}


def build_full_name(info: Dict[str, str], default: str) -> str:
    surname = info.get('surname') or ''
    first_name = info.get('first_name') or ''
    if surname and first_name:
        return f"{surname}, {first_name}"
    return surname or first_name or default
