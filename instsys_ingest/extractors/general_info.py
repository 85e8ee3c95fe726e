"""
Institutional documents (mission and vision, objectives, history, core values,
hymn) extracted from PDF text. The document type comes from the filename.
"""
from __future__ import annotations

import re
from pathlib import PurePath
from typing import Any, Dict, List, Optional

from ..log import get_logger
from .scanner import split_lines

logger = get_logger(__name__)

MISSION_VISION = 'mission_vision'
OBJECTIVES = 'objectives'
HISTORY = 'history'
CORE_VALUES = 'core_values'
HYMN = 'hymn'
GENERAL = 'general'

# First matching type wins
INFO_TYPE_KEYWORDS = (
    (MISSION_VISION, ('mission', 'vision', 'missio')),
    (OBJECTIVES, ('objective', 'object')),
    (HISTORY, ('history', 'background', 'histor')),
    (CORE_VALUES, ('corevalue', 'value', 'core')),
    (HYMN, ('hymn', 'song', 'anthem')),
)

REPORT_TITLES = {
    MISSION_VISION: 'MISSION AND VISION',
    OBJECTIVES: 'OBJECTIVES',
    HISTORY: 'INSTITUTIONAL HISTORY',
    CORE_VALUES: 'CORE VALUES',
    HYMN: 'INSTITUTIONAL HYMN',
    GENERAL: 'GENERAL INFORMATION',
}

# Word-bounded so 'provision of ...' never switches into the vision section
_VISION_HEADER = re.compile(r'^VISION\b|\bVISION\s*$', re.IGNORECASE)
_MISSION_HEADER = re.compile(r'^MISSION\b|\bMISSION\s*$', re.IGNORECASE)
_BULLET_RE = re.compile(r'^[•\-*●○]')
_NUMBERED_RE = re.compile(r'^\d+[.)]')

MIN_SECTION_LINE = 10
MIN_VALUE_LINE = 3


def detect_info_type(filename: str) -> str:
    stem = PurePath(filename).stem if filename else ''
    normalized = re.sub(r'[_\s\-&]', '', stem.lower())
    for info_type, keywords in INFO_TYPE_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return info_type
    return GENERAL


def parse_mission_vision(text: str) -> Dict[str, str]:
    sections: Dict[str, List[str]] = {'vision': [], 'mission': []}
    current = None

    for line in split_lines(text):
        if _VISION_HEADER.search(line):
            current = 'vision'
            continue
        if _MISSION_HEADER.search(line):
            current = 'mission'
            continue
        if current and len(line) > MIN_SECTION_LINE:
            sections[current].append(line)

    return {name: ' '.join(lines).strip() for name, lines in sections.items()}


def starts_new_objective(line: str) -> bool:
    line = line.strip()
    if _BULLET_RE.match(line) or _NUMBERED_RE.match(line):
        return True
    return line[:1].isupper() and len(line) > 20


def parse_objectives(text: str) -> Dict[str, List[str]]:
    objectives: List[str] = []
    in_section = False
    current = ''

    for line in split_lines(text):
        if 'OBJECTIVE' in line.upper():
            in_section = True
            continue
        if not in_section or len(line) <= MIN_SECTION_LINE:
            continue
        if starts_new_objective(line):
            if current:
                objectives.append(current.strip())
            current = line
        else:
            current += ' ' + line

    if current:
        objectives.append(current.strip())
    return {'objectives': objectives}


def parse_core_values(text: str) -> Dict[str, List[str]]:
    values: List[str] = []
    in_section = False
    for line in split_lines(text):
        upper = line.upper()
        if 'CORE VALUE' in upper or 'VALUES' in upper:
            in_section = True
            continue
        if in_section and len(line) > MIN_VALUE_LINE:
            values.append(line)
    return {'core_values': values}


class GeneralInfoExtractor:
    data_type = 'general_info_pdf'

    def extract(self, text: str, source_file: str = '') -> Optional[Dict[str, Any]]:
        if not text or not text.strip():
            logger.warning(f"❌ No text extracted from {source_file or 'document'}")
            return None

        info_type = detect_info_type(source_file)
        content = self.parse(info_type, text)
        logger.info(f"✅ Extracted {info_type} ({len(text)} characters)")

        return {
            'metadata': {
                'info_type': info_type,
                'source_file': PurePath(source_file).name if source_file else '',
                'data_type': self.data_type,
                'character_count': len(text),
            },
            'content': content,
            'raw_text': text,
            'formatted_text': self.format_general_info(info_type, content),
        }

    def parse(self, info_type: str, text: str) -> Dict[str, Any]:
        if info_type == MISSION_VISION:
            return parse_mission_vision(text)
        if info_type == OBJECTIVES:
            return parse_objectives(text)
        if info_type == CORE_VALUES:
            return parse_core_values(text)
        if info_type == HISTORY:
            return {'history': text.strip()}
        if info_type == HYMN:
            return {'hymn': text.strip()}
        return {'content': text}

    def format_general_info(self, info_type: str, content: Dict[str, Any]) -> str:
        text = '=' * 60 + '\n'
        text += REPORT_TITLES.get(info_type, REPORT_TITLES[GENERAL]) + '\n'
        text += '=' * 60 + '\n\n'

        if info_type == MISSION_VISION:
            if content.get('vision'):
                text += f"VISION:\n{content['vision']}\n\n"
            if content.get('mission'):
                text += f"MISSION:\n{content['mission']}\n"
        elif info_type == OBJECTIVES:
            for index, objective in enumerate(content['objectives'], 1):
                text += f"{index}. {objective}\n\n"
        elif info_type == CORE_VALUES:
            for index, value in enumerate(content['core_values'], 1):
                text += f"{index}. {value}\n"
        elif info_type in (HISTORY, HYMN):
            text += content[info_type] + '\n'
        else:
            text += content['content'] + '\n'

        return text
