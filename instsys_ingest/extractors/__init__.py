"""
Document extractors.

Each extractor takes a raw grid (spreadsheets) or raw text (PDFs) plus the
source filename and returns a record dict, or None when the document holds
nothing usable.
"""

from .cor import CORExtractor
from .curriculum import CurriculumExtractor
from .general_info import GeneralInfoExtractor
from .personal import AdminExtractor, NonTeachingFacultyExtractor, TeachingFacultyExtractor
from .results import ExtractionResult, ExtractionStatus
from .resume import ResumeExtractor
from .schedule import NonTeachingScheduleExtractor
from .students import StudentListExtractor

__all__ = [
    "AdminExtractor",
    "CORExtractor",
    "CurriculumExtractor",
    "ExtractionResult",
    "ExtractionStatus",
    "GeneralInfoExtractor",
    "NonTeachingFacultyExtractor",
    "NonTeachingScheduleExtractor",
    "ResumeExtractor",
    "StudentListExtractor",
    "TeachingFacultyExtractor",
]
