"""
Routing from a file to its extractor, result wrapping and batch reports.

One document's failure never stops a batch: loader, extractor and store
exceptions become FAILED results, extractor misses become SKIPPED, empty
tables become PARTIAL.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .errors import IngestError, UnsupportedDocumentError
from .extractors import (AdminExtractor, CORExtractor, CurriculumExtractor, ExtractionResult,
                         ExtractionStatus, GeneralInfoExtractor, NonTeachingFacultyExtractor,
                         NonTeachingScheduleExtractor, ResumeExtractor, StudentListExtractor,
                         TeachingFacultyExtractor)
from .loaders import read_grid, read_pdf_text
from .log import get_logger

logger = get_logger(__name__)


class DocumentKind(Enum):
    STUDENTS = "students"
    COR = "cor"
    CURRICULUM = "curriculum"
    ADMIN = "admin"
    TEACHING_FACULTY = "teaching_faculty"
    NON_TEACHING_FACULTY = "non_teaching_faculty"
    NON_TEACHING_SCHEDULE = "non_teaching_schedule"
    RESUME = "resume"
    GENERAL_INFO = "general_info"


EXTRACTORS = {
    DocumentKind.STUDENTS: StudentListExtractor,
    DocumentKind.COR: CORExtractor,
    DocumentKind.CURRICULUM: CurriculumExtractor,
    DocumentKind.ADMIN: AdminExtractor,
    DocumentKind.TEACHING_FACULTY: TeachingFacultyExtractor,
    DocumentKind.NON_TEACHING_FACULTY: NonTeachingFacultyExtractor,
    DocumentKind.NON_TEACHING_SCHEDULE: NonTeachingScheduleExtractor,
    DocumentKind.RESUME: ResumeExtractor,
    DocumentKind.GENERAL_INFO: GeneralInfoExtractor,
}

PDF_KINDS = (DocumentKind.RESUME, DocumentKind.GENERAL_INFO)


def _structural_payload(kind: DocumentKind, record: Dict[str, Any]):
    """The table a record was built around; None for single-person kinds"""
    if kind == DocumentKind.STUDENTS:
        return record['students']
    if kind == DocumentKind.COR:
        return record['cor_data']['schedule']
    if kind == DocumentKind.CURRICULUM:
        return record['curriculum_data']['all_subjects']
    if kind == DocumentKind.NON_TEACHING_SCHEDULE:
        return record['schedule_data']['schedule']
    return None


def resolve_kind(kind) -> DocumentKind:
    if isinstance(kind, DocumentKind):
        return kind
    try:
        return DocumentKind(str(kind).lower())
    except ValueError:
        choices = ', '.join(k.value for k in DocumentKind)
        raise UnsupportedDocumentError(f"Unknown document kind {kind!r} (choose from {choices})")


def stamp(record: Dict[str, Any], kind: DocumentKind) -> None:
    key = 'extracted_at' if kind in PDF_KINDS else 'created_at'
    record['metadata'][key] = datetime.now(timezone.utc)


def process_file(path, kind, store=None) -> ExtractionResult:
    """
    Load, extract and optionally store one document.

    Args:
        path: spreadsheet (.xlsx/.xls) or PDF file
        kind: DocumentKind or its value, e.g. "curriculum"
        store: object with store(record) -> bool, e.g. RecordStore

    Raises:
        UnsupportedDocumentError: unknown kind or wrong file type for the kind
    """
    kind = resolve_kind(kind)
    path = Path(path)
    source_file = path.name

    try:
        data = read_pdf_text(path) if kind in PDF_KINDS else read_grid(path)
    except IngestError:
        raise
    except Exception as e:
        logger.error(f"❌ Error reading {source_file}: {e}")
        return ExtractionResult.failed(source_file, kind.value, str(e))

    try:
        record = EXTRACTORS[kind]().extract(data, source_file=str(path))
    except Exception as e:
        logger.error(f"❌ Error extracting {source_file}: {e}")
        return ExtractionResult.failed(source_file, kind.value, str(e))

    if record is None:
        logger.warning(f"⚠️ Skipped {source_file}: no {kind.value} record found")
        return ExtractionResult.skipped(source_file, kind.value, f"no {kind.value} record found")

    stamp(record, kind)
    payload = _structural_payload(kind, record)
    if payload is not None and not payload:
        result = ExtractionResult.partial(source_file, kind.value, record, "no table rows found")
    else:
        result = ExtractionResult.success(source_file, kind.value, record)

    if store is not None:
        try:
            result.stored = store.store(record)
        except Exception as e:
            logger.error(f"❌ Error storing {source_file}: {e}")
            return ExtractionResult.failed(source_file, kind.value, str(e))
        if not result.stored:
            result.message = (result.message + '; ' if result.message else '') + 'not stored'

    return result


@dataclass
class BatchReport:
    results: List[ExtractionResult] = field(default_factory=list)

    def add(self, result: ExtractionResult) -> None:
        self.results.append(result)

    def count(self, status: ExtractionStatus) -> int:
        return sum(1 for result in self.results if result.status == status)

    @property
    def stored(self) -> int:
        return sum(1 for result in self.results if result.stored)

    def summary(self) -> str:
        counts = ', '.join(f"{status.value}: {self.count(status)}" for status in ExtractionStatus)
        return f"{len(self.results)} file(s) - {counts}, stored: {self.stored}"


def process_batch(paths: Iterable, kind, store=None, report: Optional[BatchReport] = None) -> BatchReport:
    report = report if report is not None else BatchReport()
    kind = resolve_kind(kind)

    for path in paths:
        try:
            result = process_file(path, kind, store=store)
        except IngestError as e:
            logger.error(f"❌ {e}")
            result = ExtractionResult.failed(Path(path).name, kind.value, str(e))
        report.add(result)

    logger.info(f"📋 Batch done: {report.summary()}")
    return report
