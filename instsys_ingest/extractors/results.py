from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ExtractionStatus(Enum):
    """Outcome of processing one document"""
    SUCCESS = "success"
    PARTIAL = "partial"    # record produced, structural payload empty
    SKIPPED = "skipped"    # nothing usable found in the document
    FAILED = "failed"      # the file could not be read or parsed


@dataclass
class ExtractionResult:
    status: ExtractionStatus
    source_file: str
    kind: str
    record: Optional[Dict[str, Any]] = None
    message: str = ""
    stored: bool = False

    @property
    def ok(self) -> bool:
        return self.status in (ExtractionStatus.SUCCESS, ExtractionStatus.PARTIAL)

    @classmethod
    def success(cls, source_file, kind, record, message=""):
        return cls(ExtractionStatus.SUCCESS, source_file, kind, record, message)

    @classmethod
    def partial(cls, source_file, kind, record, message=""):
        return cls(ExtractionStatus.PARTIAL, source_file, kind, record, message)

    @classmethod
    def skipped(cls, source_file, kind, message=""):
        return cls(ExtractionStatus.SKIPPED, source_file, kind, None, message)

    @classmethod
    def failed(cls, source_file, kind, message=""):
        return cls(ExtractionStatus.FAILED, source_file, kind, None, message)
