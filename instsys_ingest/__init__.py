"""
InstSys ingest: institutional spreadsheets and PDFs to structured records.

    from instsys_ingest import process_file
    result = process_file("BSIT_curriculum.xlsx", "curriculum")
"""

from .config import Config
from .errors import IngestError, UnsupportedDocumentError
from .extractors import ExtractionResult, ExtractionStatus
from .pipeline import BatchReport, DocumentKind, process_batch, process_file

__version__ = "0.1.0"

__all__ = [
    "BatchReport",
    "Config",
    "DocumentKind",
    "ExtractionResult",
    "ExtractionStatus",
    "IngestError",
    "UnsupportedDocumentError",
    "process_batch",
    "process_file",
]
