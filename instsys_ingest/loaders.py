"""
File readers: spreadsheets to raw grids (pandas) and PDFs to text (PyMuPDF).

Errors from pandas / fitz are not caught here; the pipeline reports them per
document.
"""
from pathlib import Path
from typing import Any, List, Optional

import fitz  # PyMuPDF
import pandas as pd

from .errors import UnsupportedDocumentError
from .log import get_logger

logger = get_logger(__name__)

EXCEL_EXTENSIONS = ('.xlsx', '.xls')
PDF_EXTENSIONS = ('.pdf',)


def grid_from_dataframe(df: pd.DataFrame) -> List[List[Optional[Any]]]:
    """Rows of cell values with NaN replaced by None"""
    return [
        [value if pd.notna(value) else None for value in row]
        for row in df.itertuples(index=False, name=None)
    ]


def read_grid(path, sheet=0) -> List[List[Optional[Any]]]:
    path = Path(path)
    if path.suffix.lower() not in EXCEL_EXTENSIONS:
        raise UnsupportedDocumentError(f"Not a spreadsheet: {path.name}")

    df = pd.read_excel(path, header=None, sheet_name=sheet)
    logger.info(f"📋 {path.name}: {df.shape[0]} rows x {df.shape[1]} columns")
    return grid_from_dataframe(df)


def read_pdf_text(path) -> str:
    path = Path(path)
    if path.suffix.lower() not in PDF_EXTENSIONS:
        raise UnsupportedDocumentError(f"Not a PDF: {path.name}")

    with fitz.open(str(path)) as doc:
        text = '\n'.join(page.get_text() for page in doc)

    logger.info(f"📄 {path.name}: {len(text)} characters extracted")
    return text
