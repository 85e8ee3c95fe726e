import unittest
from pathlib import Path
from unittest import mock

import pandas as pd

from instsys_ingest.errors import UnsupportedDocumentError
from instsys_ingest.loaders import grid_from_dataframe, read_grid, read_pdf_text


class TestReadGrid(unittest.TestCase):
    def test_nan_becomes_none(self):
        df = pd.DataFrame([["PROGRAM:", float("nan")], [1.0, "BSIT"]])
        self.assertEqual(grid_from_dataframe(df), [["PROGRAM:", None], [1.0, "BSIT"]])

    @mock.patch("instsys_ingest.loaders.pd.read_excel")
    def test_reads_without_header(self, read_excel):
        read_excel.return_value = pd.DataFrame([["SURNAME", "Cruz"]])
        self.assertEqual(read_grid("faculty/cruz.XLSX"), [["SURNAME", "Cruz"]])
        read_excel.assert_called_once_with(Path("faculty/cruz.XLSX"), header=None, sheet_name=0)

    def test_rejects_other_files(self):
        with self.assertRaises(UnsupportedDocumentError):
            read_grid("students.csv")


class TestReadPdfText(unittest.TestCase):
    @mock.patch("instsys_ingest.loaders.fitz.open")
    def test_pages_joined(self, fitz_open):
        pages = [mock.Mock(), mock.Mock()]
        pages[0].get_text.return_value = "VISION"
        pages[1].get_text.return_value = "MISSION"
        doc = mock.MagicMock()
        doc.__iter__.return_value = iter(pages)
        fitz_open.return_value.__enter__.return_value = doc

        self.assertEqual(read_pdf_text("mission_vision.pdf"), "VISION\nMISSION")
        fitz_open.assert_called_once_with("mission_vision.pdf")

    def test_rejects_other_files(self):
        with self.assertRaises(UnsupportedDocumentError):
            read_pdf_text("resume.docx")


if __name__ == "__main__":
    unittest.main()
