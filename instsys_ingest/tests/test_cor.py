import unittest

from instsys_ingest.extractors.cor import (
    CORExtractor,
    clean_program_info_value,
    header_column,
    split_time_range,
)

SCHEDULE_HEADER = ["Subject Code", "Description", "Units", "Day", "Time", "Room"]


def cor_grid():
    return [
        ["CERTIFICATE OF REGISTRATION"],
        ["Program:", "BSIT", None, "Year Level:", "3rd Year"],
        ["Section:", "A", None, "Adviser:", "Prof. Ana Cruz"],
        [],
        SCHEDULE_HEADER,
        ["CS301", "Software Engineering", "3", "MWF", "8:00 AM - 9:00 AM", "Rm 201"],
        ["CS302", "Networks", "3", "TTh", "1:00 PM - 2:30 PM", "Lab 2"],
        [],
        ["Total Units:", "6"],
    ]


class TestCORExtractor(unittest.TestCase):
    def setUp(self):
        self.extractor = CORExtractor()

    def test_program_block(self):
        metadata = self.extractor.extract(cor_grid(), source_file="cor/juan.xlsx")["metadata"]
        self.assertEqual(metadata["program"], "BSIT")
        self.assertEqual(metadata["year_level"], "3")
        self.assertEqual(metadata["section"], "A")
        self.assertEqual(metadata["adviser"], "Prof. Ana Cruz")
        self.assertEqual(metadata["department"], "CCS")
        self.assertEqual(metadata["total_units"], "6")
        self.assertEqual(metadata["subject_count"], 2)
        self.assertEqual(metadata["source_file"], "juan.xlsx")

    def test_schedule_rows(self):
        schedule = self.extractor.extract(cor_grid())["cor_data"]["schedule"]
        self.assertEqual(schedule[0], {
            "Subject Code": "CS301",
            "Description": "Software Engineering",
            "Units": "3",
            "Day": "MWF",
            "Room": "Rm 201",
            "Time Start": "8:00 AM",
            "Time End": "9:00 AM",
        })
        self.assertEqual(schedule[1]["Time End"], "2:30 PM")

    def test_academic_year_is_not_a_year_level(self):
        grid = [
            ["ACADEMIC YEAR 2024-2025"],
            ["Program:", "BSIT"],
            SCHEDULE_HEADER,
            ["CS101", "Intro", "3", "M", "8:00-9:00", "R1"],
        ]
        metadata = self.extractor.extract(grid)["metadata"]
        self.assertEqual(metadata["year_level"], "")

    def test_headerless_schedule_uses_fixed_layout(self):
        grid = [
            ["Program: BSCS"],
            ["CS101", "Intro to Computing", "Lec", "3", "MWF", "8:00 AM", "9:00 AM", "R1"],
        ]
        record = self.extractor.extract(grid)
        entry = record["cor_data"]["schedule"][0]
        self.assertEqual(entry["Type"], "Lec")
        self.assertEqual(entry["Units"], "3")
        self.assertEqual(entry["Time End"], "9:00 AM")
        self.assertEqual(record["metadata"]["program"], "BSCS")
        self.assertIsNone(record["metadata"]["total_units"])

    def test_program_from_filename(self):
        grid = [SCHEDULE_HEADER, ["HM101", "Kitchen", "3", "F", "8-9", "K1"]]
        metadata = self.extractor.extract(grid, source_file="BSHM_COR.xlsx")["metadata"]
        self.assertEqual(metadata["program"], "BSHM")
        self.assertEqual(metadata["department"], "CHTM")

    def test_no_program_is_skipped(self):
        self.assertIsNone(self.extractor.extract([SCHEDULE_HEADER], source_file="cor.xlsx"))

    def test_total_units_prefers_below_over_above(self):
        grid = [
            ["CS301", "x", "3"],
            [None, "TOTAL UNITS", None],
            [None, "21"],
        ]
        self.assertEqual(self.extractor.scan_total_units(grid), "21")

    def test_report(self):
        text = self.extractor.extract(cor_grid())["formatted_text"]
        self.assertTrue(text.startswith("COR (Certificate of Registration) - Class Schedule"))
        self.assertIn("ENROLLED SUBJECTS (2 subjects):", text)
        self.assertIn("• Schedule: MWF 8:00 AM-9:00 AM", text)
        self.assertIn("Total Units: 6", text)


class TestCORHelpers(unittest.TestCase):
    def test_split_time_range(self):
        self.assertEqual(split_time_range("8:00 AM - 9:30 AM"), ("8:00 AM", "9:30 AM"))
        self.assertEqual(split_time_range("8:00 to 9:00"), ("8:00", "9:00"))
        self.assertEqual(split_time_range("TBA"), ("TBA", "TBA"))

    def test_header_column(self):
        self.assertEqual(header_column("TIME START"), "Time Start")
        self.assertEqual(header_column("TIME END"), "Time End")
        self.assertEqual(header_column("SUBJECT"), "Subject")
        self.assertIsNone(header_column("REMARKS"))

    def test_clean_values(self):
        self.assertEqual(clean_program_info_value("2nd Year", "Year Level"), "2")
        self.assertIsNone(clean_program_info_value("2024", "Year Level"))
        self.assertEqual(clean_program_info_value("Section: 3b", "Section"), "3B")
        self.assertIsNone(clean_program_info_value("Room 5", "Adviser"))


if __name__ == "__main__":
    unittest.main()
