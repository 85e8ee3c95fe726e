import unittest

from instsys_ingest.extractors.personal import (
    AdminExtractor,
    NonTeachingFacultyExtractor,
    TeachingFacultyExtractor,
    format_field,
    infer_academic_department,
)


def board_member_grid():
    return [
        ["SURNAME", "Reyes"],
        ["FIRST NAME", "Ana"],
        ["DATE OF BIRTH", "1970-01-01"],
        ["POSITION", "Board Member"],
        ["EMAIL:", "ana.reyes@school.edu"],
        ["FATHER'S NAME", "Pedro Reyes"],
        ["DATE OF BIRTH", "1945-05-05"],
        ["OCCUPATION", "Farmer"],
        ["GSIS NO.", "123-456"],
    ]


class TestAdminExtractor(unittest.TestCase):
    def setUp(self):
        self.extractor = AdminExtractor()

    def test_board_member(self):
        record = self.extractor.extract(board_member_grid(), source_file="admins/reyes.xlsx")
        metadata = record["metadata"]
        self.assertEqual(metadata["full_name"], "Reyes, Ana")
        self.assertEqual(metadata["admin_type"], "Board Member")
        self.assertEqual(metadata["department"], "BOARD")
        self.assertEqual(metadata["email"], "ana.reyes@school.edu")
        self.assertEqual(metadata["data_type"], "admin_excel")
        self.assertEqual(metadata["source_file"], "reyes.xlsx")

    def test_family_labels_use_row_context(self):
        info = self.extractor.extract(board_member_grid())["admin_data"]
        self.assertEqual(info["date_of_birth"], "1970-01-01")
        self.assertEqual(info["father_name"], "Pedro Reyes")
        self.assertEqual(info["father_dob"], "1945-05-05")
        self.assertEqual(info["father_occupation"], "Farmer")
        self.assertEqual(info["mother_dob"], "")
        self.assertEqual(info["gsis"], "123-456")

    def test_unknown_admin_type_keeps_sheet_department(self):
        grid = [
            ["SURNAME", "Lim"],
            ["FIRST NAME", "Carlo"],
            ["POSITION", "Registrar"],
            ["DEPARTMENT", "Office of the President"],
        ]
        metadata = self.extractor.extract(grid)["metadata"]
        self.assertEqual(metadata["admin_type"], "School Administrator")
        self.assertEqual(metadata["department"], "OFFICE_OF_THE_PRESIDENT")

    def test_report_sections(self):
        text = self.extractor.extract(board_member_grid())["formatted_text"]
        self.assertIn("ADMINISTRATIVE STAFF INFORMATION", text)
        self.assertIn("Department: Administration", text)
        self.assertIn("Father's Occupation: Farmer", text)
        self.assertIn("Mother's Name: N/A", text)
        self.assertIn("GSIS: 123-456", text)

    def test_same_grid_same_record(self):
        self.assertEqual(self.extractor.extract(board_member_grid()),
                         self.extractor.extract(board_member_grid()))

    def test_no_name_is_skipped(self):
        self.assertIsNone(self.extractor.extract([["POSITION", "Dean"]]))


class TestTeachingFacultyExtractor(unittest.TestCase):
    def setUp(self):
        self.extractor = TeachingFacultyExtractor()

    def test_full_name_and_department(self):
        grid = [
            ["FULL NAME OF EMPLOYER", "Acme Corp"],
            ["FULL NAME", "Cruz, Juan"],
            ["POSITION", "Instructor"],
            ["SPECIALIZATION", "Database Programming"],
        ]
        record = self.extractor.extract(grid)
        info = record["faculty_data"]
        self.assertEqual((info["surname"], info["first_name"]), ("Cruz", "Juan"))
        self.assertEqual(info["department"], "CCS")
        self.assertEqual(record["metadata"]["faculty_type"], "teaching")
        self.assertIn("Specialization: Database Programming", record["formatted_text"])

    def test_label_neighbour_is_not_a_value(self):
        grid = [["SURNAME", "FIRST NAME"], ["Cruz", "Juan"]]
        info = self.extractor.extract(grid)["faculty_data"]
        self.assertEqual(info["surname"], "Cruz")
        self.assertEqual(info["first_name"], "Juan")

    def test_unclassified_department_is_kept(self):
        info = {"position": "Lecturer", "department": "Graduate School"}
        self.assertEqual(infer_academic_department(info), "Graduate School")
        self.assertEqual(infer_academic_department({"department": "  Graduate School "}), "Graduate School")
        self.assertEqual(infer_academic_department({}), "UNKNOWN")


class TestNonTeachingFacultyExtractor(unittest.TestCase):
    def setUp(self):
        self.extractor = NonTeachingFacultyExtractor()

    def grid(self, position, department):
        return [
            ["SURNAME", "Garcia"],
            ["FIRST NAME", "Leo"],
            ["POSITION", position],
            ["DEPARTMENT", department],
        ]

    def test_department_table(self):
        record = self.extractor.extract(self.grid("Clerk", "Office of the Registrar"))
        self.assertEqual(record["metadata"]["department"], "REGISTRAR")
        self.assertEqual(record["metadata"]["data_type"], "non_teaching_faculty_excel")

    def test_position_fallback(self):
        record = self.extractor.extract(self.grid("Cashier II", None))
        self.assertEqual(record["metadata"]["department"], "CASHIER")

    def test_admin_support_default(self):
        record = self.extractor.extract(self.grid("Driver", "Motor Pool"))
        self.assertEqual(record["metadata"]["department"], "ADMIN_SUPPORT")

    def test_office_address_is_not_the_office(self):
        grid = [
            ["SURNAME", "Garcia"],
            ["FIRST NAME", "Leo"],
            ["OFFICE ADDRESS", "Main Campus, Quezon City"],
            ["OFFICE", "Office of the Registrar"],
        ]
        self.assertEqual(self.extractor.extract_info(grid)["department"], "Office of the Registrar")
        self.assertEqual(self.extractor.extract(grid)["metadata"]["department"], "REGISTRAR")


class TestFormatField(unittest.TestCase):
    def test_values(self):
        self.assertEqual(format_field(None), "N/A")
        self.assertEqual(format_field(""), "N/A")
        self.assertEqual(format_field("None"), "N/A")
        self.assertEqual(format_field(170), "170")


if __name__ == "__main__":
    unittest.main()
