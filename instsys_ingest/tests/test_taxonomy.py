import unittest

from instsys_ingest.extractors.taxonomy import (
    UNKNOWN,
    classify,
    classify_admin_type,
    classify_department,
    course_from_filename,
    department_from_program,
    extract_course_code,
    match_non_teaching_department,
    normalize_subject_type,
    standardize_admin_department,
    standardize_non_teaching_department,
    title_words,
)


class TestClassify(unittest.TestCase):
    def test_highest_score_wins(self):
        self.assertEqual(classify_department("Computer Science"), "CCS")
        self.assertEqual(classify_department("Hotel and Restaurant Management"), "CHTM")
        self.assertEqual(classify_department("College of Nursing"), "CON")
        self.assertEqual(classify_department("BS COMPUTER SCIENCE"), "CCS")

    def test_tie_keeps_declaration_order(self):
        sets = {"A": ("X",), "B": ("Y",)}
        self.assertEqual(classify("xy", sets), "A")

    def test_prefix_rules_after_keywords(self):
        self.assertEqual(classify_department("CS-101"), "CCS")
        self.assertEqual(classify_department("NUR 2"), "CON")

    def test_unknown(self):
        self.assertEqual(classify_department(""), UNKNOWN)
        self.assertEqual(classify_department(None), UNKNOWN)
        self.assertEqual(classify("zzz", {"A": ("X",)}, default="NONE"), "NONE")


class TestDepartmentFromProgram(unittest.TestCase):
    def test_known_codes(self):
        self.assertEqual(department_from_program("BSIT"), "CCS")
        self.assertEqual(department_from_program("bshm"), "CHTM")
        self.assertEqual(department_from_program("BSIT - 3A"), "CCS")

    def test_keyword_fallback(self):
        self.assertEqual(department_from_program("Bachelor of Science in Nursing"), "CON")
        self.assertEqual(department_from_program(""), UNKNOWN)


class TestAdminTaxonomy(unittest.TestCase):
    def test_admin_type(self):
        self.assertEqual(classify_admin_type("Board Member"), "Board Member")
        self.assertEqual(classify_admin_type("School Administrator"), "School Administrator")
        self.assertEqual(classify_admin_type("Janitor"), UNKNOWN)

    def test_standardize_admin_department(self):
        self.assertEqual(standardize_admin_department(""), "ADMIN")
        self.assertEqual(standardize_admin_department("Board of Directors"), "BOARD")
        self.assertEqual(standardize_admin_department("Office of the President"), "OFFICE_OF_THE_PRESIDENT")


class TestNonTeachingTaxonomy(unittest.TestCase):
    def test_table_lookup(self):
        self.assertEqual(match_non_teaching_department("Office of the Registrar"), "REGISTRAR")
        self.assertEqual(match_non_teaching_department("University Library"), "LIBRARY")
        self.assertIsNone(match_non_teaching_department("Motor Pool"))
        self.assertIsNone(match_non_teaching_department("  "))

    def test_standardize(self):
        self.assertEqual(standardize_non_teaching_department("Motor Pool"), "MOTOR POOL")
        self.assertEqual(standardize_non_teaching_department("unknown"), UNKNOWN)
        self.assertEqual(standardize_non_teaching_department("Guidance Office"), "GUIDANCE")


class TestSubjectText(unittest.TestCase):
    def test_title_words(self):
        self.assertEqual(title_words("intro to COMPUTING"), "Intro To Computing")

    def test_subject_type(self):
        self.assertEqual(normalize_subject_type("major"), "Major")
        self.assertEqual(normalize_subject_type("Elective"), "Elective")
        self.assertEqual(normalize_subject_type("Lab"), "Laboratory")
        self.assertEqual(normalize_subject_type("general ed"), "General Education")
        self.assertEqual(normalize_subject_type("capstone"), "Capstone")


class TestCourseCodes(unittest.TestCase):
    def test_extract_course_code(self):
        self.assertEqual(extract_course_code("BSIT - Information Technology"), "BSIT")
        self.assertEqual(extract_course_code("Bachelor of Science in Computer Science"), "BSCS")
        self.assertEqual(extract_course_code(""), UNKNOWN)

    def test_course_from_filename(self):
        self.assertEqual(course_from_filename("BSIT_students_2024.xlsx"), "BSIT")
        self.assertEqual(course_from_filename("/uploads/bscs-list.xlsx"), "BSCS")
        self.assertIsNone(course_from_filename("students.xlsx"))
        self.assertIsNone(course_from_filename(None))


if __name__ == "__main__":
    unittest.main()
