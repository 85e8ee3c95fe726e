import unittest

from instsys_ingest.extractors.resume import ResumeExtractor, extract_education

RESUME_TEXT = """CURRICULUM VITAE
Name: Maria Clara Santos
Position: Associate Professor
Department: College of Computer Studies
Email: maria.santos@school.edu
Phone: 0917-123-4567
EDUCATION
Master of Science in Computer Science
Bachelor of Science in Information Technology
SKILLS
Python
"""


class TestResumeExtractor(unittest.TestCase):
    def setUp(self):
        self.extractor = ResumeExtractor()

    def test_labeled_resume(self):
        record = self.extractor.extract(RESUME_TEXT, source_file="resumes/santos.pdf")
        info = record["faculty_data"]
        self.assertEqual(info["surname"], "Santos")
        self.assertEqual(info["first_name"], "Maria")
        self.assertEqual(info["middle_name"], "Clara")
        self.assertEqual(info["position"], "Associate Professor")
        self.assertEqual(info["email"], "maria.santos@school.edu")
        self.assertEqual(info["phone"], "0917-123-4567")
        self.assertEqual(info["department"], "CCS")

        metadata = record["metadata"]
        self.assertEqual(metadata["full_name"], "Santos, Maria")
        self.assertEqual(metadata["source_file"], "santos.pdf")
        self.assertFalse(metadata["has_photo"])
        self.assertEqual(record["raw_text"], RESUME_TEXT)

    def test_education_section(self):
        info = self.extractor.extract(RESUME_TEXT)["faculty_data"]
        self.assertEqual(info["education"],
                         "Master of Science in Computer Science; "
                         "Bachelor of Science in Information Technology")

    def test_name_from_structure(self):
        record = self.extractor.extract("Jose Rizal\nProfessor of History")
        self.assertEqual(record["metadata"]["full_name"], "Rizal, Jose")

    def test_name_from_filename(self):
        record = self.extractor.extract("12345\n67890", source_file="uploads/juan_cruz.pdf")
        self.assertEqual(record["metadata"]["full_name"], "cruz, juan")

    def test_empty_text(self):
        self.assertIsNone(self.extractor.extract("   ", source_file="blank.pdf"))

    def test_report_skips_empty_fields(self):
        text = self.extractor.extract(RESUME_TEXT)["formatted_text"]
        self.assertIn("TEACHING FACULTY RESUME", text)
        self.assertIn("  Position: Associate Professor", text)
        self.assertNotIn("Date of Birth", text)


class TestExtractEducation(unittest.TestCase):
    def test_stops_at_next_label(self):
        lines = ["EDUCATION", "BS Nursing", "EXPERIENCE", "Doctor of Medicine"]
        self.assertEqual(extract_education(lines, 0), "BS Nursing")


if __name__ == "__main__":
    unittest.main()
