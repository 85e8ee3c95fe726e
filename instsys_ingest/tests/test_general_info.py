import unittest

from instsys_ingest.extractors.general_info import (
    GeneralInfoExtractor,
    detect_info_type,
    parse_core_values,
    parse_mission_vision,
    parse_objectives,
)


class TestDetectInfoType(unittest.TestCase):
    def test_filenames(self):
        self.assertEqual(detect_info_type("Mission_Vision.pdf"), "mission_vision")
        self.assertEqual(detect_info_type("school-objectives.pdf"), "objectives")
        self.assertEqual(detect_info_type("docs/School History.pdf"), "history")
        self.assertEqual(detect_info_type("Core Values.pdf"), "core_values")
        self.assertEqual(detect_info_type("hymn.pdf"), "hymn")
        self.assertEqual(detect_info_type("brochure.pdf"), "general")
        self.assertEqual(detect_info_type(""), "general")


class TestParsers(unittest.TestCase):
    def test_mission_vision(self):
        text = ("VISION\n"
                "A globally competitive institution of learning.\n"
                "MISSION\n"
                "To provide quality education for all.\n"
                "Through the provision of research services.\n")
        content = parse_mission_vision(text)
        self.assertEqual(content["vision"], "A globally competitive institution of learning.")
        self.assertEqual(content["mission"],
                         "To provide quality education for all. "
                         "Through the provision of research services.")

    def test_provision_does_not_open_vision(self):
        text = ("Our provision of quality education\n"
                "continues every year for all students.\n"
                "VISION\n"
                "A center of excellence in the region.\n")
        content = parse_mission_vision(text)
        self.assertEqual(content["vision"], "A center of excellence in the region.")
        self.assertEqual(content["mission"], "")

    def test_objectives_join_continuations(self):
        text = ("OBJECTIVES\n"
                "1. To develop competent graduates\n"
                "in computing.\n"
                "2. To promote research and extension work.\n")
        self.assertEqual(parse_objectives(text)["objectives"], [
            "1. To develop competent graduates in computing.",
            "2. To promote research and extension work.",
        ])

    def test_core_values(self):
        text = "OUR CORE VALUES\nExcellence\nIntegrity\nFaith\nN/A"
        self.assertEqual(parse_core_values(text)["core_values"], ["Excellence", "Integrity", "Faith"])


class TestGeneralInfoExtractor(unittest.TestCase):
    def setUp(self):
        self.extractor = GeneralInfoExtractor()

    def test_history(self):
        text = "Founded in 1950 as a small academy.\n"
        record = self.extractor.extract(text, source_file="pdfs/history.pdf")
        self.assertEqual(record["metadata"], {
            "info_type": "history",
            "source_file": "history.pdf",
            "data_type": "general_info_pdf",
            "character_count": len(text),
        })
        self.assertEqual(record["content"], {"history": "Founded in 1950 as a small academy."})
        self.assertIn("INSTITUTIONAL HISTORY", record["formatted_text"])

    def test_mission_vision_report(self):
        text = "VISION\nA globally competitive institution.\nMISSION\nTo serve the community well."
        report = self.extractor.extract(text, source_file="mission-vision.pdf")["formatted_text"]
        self.assertIn("MISSION AND VISION", report)
        self.assertLess(report.index("VISION:"), report.index("MISSION:\n"))

    def test_general_document(self):
        record = self.extractor.extract("Campus map and directory", source_file="guide.pdf")
        self.assertEqual(record["content"], {"content": "Campus map and directory"})
        self.assertIn("GENERAL INFORMATION", record["formatted_text"])

    def test_empty_text(self):
        self.assertIsNone(self.extractor.extract("", source_file="history.pdf"))


if __name__ == "__main__":
    unittest.main()
