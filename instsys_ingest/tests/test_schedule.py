import unittest

from instsys_ingest.extractors.schedule import (
    NonTeachingScheduleExtractor,
    parse_time_minutes,
    standardize_day_name,
)


def duty_grid():
    return [
        ["NAME OF STAFF:", "maria santos"],
        ["DEPARTMENT:", "Office of the Registrar"],
        ["POSITION:", "records clerk"],
        [],
        ["TIME", "MONDAY", "TUESDAY", "WEDNESDAY"],
        ["8:00 AM", "Front desk", None, "Filing"],
        ["1:30 PM", "Encoding", "Front desk", "N/A"],
        [],
        ["Noted", "Head of Office"],
    ]


class TestTimeHelpers(unittest.TestCase):
    def test_parse_time_minutes(self):
        self.assertEqual(parse_time_minutes("1:30 PM"), 810)
        self.assertEqual(parse_time_minutes("12 AM"), 0)
        self.assertEqual(parse_time_minutes("12:15 PM"), 735)
        self.assertEqual(parse_time_minutes("8"), 480)
        self.assertEqual(parse_time_minutes(""), 0)

    def test_day_names(self):
        self.assertEqual(standardize_day_name("thu"), "Thursday")
        self.assertEqual(standardize_day_name("Holiday"), "Holiday")


class TestNonTeachingScheduleExtractor(unittest.TestCase):
    def setUp(self):
        self.extractor = NonTeachingScheduleExtractor()

    def test_staff_metadata(self):
        metadata = self.extractor.extract(duty_grid(), source_file="sched.xlsx")["metadata"]
        self.assertEqual(metadata["staff_name"], "Maria Santos")
        self.assertEqual(metadata["department"], "REGISTRAR")
        self.assertEqual(metadata["position"], "Records Clerk")
        self.assertEqual(metadata["total_shifts"], 4)
        self.assertEqual(metadata["days_working"], 3)
        self.assertEqual(metadata["data_type"], "non_teaching_faculty_schedule")

    def test_entries_and_day_order(self):
        record = self.extractor.extract(duty_grid())
        by_day = record["schedule_data"]["by_day"]
        self.assertEqual([e["time"] for e in by_day["Monday"]], ["8:00 AM", "1:30 PM"])
        self.assertEqual(by_day["Tuesday"][0]["duty"], "Task: Front desk")
        self.assertEqual(by_day["Wednesday"][0]["full_description"], "Wednesday 8:00 AM - Filing")
        self.assertNotIn("Thursday", by_day)

    def test_entries_sorted_by_time_within_day(self):
        grid = [
            ["TIME", "MONDAY", "TUESDAY", "WEDNESDAY"],
            ["1:30 PM", "Encoding", None, None],
            ["8:00 AM", "Front desk", "Filing", None],
        ]
        record = self.extractor.extract(grid)
        self.assertEqual([e["time"] for e in record["schedule_data"]["schedule"]],
                         ["1:30 PM", "8:00 AM", "8:00 AM"])
        monday = record["schedule_data"]["by_day"]["Monday"]
        self.assertEqual([e["time"] for e in monday], ["8:00 AM", "1:30 PM"])
        self.assertEqual(monday[0]["assignment"], "Front desk")

    def test_header_needs_three_days(self):
        grid = [["TIME", "MONDAY", "TUESDAY"], ["8:00 AM", "Desk", "Desk"]]
        record = self.extractor.extract(grid)
        self.assertEqual(record["schedule_data"]["schedule"], [])
        self.assertEqual(record["metadata"]["staff_name"], "Unknown Staff")
        self.assertEqual(record["metadata"]["department"], "UNKNOWN")
        self.assertIn("No scheduled duties found.", record["formatted_text"])

    def test_formatted_report(self):
        text = self.extractor.extract(duty_grid())["formatted_text"]
        self.assertIn("NON-TEACHING FACULTY WORK SCHEDULE", text)
        self.assertIn("WEEKLY WORK SCHEDULE (4 scheduled assignments):", text)
        self.assertLess(text.index("MONDAY:"), text.index("WEDNESDAY:"))


if __name__ == "__main__":
    unittest.main()
