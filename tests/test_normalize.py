import unittest

from coursescraper.normalize import normalize_course_detail, parse_hours, strip_tags


class TestStripTags(unittest.TestCase):
    def test_nested_tags(self) -> None:
        self.assertEqual(strip_tags("<p>Intro to <b>Systems</b></p>"), "Intro to Systems")

    def test_attributes_and_self_closing(self) -> None:
        text = '<p class="x">Line one<br/>Line <a href="/c/CSC111">two</a></p>'
        self.assertEqual(strip_tags(text), "Line oneLine two")

    def test_entities_are_not_decoded(self) -> None:
        self.assertEqual(strip_tags("<p>R&amp;D &lt; 5</p>"), "R&amp;D &lt; 5")


class TestParseHours(unittest.TestCase):
    def test_three_parts(self) -> None:
        hours = parse_hours("3-0-1")
        self.assertIsNotNone(hours)
        assert hours is not None
        self.assertEqual((hours.lecture, hours.lab, hours.tutorial), ("3", "0", "1"))

    def test_empty_or_missing(self) -> None:
        self.assertIsNone(parse_hours(""))
        self.assertIsNone(parse_hours(None))

    def test_missing_parts_stay_unset(self) -> None:
        hours = parse_hours("3-1.5")
        assert hours is not None
        self.assertEqual(hours.lecture, "3")
        self.assertEqual(hours.lab, "1.5")
        self.assertIsNone(hours.tutorial)

    def test_extra_parts_are_discarded(self) -> None:
        hours = parse_hours("3-0-1-9")
        assert hours is not None
        self.assertEqual(hours.to_dict(), {"lecture": "3", "lab": "0", "tutorial": "1"})


class TestNormalizeCourseDetail(unittest.TestCase):
    def test_full_record(self) -> None:
        raw = {
            "pid": "ByS23Pp7E",
            "__catalogCourseId": "CSC111",
            "title": "Fundamentals of Programming with Engineering Applications",
            "description": "<p>Intro to <b>Systems</b></p>",
            "hoursCatalogText": "3-0-1",
            "credits": {"value": "1.5"},
        }
        detail = normalize_course_detail(raw)

        self.assertEqual(detail.pid, "ByS23Pp7E")
        self.assertEqual(detail.catalog_course_id, "CSC111")
        self.assertEqual(detail.description, "Intro to Systems")
        self.assertEqual(detail.hours.lecture if detail.hours else None, "3")
        self.assertEqual(detail.extra, {"credits": {"value": "1.5"}})
        # input is not modified
        self.assertEqual(raw["description"], "<p>Intro to <b>Systems</b></p>")

    def test_without_hours(self) -> None:
        detail = normalize_course_detail({"pid": "abc", "description": "Plain", "hoursCatalogText": ""})
        self.assertIsNone(detail.hours)
        self.assertNotIn("hours", detail.to_dict())


if __name__ == "__main__":
    unittest.main()
