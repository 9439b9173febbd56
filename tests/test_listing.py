import unittest
from pathlib import Path

from coursescraper.errors import WrongPageType
from coursescraper.listing import extract_listing, meeting_time_from_cells, parse_section_title


FIXTURES = Path(__file__).resolve().parent / "fixtures"


def load_fixture(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


class TestExtractListing(unittest.TestCase):
    def test_one_stub_per_crn_row_in_document_order(self) -> None:
        # the cancelled row has no CRN link and is skipped
        sections = extract_listing(load_fixture("listing_csc226_202009.html"))

        self.assertEqual([s.crn for s in sections], ["10817", "10818", "10819"])
        self.assertEqual([s.section_code for s in sections], ["A01", "B01", "T01"])

    def test_lecture_section_fields(self) -> None:
        lecture = extract_listing(load_fixture("listing_csc226_202009.html"))[0]

        self.assertEqual(lecture.term, "202009")
        self.assertEqual(lecture.title, "Algorithms and Data Structures II")
        self.assertEqual(lecture.subject, "CSC")
        self.assertEqual(lecture.course_number, "226")
        self.assertEqual(lecture.associated_term, "First Term: Sep - Dec 2020")
        self.assertEqual(lecture.registration_dates, "Jun 22, 2020 to Sep 25, 2020")
        self.assertEqual(lecture.levels, ["Law", "Undergraduate"])
        self.assertEqual(lecture.campus, "Main Campus")
        self.assertEqual(lecture.schedule_type, "Lecture")
        self.assertEqual(lecture.instructional_method, "Online")
        self.assertEqual(lecture.credits, 1.5)

        self.assertEqual(len(lecture.meeting_times), 1)
        mt = lecture.meeting_times[0]
        self.assertEqual(mt.type, "Every Week")
        self.assertEqual(mt.time, "10:00 am - 11:20 am")
        self.assertEqual(mt.days, "TF")
        self.assertEqual(mt.where, "Engineering & Computer Science Building 125")
        self.assertEqual(mt.date_range, "Sep 09, 2020 - Dec 04, 2020")
        self.assertEqual(mt.schedule_type, "Lecture")
        self.assertEqual(mt.instructors, ["Bill Bird"])

    def test_lab_section_with_two_meetings(self) -> None:
        lab = extract_listing(load_fixture("listing_csc226_202009.html"))[1]

        self.assertEqual(lab.schedule_type, "Lab")
        self.assertEqual(lab.credits, 0.0)
        self.assertEqual([mt.days for mt in lab.meeting_times], ["M", "W"])
        self.assertEqual(lab.meeting_times[0].instructors, ["Jane Doe", "Sam Lee"])

    def test_section_without_meeting_table(self) -> None:
        tutorial = extract_listing(load_fixture("listing_csc226_202009.html"))[2]

        self.assertEqual(tutorial.meeting_times, [])
        self.assertIsNone(tutorial.registration_dates)
        self.assertIsNone(tutorial.instructional_method)

    def test_explicit_term_wins(self) -> None:
        sections = extract_listing(load_fixture("listing_csc226_202009.html"), term="209901")
        self.assertTrue(all(s.term == "209901" for s in sections))

    def test_no_classes_found_is_empty(self) -> None:
        self.assertEqual(extract_listing(load_fixture("listing_no_classes.html")), [])

    def test_detail_page_is_wrong_page_type(self) -> None:
        with self.assertRaises(WrongPageType) as ctx:
            extract_listing(load_fixture("detail_csc355_202009_10801.html"))
        self.assertEqual(str(ctx.exception), "wrong page type for parser")

    def test_crn_row_with_unexpected_title_is_kept(self) -> None:
        html = """
        <table class="datadisplaytable"><caption class="captiontext">Sections Found</caption>
          <tr><th class="ddtitle"><a href="/BAN1P/bwckschd.p_disp_detail_sched?term_in=202009&amp;crn_in=12345">Special Topics</a></th></tr>
          <tr><td class="dddefault">Main Campus Campus</td></tr>
        </table>
        """
        sections = extract_listing(html)

        self.assertEqual(len(sections), 1)
        self.assertEqual(sections[0].crn, "12345")
        self.assertEqual(sections[0].term, "202009")
        self.assertEqual(sections[0].title, "Special Topics")
        self.assertEqual((sections[0].subject, sections[0].course_number, sections[0].section_code), ("", "", ""))
        self.assertEqual(sections[0].campus, "Main Campus")


class TestRowHelpers(unittest.TestCase):
    def test_parse_section_title_with_dash_in_title(self) -> None:
        parts = parse_section_title("Continuous-Time Signals - Part 1 - 10953 - ECE 260 - A01")

        self.assertEqual(parts["title"], "Continuous-Time Signals - Part 1")
        self.assertEqual(parts["crn"], "10953")
        self.assertEqual(parts["subject"], "ECE")
        self.assertEqual(parts["course_number"], "260")
        self.assertEqual(parts["section_code"], "A01")

    def test_parse_section_title_unexpected_shape(self) -> None:
        parts = parse_section_title("Special Topics")
        self.assertEqual(parts["title"], "Special Topics")
        self.assertEqual(parts["crn"], "")

    def test_meeting_time_requires_seven_cells(self) -> None:
        self.assertIsNone(meeting_time_from_cells(["Every Week", "TBA"]))

        mt = meeting_time_from_cells(["Every Week", "TBA", "", "TBA", "Sep 09, 2020 - Dec 04, 2020", "Lecture", "TBA"])
        self.assertIsNotNone(mt)
        assert mt is not None
        self.assertEqual(mt.instructors, ["TBA"])


if __name__ == "__main__":
    unittest.main()
