import unittest
import warnings

from path_setup import ensure_src_path

ensure_src_path()

from grounded_report.errors import ParseWarning
from grounded_report.parsing import clean_section_content, parse_fact_blocks, parse_outline_lines
from grounded_report.profiles import get_profile
from grounded_report.report_types import Fact


class ParseFactBlocksTests(unittest.TestCase):
    def test_parses_complete_blocks_and_ignores_preamble(self) -> None:
        response = (
            "Here are the facts you asked for.\n"
            "FACT 1:\n"
            "Subject: Veltrix tablet\n"
            "Action: received market approval\n"
            "Details: approved on 2024-03-01\n\n"
            "fact 2:\n"
            "Subject: Review board\n"
            "Action: met twice\n"
            "Details: in January and February\n"
        )
        facts = parse_fact_blocks(response)

        self.assertEqual(
            facts,
            [
                Fact("Veltrix tablet", "received market approval", "approved on 2024-03-01"),
                Fact("Review board", "met twice", "in January and February"),
            ],
        )

    def test_block_missing_a_field_is_dropped_with_warning(self) -> None:
        response = (
            "FACT 1:\nSubject: Complete\nAction: has all fields\nDetails: yes\n"
            "FACT 2:\nSubject: Partial\nAction: lacks details\n"
            "FACT 3:\nSubject: Also complete\nAction: works\nDetails: 3 fields\n"
        )
        with self.assertWarns(ParseWarning):
            facts = parse_fact_blocks(response)

        self.assertEqual([fact.subject for fact in facts], ["Complete", "Also complete"])

    def test_text_without_labels_yields_nothing(self) -> None:
        with warnings.catch_warnings():
            warnings.simplefilter("error", ParseWarning)
            self.assertEqual(parse_fact_blocks("The model refused to answer."), [])

    def test_markdown_emphasis_is_stripped(self) -> None:
        response = "**FACT 1:**\n**Subject:** Veltrix\n**Action:** launched\n**Details:** in Seoul\n"
        facts = parse_fact_blocks(response)
        self.assertEqual(facts, [Fact("Veltrix", "launched", "in Seoul")])

    def test_korean_field_values(self) -> None:
        response = "FACT 1:\nSubject: 벨트릭스 정제\nAction: 품목 허가를 받았다\nDetails: 2024년 3월\n"
        facts = parse_fact_blocks(response)
        self.assertEqual(facts[0].subject, "벨트릭스 정제")
        self.assertEqual(facts[0].details, "2024년 3월")


class ParseOutlineLinesTests(unittest.TestCase):
    def test_keeps_target_script_headings_without_markers(self) -> None:
        response = "예:\n1. 제품 개요\n- 기술적 특징\n\n• 임상 결과\n2) 향후 전망"
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", ParseWarning)
            headings = parse_outline_lines(response, get_profile("hangul"))
        self.assertEqual(headings, ["제품 개요", "기술적 특징", "임상 결과", "향후 전망"])

    def test_lines_outside_target_script_are_dropped(self) -> None:
        response = "제품 개요\nTechnical features\n임상 결과"
        with self.assertWarns(ParseWarning):
            headings = parse_outline_lines(response, get_profile("hangul"))
        self.assertEqual(headings, ["제품 개요", "임상 결과"])

    def test_latin_profile_drops_example_lines(self) -> None:
        response = "Example: Product Overview\n1) Overview\n2) Key Findings\n## Outlook"
        headings = parse_outline_lines(response, get_profile("latin"))
        self.assertEqual(headings, ["Overview", "Key Findings", "Outlook"])


class CleanSectionContentTests(unittest.TestCase):
    def test_strips_leading_labels(self) -> None:
        self.assertEqual(clean_section_content("섹션: 내용: 1. 본문입니다."), "본문입니다.")
        self.assertEqual(
            clean_section_content("  Content: The tablet was approved."),
            "The tablet was approved.",
        )

    def test_plain_text_unchanged(self) -> None:
        self.assertEqual(clean_section_content("Plain paragraph."), "Plain paragraph.")


if __name__ == "__main__":
    unittest.main()
