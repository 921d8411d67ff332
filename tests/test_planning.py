import unittest
import warnings
from typing import List

from path_setup import ensure_src_path

ensure_src_path()

from grounded_report.errors import ParseWarning
from grounded_report.model import LLMRequest
from grounded_report.planning import OutlinePlanner, build_title
from grounded_report.profiles import get_profile
from grounded_report.report_types import Fact
from grounded_report.retry import RetryingGenerator, RetryPolicy


class ScriptedLLMModel:
    def __init__(self, scripted_outputs: List[str]) -> None:
        self._scripted_outputs = scripted_outputs
        self._cursor = 0
        self.calls: List[LLMRequest] = []

    def generate(self, request: LLMRequest) -> str:
        self.calls.append(request)
        if self._cursor >= len(self._scripted_outputs):
            raise RuntimeError("scripted outputs exhausted")
        value = self._scripted_outputs[self._cursor]
        self._cursor += 1
        return value


def _facts(count: int = 6) -> List[Fact]:
    return [
        Fact(subject=f"주제{index}", action=f"동작{index}", details=f"세부{index}")
        for index in range(count)
    ]


def _planner(model: ScriptedLLMModel, profile_name: str = "hangul") -> OutlinePlanner:
    generator = RetryingGenerator(model, policy=RetryPolicy.no_delay(max_retries=0))
    return OutlinePlanner(generator, get_profile(profile_name))


class OutlinePlannerTests(unittest.TestCase):
    def test_uses_model_headings_up_to_four(self) -> None:
        model = ScriptedLLMModel(["1. 제품 개요\n2. 기술적 특징\n3. 임상 결과\n4. 향후 전망\n5. 부록"])
        outline = _planner(model).plan(_facts(), "리포트 초안을 작성해줘")

        self.assertEqual(outline.sections, ("제품 개요", "기술적 특징", "임상 결과", "향후 전망"))
        self.assertEqual(outline.title, "주제0 리포트")
        self.assertEqual(model.calls[0].task, "outline_planning")
        self.assertEqual(model.calls[0].options.max_tokens, 150)

    def test_falls_back_when_too_few_headings(self) -> None:
        model = ScriptedLLMModel(["Overview\nDetails\n개요"])
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", ParseWarning)
            outline = _planner(model).plan(_facts(), "리포트 초안을 작성해줘")

        self.assertEqual(outline.sections, ("개요", "주요 특징", "상세 정보"))

    def test_prompt_summarizes_top_five_facts_and_instruction(self) -> None:
        model = ScriptedLLMModel(["개요\n결과"])
        _planner(model).plan(_facts(6), "보고서 초안을 작성해줘")
        prompt = model.calls[0].prompt

        self.assertIn("• 주제0: 동작0", prompt)
        self.assertIn("• 주제4: 동작4", prompt)
        self.assertNotIn("주제5", prompt)
        self.assertIn("보고서 초안을 작성해줘", prompt)
        self.assertIn("Korean", prompt)

    def test_latin_profile_fallback(self) -> None:
        model = ScriptedLLMModel(["한국어 제목"])
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", ParseWarning)
            outline = _planner(model, "latin").plan(_facts(), "draft a report")
        self.assertEqual(outline.sections, ("Overview", "Key Features", "Details"))
        self.assertEqual(outline.title, "주제0 Report")


class BuildTitleTests(unittest.TestCase):
    def test_title_from_top_fact(self) -> None:
        facts = [Fact("벨트릭스 정제", "허가", "2024년")]
        self.assertEqual(build_title(facts, get_profile("hangul")), "벨트릭스 정제 리포트")

    def test_default_title_without_facts(self) -> None:
        self.assertEqual(build_title([], get_profile("hangul")), "리포트 초안")
        self.assertEqual(build_title([], get_profile("latin")), "Draft Report")


if __name__ == "__main__":
    unittest.main()
