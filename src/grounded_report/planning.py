from __future__ import annotations

import logging
from typing import List, Sequence

from grounded_report.model import GenerationOptions, LLMRequest
from grounded_report.parsing import parse_outline_lines
from grounded_report.profiles import ScriptProfile
from grounded_report.prompts import render_outline_prompt, summarize_facts_for_outline
from grounded_report.report_types import Fact, Outline
from grounded_report.retry import RetryingGenerator

logger = logging.getLogger(__name__)

DEFAULT_OUTLINE_OPTIONS = GenerationOptions(max_tokens=150, temperature=0.4)
MIN_SECTIONS = 2


def build_title(facts: Sequence[Fact], profile: ScriptProfile) -> str:
    if facts:
        return f"{facts[0].subject} {profile.title_suffix}"
    return profile.default_title


class OutlinePlanner:
    def __init__(
        self,
        generator: RetryingGenerator,
        profile: ScriptProfile,
        options: GenerationOptions = DEFAULT_OUTLINE_OPTIONS,
        summary_size: int = 5,
        max_sections: int = 4,
    ) -> None:
        self._generator = generator
        self._profile = profile
        self._options = options
        self._summary_size = summary_size
        self._max_sections = max_sections

    def plan(self, top_facts: Sequence[Fact], instruction: str) -> Outline:
        prompt = render_outline_prompt(
            facts_summary=summarize_facts_for_outline(top_facts, limit=self._summary_size),
            instruction=instruction,
            profile=self._profile,
            max_sections=self._max_sections,
        )
        response = self._generator.generate(
            LLMRequest(task="outline_planning", prompt=prompt, options=self._options)
        )
        logger.debug(f"[Plan] Raw outline output:\n{response[:500]}")

        sections = self._select_sections(parse_outline_lines(response, self._profile))
        title = build_title(top_facts, self._profile)
        logger.info(f"[Plan] Outline '{title}' with {len(sections)} sections: {sections}")
        return Outline(title=title, sections=tuple(sections))

    def _select_sections(self, headings: List[str]) -> List[str]:
        if len(headings) >= MIN_SECTIONS:
            return headings[: self._max_sections]
        logger.warning(
            f"[Plan] Only {len(headings)} usable headings; using fallback outline"
        )
        return list(self._profile.fallback_sections)


__all__ = [
    "DEFAULT_OUTLINE_OPTIONS",
    "OutlinePlanner",
    "build_title",
]
