from __future__ import annotations

import logging
from typing import Sequence

from grounded_report.model import GenerationOptions, LLMRequest
from grounded_report.parsing import clean_section_content
from grounded_report.profiles import ScriptProfile
from grounded_report.prompts import render_section_prompt, summarize_facts_for_section
from grounded_report.report_types import Fact
from grounded_report.retry import RetryingGenerator

logger = logging.getLogger(__name__)

DEFAULT_SECTION_OPTIONS = GenerationOptions(max_tokens=200, temperature=0.5)


class SectionWriter:
    def __init__(
        self,
        generator: RetryingGenerator,
        profile: ScriptProfile,
        options: GenerationOptions = DEFAULT_SECTION_OPTIONS,
        max_facts: int = 3,
    ) -> None:
        self._generator = generator
        self._profile = profile
        self._options = options
        self._max_facts = max_facts

    def write(self, section_title: str, facts: Sequence[Fact]) -> str:
        if not facts:
            logger.warning(f"[Write] No relevant facts for section: '{section_title}'")
            return self._profile.insufficient_information_text(section_title)

        prompt = render_section_prompt(
            section_title=section_title,
            facts_summary=summarize_facts_for_section(facts, limit=self._max_facts),
            profile=self._profile,
        )
        logger.info(f"[Write] Writing section '{section_title}' with {len(facts)} facts")
        content = self._generator.generate(
            LLMRequest(task="section_writing", prompt=prompt, options=self._options)
        )
        return clean_section_content(content)


__all__ = [
    "DEFAULT_SECTION_OPTIONS",
    "SectionWriter",
]
