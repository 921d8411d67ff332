from __future__ import annotations

from grounded_report.prompts.report import (
    render_fact_extraction_prompt,
    render_outline_prompt,
    render_section_prompt,
    summarize_facts_for_outline,
    summarize_facts_for_section,
)

__all__ = [
    "render_fact_extraction_prompt",
    "render_outline_prompt",
    "render_section_prompt",
    "summarize_facts_for_outline",
    "summarize_facts_for_section",
]
