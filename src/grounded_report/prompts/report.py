from __future__ import annotations

from typing import Sequence

from grounded_report.profiles import ScriptProfile
from grounded_report.report_types import Fact


def render_fact_extraction_prompt(chunk_text: str, min_facts: int = 2, max_facts: int = 4) -> str:
    return "\n\n".join(
        [
            "Extract key facts from this text. Focus on specific information like names, numbers, dates, and actions.",
            f"Text:\n{chunk_text}",
            "\n".join(
                [
                    "List facts in this format:",
                    "FACT 1:",
                    "Subject: [main topic/entity]",
                    "Action: [what happened/what it does]",
                    "Details: [specific details, numbers, dates]",
                    "",
                    "FACT 2:",
                    "Subject: [main topic/entity]",
                    "Action: [what happened/what it does]",
                    "Details: [specific details, numbers, dates]",
                ]
            ),
            f"Extract {min_facts}-{max_facts} most important facts only. Output only the FACT blocks.",
        ]
    )


def summarize_facts_for_outline(facts: Sequence[Fact], limit: int = 5) -> str:
    return "\n".join(f"• {fact.subject}: {fact.action}" for fact in list(facts)[:limit])


def render_outline_prompt(
    facts_summary: str,
    instruction: str,
    profile: ScriptProfile,
    min_sections: int = 3,
    max_sections: int = 4,
) -> str:
    language = profile.language_name
    examples = "\n".join(profile.outline_examples)
    return "\n\n".join(
        [
            f"Based on these key facts, create a {language} report outline.",
            f"Key Facts:\n{facts_summary or '(none)'}",
            f"User requested: {instruction}",
            (
                f"Create {min_sections}-{max_sections} {language} report sections that cover the main topics.\n"
                "Respond with section titles only, one per line, without numbering or commentary."
            ),
            f"Example:\n{examples}",
        ]
    )


def summarize_facts_for_section(facts: Sequence[Fact], limit: int = 3) -> str:
    return " ".join(
        f"{fact.subject} {fact.action}. {fact.details}" for fact in list(facts)[:limit]
    )


def render_section_prompt(
    section_title: str,
    facts_summary: str,
    profile: ScriptProfile,
) -> str:
    language = profile.language_name
    return "\n\n".join(
        [
            f"Write a {language} paragraph for this report section.",
            f"Section title: {section_title}",
            f"Facts to use:\n{facts_summary}",
            (
                f"Write 2-3 sentences in formal {language}. Use ONLY the facts provided above. "
                "Do not add information not in the facts."
            ),
            f"Important: Write in {language} language only. Output only the paragraph.",
        ]
    )


__all__ = [
    "render_fact_extraction_prompt",
    "render_outline_prompt",
    "render_section_prompt",
    "summarize_facts_for_outline",
    "summarize_facts_for_section",
]
