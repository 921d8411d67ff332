from __future__ import annotations

"""Per-script configuration for keyword matching, prompts and report text.

Profiles live in ``data/script_profiles.json`` and are parsed once per
process. Components receive a ``ScriptProfile`` instead of hard-coding stop
words or regexes, so adding a script is a data change.
"""

import json
import re
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from typing import Any

DEFAULT_SCRIPT = "hangul"
_PROFILE_RESOURCE = "script_profiles.json"


@dataclass(frozen=True)
class ScriptProfile:
    name: str
    language_name: str
    char_pattern: re.Pattern[str]
    min_keyword_length: int
    max_keywords: int
    stop_words: frozenset[str]
    report_keywords: tuple[str, ...]
    fallback_sections: tuple[str, ...]
    outline_examples: tuple[str, ...]
    example_markers: tuple[str, ...]
    title_suffix: str
    default_title: str
    insufficient_information: str
    footer_template: str
    sentence_terminators: tuple[str, ...]

    @classmethod
    def from_dict(cls, name: str, payload: dict[str, Any]) -> "ScriptProfile":
        try:
            return cls(
                name=name,
                language_name=str(payload["language_name"]),
                char_pattern=re.compile(str(payload["char_pattern"])),
                min_keyword_length=int(payload["min_keyword_length"]),
                max_keywords=int(payload["max_keywords"]),
                stop_words=frozenset(str(word).lower() for word in payload["stop_words"]),
                report_keywords=tuple(str(word) for word in payload["report_keywords"]),
                fallback_sections=tuple(str(title) for title in payload["fallback_sections"]),
                outline_examples=tuple(str(title) for title in payload["outline_examples"]),
                example_markers=tuple(str(marker) for marker in payload["example_markers"]),
                title_suffix=str(payload["title_suffix"]),
                default_title=str(payload["default_title"]),
                insufficient_information=str(payload["insufficient_information"]),
                footer_template=str(payload["footer_template"]),
                sentence_terminators=tuple(str(term) for term in payload["sentence_terminators"]),
            )
        except KeyError as exc:
            raise ValueError(f"script profile '{name}' is missing field {exc}") from exc

    def matches(self, text: str) -> bool:
        return self.char_pattern.search(text) is not None

    def is_stop_word(self, word: str) -> bool:
        return word.lower() in self.stop_words

    def has_report_intent(self, instruction: str) -> bool:
        lowered = instruction.lower()
        return any(keyword.lower() in lowered for keyword in self.report_keywords)

    def insufficient_information_text(self, title: str) -> str:
        return self.insufficient_information.format(title=title)

    def footer_text(self, section_count: int, fact_count: int) -> str:
        return self.footer_template.format(
            section_count=section_count,
            fact_count=fact_count,
        )


@lru_cache(maxsize=1)
def load_profiles() -> dict[str, ScriptProfile]:
    raw = (
        resources.files("grounded_report")
        .joinpath("data").joinpath(_PROFILE_RESOURCE)
        .read_text(encoding="utf-8")
    )
    payload = json.loads(raw)
    if not isinstance(payload, dict):
        raise ValueError("script profile data must be a JSON object")
    return {
        str(name): ScriptProfile.from_dict(str(name), body)
        for name, body in payload.items()
        if isinstance(body, dict)
    }


def get_profile(name: str = DEFAULT_SCRIPT) -> ScriptProfile:
    profiles = load_profiles()
    if name not in profiles:
        raise ValueError(
            f"unknown script profile '{name}'. Available: {', '.join(sorted(profiles))}"
        )
    return profiles[name]


def contains_script(text: str, profile: ScriptProfile) -> bool:
    return profile.matches(text)


__all__ = [
    "DEFAULT_SCRIPT",
    "ScriptProfile",
    "load_profiles",
    "get_profile",
    "contains_script",
]
