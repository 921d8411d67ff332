from __future__ import annotations

import logging
import re
from typing import List, Sequence

from grounded_report.profiles import ScriptProfile
from grounded_report.report_types import Fact

logger = logging.getLogger(__name__)

_PUNCTUATION_PATTERN = re.compile(r"[^\w\s]")


def extract_keywords(text: str, profile: ScriptProfile) -> List[str]:
    """Significant words of a heading, in order of appearance."""
    words = _PUNCTUATION_PATTERN.sub(" ", text.lower()).split()
    keywords: List[str] = []
    for word in words:
        if len(word) <= profile.min_keyword_length:
            continue
        if profile.is_stop_word(word) or word in keywords:
            continue
        keywords.append(word)
    return keywords[: profile.max_keywords]


class RelevanceMatcher:
    def __init__(
        self,
        profile: ScriptProfile,
        top_k: int = 4,
        detail_weight: float = 0.01,
    ) -> None:
        if top_k <= 0:
            raise ValueError("top_k must be positive")
        self._profile = profile
        self._top_k = top_k
        self._detail_weight = detail_weight

    def score(self, keywords: Sequence[str], fact: Fact) -> float:
        fact_text = fact.text().lower()
        score = float(sum(len(keyword) for keyword in keywords if keyword in fact_text))
        score += len(fact.details) * self._detail_weight
        return score

    def match(self, section_title: str, facts: Sequence[Fact]) -> List[Fact]:
        keywords = extract_keywords(section_title, self._profile)
        scored = [fact.with_score(self.score(keywords, fact)) for fact in facts]
        scored.sort(key=lambda fact: fact.relevance_score or 0.0, reverse=True)
        selected = scored[: self._top_k]
        logger.info(
            f"[Match] Section '{section_title}': keywords={keywords}, {len(selected)} facts selected"
        )
        return selected


__all__ = [
    "RelevanceMatcher",
    "extract_keywords",
]
