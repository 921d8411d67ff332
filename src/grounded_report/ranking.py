from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List

from rapidfuzz.distance import Levenshtein

from grounded_report.report_types import Fact

logger = logging.getLogger(__name__)

_DIGIT_PATTERN = re.compile(r"\d")
_PROPER_NOUN_PATTERN = re.compile(r"[A-Z][a-z]")


@dataclass(frozen=True)
class RankingConfig:
    similarity_threshold: float = 0.7
    details_length_weight: float = 0.1
    digit_bonus: float = 5.0
    proper_noun_bonus: float = 3.0
    subject_length_weight: float = 0.05
    top_n: int = 10

    def __post_init__(self) -> None:
        if not 0.0 <= self.similarity_threshold <= 1.0:
            raise ValueError("similarity_threshold must be within [0, 1]")
        if self.top_n <= 0:
            raise ValueError("top_n must be positive")


def subject_similarity(left: str, right: str) -> float:
    """Edit-distance similarity relative to the longer of two subjects."""
    left_value = left.lower()
    right_value = right.lower()
    longer = max(len(left_value), len(right_value))
    if longer == 0:
        return 1.0
    distance = Levenshtein.distance(left_value, right_value)
    return (longer - distance) / longer


def are_facts_similar(left: Fact, right: Fact, threshold: float = 0.7) -> bool:
    return subject_similarity(left.subject, right.subject) > threshold


def deduplicate_facts(facts: Iterable[Fact], threshold: float = 0.7) -> List[Fact]:
    """Drop facts whose subject is near-identical to an earlier fact's."""
    unique: List[Fact] = []
    for fact in facts:
        if any(are_facts_similar(fact, existing, threshold) for existing in unique):
            logger.debug(f"[Rank] Dropping duplicate subject: '{fact.subject}'")
            continue
        unique.append(fact)
    return unique


def score_fact(fact: Fact, config: RankingConfig | None = None) -> float:
    cfg = config or RankingConfig()
    score = len(fact.details) * cfg.details_length_weight
    if _DIGIT_PATTERN.search(fact.details):
        score += cfg.digit_bonus
    if _PROPER_NOUN_PATTERN.search(fact.subject):
        score += cfg.proper_noun_bonus
    score += len(fact.subject) * cfg.subject_length_weight
    return score


def rank_facts(facts: Iterable[Fact], config: RankingConfig | None = None) -> List[Fact]:
    """Deduplicate, score and keep the ``top_n`` highest-scoring facts.

    The sort is stable, so equal scores keep first-seen order and repeated
    runs over the same input return the same list.
    """
    cfg = config or RankingConfig()
    candidates = list(facts)
    unique = deduplicate_facts(candidates, cfg.similarity_threshold)
    scored = [fact.with_score(score_fact(fact, cfg)) for fact in unique]
    scored.sort(key=lambda fact: fact.relevance_score or 0.0, reverse=True)
    ranked = scored[: cfg.top_n]
    logger.info(
        f"[Rank] {len(candidates)} facts -> {len(unique)} unique -> kept top {len(ranked)}"
    )
    return ranked


__all__ = [
    "RankingConfig",
    "subject_similarity",
    "are_facts_similar",
    "deduplicate_facts",
    "score_fact",
    "rank_facts",
]
