#!/usr/bin/env python3
"""
Skill Package Validation - Description Conflict Checker

Flags pairs of skills whose descriptions share most of their trigger words,
which makes it hard for an agent to pick the right one. Trigger words are the
lowercase alphabetic words of a description minus COMMON_WORDS; similarity is
the Jaccard index of two trigger word sets.

Only meaningful across several skills, so validate_skills.py runs it for
multi-skill runs only. Results are always warnings.
"""

from __future__ import annotations

import math

from skill_validation_common import DEFAULT_CONFIG, ValidatorConfig, extract_trigger_words


def jaccard_similarity(first: set[str], second: set[str]) -> float:
    """|A ∩ B| / |A ∪ B|, or 0.0 when both sets are empty."""
    union = first | second
    if not union:
        return 0.0
    return len(first & second) / len(union)


def check_description_conflicts(
    descriptions: dict[str, str],
    threshold: float | None = None,
    config: ValidatorConfig = DEFAULT_CONFIG,
) -> list[str]:
    """Compare every unordered pair of skill descriptions.

    Args:
        descriptions: Skill name to description, in processing order
        threshold: Minimum similarity to report (defaults to config.similarity_threshold)
        config: Stopwords and reporting limits

    Returns:
        One warning string per pair at or above the threshold
    """
    if threshold is None:
        threshold = config.similarity_threshold

    trigger_sets: list[tuple[str, set[str]]] = []
    for name, desc in descriptions.items():
        words = extract_trigger_words(desc, config.stopwords)
        if words:
            trigger_sets.append((name, words))

    warnings: list[str] = []
    for i, (name1, words1) in enumerate(trigger_sets):
        for name2, words2 in trigger_sets[i + 1 :]:
            similarity = jaccard_similarity(words1, words2)
            if similarity < threshold:
                continue
            common = sorted(words1 & words2)[: config.max_common_words]
            percent = math.floor(similarity * 100 + 0.5)
            warnings.append(
                f"Similar descriptions: '{name1}' and '{name2}' ({percent}% overlap, common: {', '.join(common)})"
            )

    return warnings
