# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Role-independent base score for catalog candidates.

Pure functions, no I/O. The base score combines:

1. Status term (active > beta > alpha > deprecated/unknown).
2. Capped context and output capacity terms.
3. Keyword classes matched on ``id`` + display name: deep/reasoning,
   fast/small, coding.
4. Version recency bonuses.
5. A flat bonus for tool-call support.

All numbers come from ``ModelBaseScoreWeights``.
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass

from omniselect.models import ModelCandidate
from omniselect.scoring.scoring_weights import (
    DEFAULT_SCORING_WEIGHTS,
    ModelBaseScoreWeights,
    ModelScoringWeights,
    ModelVersionBonus,
)

DEEP_PATTERN = re.compile(r"(opus|pro|thinking|reason|r1|gpt-5|k2\.5)", re.IGNORECASE)
FAST_PATTERN = re.compile(
    r"(nano|flash|mini|lite|fast|turbo|haiku|small)", re.IGNORECASE
)
CODE_PATTERN = re.compile(r"(codex|coder|code|dev|program)", re.IGNORECASE)


@dataclass(frozen=True)
class KeywordSignals:
    """Keyword classes matched in a candidate's id and display name."""

    deep: bool
    fast: bool
    code: bool


def keyword_signals(candidate: ModelCandidate) -> KeywordSignals:
    """Classify a candidate by the keyword classes its name matches."""
    text = candidate.search_text
    return KeywordSignals(
        deep=DEEP_PATTERN.search(text) is not None,
        fast=FAST_PATTERN.search(text) is not None,
        code=CODE_PATTERN.search(text) is not None,
    )


@functools.lru_cache(maxsize=64)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


def version_bonus(text: str, bonuses: tuple[ModelVersionBonus, ...]) -> float:
    """Sum the points of every version bonus whose pattern matches ``text``."""
    return sum(
        bonus.points for bonus in bonuses if _compile(bonus.pattern).search(text)
    )


def base_score(
    candidate: ModelCandidate,
    weights: ModelScoringWeights = DEFAULT_SCORING_WEIGHTS,
) -> float:
    """Compute the base score shared by every role.

    Args:
        candidate: Catalog candidate.
        weights: Weight set; only ``weights.base`` is read.

    Returns:
        Base score (unbounded real number).
    """
    base: ModelBaseScoreWeights = weights.base
    signals = keyword_signals(candidate)

    score = base.status.for_status(candidate.status)
    score += base.capacity.context(candidate.context_limit)
    score += base.capacity.output(candidate.output_limit)
    if signals.deep:
        score += base.deep_bonus
    if signals.fast:
        score += base.fast_bonus
    if signals.code:
        score += base.code_bonus
    score += version_bonus(candidate.search_text, base.version_bonuses)
    if candidate.toolcall:
        score += base.toolcall_bonus
    return score


__all__ = [
    "CODE_PATTERN",
    "DEEP_PATTERN",
    "FAST_PATTERN",
    "KeywordSignals",
    "base_score",
    "keyword_signals",
    "version_bonus",
]
