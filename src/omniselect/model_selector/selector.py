# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Generic ranking and selection primitives over model candidates.

Works on anything exposing an ``id`` attribute, so role scoring, family
scoring and tests with ad-hoc candidates all share one tie-break contract.

Design Decisions:
    - Sort by descending score, then ascending ``id``. Reproducible across
      runs and independent of catalog (discovery) order.
    - Absence is a result, not an error: ``pick_best`` returns ``None`` for
      an empty (or fully excluded) input and never raises.
    - An explicit preferred primary beats scoring, but only when it names a
      candidate that is actually present.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Generic, Protocol, TypeVar

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------


class SupportsModelId(Protocol):
    """Minimal candidate shape: a unique identifier."""

    @property
    def id(self) -> str: ...


T = TypeVar("T", bound=SupportsModelId)

ScoreFunction = Callable[[T], float]
TieBreaker = Callable[[T, T], int]


@dataclass(frozen=True)
class RankedCandidate(Generic[T]):
    """A candidate paired with its score.

    Attributes:
        candidate: The scored candidate.
        score: Score produced by the ranking score function.
    """

    candidate: T
    score: float


@dataclass(frozen=True)
class SelectionOptions(Generic[T]):
    """Options for ``rank_candidates`` and ``pick_best``.

    Attributes:
        exclude_ids: Candidate ids dropped before scoring.
        tie_breaker: Comparator for equal scores; defaults to ascending id.
    """

    exclude_ids: frozenset[str] = field(default_factory=frozenset)
    tie_breaker: TieBreaker[T] | None = None


@dataclass(frozen=True)
class RoleScoring(Generic[T]):
    """Score functions for a primary/support pair."""

    primary: ScoreFunction[T]
    support: ScoreFunction[T]


@dataclass(frozen=True)
class PrimaryAndSupport(Generic[T]):
    """Result of ``pick_primary_and_support``; both ``None`` when empty."""

    primary: T | None
    support: T | None


# ---------------------------------------------------------------------------
# Ranking
# ---------------------------------------------------------------------------


def default_tie_breaker(left: SupportsModelId, right: SupportsModelId) -> int:
    """Order by ascending id."""
    if left.id < right.id:
        return -1
    if left.id > right.id:
        return 1
    return 0


def rank_candidates(
    candidates: Iterable[T],
    score_fn: ScoreFunction[T],
    options: SelectionOptions[T] | None = None,
) -> list[RankedCandidate[T]]:
    """Score and sort candidates, best first.

    Args:
        candidates: Candidates to rank. Input order does not matter.
        score_fn: Pure score function; called once per candidate.
        options: Exclusions and an optional custom tie-breaker.

    Returns:
        Ranked candidates sorted by descending score; equal scores are
        ordered by the tie-breaker (ascending id by default).
    """
    opts = options or SelectionOptions()
    tie_breaker = opts.tie_breaker or default_tie_breaker

    ranked = [
        RankedCandidate(candidate=candidate, score=score_fn(candidate))
        for candidate in candidates
        if candidate.id not in opts.exclude_ids
    ]

    def _compare(left: RankedCandidate[T], right: RankedCandidate[T]) -> int:
        if left.score != right.score:
            return -1 if left.score > right.score else 1
        return tie_breaker(left.candidate, right.candidate)

    ranked.sort(key=functools.cmp_to_key(_compare))
    return ranked


def pick_best(
    candidates: Iterable[T],
    score_fn: ScoreFunction[T],
    options: SelectionOptions[T] | None = None,
) -> T | None:
    """Return the top-ranked candidate, or ``None`` when there is none."""
    ranked = rank_candidates(candidates, score_fn, options)
    if not ranked:
        return None
    return ranked[0].candidate


def pick_primary_and_support(
    candidates: Sequence[T],
    scoring: RoleScoring[T],
    preferred_primary_id: str | None = None,
) -> PrimaryAndSupport[T]:
    """Pick a primary candidate and a distinct support candidate.

    Steps:
        1. A ``preferred_primary_id`` present in ``candidates`` is the
           primary, regardless of score.
        2. Otherwise the primary is the best by ``scoring.primary``.
        3. Support is the best by ``scoring.support`` excluding the primary;
           with no other candidate, support is the primary itself.

    Args:
        candidates: Candidates to choose from.
        scoring: Primary and support score functions.
        preferred_primary_id: Operator override for the primary.

    Returns:
        ``PrimaryAndSupport``; both fields are ``None`` for empty input.
    """
    if not candidates:
        return PrimaryAndSupport(primary=None, support=None)

    primary: T | None = None
    if preferred_primary_id is not None:
        primary = next(
            (c for c in candidates if c.id == preferred_primary_id),
            None,
        )
        if primary is None:
            logger.debug(
                "Preferred primary %s not in candidates; scoring instead",
                preferred_primary_id,
            )
    if primary is None:
        primary = pick_best(candidates, scoring.primary)
    if primary is None:
        return PrimaryAndSupport(primary=None, support=None)

    support = pick_best(
        candidates,
        scoring.support,
        SelectionOptions(exclude_ids=frozenset({primary.id})),
    )
    return PrimaryAndSupport(primary=primary, support=support or primary)


__all__ = [
    "PrimaryAndSupport",
    "RankedCandidate",
    "RoleScoring",
    "ScoreFunction",
    "SelectionOptions",
    "SupportsModelId",
    "TieBreaker",
    "default_tie_breaker",
    "pick_best",
    "pick_primary_and_support",
    "rank_candidates",
]
