# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Role scoring strategies.

Each ``EnumAgentRole`` is bound to one ``RoleScoringStrategy`` holding its
static properties (variant tag, tool-call requirement, fallback position).
The weighted adjustments come from ``ModelScoringWeights.roles`` so they can
be overridden without changing the binding.

Hard overrides are applied before any weighting:

1. A role that requires tool calling scores a tool-call incapable model at
   ``TOOLCALL_REQUIRED_PENALTY``.
2. A deprecated model scores ``DEPRECATED_PENALTY`` for every role.

Both sit far below any reachable weighted score.
"""

from __future__ import annotations

from dataclasses import dataclass

from omniselect.constants import DEPRECATED_PENALTY, TOOLCALL_REQUIRED_PENALTY
from omniselect.enums import EnumAgentRole, EnumModelStatus
from omniselect.model_selector import ScoreFunction
from omniselect.models import ModelCandidate
from omniselect.scoring.handler_base_scoring import base_score, keyword_signals
from omniselect.scoring.scoring_weights import (
    DEFAULT_SCORING_WEIGHTS,
    ModelScoringWeights,
)


@dataclass(frozen=True)
class RoleScoringStrategy:
    """Scoring strategy and static properties of one role.

    Attributes:
        role: Role the strategy is bound to.
        variant: Display variant tag written into the plan assignment.
        requires_toolcall: Role cannot work without tool calling.
        prefers_secondary_fallback: Chain uses the secondary family overrides.
    """

    role: EnumAgentRole
    variant: str | None
    requires_toolcall: bool
    prefers_secondary_fallback: bool

    def score(
        self,
        candidate: ModelCandidate,
        weights: ModelScoringWeights = DEFAULT_SCORING_WEIGHTS,
    ) -> float:
        """Score ``candidate`` for this role."""
        if self.requires_toolcall and not candidate.toolcall:
            return TOOLCALL_REQUIRED_PENALTY
        if candidate.status is EnumModelStatus.DEPRECATED:
            return DEPRECATED_PENALTY

        role_weights = weights.for_role(self.role)
        signals = keyword_signals(candidate)
        capacity = weights.role_capacity

        return (
            base_score(candidate, weights)
            + role_weights.reasoning * candidate.reasoning
            + role_weights.toolcall * candidate.toolcall
            + role_weights.attachment * candidate.attachment
            + role_weights.deep * signals.deep
            + role_weights.fast * signals.fast
            + role_weights.code * signals.code
            + role_weights.context * capacity.context(candidate.context_limit)
            + role_weights.output * capacity.output(candidate.output_limit)
        )


ROLE_STRATEGIES: dict[EnumAgentRole, RoleScoringStrategy] = {
    EnumAgentRole.ORCHESTRATOR: RoleScoringStrategy(
        role=EnumAgentRole.ORCHESTRATOR,
        variant=None,
        requires_toolcall=True,
        prefers_secondary_fallback=False,
    ),
    EnumAgentRole.ORACLE: RoleScoringStrategy(
        role=EnumAgentRole.ORACLE,
        variant="high",
        requires_toolcall=False,
        prefers_secondary_fallback=False,
    ),
    EnumAgentRole.DESIGNER: RoleScoringStrategy(
        role=EnumAgentRole.DESIGNER,
        variant="medium",
        requires_toolcall=False,
        prefers_secondary_fallback=False,
    ),
    EnumAgentRole.EXPLORER: RoleScoringStrategy(
        role=EnumAgentRole.EXPLORER,
        variant="low",
        requires_toolcall=True,
        prefers_secondary_fallback=True,
    ),
    EnumAgentRole.LIBRARIAN: RoleScoringStrategy(
        role=EnumAgentRole.LIBRARIAN,
        variant="low",
        requires_toolcall=True,
        prefers_secondary_fallback=True,
    ),
    EnumAgentRole.FIXER: RoleScoringStrategy(
        role=EnumAgentRole.FIXER,
        variant="low",
        requires_toolcall=True,
        prefers_secondary_fallback=True,
    ),
}


def get_role_strategy(role: EnumAgentRole) -> RoleScoringStrategy:
    """Return the strategy bound to ``role``."""
    return ROLE_STRATEGIES[role]


def role_score(
    role: EnumAgentRole,
    candidate: ModelCandidate,
    weights: ModelScoringWeights = DEFAULT_SCORING_WEIGHTS,
) -> float:
    """Score ``candidate`` for ``role``."""
    return ROLE_STRATEGIES[role].score(candidate, weights)


def role_score_fn(
    role: EnumAgentRole,
    weights: ModelScoringWeights = DEFAULT_SCORING_WEIGHTS,
) -> ScoreFunction[ModelCandidate]:
    """Return a single-argument score function for ``role``."""
    strategy = ROLE_STRATEGIES[role]

    def _score(candidate: ModelCandidate) -> float:
        return strategy.score(candidate, weights)

    return _score


__all__ = [
    "ROLE_STRATEGIES",
    "RoleScoringStrategy",
    "get_role_strategy",
    "role_score",
    "role_score_fn",
]
