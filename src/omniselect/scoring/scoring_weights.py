# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Weight tables for base and role scoring.

All scoring constants live here as named, validated fields so they can be
overridden from YAML (``load_scoring_weights``) without touching the scoring
functions. Only the relative ordering the defaults produce matters; the
absolute magnitudes have no external meaning.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from omniselect.constants import DEPRECATED_PENALTY
from omniselect.enums import EnumAgentRole, EnumModelStatus

MAX_ROLE_WEIGHT = 100.0

# Lowest score a non-penalized model may reach under any weight set; leaves
# room below for the hard penalties plus the largest external boost.
WEIGHTED_SCORE_FLOOR = DEPRECATED_PENALTY / 2


class ModelStatusWeights(BaseModel):
    """Status term of the base score."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    active: float = 20.0
    beta: float = 8.0
    alpha: float = -5.0
    other: float = Field(default=-40.0, description="Deprecated or unknown status.")

    def for_status(self, status: EnumModelStatus) -> float:
        if status is EnumModelStatus.ACTIVE:
            return self.active
        if status is EnumModelStatus.BETA:
            return self.beta
        if status is EnumModelStatus.ALPHA:
            return self.alpha
        return self.other


class ModelCapacityScale(BaseModel):
    """Normalization of context and output capacity.

    A capacity contributes ``min(value, cap) / divisor``; the cap keeps huge
    windows from dominating every other term.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    context_cap: int = Field(default=1_000_000, gt=0)
    context_divisor: float = Field(default=50_000.0, gt=0.0)
    output_cap: int = Field(default=300_000, gt=0)
    output_divisor: float = Field(default=30_000.0, gt=0.0)

    def context(self, context_limit: int) -> float:
        return min(context_limit, self.context_cap) / self.context_divisor

    def output(self, output_limit: int) -> float:
        return min(output_limit, self.output_cap) / self.output_divisor


class ModelVersionBonus(BaseModel):
    """Recency bonus for a model family/version token."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    pattern: str = Field(min_length=1, description="Case-insensitive regex.")
    points: float


class ModelBaseScoreWeights(BaseModel):
    """Weights of the role-independent base score."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    status: ModelStatusWeights = Field(default_factory=ModelStatusWeights)
    capacity: ModelCapacityScale = Field(default_factory=ModelCapacityScale)
    deep_bonus: float = 12.0
    fast_bonus: float = 12.0
    code_bonus: float = 12.0
    toolcall_bonus: float = 25.0
    version_bonuses: tuple[ModelVersionBonus, ...] = (
        ModelVersionBonus(pattern=r"gpt-5\.3", points=12.0),
        ModelVersionBonus(pattern=r"gpt-5\.2", points=8.0),
        ModelVersionBonus(pattern=r"k2\.5", points=6.0),
    )


class ModelRoleWeights(BaseModel):
    """Per-role emphasis added on top of the base score.

    Capability and keyword signals are 0/1; ``context`` and ``output`` are the
    role-level capacity terms (see ``ModelScoringWeights.role_capacity``).
    Negative weights de-emphasize a signal for the role.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    reasoning: float = Field(default=0.0, ge=-MAX_ROLE_WEIGHT, le=MAX_ROLE_WEIGHT)
    toolcall: float = Field(default=0.0, ge=-MAX_ROLE_WEIGHT, le=MAX_ROLE_WEIGHT)
    attachment: float = Field(default=0.0, ge=-MAX_ROLE_WEIGHT, le=MAX_ROLE_WEIGHT)
    deep: float = Field(default=0.0, ge=-MAX_ROLE_WEIGHT, le=MAX_ROLE_WEIGHT)
    fast: float = Field(default=0.0, ge=-MAX_ROLE_WEIGHT, le=MAX_ROLE_WEIGHT)
    code: float = Field(default=0.0, ge=-MAX_ROLE_WEIGHT, le=MAX_ROLE_WEIGHT)
    context: float = Field(default=0.0, ge=-MAX_ROLE_WEIGHT, le=MAX_ROLE_WEIGHT)
    output: float = Field(default=0.0, ge=-MAX_ROLE_WEIGHT, le=MAX_ROLE_WEIGHT)

    def lowest_contribution(self, max_context: float, max_output: float) -> float:
        """Most negative amount these weights can add to a score."""
        flags = (
            self.reasoning,
            self.toolcall,
            self.attachment,
            self.deep,
            self.fast,
            self.code,
        )
        return (
            sum(min(weight, 0.0) for weight in flags)
            + min(self.context, 0.0) * max_context
            + min(self.output, 0.0) * max_output
        )


DEFAULT_ROLE_WEIGHTS: dict[EnumAgentRole, ModelRoleWeights] = {
    EnumAgentRole.ORCHESTRATOR: ModelRoleWeights(
        reasoning=40.0, toolcall=25.0, deep=10.0, code=8.0, context=1.0
    ),
    # fast=-8: the mini's base fast bonus cancels the gpt-5.3 version bonus, so
    # without it gpt-5.1-codex-mini would beat gpt-5.3-codex on the id tie-break.
    EnumAgentRole.ORACLE: ModelRoleWeights(
        reasoning=55.0, deep=18.0, context=1.2, toolcall=10.0, fast=-8.0
    ),
    EnumAgentRole.DESIGNER: ModelRoleWeights(
        attachment=25.0, reasoning=18.0, toolcall=15.0, context=0.8, output=1.0
    ),
    EnumAgentRole.EXPLORER: ModelRoleWeights(
        fast=35.0, toolcall=28.0, reasoning=8.0, context=0.7
    ),
    EnumAgentRole.LIBRARIAN: ModelRoleWeights(
        context=30.0, toolcall=22.0, reasoning=15.0, output=10.0
    ),
    EnumAgentRole.FIXER: ModelRoleWeights(
        code=28.0, toolcall=24.0, fast=18.0, reasoning=14.0, output=8.0
    ),
}


class ModelScoringWeights(BaseModel):
    """Complete weight set for base and role scoring.

    Roles missing from ``roles`` fall back to ``DEFAULT_ROLE_WEIGHTS`` so a
    partial override only has to name the roles it changes.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    base: ModelBaseScoreWeights = Field(default_factory=ModelBaseScoreWeights)
    role_capacity: ModelCapacityScale = Field(
        default_factory=lambda: ModelCapacityScale(
            context_divisor=60_000.0, output_divisor=40_000.0
        )
    )
    roles: dict[EnumAgentRole, ModelRoleWeights] = Field(
        default_factory=lambda: dict(DEFAULT_ROLE_WEIGHTS)
    )

    @field_validator("roles", mode="after")
    @classmethod
    def _fill_missing_roles(
        cls, roles: dict[EnumAgentRole, ModelRoleWeights]
    ) -> dict[EnumAgentRole, ModelRoleWeights]:
        return {
            role: roles.get(role, DEFAULT_ROLE_WEIGHTS[role]) for role in EnumAgentRole
        }

    @model_validator(mode="after")
    def _penalties_dominate(self) -> ModelScoringWeights:
        lowest = self.lowest_reachable_score()
        if lowest <= WEIGHTED_SCORE_FLOOR:
            raise ValueError(
                f"Weights allow a score of {lowest:.1f}, at or below "
                f"{WEIGHTED_SCORE_FLOOR:.1f}; hard penalties would no longer dominate"
            )
        return self

    def for_role(self, role: EnumAgentRole) -> ModelRoleWeights:
        return self.roles[role]

    def lowest_reachable_score(self) -> float:
        """Lowest score any non-penalized model can get for any role."""
        base = self.base
        status = min(
            base.status.active, base.status.beta, base.status.alpha, base.status.other
        )
        bonuses = sum(
            min(value, 0.0)
            for value in (
                base.deep_bonus,
                base.fast_bonus,
                base.code_bonus,
                base.toolcall_bonus,
            )
        )
        bonuses += sum(min(bonus.points, 0.0) for bonus in base.version_bonuses)
        capacity = self.role_capacity
        max_context = capacity.context(capacity.context_cap)
        max_output = capacity.output(capacity.output_cap)
        role_terms = min(
            weights.lowest_contribution(max_context, max_output)
            for weights in self.roles.values()
        )
        return status + bonuses + role_terms


DEFAULT_SCORING_WEIGHTS = ModelScoringWeights()


__all__ = [
    "DEFAULT_ROLE_WEIGHTS",
    "DEFAULT_SCORING_WEIGHTS",
    "MAX_ROLE_WEIGHT",
    "WEIGHTED_SCORE_FLOOR",
    "ModelBaseScoreWeights",
    "ModelCapacityScale",
    "ModelRoleWeights",
    "ModelScoringWeights",
    "ModelStatusWeights",
    "ModelVersionBonus",
]
