# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Feature vectors and per-role feature weights for external signal blending."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from omniselect.enums import EnumAgentRole

# Upper bound for a single feature weight. Features are clamped to [0, 1], so
# the total boost stays far below the hard penalties in omniselect.constants.
MAX_FEATURE_WEIGHT = 100.0


class ModelFeatureVector(BaseModel):
    """Named features derived from external signals, each in [0, 1].

    Attributes:
        quality: General intelligence index, normalized.
        coding: Coding benchmark index, normalized.
        cost_efficiency: Inverse blended price; 1.0 for free models.
        speed: Inverse time to first token.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    quality: float = Field(default=0.0, ge=0.0, le=1.0)
    coding: float = Field(default=0.0, ge=0.0, le=1.0)
    cost_efficiency: float = Field(default=0.0, ge=0.0, le=1.0)
    speed: float = Field(default=0.0, ge=0.0, le=1.0)


class ModelFeatureWeights(BaseModel):
    """Blending coefficients for one role."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    quality: float = Field(default=0.0, ge=0.0, le=MAX_FEATURE_WEIGHT)
    coding: float = Field(default=0.0, ge=0.0, le=MAX_FEATURE_WEIGHT)
    cost_efficiency: float = Field(default=0.0, ge=0.0, le=MAX_FEATURE_WEIGHT)
    speed: float = Field(default=0.0, ge=0.0, le=MAX_FEATURE_WEIGHT)


class ModelFeatureNormalization(BaseModel):
    """Scales used to map raw signal values into [0, 1].

    Attributes:
        quality_ceiling: Index value mapped to 1.0.
        coding_ceiling: Index value mapped to 1.0.
        price_scale: Blended USD/1M price at which cost efficiency is 0.5.
        latency_scale: Seconds to first token at which speed is 0.5.
        input_price_share: Share of input tokens in the blended price.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    quality_ceiling: float = Field(default=100.0, gt=0.0)
    coding_ceiling: float = Field(default=100.0, gt=0.0)
    price_scale: float = Field(default=10.0, gt=0.0)
    latency_scale: float = Field(default=2.0, gt=0.0)
    input_price_share: float = Field(default=0.75, ge=0.0, le=1.0)


DEFAULT_FEATURE_WEIGHTS: dict[EnumAgentRole, ModelFeatureWeights] = {
    EnumAgentRole.ORCHESTRATOR: ModelFeatureWeights(
        quality=30.0, coding=20.0, cost_efficiency=10.0, speed=10.0
    ),
    EnumAgentRole.ORACLE: ModelFeatureWeights(
        quality=45.0, coding=15.0, cost_efficiency=5.0, speed=5.0
    ),
    EnumAgentRole.DESIGNER: ModelFeatureWeights(
        quality=25.0, coding=15.0, cost_efficiency=10.0, speed=10.0
    ),
    EnumAgentRole.EXPLORER: ModelFeatureWeights(
        quality=10.0, coding=10.0, cost_efficiency=15.0, speed=35.0
    ),
    EnumAgentRole.LIBRARIAN: ModelFeatureWeights(
        quality=20.0, coding=10.0, cost_efficiency=15.0, speed=15.0
    ),
    EnumAgentRole.FIXER: ModelFeatureWeights(
        quality=15.0, coding=35.0, cost_efficiency=10.0, speed=15.0
    ),
}


class ModelFeatureWeightTable(BaseModel):
    """Per-role feature weights plus the shared normalization."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    normalization: ModelFeatureNormalization = Field(
        default_factory=ModelFeatureNormalization
    )
    roles: dict[EnumAgentRole, ModelFeatureWeights] = Field(
        default_factory=lambda: dict(DEFAULT_FEATURE_WEIGHTS)
    )

    @field_validator("roles", mode="after")
    @classmethod
    def _fill_missing_roles(
        cls, roles: dict[EnumAgentRole, ModelFeatureWeights]
    ) -> dict[EnumAgentRole, ModelFeatureWeights]:
        return {
            role: roles.get(role, DEFAULT_FEATURE_WEIGHTS[role])
            for role in EnumAgentRole
        }

    def for_role(self, role: EnumAgentRole) -> ModelFeatureWeights:
        return self.roles[role]


DEFAULT_FEATURE_WEIGHT_TABLE = ModelFeatureWeightTable()


def get_feature_weights(
    role: EnumAgentRole,
    table: ModelFeatureWeightTable = DEFAULT_FEATURE_WEIGHT_TABLE,
) -> ModelFeatureWeights:
    """Return the feature weights of ``role``."""
    return table.for_role(role)


__all__ = [
    "DEFAULT_FEATURE_WEIGHTS",
    "DEFAULT_FEATURE_WEIGHT_TABLE",
    "MAX_FEATURE_WEIGHT",
    "ModelFeatureNormalization",
    "ModelFeatureVector",
    "ModelFeatureWeightTable",
    "ModelFeatureWeights",
    "get_feature_weights",
]
