# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Provider-family scoring for picking a primary/support pair inside one family.

Families (free-tier providers such as ``chutes`` and ``opencode``) share the
same score shape: capability bonuses, capped capacity terms, an active-status
bonus and, for the support slot, a naming-derived speed bonus. Only the
constants differ, so each family is a ``ModelFamilyScoringProfile`` and new
families are added by registering a profile, not by writing new functions.

These picks are independent of cross-family role scoring; their result feeds
the chain builder as the caller-preferred fallback overrides.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field

from omniselect.constants import PROVIDER_CHUTES, PROVIDER_OPENCODE
from omniselect.enums import EnumModelStatus
from omniselect.model_selector import (
    RoleScoring,
    ScoreFunction,
    pick_best,
    pick_primary_and_support,
)
from omniselect.models import ModelCandidate, ModelFamilySelection

logger = logging.getLogger(__name__)


class ModelSpeedBonus(BaseModel):
    """Points awarded when ``token`` occurs in the lower-cased model id."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    token: str = Field(min_length=1)
    points: float


class ModelFamilyScoreWeights(BaseModel):
    """Constants of one family score function (primary or support slot)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    reasoning: float = 0.0
    toolcall: float = 0.0
    attachment: float = 0.0
    context_cap: int = Field(default=1_000_000, gt=0)
    context_divisor: float = Field(default=10_000.0, gt=0.0)
    output_cap: int = Field(default=300_000, gt=0)
    output_divisor: float | None = Field(
        default=None, gt=0.0, description="None disables the output term."
    )
    active_bonus: float = 0.0
    speed_bonuses: tuple[ModelSpeedBonus, ...] = ()

    def speed_bonus(self, model_id: str) -> float:
        lowered = model_id.lower()
        return sum(
            bonus.points for bonus in self.speed_bonuses if bonus.token in lowered
        )

    def score(self, candidate: ModelCandidate) -> float:
        score = (
            self.reasoning * candidate.reasoning
            + self.toolcall * candidate.toolcall
            + self.attachment * candidate.attachment
            + min(candidate.context_limit, self.context_cap) / self.context_divisor
            + self.speed_bonus(candidate.id)
        )
        if self.output_divisor is not None:
            score += min(candidate.output_limit, self.output_cap) / self.output_divisor
        if candidate.status is EnumModelStatus.ACTIVE:
            score += self.active_bonus
        return score


class ModelFamilyScoringProfile(BaseModel):
    """Primary and support score constants for one provider family."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    provider_id: str
    primary: ModelFamilyScoreWeights
    support: ModelFamilyScoreWeights

    def scoring(self) -> RoleScoring[ModelCandidate]:
        primary: ScoreFunction[ModelCandidate] = self.primary.score
        support: ScoreFunction[ModelCandidate] = self.support.score
        return RoleScoring(primary=primary, support=support)


CHUTES_PROFILE = ModelFamilyScoringProfile(
    provider_id=PROVIDER_CHUTES,
    primary=ModelFamilyScoreWeights(
        reasoning=120.0,
        toolcall=80.0,
        attachment=20.0,
        context_divisor=9_000.0,
        output_divisor=10_000.0,
        active_bonus=10.0,
    ),
    support=ModelFamilyScoreWeights(
        reasoning=35.0,
        toolcall=90.0,
        context_cap=400_000,
        context_divisor=20_000.0,
        active_bonus=8.0,
        speed_bonuses=(
            ModelSpeedBonus(token="nano", points=60.0),
            ModelSpeedBonus(token="flash", points=45.0),
            ModelSpeedBonus(token="mini", points=30.0),
            ModelSpeedBonus(token="lite", points=20.0),
            ModelSpeedBonus(token="small", points=15.0),
        ),
    ),
)

OPENCODE_PROFILE = ModelFamilyScoringProfile(
    provider_id=PROVIDER_OPENCODE,
    primary=ModelFamilyScoreWeights(
        reasoning=100.0,
        toolcall=80.0,
        attachment=20.0,
        context_divisor=10_000.0,
        output_divisor=10_000.0,
        active_bonus=10.0,
    ),
    support=ModelFamilyScoreWeights(
        reasoning=50.0,
        toolcall=90.0,
        context_cap=400_000,
        context_divisor=20_000.0,
        active_bonus=5.0,
        speed_bonuses=(
            ModelSpeedBonus(token="nano", points=60.0),
            ModelSpeedBonus(token="flash", points=45.0),
            ModelSpeedBonus(token="mini", points=25.0),
            ModelSpeedBonus(token="preview", points=10.0),
        ),
    ),
)

FAMILY_PROFILES: dict[str, ModelFamilyScoringProfile] = {
    CHUTES_PROFILE.provider_id: CHUTES_PROFILE,
    OPENCODE_PROFILE.provider_id: OPENCODE_PROFILE,
}


def get_family_profile(
    provider_id: str,
    profiles: Mapping[str, ModelFamilyScoringProfile] = FAMILY_PROFILES,
) -> ModelFamilyScoringProfile | None:
    """Return the scoring profile of a provider family, if one is registered."""
    return profiles.get(provider_id)


def pick_best_family_model(
    models: Sequence[ModelCandidate],
    profile: ModelFamilyScoringProfile,
) -> ModelCandidate | None:
    """Best model for the family's primary (coding) slot."""
    return pick_best(models, profile.primary.score)


def pick_support_family_model(
    models: Sequence[ModelCandidate],
    profile: ModelFamilyScoringProfile,
    primary_model: str | None = None,
) -> ModelCandidate | None:
    """Best support model, distinct from the primary when possible."""
    return pick_primary_and_support(models, profile.scoring(), primary_model).support


def select_family_models(
    catalog: Sequence[ModelCandidate],
    provider_id: str,
    preferred_primary: str | None = None,
    profiles: Mapping[str, ModelFamilyScoringProfile] = FAMILY_PROFILES,
) -> ModelFamilySelection:
    """Pick the primary/secondary pair for one provider family.

    Args:
        catalog: Full catalog; only models of ``provider_id`` are considered.
        provider_id: Family to select within.
        preferred_primary: Model id that wins the primary slot when present.
        profiles: Family profiles by provider id; weight overrides replace
            the built-in ``FAMILY_PROFILES``.

    Returns:
        Selection with both ids ``None`` when the family has no profile or
        no models in the catalog.
    """
    profile = get_family_profile(provider_id, profiles)
    if profile is None:
        logger.debug("No family scoring profile for provider %s", provider_id)
        return ModelFamilySelection()

    family_models = [m for m in catalog if m.provider_id == provider_id]
    picked = pick_primary_and_support(
        family_models, profile.scoring(), preferred_primary
    )
    return ModelFamilySelection(
        primary_model=picked.primary.id if picked.primary else None,
        secondary_model=picked.support.id if picked.support else None,
    )


__all__ = [
    "CHUTES_PROFILE",
    "FAMILY_PROFILES",
    "OPENCODE_PROFILE",
    "ModelFamilyScoreWeights",
    "ModelFamilyScoringProfile",
    "ModelSpeedBonus",
    "get_family_profile",
    "pick_best_family_model",
    "pick_support_family_model",
    "select_family_models",
]
