# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Role-aware and provider-family scoring functions."""

from omniselect.scoring.family_scoring import (
    CHUTES_PROFILE,
    FAMILY_PROFILES,
    OPENCODE_PROFILE,
    ModelFamilyScoreWeights,
    ModelFamilyScoringProfile,
    ModelSpeedBonus,
    get_family_profile,
    pick_best_family_model,
    pick_support_family_model,
    select_family_models,
)
from omniselect.scoring.handler_base_scoring import (
    KeywordSignals,
    base_score,
    keyword_signals,
)
from omniselect.scoring.role_strategies import (
    ROLE_STRATEGIES,
    RoleScoringStrategy,
    get_role_strategy,
    role_score,
    role_score_fn,
)
from omniselect.scoring.scoring_weights import (
    DEFAULT_ROLE_WEIGHTS,
    DEFAULT_SCORING_WEIGHTS,
    MAX_ROLE_WEIGHT,
    WEIGHTED_SCORE_FLOOR,
    ModelBaseScoreWeights,
    ModelCapacityScale,
    ModelRoleWeights,
    ModelScoringWeights,
    ModelStatusWeights,
    ModelVersionBonus,
)

__all__ = [
    "CHUTES_PROFILE",
    "DEFAULT_ROLE_WEIGHTS",
    "DEFAULT_SCORING_WEIGHTS",
    "FAMILY_PROFILES",
    "MAX_ROLE_WEIGHT",
    "OPENCODE_PROFILE",
    "ROLE_STRATEGIES",
    "WEIGHTED_SCORE_FLOOR",
    "KeywordSignals",
    "ModelBaseScoreWeights",
    "ModelCapacityScale",
    "ModelFamilyScoreWeights",
    "ModelFamilyScoringProfile",
    "ModelRoleWeights",
    "ModelScoringWeights",
    "ModelSpeedBonus",
    "ModelStatusWeights",
    "ModelVersionBonus",
    "RoleScoringStrategy",
    "base_score",
    "get_family_profile",
    "get_role_strategy",
    "keyword_signals",
    "pick_best_family_model",
    "pick_support_family_model",
    "role_score",
    "role_score_fn",
    "select_family_models",
]
