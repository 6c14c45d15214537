# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""External signal feature blending."""

from omniselect.signals.feature_weights import (
    DEFAULT_FEATURE_WEIGHT_TABLE,
    DEFAULT_FEATURE_WEIGHTS,
    MAX_FEATURE_WEIGHT,
    ModelFeatureNormalization,
    ModelFeatureVector,
    ModelFeatureWeightTable,
    ModelFeatureWeights,
    get_feature_weights,
)
from omniselect.signals.handler_feature_blending import (
    ModelFeatureScore,
    ModelRankedScore,
    blended_score_fn,
    compute_feature_vector,
    external_signal_boost,
    find_signal_for_model,
    rank_models_with_breakdown,
    score_candidate_features,
)
from omniselect.signals.model_key_normalization import (
    build_model_key_aliases,
    exact_model_keys,
    normalize_model_key,
)

__all__ = [
    "DEFAULT_FEATURE_WEIGHTS",
    "DEFAULT_FEATURE_WEIGHT_TABLE",
    "MAX_FEATURE_WEIGHT",
    "ModelFeatureNormalization",
    "ModelFeatureScore",
    "ModelFeatureVector",
    "ModelFeatureWeightTable",
    "ModelFeatureWeights",
    "ModelRankedScore",
    "blended_score_fn",
    "build_model_key_aliases",
    "compute_feature_vector",
    "exact_model_keys",
    "external_signal_boost",
    "find_signal_for_model",
    "get_feature_weights",
    "normalize_model_key",
    "rank_models_with_breakdown",
    "score_candidate_features",
]
