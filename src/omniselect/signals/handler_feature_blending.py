# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""External signal feature blending. Pure functions, no I/O.

Pipeline per (candidate, role):
    1. Look up the first alias key of the candidate present in the signal map.
       No match means every feature is absent and the boost is 0.0.
    2. Normalize the signal into a ``ModelFeatureVector`` (each feature in
       [0, 1]; a missing signal field yields 0.0 for that feature).
    3. Weighted sum with the role's ``ModelFeatureWeights`` -> boost.
    4. Blended score = role score + boost, ranked with the same tie-break as
       ``omniselect.model_selector.rank_candidates``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from pydantic import BaseModel, ConfigDict

from omniselect.enums import EnumAgentRole
from omniselect.model_selector import ScoreFunction, rank_candidates
from omniselect.models import ModelCandidate, ModelExternalSignal
from omniselect.scoring import (
    DEFAULT_SCORING_WEIGHTS,
    ModelScoringWeights,
    get_role_strategy,
)
from omniselect.signals.feature_weights import (
    DEFAULT_FEATURE_WEIGHT_TABLE,
    ModelFeatureNormalization,
    ModelFeatureVector,
    ModelFeatureWeightTable,
)
from omniselect.signals.model_key_normalization import build_model_key_aliases

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------


class ModelFeatureScore(BaseModel):
    """Feature breakdown of one candidate for one role.

    Attributes:
        features: Normalized features.
        weighted: Features multiplied by the role's weights.
        total_score: Sum of ``weighted``; the external signal boost.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    features: ModelFeatureVector
    weighted: dict[str, float]
    total_score: float


class ModelRankedScore(BaseModel):
    """Ranking row with the split between role score and signal boost.

    Attributes:
        model: Candidate id.
        total_score: ``base_score + external_signal_boost``; the ranking key.
        base_score: Role score without external signals.
        external_signal_boost: Contribution of external signals.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    model: str
    total_score: float
    base_score: float
    external_signal_boost: float


# ---------------------------------------------------------------------------
# Lookup and features
# ---------------------------------------------------------------------------


def find_signal_for_model(
    candidate: ModelCandidate,
    signals: Mapping[str, ModelExternalSignal] | None,
) -> ModelExternalSignal | None:
    """Return the signal of the first matching alias key, or ``None``."""
    if not signals:
        return None
    for key in build_model_key_aliases(candidate.id):
        signal = signals.get(key)
        if signal is not None:
            return signal
    logger.debug("No external signal for %s", candidate.id)
    return None


def _clamp_unit(value: float) -> float:
    return max(0.0, min(1.0, value))


def _blended_price(
    signal: ModelExternalSignal, normalization: ModelFeatureNormalization
) -> float | None:
    input_price = signal.input_price_per_1m
    output_price = signal.output_price_per_1m
    if input_price is None and output_price is None:
        return None
    if input_price is None:
        return output_price
    if output_price is None:
        return input_price
    share = normalization.input_price_share
    return share * input_price + (1.0 - share) * output_price


def compute_feature_vector(
    signal: ModelExternalSignal | None,
    normalization: ModelFeatureNormalization | None = None,
) -> ModelFeatureVector:
    """Normalize a signal into features; ``None`` yields the zero vector."""
    normalization = normalization or DEFAULT_FEATURE_WEIGHT_TABLE.normalization
    if signal is None:
        return ModelFeatureVector()

    quality = 0.0
    if signal.quality_score is not None:
        quality = _clamp_unit(signal.quality_score / normalization.quality_ceiling)

    coding = 0.0
    if signal.coding_score is not None:
        coding = _clamp_unit(signal.coding_score / normalization.coding_ceiling)

    cost_efficiency = 0.0
    price = _blended_price(signal, normalization)
    if price is not None:
        cost_efficiency = _clamp_unit(1.0 / (1.0 + price / normalization.price_scale))

    speed = 0.0
    if signal.latency_seconds is not None:
        speed = _clamp_unit(
            1.0 / (1.0 + signal.latency_seconds / normalization.latency_scale)
        )

    return ModelFeatureVector(
        quality=quality,
        coding=coding,
        cost_efficiency=cost_efficiency,
        speed=speed,
    )


def score_candidate_features(
    candidate: ModelCandidate,
    role: EnumAgentRole,
    signals: Mapping[str, ModelExternalSignal] | None,
    table: ModelFeatureWeightTable = DEFAULT_FEATURE_WEIGHT_TABLE,
) -> ModelFeatureScore:
    """Compute the feature breakdown and boost of ``candidate`` for ``role``."""
    features = compute_feature_vector(
        find_signal_for_model(candidate, signals), table.normalization
    )
    weights = table.for_role(role)
    weighted = {
        name: value * getattr(weights, name)
        for name, value in features.model_dump().items()
    }
    return ModelFeatureScore(
        features=features,
        weighted=weighted,
        total_score=sum(weighted.values()),
    )


def external_signal_boost(
    candidate: ModelCandidate,
    role: EnumAgentRole,
    signals: Mapping[str, ModelExternalSignal] | None,
    table: ModelFeatureWeightTable = DEFAULT_FEATURE_WEIGHT_TABLE,
) -> float:
    """Return the score contribution of external signals (0.0 when absent)."""
    if not signals:
        return 0.0
    return score_candidate_features(candidate, role, signals, table).total_score


# ---------------------------------------------------------------------------
# Blended ranking
# ---------------------------------------------------------------------------


def blended_score_fn(
    role: EnumAgentRole,
    signals: Mapping[str, ModelExternalSignal] | None = None,
    weights: ModelScoringWeights = DEFAULT_SCORING_WEIGHTS,
    table: ModelFeatureWeightTable = DEFAULT_FEATURE_WEIGHT_TABLE,
) -> ScoreFunction[ModelCandidate]:
    """Return role score + external boost as a single-argument function."""
    strategy = get_role_strategy(role)

    def _score(candidate: ModelCandidate) -> float:
        return strategy.score(candidate, weights) + external_signal_boost(
            candidate, role, signals, table
        )

    return _score


def rank_models_with_breakdown(
    models: Iterable[ModelCandidate],
    role: EnumAgentRole,
    signals: Mapping[str, ModelExternalSignal] | None = None,
    weights: ModelScoringWeights = DEFAULT_SCORING_WEIGHTS,
    table: ModelFeatureWeightTable = DEFAULT_FEATURE_WEIGHT_TABLE,
) -> list[ModelRankedScore]:
    """Rank models for ``role`` and report the score split for each.

    Args:
        models: Candidates to rank.
        role: Role to score for.
        signals: Alias key -> signal map; ``None`` or empty disables blending.
        weights: Role scoring weights.
        table: Feature weights and normalization.

    Returns:
        Rows sorted by descending ``total_score``, ties by ascending id.
    """
    strategy = get_role_strategy(role)
    ranked = rank_candidates(
        models, blended_score_fn(role, signals, weights, table)
    )
    rows: list[ModelRankedScore] = []
    for entry in ranked:
        rows.append(
            ModelRankedScore(
                model=entry.candidate.id,
                total_score=entry.score,
                base_score=strategy.score(entry.candidate, weights),
                external_signal_boost=external_signal_boost(
                    entry.candidate, role, signals, table
                ),
            )
        )
    return rows


__all__ = [
    "ModelFeatureScore",
    "ModelRankedScore",
    "blended_score_fn",
    "compute_feature_vector",
    "external_signal_boost",
    "find_signal_for_model",
    "rank_models_with_breakdown",
    "score_candidate_features",
]
