# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""YAML overrides for scoring, feature and family weights.

Override files only name the values they change; everything else keeps its
default. Example::

    scoring:
      base:
        toolcall_bonus: 30
      roles:
        oracle:
          fast: -4
    features:
      roles:
        explorer:
          speed: 40
    families:
      chutes:
        support:
          speed_bonuses:
            - {token: nano, points: 40}
            - {token: flash, points: 30}

Validation happens here, at the boundary, so an invalid file fails before
any ranking runs.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from omniselect.scoring import (
    DEFAULT_SCORING_WEIGHTS,
    FAMILY_PROFILES,
    ModelFamilyScoringProfile,
    ModelScoringWeights,
)
from omniselect.signals import DEFAULT_FEATURE_WEIGHT_TABLE, ModelFeatureWeightTable

logger = logging.getLogger(__name__)


class ModelWeightOverrides(BaseModel):
    """Scoring, feature and family weights after applying an override file."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    scoring: ModelScoringWeights = Field(
        default_factory=lambda: DEFAULT_SCORING_WEIGHTS
    )
    features: ModelFeatureWeightTable = Field(
        default_factory=lambda: DEFAULT_FEATURE_WEIGHT_TABLE
    )
    families: dict[str, ModelFamilyScoringProfile] = Field(
        default_factory=lambda: dict(FAMILY_PROFILES)
    )

    @field_validator("families", mode="after")
    @classmethod
    def _keys_match_provider(
        cls, families: dict[str, ModelFamilyScoringProfile]
    ) -> dict[str, ModelFamilyScoringProfile]:
        for key, profile in families.items():
            if key != profile.provider_id:
                raise ValueError(
                    f"Family key {key!r} does not match provider_id "
                    f"{profile.provider_id!r}"
                )
        return families


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``.

    Nested mappings are merged key by key; any other value (lists included)
    replaces the base value.
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def apply_weight_overrides(data: Mapping[str, Any] | None) -> ModelWeightOverrides:
    """Apply an override mapping on top of the default weights.

    Raises:
        pydantic.ValidationError: If a key is unknown or a value is invalid.
    """
    defaults = ModelWeightOverrides().model_dump(mode="json")
    return ModelWeightOverrides.model_validate(deep_merge(defaults, data or {}))


def load_scoring_weights(path: str | Path) -> ModelWeightOverrides:
    """Load weight overrides from a YAML file.

    Args:
        path: YAML file with optional ``scoring``, ``features`` and
            ``families`` sections.

    Returns:
        Defaults with the file's values applied.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        yaml.YAMLError: If the file is not valid YAML.
        ValueError: If the top level is not a mapping.
        pydantic.ValidationError: If a key is unknown or a value is invalid.
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Weights file not found: {path}")

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(
            f"Weights file {path} must contain a mapping, got {type(data).__name__}"
        )

    overrides = apply_weight_overrides(data)
    logger.info("Loaded weight overrides from %s", path)
    return overrides


__all__ = [
    "ModelWeightOverrides",
    "apply_weight_overrides",
    "deep_merge",
    "load_scoring_weights",
]
