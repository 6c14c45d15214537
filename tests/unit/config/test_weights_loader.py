# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for YAML weight overrides."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from omniselect.config import (
    apply_weight_overrides,
    deep_merge,
    load_scoring_weights,
)
from omniselect.enums import EnumAgentRole
from omniselect.scoring import (
    CHUTES_PROFILE,
    DEFAULT_SCORING_WEIGHTS,
    OPENCODE_PROFILE,
)
from omniselect.signals import DEFAULT_FEATURE_WEIGHT_TABLE


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "weights.yaml"
    path.write_text(text, encoding="utf-8")
    return path


@pytest.mark.unit
class TestDeepMerge:
    def test_nested_mappings_merge(self) -> None:
        merged = deep_merge({"a": {"x": 1, "y": 2}, "b": 3}, {"a": {"y": 5}})
        assert merged == {"a": {"x": 1, "y": 5}, "b": 3}

    def test_lists_replace(self) -> None:
        assert deep_merge({"a": [1, 2]}, {"a": [3]}) == {"a": [3]}

    def test_base_is_not_mutated(self) -> None:
        base = {"a": {"x": 1}}
        deep_merge(base, {"a": {"x": 2}})
        assert base == {"a": {"x": 1}}


@pytest.mark.unit
class TestApplyWeightOverrides:
    def test_none_returns_defaults(self) -> None:
        overrides = apply_weight_overrides(None)
        assert overrides.scoring == DEFAULT_SCORING_WEIGHTS
        assert overrides.features == DEFAULT_FEATURE_WEIGHT_TABLE

    def test_partial_role_override_keeps_other_fields(self) -> None:
        overrides = apply_weight_overrides(
            {"scoring": {"roles": {"oracle": {"fast": -4}}}}
        )
        oracle = overrides.scoring.for_role(EnumAgentRole.ORACLE)
        default_oracle = DEFAULT_SCORING_WEIGHTS.for_role(EnumAgentRole.ORACLE)
        assert oracle.fast == -4.0
        assert oracle.reasoning == default_oracle.reasoning
        assert overrides.scoring.for_role(
            EnumAgentRole.FIXER
        ) == DEFAULT_SCORING_WEIGHTS.for_role(EnumAgentRole.FIXER)

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(ValidationError):
            apply_weight_overrides({"scoring": {"base": {"toolcall_bonsu": 1}}})

    def test_out_of_range_role_weight_rejected(self) -> None:
        with pytest.raises(ValidationError):
            apply_weight_overrides(
                {"scoring": {"roles": {"explorer": {"reasoning": -20000}}}}
            )

    def test_family_key_must_match_provider(self) -> None:
        with pytest.raises(ValidationError):
            apply_weight_overrides(
                {"families": {"kiro": CHUTES_PROFILE.model_dump(mode="json")}}
            )

    def test_out_of_range_feature_weight_rejected(self) -> None:
        with pytest.raises(ValidationError):
            apply_weight_overrides({"features": {"roles": {"explorer": {"speed": 500}}}})


@pytest.mark.unit
class TestLoadScoringWeights:
    def test_loads_partial_file(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            "scoring:\n"
            "  base:\n"
            "    toolcall_bonus: 30\n"
            "features:\n"
            "  roles:\n"
            "    explorer:\n"
            "      speed: 40\n",
        )
        overrides = load_scoring_weights(path)
        assert overrides.scoring.base.toolcall_bonus == 30.0
        assert overrides.scoring.base.deep_bonus == 12.0
        assert overrides.features.for_role(EnumAgentRole.EXPLORER).speed == 40.0

    def test_family_profile_override(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            "families:\n"
            "  chutes:\n"
            "    support:\n"
            "      speed_bonuses:\n"
            "        - {token: nano, points: 40}\n",
        )
        overrides = load_scoring_weights(path)
        chutes = overrides.families["chutes"]
        assert [(b.token, b.points) for b in chutes.support.speed_bonuses] == [
            ("nano", 40.0)
        ]
        assert chutes.primary == CHUTES_PROFILE.primary
        assert overrides.families["opencode"] == OPENCODE_PROFILE

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        overrides = load_scoring_weights(_write(tmp_path, ""))
        assert overrides.scoring == DEFAULT_SCORING_WEIGHTS

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Weights file not found"):
            load_scoring_weights(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        with pytest.raises(yaml.YAMLError):
            load_scoring_weights(_write(tmp_path, "scoring: [unclosed\n"))

    def test_non_mapping_top_level(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="must contain a mapping"):
            load_scoring_weights(_write(tmp_path, "- a\n- b\n"))
