# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for provider-family primary/support selection."""

from __future__ import annotations

import pytest

from omniselect.models import ModelCandidate
from omniselect.scoring import (
    CHUTES_PROFILE,
    OPENCODE_PROFILE,
    get_family_profile,
    pick_best_family_model,
    pick_support_family_model,
    select_family_models,
)


def _chutes(model_id: str, **overrides) -> ModelCandidate:
    fields = {
        "id": model_id,
        "provider_id": "chutes",
        "context_limit": 128_000,
        "output_limit": 16_000,
    }
    fields.update(overrides)
    return ModelCandidate(**fields)


@pytest.mark.unit
class TestChutesSelection:
    """Chutes family scoring."""

    def test_prefers_reasoning_model_for_primary(self) -> None:
        models = [
            _chutes(
                "chutes/minimax-m2.1",
                reasoning=True,
                toolcall=True,
                context_limit=512_000,
                output_limit=64_000,
                daily_request_limit=300,
            ),
            _chutes(
                "chutes/gpt-oss-20b-mini",
                toolcall=True,
                daily_request_limit=5000,
            ),
        ]
        best = pick_best_family_model(models, CHUTES_PROFILE)
        assert best is not None
        assert best.id == "chutes/minimax-m2.1"

    def test_prefers_fast_model_for_support(self) -> None:
        models = [
            _chutes(
                "chutes/kimi-k2.5",
                reasoning=True,
                toolcall=True,
                daily_request_limit=300,
            ),
            _chutes(
                "chutes/qwen3-coder-30b-mini",
                reasoning=True,
                toolcall=True,
                daily_request_limit=5000,
            ),
        ]
        support = pick_support_family_model(models, CHUTES_PROFILE, "chutes/kimi-k2.5")
        assert support is not None
        assert support.id == "chutes/qwen3-coder-30b-mini"

    def test_support_without_primary_uses_best_primary(self) -> None:
        models = [
            _chutes("chutes/big-reasoner", reasoning=True, toolcall=True),
            _chutes("chutes/tiny-nano", toolcall=True),
        ]
        support = pick_support_family_model(models, CHUTES_PROFILE)
        assert support is not None
        assert support.id == "chutes/tiny-nano"

    def test_empty_family(self) -> None:
        assert pick_best_family_model([], CHUTES_PROFILE) is None
        assert pick_support_family_model([], CHUTES_PROFILE) is None


@pytest.mark.unit
class TestSelectFamilyModels:
    """Family selection over a mixed catalog."""

    def test_only_family_models_are_considered(self, candidate_factory) -> None:
        catalog = [
            candidate_factory("openai/gpt-5.3-codex"),
            candidate_factory("opencode/glm-4.7-free"),
            candidate_factory("opencode/gpt-5-nano", reasoning=False),
        ]
        selection = select_family_models(catalog, "opencode")
        assert selection.primary_model == "opencode/glm-4.7-free"
        assert selection.secondary_model == "opencode/gpt-5-nano"

    def test_preferred_primary(self, candidate_factory) -> None:
        catalog = [
            candidate_factory("opencode/glm-4.7-free"),
            candidate_factory("opencode/gpt-5-nano", reasoning=False),
        ]
        selection = select_family_models(catalog, "opencode", "opencode/gpt-5-nano")
        assert selection.primary_model == "opencode/gpt-5-nano"
        assert selection.secondary_model == "opencode/glm-4.7-free"

    def test_unknown_family_returns_empty_selection(self, candidate_factory) -> None:
        selection = select_family_models(
            [candidate_factory("openai/gpt-5.3-codex")], "openai"
        )
        assert selection.primary_model is None
        assert selection.secondary_model is None

    def test_registered_profiles(self) -> None:
        assert get_family_profile("chutes") is CHUTES_PROFILE
        assert get_family_profile("opencode") is OPENCODE_PROFILE
        assert get_family_profile("openai") is None
