# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT
"""
Pytest configuration and fixtures for omniselect tests.

Shared catalog and configuration fixtures for ranking, scoring and planning
tests.
"""

from collections.abc import Callable
from typing import Any

import pytest

from omniselect.models import ModelCandidate, ModelSelectionConfig

# =========================================================================
# Catalog Fixtures
# =========================================================================


def make_candidate(model_id: str, **overrides: Any) -> ModelCandidate:
    """Build a capable, active candidate; ``provider_id`` comes from the id."""
    fields: dict[str, Any] = {
        "id": model_id,
        "provider_id": model_id.split("/", 1)[0],
        "context_limit": 200_000,
        "output_limit": 32_000,
        "reasoning": True,
        "toolcall": True,
        "attachment": False,
    }
    fields.update(overrides)
    return ModelCandidate(**fields)


@pytest.fixture
def candidate_factory() -> Callable[..., ModelCandidate]:
    """Factory for catalog candidates with sensible capable defaults."""
    return make_candidate


@pytest.fixture
def mixed_catalog() -> list[ModelCandidate]:
    """Six models across four providers, all tool-call capable."""
    return [
        make_candidate("openai/gpt-5.3-codex"),
        make_candidate("openai/gpt-5.1-codex-mini"),
        make_candidate("github-copilot/grok-code-fast-1"),
        make_candidate("zai-coding-plan/glm-4.7"),
        make_candidate("chutes/kimi-k2.5"),
        make_candidate("chutes/minimax-m2.1"),
    ]


@pytest.fixture
def mixed_config() -> ModelSelectionConfig:
    """Five providers enabled with both family overrides configured."""
    return ModelSelectionConfig(
        has_openai=True,
        has_copilot=True,
        has_zai_plan=True,
        has_chutes=True,
        use_opencode_free_models=True,
        selected_opencode_primary_model="opencode/glm-4.7-free",
        selected_opencode_secondary_model="opencode/gpt-5-nano",
        selected_chutes_primary_model="chutes/kimi-k2.5",
        selected_chutes_secondary_model="chutes/minimax-m2.1",
    )


# =========================================================================
# Verbose Listing Fixtures
# =========================================================================


SAMPLE_VERBOSE_OUTPUT = """
opencode/gpt-5-nano
{
  "id": "gpt-5-nano",
  "providerID": "opencode",
  "name": "GPT 5 Nano",
  "status": "active",
  "cost": { "input": 0, "output": 0, "cache": { "read": 0, "write": 0 } },
  "limit": { "context": 400000, "output": 128000 },
  "capabilities": { "reasoning": true, "toolcall": true, "attachment": true }
}
chutes/minimax-m2.1-5000
{
  "id": "minimax-m2.1-5000",
  "providerID": "chutes",
  "name": "MiniMax M2.1 5000 req/day",
  "status": "active",
  "cost": { "input": 0, "output": 0, "cache": { "read": 0, "write": 0 } },
  "limit": { "context": 500000, "output": 64000 },
  "capabilities": { "reasoning": true, "toolcall": true, "attachment": false }
}
openai/gpt-5.3-codex
{
  "id": "gpt-5.3-codex",
  "providerID": "openai",
  "name": "GPT-5.3 Codex",
  "cost": { "input": 1.25, "output": 10 },
  "limit": { "context": 400000, "output": 128000 },
  "capabilities": { "reasoning": true, "toolcall": true, "attachment": true }
}
"""


@pytest.fixture
def sample_verbose_output() -> str:
    """Verbose model listing with two free models and one paid model."""
    return SAMPLE_VERBOSE_OUTPUT
