# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""omniselect - deterministic model ranking and fallback chains.

Ranks discovered models for each agent role, assigns a primary model per
role and builds an ordered, provider-diverse fallback chain ending in a
sentinel model.

Quick Start:
    >>> from omniselect import (
    ...     ModelCandidate,
    ...     ModelSelectionConfig,
    ...     build_dynamic_model_plan,
    ... )
    >>> catalog = [
    ...     ModelCandidate(id="openai/gpt-5.3-codex", provider_id="openai", toolcall=True),
    ... ]
    >>> plan = build_dynamic_model_plan(catalog, ModelSelectionConfig(has_openai=True))
    >>> plan.to_dict()["chains"]["fixer"]
    ['openai/gpt-5.3-codex', 'opencode/big-pickle']
"""

from omniselect.constants import MAX_CHAIN_LENGTH, SENTINEL_FALLBACK_MODEL
from omniselect.enums import EnumAgentRole, EnumModelStatus
from omniselect.model_selector import (
    pick_best,
    pick_primary_and_support,
    rank_candidates,
)
from omniselect.models import (
    ModelAgentAssignment,
    ModelCandidate,
    ModelDynamicPlan,
    ModelExternalSignal,
    ModelFamilySelection,
    ModelSelectionConfig,
)
from omniselect.planner import (
    PlanUnavailableError,
    build_dynamic_model_plan,
    require_dynamic_model_plan,
    resolve_family_selections,
)
from omniselect.scoring import role_score
from omniselect.signals import rank_models_with_breakdown, score_candidate_features

__version__ = "0.1.0"

__all__ = [
    "MAX_CHAIN_LENGTH",
    "SENTINEL_FALLBACK_MODEL",
    "EnumAgentRole",
    "EnumModelStatus",
    "ModelAgentAssignment",
    "ModelCandidate",
    "ModelDynamicPlan",
    "ModelExternalSignal",
    "ModelFamilySelection",
    "ModelSelectionConfig",
    "PlanUnavailableError",
    "__version__",
    "build_dynamic_model_plan",
    "pick_best",
    "pick_primary_and_support",
    "rank_candidates",
    "rank_models_with_breakdown",
    "require_dynamic_model_plan",
    "resolve_family_selections",
    "role_score",
    "score_candidate_features",
]
