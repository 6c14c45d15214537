# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Per-role assignment and fallback chain planning."""

from omniselect.planner.handler_fallback_chain import (
    PlanUnavailableError,
    assemble_chain,
    build_dynamic_model_plan,
    dedupe_model_ids,
    filter_enabled_candidates,
    provider_best_models,
    require_dynamic_model_plan,
    resolve_family_selections,
)

__all__ = [
    "PlanUnavailableError",
    "assemble_chain",
    "build_dynamic_model_plan",
    "dedupe_model_ids",
    "filter_enabled_candidates",
    "provider_best_models",
    "require_dynamic_model_plan",
    "resolve_family_selections",
]
