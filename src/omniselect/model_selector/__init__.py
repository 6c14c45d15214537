# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Candidate ranking core.

Deterministic sort/select primitives shared by role scoring, provider-family
scoring and the fallback chain builder.
"""

from omniselect.model_selector.selector import (
    PrimaryAndSupport,
    RankedCandidate,
    RoleScoring,
    ScoreFunction,
    SelectionOptions,
    SupportsModelId,
    default_tie_breaker,
    pick_best,
    pick_primary_and_support,
    rank_candidates,
)

__all__ = [
    "PrimaryAndSupport",
    "RankedCandidate",
    "RoleScoring",
    "ScoreFunction",
    "SelectionOptions",
    "SupportsModelId",
    "default_tie_breaker",
    "pick_best",
    "pick_primary_and_support",
    "rank_candidates",
]
