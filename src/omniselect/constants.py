# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""
Shared Constants for omniselect.

Usage:
    from omniselect.constants import SENTINEL_FALLBACK_MODEL

    chain = [*ranked_ids, SENTINEL_FALLBACK_MODEL]
"""

# =============================================================================
# Fallback Chains
# =============================================================================

SENTINEL_FALLBACK_MODEL: str = "opencode/big-pickle"
"""
Last-resort model id appended to every fallback chain.

Served by the ``opencode`` provider in every deployment, so a chain always
ends in something that resolves even when every ranked model fails.
"""

MAX_CHAIN_LENGTH: int = 7
"""
Maximum number of entries in a fallback chain, sentinel included.
"""

# =============================================================================
# Provider Identifiers
# =============================================================================

PROVIDER_OPENAI: str = "openai"
PROVIDER_ANTHROPIC: str = "anthropic"
PROVIDER_COPILOT: str = "github-copilot"
PROVIDER_ZAI_PLAN: str = "zai-coding-plan"
PROVIDER_KIMI: str = "kimi-for-coding"
PROVIDER_GOOGLE: str = "google"
PROVIDER_CHUTES: str = "chutes"
PROVIDER_OPENCODE: str = "opencode"

# =============================================================================
# Score Overrides
# =============================================================================

TOOLCALL_REQUIRED_PENALTY: float = -10_000.0
"""
Score assigned to a tool-call incapable model for a role that needs tools.

Far below any reachable weighted score, so such a model only surfaces when
every eligible model lacks tool calling.
"""

DEPRECATED_PENALTY: float = -5_000.0
"""
Score assigned to a deprecated model for every role.
"""
