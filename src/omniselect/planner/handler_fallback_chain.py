# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Fallback chain builder: per-role primary assignment and failover chain.

Pure and deterministic: the same catalog, config and signal map always
produce an identical plan. No I/O, no shared state.

Per role:
    1. Keep catalog models whose provider is enabled.
    2. Rank them with the role score (plus external boost when signals are
       given).
    3. Primary = preferred override if eligible, else the top-ranked model.
    4. Visit providers in rank order and take each provider's best model, so
       the chain stays provider-diverse even when one provider dominates.
    5. Append the family fallback overrides, then the sentinel.
    6. De-duplicate (first occurrence wins) and cap at ``MAX_CHAIN_LENGTH``.
       The sentinel goes last unless it is itself the primary.

A role without eligible models is omitted. A plan with no roles is ``None``;
callers that cannot continue without one use ``require_dynamic_model_plan``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from omniselect.constants import MAX_CHAIN_LENGTH, SENTINEL_FALLBACK_MODEL
from omniselect.enums import EnumAgentRole
from omniselect.model_selector import RankedCandidate, rank_candidates
from omniselect.models import (
    ModelAgentAssignment,
    ModelCandidate,
    ModelDynamicPlan,
    ModelExternalSignal,
    ModelSelectionConfig,
)
from omniselect.scoring import (
    DEFAULT_SCORING_WEIGHTS,
    FAMILY_PROFILES,
    ModelFamilyScoringProfile,
    ModelScoringWeights,
    get_role_strategy,
    select_family_models,
)
from omniselect.signals import (
    DEFAULT_FEATURE_WEIGHT_TABLE,
    ModelFeatureWeightTable,
    blended_score_fn,
)

logger = logging.getLogger(__name__)


class PlanUnavailableError(RuntimeError):
    """No enabled provider has a usable model, so no plan can be built."""


# ---------------------------------------------------------------------------
# Chain helpers
# ---------------------------------------------------------------------------


def dedupe_model_ids(model_ids: Iterable[str | None]) -> list[str]:
    """Drop empty and repeated ids, keeping the first occurrence order."""
    seen: set[str] = set()
    result: list[str] = []
    for model_id in model_ids:
        if not model_id or model_id in seen:
            continue
        seen.add(model_id)
        result.append(model_id)
    return result


def provider_best_models(ranked: Sequence[RankedCandidate[ModelCandidate]]) -> list[str]:
    """Best model of each provider, providers ordered by their best rank."""
    best: dict[str, str] = {}
    for entry in ranked:
        best.setdefault(entry.candidate.provider_id, entry.candidate.id)
    return list(best.values())


def assemble_chain(
    model_ids: Iterable[str | None],
    sentinel: str = SENTINEL_FALLBACK_MODEL,
    max_length: int = MAX_CHAIN_LENGTH,
) -> tuple[str, ...]:
    """Build a de-duplicated, capped chain that always contains ``sentinel``.

    The sentinel is moved to the end unless it is the first entry (the
    role's primary), in which case it stays first.

    Args:
        model_ids: Ordered chain entries before the sentinel; ``None`` and
            empty entries are skipped.
        sentinel: Last-resort id appended to every chain.
        max_length: Maximum chain length including the sentinel.

    Returns:
        Chain of at most ``max_length`` unique ids.
    """
    ids = dedupe_model_ids(model_ids)
    body = [model_id for model_id in ids if model_id != sentinel]
    limit = max(max_length - 1, 0)
    if ids and ids[0] == sentinel:
        return (sentinel, *body[:limit])
    return (*body[:limit], sentinel)


def _select_primary(
    ranked: Sequence[RankedCandidate[ModelCandidate]],
    preferred: str | None,
) -> ModelCandidate | None:
    if not ranked:
        return None
    if preferred is not None:
        for entry in ranked:
            if entry.candidate.id == preferred:
                return entry.candidate
        logger.debug("Preferred primary %s is not eligible; ignoring", preferred)
    return ranked[0].candidate


# ---------------------------------------------------------------------------
# Plan building
# ---------------------------------------------------------------------------


def filter_enabled_candidates(
    catalog: Iterable[ModelCandidate],
    enabled_providers: Iterable[str],
) -> list[ModelCandidate]:
    """Keep catalog models served by an enabled provider."""
    enabled = set(enabled_providers)
    return [candidate for candidate in catalog if candidate.provider_id in enabled]


def build_dynamic_model_plan(
    catalog: Sequence[ModelCandidate],
    config: ModelSelectionConfig,
    *,
    signals: Mapping[str, ModelExternalSignal] | None = None,
    weights: ModelScoringWeights = DEFAULT_SCORING_WEIGHTS,
    feature_table: ModelFeatureWeightTable = DEFAULT_FEATURE_WEIGHT_TABLE,
    roles: Iterable[EnumAgentRole] = tuple(EnumAgentRole),
) -> ModelDynamicPlan | None:
    """Build per-role assignments and fallback chains.

    Args:
        catalog: Discovered models; order does not affect the result.
        config: Enabled providers and caller overrides.
        signals: Optional external signals blended into the ranking.
        weights: Role scoring weights.
        feature_table: External feature weights.
        roles: Roles to plan for, in output order.

    Returns:
        The plan, or ``None`` when no role could be assigned.
    """
    eligible = filter_enabled_candidates(catalog, config.enabled_providers())
    if not eligible:
        logger.debug(
            "No catalog models for enabled providers %s", config.enabled_providers()
        )
        return None

    agents: dict[EnumAgentRole, ModelAgentAssignment] = {}
    chains: dict[EnumAgentRole, tuple[str, ...]] = {}

    for role in roles:
        strategy = get_role_strategy(role)
        ranked = rank_candidates(
            eligible, blended_score_fn(role, signals, weights, feature_table)
        )
        primary = _select_primary(ranked, config.preferred_primary_models.get(role))
        if primary is None:
            logger.debug("No eligible model for role %s", role.value)
            continue

        chutes_override, opencode_override = config.fallback_overrides(
            secondary=strategy.prefers_secondary_fallback
        )
        chain = assemble_chain(
            [
                primary.id,
                *provider_best_models(ranked),
                chutes_override,
                opencode_override,
            ]
        )

        agents[role] = ModelAgentAssignment(model=primary.id, variant=strategy.variant)
        chains[role] = chain

    if not agents:
        return None
    return ModelDynamicPlan(agents=agents, chains=chains)


def require_dynamic_model_plan(
    catalog: Sequence[ModelCandidate],
    config: ModelSelectionConfig,
    *,
    signals: Mapping[str, ModelExternalSignal] | None = None,
    weights: ModelScoringWeights = DEFAULT_SCORING_WEIGHTS,
    feature_table: ModelFeatureWeightTable = DEFAULT_FEATURE_WEIGHT_TABLE,
    roles: Iterable[EnumAgentRole] = tuple(EnumAgentRole),
) -> ModelDynamicPlan:
    """Like ``build_dynamic_model_plan`` but raise when no plan is possible.

    Raises:
        PlanUnavailableError: No enabled provider has any usable model.
    """
    plan = build_dynamic_model_plan(
        catalog,
        config,
        signals=signals,
        weights=weights,
        feature_table=feature_table,
        roles=roles,
    )
    if plan is None:
        providers = ", ".join(config.enabled_providers()) or "<none>"
        raise PlanUnavailableError(
            f"No usable model in the catalog for enabled providers: {providers}"
        )
    return plan


def resolve_family_selections(
    catalog: Sequence[ModelCandidate],
    config: ModelSelectionConfig,
    *,
    profiles: Mapping[str, ModelFamilyScoringProfile] = FAMILY_PROFILES,
) -> ModelSelectionConfig:
    """Fill unset family fallback selections from the catalog.

    For each enabled family with a scoring profile (``chutes``, ``opencode``)
    whose primary selection is unset, pick the family's primary/support pair.
    A configured primary is kept and only a missing secondary is filled.
    ``profiles`` replaces the built-in family scoring profiles.
    """
    resolved = config
    for provider_id in config.enabled_providers():
        current = resolved.family_selection(provider_id)
        if current.primary_model and current.secondary_model:
            continue
        picked = select_family_models(
            catalog, provider_id, current.primary_model, profiles
        )
        if picked.primary_model is None:
            continue
        merged = current.model_copy(
            update={
                "primary_model": current.primary_model or picked.primary_model,
                "secondary_model": current.secondary_model or picked.secondary_model,
            }
        )
        resolved = resolved.with_family_selection(provider_id, merged)
    return resolved


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
