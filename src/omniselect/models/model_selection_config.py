# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Caller configuration for plan building.

Every recognized option is an explicit field with a documented default. The
model is validated once when constructed; the engine reads it but never
inspects raw dictionaries.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from omniselect.constants import (
    PROVIDER_ANTHROPIC,
    PROVIDER_CHUTES,
    PROVIDER_COPILOT,
    PROVIDER_GOOGLE,
    PROVIDER_KIMI,
    PROVIDER_OPENAI,
    PROVIDER_OPENCODE,
    PROVIDER_ZAI_PLAN,
)
from omniselect.enums import EnumAgentRole


class ModelFamilySelection(BaseModel):
    """Primary/support pair picked inside one provider family."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    primary_model: str | None = None
    secondary_model: str | None = None


class ModelSelectionConfig(BaseModel):
    """Which providers are available and which overrides the caller wants.

    Attributes:
        has_openai: OpenAI credentials configured.
        has_anthropic: Anthropic credentials configured.
        has_copilot: GitHub Copilot access.
        has_zai_plan: ZAI coding plan access.
        has_kimi: Kimi for Coding access.
        has_antigravity: Google models via Antigravity.
        has_chutes: Chutes models.
        use_opencode_free_models: OpenCode free models enabled.
        selected_opencode_primary_model: OpenCode fallback for heavy roles.
        selected_opencode_secondary_model: OpenCode fallback for light roles.
        selected_chutes_primary_model: Chutes fallback for heavy roles.
        selected_chutes_secondary_model: Chutes fallback for light roles.
        preferred_primary_models: Role -> model id that wins over scoring
            when present in the eligible catalog.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    has_openai: bool = False
    has_anthropic: bool = False
    has_copilot: bool = False
    has_zai_plan: bool = False
    has_kimi: bool = False
    has_antigravity: bool = False
    has_chutes: bool = False
    use_opencode_free_models: bool = False

    selected_opencode_primary_model: str | None = None
    selected_opencode_secondary_model: str | None = None
    selected_chutes_primary_model: str | None = None
    selected_chutes_secondary_model: str | None = None

    preferred_primary_models: dict[EnumAgentRole, str] = Field(default_factory=dict)

    def enabled_providers(self) -> tuple[str, ...]:
        """Return enabled provider ids in a fixed order."""
        flags = (
            (self.has_openai, PROVIDER_OPENAI),
            (self.has_anthropic, PROVIDER_ANTHROPIC),
            (self.has_copilot, PROVIDER_COPILOT),
            (self.has_zai_plan, PROVIDER_ZAI_PLAN),
            (self.has_kimi, PROVIDER_KIMI),
            (self.has_antigravity, PROVIDER_GOOGLE),
            (self.has_chutes, PROVIDER_CHUTES),
            (self.use_opencode_free_models, PROVIDER_OPENCODE),
        )
        return tuple(provider for enabled, provider in flags if enabled)

    def fallback_overrides(self, *, secondary: bool) -> tuple[str | None, str | None]:
        """Return ``(chutes, opencode)`` override ids for a chain.

        Args:
            secondary: Use the secondary selections (light roles), falling
                back to the primary selection when no secondary is set.
        """
        if secondary:
            return (
                self.selected_chutes_secondary_model
                or self.selected_chutes_primary_model,
                self.selected_opencode_secondary_model
                or self.selected_opencode_primary_model,
            )
        return (
            self.selected_chutes_primary_model,
            self.selected_opencode_primary_model,
        )

    def family_selection(self, provider_id: str) -> ModelFamilySelection:
        """Return the configured selection for a provider family."""
        if provider_id == PROVIDER_CHUTES:
            return ModelFamilySelection(
                primary_model=self.selected_chutes_primary_model,
                secondary_model=self.selected_chutes_secondary_model,
            )
        if provider_id == PROVIDER_OPENCODE:
            return ModelFamilySelection(
                primary_model=self.selected_opencode_primary_model,
                secondary_model=self.selected_opencode_secondary_model,
            )
        return ModelFamilySelection()

    def with_family_selection(
        self, provider_id: str, selection: ModelFamilySelection
    ) -> ModelSelectionConfig:
        """Return a copy with the family selection for ``provider_id`` replaced."""
        if provider_id == PROVIDER_CHUTES:
            return self.model_copy(
                update={
                    "selected_chutes_primary_model": selection.primary_model,
                    "selected_chutes_secondary_model": selection.secondary_model,
                }
            )
        if provider_id == PROVIDER_OPENCODE:
            return self.model_copy(
                update={
                    "selected_opencode_primary_model": selection.primary_model,
                    "selected_opencode_secondary_model": selection.secondary_model,
                }
            )
        return self


__all__ = ["ModelFamilySelection", "ModelSelectionConfig"]
