# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Output of the fallback chain builder."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from omniselect.enums import EnumAgentRole


class ModelAgentAssignment(BaseModel):
    """Primary model chosen for one role.

    Attributes:
        model: Selected model id.
        variant: Static variant tag of the role (e.g. reasoning effort).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    model: str
    variant: str | None = None


class ModelDynamicPlan(BaseModel):
    """Per-role assignments and fallback chains.

    Roles appear in ``EnumAgentRole`` order. A role with no eligible model is absent
    from both mappings.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    agents: dict[EnumAgentRole, ModelAgentAssignment] = Field(default_factory=dict)
    chains: dict[EnumAgentRole, tuple[str, ...]] = Field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with plain role names as keys (host config shape)."""
        return {
            "agents": {
                role.value: assignment.model_dump(exclude_none=True)
                for role, assignment in self.agents.items()
            },
            "chains": {role.value: list(chain) for role, chain in self.chains.items()},
        }


__all__ = ["ModelAgentAssignment", "ModelDynamicPlan"]
