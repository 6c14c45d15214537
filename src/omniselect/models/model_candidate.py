# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Catalog candidate model.

A ``ModelCandidate`` is one interchangeable backend model produced by catalog
discovery. Instances are frozen: the engine only reads them, and one catalog
snapshot is shared by every role during a ranking pass.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from omniselect.enums import EnumModelStatus


class ModelCandidate(BaseModel):
    """One model in the discovered catalog.

    Attributes:
        id: Provider-qualified model id (``provider/model``), unique per catalog.
        provider_id: Provider that serves the model.
        name: Display name; defaults to ``id`` when not supplied.
        status: Release status.
        context_limit: Context window in tokens.
        output_limit: Maximum output tokens.
        reasoning: Model exposes a reasoning mode.
        toolcall: Model supports structured tool invocation.
        attachment: Model accepts attachments (images, files).
        daily_request_limit: Free-tier request quota per day, if known.
        cost_input: Input price per unit; ``None`` means unknown or free.
        cost_output: Output price per unit; ``None`` means unknown or free.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(min_length=1, description="Provider-qualified model id.")
    provider_id: str = Field(min_length=1, description="Serving provider id.")
    name: str = Field(default="", description="Display name.")
    status: EnumModelStatus = Field(default=EnumModelStatus.ACTIVE)
    context_limit: int = Field(default=0, ge=0)
    output_limit: int = Field(default=0, ge=0)
    reasoning: bool = False
    toolcall: bool = False
    attachment: bool = False
    daily_request_limit: int | None = Field(default=None, ge=0)
    cost_input: float | None = Field(default=None, ge=0.0)
    cost_output: float | None = Field(default=None, ge=0.0)

    @model_validator(mode="before")
    @classmethod
    def _default_name(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("name"):
            return {**data, "name": data.get("id", "")}
        return data

    @property
    def search_text(self) -> str:
        """Lower-cased ``id`` and ``name`` used by keyword scoring."""
        return f"{self.id} {self.name}".lower()


__all__ = ["ModelCandidate"]
