# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Externally sourced quality, price and latency signals for a model.

Signals come from benchmark and pricing providers and are keyed by alias key
(see ``omniselect.signals.model_key_normalization``). Every field is optional:
a missing field simply contributes nothing to the blended score.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ModelExternalSignal(BaseModel):
    """Signals for one model from one or more external sources.

    Attributes:
        latency_seconds: Median time to first token.
        quality_score: General intelligence index (0-100 scale).
        coding_score: Coding benchmark index (0-100 scale).
        input_price_per_1m: USD per one million input tokens.
        output_price_per_1m: USD per one million output tokens.
        source: Provider(s) the values came from, for reporting.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    latency_seconds: float | None = Field(default=None, ge=0.0)
    quality_score: float | None = Field(default=None, ge=0.0)
    coding_score: float | None = Field(default=None, ge=0.0)
    input_price_per_1m: float | None = Field(default=None, ge=0.0)
    output_price_per_1m: float | None = Field(default=None, ge=0.0)
    source: str | None = None

    def merged_with(self, fallback: ModelExternalSignal) -> ModelExternalSignal:
        """Return a signal where fields missing here are taken from ``fallback``."""
        values = self.model_dump()
        for key, value in fallback.model_dump().items():
            if values.get(key) is None and value is not None:
                values[key] = value
        if self.source and fallback.source and self.source != fallback.source:
            values["source"] = f"{self.source}+{fallback.source}"
        return ModelExternalSignal(**values)


# Alias key -> signal. Built by the signal clients; read-only to the engine.
ExternalSignalMap = dict[str, ModelExternalSignal]


__all__ = ["ExternalSignalMap", "ModelExternalSignal"]
