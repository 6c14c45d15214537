# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Markdown and CSV formatting of per-role ranking reports."""

from __future__ import annotations

import csv
import io
from collections.abc import Sequence
from dataclasses import dataclass

from omniselect.enums import EnumAgentRole
from omniselect.models import ModelCandidate
from omniselect.signals import ModelRankedScore

_UNKNOWN = "unknown"

CSV_HEADER = (
    "Rank",
    "Role",
    "Model",
    "Total Score",
    "Base Score",
    "External Boost",
    "Provider",
    "Status",
)


@dataclass(frozen=True)
class RoleRanking:
    """Ranked rows for one role."""

    role: EnumAgentRole
    scores: Sequence[ModelRankedScore]


def _format_score(value: float) -> str:
    return f"{value:.2f}"


def _lookup(
    models: Sequence[ModelCandidate],
) -> dict[str, ModelCandidate]:
    return {model.id: model for model in models}


def _provider_and_status(
    model_id: str, by_id: dict[str, ModelCandidate]
) -> tuple[str, str]:
    model = by_id.get(model_id)
    if model is None:
        return _UNKNOWN, _UNKNOWN
    return model.provider_id, model.status.value


def format_markdown(
    results: Sequence[RoleRanking], models: Sequence[ModelCandidate]
) -> str:
    """Render one markdown table per role.

    Example output::

        # Model Ranking Results

        ## Oracle Agent Rankings

        | Rank | Model | Total Score | Base Score | External Boost | Provider | Status |
        |------|-------|-------------|------------|----------------|----------|--------|
        | 1 | openai/gpt-5.3-codex | 231.60 | 231.60 | 0.00 | openai | active |
    """
    by_id = _lookup(models)
    lines: list[str] = ["# Model Ranking Results", ""]

    for result in results:
        lines.append(f"## {result.role.value.capitalize()} Agent Rankings")
        lines.append("")
        lines.append(
            "| Rank | Model | Total Score | Base Score | External Boost "
            "| Provider | Status |"
        )
        lines.append(
            "|------|-------|-------------|------------|----------------"
            "|----------|--------|"
        )
        for rank, score in enumerate(result.scores, start=1):
            provider, status = _provider_and_status(score.model, by_id)
            lines.append(
                f"| {rank} | {score.model} | {_format_score(score.total_score)} "
                f"| {_format_score(score.base_score)} "
                f"| {_format_score(score.external_signal_boost)} "
                f"| {provider} | {status} |"
            )
        lines.append("")

    return "\n".join(lines)


def format_csv(
    results: Sequence[RoleRanking], models: Sequence[ModelCandidate]
) -> str:
    """Render all roles as one CSV table."""
    by_id = _lookup(models)
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)

    for result in results:
        for rank, score in enumerate(result.scores, start=1):
            provider, status = _provider_and_status(score.model, by_id)
            writer.writerow(
                (
                    rank,
                    result.role.value,
                    score.model,
                    _format_score(score.total_score),
                    _format_score(score.base_score),
                    _format_score(score.external_signal_boost),
                    provider,
                    status,
                )
            )

    return buffer.getvalue()


__all__ = ["CSV_HEADER", "RoleRanking", "format_csv", "format_markdown"]
