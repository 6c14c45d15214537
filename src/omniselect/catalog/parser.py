# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Parser for the host's verbose model listing.

``opencode models --refresh --verbose`` prints one header line per model
(``provider/model``) followed by a pretty-printed JSON record::

    opencode/gpt-5-nano
    {
      "id": "gpt-5-nano",
      "providerID": "opencode",
      "cost": { "input": 0, "output": 0 },
      "limit": { "context": 400000, "output": 128000 },
      "capabilities": { "reasoning": true, "toolcall": true }
    }

Blocks that are not valid JSON or do not validate as a ``ModelCandidate``
are skipped individually; one broken record never hides the rest.
"""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any

from pydantic import ValidationError

from omniselect.enums import EnumModelStatus
from omniselect.models import ModelCandidate

logger = logging.getLogger(__name__)

_MODEL_HEADER = re.compile(r"^[a-z0-9-]+/[a-z0-9._-]+$", re.IGNORECASE)
_DAILY_LIMIT_TOKEN = re.compile(
    r"\b(300|2000|5000)\b(?:\s*(?:req|requests|rpd|/day))?"
)


def _section(record: dict[str, Any], key: str) -> dict[str, Any]:
    value = record.get(key)
    return value if isinstance(value, dict) else {}


def _number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return value


def is_free_model(record: dict[str, Any]) -> bool:
    """True when every listed price (input, output, cache) is zero or missing."""
    cost = _section(record, "cost")
    cache = _section(cost, "cache")
    prices = (
        cost.get("input"),
        cost.get("output"),
        cache.get("read"),
        cache.get("write"),
    )
    return all((_number(price) or 0) == 0 for price in prices)


def parse_daily_request_limit(record: dict[str, Any]) -> int | None:
    """Return the free-tier daily request quota of a record, if known.

    Explicit metadata wins (``quota.requestsPerDay``, then
    ``meta.requestsPerDay``, then ``meta.dailyLimit``). Otherwise a known
    quota token (300, 2000 or 5000) in the id or display name is used.
    """
    quota = _section(record, "quota")
    meta = _section(record, "meta")
    for value in (
        quota.get("requestsPerDay"),
        meta.get("requestsPerDay"),
        meta.get("dailyLimit"),
    ):
        explicit = _number(value)
        if explicit is not None:
            return int(explicit)

    source = f"{record.get('id', '')} {record.get('name') or ''}".lower()
    match = _DAILY_LIMIT_TOKEN.search(source)
    if match is None:
        return None
    return int(match.group(1))


def record_to_candidate(record: dict[str, Any]) -> ModelCandidate:
    """Normalize one verbose listing record into a ``ModelCandidate``.

    Raises:
        ValidationError: If the record is missing ids or carries invalid
            values (unknown status, negative limits).
    """
    provider_id = record.get("providerID") or ""
    model_id = record.get("id") or ""
    cost = _section(record, "cost")
    limit = _section(record, "limit")
    capabilities = _section(record, "capabilities")

    return ModelCandidate.model_validate(
        {
            "id": f"{provider_id}/{model_id}" if provider_id and model_id else "",
            "provider_id": provider_id,
            "name": record.get("name") or model_id,
            "status": record.get("status") or EnumModelStatus.ACTIVE,
            "context_limit": limit.get("context") or 0,
            "output_limit": limit.get("output") or 0,
            "reasoning": capabilities.get("reasoning") is True,
            "toolcall": capabilities.get("toolcall") is True,
            "attachment": capabilities.get("attachment") is True,
            "daily_request_limit": parse_daily_request_limit(record),
            "cost_input": _number(cost.get("input")),
            "cost_output": _number(cost.get("output")),
        }
    )


def _find_json_start(lines: list[str], header_index: int) -> int | None:
    for cursor in range(header_index + 1, len(lines)):
        stripped = lines[cursor].strip()
        if stripped.startswith("{"):
            return cursor
        if _MODEL_HEADER.match(stripped):
            return None
    return None


def _find_json_end(lines: list[str], start: int) -> int | None:
    depth = 0
    for cursor in range(start, len(lines)):
        depth += lines[cursor].count("{") - lines[cursor].count("}")
        if depth == 0:
            return cursor
    return None


def parse_verbose_models_output(
    output: str,
    provider_filter: str | None = None,
    free_only: bool = True,
) -> list[ModelCandidate]:
    """Parse the verbose model listing into catalog candidates.

    Args:
        output: Raw stdout of the listing command.
        provider_filter: Keep only records of this provider.
        free_only: Keep only records whose prices are all zero.

    Returns:
        Candidates in listing order.
    """
    lines = output.splitlines()
    models: list[ModelCandidate] = []

    index = 0
    while index < len(lines):
        header = lines[index].strip()
        if not _MODEL_HEADER.match(header):
            index += 1
            continue

        start = _find_json_start(lines, index)
        if start is None:
            index += 1
            continue
        end = _find_json_end(lines, start)
        if end is None:
            logger.warning("Skipping unterminated record for %s", header)
            index += 1
            continue
        index = end + 1

        try:
            record = json.loads("\n".join(lines[start : end + 1]))
        except json.JSONDecodeError as e:
            logger.warning("Skipping malformed record for %s: %s", header, e)
            continue
        if not isinstance(record, dict):
            logger.warning("Skipping non-object record for %s", header)
            continue

        if provider_filter and record.get("providerID") != provider_filter:
            continue
        if free_only and not is_free_model(record):
            continue

        try:
            models.append(record_to_candidate(record))
        except ValidationError as e:
            logger.warning(
                "Skipping invalid record for %s: %d validation errors",
                header,
                e.error_count(),
            )

    return models


__all__ = [
    "is_free_model",
    "parse_daily_request_limit",
    "parse_verbose_models_output",
    "record_to_candidate",
]
