# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Model catalog parsing and discovery."""

from omniselect.catalog.discovery import (
    DEFAULT_DISCOVERY_BINARY,
    DEFAULT_DISCOVERY_TIMEOUT_SECONDS,
    DISCOVERY_ARGS,
    ModelCatalogDiscoveryResult,
    ModelDiscoveryContext,
    candidate_binary_paths,
    discover_model_catalog,
    resolve_discovery_binary,
)
from omniselect.catalog.parser import (
    is_free_model,
    parse_daily_request_limit,
    parse_verbose_models_output,
    record_to_candidate,
)

__all__ = [
    "DEFAULT_DISCOVERY_BINARY",
    "DEFAULT_DISCOVERY_TIMEOUT_SECONDS",
    "DISCOVERY_ARGS",
    "ModelCatalogDiscoveryResult",
    "ModelDiscoveryContext",
    "candidate_binary_paths",
    "discover_model_catalog",
    "is_free_model",
    "parse_daily_request_limit",
    "parse_verbose_models_output",
    "record_to_candidate",
    "resolve_discovery_binary",
]
