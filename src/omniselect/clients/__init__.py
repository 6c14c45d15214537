# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""HTTP clients for external model signal providers.

The engine packages never import this module; they receive a finished
signal map instead.
"""

from __future__ import annotations

from omniselect.clients.external_signals_client import (
    DEFAULT_ARTIFICIAL_ANALYSIS_URL,
    DEFAULT_OPENROUTER_URL,
    SOURCE_ARTIFICIAL_ANALYSIS,
    SOURCE_OPENROUTER,
    ExternalSignalClient,
    ExternalSignalClientError,
    ExternalSignalConnectionError,
    ExternalSignalTimeoutError,
    ModelExternalSignalClientConfig,
    ModelExternalSignalFetchResult,
    fetch_external_model_signals,
    index_signals,
    merge_signal_maps,
    parse_artificial_analysis_payload,
    parse_openrouter_payload,
)

__all__ = [
    "DEFAULT_ARTIFICIAL_ANALYSIS_URL",
    "DEFAULT_OPENROUTER_URL",
    "SOURCE_ARTIFICIAL_ANALYSIS",
    "SOURCE_OPENROUTER",
    "ExternalSignalClient",
    "ExternalSignalClientError",
    "ExternalSignalConnectionError",
    "ExternalSignalTimeoutError",
    "ModelExternalSignalClientConfig",
    "ModelExternalSignalFetchResult",
    "fetch_external_model_signals",
    "index_signals",
    "merge_signal_maps",
    "parse_artificial_analysis_payload",
    "parse_openrouter_payload",
]
