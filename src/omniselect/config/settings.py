# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Environment settings for the boundary collaborators and the CLI.

The engine itself takes no settings: it receives a ``ModelSelectionConfig``,
weight tables and a signal map as arguments.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from omniselect.catalog import (
    DEFAULT_DISCOVERY_BINARY,
    DEFAULT_DISCOVERY_TIMEOUT_SECONDS,
    ModelDiscoveryContext,
    resolve_discovery_binary,
)
from omniselect.clients import (
    DEFAULT_ARTIFICIAL_ANALYSIS_URL,
    DEFAULT_OPENROUTER_URL,
    ModelExternalSignalClientConfig,
)


class ModelSelectionSettings(BaseSettings):
    """Pydantic Settings for omniselect, loaded from environment.

    Environment variables:
        ARTIFICIAL_ANALYSIS_API_KEY: str (optional)
        OPENROUTER_API_KEY: str (optional)
        OMNISELECT_ARTIFICIAL_ANALYSIS_URL: str
        OMNISELECT_OPENROUTER_URL: str
        OMNISELECT_SIGNAL_TIMEOUT_SECONDS: float (default 15.0)
        OMNISELECT_SIGNAL_MAX_RETRIES: int (default 2)
        OMNISELECT_SIGNAL_RETRY_BASE_DELAY: float (default 0.5)
        OMNISELECT_DISCOVERY_BINARY: str (optional, install locations searched)
        OMNISELECT_DISCOVERY_TIMEOUT_SECONDS: float (default 60.0)
        OMNISELECT_WEIGHTS_PATH: path to a YAML weight override file
        OMNISELECT_LOG_LEVEL: str (default "INFO")

    The API keys also accept the ``OMNISELECT_`` prefixed names.
    """

    model_config = SettingsConfigDict(
        env_prefix="OMNISELECT_",
        extra="ignore",
        populate_by_name=True,
    )

    artificial_analysis_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "ARTIFICIAL_ANALYSIS_API_KEY",
            "OMNISELECT_ARTIFICIAL_ANALYSIS_API_KEY",
        ),
        description="API key for Artificial Analysis benchmark signals",
    )
    openrouter_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "OPENROUTER_API_KEY",
            "OMNISELECT_OPENROUTER_API_KEY",
        ),
        description="API key for OpenRouter price signals",
    )
    artificial_analysis_url: str = Field(default=DEFAULT_ARTIFICIAL_ANALYSIS_URL)
    openrouter_url: str = Field(default=DEFAULT_OPENROUTER_URL)

    signal_timeout_seconds: float = Field(
        default=15.0,
        gt=0.0,
        description="Per-request timeout for signal providers",
    )
    signal_max_retries: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Retries for transient signal provider failures",
    )
    signal_retry_base_delay: float = Field(
        default=0.5,
        ge=0.0,
        description="Base delay for exponential backoff between retries",
    )

    discovery_binary: str | None = Field(
        default=None,
        min_length=1,
        description=(
            "Command that prints the verbose model listing; searched for in the "
            "usual install locations when unset"
        ),
    )
    discovery_timeout_seconds: float = Field(
        default=DEFAULT_DISCOVERY_TIMEOUT_SECONDS,
        gt=0.0,
        description="Timeout for catalog discovery",
    )

    weights_path: Path | None = Field(
        default=None,
        description="Optional YAML file overriding scoring and feature weights",
    )
    log_level: str = Field(default="INFO")

    @property
    def has_signal_keys(self) -> bool:
        """True if at least one signal provider can be queried."""
        return bool(self.artificial_analysis_api_key or self.openrouter_api_key)

    def to_signal_client_config(self) -> ModelExternalSignalClientConfig:
        """Convert settings to a frozen signal client configuration."""
        return ModelExternalSignalClientConfig(
            artificial_analysis_url=self.artificial_analysis_url,
            openrouter_url=self.openrouter_url,
            timeout_seconds=self.signal_timeout_seconds,
            max_retries=self.signal_max_retries,
            retry_base_delay=self.signal_retry_base_delay,
        )

    def to_discovery_context(
        self,
        home: str | os.PathLike[str] | None = None,
        exists: Callable[[Path], bool] = Path.is_file,
    ) -> ModelDiscoveryContext:
        """Convert settings to a catalog discovery context.

        Without an explicit ``discovery_binary`` the first installed listing
        binary is used, falling back to a PATH lookup of ``opencode``.
        """
        binary = self.discovery_binary or resolve_discovery_binary(
            home, exists=exists, default=DEFAULT_DISCOVERY_BINARY
        )
        return ModelDiscoveryContext(
            binary=binary,
            timeout_seconds=self.discovery_timeout_seconds,
        )


__all__ = ["ModelSelectionSettings"]
