# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for ModelSelectionSettings."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from omniselect.catalog import ModelDiscoveryContext
from omniselect.clients import ModelExternalSignalClientConfig
from omniselect.config import ModelSelectionSettings

_ENV_VARS = (
    "ARTIFICIAL_ANALYSIS_API_KEY",
    "OPENROUTER_API_KEY",
    "OMNISELECT_ARTIFICIAL_ANALYSIS_API_KEY",
    "OMNISELECT_OPENROUTER_API_KEY",
    "OMNISELECT_SIGNAL_TIMEOUT_SECONDS",
    "OMNISELECT_SIGNAL_MAX_RETRIES",
    "OMNISELECT_DISCOVERY_BINARY",
    "OMNISELECT_DISCOVERY_TIMEOUT_SECONDS",
    "OMNISELECT_WEIGHTS_PATH",
    "OMNISELECT_LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.mark.unit
class TestModelSelectionSettings:
    """Environment loading and conversion helpers."""

    def test_defaults(self, clean_env: pytest.MonkeyPatch) -> None:
        settings = ModelSelectionSettings()
        assert settings.artificial_analysis_api_key is None
        assert settings.openrouter_api_key is None
        assert settings.has_signal_keys is False
        assert settings.discovery_binary is None
        assert settings.weights_path is None
        assert settings.log_level == "INFO"

    def test_reads_prefixed_variables(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("OMNISELECT_SIGNAL_TIMEOUT_SECONDS", "5")
        clean_env.setenv("OMNISELECT_SIGNAL_MAX_RETRIES", "4")
        clean_env.setenv("OMNISELECT_DISCOVERY_BINARY", "/usr/local/bin/opencode")
        clean_env.setenv("OMNISELECT_WEIGHTS_PATH", "/tmp/weights.yaml")

        settings = ModelSelectionSettings()

        assert settings.signal_timeout_seconds == 5.0
        assert settings.signal_max_retries == 4
        assert settings.discovery_binary == "/usr/local/bin/opencode"
        assert settings.weights_path == Path("/tmp/weights.yaml")

    def test_api_keys_accept_unprefixed_names(
        self, clean_env: pytest.MonkeyPatch
    ) -> None:
        clean_env.setenv("ARTIFICIAL_ANALYSIS_API_KEY", "aa-key")
        clean_env.setenv("OMNISELECT_OPENROUTER_API_KEY", "or-key")

        settings = ModelSelectionSettings()

        assert settings.artificial_analysis_api_key == "aa-key"
        assert settings.openrouter_api_key == "or-key"
        assert settings.has_signal_keys is True

    def test_rejects_invalid_timeout(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("OMNISELECT_DISCOVERY_TIMEOUT_SECONDS", "0")
        with pytest.raises(ValidationError):
            ModelSelectionSettings()

    def test_to_signal_client_config(self, clean_env: pytest.MonkeyPatch) -> None:
        settings = ModelSelectionSettings(
            openrouter_url="https://or.test/models",
            signal_timeout_seconds=3.0,
            signal_max_retries=0,
        )
        config = settings.to_signal_client_config()
        assert isinstance(config, ModelExternalSignalClientConfig)
        assert config.openrouter_url == "https://or.test/models"
        assert config.timeout_seconds == 3.0
        assert config.max_retries == 0

    def test_to_discovery_context(self, clean_env: pytest.MonkeyPatch) -> None:
        settings = ModelSelectionSettings(
            discovery_binary="my-opencode", discovery_timeout_seconds=12.0
        )
        assert settings.to_discovery_context() == ModelDiscoveryContext(
            binary="my-opencode", timeout_seconds=12.0
        )

    def test_discovery_context_uses_installed_binary(
        self, clean_env: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        installed = tmp_path / ".opencode/bin/opencode"
        settings = ModelSelectionSettings(discovery_timeout_seconds=12.0)

        context = settings.to_discovery_context(
            tmp_path, exists=lambda path: path == installed
        )

        assert context.binary == str(installed)
        assert context.timeout_seconds == 12.0

    def test_discovery_context_falls_back_to_path_lookup(
        self, clean_env: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        context = ModelSelectionSettings().to_discovery_context(
            tmp_path, exists=lambda _: False
        )
        assert context.binary == "opencode"

    def test_explicit_binary_skips_install_search(
        self, clean_env: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        settings = ModelSelectionSettings(discovery_binary="my-opencode")
        context = settings.to_discovery_context(tmp_path, exists=lambda _: True)
        assert context.binary == "my-opencode"
