# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for async catalog discovery."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from omniselect.catalog import (
    DISCOVERY_ARGS,
    ModelDiscoveryContext,
    candidate_binary_paths,
    discover_model_catalog,
    resolve_discovery_binary,
)

_EXEC = "omniselect.catalog.discovery.asyncio.create_subprocess_exec"


def _process(
    stdout: bytes = b"", stderr: bytes = b"", returncode: int = 0
) -> MagicMock:
    process = MagicMock()
    process.communicate = AsyncMock(return_value=(stdout, stderr))
    process.returncode = returncode
    process.kill = MagicMock()
    process.wait = AsyncMock(return_value=returncode)
    return process


@pytest.mark.unit
class TestDiscoverModelCatalog:
    """Result-or-error behavior with a mocked subprocess."""

    @pytest.mark.asyncio
    async def test_parses_stdout(self, sample_verbose_output) -> None:
        process = _process(stdout=sample_verbose_output.encode())
        with patch(_EXEC, new=AsyncMock(return_value=process)) as exec_mock:
            result = await discover_model_catalog(ModelDiscoveryContext(binary="oc"))

        assert result.ok
        assert result.error is None
        assert [m.id for m in result.models] == [
            "opencode/gpt-5-nano",
            "chutes/minimax-m2.1-5000",
            "openai/gpt-5.3-codex",
        ]
        assert exec_mock.await_args.args == ("oc", *DISCOVERY_ARGS)

    @pytest.mark.asyncio
    async def test_provider_filter_and_free_only(self, sample_verbose_output) -> None:
        process = _process(stdout=sample_verbose_output.encode())
        with patch(_EXEC, new=AsyncMock(return_value=process)):
            result = await discover_model_catalog(
                provider_filter="opencode", free_only=True
            )

        assert [m.id for m in result.models] == ["opencode/gpt-5-nano"]

    @pytest.mark.asyncio
    async def test_non_zero_exit_returns_stderr(self) -> None:
        process = _process(stderr=b"  auth required \n", returncode=1)
        with patch(_EXEC, new=AsyncMock(return_value=process)):
            result = await discover_model_catalog()

        assert not result.ok
        assert result.models == ()
        assert result.error == "auth required"

    @pytest.mark.asyncio
    async def test_non_zero_exit_without_stderr(self) -> None:
        process = _process(returncode=2)
        with patch(_EXEC, new=AsyncMock(return_value=process)):
            result = await discover_model_catalog()

        assert result.error == "Failed to fetch model catalog."

    @pytest.mark.asyncio
    async def test_missing_binary(self) -> None:
        with patch(_EXEC, new=AsyncMock(side_effect=FileNotFoundError("nope"))):
            result = await discover_model_catalog(ModelDiscoveryContext(binary="nope"))

        assert result.models == ()
        assert result.error is not None
        assert "Unable to run" in result.error

    @pytest.mark.asyncio
    async def test_timeout_kills_process(self) -> None:
        process = _process()
        process.communicate = AsyncMock(side_effect=asyncio.TimeoutError)
        with patch(_EXEC, new=AsyncMock(return_value=process)):
            result = await discover_model_catalog(
                ModelDiscoveryContext(timeout_seconds=0.5)
            )

        assert result.models == ()
        assert result.error is not None
        assert "timed out" in result.error
        process.kill.assert_called_once()
        process.wait.assert_awaited_once()


@pytest.mark.integration
class TestDiscoverModelCatalogSubprocess:
    """Discovery against a real child process."""

    @pytest.mark.asyncio
    async def test_runs_real_command(self) -> None:
        script = (
            "print('opencode/ok')\n"
            "print('{\"id\": \"ok\", \"providerID\": \"opencode\"}')"
        )
        result = await discover_model_catalog(
            ModelDiscoveryContext(binary=sys.executable, timeout_seconds=30.0),
            args=("-c", script),
        )

        assert result.ok
        assert [m.id for m in result.models] == ["opencode/ok"]


@pytest.mark.unit
class TestResolveDiscoveryBinary:
    """Install location search."""

    def test_first_existing_location_wins(self, tmp_path: Path) -> None:
        installed = {
            tmp_path / ".local/bin/opencode",
            tmp_path / ".cargo/bin/opencode",
        }
        resolved = resolve_discovery_binary(tmp_path, exists=installed.__contains__)
        assert resolved == str(tmp_path / ".local/bin/opencode")

    def test_falls_back_to_path_lookup(self, tmp_path: Path) -> None:
        assert resolve_discovery_binary(tmp_path, exists=lambda _: False) == "opencode"

    def test_home_locations_are_expanded(self, tmp_path: Path) -> None:
        paths = candidate_binary_paths(tmp_path)
        assert tmp_path / ".opencode/bin/opencode" in paths
        assert Path("/usr/local/bin/opencode") in paths
        assert not any(str(p).startswith("~") for p in paths)
