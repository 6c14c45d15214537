# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Async catalog discovery through the host's model listing command.

Discovery is a boundary collaborator: it never raises. Every failure
(missing binary, non-zero exit, timeout) becomes an empty catalog plus an
error message the caller can show or log.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Callable, Sequence
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from omniselect.catalog.parser import parse_verbose_models_output
from omniselect.models import ModelCandidate

logger = logging.getLogger(__name__)

DEFAULT_DISCOVERY_BINARY = "opencode"
DEFAULT_DISCOVERY_TIMEOUT_SECONDS = 60.0
DISCOVERY_ARGS: tuple[str, ...] = ("models", "--refresh", "--verbose")

# Install locations checked before falling back to PATH lookup. Entries
# starting with "~" are relative to the user's home directory.
_BINARY_LOCATIONS: tuple[str, ...] = (
    "/opt/homebrew/bin/opencode",
    "/home/linuxbrew/.linuxbrew/bin/opencode",
    "~/homebrew/bin/opencode",
    "~/.local/bin/opencode",
    "~/.opencode/bin/opencode",
    "~/bin/opencode",
    "/usr/local/bin/opencode",
    "/opt/opencode/bin/opencode",
    "/usr/bin/opencode",
    "/bin/opencode",
    "~/Library/Application Support/opencode/bin/opencode",
    "/snap/bin/opencode",
    "/var/snap/opencode/current/bin/opencode",
    "~/.nix-profile/bin/opencode",
    "/run/current-system/sw/bin/opencode",
    "~/.cargo/bin/opencode",
    "~/.npm-global/bin/opencode",
    "/usr/local/lib/node_modules/opencode/bin/opencode",
    "~/.yarn/bin/opencode",
    "~/.pnpm-global/bin/opencode",
    "/Applications/OpenCode.app/Contents/MacOS/opencode",
    "~/Applications/OpenCode.app/Contents/MacOS/opencode",
)


class ModelDiscoveryContext(BaseModel):
    """Where and how to run the listing command.

    Passed explicitly to ``discover_model_catalog``; nothing is cached at
    module level.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    binary: str = Field(default=DEFAULT_DISCOVERY_BINARY, min_length=1)
    timeout_seconds: float = Field(default=DEFAULT_DISCOVERY_TIMEOUT_SECONDS, gt=0.0)


class ModelCatalogDiscoveryResult(BaseModel):
    """Discovered models, or an empty list plus an error message."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    models: tuple[ModelCandidate, ...] = ()
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def candidate_binary_paths(home: str | os.PathLike[str]) -> list[Path]:
    """Return known install locations with ``~`` expanded against ``home``."""
    home_path = Path(home)
    paths: list[Path] = []
    for location in _BINARY_LOCATIONS:
        if location.startswith("~/"):
            paths.append(home_path / location[2:])
        else:
            paths.append(Path(location))
    return paths


def resolve_discovery_binary(
    home: str | os.PathLike[str] | None = None,
    exists: Callable[[Path], bool] = Path.is_file,
    default: str = DEFAULT_DISCOVERY_BINARY,
) -> str:
    """Return the first installed listing binary, else ``default`` for PATH lookup.

    Args:
        home: Home directory for user-local locations; defaults to ``~``.
        exists: Predicate deciding whether a path is an installed binary.
        default: Command name returned when no location matches.
    """
    for path in candidate_binary_paths(home if home is not None else Path.home()):
        if exists(path):
            logger.debug("Using discovery binary %s", path)
            return str(path)
    return default


async def discover_model_catalog(
    context: ModelDiscoveryContext | None = None,
    provider_filter: str | None = None,
    free_only: bool = False,
    args: Sequence[str] = DISCOVERY_ARGS,
) -> ModelCatalogDiscoveryResult:
    """Run the listing command and parse its output.

    Args:
        context: Binary and timeout; defaults to ``ModelDiscoveryContext()``.
        provider_filter: Keep only models of this provider.
        free_only: Keep only free models.
        args: Arguments passed to the binary.

    Returns:
        Parsed catalog, or an empty catalog with ``error`` set.
    """
    context = context or ModelDiscoveryContext()
    command_text = " ".join([context.binary, *args])

    try:
        process = await asyncio.create_subprocess_exec(
            context.binary,
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        logger.warning("Unable to run `%s`: %s", command_text, e)
        return ModelCatalogDiscoveryResult(error=f"Unable to run `{command_text}`.")

    try:
        stdout, stderr = await asyncio.wait_for(
            process.communicate(), timeout=context.timeout_seconds
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        logger.warning(
            "`%s` timed out after %.1fs", command_text, context.timeout_seconds
        )
        return ModelCatalogDiscoveryResult(
            error=f"`{command_text}` timed out after {context.timeout_seconds:g}s."
        )

    stdout_text = stdout.decode("utf-8", errors="replace") if stdout else ""
    stderr_text = stderr.decode("utf-8", errors="replace") if stderr else ""

    if process.returncode != 0:
        logger.warning(
            "`%s` exited with code %s", command_text, process.returncode
        )
        return ModelCatalogDiscoveryResult(
            error=stderr_text.strip() or "Failed to fetch model catalog."
        )

    models = parse_verbose_models_output(stdout_text, provider_filter, free_only)
    logger.info("Discovered %d models", len(models))
    return ModelCatalogDiscoveryResult(models=tuple(models))


__all__ = [
    "DEFAULT_DISCOVERY_BINARY",
    "DEFAULT_DISCOVERY_TIMEOUT_SECONDS",
    "DISCOVERY_ARGS",
    "ModelCatalogDiscoveryResult",
    "ModelDiscoveryContext",
    "candidate_binary_paths",
    "discover_model_catalog",
    "resolve_discovery_binary",
]
