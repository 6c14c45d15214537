# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Async client for external model signals (benchmarks, prices, latency).

Two sources are supported:

    Artificial Analysis  ``GET /api/v2/data/llms/models`` (``x-api-key``)
        intelligence index, coding index, median time to first token and
        USD per 1M input/output tokens.
    OpenRouter           ``GET /api/v1/models`` (bearer token)
        USD per token prompt/completion prices, scaled to per 1M.

Each source is parsed into an ``ExternalSignalMap`` indexed by every alias
key of the source's model id, then the maps are merged: Artificial Analysis
values win, OpenRouter fills the fields it left empty.

The engine never talks to the network. This client lives outside the engine
packages and hands a finished, read-only signal map to the ranking code.

Example:
    ```python
    result = await fetch_external_model_signals(
        artificial_analysis_api_key=os.environ.get("ARTIFICIAL_ANALYSIS_API_KEY"),
        openrouter_api_key=os.environ.get("OPENROUTER_API_KEY"),
    )
    for warning in result.warnings:
        logger.warning(warning)
    ranked = rank_models_with_breakdown(catalog, role, result.signals)
    ```
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from omniselect.models import ExternalSignalMap, ModelExternalSignal
from omniselect.signals import build_model_key_aliases, exact_model_keys

if TYPE_CHECKING:
    from types import TracebackType

logger = logging.getLogger(__name__)

# HTTP status code boundaries for error classification
_HTTP_CLIENT_ERROR_MIN = 400
_HTTP_CLIENT_ERROR_MAX = 500  # Exclusive (4xx range)

_TOKENS_PER_MILLION = 1_000_000

SOURCE_ARTIFICIAL_ANALYSIS = "artificial-analysis"
SOURCE_OPENROUTER = "openrouter"

DEFAULT_ARTIFICIAL_ANALYSIS_URL = "https://artificialanalysis.ai/api/v2/data/llms/models"
DEFAULT_OPENROUTER_URL = "https://openrouter.ai/api/v1/models"


class ExternalSignalClientError(Exception):
    """Base exception for external signal client errors."""


class ExternalSignalConnectionError(ExternalSignalClientError):
    """Raised when connection to a signal provider fails."""


class ExternalSignalTimeoutError(ExternalSignalClientError):
    """Raised when a signal provider request times out."""


class ModelExternalSignalClientConfig(BaseModel):
    """Endpoints, timeout and retry policy for ``ExternalSignalClient``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    artificial_analysis_url: str = DEFAULT_ARTIFICIAL_ANALYSIS_URL
    openrouter_url: str = DEFAULT_OPENROUTER_URL
    timeout_seconds: float = Field(default=15.0, gt=0.0)
    max_retries: int = Field(default=2, ge=0, le=10)
    retry_base_delay: float = Field(default=0.5, ge=0.0)


class ModelExternalSignalFetchResult(BaseModel):
    """Merged signal map plus one warning per failed or skipped source."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    signals: dict[str, ModelExternalSignal] = Field(default_factory=dict)
    warnings: tuple[str, ...] = ()


# ---------------------------------------------------------------------------
# Payload parsing (pure)
# ---------------------------------------------------------------------------


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _data_rows(payload: Any, source: str) -> list[Any]:
    rows = _as_dict(payload).get("data")
    if not isinstance(rows, list):
        raise ExternalSignalClientError(
            f"Unexpected response format from {source}: {type(payload).__name__}"
        )
    return rows


def _per_million(per_token: Any) -> float | None:
    if per_token is None:
        return None
    return float(per_token) * _TOKENS_PER_MILLION


def index_signals(
    entries: Sequence[tuple[str, ModelExternalSignal]],
) -> ExternalSignalMap:
    """Index signals by the alias keys of their model ids.

    Exact keys (full id and bare name) of every row are stored first, so a
    variant row such as ``x-preview`` never takes the key of a listed ``x``.
    Suffix-stripped and dot/dash aliases then fill the remaining keys; for
    those the first row wins.
    """
    signals: ExternalSignalMap = {}
    for model_id, signal in entries:
        for key in exact_model_keys(model_id):
            signals.setdefault(key, signal)
    for model_id, signal in entries:
        for key in build_model_key_aliases(model_id):
            signals.setdefault(key, signal)
    return signals


def parse_artificial_analysis_payload(payload: Any) -> ExternalSignalMap:
    """Parse an Artificial Analysis models response into a signal map.

    Raises:
        ExternalSignalClientError: If the payload has no ``data`` list.
    """
    entries: list[tuple[str, ModelExternalSignal]] = []
    skipped = 0
    for row in _data_rows(payload, SOURCE_ARTIFICIAL_ANALYSIS):
        row = _as_dict(row)
        slug = row.get("slug") or row.get("id")
        if not isinstance(slug, str) or not slug:
            skipped += 1
            continue
        evaluations = _as_dict(row.get("evaluations"))
        pricing = _as_dict(row.get("pricing"))
        try:
            signal = ModelExternalSignal(
                quality_score=evaluations.get(
                    "artificial_analysis_intelligence_index"
                ),
                coding_score=evaluations.get("artificial_analysis_coding_index"),
                latency_seconds=row.get("median_time_to_first_token_seconds"),
                input_price_per_1m=pricing.get("price_1m_input_tokens"),
                output_price_per_1m=pricing.get("price_1m_output_tokens"),
                source=SOURCE_ARTIFICIAL_ANALYSIS,
            )
        except ValidationError:
            skipped += 1
            continue
        entries.append((slug, signal))
        name = row.get("name")
        if isinstance(name, str) and name:
            entries.append((name, signal))

    if skipped:
        logger.warning("Skipped %d malformed Artificial Analysis rows", skipped)
    return index_signals(entries)


def parse_openrouter_payload(payload: Any) -> ExternalSignalMap:
    """Parse an OpenRouter models response into a signal map.

    Per-token prices are converted to USD per 1M tokens. Rows with negative
    sentinel prices (dynamic routers) are skipped.

    Raises:
        ExternalSignalClientError: If the payload has no ``data`` list.
    """
    entries: list[tuple[str, ModelExternalSignal]] = []
    skipped = 0
    for row in _data_rows(payload, SOURCE_OPENROUTER):
        row = _as_dict(row)
        model_id = row.get("id")
        if not isinstance(model_id, str) or not model_id:
            skipped += 1
            continue
        pricing = _as_dict(row.get("pricing"))
        try:
            signal = ModelExternalSignal(
                input_price_per_1m=_per_million(pricing.get("prompt")),
                output_price_per_1m=_per_million(pricing.get("completion")),
                source=SOURCE_OPENROUTER,
            )
        except (ValidationError, TypeError, ValueError):
            skipped += 1
            continue
        entries.append((model_id, signal))

    if skipped:
        logger.warning("Skipped %d malformed OpenRouter rows", skipped)
    return index_signals(entries)


def merge_signal_maps(
    primary: Mapping[str, ModelExternalSignal],
    fallback: Mapping[str, ModelExternalSignal],
) -> ExternalSignalMap:
    """Merge two maps per key; ``primary`` values win, ``fallback`` fills gaps."""
    merged: ExternalSignalMap = dict(fallback)
    for key, signal in primary.items():
        other = fallback.get(key)
        merged[key] = signal.merged_with(other) if other is not None else signal
    return merged


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------


class ExternalSignalClient:
    """Async client for the external signal providers.

    Supports both context manager and manual lifecycle management. An
    ``httpx.AsyncClient`` may be injected (for example one built on
    ``httpx.MockTransport``); an injected client is not closed by ``close``.

    Example:
        ```python
        async with ExternalSignalClient(ModelExternalSignalClientConfig()) as client:
            signals = await client.fetch_openrouter(api_key)
        ```
    """

    def __init__(
        self,
        config: ModelExternalSignalClientConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or ModelExternalSignalClientConfig()
        self._client: httpx.AsyncClient | None = http_client
        self._owns_client = http_client is None
        self._connected = http_client is not None

    @property
    def config(self) -> ModelExternalSignalClientConfig:
        """Return the client configuration."""
        return self._config

    @property
    def is_connected(self) -> bool:
        """True if the connection pool is active."""
        return self._connected and self._client is not None

    async def connect(self) -> None:
        """Open the connection pool. Safe to call multiple times (idempotent)."""
        if self._connected:
            return
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self._config.timeout_seconds),
            limits=httpx.Limits(max_keepalive_connections=2, max_connections=4),
        )
        self._owns_client = True
        self._connected = True
        logger.debug("ExternalSignalClient connected")

    async def close(self) -> None:
        """Close the connection pool. Safe to call multiple times (idempotent)."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None
        self._connected = False
        logger.debug("ExternalSignalClient connection closed")

    async def __aenter__(self) -> ExternalSignalClient:
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def fetch_artificial_analysis(self, api_key: str) -> ExternalSignalMap:
        """Fetch and parse Artificial Analysis signals."""
        payload = await self._get_json(
            self._config.artificial_analysis_url,
            headers={"x-api-key": api_key},
        )
        return parse_artificial_analysis_payload(payload)

    async def fetch_openrouter(self, api_key: str) -> ExternalSignalMap:
        """Fetch and parse OpenRouter prices."""
        payload = await self._get_json(
            self._config.openrouter_url,
            headers={"Authorization": f"Bearer {api_key}"},
        )
        return parse_openrouter_payload(payload)

    async def _get_json(self, url: str, headers: dict[str, str]) -> Any:
        """GET ``url`` with retries and return the decoded JSON body.

        Retries on timeouts, connection errors and 5xx responses with
        exponential backoff. Does NOT retry on client errors (4xx).

        Raises:
            ExternalSignalClientError: On 4xx, an undecodable body, or a 5xx
                after all retries.
            ExternalSignalConnectionError: If connection fails after all retries.
            ExternalSignalTimeoutError: If the request times out after all retries.
        """
        if not self._connected:
            await self.connect()

        last_exception: Exception | None = None
        attempts = self._config.max_retries + 1

        for attempt in range(attempts):
            try:
                return await self._execute_request(url, headers)

            except httpx.TimeoutException as exc:
                last_exception = ExternalSignalTimeoutError(
                    f"Timeout after {self._config.timeout_seconds}s for {url}: {exc}"
                )
                logger.warning(
                    "Signal request timeout (attempt %d/%d): %s",
                    attempt + 1,
                    attempts,
                    exc,
                )

            except httpx.ConnectError as exc:
                last_exception = ExternalSignalConnectionError(
                    f"Connection failed to {url}: {exc}"
                )
                logger.warning(
                    "Signal connection error (attempt %d/%d): %s",
                    attempt + 1,
                    attempts,
                    exc,
                )

            except httpx.HTTPStatusError as exc:
                if (
                    _HTTP_CLIENT_ERROR_MIN
                    <= exc.response.status_code
                    < _HTTP_CLIENT_ERROR_MAX
                ):
                    raise ExternalSignalClientError(
                        f"Client error from {url}: {exc.response.status_code}"
                    ) from exc
                last_exception = ExternalSignalClientError(
                    f"Server error from {url}: {exc.response.status_code}"
                )
                logger.warning(
                    "Signal server error (attempt %d/%d): %s",
                    attempt + 1,
                    attempts,
                    exc,
                )

            if attempt < self._config.max_retries:
                delay = self._config.retry_base_delay * (2**attempt)
                logger.debug("Retrying in %.2fs...", delay)
                await asyncio.sleep(delay)

        if last_exception is not None:
            raise last_exception

        raise ExternalSignalClientError("Unexpected error: no exception captured")

    async def _execute_request(self, url: str, headers: dict[str, str]) -> Any:
        if self._client is None:
            raise ExternalSignalClientError("Client is not connected")

        response = await self._client.get(url, headers=headers)
        response.raise_for_status()
        try:
            return response.json()
        except ValueError as exc:
            raise ExternalSignalClientError(
                f"Response from {url} is not valid JSON"
            ) from exc


# ---------------------------------------------------------------------------
# Fetch orchestration
# ---------------------------------------------------------------------------


async def _fetch_source(
    label: str,
    fetch: Callable[[str], Awaitable[ExternalSignalMap]],
    api_key: str | None,
    warnings: list[str],
) -> ExternalSignalMap:
    if not api_key:
        logger.debug("No API key for %s; skipping", label)
        return {}
    try:
        return await fetch(api_key)
    except (ExternalSignalClientError, httpx.HTTPError) as e:
        logger.warning("%s signals unavailable: %s", label, e)
        warnings.append(f"{label} signals unavailable: {e}")
        return {}


async def fetch_external_model_signals(
    artificial_analysis_api_key: str | None = None,
    openrouter_api_key: str | None = None,
    config: ModelExternalSignalClientConfig | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> ModelExternalSignalFetchResult:
    """Fetch both sources concurrently and merge them.

    Never raises for provider failures: each failed source becomes a warning
    and contributes nothing to the map. A source without an API key is
    skipped silently.
    """
    warnings: list[str] = []
    async with ExternalSignalClient(config, http_client=http_client) as client:
        artificial_analysis, openrouter = await asyncio.gather(
            _fetch_source(
                "Artificial Analysis",
                client.fetch_artificial_analysis,
                artificial_analysis_api_key,
                warnings,
            ),
            _fetch_source(
                "OpenRouter",
                client.fetch_openrouter,
                openrouter_api_key,
                warnings,
            ),
        )

    signals = merge_signal_maps(artificial_analysis, openrouter)
    logger.info(
        "Fetched external signals: %d keys, %d warnings", len(signals), len(warnings)
    )
    return ModelExternalSignalFetchResult(signals=signals, warnings=tuple(warnings))


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
