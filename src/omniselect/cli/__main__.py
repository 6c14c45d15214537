# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT
"""
Model ranking and fallback plan CLI.

Discovers the model catalog (or reads a saved listing), optionally fetches
external signals, and either prints a per-role ranking report or builds the
per-role assignment and fallback chain plan.

Usage:
    python -m omniselect.cli score --role oracle
    python -m omniselect.cli score --providers opencode,github-copilot --format csv
    python -m omniselect.cli score --all --output scores.md
    python -m omniselect.cli plan --openai --copilot --opencode-free
    python -m omniselect.cli plan --chutes --prefer oracle=chutes/kimi-k2.5

Environment Variables:
    ARTIFICIAL_ANALYSIS_API_KEY   API key for Artificial Analysis
    OPENROUTER_API_KEY            API key for OpenRouter
    OMNISELECT_*                  See ``ModelSelectionSettings``

Exit Codes:
    0 - Success
    1 - No result: discovery failed, no models left, or no plan possible
    2 - Error: CLI usage error, invalid weights file, or unexpected failure
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

from omniselect.catalog import discover_model_catalog, parse_verbose_models_output
from omniselect.cli.report import RoleRanking, format_csv, format_markdown
from omniselect.clients import fetch_external_model_signals
from omniselect.config import (
    ModelSelectionSettings,
    ModelWeightOverrides,
    load_scoring_weights,
)
from omniselect.constants import (
    PROVIDER_COPILOT,
    PROVIDER_OPENCODE,
)
from omniselect.enums import EnumAgentRole
from omniselect.models import ExternalSignalMap, ModelCandidate, ModelSelectionConfig
from omniselect.planner import (
    PlanUnavailableError,
    require_dynamic_model_plan,
    resolve_family_selections,
)
from omniselect.signals import rank_models_with_breakdown

logger = logging.getLogger(__name__)

# JSON output indentation (spaces)
JSON_INDENT_SPACES = 2

EXIT_OK = 0
EXIT_NO_RESULT = 1
EXIT_ERROR = 2

# Providers scored when neither --providers nor --all is given.
DEFAULT_SCORE_PROVIDERS: tuple[str, ...] = (
    PROVIDER_OPENCODE,
    PROVIDER_COPILOT,
    "kiro",
    "perplexity",
)

_ROLE_NAMES = [role.value for role in EnumAgentRole]


class CatalogUnavailableError(RuntimeError):
    """Catalog discovery failed or returned no models."""


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def _parse_provider_list(value: str) -> list[str]:
    providers = [item.strip() for item in value.split(",") if item.strip()]
    if not providers:
        raise argparse.ArgumentTypeError("expected a comma-separated provider list")
    return providers


def _parse_preference(value: str) -> tuple[EnumAgentRole, str]:
    role_name, separator, model_id = value.partition("=")
    if not separator or not model_id.strip():
        raise argparse.ArgumentTypeError(
            f"expected ROLE=MODEL, got {value!r}"
        )
    try:
        role = EnumAgentRole(role_name.strip().lower())
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"unknown role {role_name!r}; valid roles: {', '.join(_ROLE_NAMES)}"
        ) from None
    return role, model_id.strip()


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--catalog-file",
        type=Path,
        metavar="PATH",
        help="Read a saved verbose model listing instead of running discovery",
    )
    parser.add_argument(
        "--weights",
        type=Path,
        metavar="PATH",
        help="YAML file overriding scoring and feature weights",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Rank discovered models per agent role and build fallback plans",
        prog="python -m omniselect.cli",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    score = subparsers.add_parser(
        "score",
        help="Print per-role model rankings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Provider filtering:
  By default only models of common free providers are scored.
  Use --providers to name exact providers, or --all for the whole catalog.

Examples:
  %(prog)s --role oracle
  %(prog)s --role oracle --all
  %(prog)s --providers opencode,github-copilot
  %(prog)s --format csv --output scores.csv
""",
    )
    score.add_argument(
        "--role",
        choices=_ROLE_NAMES,
        help="Score a single role (default: all roles)",
    )
    score_scope = score.add_mutually_exclusive_group()
    score_scope.add_argument(
        "--providers",
        type=_parse_provider_list,
        metavar="LIST",
        help="Comma-separated providers to include",
    )
    score_scope.add_argument(
        "--all",
        action="store_true",
        help="Score every model in the catalog",
    )
    score.add_argument(
        "--format",
        choices=("md", "csv"),
        default="md",
        help="Output format (default: md)",
    )
    score.add_argument(
        "--output",
        type=Path,
        metavar="PATH",
        help="Write the report to a file instead of stdout",
    )
    score.add_argument(
        "--no-signals",
        action="store_true",
        help="Do not fetch external signals",
    )
    _add_common_arguments(score)

    plan = subparsers.add_parser(
        "plan",
        help="Build per-role assignments and fallback chains as JSON",
    )
    providers = plan.add_argument_group("enabled providers")
    providers.add_argument("--openai", action="store_true", dest="has_openai")
    providers.add_argument("--anthropic", action="store_true", dest="has_anthropic")
    providers.add_argument("--copilot", action="store_true", dest="has_copilot")
    providers.add_argument("--zai-plan", action="store_true", dest="has_zai_plan")
    providers.add_argument("--kimi", action="store_true", dest="has_kimi")
    providers.add_argument(
        "--antigravity", action="store_true", dest="has_antigravity"
    )
    providers.add_argument("--chutes", action="store_true", dest="has_chutes")
    providers.add_argument(
        "--opencode-free", action="store_true", dest="use_opencode_free_models"
    )

    overrides = plan.add_argument_group("overrides")
    overrides.add_argument(
        "--opencode-primary", dest="selected_opencode_primary_model", metavar="MODEL"
    )
    overrides.add_argument(
        "--opencode-secondary",
        dest="selected_opencode_secondary_model",
        metavar="MODEL",
    )
    overrides.add_argument(
        "--chutes-primary", dest="selected_chutes_primary_model", metavar="MODEL"
    )
    overrides.add_argument(
        "--chutes-secondary", dest="selected_chutes_secondary_model", metavar="MODEL"
    )
    overrides.add_argument(
        "--prefer",
        type=_parse_preference,
        action="append",
        default=[],
        metavar="ROLE=MODEL",
        help="Preferred primary model for a role (repeatable)",
    )
    plan.add_argument(
        "--signals",
        action="store_true",
        help="Blend external signals into the ranking",
    )
    _add_common_arguments(plan)

    return parser


def _configure_logging(level: str, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stderr,
    )


# ---------------------------------------------------------------------------
# Shared steps
# ---------------------------------------------------------------------------


async def _load_catalog(
    catalog_file: Path | None, settings: ModelSelectionSettings
) -> list[ModelCandidate]:
    if catalog_file is not None:
        models = parse_verbose_models_output(
            catalog_file.read_text(encoding="utf-8"), free_only=False
        )
    else:
        result = await discover_model_catalog(settings.to_discovery_context())
        if result.error is not None:
            raise CatalogUnavailableError(f"Error discovering models: {result.error}")
        models = list(result.models)

    if not models:
        raise CatalogUnavailableError("No models found in catalog")
    logger.info("Found %d models", len(models))
    return models


def _load_weights(path: Path | None) -> ModelWeightOverrides:
    if path is None:
        return ModelWeightOverrides()
    return load_scoring_weights(path)


async def _fetch_signals(settings: ModelSelectionSettings) -> ExternalSignalMap:
    if not settings.has_signal_keys:
        logger.warning(
            "No API keys found; external signals will not be available. "
            "Set ARTIFICIAL_ANALYSIS_API_KEY and/or OPENROUTER_API_KEY."
        )
        return {}
    result = await fetch_external_model_signals(
        artificial_analysis_api_key=settings.artificial_analysis_api_key,
        openrouter_api_key=settings.openrouter_api_key,
        config=settings.to_signal_client_config(),
    )
    for warning in result.warnings:
        logger.warning(warning)
    logger.info("External signals fetched: %d entries", len(result.signals))
    return result.signals


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


async def _run_score(
    parsed: argparse.Namespace, settings: ModelSelectionSettings
) -> int:
    weights = _load_weights(parsed.weights or settings.weights_path)
    models = await _load_catalog(parsed.catalog_file, settings)

    if not parsed.all:
        providers = set(parsed.providers or DEFAULT_SCORE_PROVIDERS)
        models = [model for model in models if model.provider_id in providers]
        logger.info(
            "Filtered to %d models from providers: %s",
            len(models),
            ", ".join(sorted(providers)),
        )
    if not models:
        print("No models found after filtering", file=sys.stderr)
        return EXIT_NO_RESULT

    signals = {} if parsed.no_signals else await _fetch_signals(settings)

    roles = [EnumAgentRole(parsed.role)] if parsed.role else list(EnumAgentRole)
    results: list[RoleRanking] = []
    for role in roles:
        scores = rank_models_with_breakdown(
            models, role, signals, weights.scoring, weights.features
        )
        boosted = sum(1 for score in scores if score.external_signal_boost != 0)
        logger.info(
            "%s: %d/%d models have external boost", role.value, boosted, len(scores)
        )
        results.append(RoleRanking(role=role, scores=scores))

    formatter = format_csv if parsed.format == "csv" else format_markdown
    output = formatter(results, models)

    if parsed.output is not None:
        parsed.output.write_text(output, encoding="utf-8")
        logger.info("Results written to %s", parsed.output)
    else:
        print(output)
    return EXIT_OK


def _selection_config(parsed: argparse.Namespace) -> ModelSelectionConfig:
    return ModelSelectionConfig(
        has_openai=parsed.has_openai,
        has_anthropic=parsed.has_anthropic,
        has_copilot=parsed.has_copilot,
        has_zai_plan=parsed.has_zai_plan,
        has_kimi=parsed.has_kimi,
        has_antigravity=parsed.has_antigravity,
        has_chutes=parsed.has_chutes,
        use_opencode_free_models=parsed.use_opencode_free_models,
        selected_opencode_primary_model=parsed.selected_opencode_primary_model,
        selected_opencode_secondary_model=parsed.selected_opencode_secondary_model,
        selected_chutes_primary_model=parsed.selected_chutes_primary_model,
        selected_chutes_secondary_model=parsed.selected_chutes_secondary_model,
        preferred_primary_models=dict(parsed.prefer),
    )


async def _run_plan(
    parsed: argparse.Namespace, settings: ModelSelectionSettings
) -> int:
    config = _selection_config(parsed)
    if not config.enabled_providers():
        print("No providers enabled; pass at least one provider flag", file=sys.stderr)
        return EXIT_ERROR

    weights = _load_weights(parsed.weights or settings.weights_path)
    models = await _load_catalog(parsed.catalog_file, settings)
    signals = await _fetch_signals(settings) if parsed.signals else {}

    config = resolve_family_selections(models, config, profiles=weights.families)
    try:
        plan = require_dynamic_model_plan(
            models,
            config,
            signals=signals,
            weights=weights.scoring,
            feature_table=weights.features,
        )
    except PlanUnavailableError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_NO_RESULT

    print(json.dumps(plan.to_dict(), indent=JSON_INDENT_SPACES))
    return EXIT_OK


def main(
    args: list[str] | None = None,
    settings: ModelSelectionSettings | None = None,
) -> int:
    """CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None).
        settings: Settings to use instead of reading the environment.

    Returns:
        Exit code (see module docstring).
    """
    parsed = _build_parser().parse_args(args)
    settings = settings or ModelSelectionSettings()
    _configure_logging(settings.log_level, parsed.verbose)

    command = _run_score if parsed.command == "score" else _run_plan
    try:
        return asyncio.run(command(parsed, settings))

    except CatalogUnavailableError as e:
        print(str(e), file=sys.stderr)
        return EXIT_NO_RESULT

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    except (ValidationError, yaml.YAMLError, ValueError) as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
