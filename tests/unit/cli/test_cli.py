# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for the omniselect CLI.

All tests read the catalog from a saved listing, so no discovery binary
and no network access is needed.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from omniselect.cli.__main__ import (
    EXIT_ERROR,
    EXIT_NO_RESULT,
    EXIT_OK,
    main,
)
from omniselect.config import ModelSelectionSettings
from omniselect.constants import SENTINEL_FALLBACK_MODEL


@pytest.fixture
def settings() -> ModelSelectionSettings:
    return ModelSelectionSettings(weights_path=None, log_level="WARNING")


@pytest.fixture
def catalog_file(tmp_path: Path, sample_verbose_output: str) -> Path:
    path = tmp_path / "models.txt"
    path.write_text(sample_verbose_output, encoding="utf-8")
    return path


@pytest.mark.unit
class TestScoreCommand:
    """``score`` subcommand."""

    def test_markdown_for_single_role(
        self,
        catalog_file: Path,
        settings: ModelSelectionSettings,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = main(
            ["score", "--role", "oracle", "--catalog-file", str(catalog_file), "--no-signals"],
            settings=settings,
        )
        out = capsys.readouterr().out

        assert code == EXIT_OK
        assert out.startswith("# Model Ranking Results")
        assert "## Oracle Agent Rankings" in out
        assert "## Fixer Agent Rankings" not in out
        # Default provider filter keeps only the opencode model.
        assert "| 1 | opencode/gpt-5-nano |" in out
        assert "openai/gpt-5.3-codex" not in out

    def test_csv_to_file_for_all_models(
        self,
        tmp_path: Path,
        catalog_file: Path,
        settings: ModelSelectionSettings,
    ) -> None:
        output = tmp_path / "scores.csv"
        code = main(
            [
                "score",
                "--all",
                "--format",
                "csv",
                "--output",
                str(output),
                "--catalog-file",
                str(catalog_file),
                "--no-signals",
            ],
            settings=settings,
        )

        assert code == EXIT_OK
        lines = output.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "Rank,Role,Model,Total Score,Base Score,External Boost,Provider,Status"
        # Three models for each of the six roles.
        assert len(lines) == 1 + 3 * 6

    def test_provider_filter_without_matches(
        self,
        catalog_file: Path,
        settings: ModelSelectionSettings,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = main(
            ["score", "--providers", "kiro", "--catalog-file", str(catalog_file), "--no-signals"],
            settings=settings,
        )
        assert code == EXIT_NO_RESULT
        assert "No models found after filtering" in capsys.readouterr().err

    def test_empty_catalog(
        self,
        tmp_path: Path,
        settings: ModelSelectionSettings,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        empty = tmp_path / "empty.txt"
        empty.write_text("", encoding="utf-8")
        code = main(
            ["score", "--catalog-file", str(empty), "--no-signals"], settings=settings
        )
        assert code == EXIT_NO_RESULT
        assert "No models found in catalog" in capsys.readouterr().err

    def test_missing_weights_file(
        self,
        tmp_path: Path,
        catalog_file: Path,
        settings: ModelSelectionSettings,
    ) -> None:
        code = main(
            [
                "score",
                "--catalog-file",
                str(catalog_file),
                "--weights",
                str(tmp_path / "absent.yaml"),
                "--no-signals",
            ],
            settings=settings,
        )
        assert code == EXIT_ERROR

    def test_invalid_weights_file(
        self,
        tmp_path: Path,
        catalog_file: Path,
        settings: ModelSelectionSettings,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        weights = tmp_path / "weights.yaml"
        weights.write_text("scoring:\n  bogus: 1\n", encoding="utf-8")
        code = main(
            [
                "score",
                "--catalog-file",
                str(catalog_file),
                "--weights",
                str(weights),
                "--no-signals",
            ],
            settings=settings,
        )
        assert code == EXIT_ERROR
        assert "invalid configuration" in capsys.readouterr().err

    def test_unknown_role_is_usage_error(
        self, settings: ModelSelectionSettings
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["score", "--role", "wizard"], settings=settings)
        assert exc_info.value.code == 2


@pytest.mark.unit
class TestPlanCommand:
    """``plan`` subcommand."""

    def test_prints_plan_json(
        self,
        catalog_file: Path,
        settings: ModelSelectionSettings,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = main(
            ["plan", "--openai", "--catalog-file", str(catalog_file)],
            settings=settings,
        )
        plan = json.loads(capsys.readouterr().out)

        assert code == EXIT_OK
        assert plan["agents"]["oracle"]["model"] == "openai/gpt-5.3-codex"
        assert plan["chains"]["oracle"] == [
            "openai/gpt-5.3-codex",
            SENTINEL_FALLBACK_MODEL,
        ]
        assert set(plan["agents"]) == set(plan["chains"])

    def test_preference_sets_primary(
        self,
        catalog_file: Path,
        settings: ModelSelectionSettings,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = main(
            [
                "plan",
                "--openai",
                "--opencode-free",
                "--prefer",
                "fixer=opencode/gpt-5-nano",
                "--catalog-file",
                str(catalog_file),
            ],
            settings=settings,
        )
        plan = json.loads(capsys.readouterr().out)

        assert code == EXIT_OK
        assert plan["agents"]["fixer"]["model"] == "opencode/gpt-5-nano"
        assert plan["chains"]["fixer"][-1] == SENTINEL_FALLBACK_MODEL

    def test_no_usable_model(
        self,
        catalog_file: Path,
        settings: ModelSelectionSettings,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = main(
            ["plan", "--kimi", "--catalog-file", str(catalog_file)],
            settings=settings,
        )
        assert code == EXIT_NO_RESULT
        assert "No usable model" in capsys.readouterr().err

    def test_no_providers_enabled(
        self,
        catalog_file: Path,
        settings: ModelSelectionSettings,
    ) -> None:
        code = main(["plan", "--catalog-file", str(catalog_file)], settings=settings)
        assert code == EXIT_ERROR

    def test_malformed_preference_is_usage_error(
        self, settings: ModelSelectionSettings
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["plan", "--openai", "--prefer", "oracle"], settings=settings)
        assert exc_info.value.code == 2
