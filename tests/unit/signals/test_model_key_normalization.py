# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for alias key generation."""

from __future__ import annotations

import pytest

from omniselect.signals import build_model_key_aliases, normalize_model_key


@pytest.mark.unit
class TestNormalizeModelKey:
    """Case, whitespace and separator normalization."""

    def test_lowercases_and_trims(self) -> None:
        assert normalize_model_key("  GPT-5 ") == "gpt-5"

    def test_unifies_separators(self) -> None:
        assert normalize_model_key("Claude Opus__4") == "claude-opus-4"

    def test_empty(self) -> None:
        assert normalize_model_key("   ") == ""


@pytest.mark.unit
class TestBuildModelKeyAliases:
    """Alias expansion, most specific first."""

    def test_full_expansion(self) -> None:
        assert build_model_key_aliases("opencode/GPT-5.1-Codex-free") == (
            "opencode/gpt-5.1-codex-free",
            "gpt-5.1-codex-free",
            "gpt-5-1-codex-free",
            "gpt-5.1-codex",
            "gpt-5-1-codex",
        )

    def test_date_suffix_is_stripped(self) -> None:
        aliases = build_model_key_aliases("openai/gpt-4o-2024-08-06")
        assert "gpt-4o" in aliases

    def test_colon_tag_is_stripped(self) -> None:
        aliases = build_model_key_aliases("deepseek/deepseek-r1:free")
        assert "deepseek-r1" in aliases

    def test_no_duplicates(self) -> None:
        aliases = build_model_key_aliases("glm")
        assert aliases == ("glm",)

    def test_empty_id(self) -> None:
        assert build_model_key_aliases("") == ()

    def test_catalog_and_source_ids_meet(self) -> None:
        catalog = set(build_model_key_aliases("openai/gpt-5.1-codex"))
        source = set(build_model_key_aliases("gpt-5-1-codex"))
        assert catalog & source
