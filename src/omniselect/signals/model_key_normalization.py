# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Alias keys for matching catalog ids against external signal sources.

Benchmark and pricing providers name the same model differently from the
catalog: with or without a vendor prefix (``openai/gpt-5`` vs ``gpt-5``),
with release suffixes (``-preview``, ``-2025-08-07``, ``:free``) and with
dots or dashes in version numbers (``gpt-5.1`` vs ``gpt-5-1``).

``build_model_key_aliases`` expands one id into an ordered, de-duplicated
tuple of keys, most specific first. Signal maps are indexed by every alias
of the source id, and lookups try a candidate's aliases in order, so
variance on either side still meets in the middle.
"""

from __future__ import annotations

import re

_SEPARATORS = re.compile(r"[\s_]+")
_REPEATED_DASH = re.compile(r"-{2,}")
_COLON_TAG = re.compile(r":[a-z0-9._-]+$")
_DATE_SUFFIX = re.compile(r"-(?:\d{4}-\d{2}-\d{2}|\d{8}|\d{4})$")
_RELEASE_SUFFIX = re.compile(r"-(?:free|preview|latest|exp|experimental)$")


def normalize_model_key(raw: str) -> str:
    """Lower-case, trim and unify separators of a model name."""
    key = _SEPARATORS.sub("-", raw.strip().lower())
    return _REPEATED_DASH.sub("-", key).strip("-")


def _strip_suffixes(name: str) -> str:
    previous = None
    while previous != name:
        previous = name
        name = _COLON_TAG.sub("", name)
        name = _DATE_SUFFIX.sub("", name)
        name = _RELEASE_SUFFIX.sub("", name)
    return name


def exact_model_keys(model_id: str) -> tuple[str, ...]:
    """Return the normalized full id and its bare name, without suffix variants."""
    full = normalize_model_key(model_id)
    if not full:
        return ()
    bare = full.rsplit("/", 1)[-1]
    return (full,) if bare == full else (full, bare)


def build_model_key_aliases(model_id: str) -> tuple[str, ...]:
    """Return alias keys for ``model_id``, most specific first.

    Example:
        >>> build_model_key_aliases("opencode/GPT-5.1-Codex-free")
        ('opencode/gpt-5.1-codex-free', 'gpt-5.1-codex-free', 'gpt-5-1-codex-free', 'gpt-5.1-codex', 'gpt-5-1-codex')
    """
    full = normalize_model_key(model_id)
    if not full:
        return ()

    bare = full.rsplit("/", 1)[-1]
    stripped = _strip_suffixes(bare)

    candidates = [
        full,
        bare,
        bare.replace(".", "-"),
        stripped,
        stripped.replace(".", "-"),
    ]

    aliases: list[str] = []
    for key in candidates:
        if key and key not in aliases:
            aliases.append(key)
    return tuple(aliases)


__all__ = ["build_model_key_aliases", "exact_model_keys", "normalize_model_key"]
