# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Lifecycle status of a catalog model as reported by discovery."""

from enum import Enum


class EnumModelStatus(str, Enum):
    """Release status of a discovered model.

    Attributes:
        ACTIVE: Generally available.
        BETA: Usable, lightly penalized against active models.
        ALPHA: Experimental, penalized.
        DEPRECATED: Retired; only surfaces if nothing else is eligible.

    Example:
        >>> EnumModelStatus("beta") is EnumModelStatus.BETA
        True
    """

    ACTIVE = "active"
    BETA = "beta"
    ALPHA = "alpha"
    DEPRECATED = "deprecated"


__all__ = ["EnumModelStatus"]
