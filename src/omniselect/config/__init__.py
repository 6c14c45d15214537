# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Environment settings and weight override loading."""

from omniselect.config.settings import ModelSelectionSettings
from omniselect.config.weights_loader import (
    ModelWeightOverrides,
    apply_weight_overrides,
    deep_merge,
    load_scoring_weights,
)

__all__ = [
    "ModelSelectionSettings",
    "ModelWeightOverrides",
    "apply_weight_overrides",
    "deep_merge",
    "load_scoring_weights",
]
