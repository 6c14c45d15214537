# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Data models for omniselect."""

from omniselect.models.model_candidate import ModelCandidate
from omniselect.models.model_dynamic_plan import (
    ModelAgentAssignment,
    ModelDynamicPlan,
)
from omniselect.models.model_external_signal import (
    ExternalSignalMap,
    ModelExternalSignal,
)
from omniselect.models.model_selection_config import (
    ModelFamilySelection,
    ModelSelectionConfig,
)

__all__ = [
    "ExternalSignalMap",
    "ModelAgentAssignment",
    "ModelCandidate",
    "ModelDynamicPlan",
    "ModelExternalSignal",
    "ModelFamilySelection",
    "ModelSelectionConfig",
]
