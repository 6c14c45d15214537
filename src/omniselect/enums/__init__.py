# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Enums for omniselect.

    from omniselect.enums import EnumAgentRole, EnumModelStatus
"""

from omniselect.enums.enum_agent_role import EnumAgentRole
from omniselect.enums.enum_model_status import EnumModelStatus

__all__ = ["EnumAgentRole", "EnumModelStatus"]
