# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Agent roles that receive a model assignment and a fallback chain.

The set is closed: every role is bound to exactly one scoring strategy in
``omniselect.scoring.role_strategies``. Adding a member here without a
strategy fails ``test_every_role_has_strategy``.
"""

from enum import Enum


class EnumAgentRole(str, Enum):
    """Consumer roles of the model plan.

    Member order is the order roles are planned and reported in.

    Attributes:
        ORCHESTRATOR: Drives the session and delegates to the other roles.
        ORACLE: High-reasoning advisor (architecture, hard debugging).
        DESIGNER: Visual/UI work; benefits from attachment support.
        EXPLORER: Fast codebase search.
        LIBRARIAN: Documentation and long-context research.
        FIXER: Fast, focused code edits.
    """

    ORCHESTRATOR = "orchestrator"
    ORACLE = "oracle"
    DESIGNER = "designer"
    EXPLORER = "explorer"
    LIBRARIAN = "librarian"
    FIXER = "fixer"


__all__ = ["EnumAgentRole"]
