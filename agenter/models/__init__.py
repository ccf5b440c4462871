"""データモデルモジュール。"""

from .agent import ROSTER, AgentName, BranchState, WorkspaceBinding
from .workspace import (
    AgentWorktree,
    PushResult,
    ReturnResult,
    TopicResult,
    WorktreeCreation,
    WorktreeInfo,
)

__all__ = [
    "ROSTER",
    "AgentName",
    "AgentWorktree",
    "BranchState",
    "PushResult",
    "ReturnResult",
    "TopicResult",
    "WorkspaceBinding",
    "WorktreeCreation",
    "WorktreeInfo",
]
