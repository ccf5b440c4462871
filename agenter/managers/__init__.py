"""マネージャーモジュール。"""

from .ai_cli_manager import AiCliManager
from .git_client import GitClient
from .prerequisite_manager import PrerequisiteManager
from .worktree_manager import WorktreeManager

__all__ = [
    "AiCliManager",
    "GitClient",
    "PrerequisiteManager",
    "WorktreeManager",
]
