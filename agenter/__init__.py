"""agenter: git worktree で分離した複数エージェントの協調ツール。"""

__version__ = "0.1.0"
