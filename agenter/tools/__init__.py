"""MCP Tools モジュール。"""

from mcp.server.fastmcp import FastMCP

from agenter.tools import prerequisite, worktree


def register_all_tools(mcp: FastMCP) -> None:
    """全ツールをMCPサーバーに登録する。

    Args:
        mcp: FastMCPインスタンス
    """
    # Git worktree 遷移
    worktree.register_tools(mcp)

    # 前提ツール確認
    prerequisite.register_tools(mcp)
