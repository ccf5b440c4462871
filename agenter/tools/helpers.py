"""MCP ツール共通のヘルパー関数。"""

from typing import Any

from agenter.context import AppContext
from agenter.errors import AgenterError, DirtyWorkingTreeError, ExternalToolError
from agenter.managers.worktree_manager import WorktreeManager


def get_worktree_manager(app_ctx: AppContext, workdir: str | None = None) -> WorktreeManager:
    """呼び出しごとに WorktreeManager を作成する。

    エージェントの対応はキャッシュしないため、毎回新しいインスタンスを返す。
    """
    return WorktreeManager(workdir or app_ctx.workdir, settings=app_ctx.settings)


def error_response(error: AgenterError) -> dict[str, Any]:
    """AgenterError をツールの失敗レスポンスに変換する。"""
    response: dict[str, Any] = {
        "success": False,
        "error": error.message,
        "error_type": type(error).__name__,
    }
    if error.hint:
        response["hint"] = error.hint
    if isinstance(error, DirtyWorkingTreeError):
        response["changes"] = error.entries
    if isinstance(error, ExternalToolError) and error.output:
        response["output"] = error.output
    return response
