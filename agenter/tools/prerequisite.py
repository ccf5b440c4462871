"""前提ツール確認ツール。"""

from typing import Any

from mcp.server.fastmcp import Context, FastMCP

from agenter.context import AppContext
from agenter.errors import ExternalToolError
from agenter.managers.prerequisite_manager import PrerequisiteManager, has_git_repository


def register_tools(mcp: FastMCP) -> None:
    """前提ツール確認ツールを登録する。"""

    @mcp.tool()
    async def check_prerequisites(ctx: Context = None) -> dict[str, Any]:
        """claude / git / gh の有無と、作業ディレクトリが git リポジトリかを確認する。

        Returns:
            確認結果（success, checks, is_git_repository）
        """
        app_ctx: AppContext = ctx.request_context.lifespan_context
        prerequisites = PrerequisiteManager(app_ctx.settings, app_ctx.ai_cli)

        checks: dict[str, dict[str, Any]] = {}

        try:
            checks["claude"] = {"ok": True, "path": prerequisites.check_claude()}
        except ExternalToolError as e:
            checks["claude"] = {"ok": False, "error": e.message, "hint": e.hint}

        try:
            checks["git"] = {"ok": True, "version": await prerequisites.check_git()}
        except ExternalToolError as e:
            checks["git"] = {"ok": False, "error": e.message, "hint": e.hint}

        try:
            await prerequisites.check_github_cli()
            checks["gh"] = {"ok": True}
        except ExternalToolError as e:
            checks["gh"] = {"ok": False, "error": e.message, "hint": e.hint}

        return {
            "success": all(c["ok"] for c in checks.values()),
            "checks": checks,
            "is_git_repository": has_git_repository(app_ctx.workdir),
        }
