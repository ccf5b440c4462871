"""エージェント worktree のブランチ遷移ツール。"""

import logging
from typing import Any

from mcp.server.fastmcp import Context, FastMCP

from agenter.context import AppContext
from agenter.errors import AgenterError
from agenter.naming import topic_of
from agenter.tools.helpers import error_response, get_worktree_manager

logger = logging.getLogger(__name__)


def register_tools(mcp: FastMCP) -> None:
    """worktree 遷移ツールを登録する。"""

    @mcp.tool()
    async def worktree_make(topic: str, ctx: Context = None) -> dict[str, Any]:
        """ベースブランチからトピックブランチを作成して切り替える。

        Args:
            topic: トピック名（<agent>-worktree-<topic> になる）

        Returns:
            作成結果（success, branch, topic, message または error, hint）
        """
        app_ctx: AppContext = ctx.request_context.lifespan_context
        manager = get_worktree_manager(app_ctx)

        try:
            result = await manager.make_topic(topic)
        except AgenterError as e:
            return error_response(e)

        return {
            "success": True,
            "agent": result.agent.value,
            "branch": result.branch,
            "topic": result.topic,
            "message": f"トピックブランチを作成しました: {result.branch}",
        }

    @mcp.tool()
    async def worktree_next(topic: str | None = None, ctx: Context = None) -> dict[str, Any]:
        """ベースブランチへ戻り、指定があれば次のトピックを作成する。

        未コミットの変更がある場合は切り替えない。
        上流ブランチの取り込み失敗は warnings に入り、success は True のまま。

        Args:
            topic: 続けて作成するトピック名（省略可）

        Returns:
            遷移結果（success, base_branch, branch, warnings または error, hint）
        """
        app_ctx: AppContext = ctx.request_context.lifespan_context
        manager = get_worktree_manager(app_ctx)

        try:
            result = await manager.return_to_base(topic)
        except AgenterError as e:
            return error_response(e)

        branch = result.topic.branch if result.topic else result.base_branch
        return {
            "success": True,
            "agent": result.agent.value,
            "base_branch": result.base_branch,
            "branch": branch,
            "synced": result.synced,
            "warnings": result.warnings,
            "message": f"現在のブランチ: {branch}",
        }

    @mcp.tool()
    async def worktree_push(ctx: Context = None) -> dict[str, Any]:
        """現在のトピックブランチを push し、PR作成URLを返す。

        Returns:
            push結果（success, branch, pr_url または error, hint）
        """
        app_ctx: AppContext = ctx.request_context.lifespan_context
        manager = get_worktree_manager(app_ctx)

        try:
            result = await manager.push_topic()
        except AgenterError as e:
            return error_response(e)

        return {
            "success": True,
            "branch": result.branch,
            "remote": result.remote,
            "pr_url": result.pr_url,
            "message": f"ブランチをpushしました: {result.branch}",
        }

    @mcp.tool()
    async def worktree_list(ctx: Context = None) -> dict[str, Any]:
        """エージェントの worktree 一覧を取得する。

        Returns:
            worktree一覧（success, worktrees, count または error）
        """
        app_ctx: AppContext = ctx.request_context.lifespan_context
        manager = get_worktree_manager(app_ctx)

        try:
            worktrees = await manager.list_agent_worktrees()
        except AgenterError as e:
            return error_response(e)

        return {
            "success": True,
            "worktrees": [wt.model_dump(mode="json") for wt in worktrees],
            "count": len(worktrees),
        }

    @mcp.tool()
    async def worktree_status(ctx: Context = None) -> dict[str, Any]:
        """現在のエージェントとブランチ状態を取得する。

        Returns:
            状態（success, agent, branch, state, topic または error）
        """
        app_ctx: AppContext = ctx.request_context.lifespan_context
        manager = get_worktree_manager(app_ctx)

        try:
            agent, branch, state = await manager.get_state()
        except AgenterError as e:
            return error_response(e)

        return {
            "success": True,
            "agent": agent.value,
            "branch": branch,
            "state": state.value,
            "topic": topic_of(branch, agent),
        }

    @mcp.tool()
    async def worktree_create(repo_path: str | None = None, ctx: Context = None) -> dict[str, Any]:
        """全エージェントの worktree を作成する。既存のものはスキップする。

        Args:
            repo_path: メインリポジトリのパス（省略時はサーバーの作業ディレクトリ）

        Returns:
            作成結果（success, worktrees, created, skipped または error）
        """
        app_ctx: AppContext = ctx.request_context.lifespan_context
        target = repo_path or app_ctx.workdir
        manager = get_worktree_manager(app_ctx, target)

        try:
            creations = await manager.create_all_worktrees(target)
        except AgenterError as e:
            return error_response(e)

        created = [c.agent.value for c in creations if c.created]
        skipped = [c.agent.value for c in creations if not c.created]
        if created:
            logger.info(f"worktreeを作成しました: {', '.join(created)}")

        return {
            "success": True,
            "worktrees": [c.model_dump(mode="json") for c in creations],
            "created": created,
            "skipped": skipped,
        }
