"""agenter MCP Server エントリーポイント。

エージェントの worktree で起動し、そのディレクトリに対する
トピックブランチ操作をツールとして公開する。
"""

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from mcp.server.fastmcp import FastMCP

from agenter.config.settings import load_settings_for_project
from agenter.context import AppContext
from agenter.identity import bind_workspace
from agenter.managers.ai_cli_manager import AiCliManager
from agenter.tools import register_all_tools

# ログ設定（stderrに出力）
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[AppContext]:
    """サーバーライフサイクルを管理する。

    Args:
        server: FastMCPサーバーインスタンス

    Yields:
        アプリケーションコンテキスト
    """
    workdir = os.getcwd()
    settings = load_settings_for_project(os.getenv("AGENTER_PROJECT_ROOT") or workdir)

    binding = bind_workspace(workdir)
    if binding.is_bound:
        logger.info(f"agenter MCP Server を起動しています... ({binding.agent.value}: {workdir})")
    else:
        logger.warning(f"エージェントの worktree ではありません: {workdir}")

    try:
        yield AppContext(settings=settings, ai_cli=AiCliManager(settings), workdir=workdir)
    finally:
        logger.info("サーバーをシャットダウンしています...")


# FastMCPサーバーを作成
mcp = FastMCP("agenter", lifespan=app_lifespan)
register_all_tools(mcp)


def main() -> None:
    """MCPサーバーを起動する。"""
    mcp.run()


if __name__ == "__main__":
    main()
