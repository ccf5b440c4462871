"""AI CLI管理マネージャー。

Claude Code の実行ファイルを探し、エージェントとしてフォアグラウンドで起動する。
Claude Code は会話履歴を作業ディレクトリ単位で保存するため、
エージェントは自分の worktree でのみ起動できる。
"""

import logging
import os
import shutil
import subprocess
from typing import TYPE_CHECKING

from agenter.errors import ExternalToolError
from agenter.identity import ensure_in_agent_workspace, validate_agent_name
from agenter.models.agent import AgentName

if TYPE_CHECKING:
    from agenter.config.settings import Settings

logger = logging.getLogger(__name__)


class AiCliManager:
    """Claude Code CLI を管理するマネージャー。"""

    def __init__(self, settings: "Settings") -> None:
        """AiCliManagerを初期化する。

        Args:
            settings: アプリケーション設定
        """
        self.settings = settings

    def find_claude_path(self) -> str | None:
        """claude の実行ファイルを探す。

        PATH を優先し、見つからなければ標準のインストール先を確認する。

        Returns:
            claude のパス、見つからない場合は None
        """
        path = shutil.which(self.settings.claude_command)
        if path:
            return path

        fallback = self.settings.resolved_claude_fallback_path()
        if os.path.isfile(fallback):
            return fallback

        logger.debug(f"claude が見つかりませんでした (fallback={fallback})")
        return None

    def build_env(self, agent: AgentName) -> dict[str, str]:
        """起動時の環境変数を構築する。"""
        env = os.environ.copy()
        env[self.settings.agent_env_var] = agent.value
        return env

    def launch(self, agent_name: str, workdir: str) -> int:
        """エージェントとして Claude Code を起動する。

        標準入出力を引き継ぎ、終了するまでブロックする。

        Args:
            agent_name: 外部から渡されたエージェント名
            workdir: 起動するディレクトリ

        Returns:
            claude の終了コード

        Raises:
            IdentityError: エージェント名が不正、またはディレクトリが一致しない場合
            ExternalToolError: claude が見つからない場合
        """
        agent = validate_agent_name(agent_name)
        ensure_in_agent_workspace(os.path.basename(os.path.normpath(workdir)), agent)

        claude_path = self.find_claude_path()
        if claude_path is None:
            raise ExternalToolError(
                "claude が見つかりません",
                hint="https://claude.ai/code からインストールしてください",
            )

        logger.info(f"{agent.value} として claude を起動します: {claude_path}")
        completed = subprocess.run(
            [claude_path],
            cwd=workdir,
            env=self.build_env(agent),
            check=False,
        )
        return completed.returncode
