"""前提ツールの確認。

- git: worktree を作るため（worktree は Git 2.5 以降。バージョンは確認しない）
- gh: PR や Issue を作るため。インストールとログインの両方を確認する
- claude: 各エージェントとして起動するため
"""

import asyncio
import logging
import os
import subprocess

from agenter.config.settings import Settings
from agenter.errors import ExternalToolError
from agenter.managers.ai_cli_manager import AiCliManager

logger = logging.getLogger(__name__)


def has_git_repository(path: str) -> bool:
    """パスに .git があるか確認する。

    worktree では .git はメインリポジトリを指すファイルになる。
    """
    if not path:
        return False
    git_path = os.path.join(path, ".git")
    return os.path.isdir(git_path) or os.path.isfile(git_path)


class PrerequisiteManager:
    """git / gh / claude の有無を確認するクラス。"""

    def __init__(self, settings: Settings, ai_cli: AiCliManager | None = None) -> None:
        self.settings = settings
        self.ai_cli = ai_cli or AiCliManager(settings)

    async def _run_command(self, *args: str) -> tuple[int, str]:
        """コマンドを実行し、(リターンコード, stdout+stderr) を返す。"""
        try:
            proc = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
            stdout, _ = await proc.communicate()
            return proc.returncode or 0, stdout.decode()
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug(f"{args[0]} を実行できません: {e}")
            return 1, ""

    async def check_git(self) -> str:
        """git がインストールされているか確認する。

        Returns:
            git --version の出力

        Raises:
            ExternalToolError: git が見つからない場合
        """
        code, output = await self._run_command("git", "--version")
        if code != 0:
            raise ExternalToolError("Git がインストールされていません")
        version = output.strip()
        logger.debug(f"Git version: {version}")
        return version

    async def check_github_cli(self) -> None:
        """GitHub CLI がインストール済みかつログイン済みか確認する。

        Raises:
            ExternalToolError: 未インストールまたは未ログインの場合
        """
        code, output = await self._run_command("gh", "auth", "status")
        if code == 0:
            return
        if "not logged in" in output:
            raise ExternalToolError(
                "GitHub CLI にログインしていません",
                hint="'gh auth login' を実行してください",
            )
        raise ExternalToolError(
            "GitHub CLI がインストールされていません",
            hint="https://cli.github.com からインストールしてください",
        )

    def check_claude(self) -> str:
        """Claude Code がインストールされているか確認する。

        Returns:
            claude のパス

        Raises:
            ExternalToolError: 見つからない場合
        """
        path = self.ai_cli.find_claude_path()
        if path is None:
            raise ExternalToolError(
                "Claude Code がインストールされていません",
                hint="https://claude.ai/code からインストールしてください",
            )
        logger.debug(f"claude: {path}")
        return path
