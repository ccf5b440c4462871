"""git コマンドの薄いラッパー。

状態遷移ロジックから git の呼び出しを切り離し、
テストでは呼び出しを記録する代替実装に差し替えられるようにする。
"""

import asyncio
import logging
import subprocess

from agenter.errors import ExternalToolError
from agenter.models.workspace import WorktreeInfo

logger = logging.getLogger(__name__)


class GitClient:
    """作業ディレクトリを固定して git を実行するクライアント。"""

    def __init__(self, cwd: str) -> None:
        """GitClientを初期化する。

        Args:
            cwd: git を実行する作業ディレクトリ
        """
        self.cwd = cwd

    async def _run_command(
        self, *args: str, cwd: str | None = None
    ) -> tuple[int, str, str]:
        """コマンドを実行する。

        Args:
            *args: コマンドと引数
            cwd: 作業ディレクトリ（省略時はself.cwd）

        Returns:
            (リターンコード, stdout, stderr) のタプル
        """
        work_dir = cwd or self.cwd
        logger.debug(f"実行: {' '.join(args)} (cwd={work_dir})")
        try:
            proc = await asyncio.create_subprocess_exec(
                *args,
                cwd=work_dir,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout, stderr = await proc.communicate()
            return proc.returncode or 0, stdout.decode(), stderr.decode()
        except FileNotFoundError:
            return 1, "", f"コマンドが見つかりません: {args[0]}"
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug(f"コマンド実行エラー: {e}")
            return 1, "", str(e)

    async def _run_git(
        self, *args: str, cwd: str | None = None
    ) -> tuple[int, str, str]:
        """gitコマンドを実行する。"""
        return await self._run_command("git", *args, cwd=cwd)

    async def _require_git(self, message: str, *args: str) -> str:
        """gitコマンドを実行し、失敗時は ExternalToolError を送出する。

        Args:
            message: 失敗時のメッセージ
            *args: gitコマンドの引数

        Returns:
            stdout

        Raises:
            ExternalToolError: 非ゼロで終了した場合（出力はそのまま保持）
        """
        code, stdout, stderr = await self._run_git(*args)
        if code != 0:
            output = stdout + stderr
            logger.debug(f"{message}: {output.strip()}")
            raise ExternalToolError(message, command=["git", *args], output=output)
        return stdout

    async def current_branch(self) -> str:
        """現在のブランチ名を取得する。"""
        stdout = await self._require_git(
            "現在のブランチを取得できません", "rev-parse", "--abbrev-ref", "HEAD"
        )
        return stdout.strip()

    async def status_porcelain(self) -> list[str]:
        """変更のあるエントリ一覧を取得する（空ならクリーン）。"""
        stdout = await self._require_git(
            "git status を確認できません", "status", "--porcelain"
        )
        return [line for line in stdout.splitlines() if line.strip()]

    async def create_and_switch_branch(self, name: str) -> None:
        """新しいブランチを作成して切り替える。"""
        await self._require_git("トピックブランチを作成できません", "checkout", "-b", name)

    async def switch_branch(self, name: str) -> None:
        """既存ブランチへ切り替える。"""
        await self._require_git("ベースブランチへ切り替えられません", "checkout", name)

    async def pull(self, remote: str, branch: str) -> None:
        """リモートのブランチを取り込む。"""
        await self._require_git(f"{remote}/{branch} を取り込めません", "pull", remote, branch)

    async def push(self, remote: str, branch: str, set_upstream: bool = True) -> None:
        """ブランチをリモートへpushする。"""
        args = ["push"]
        if set_upstream:
            args.append("-u")
        args.extend([remote, branch])
        await self._require_git("pushできません", *args)

    async def remote_url(self, name: str = "origin") -> str:
        """リモートのURLを取得する。"""
        stdout = await self._require_git(
            f"リモート {name} のURLを取得できません", "remote", "get-url", name
        )
        return stdout.strip()

    async def worktree_add(self, repo_path: str, new_branch: str, path: str) -> None:
        """新しいブランチでworktreeを作成する。

        Args:
            repo_path: メインリポジトリのパス
            new_branch: 作成するブランチ名（repo_path の HEAD が基点）
            path: worktreeのパス
        """
        await self._require_git(
            "worktreeを作成できません",
            "-C", repo_path, "worktree", "add", "-b", new_branch, path,
        )

    async def worktree_list(self) -> list[WorktreeInfo]:
        """worktree一覧を取得する。

        Returns:
            WorktreeInfo のリスト
        """
        stdout = await self._require_git(
            "worktree一覧を取得できません", "worktree", "list", "--porcelain"
        )

        worktrees: list[WorktreeInfo] = []
        current: dict[str, str] = {}

        for line in stdout.strip().split("\n"):
            line = line.strip()
            if not line:
                if current:
                    worktrees.append(self._parse_worktree_info(current))
                    current = {}
                continue

            if " " in line:
                key, value = line.split(" ", 1)
                current[key] = value
            else:
                current[line] = "true"

        if current:
            worktrees.append(self._parse_worktree_info(current))

        return worktrees

    @staticmethod
    def _parse_worktree_info(data: dict[str, str]) -> WorktreeInfo:
        """worktree list --porcelain の1ブロックをパースする。"""
        return WorktreeInfo(
            path=data.get("worktree", ""),
            branch=data.get("branch", "").replace("refs/heads/", ""),
            commit=data.get("HEAD", ""),
            is_bare="bare" in data,
            is_detached="detached" in data,
        )
