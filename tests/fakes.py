"""テスト用の git クライアント代替実装。"""

import os

from agenter.errors import ExternalToolError
from agenter.models.workspace import WorktreeInfo


class FakeGitClient:
    """呼び出しを記録し、あらかじめ決めた結果を返す GitClient の代替。"""

    def __init__(
        self,
        branch: str = "forge-worktree",
        status: list[str] | None = None,
        remote_url: str | None = "git@github.com:owner/repo.git",
    ) -> None:
        self.branch = branch
        self.status = status or []
        self.remote = remote_url
        self.branches: set[str] = {branch}
        self.worktrees: list[WorktreeInfo] = []
        self.failures: dict[str, ExternalToolError] = {}
        self.calls: list[tuple[str, ...]] = []

    def fail(self, method: str, output: str) -> None:
        """指定メソッドを ExternalToolError で失敗させる。"""
        self.failures[method] = ExternalToolError(
            f"{method} に失敗しました", command=["git", method], output=output
        )

    def names(self) -> list[str]:
        return [call[0] for call in self.calls]

    def _record(self, method: str, *args: str) -> None:
        self.calls.append((method, *args))
        if method in self.failures:
            raise self.failures[method]

    async def current_branch(self) -> str:
        self._record("current_branch")
        return self.branch

    async def status_porcelain(self) -> list[str]:
        self._record("status_porcelain")
        return list(self.status)

    async def create_and_switch_branch(self, name: str) -> None:
        self._record("create_and_switch_branch", name)
        if name in self.branches:
            raise ExternalToolError(
                "トピックブランチを作成できません",
                command=["git", "checkout", "-b", name],
                output=f"fatal: a branch named '{name}' already exists\n",
            )
        self.branches.add(name)
        self.branch = name

    async def switch_branch(self, name: str) -> None:
        self._record("switch_branch", name)
        self.branch = name

    async def pull(self, remote: str, branch: str) -> None:
        self._record("pull", remote, branch)

    async def push(self, remote: str, branch: str, set_upstream: bool = True) -> None:
        self._record("push", remote, branch, str(set_upstream))

    async def remote_url(self, name: str = "origin") -> str:
        self._record("remote_url", name)
        if self.remote is None:
            raise ExternalToolError(
                f"リモート {name} のURLを取得できません",
                output=f"error: No such remote '{name}'\n",
            )
        return self.remote

    async def worktree_add(self, repo_path: str, new_branch: str, path: str) -> None:
        self._record("worktree_add", repo_path, new_branch, path)
        os.makedirs(path)
        self.branches.add(new_branch)

    async def worktree_list(self) -> list[WorktreeInfo]:
        self._record("worktree_list")
        return list(self.worktrees)
