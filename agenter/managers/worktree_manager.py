"""エージェント worktree のブランチ遷移を管理するモジュール。

各エージェントの worktree は次のいずれかの状態にある:
- base: <agent>-worktree 上
- topic: <agent>-worktree-<topic> 上
- unmanaged: 命名規則外のブランチ上

エージェントは呼び出しのたびに作業ディレクトリ名から導出し直す。
"""

import logging
import os
from collections.abc import AsyncIterator

from agenter.config.settings import Settings
from agenter.errors import (
    DirtyWorkingTreeError,
    ExternalToolError,
    IdentityError,
    PreconditionError,
)
from agenter.identity import resolve_agent
from agenter.managers.git_client import GitClient
from agenter.managers.prerequisite_manager import has_git_repository
from agenter.models.agent import ROSTER, AgentName, BranchState
from agenter.models.workspace import (
    AgentWorktree,
    PushResult,
    ReturnResult,
    TopicResult,
    WorktreeCreation,
)
from agenter.naming import (
    base_branch,
    classify_branch,
    infer_agent_from_worktree_dir,
    topic_branch,
    worktree_paths_for_repo,
)
from agenter.remote import derive_pull_request_url

logger = logging.getLogger(__name__)

NEXT_HINT = "'agenter worktree next' でベースブランチへ戻ってください"
MAKE_HINT = "'agenter worktree make <topic>' でトピックブランチを作成してください"


class WorktreeManager:
    """エージェント worktree のブランチ遷移を管理するクラス。"""

    def __init__(
        self,
        workdir: str,
        settings: Settings | None = None,
        git: GitClient | None = None,
    ) -> None:
        """WorktreeManagerを初期化する。

        Args:
            workdir: 呼び出し元の作業ディレクトリ
            settings: アプリケーション設定（省略時は環境変数から読み込む）
            git: gitクライアント（省略時は workdir で実行する GitClient）
        """
        self.workdir = workdir
        self.settings = settings or Settings()
        self.git = git or GitClient(workdir)

    def _resolve_agent(self) -> AgentName:
        return resolve_agent(self.workdir)

    async def get_state(self) -> tuple[AgentName, str, BranchState]:
        """現在のエージェント・ブランチ・状態を取得する。"""
        agent = self._resolve_agent()
        current = await self.git.current_branch()
        return agent, current, classify_branch(current, agent)

    async def make_topic(self, topic: str) -> TopicResult:
        """ベースブランチからトピックブランチを作成して切り替える。

        Args:
            topic: トピック名（空文字不可）

        Returns:
            TopicResult

        Raises:
            IdentityError: エージェントのworktreeでない場合
            PreconditionError: ベースブランチ上にいない場合
            ExternalToolError: ブランチ作成に失敗した場合（同名ブランチが既にある場合を含む）
        """
        agent = self._resolve_agent()
        self._ensure_topic_name(topic)
        current = await self.git.current_branch()
        return await self._make_topic(agent, current, topic)

    async def _make_topic(self, agent: AgentName, current: str, topic: str) -> TopicResult:
        base = base_branch(agent)
        state = classify_branch(current, agent)
        if state == BranchState.TOPIC:
            raise PreconditionError(
                f"トピックブランチで作業中です: {current}"
                "（現在のトピックを完了または破棄してください）",
                hint=NEXT_HINT,
            )
        if state == BranchState.UNMANAGED:
            raise PreconditionError(
                f"{base} 以外のブランチにいます: {current}",
                hint=NEXT_HINT,
            )

        branch = topic_branch(agent, topic)
        await self.git.create_and_switch_branch(branch)
        logger.info(f"トピックブランチを作成しました: {branch}")
        return TopicResult(agent=agent, topic=topic, branch=branch)

    @staticmethod
    def _ensure_topic_name(topic: str) -> None:
        if not topic:
            raise PreconditionError("トピック名を指定してください", hint=MAKE_HINT)

    async def return_to_base(self, next_topic: str | None = None) -> ReturnResult:
        """ベースブランチへ戻り、必要なら次のトピックを作成する。

        ベースブランチ上で next_topic を指定した場合は make_topic と同じ動作になる。
        上流ブランチの取り込み失敗は警告として扱い、遷移は成功とする。

        Args:
            next_topic: 続けて作成するトピック名（省略可）

        Returns:
            ReturnResult

        Raises:
            IdentityError: エージェントのworktreeでない場合
            DirtyWorkingTreeError: 未コミットの変更がある場合（ブランチは切り替えない）
            ExternalToolError: ブランチ切り替えやトピック作成に失敗した場合
        """
        agent = self._resolve_agent()
        base = base_branch(agent)
        current = await self.git.current_branch()

        if current == base and next_topic:
            topic = await self._make_topic(agent, current, next_topic)
            return ReturnResult(agent=agent, base_branch=base, topic=topic)

        entries = await self.git.status_porcelain()
        if entries:
            raise DirtyWorkingTreeError(
                entries,
                hint="変更をコミットまたは stash してからブランチを切り替えてください",
            )

        await self.git.switch_branch(base)
        logger.info(f"ベースブランチに戻りました: {base}")
        result = ReturnResult(agent=agent, base_branch=base, switched=True)

        remote = self.settings.remote_name
        upstream = self.settings.upstream_branch
        try:
            await self.git.pull(remote, upstream)
            result.synced = True
        except ExternalToolError as e:
            logger.warning(f"{remote}/{upstream} の取り込みに失敗しました: {e.output.strip()}")
            result.warnings.append(f"{remote}/{upstream} を取り込めませんでした: {e.output.strip()}")

        if next_topic:
            result.topic = await self._make_topic(agent, base, next_topic)

        return result

    async def push_topic(self) -> PushResult:
        """現在のトピックブランチを上流設定付きで push する。

        PR 作成 URL は取得できた場合のみ付与する。

        Returns:
            PushResult

        Raises:
            IdentityError: エージェントのworktreeでない場合
            PreconditionError: トピックブランチ上にいない場合（push は行わない）
            ExternalToolError: push に失敗した場合
        """
        agent = self._resolve_agent()
        current = await self.git.current_branch()
        state = classify_branch(current, agent)
        if state == BranchState.BASE:
            raise PreconditionError("pushするトピックがありません", hint=MAKE_HINT)
        if state == BranchState.UNMANAGED:
            raise PreconditionError(
                f"{current} は {agent.value} のトピックブランチではありません",
                hint=NEXT_HINT,
            )

        remote = self.settings.remote_name
        await self.git.push(remote, current, set_upstream=True)
        logger.info(f"pushしました: {remote} {current}")

        result = PushResult(branch=current, remote=remote)
        try:
            remote_url = await self.git.remote_url(remote)
        except ExternalToolError as e:
            logger.warning(f"リモートURLを取得できませんでした: {e.output.strip()}")
            return result

        result.pr_url = derive_pull_request_url(remote_url, current, self.settings.github_host)
        return result

    async def list_agent_worktrees(self) -> list[AgentWorktree]:
        """エージェントの命名規則に一致する worktree 一覧を取得する。

        Returns:
            AgentWorktree のリスト（エージェントの固定順、同じエージェントはパス順）
        """
        agent_worktrees: list[AgentWorktree] = []
        for wt in await self.git.worktree_list():
            dir_name = os.path.basename(os.path.normpath(wt.path))
            try:
                agent = infer_agent_from_worktree_dir(dir_name)
            except IdentityError:
                continue
            agent_worktrees.append(
                AgentWorktree(agent=agent, path=wt.path, branch=wt.branch)
            )
        agent_worktrees.sort(key=lambda wt: (ROSTER.index(wt.agent), wt.path))
        return agent_worktrees

    async def iter_create_all_worktrees(
        self, repo_path: str
    ) -> AsyncIterator[WorktreeCreation]:
        """全エージェントの worktree を順に作成する。

        既に存在するパスはスキップするため、何度実行しても同じ結果になる。
        途中で失敗した場合は残りを作成せずに例外を送出する。

        Args:
            repo_path: メインリポジトリのパス（~ 展開あり）

        Yields:
            エージェントごとの WorktreeCreation

        Raises:
            PreconditionError: repo_path がgitリポジトリでない場合
            ExternalToolError: worktree 作成に失敗した場合
        """
        repo_path = os.path.abspath(os.path.expanduser(repo_path))
        if not has_git_repository(repo_path):
            raise PreconditionError(f"{repo_path} はgitリポジトリではありません")

        paths = worktree_paths_for_repo(repo_path)
        for agent in ROSTER:
            path = paths[agent]
            branch = base_branch(agent)

            if os.path.exists(path):
                logger.info(f"worktreeは既に存在します: {path}")
                yield WorktreeCreation(agent=agent, path=path, branch=branch, created=False)
                continue

            await self.git.worktree_add(repo_path, branch, path)
            logger.info(f"worktreeを作成しました: {path} ({branch})")
            yield WorktreeCreation(agent=agent, path=path, branch=branch, created=True)

    async def create_all_worktrees(self, repo_path: str) -> list[WorktreeCreation]:
        """全エージェントの worktree を作成し、結果をまとめて返す。"""
        return [c async for c in self.iter_create_all_worktrees(repo_path)]
