"""worktree パスとブランチ名の命名規則。

I/O を伴わない純粋関数のみ。

- worktree: <リポジトリの親>/<リポジトリ名>-<agent>
- ベースブランチ: <agent>-worktree
- トピックブランチ: <agent>-worktree-<topic>
"""

import os

from agenter.errors import IdentityError
from agenter.models.agent import ROSTER, AgentName, BranchState

BASE_BRANCH_SUFFIX = "-worktree"


def agent_suffix(agent: AgentName) -> str:
    """エージェントのディレクトリ名サフィックス（例: -forge）を返す。"""
    return f"-{agent.value}"


def worktree_path(repo_parent_dir: str, repo_base_name: str, agent: AgentName) -> str:
    """エージェントの worktree パスを返す。

    Args:
        repo_parent_dir: メインリポジトリの親ディレクトリ
        repo_base_name: メインリポジトリのディレクトリ名
        agent: エージェント名

    Returns:
        worktreeのパス
    """
    return os.path.join(repo_parent_dir, f"{repo_base_name}{agent_suffix(agent)}")


def worktree_paths_for_repo(repo_path: str) -> dict[AgentName, str]:
    """リポジトリの全エージェント分の worktree パスを返す。"""
    repo_path = os.path.normpath(repo_path)
    parent = os.path.dirname(repo_path)
    name = os.path.basename(repo_path)
    return {agent: worktree_path(parent, name, agent) for agent in ROSTER}


def base_branch(agent: AgentName) -> str:
    """エージェントのベースブランチ名を返す。"""
    return f"{agent.value}{BASE_BRANCH_SUFFIX}"


def topic_branch(agent: AgentName, topic: str) -> str:
    """エージェントのトピックブランチ名を返す。

    Raises:
        ValueError: topic が空の場合
    """
    if not topic:
        raise ValueError("トピック名は空にできません")
    return f"{base_branch(agent)}-{topic}"


def infer_agent_from_worktree_dir(dir_base_name: str) -> AgentName:
    """ディレクトリ名のサフィックスからエージェントを推定する。

    Args:
        dir_base_name: ディレクトリのベース名

    Returns:
        最初にサフィックスが一致したエージェント

    Raises:
        IdentityError: どのエージェントにも一致しない場合
    """
    for agent in ROSTER:
        if dir_base_name.endswith(agent_suffix(agent)):
            return agent
    raise IdentityError(
        f"エージェントのworktreeディレクトリではありません: {dir_base_name}",
        hint="'agenter setup <repository>' で作成した <repo>-forge などのディレクトリで実行してください",
    )


def classify_branch(branch: str, agent: AgentName) -> BranchState:
    """現在のブランチがエージェントにとってどの状態かを判定する。"""
    base = base_branch(agent)
    if branch == base:
        return BranchState.BASE
    prefix = f"{base}-"
    if branch.startswith(prefix) and len(branch) > len(prefix):
        return BranchState.TOPIC
    return BranchState.UNMANAGED


def topic_of(branch: str, agent: AgentName) -> str | None:
    """トピックブランチ名からトピック部分を取り出す。トピックでなければ None。"""
    if classify_branch(branch, agent) != BranchState.TOPIC:
        return None
    return branch[len(base_branch(agent)) + 1 :]
