"""エージェントの識別。

エージェント名は固定の3名のみで、正規化（空白除去・大文字小文字の同一視）は行わない。
他のエージェントのディレクトリで起動すると会話履歴が混ざるため、
ディレクトリ名は毎回検証し直す。
"""

import os

from agenter.errors import IdentityError
from agenter.models.agent import ROSTER, AgentName, WorkspaceBinding
from agenter.naming import agent_suffix, infer_agent_from_worktree_dir


def validate_agent_name(name: str) -> AgentName:
    """エージェント名を検証する。

    Args:
        name: 外部から渡されたエージェント名

    Returns:
        AgentName

    Raises:
        IdentityError: 完全一致するエージェントがいない場合
    """
    for agent in ROSTER:
        if name == agent.value:
            return agent
    names = ", ".join(a.value for a in ROSTER)
    raise IdentityError(f"不明なエージェント名です: {name} ({names} のいずれかを指定してください)")


def ensure_in_agent_workspace(dir_name: str, agent: AgentName) -> None:
    """ディレクトリ名がエージェントのサフィックスで終わることを確認する。

    Raises:
        IdentityError: サフィックスが一致しない場合
    """
    expected = agent_suffix(agent)
    if not dir_name.endswith(expected):
        raise IdentityError(
            f"{agent.value} は '{expected}' で終わるディレクトリでのみ実行できます",
            hint=f"cd <repo>{expected} してから再実行してください",
        )


def bind_workspace(path: str) -> WorkspaceBinding:
    """パスからワークスペースとエージェントの対応を導出する。"""
    dir_name = os.path.basename(os.path.normpath(path))
    try:
        agent = infer_agent_from_worktree_dir(dir_name)
    except IdentityError:
        agent = None
    return WorkspaceBinding(dir_name=dir_name, agent=agent)


def resolve_agent(path: str) -> AgentName:
    """パスのディレクトリ名からエージェントを確定する。

    Raises:
        IdentityError: エージェントのworktreeディレクトリでない場合
    """
    return infer_agent_from_worktree_dir(os.path.basename(os.path.normpath(path)))
