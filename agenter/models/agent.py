"""エージェントモデル定義。"""

from enum import Enum

from pydantic import BaseModel, Field


class AgentName(str, Enum):
    """エージェント名。固定の3名のみ。"""

    FORGE = "forge"
    AXIOM = "axiom"
    JARVIS = "jarvis"


ROSTER: tuple[AgentName, ...] = (AgentName.FORGE, AgentName.AXIOM, AgentName.JARVIS)
"""エージェントの走査順（エラーメッセージを安定させるため固定）"""


class BranchState(str, Enum):
    """エージェントworktreeのブランチ状態。"""

    BASE = "base"
    """ベースブランチ（<agent>-worktree）上"""

    TOPIC = "topic"
    """トピックブランチ（<agent>-worktree-<topic>）上"""

    UNMANAGED = "unmanaged"
    """命名規則外のブランチ上"""


class WorkspaceBinding(BaseModel):
    """ディレクトリとエージェントの対応。

    コマンド実行のたびに作業ディレクトリ名から導出し直す。
    """

    dir_name: str = Field(description="ディレクトリのベース名")
    agent: AgentName | None = Field(default=None, description="推定されたエージェント")

    @property
    def is_bound(self) -> bool:
        """いずれかのエージェントに対応しているか。"""
        return self.agent is not None
