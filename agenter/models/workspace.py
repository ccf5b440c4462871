"""ワークスペース・Worktreeモデル定義。"""

from pydantic import BaseModel, Field

from agenter.models.agent import AgentName


class WorktreeInfo(BaseModel):
    """git worktree 情報。"""

    path: str = Field(description="worktreeのパス")
    branch: str = Field(default="", description="ブランチ名")
    commit: str = Field(default="", description="現在のコミットハッシュ")
    is_bare: bool = Field(default=False, description="bareリポジトリかどうか")
    is_detached: bool = Field(default=False, description="detached HEADかどうか")


class AgentWorktree(BaseModel):
    """エージェントに対応する worktree。"""

    agent: AgentName = Field(description="エージェント名")
    path: str = Field(description="worktreeのパス")
    branch: str = Field(description="チェックアウト中のブランチ")


class WorktreeCreation(BaseModel):
    """エージェント worktree の作成結果。"""

    agent: AgentName = Field(description="エージェント名")
    path: str = Field(description="worktreeのパス")
    branch: str = Field(description="ベースブランチ名")
    created: bool = Field(description="今回作成したか（既存ならFalse）")


class TopicResult(BaseModel):
    """トピックブランチ作成の結果。"""

    agent: AgentName = Field(description="エージェント名")
    topic: str = Field(description="トピック名")
    branch: str = Field(description="作成したトピックブランチ")


class ReturnResult(BaseModel):
    """ベースブランチ復帰の結果。"""

    agent: AgentName = Field(description="エージェント名")
    base_branch: str = Field(description="ベースブランチ名")
    switched: bool = Field(default=False, description="ベースブランチへ切り替えたか")
    synced: bool = Field(default=False, description="上流の取り込みに成功したか")
    warnings: list[str] = Field(default_factory=list, description="処理を止めなかった警告")
    topic: TopicResult | None = Field(default=None, description="続けて作成したトピック")


class PushResult(BaseModel):
    """トピックブランチ push の結果。"""

    branch: str = Field(description="pushしたブランチ")
    remote: str = Field(description="push先リモート")
    pr_url: str | None = Field(default=None, description="PR作成URL（生成できない場合None）")
