"""設定管理モジュール。"""

import os
from pathlib import Path

from pydantic import ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings


def resolve_project_env_file(project_root: str | os.PathLike[str] | None) -> str | None:
    """指定した project_root から .env ファイルを解決する。

    Args:
        project_root: プロジェクトルートパス

    Returns:
        .env ファイルのパス（存在する場合）、または None
    """
    if not project_root:
        return None

    env_file = Path(project_root) / ".agenter" / ".env"
    if env_file.exists():
        return str(env_file)
    return None


def get_project_env_file() -> str | None:
    """プロジェクト別 .env ファイルのパスを取得。

    AGENTER_PROJECT_ROOT 環境変数が設定されている場合、
    {project_root}/.agenter/.env を返す。

    Returns:
        .env ファイルのパス（存在する場合）、または None
    """
    return resolve_project_env_file(os.getenv("AGENTER_PROJECT_ROOT"))


class Settings(BaseSettings):
    """agenter の設定。

    環境変数で上書き可能。プレフィックスは AGENTER_。
    例: AGENTER_UPSTREAM_BRANCH=develop

    優先順位:
    1. 環境変数（最優先）
    2. プロジェクト別 .env ファイル（{project}/.agenter/.env）
    3. デフォルト値
    """

    model_config = ConfigDict(
        env_prefix="AGENTER_",
        env_file=get_project_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # git 設定
    remote_name: str = Field(default="origin", description="push/pull に使うリモート名")
    """push・pull・PR URL 生成に使うリモート名"""

    upstream_branch: str = Field(default="main", description="ベースブランチ復帰時に取り込むブランチ")
    """worktree next でベースブランチに取り込む共有ブランチ"""

    github_host: str = Field(default="github.com", description="PR URL を生成するホスト")

    # AI CLI 設定
    agent_env_var: str = Field(default="WHO_AM_I", description="起動時にエージェント名を渡す環境変数")
    claude_command: str = Field(default="claude", description="PATH から探す Claude Code のコマンド名")
    claude_fallback_path: str = Field(
        default="~/.claude/local/claude",
        description="PATH に見つからない場合のインストール先",
    )

    # ログ設定
    log_level: str = Field(default="WARNING", description="CLI のログレベル")

    @field_validator("remote_name", "upstream_branch", "agent_env_var")
    @classmethod
    def validate_token(cls, value: str) -> str:
        """git やシェルへそのまま渡す値を空白を含まない単一トークンに制限する。"""
        candidate = value.strip()
        if not candidate:
            raise ValueError("空文字は許可されません")
        if any(ch.isspace() for ch in candidate):
            raise ValueError(f"空白を含む値は許可されません: {value!r}")
        return candidate

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """ログレベル名を正規化する。"""
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"不明なログレベルです: {value}")
        return level

    def resolved_claude_fallback_path(self) -> str:
        """~ を展開したフォールバックパスを返す。"""
        return os.path.expanduser(self.claude_fallback_path)


def load_settings_for_project(project_root: str | os.PathLike[str] | None) -> Settings:
    """指定 project_root の .env を優先して Settings を生成する。

    優先順位:
    1. プロセス環境変数 AGENTER_*
    2. {project_root}/.agenter/.env
    3. デフォルト値

    Args:
        project_root: プロジェクトルートパス

    Returns:
        読み込み済み Settings インスタンス
    """
    env_file = resolve_project_env_file(project_root)
    if env_file:
        return Settings(_env_file=env_file)
    # model_config 側の env_file を使わず、環境変数 + デフォルトのみで構築
    return Settings(_env_file=None)
