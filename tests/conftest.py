"""pytest設定とフィクスチャ。"""

import subprocess
import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from agenter.config.settings import Settings
from agenter.context import AppContext
from agenter.managers.ai_cli_manager import AiCliManager
from tests.fakes import FakeGitClient

GIT_IDENTITY = ["-c", "user.name=agenter-test", "-c", "user.email=agenter-test@example.com"]


def run_git(*args: str, cwd: Path | str) -> str:
    """テスト用に git を実行し、stdout を返す。"""
    result = subprocess.run(
        ["git", *GIT_IDENTITY, *args],
        cwd=str(cwd),
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


def get_tool_fn(mcp, name: str):
    """FastMCP に登録したツールの関数を取得する。"""
    for tool in mcp._tool_manager._tools.values():
        if tool.name == name:
            return tool.fn
    raise KeyError(name)


@pytest.fixture
def temp_dir():
    """一時ディレクトリを作成する。"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def settings(monkeypatch):
    """テスト用の設定を作成する。"""
    for name in ("AGENTER_REMOTE_NAME", "AGENTER_UPSTREAM_BRANCH", "AGENTER_AGENT_ENV_VAR"):
        monkeypatch.delenv(name, raising=False)
    return Settings(_env_file=None)


@pytest.fixture
def agent_dir(temp_dir):
    """forge の worktree に見えるディレクトリを作成する。"""
    path = temp_dir / "myapp-forge"
    path.mkdir()
    return path


@pytest.fixture
def fake_git():
    """呼び出しを記録する git クライアントを作成する。"""
    return FakeGitClient()


@pytest.fixture
def git_repo(temp_dir):
    """テスト用のgitリポジトリ（main ブランチ、空コミット1つ）を作成する。"""
    repo_path = temp_dir / "myapp"
    repo_path.mkdir()
    run_git("init", cwd=repo_path)
    run_git("symbolic-ref", "HEAD", "refs/heads/main", cwd=repo_path)
    run_git("commit", "--allow-empty", "-m", "init", cwd=repo_path)
    return repo_path


@pytest.fixture
def mock_mcp_context(settings, git_repo):
    """MCPツールのContextをモックする（作業ディレクトリはメインリポジトリ）。"""
    app_ctx = AppContext(settings=settings, ai_cli=AiCliManager(settings), workdir=str(git_repo))
    mock_ctx = MagicMock()
    mock_ctx.request_context.lifespan_context = app_ctx
    return mock_ctx
