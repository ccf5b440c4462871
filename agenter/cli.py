"""agenter CLI エントリーポイント。

複数の Claude Code を git worktree で分離して並行実行するためのコマンド群。
"""

import asyncio
import logging
import os
from collections.abc import Coroutine
from pathlib import Path
from typing import Any, TypeVar

import typer
from rich.text import Text

from agenter import __version__
from agenter.config.settings import Settings
from agenter.display import (
    agent_text,
    format_path,
    print_bold,
    print_error,
    print_header,
    print_info,
    print_plain,
    print_step,
    print_success,
    print_warning,
)
from agenter.errors import AgenterError, DirtyWorkingTreeError, ExternalToolError
from agenter.identity import ensure_in_agent_workspace, validate_agent_name
from agenter.managers.ai_cli_manager import AiCliManager
from agenter.managers.prerequisite_manager import PrerequisiteManager, has_git_repository
from agenter.managers.worktree_manager import WorktreeManager
from agenter.models.agent import ROSTER
from agenter.naming import worktree_paths_for_repo

logger = logging.getLogger(__name__)

T = TypeVar("T")

app = typer.Typer(
    name="agenter",
    help="Multi-agent orchestration for Claude. "
    "git worktree で分離した複数の Claude Code を並行して動かします。",
    add_completion=False,
    no_args_is_help=True,
)
worktree_app = typer.Typer(help="Git worktree management", no_args_is_help=True)
app.add_typer(worktree_app, name="worktree")


def _version_callback(value: bool) -> None:
    if value:
        print_plain(f"agenter version {__version__}")
        raise typer.Exit()


@app.callback()
def root(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug logging"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version"
    ),
) -> None:
    """Agenter helps you run multiple Claude Code instances in parallel with isolated contexts."""
    settings = Settings()
    level = settings.log_level
    if verbose:
        level = "INFO"
    if debug:
        level = "DEBUG"
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    ctx.obj = settings


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj if isinstance(ctx.obj, Settings) else Settings()


def _run(coro: Coroutine[Any, Any, T], failure: str) -> T:
    """コルーチンを実行し、AgenterError を表示して終了コード1で抜ける。"""
    try:
        return asyncio.run(coro)
    except AgenterError as e:
        _report(e, failure)
        raise typer.Exit(1) from e


def _report(error: AgenterError, failure: str) -> None:
    if isinstance(error, DirtyWorkingTreeError):
        print_warning("未コミットの変更があります")
        for entry in error.entries:
            print_plain(f"  {entry}")
    # ExternalToolError のメッセージは失敗した操作名を既に含む
    if isinstance(error, ExternalToolError):
        print_error(error.message)
    else:
        print_error(f"{failure}: {error.message}")
    if error.hint:
        print_info(error.hint)


# ========== 前提チェック ==========


async def _run_checks(settings: Settings) -> bool:
    """前提ツールを順に確認する。必須項目で失敗した時点で False を返す。"""
    prerequisites = PrerequisiteManager(settings)
    print_header("Checking Tools")

    print_step(1, 4, "Claude Code のインストールを確認しています...")
    try:
        prerequisites.check_claude()
    except ExternalToolError as e:
        _report(e, "Claude Code が見つかりません")
        return False
    print_success("Claude Code はインストール済みです")

    print_step(2, 4, "Git のインストールを確認しています...")
    try:
        await prerequisites.check_git()
    except ExternalToolError as e:
        _report(e, "Git が見つかりません")
        return False
    print_success("Git は worktree に対応しています")

    print_step(3, 4, "GitHub CLI を確認しています...")
    try:
        await prerequisites.check_github_cli()
    except ExternalToolError as e:
        _report(e, "GitHub CLI の問題")
        return False
    print_success("GitHub CLI はインストール・認証済みです")

    print_step(4, 4, "カレントディレクトリを確認しています...")
    if has_git_repository(os.getcwd()):
        print_success("カレントディレクトリは git リポジトリです")
    else:
        print_info("カレントディレクトリは git リポジトリではありません")

    print_plain()
    print_success("すべてのチェックに合格しました")
    return True


@app.command()
def check(ctx: typer.Context) -> None:
    """Validate prerequisites."""
    if not asyncio.run(_run_checks(_settings(ctx))):
        raise typer.Exit(1)


@app.command()
def init(ctx: typer.Context) -> None:
    """Interactive first-time setup."""
    print_bold(f"Welcome to Agenter v{__version__} - Multi-Agent Claude Orchestration")
    print_plain()

    if not asyncio.run(_run_checks(_settings(ctx))):
        print_plain()
        print_error("不足しているツールがあります。インストールしてから再実行してください")
        raise typer.Exit(1)

    print_plain()
    print_step(1, 2, "Claude の設定を確認しています...")
    claude_md = Path.home() / ".claude" / "CLAUDE.md"
    if claude_md.exists():
        print_success(f"Claude の設定が見つかりました: {format_path(str(claude_md))}")
    else:
        print_info(f"Claude の設定が見つかりません: {format_path(str(claude_md))}")
        print_info("CLAUDE.md を ~/.claude/ に配置してください")

    print_plain()
    print_step(2, 2, "次のステップ")
    print_info("1. 'agenter setup <repository>' でリポジトリを設定します")
    print_info("2. 'agenter launch <agent>' でエージェントを起動します")
    print_info("3. git の作業は 'agenter worktree' コマンドで行います")

    print_plain()
    print_success("セットアップが完了しました")


# ========== セットアップ / 起動 ==========


async def _setup(settings: Settings, repo_path: str) -> None:
    abs_path = os.path.abspath(os.path.expanduser(repo_path))
    manager = WorktreeManager(abs_path, settings=settings)

    print_header(f"{os.path.basename(abs_path)} をマルチエージェント開発用に設定します")
    total = len(ROSTER)
    step = 0
    async for creation in manager.iter_create_all_worktrees(abs_path):
        step += 1
        print_step(step, total, f"{creation.agent.value} の worktree")
        if creation.created:
            print_success(f"作成しました: {format_path(creation.path)}")
        else:
            print_warning(f"worktree は既に存在します: {format_path(creation.path)}")

    print_plain()
    print_bold("準備完了です。次のコマンドでエージェントを起動してください:")
    for agent, path in worktree_paths_for_repo(abs_path).items():
        line = Text(f"  cd {format_path(path)} && agenter launch ")
        line.append_text(agent_text(agent.value))
        print_plain(line)


@app.command()
def setup(
    ctx: typer.Context,
    repository: str = typer.Argument(..., help="Repository path"),
) -> None:
    """Create worktrees for a repository."""
    _run(_setup(_settings(ctx), repository), "セットアップに失敗しました")


@app.command()
def launch(
    ctx: typer.Context,
    agent: str = typer.Argument(..., help="forge, axiom, or jarvis"),
) -> None:
    """Launch agent with sandboxing."""
    ai_cli = AiCliManager(_settings(ctx))
    cwd = os.getcwd()
    try:
        name = validate_agent_name(agent)
        ensure_in_agent_workspace(os.path.basename(cwd), name)
        print_success(f"Claude を {name.value} として起動します...")
        code = ai_cli.launch(agent, cwd)
    except AgenterError as e:
        _report(e, "起動に失敗しました")
        raise typer.Exit(1) from e
    raise typer.Exit(code)


# ========== worktree ==========


@worktree_app.command("make")
def worktree_make(
    ctx: typer.Context,
    topic: str = typer.Argument(..., help="Topic name"),
) -> None:
    """Create topic branch."""
    manager = WorktreeManager(os.getcwd(), settings=_settings(ctx))
    result = _run(manager.make_topic(topic), "トピックを作成できません")
    print_success(f"トピックブランチを作成しました: {result.branch}")
    print_info(f"作業中のトピック: {result.topic}")


@worktree_app.command("push")
def worktree_push(ctx: typer.Context) -> None:
    """Push topic, get PR URL."""
    manager = WorktreeManager(os.getcwd(), settings=_settings(ctx))
    result = _run(manager.push_topic(), "pushできません")
    print_success(f"ブランチをpushしました: {result.branch}")
    if result.pr_url:
        print_plain()
        print_bold("PR を作成:")
        print_plain(result.pr_url)


@worktree_app.command("next")
def worktree_next(
    ctx: typer.Context,
    topic: str | None = typer.Argument(None, help="Next topic name"),
) -> None:
    """Return to base, start new topic."""
    manager = WorktreeManager(os.getcwd(), settings=_settings(ctx))
    result = _run(manager.return_to_base(topic), "ベースブランチに戻れません")

    if result.switched:
        print_success(f"ベースブランチに戻りました: {result.base_branch}")
        for warning in result.warnings:
            print_warning(warning)
    if result.topic:
        print_success(f"トピックブランチを作成しました: {result.topic.branch}")
        print_info(f"作業中のトピック: {result.topic.topic}")
    else:
        print_info("次のトピックは 'agenter worktree make <topic>' で開始できます")


@worktree_app.command("list")
def worktree_list(ctx: typer.Context) -> None:
    """List agent worktrees."""
    manager = WorktreeManager(os.getcwd(), settings=_settings(ctx))
    worktrees = _run(manager.list_agent_worktrees(), "worktree一覧を取得できません")

    print_header("Agent Worktrees")
    if not worktrees:
        print_info("エージェントの worktree が見つかりません")
        print_info("'agenter setup <repository>' で作成してください")
        return

    for wt in worktrees:
        line = Text("  ")
        line.append_text(agent_text(wt.agent.value))
        line.append(f": {format_path(wt.path)} [{wt.branch or 'detached'}]")
        print_plain(line)


@worktree_app.command("create")
def worktree_create(ctx: typer.Context) -> None:
    """Create agent worktrees."""
    _run(_setup(_settings(ctx), os.getcwd()), "worktree を作成できません")


def main() -> None:
    """CLI を起動する。"""
    app()


if __name__ == "__main__":
    main()
