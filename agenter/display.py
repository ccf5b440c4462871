"""ターミナル出力の整形。"""

import os

from rich.console import Console
from rich.text import Text

console = Console(highlight=False)

AGENT_COLORS: dict[str, str] = {
    "forge": "red",
    "axiom": "blue",
    "jarvis": "green",
}


def print_success(message: str) -> None:
    console.print(Text(f"✓ {message}", style="green"))


def print_error(message: str) -> None:
    console.print(Text(f"✗ {message}", style="red"))


def print_warning(message: str) -> None:
    console.print(Text(f"⚠️  {message}", style="yellow"))


def print_info(message: str) -> None:
    console.print(Text(f"ℹ {message}", style="cyan"))


def print_bold(message: str) -> None:
    console.print(Text(message, style="bold"))


def print_plain(message: str | Text = "") -> None:
    console.print(Text(message) if isinstance(message, str) else message)


def print_header(text: str) -> None:
    """セクション見出しを出力する。"""
    console.print()
    console.print(Text(f"=== {text} ===", style="bold"))
    console.print()


def print_step(step: int, total: int, text: str) -> None:
    console.print(Text(f"[{step}/{total}] {text}"))


def agent_text(agent: str) -> Text:
    """エージェント名を色付きで返す。未知の名前は装飾しない。"""
    return Text(agent, style=AGENT_COLORS.get(agent, ""))


def format_path(path: str) -> str:
    """ホームディレクトリ配下のパスを ~ で短縮する。

    HOME が空または / の場合、およびホームと前方一致するだけの兄弟パス
    （HOME=/Users/test に対する /Users/testing など）はそのまま返す。
    """
    home = os.environ.get("HOME", "")
    if not home or home == "/" or not path.startswith(home.rstrip("/")):
        return path

    home = home.rstrip("/")
    after = path[len(home) :]
    if after == "":
        return "~"
    if not after.startswith("/"):
        return path
    return "~" + after
