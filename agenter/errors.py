"""agenter の例外定義。

- IdentityError: エージェント名やディレクトリの不一致（git 呼び出し前に検出）
- PreconditionError: 状態遷移の前提条件違反（git 呼び出し前に検出）
- DirtyWorkingTreeError: 未コミットの変更によりベースブランチへ戻れない
- ExternalToolError: git / gh / claude が見つからない、または失敗した
"""


class AgenterError(Exception):
    """agenter の基底例外。

    Attributes:
        message: エラーメッセージ
        hint: 代わりに実行すべきコマンドなどの補足（省略可）
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class IdentityError(AgenterError):
    """不明なエージェント名、またはディレクトリとエージェントの不一致。"""


class PreconditionError(AgenterError):
    """現在のブランチ状態では要求された遷移を実行できない。"""


class DirtyWorkingTreeError(AgenterError):
    """未コミットの変更があるためブランチを切り替えられない。"""

    def __init__(self, entries: list[str], hint: str | None = None) -> None:
        super().__init__("未コミットの変更があります", hint)
        self.entries = entries


class ExternalToolError(AgenterError):
    """外部コマンドが存在しない、または非ゼロで終了した。

    Attributes:
        command: 実行したコマンドと引数
        output: コマンドの出力（加工せずそのまま保持）
    """

    def __init__(
        self,
        message: str,
        command: list[str] | None = None,
        output: str = "",
        hint: str | None = None,
    ) -> None:
        super().__init__(f"{message}: {output.rstrip()}" if output.strip() else message, hint)
        self.command = command or []
        self.output = output
