"""アプリケーションコンテキストの定義。"""

from dataclasses import dataclass

from agenter.config.settings import Settings
from agenter.managers.ai_cli_manager import AiCliManager


@dataclass
class AppContext:
    """MCP サーバーのアプリケーションコンテキスト。

    workdir はサーバーを起動したディレクトリで、
    エージェントはツール呼び出しのたびにこの名前から導出し直す。
    """

    settings: Settings
    ai_cli: AiCliManager
    workdir: str
