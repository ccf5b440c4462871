"""設定モジュール。"""

from .settings import Settings, load_settings_for_project

__all__ = [
    "Settings",
    "load_settings_for_project",
]
