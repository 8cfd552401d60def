"""
どこで: `common.settings`
何を: 時計ランナーの環境変数を型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_int, env_str

DEFAULT_CLOCK_FPS = 8


@dataclass
class _Settings:
    # 更新レート（全時計で共有する 1 本のタイマー）
    CLOCK_FPS: int = DEFAULT_CLOCK_FPS

    # 診断: True なら警告を例外として送出する
    STRICT_DIAGNOSTICS: bool = False

    # Misc
    LOG_LEVEL: str = "INFO"


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - bool は `env_bool`、int は `env_int` を使用。
    - fps は 1 以上に丸める。
    """
    _settings.CLOCK_FPS = env_int("PXC_CLOCK_FPS", DEFAULT_CLOCK_FPS, min_value=1) or 1
    _settings.STRICT_DIAGNOSTICS = env_bool("PXC_STRICT_DIAGNOSTICS", False)
    _settings.LOG_LEVEL = env_str("PXC_LOG_LEVEL", "INFO").upper()


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings", "DEFAULT_CLOCK_FPS"]
