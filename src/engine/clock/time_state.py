"""
どこで: `engine.clock` の時計状態。
何を: タイムゾーンオフセット・ユーザ補正（時/分）・12/24 時間表記・編集モード・ライトを保持し、
      任意時刻の表示文字列 `HH:MM'SS"` を計算する `ClockTimeState`。
なぜ: 表示の時刻演算を描画面から切り離し、決定的にテストできるようにするため。

表示計算（`compute_display`）:
1) 観測者のローカル時刻（分）+ ローカルのタイムゾーン補正 + 時計の UTC オフセット を
   1 日の分数 `day_minutes` とし、[0, 1440) に正規化する（日付を跨ぐケースを吸収）。
2) 時 = `(day_minutes // 60 + user_hour_offset) % 24`。
3) 12 時間表記では 0–11 を AM（0 は 12）、12–23 を PM（13 以上は -12）。
4) 分 = `(day_minutes % 60 + user_minute_offset) % 60`。
5) 秒は `now_utc_millis` の壁時計の秒をそのまま使う（オフセット演算の影響を受けない）。

編集モード:
    NONE --cycle--> HOUR --cycle--> MINUTE --cycle--> NONE
- HOUR で increase → 時補正 +1（mod 24）、MINUTE で increase → 分補正 +1（mod 60）、NONE では何もしない。
- reset は編集モードに関係なく両補正を 0 にする。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

MINUTES_PER_DAY = 24 * 60
LIGHT_ON_COLOR = "turquoise"
LIGHT_OFF_COLOR = "transparent"


class EditMode(IntEnum):
    NONE = 0
    HOUR = 1
    MINUTE = 2

    def next(self) -> "EditMode":
        return EditMode((int(self) + 1) % len(EditMode))


def combine_utc_offset(hour_offset: int, minute_offset: int) -> int:
    """時/分オフセットを分へ合成する。分は時の符号に従う（時が 0 のときは正）。"""
    base = int(hour_offset) * 60
    sign = -1 if base < 0 else 1
    return base + sign * int(minute_offset)


def format_utc_offset(utc_offset_minutes: int) -> str:
    """`570 -> "GMT+09:30"`, `-210 -> "GMT-03:30"`。"""
    sign = "-" if utc_offset_minutes < 0 else "+"
    hours, minutes = divmod(abs(int(utc_offset_minutes)), 60)
    return f"GMT{sign}{hours:02d}:{minutes:02d}"


def display_hours(hours: int, twelve_hour: bool) -> tuple[int, str]:
    """0..23 の時を表示用の (時, 接尾辞) に変換する。"""
    hours %= 24
    if not twelve_hour:
        return hours, ""
    if hours < 12:
        return (12 if hours == 0 else hours), " AM"
    return (hours - 12 if hours > 12 else hours), " PM"


@dataclass
class ClockTimeState:
    utc_offset_minutes: int = 0
    edit_mode: EditMode = EditMode.NONE
    user_hour_offset: int = 0
    user_minute_offset: int = 0
    is_12_hour_format: bool = False
    light_on: bool = False

    def __post_init__(self) -> None:
        self.utc_offset_minutes = int(self.utc_offset_minutes)
        self.edit_mode = EditMode(self.edit_mode)
        self.user_hour_offset = int(self.user_hour_offset) % 24
        self.user_minute_offset = int(self.user_minute_offset) % 60

    # ---- 表示 -----------------------------------------------------------
    def day_minutes(self, now_utc_millis: int, local_utc_offset_minutes: int) -> int:
        """時計のタイムゾーンにおける 1 日の経過分 [0, 1440)。"""
        utc_minutes = int(now_utc_millis) // 60_000
        # 観測者のローカル時刻（分）
        local_day_minutes = (utc_minutes + int(local_utc_offset_minutes)) % MINUTES_PER_DAY
        day = local_day_minutes - int(local_utc_offset_minutes) + self.utc_offset_minutes
        return day % MINUTES_PER_DAY

    def compute_display(self, now_utc_millis: int, local_utc_offset_minutes: int = 0) -> str:
        """`HH:MM'SS"`（12 時間表記では ` AM`/` PM` 付き）を返す。"""
        day = self.day_minutes(now_utc_millis, local_utc_offset_minutes)
        hours, suffix = display_hours(day // 60 + self.user_hour_offset, self.is_12_hour_format)
        minutes = (day % 60 + self.user_minute_offset) % 60
        seconds = (int(now_utc_millis) // 1000) % 60
        return f"{hours:02d}:{minutes:02d}'{seconds:02d}\"{suffix}"

    @property
    def timezone_label(self) -> str:
        return format_utc_offset(self.utc_offset_minutes)

    @property
    def light_color(self) -> str:
        return LIGHT_ON_COLOR if self.light_on else LIGHT_OFF_COLOR

    # ---- 操作 -----------------------------------------------------------
    def cycle_edit_mode(self) -> EditMode:
        self.edit_mode = self.edit_mode.next()
        return self.edit_mode

    def apply_increase(self) -> bool:
        """編集中の補正を 1 進める。表示が変わる場合 True。"""
        if self.edit_mode is EditMode.HOUR:
            self.user_hour_offset = (self.user_hour_offset + 1) % 24
            return True
        if self.edit_mode is EditMode.MINUTE:
            self.user_minute_offset = (self.user_minute_offset + 1) % 60
            return True
        return False

    def reset(self) -> None:
        self.user_hour_offset = 0
        self.user_minute_offset = 0

    def toggle_format(self) -> bool:
        self.is_12_hour_format = not self.is_12_hour_format
        return self.is_12_hour_format

    def toggle_light(self) -> bool:
        self.light_on = not self.light_on
        return self.light_on


__all__ = [
    "ClockTimeState",
    "EditMode",
    "MINUTES_PER_DAY",
    "combine_utc_offset",
    "display_hours",
    "format_utc_offset",
]
