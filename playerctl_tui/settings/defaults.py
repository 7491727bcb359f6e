"""
기본 설정값 상수.
SettingsManager 클래스 내부에서 분리하여 독립적으로 관리합니다.
"""

from typing import Any

from playerctl_tui.core.constants import (
    PLAYER_REFRESH_TICKS,
    SEEK_STEP_MS,
    TICK_INTERVAL_MS,
    VOLUME_STEP,
)

# 설정 파일이 없으면 이 값 그대로 동작
DEFAULT_SETTINGS: dict[str, Any] = {
    "tick_interval_ms": TICK_INTERVAL_MS,
    "player_refresh_ticks": PLAYER_REFRESH_TICKS,
    "volume_step": VOLUME_STEP,
    "seek_step_ms": SEEK_STEP_MS,
    "log_level": "INFO",
    "log_file": "",
}
