"""
설정 관리 클래스.
$XDG_CONFIG_HOME/playerctl-tui/settings.json 을 읽어 기본값 위에 덮어씁니다.
읽기 전용이며 파일에 저장하지 않습니다.
기본값은 settings/defaults.py에서 임포트합니다.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from playerctl_tui.core.constants import APP_NAME
from playerctl_tui.settings.defaults import DEFAULT_SETTINGS

log = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _is_step(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and 0 < value <= 1


# 키별 유효성 검사 (실패 시 기본값 유지)
_VALIDATORS = {
    "tick_interval_ms": _is_positive_int,
    "player_refresh_ticks": _is_positive_int,
    "volume_step": _is_step,
    "seek_step_ms": _is_positive_int,
    "log_level": lambda v: isinstance(v, str) and v.upper() in _LOG_LEVELS,
    "log_file": lambda v: isinstance(v, str),
}


def default_config_dir() -> str:
    base = os.environ.get("XDG_CONFIG_HOME") or os.path.join(os.path.expanduser("~"), ".config")
    return os.path.join(base, APP_NAME)


class SettingsManager:
    """설정 관리 클래스"""

    def __init__(self, filepath: str = "settings.json", base_path: Optional[str] = None) -> None:
        if base_path is None:
            base_path = default_config_dir()

        self.filepath = os.path.join(base_path, filepath)
        self._settings: Dict[str, Any] = DEFAULT_SETTINGS.copy()
        self._load()

    # ── 파일 I/O ──────────────────────────────────────────────────────────────

    def _load(self) -> None:
        """설정 파일 로드 (누락되거나 잘못된 키는 기본값 유지)"""
        if not os.path.exists(self.filepath):
            return
        try:
            with open(self.filepath, "r", encoding="utf-8") as f:
                loaded = json.load(f)
        except (OSError, ValueError) as e:
            log.warning("설정 로드 실패 %s: %s", self.filepath, e)
            return

        if not isinstance(loaded, dict):
            log.warning("설정 파일 형식 오류 (객체가 아님): %s", self.filepath)
            return

        for key, value in loaded.items():
            validator = _VALIDATORS.get(key)
            if validator is None:
                continue
            if validator(value):
                self._settings[key] = value
            else:
                log.warning("잘못된 설정값 무시 %s=%r (기본값 %r)", key, value, DEFAULT_SETTINGS[key])

    # ── 공개 API ──────────────────────────────────────────────────────────────

    def get(self, key: str, default: Any = None) -> Any:
        """설정값 조회"""
        return self._settings.get(key, default)

    def get_all(self) -> Dict[str, Any]:
        """모든 설정 복사본 반환"""
        return self._settings.copy()
