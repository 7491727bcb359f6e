"""
앱 조립 및 실행 진입점.
설정 → 로깅 → 서비스 → ViewModel → View 순서로 조립하고 메인 루프를 시작합니다.
이 파일은 앱의 의존성 주입(DI) 역할을 담당합니다.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from blessed import Terminal

from playerctl_tui.core.constants import (
    APP_NAME,
    LOG_BACKUP_COUNT,
    LOG_FILE_NAME,
    LOG_FORMAT,
    LOG_MAX_BYTES,
)
from playerctl_tui.services.command_dispatcher import CommandDispatcher
from playerctl_tui.services.mpris_source import MprisSource, PlayerSourceError, check_bus_support
from playerctl_tui.services.state_synchronizer import StateSynchronizer
from playerctl_tui.settings.settings_manager import SettingsManager
from playerctl_tui.ui.dashboard import DashboardView
from playerctl_tui.viewmodels.player_viewmodel import PlayerViewModel

log = logging.getLogger(__name__)


class TerminalUnavailableError(Exception):
    """표준 출력이 터미널이 아님 (대시보드를 띄울 수 없음)"""


def default_log_path() -> str:
    base = os.environ.get("XDG_STATE_HOME") or os.path.join(os.path.expanduser("~"), ".local", "state")
    return os.path.join(base, APP_NAME, LOG_FILE_NAME)


def setup_logging(settings: SettingsManager) -> None:
    """
    파일 로그 설정 (화면은 대시보드가 쓰므로 터미널에는 출력하지 않음)

    로그 파일을 열 수 없으면 경고 한 줄만 남기고 로그 없이 계속 실행합니다.
    """
    path = settings.get("log_file") or default_log_path()
    try:
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        handler = RotatingFileHandler(path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    except OSError as e:
        print(f"{APP_NAME}: 로그 파일을 열 수 없음, 로그 없이 실행 ({e})", file=sys.stderr)
        handler = logging.NullHandler()

    root = logging.getLogger("playerctl_tui")
    root.setLevel(settings.get("log_level", "INFO").upper())
    root.addHandler(handler)
    root.propagate = False


def acquire_terminal(stream=None) -> Terminal:
    term = Terminal(stream=stream)
    if not term.is_a_tty:
        raise TerminalUnavailableError("stdout is not a terminal")
    return term


def create_and_run(settings: Optional[SettingsManager] = None, source: Optional[MprisSource] = None) -> None:
    """앱 생성 및 실행 (의존성 주입)"""

    # ── 1. 설정 / 로깅 ─────────────────────────────────────────────────────────
    settings = settings or SettingsManager()
    setup_logging(settings)

    # ── 2. 터미널 확보 (실패 시 루프 진입 전에 중단) ─────────────────────────
    term = acquire_terminal()

    # ── 3. 서비스 레이어 생성 ──────────────────────────────────────────────────
    if source is None:
        check_bus_support()
        source = MprisSource()
    synchronizer = StateSynchronizer(source, player_refresh_ticks=settings.get("player_refresh_ticks"))
    dispatcher = CommandDispatcher(
        source,
        synchronizer,
        volume_step=settings.get("volume_step"),
        seek_step_ms=settings.get("seek_step_ms"),
    )

    # ── 4. ViewModel / View 생성 및 콜백 연결 ────────────────────────────────
    viewmodel = PlayerViewModel(synchronizer, dispatcher)
    view = DashboardView(term, tick_interval_ms=settings.get("tick_interval_ms"))

    view.set_on_command(viewmodel.handle_command)
    view.set_on_tick(viewmodel.tick)
    view.set_snapshot_fn(lambda: viewmodel.snapshot)
    view.set_is_running_fn(viewmodel.is_running)

    # ── 5. 메인 루프 실행 ──────────────────────────────────────────────────────
    viewmodel.start()
    view.run()
    log.info("종료")


def main() -> None:
    """콘솔 진입점"""
    try:
        create_and_run()
    except (TerminalUnavailableError, PlayerSourceError) as e:
        log.error("시작 실패: %s", e)
        print(f"{APP_NAME}: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
