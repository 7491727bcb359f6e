"""
터미널 대시보드 View.
blessed로 화면을 통째로 다시 그리고, 키 입력 대기(타임아웃)로 메인 루프를 돌립니다.

영역 (위에서 아래로):
- 플레이어 탭
- 트랙 정보
- 진행 막대
- 재생 상태 + 볼륨
- 키 도움말
"""

import logging
import sys
from typing import Callable, Optional

from blessed import Terminal

from playerctl_tui.core.constants import APP_NAME, TICK_INTERVAL_MS
from playerctl_tui.core.models import Command, PlaybackState, PlayerSnapshot
from playerctl_tui.ui.keymap import HELP_ITEMS, command_for_key
from playerctl_tui.ui.widgets.frame import frame
from playerctl_tui.ui.widgets.gauge import (
    format_duration,
    progress_cells,
    volume_cells,
    volume_percent,
)

log = logging.getLogger(__name__)

# 영역 높이 (테두리 포함)
_TABS_HEIGHT = 3
_INFO_HEIGHT = 5
_PROGRESS_HEIGHT = 3
_CONTROLS_HEIGHT = 4
_HELP_HEIGHT = 3

_STATUS_ICONS = {
    PlaybackState.PLAYING: "▶",
    PlaybackState.PAUSED: "⏸",
    PlaybackState.STOPPED: "■",
}

_VOLUME_PREFIX = "  Volume: ["


class DashboardView:
    """플레이어 대시보드 화면"""

    def __init__(self, term: Terminal, tick_interval_ms: int = TICK_INTERVAL_MS) -> None:
        self._term = term
        self._timeout = tick_interval_ms / 1000

        # ── 콜백 (ViewModel이 등록) ───────────────────────────────────────────
        self._on_command: Optional[Callable[[Command], None]] = None
        self._on_tick: Optional[Callable[[], None]] = None
        self._snapshot_fn: Optional[Callable[[], PlayerSnapshot]] = None
        self._is_running_fn: Optional[Callable[[], bool]] = None

    # ── 콜백 등록 ─────────────────────────────────────────────────────────────

    def set_on_command(self, callback: Callable[[Command], None]) -> None:
        self._on_command = callback

    def set_on_tick(self, callback: Callable[[], None]) -> None:
        self._on_tick = callback

    def set_snapshot_fn(self, fn: Callable[[], PlayerSnapshot]) -> None:
        self._snapshot_fn = fn

    def set_is_running_fn(self, fn: Callable[[], bool]) -> None:
        self._is_running_fn = fn

    # ── 메인 루프 ─────────────────────────────────────────────────────────────

    def run(self) -> None:
        """그리기 → 키 대기 반복. 키가 없으면 틱, 있으면 명령 (틱 없음)"""
        term = self._term
        with term.fullscreen(), term.cbreak(), term.hidden_cursor():
            try:
                while self._is_running_fn and self._is_running_fn():
                    self.draw(self._snapshot_fn())
                    key = term.inkey(timeout=self._timeout)
                    if key:
                        self._handle_key(key)
                    elif self._on_tick:
                        self._on_tick()
            except KeyboardInterrupt:
                log.info("Ctrl-C 종료")

    def _handle_key(self, key) -> None:
        command = command_for_key(key)
        if command is not None and self._on_command:
            self._on_command(command)

    def draw(self, snapshot: PlayerSnapshot) -> None:
        term = self._term
        lines = self.render(snapshot, term.width)
        out = [term.home]
        for y, line in enumerate(lines[: term.height]):
            out.append(term.move_xy(0, y) + line + term.clear_eol)
        out.append(term.clear_eos)
        sys.stdout.write("".join(out))
        sys.stdout.flush()

    # ── 렌더링 ────────────────────────────────────────────────────────────────

    def render(self, snapshot: PlayerSnapshot, width: int) -> list[str]:
        """스냅샷 → 화면 줄 목록"""
        return [
            *self._render_tabs(snapshot, width),
            *self._render_track_info(snapshot, width),
            *self._render_progress(snapshot, width),
            *self._render_controls(snapshot, width),
            *self._render_help(width),
        ]

    def _render_tabs(self, snapshot: PlayerSnapshot, width: int) -> list[str]:
        term = self._term
        title = f" {APP_NAME} "
        if not snapshot.has_players:
            return frame(term, ["No players found"], width, _TABS_HEIGHT, title)

        tabs = []
        for i, name in enumerate(snapshot.known_players):
            if i == snapshot.selected_index:
                tabs.append(term.bold_cyan(name))
            else:
                tabs.append(term.white(name))
        return frame(term, [" " + " │ ".join(tabs)], width, _TABS_HEIGHT, title)

    def _render_track_info(self, snapshot: PlayerSnapshot, width: int) -> list[str]:
        term = self._term
        if not snapshot.has_players:
            return frame(term, ["  Waiting for an MPRIS player..."], width, _INFO_HEIGHT)

        lines = [
            term.yellow("  Title:  ") + snapshot.title,
            term.yellow("  Artist: ") + snapshot.artist,
            term.yellow("  Album:  ") + snapshot.album,
        ]
        return frame(term, lines, width, _INFO_HEIGHT)

    def _render_progress(self, snapshot: PlayerSnapshot, width: int) -> list[str]:
        term = self._term
        label = f" {format_duration(snapshot.position_ms)} / {format_duration(snapshot.duration_ms)} "
        filled, rest = progress_cells(snapshot.progress_ratio, max(width - 2, 0), label)
        bar = term.black_on_cyan(filled) if filled else ""
        bar += term.white_on_bright_black(rest) if rest else ""
        return frame(term, [bar], width, _PROGRESS_HEIGHT)

    def _render_controls(self, snapshot: PlayerSnapshot, width: int) -> list[str]:
        term = self._term
        state = snapshot.playback_state
        shuffle = "On" if snapshot.shuffle_enabled else "Off"
        status_line = (
            term.green(f"  {_STATUS_ICONS[state]} {state.value}")
            + f"      Loop: {snapshot.loop_mode.value}    Shuffle: {shuffle}"
        )

        percent = f"] {volume_percent(snapshot.volume)}%"
        bar_width = max(width - 2 - len(_VOLUME_PREFIX) - len(percent), 0)
        filled, empty = volume_cells(snapshot.volume, bar_width)
        volume_line = (
            _VOLUME_PREFIX
            + (term.magenta(filled) if filled else "")
            + (term.bright_black(empty) if empty else "")
            + percent
        )
        return frame(term, [status_line, volume_line], width, _CONTROLS_HEIGHT)

    def _render_help(self, width: int) -> list[str]:
        term = self._term
        parts = [term.cyan(key) + f":{desc}" for key, desc in HELP_ITEMS]
        return frame(term, [" " + " ".join(parts)], width, _HELP_HEIGHT)
