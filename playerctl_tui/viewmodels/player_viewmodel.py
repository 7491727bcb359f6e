"""
플레이어 대시보드 ViewModel.
스냅샷의 유일한 소유자로서 틱과 사용자 명령을 동기화기/디스패처에 연결합니다.

책임:
- 현재 스냅샷 보관 및 교체
- 틱 처리 (상태 갱신)
- 명령 라우팅 (종료 포함)
"""

import logging
from typing import Callable

from playerctl_tui.core.models import Command, PlayerSnapshot
from playerctl_tui.services.command_dispatcher import CommandDispatcher
from playerctl_tui.services.state_synchronizer import StateSynchronizer

log = logging.getLogger(__name__)


class PlayerViewModel:
    """
    대시보드 ViewModel.
    View는 snapshot 속성을 읽어 그리고, 키 입력을 Command로 넘깁니다.
    """

    def __init__(self, synchronizer: StateSynchronizer, dispatcher: CommandDispatcher) -> None:
        self._synchronizer = synchronizer
        self._dispatcher = dispatcher

        # ── 상태 변수 ──────────────────────────────────────────────────────────
        self._snapshot = PlayerSnapshot()
        self._running = False

        # 스냅샷을 읽기만 하는 명령
        self._actions: dict[Command, Callable[[PlayerSnapshot], None]] = {
            Command.TOGGLE_PLAY_PAUSE: dispatcher.toggle_play_pause,
            Command.NEXT_TRACK: dispatcher.next_track,
            Command.PREVIOUS_TRACK: dispatcher.previous_track,
            Command.VOLUME_UP: dispatcher.volume_up,
            Command.VOLUME_DOWN: dispatcher.volume_down,
            Command.SEEK_FORWARD: dispatcher.seek_forward,
            Command.SEEK_BACKWARD: dispatcher.seek_backward,
            Command.CYCLE_LOOP: dispatcher.cycle_loop,
            Command.TOGGLE_SHUFFLE: dispatcher.toggle_shuffle,
        }
        # 스냅샷을 교체하는 명령
        self._selectors: dict[Command, Callable[[PlayerSnapshot], PlayerSnapshot]] = {
            Command.NEXT_PLAYER: dispatcher.next_player,
            Command.PREVIOUS_PLAYER: dispatcher.previous_player,
        }

    @property
    def snapshot(self) -> PlayerSnapshot:
        return self._snapshot

    def is_running(self) -> bool:
        return self._running

    # ── 수명 주기 ─────────────────────────────────────────────────────────────

    def start(self) -> None:
        """초기 스냅샷 생성"""
        self._snapshot = self._synchronizer.initial_snapshot()
        self._running = True
        log.info("시작: 플레이어 %d개", len(self._snapshot.known_players))

    def stop(self) -> None:
        self._running = False

    # ── 이벤트 ────────────────────────────────────────────────────────────────

    def tick(self) -> None:
        self._snapshot = self._synchronizer.tick(self._snapshot)

    def handle_command(self, command: Command) -> None:
        """명령 하나 처리 (플레이어 전환 외에는 상태를 갱신하지 않음)"""
        if command is Command.QUIT:
            self.stop()
        elif command in self._selectors:
            self._snapshot = self._selectors[command](self._snapshot)
        else:
            self._actions[command](self._snapshot)
