"""
사용자 명령을 선택된 플레이어에 전달합니다.
모든 제어 호출은 fire-and-forget 정책을 따릅니다: 실패는 무시, 재시도 없음.
결과는 다음 틱의 상태 갱신으로만 화면에 반영됩니다.
"""

import logging
from dataclasses import replace
from typing import Any, Callable, Optional

from playerctl_tui.core.constants import SEEK_STEP_MS, VOLUME_STEP
from playerctl_tui.core.models import LoopMode, PlayerSnapshot, next_loop_mode
from playerctl_tui.services.mpris_source import MprisPlayer, MprisSource
from playerctl_tui.services.state_synchronizer import StateSynchronizer, query

log = logging.getLogger(__name__)


def fire_and_forget(action: str, call: Callable[[], Any]) -> bool:
    """제어 호출 실행. 실패는 로그만 남기고 무시 (재시도 없음). 성공 여부 반환"""
    try:
        call()
        return True
    except Exception as e:
        log.debug("명령 실패 [%s]: %s", action, e)
        return False


def clamp_volume(volume: float) -> float:
    return min(max(volume, 0.0), 1.0)


class CommandDispatcher:
    """명령별 best-effort 제어"""

    def __init__(
        self,
        source: MprisSource,
        synchronizer: StateSynchronizer,
        volume_step: float = VOLUME_STEP,
        seek_step_ms: int = SEEK_STEP_MS,
    ) -> None:
        self._source = source
        self._synchronizer = synchronizer
        self._volume_step = volume_step
        self._seek_step_ms = seek_step_ms

    def _current_player(self, snapshot: PlayerSnapshot) -> Optional[MprisPlayer]:
        """선택된 identity로 핸들을 매번 새로 조회"""
        identity = snapshot.selected_player
        if identity is None:
            return None
        return self._source.find_player(identity)

    def _send(self, snapshot: PlayerSnapshot, action: str, fn: Callable[[MprisPlayer], Any]) -> bool:
        player = self._current_player(snapshot)
        if player is None:
            return False
        return fire_and_forget(action, lambda: fn(player))

    # ── 재생 제어 ─────────────────────────────────────────────────────────────

    def toggle_play_pause(self, snapshot: PlayerSnapshot) -> None:
        self._send(snapshot, "play_pause", lambda p: p.play_pause())

    def next_track(self, snapshot: PlayerSnapshot) -> None:
        self._send(snapshot, "next", lambda p: p.next())

    def previous_track(self, snapshot: PlayerSnapshot) -> None:
        self._send(snapshot, "previous", lambda p: p.previous())

    # ── 볼륨 ──────────────────────────────────────────────────────────────────

    def volume_up(self, snapshot: PlayerSnapshot) -> None:
        """로컬 캐시 볼륨 기준으로 한 스텝 올린 값을 전송 (실제 값은 다음 갱신에서 읽음)"""
        volume = clamp_volume(snapshot.volume + self._volume_step)
        self._send(snapshot, "set_volume", lambda p: p.set_volume(volume))

    def volume_down(self, snapshot: PlayerSnapshot) -> None:
        volume = clamp_volume(snapshot.volume - self._volume_step)
        self._send(snapshot, "set_volume", lambda p: p.set_volume(volume))

    # ── 탐색 (트랙 길이 범위 검사는 플레이어에 맡김) ──────────────────────────

    def seek_forward(self, snapshot: PlayerSnapshot) -> None:
        self._send(snapshot, "seek", lambda p: p.seek_ms(self._seek_step_ms))

    def seek_backward(self, snapshot: PlayerSnapshot) -> None:
        self._send(snapshot, "seek", lambda p: p.seek_ms(-self._seek_step_ms))

    # ── 반복 / 셔플 ───────────────────────────────────────────────────────────

    def cycle_loop(self, snapshot: PlayerSnapshot) -> None:
        """현재 반복 모드를 플레이어에서 직접 읽어 다음 모드로 설정 (읽기 실패 시 무시)"""
        player = self._current_player(snapshot)
        if player is None:
            return
        current = LoopMode.from_mpris(query("loop_status", player.get_loop_status))
        if current is LoopMode.UNSUPPORTED:
            return
        target = next_loop_mode(current).to_mpris()
        fire_and_forget("set_loop_status", lambda: player.set_loop_status(target))

    def toggle_shuffle(self, snapshot: PlayerSnapshot) -> None:
        enabled = not snapshot.shuffle_enabled
        self._send(snapshot, "set_shuffle", lambda p: p.set_shuffle(enabled))

    # ── 플레이어 전환 (즉시 상태 갱신) ───────────────────────────────────────

    def next_player(self, snapshot: PlayerSnapshot) -> PlayerSnapshot:
        return self._select(snapshot, 1)

    def previous_player(self, snapshot: PlayerSnapshot) -> PlayerSnapshot:
        return self._select(snapshot, -1)

    def _select(self, snapshot: PlayerSnapshot, step: int) -> PlayerSnapshot:
        count = len(snapshot.known_players)
        if count == 0:
            return snapshot
        index = (snapshot.selected_index + step) % count
        log.info("플레이어 선택: %s", snapshot.known_players[index])
        return self._synchronizer.refresh_state(replace(snapshot, selected_index=index))
