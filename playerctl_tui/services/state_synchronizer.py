"""
플레이어 상태 동기화.
매 틱마다 MPRIS 소스를 다시 조회하여 항상 유효한 표시용 스냅샷을 만듭니다.

원칙:
- 스냅샷은 통째로 교체 (이전 틱 값이 남지 않음)
- 필드별 조회는 서로 독립 (하나가 실패해도 나머지는 채워짐)
- 실패는 사용자에게 알리지 않고 기본값으로 대체
"""

import logging
import math
from dataclasses import replace
from typing import Callable, Optional, TypeVar

from playerctl_tui.core.constants import PLAYER_REFRESH_TICKS
from playerctl_tui.core.models import (
    TRACK_DEFAULTS,
    LoopMode,
    PlaybackState,
    PlayerSnapshot,
    TrackMetadata,
)
from playerctl_tui.services.mpris_source import MprisPlayer, MprisSource, PlayerSourceError

log = logging.getLogger(__name__)

T = TypeVar("T")


def query(label: str, fn: Callable[[], T]) -> Optional[T]:
    """외부 조회 한 건을 Optional로 감싸기 (실패 = None)"""
    try:
        return fn()
    except Exception as e:
        log.debug("조회 실패 [%s]: %s", label, e)
        return None


def _or_default(value: Optional[T], default: T) -> T:
    return default if value is None else value


def _unit_volume(value: Optional[float]) -> float:
    """볼륨을 0.0 ~ 1.0으로 접기 (NaN/무한대는 조회 실패와 같이 0.0)"""
    if value is None or not math.isfinite(value):
        return 0.0
    return min(max(value, 0.0), 1.0)


class StateSynchronizer:
    """MPRIS 소스 → PlayerSnapshot 동기화"""

    def __init__(self, source: MprisSource, player_refresh_ticks: int = PLAYER_REFRESH_TICKS) -> None:
        self._source = source
        self._player_refresh_ticks = player_refresh_ticks

    # ── 플레이어 목록 ─────────────────────────────────────────────────────────

    def refresh_players(self, snapshot: PlayerSnapshot) -> PlayerSnapshot:
        """플레이어 재탐색 (가능하면 이전 선택을 identity로 유지)"""
        try:
            names = tuple(p.identity for p in self._source.list_players())
        except PlayerSourceError as e:
            log.debug("플레이어 탐색 실패: %s", e)
            names = ()

        if names != snapshot.known_players:
            log.info("플레이어 목록 변경: %s", list(names))

        if not names:
            return replace(snapshot, known_players=(), selected_index=0)

        previous = snapshot.selected_player
        index = names.index(previous) if previous in names else 0
        return replace(snapshot, known_players=names, selected_index=index)

    # ── 상태 갱신 ─────────────────────────────────────────────────────────────

    def refresh_state(self, snapshot: PlayerSnapshot) -> PlayerSnapshot:
        """선택된 플레이어를 새로 찾아 트랙/재생 필드 전체를 교체"""
        identity = snapshot.selected_player
        player = self._source.find_player(identity) if identity is not None else None
        if player is None:
            return replace(snapshot, **TRACK_DEFAULTS)
        return replace(snapshot, **self._read_fields(player))

    def _read_fields(self, player: MprisPlayer) -> dict:
        """필드별 독립 조회 후 즉시 기본값으로 접기"""
        meta = _or_default(query("metadata", player.get_metadata), TrackMetadata())
        position = query("position", player.get_position_ms)
        status = query("playback_status", player.get_playback_status)
        volume = query("volume", player.get_volume)
        loop_status = query("loop_status", player.get_loop_status)
        shuffle = query("shuffle", player.get_shuffle)

        return {
            "title": _or_default(meta.title, ""),
            "artist": ", ".join(meta.artists) if meta.artists else "",
            "album": _or_default(meta.album, ""),
            "duration_ms": max(_or_default(meta.length_ms, 0), 0),
            "position_ms": max(_or_default(position, 0), 0),
            "playback_state": PlaybackState.from_mpris(status),
            "volume": _unit_volume(volume),
            "loop_mode": LoopMode.from_mpris(loop_status),
            "shuffle_enabled": _or_default(shuffle, False),
        }

    # ── 틱 ────────────────────────────────────────────────────────────────────

    def tick(self, snapshot: PlayerSnapshot) -> PlayerSnapshot:
        """틱 카운터 증가, N틱마다 재탐색, 매 틱 상태 갱신"""
        snapshot = replace(snapshot, tick_counter=snapshot.tick_counter + 1)
        if snapshot.tick_counter % self._player_refresh_ticks == 0:
            snapshot = self.refresh_players(snapshot)
        return self.refresh_state(snapshot)

    def initial_snapshot(self) -> PlayerSnapshot:
        """시작 시 스냅샷 (탐색 + 갱신)"""
        return self.refresh_state(self.refresh_players(PlayerSnapshot()))
