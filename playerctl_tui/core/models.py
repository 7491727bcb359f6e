"""
도메인 데이터 클래스 통합 모듈.
플레이어 상태 스냅샷, 재생/반복 상태, 사용자 명령을 한 곳에서 관리합니다.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# ── 재생 상태 ─────────────────────────────────────────────────────────────────

class PlaybackState(Enum):
    """표시용 재생 상태"""
    PLAYING = "Playing"
    PAUSED = "Paused"
    STOPPED = "Stopped"

    @classmethod
    def from_mpris(cls, status: Optional[str]) -> "PlaybackState":
        """MPRIS PlaybackStatus 문자열 변환 (Playing/Paused 외에는 모두 Stopped)"""
        if status == "Playing":
            return cls.PLAYING
        if status == "Paused":
            return cls.PAUSED
        return cls.STOPPED


class LoopMode(Enum):
    """반복 모드. UNSUPPORTED는 '꺼짐'이 아니라 '제어 불가'를 뜻함"""
    OFF = "Off"
    TRACK = "Track"
    PLAYLIST = "Playlist"
    UNSUPPORTED = "N/A"

    @classmethod
    def from_mpris(cls, status: Optional[str]) -> "LoopMode":
        return _LOOP_FROM_MPRIS.get(status, cls.UNSUPPORTED)

    def to_mpris(self) -> str:
        """MPRIS LoopStatus 문자열 반환"""
        if self is LoopMode.UNSUPPORTED:
            raise ValueError("UNSUPPORTED 모드는 MPRIS 값이 없습니다")
        return "None" if self is LoopMode.OFF else self.value


_LOOP_FROM_MPRIS = {
    "None": LoopMode.OFF,
    "Track": LoopMode.TRACK,
    "Playlist": LoopMode.PLAYLIST,
}

_LOOP_CYCLE = {
    LoopMode.OFF: LoopMode.TRACK,
    LoopMode.TRACK: LoopMode.PLAYLIST,
    LoopMode.PLAYLIST: LoopMode.OFF,
}


def next_loop_mode(mode: LoopMode) -> LoopMode:
    """Off → Track → Playlist → Off 순환"""
    try:
        return _LOOP_CYCLE[mode]
    except KeyError:
        raise ValueError(f"순환할 수 없는 반복 모드: {mode}") from None


# ── 사용자 명령 ───────────────────────────────────────────────────────────────

class Command(Enum):
    """키 입력으로 발생하는 사용자 의도"""
    QUIT = "quit"
    TOGGLE_PLAY_PAUSE = "toggle_play_pause"
    NEXT_TRACK = "next_track"
    PREVIOUS_TRACK = "previous_track"
    VOLUME_UP = "volume_up"
    VOLUME_DOWN = "volume_down"
    SEEK_FORWARD = "seek_forward"
    SEEK_BACKWARD = "seek_backward"
    NEXT_PLAYER = "next_player"
    PREVIOUS_PLAYER = "previous_player"
    CYCLE_LOOP = "cycle_loop"
    TOGGLE_SHUFFLE = "toggle_shuffle"


# ── MPRIS 메타데이터 ──────────────────────────────────────────────────────────

@dataclass
class TrackMetadata:
    """get-metadata 호출 한 번의 결과 (없는 항목은 None)"""
    title: Optional[str] = None
    artists: Optional[list[str]] = None
    album: Optional[str] = None
    length_ms: Optional[int] = None


# ── 표시 상태 스냅샷 ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PlayerSnapshot:
    """
    화면에 표시할 상태 전체.
    부분 수정 없이 갱신마다 통째로 교체됩니다 (dataclasses.replace).
    """
    known_players: tuple[str, ...] = ()
    selected_index: int = 0
    title: str = ""
    artist: str = ""
    album: str = ""
    position_ms: int = 0
    duration_ms: int = 0
    playback_state: PlaybackState = PlaybackState.STOPPED
    volume: float = 0.0
    loop_mode: LoopMode = LoopMode.UNSUPPORTED
    shuffle_enabled: bool = False
    tick_counter: int = 0

    @property
    def has_players(self) -> bool:
        return bool(self.known_players)

    @property
    def selected_player(self) -> Optional[str]:
        """선택된 플레이어 identity (목록이 비었으면 None)"""
        if not self.known_players:
            return None
        return self.known_players[self.selected_index]

    @property
    def progress_ratio(self) -> float:
        """재생 진행률 0.0 ~ 1.0"""
        if self.duration_ms <= 0:
            return 0.0
        return min(max(self.position_ms / self.duration_ms, 0.0), 1.0)


# 트랙/재생 필드 기본값 (플레이어 없음 또는 조회 실패 시)
TRACK_DEFAULTS = {
    "title": "",
    "artist": "",
    "album": "",
    "position_ms": 0,
    "duration_ms": 0,
    "playback_state": PlaybackState.STOPPED,
    "volume": 0.0,
    "loop_mode": LoopMode.UNSUPPORTED,
    "shuffle_enabled": False,
}
