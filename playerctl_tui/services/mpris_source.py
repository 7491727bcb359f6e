"""
D-Bus 세션 버스의 MPRIS 인터페이스로 미디어 플레이어를 탐색하고 제어합니다.
모든 호출은 동기식이며 언제든 실패할 수 있습니다 (버스 연결 불가, 플레이어 종료).
실패 처리 정책은 호출하는 쪽(동기화기/디스패처)이 결정합니다.
"""

import logging
import math
from typing import Any, Callable, Optional

from playerctl_tui.core.constants import DBUS_SERVICE, MPRIS_BUS_PREFIX, MPRIS_OBJECT_PATH
from playerctl_tui.core.models import TrackMetadata

log = logging.getLogger(__name__)

_US_PER_MS = 1000


class PlayerSourceError(Exception):
    """플레이어 탐색 소스(세션 버스)에 접근할 수 없음"""


def _session_bus() -> Any:
    """pydbus 세션 버스 연결 (PyGObject가 필요하므로 지연 임포트)"""
    from pydbus import SessionBus

    return SessionBus()


def check_bus_support() -> None:
    """
    pydbus와 PyGObject 설치 여부 확인

    Raises:
        PlayerSourceError: 둘 중 하나라도 임포트할 수 없는 경우
    """
    try:
        import pydbus  # noqa: F401
    except ImportError as e:
        raise PlayerSourceError(
            f"D-Bus 지원 모듈 없음 ({e}). "
            "시스템에 PyGObject(python3-gi)를 설치한 뒤 pip install 'playerctl-tui[dbus]'"
        ) from e


def _parse_metadata(raw: dict) -> TrackMetadata:
    """MPRIS Metadata 딕셔너리에서 표시용 항목 추출"""
    artists = raw.get("xesam:artist")
    if isinstance(artists, str):
        artists = [artists]
    elif artists is not None:
        artists = [str(a) for a in artists]

    length = raw.get("mpris:length")
    length_ms = int(length) // _US_PER_MS if length is not None else None

    return TrackMetadata(
        title=raw.get("xesam:title"),
        artists=artists,
        album=raw.get("xesam:album"),
        length_ms=length_ms,
    )


class MprisPlayer:
    """실행 중인 MPRIS 플레이어 하나의 핸들 (오래되면 무효가 될 수 있음)"""

    def __init__(self, bus_name: str, proxy: Any, identity: str) -> None:
        self.bus_name = bus_name
        self.identity = identity
        self._proxy = proxy

    def __repr__(self) -> str:
        return f"MprisPlayer({self.identity!r}, {self.bus_name!r})"

    # ── 조회 ──────────────────────────────────────────────────────────────────

    def get_metadata(self) -> TrackMetadata:
        return _parse_metadata(dict(self._proxy.Metadata))

    def get_position_ms(self) -> int:
        return int(self._proxy.Position) // _US_PER_MS

    def get_playback_status(self) -> str:
        return str(self._proxy.PlaybackStatus)

    def get_volume(self) -> float:
        volume = float(self._proxy.Volume)
        if not math.isfinite(volume):
            raise ValueError(f"비정상 볼륨 값: {volume}")
        return volume

    def get_loop_status(self) -> str:
        return str(self._proxy.LoopStatus)

    def get_shuffle(self) -> bool:
        return bool(self._proxy.Shuffle)

    # ── 제어 ──────────────────────────────────────────────────────────────────

    def play_pause(self) -> None:
        self._proxy.PlayPause()

    def next(self) -> None:
        self._proxy.Next()

    def previous(self) -> None:
        self._proxy.Previous()

    def set_volume(self, volume: float) -> None:
        self._proxy.Volume = volume

    def seek_ms(self, offset_ms: int) -> None:
        """현재 위치 기준 상대 이동 (음수 = 뒤로)"""
        self._proxy.Seek(offset_ms * _US_PER_MS)

    def set_loop_status(self, status: str) -> None:
        self._proxy.LoopStatus = status

    def set_shuffle(self, enabled: bool) -> None:
        self._proxy.Shuffle = enabled


class MprisSource:
    """세션 버스에서 MPRIS 플레이어를 찾는 탐색 소스"""

    def __init__(self, bus_factory: Optional[Callable[[], Any]] = None) -> None:
        self._bus_factory = bus_factory or _session_bus

    def list_players(self) -> list[MprisPlayer]:
        """
        현재 버스에 노출된 모든 플레이어를 버스 순서대로 반환

        Raises:
            PlayerSourceError: 세션 버스 또는 ListNames 호출에 실패한 경우
        """
        try:
            bus = self._bus_factory()
            names = list(bus.get(DBUS_SERVICE).ListNames())
        except Exception as e:
            raise PlayerSourceError(f"세션 버스 접근 실패: {e}") from e

        players: list[MprisPlayer] = []
        for name in names:
            if not str(name).startswith(MPRIS_BUS_PREFIX):
                continue
            try:
                proxy = bus.get(name, MPRIS_OBJECT_PATH)
                players.append(MprisPlayer(name, proxy, str(proxy.Identity)))
            except Exception as e:
                # 탐색 도중 종료된 플레이어는 건너뜀
                log.debug("플레이어 건너뜀 %s: %s", name, e)
        return players

    def find_player(self, identity: str) -> Optional[MprisPlayer]:
        """identity가 일치하는 첫 번째 플레이어를 새로 조회 (없거나 실패하면 None)"""
        try:
            players = self.list_players()
        except PlayerSourceError as e:
            log.debug("플레이어 조회 실패: %s", e)
            return None
        for player in players:
            if player.identity == identity:
                return player
        return None
