"""
상태 동기화 테스트.
플레이어 탐색/선택 유지, 필드별 실패 격리, 틱 주기를 검증합니다.
"""

import os
import sys
import unittest

# 프로젝트 루트를 sys.path에 추가
TEST_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(TEST_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from fakes import FakePlayer, FakeSource
from playerctl_tui.core.models import TRACK_DEFAULTS, LoopMode, PlaybackState, PlayerSnapshot
from playerctl_tui.services.state_synchronizer import StateSynchronizer, query


def _assert_defaults(test: unittest.TestCase, snap: PlayerSnapshot) -> None:
    for field, value in TRACK_DEFAULTS.items():
        test.assertEqual(getattr(snap, field), value, field)


class TestQuery(unittest.TestCase):
    def test_success_and_failure(self):
        self.assertEqual(query("ok", lambda: 3), 3)

        def boom():
            raise RuntimeError("x")

        self.assertIsNone(query("fail", boom))


class TestRefreshPlayers(unittest.TestCase):
    def test_empty_enumeration(self):
        sync = StateSynchronizer(FakeSource([]))
        snap = PlayerSnapshot(known_players=("VLC", "mpv"), selected_index=1, title="Old")
        snap = sync.refresh_state(sync.refresh_players(snap))
        self.assertEqual(snap.known_players, ())
        self.assertEqual(snap.selected_index, 0)
        _assert_defaults(self, snap)

    def test_source_unavailable(self):
        sync = StateSynchronizer(FakeSource([FakePlayer("VLC")], available=False))
        snap = sync.refresh_players(PlayerSnapshot(known_players=("VLC",), selected_index=0))
        self.assertEqual(snap.known_players, ())
        self.assertEqual(snap.selected_index, 0)

    def test_selection_follows_identity(self):
        """["VLC"]에서 VLC 선택 → ["Spotify", "VLC"]로 바뀌면 인덱스 1"""
        source = FakeSource([FakePlayer("VLC")])
        sync = StateSynchronizer(source)
        snap = sync.refresh_players(PlayerSnapshot())
        self.assertEqual(snap.selected_player, "VLC")

        source.players = [FakePlayer("Spotify"), FakePlayer("VLC")]
        snap = sync.refresh_players(snap)
        self.assertEqual(snap.known_players, ("Spotify", "VLC"))
        self.assertEqual(snap.selected_index, 1)

    def test_missing_identity_falls_back_to_first(self):
        source = FakeSource([FakePlayer("mpv"), FakePlayer("Spotify")])
        sync = StateSynchronizer(source)
        snap = PlayerSnapshot(known_players=("Spotify", "VLC", "mpv"), selected_index=1)
        snap = sync.refresh_players(snap)
        self.assertEqual(snap.selected_index, 0)
        self.assertEqual(snap.selected_player, "mpv")

    def test_initial_snapshot(self):
        sync = StateSynchronizer(FakeSource([FakePlayer("VLC", title="Intro")]))
        snap = sync.initial_snapshot()
        self.assertEqual(snap.known_players, ("VLC",))
        self.assertEqual(snap.title, "Intro")
        self.assertEqual(snap.tick_counter, 0)


class TestRefreshState(unittest.TestCase):
    def _snap(self, *names: str, index: int = 0) -> PlayerSnapshot:
        return PlayerSnapshot(known_players=names, selected_index=index)

    def test_all_fields(self):
        player = FakePlayer(
            "VLC", title="T", artists=["A", "B"], album="Al", length_ms=180_000,
            position_ms=42_000, status="Paused", volume=0.7, loop="Playlist", shuffle=True,
        )
        snap = StateSynchronizer(FakeSource([player])).refresh_state(self._snap("VLC"))
        self.assertEqual(snap.title, "T")
        self.assertEqual(snap.artist, "A, B")
        self.assertEqual(snap.album, "Al")
        self.assertEqual(snap.duration_ms, 180_000)
        self.assertEqual(snap.position_ms, 42_000)
        self.assertIs(snap.playback_state, PlaybackState.PAUSED)
        self.assertEqual(snap.volume, 0.7)
        self.assertIs(snap.loop_mode, LoopMode.PLAYLIST)
        self.assertTrue(snap.shuffle_enabled)

    def test_no_selection(self):
        snap = StateSynchronizer(FakeSource([FakePlayer("VLC")])).refresh_state(PlayerSnapshot())
        _assert_defaults(self, snap)

    def test_selected_player_vanished(self):
        """선택된 플레이어가 틱 사이에 종료되면 기본값 (목록은 유지)"""
        sync = StateSynchronizer(FakeSource([FakePlayer("mpv")]))
        snap = sync.refresh_state(PlayerSnapshot(known_players=("VLC",), title="Old", volume=0.9))
        self.assertEqual(snap.known_players, ("VLC",))
        _assert_defaults(self, snap)

    def test_single_field_failure_is_isolated(self):
        player = FakePlayer("VLC", title="T", volume=0.8, fail=("volume",))
        snap = StateSynchronizer(FakeSource([player])).refresh_state(self._snap("VLC"))
        self.assertEqual(snap.volume, 0.0)
        self.assertEqual(snap.title, "T")
        self.assertEqual(snap.position_ms, 30_000)
        self.assertIs(snap.playback_state, PlaybackState.PLAYING)
        self.assertIs(snap.loop_mode, LoopMode.OFF)

    def test_metadata_failure_keeps_position(self):
        player = FakePlayer("VLC", position_ms=12_345, fail=("metadata",))
        snap = StateSynchronizer(FakeSource([player])).refresh_state(self._snap("VLC"))
        self.assertEqual(snap.title, "")
        self.assertEqual(snap.artist, "")
        self.assertEqual(snap.album, "")
        self.assertEqual(snap.duration_ms, 0)
        self.assertEqual(snap.position_ms, 12_345)

    def test_status_and_loop_failures(self):
        player = FakePlayer("VLC", fail=("playback_status", "loop_status", "shuffle"))
        snap = StateSynchronizer(FakeSource([player])).refresh_state(self._snap("VLC"))
        self.assertIs(snap.playback_state, PlaybackState.STOPPED)
        self.assertIs(snap.loop_mode, LoopMode.UNSUPPORTED)
        self.assertFalse(snap.shuffle_enabled)

    def test_missing_metadata_items(self):
        """이전 값이 남지 않고 빈 값으로 교체"""
        player = FakePlayer("VLC", title=None, artists=[], album=None, length_ms=None)
        prior = PlayerSnapshot(known_players=("VLC",), title="Old", artist="Old", duration_ms=9)
        snap = StateSynchronizer(FakeSource([player])).refresh_state(prior)
        self.assertEqual(snap.title, "")
        self.assertEqual(snap.artist, "")
        self.assertEqual(snap.album, "")
        self.assertEqual(snap.duration_ms, 0)

    def test_out_of_range_values_clamped(self):
        player = FakePlayer("VLC", volume=1.4, position_ms=-20)
        snap = StateSynchronizer(FakeSource([player])).refresh_state(self._snap("VLC"))
        self.assertEqual(snap.volume, 1.0)
        self.assertEqual(snap.position_ms, 0)

    def test_non_finite_volume_falls_back(self):
        """NaN/무한대 볼륨은 조회 실패와 같이 0.0"""
        for bad in (float("nan"), float("inf"), float("-inf")):
            player = FakePlayer("VLC", volume=bad)
            snap = StateSynchronizer(FakeSource([player])).refresh_state(self._snap("VLC"))
            self.assertEqual(snap.volume, 0.0, bad)
            self.assertEqual(snap.title, "Song")

    def test_selected_by_index(self):
        players = [FakePlayer("Spotify", title="S"), FakePlayer("VLC", title="V")]
        snap = StateSynchronizer(FakeSource(players)).refresh_state(self._snap("Spotify", "VLC", index=1))
        self.assertEqual(snap.title, "V")


class TestTick(unittest.TestCase):
    def test_counter_and_refresh(self):
        player = FakePlayer("VLC", title="A")
        source = FakeSource([player])
        sync = StateSynchronizer(source)
        snap = sync.initial_snapshot()

        player.title = "B"
        snap = sync.tick(snap)
        self.assertEqual(snap.tick_counter, 1)
        self.assertEqual(snap.title, "B")

    def test_enumeration_only_every_twentieth_tick(self):
        source = FakeSource([FakePlayer("VLC")])
        sync = StateSynchronizer(source)
        snap = sync.initial_snapshot()

        source.players.append(FakePlayer("mpv"))
        for _ in range(19):
            snap = sync.tick(snap)
        self.assertEqual(snap.known_players, ("VLC",))

        snap = sync.tick(snap)
        self.assertEqual(snap.tick_counter, 20)
        self.assertEqual(snap.known_players, ("VLC", "mpv"))

    def test_players_gone_at_twentieth_tick(self):
        source = FakeSource([FakePlayer("VLC", title="Song")])
        sync = StateSynchronizer(source)
        snap = sync.initial_snapshot()
        self.assertEqual(snap.title, "Song")

        source.players = []
        for _ in range(20):
            snap = sync.tick(snap)
        self.assertEqual(snap.known_players, ())
        self.assertEqual(snap.selected_index, 0)
        _assert_defaults(self, snap)

    def test_custom_refresh_period(self):
        source = FakeSource([FakePlayer("VLC")])
        sync = StateSynchronizer(source, player_refresh_ticks=2)
        snap = PlayerSnapshot()
        snap = sync.tick(snap)
        self.assertEqual(source.list_calls, 0)
        snap = sync.tick(snap)
        self.assertEqual(source.list_calls, 1)
        self.assertEqual(snap.known_players, ("VLC",))


if __name__ == '__main__':
    unittest.main(verbosity=2)
