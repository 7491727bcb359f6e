"""
앱 전역 상수.
MPRIS 버스 이름, 폴링 주기, 명령 스텝 값을 한 곳에서 관리합니다.
"""

APP_NAME = "playerctl-tui"

# ── MPRIS ─────────────────────────────────────────────────────────────────────

MPRIS_BUS_PREFIX = "org.mpris.MediaPlayer2."
MPRIS_OBJECT_PATH = "/org/mpris/MediaPlayer2"
DBUS_SERVICE = ".DBus"

# ── 폴링 ──────────────────────────────────────────────────────────────────────

TICK_INTERVAL_MS = 250          # 키 입력 대기 시간 = 틱 주기
PLAYER_REFRESH_TICKS = 20       # N틱마다 플레이어 목록 재탐색

# ── 명령 ──────────────────────────────────────────────────────────────────────

VOLUME_STEP = 0.05
SEEK_STEP_MS = 5000

# ── 로그 ──────────────────────────────────────────────────────────────────────

LOG_FILE_NAME = "playerctl-tui.log"
LOG_MAX_BYTES = 1_000_000
LOG_BACKUP_COUNT = 3
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
