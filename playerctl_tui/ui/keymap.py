"""
키 입력 → Command 매핑.
특수 키는 blessed Keystroke.name으로, 일반 문자는 문자열 그대로 찾습니다.
"""

from typing import Optional

from blessed.keyboard import Keystroke

from playerctl_tui.core.models import Command

_BY_NAME: dict[str, Command] = {
    "KEY_ESCAPE": Command.QUIT,
    "KEY_LEFT": Command.SEEK_BACKWARD,
    "KEY_RIGHT": Command.SEEK_FORWARD,
    "KEY_TAB": Command.NEXT_PLAYER,
    "KEY_BTAB": Command.PREVIOUS_PLAYER,
}

_BY_CHAR: dict[str, Command] = {
    "q": Command.QUIT,
    "\x03": Command.QUIT,   # Ctrl-C
    "\x1b": Command.QUIT,
    " ": Command.TOGGLE_PLAY_PAUSE,
    "n": Command.NEXT_TRACK,
    "p": Command.PREVIOUS_TRACK,
    "+": Command.VOLUME_UP,
    "=": Command.VOLUME_UP,
    "-": Command.VOLUME_DOWN,
    "\t": Command.NEXT_PLAYER,
    "l": Command.CYCLE_LOOP,
    "s": Command.TOGGLE_SHUFFLE,
}

# 도움말 바 (키, 설명)
HELP_ITEMS: list[tuple[str, str]] = [
    ("q", "Quit"),
    ("Space", "Play/Pause"),
    ("n/p", "Next/Prev"),
    ("+/-", "Vol"),
    ("←/→", "Seek"),
    ("Tab", "Player"),
    ("l", "Loop"),
    ("s", "Shuffle"),
]


def command_for_key(key: Keystroke) -> Optional[Command]:
    """매핑되지 않은 키는 None"""
    if key.is_sequence and key.name in _BY_NAME:
        return _BY_NAME[key.name]
    return _BY_CHAR.get(str(key))
