"""
게이지 위젯 - 진행률/볼륨 막대 계산.
스타일 없는 문자열만 만들고 색상은 대시보드에서 입힙니다.
"""

import math


def format_duration(ms: int) -> str:
    """밀리초를 m:ss 형식으로 변환 (분은 두 자리 이상도 그대로)"""
    total_seconds = max(ms, 0) // 1000
    return f"{total_seconds // 60}:{total_seconds % 60:02d}"


def filled_cells(ratio: float, width: int) -> int:
    """비율에 해당하는 채움 칸 수 (0 ~ width)"""
    if width <= 0 or not math.isfinite(ratio):
        return 0
    ratio = min(max(ratio, 0.0), 1.0)
    return min(int(width * ratio + 0.5), width)


def volume_percent(volume: float) -> int:
    """볼륨 0.0 ~ 1.0 → 반올림 퍼센트 (NaN은 0)"""
    if not math.isfinite(volume):
        return 0
    return int(min(max(volume, 0.0), 1.0) * 100 + 0.5)


def progress_cells(ratio: float, width: int, label: str) -> tuple[str, str]:
    """
    진행 막대를 (채워진 부분, 남은 부분) 문자열로 분할

    라벨은 막대 가운데에 겹쳐 그립니다. 막대보다 길면 잘립니다.
    """
    if width <= 0:
        return "", ""
    cells = [" "] * width
    label = label[:width]
    start = (width - len(label)) // 2
    cells[start:start + len(label)] = list(label)
    text = "".join(cells)
    filled = filled_cells(ratio, width)
    return text[:filled], text[filled:]


def volume_cells(volume: float, width: int) -> tuple[str, str]:
    """볼륨 막대를 ('=' 채움, 공백) 으로 분할"""
    filled = filled_cells(volume, width)
    return "=" * filled, " " * (max(width, 0) - filled)
