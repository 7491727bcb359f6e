"""
테두리 프레임 위젯.
제목이 있는 박스 안에 줄들을 배치합니다. 스타일이 들어간 문자열은
blessed Terminal의 length/truncate/ljust로 실제 화면 폭을 계산합니다.
"""

from blessed import Terminal

_H, _V = "─", "│"
_TL, _TR, _BL, _BR = "┌", "┐", "└", "┘"


def frame(term: Terminal, lines: list[str], width: int, height: int, title: str = "") -> list[str]:
    """
    width x height 크기의 박스 줄 목록 반환

    Args:
        term: 폭 계산용 Terminal
        lines: 박스 안쪽 내용 (넘치는 줄/칸은 잘림, 모자란 줄은 빈 줄)
        width: 테두리 포함 전체 폭
        height: 테두리 포함 전체 높이
        title: 윗 테두리에 들어갈 제목
    """
    inner = max(width - 2, 0)
    title = title[:inner]
    top = _TL + title + _H * (inner - len(title)) + _TR
    bottom = _BL + _H * inner + _BR

    body: list[str] = []
    for i in range(max(height - 2, 0)):
        text = lines[i] if i < len(lines) else ""
        if term.length(text) > inner:
            text = term.truncate(text, inner)
        body.append(_V + term.ljust(text, inner) + term.normal + _V)

    return [top, *body, bottom]
