import re
from dataclasses import dataclass
from typing import List

from reportlab.pdfbase import pdfmetrics

from app.errors import MeasurementError


# 줄바꿈 가능한 공백: 일반 공백과 탭. NBSP(\u00a0)는 끊지 않는다.
_BREAKABLE_SPACE = re.compile(r"([ \t]+)")


@dataclass(frozen=True)
class Line:
    text: str
    width: float
    # True 이면 이 줄 뒤에 입력의 강제 줄바꿈이 있었다.
    hard_break: bool = False
    # 소프트 줄바꿈 자리에서 소비된 공백. 그려지지 않는다.
    break_space: str = ""


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def join_lines(lines: List[Line]) -> str:
    """wrap() 결과를 원문으로 되돌린다.

    소프트 줄바꿈 자리에는 그 자리에서 소비된 공백을, 강제 줄바꿈 자리에는 개행을 넣는다.
    """

    parts: List[str] = []
    for idx, line in enumerate(lines):
        parts.append(line.text)
        if idx < len(lines) - 1:
            parts.append("\n" if line.hard_break else line.break_space)
    return "".join(parts)


class TextMeasurer:
    """reportlab 폰트 메트릭 기반 줄바꿈기.

    단어 단위 greedy 배치만 한다. 한 단어가 max_width 보다 넓으면
    자르지 않고 그 단어 혼자 한 줄을 차지한다. 줄이 끊기는 자리의 공백은
    (여러 칸이어도) 통째로 소비되므로 공백만 있는 줄은 생기지 않는다.
    """

    def __init__(self, font_name: str = "Helvetica") -> None:
        self.font_name = font_name

    def measure(self, text: str, font_size: float) -> float:
        if font_size <= 0:
            raise MeasurementError(f"Invalid font size: {font_size}")
        try:
            return pdfmetrics.stringWidth(text, self.font_name, font_size)
        except KeyError as e:
            raise MeasurementError(f"Font metrics unavailable for {self.font_name!r}") from e

    def fit_font_size(self, text: str, max_width: float, font_size: float) -> float:
        """한 줄로 그려야 하는 텍스트가 max_width 안에 들어가는 글자 크기.

        이미 들어가면 font_size 그대로, 아니면 폭에 비례해 줄인다.
        """

        width = self.measure(text, font_size)
        if width <= max_width:
            return font_size
        return font_size * max_width / width

    def wrap(self, text: str, max_width: float, font_size: float) -> List[Line]:
        if max_width <= 0:
            raise ValueError(f"max_width must be positive, got {max_width}")

        # 폰트를 먼저 확인해서 빈 입력에서도 MeasurementError 가 나도록 한다.
        self.measure("", font_size)

        lines: List[Line] = []
        paragraphs = normalize_newlines(text or "").split("\n")
        for p_idx, paragraph in enumerate(paragraphs):
            wrapped = self._wrap_paragraph(paragraph, max_width, font_size)
            if p_idx < len(paragraphs) - 1:
                last = wrapped[-1]
                wrapped[-1] = Line(last.text, last.width, hard_break=True)
            lines.extend(wrapped)
        return lines

    def _wrap_paragraph(self, paragraph: str, max_width: float, font_size: float) -> List[Line]:
        # [단어, 공백, 단어, 공백, ..., 단어] 형태. 맨 앞/뒤 단어는 빈 문자열일 수 있다.
        parts = _BREAKABLE_SPACE.split(paragraph)
        words = parts[0::2]
        gaps = parts[1::2]

        lines: List[Line] = []
        current = words[0]
        current_width = self.measure(current, font_size)

        for gap, word in zip(gaps, words[1:]):
            if not word:
                # 문단 끝 공백은 줄에 남기되 폭에는 넣지 않는다.
                current += gap
                continue
            if not current:
                # 문단 앞 들여쓰기는 첫 단어와 붙여 둔다.
                current = gap + word
                current_width = self.measure(current, font_size)
                continue

            candidate = current + gap + word
            candidate_width = self.measure(candidate, font_size)
            if candidate_width <= max_width:
                current = candidate
                current_width = candidate_width
            else:
                lines.append(Line(current, current_width, break_space=gap))
                current = word
                current_width = self.measure(word, font_size)

        lines.append(Line(current, current_width))
        return lines
