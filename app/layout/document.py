from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

from app.config import Settings


@dataclass(frozen=True)
class PageGeometry:
    """한 번의 export 동안 고정되는 페이지 크기/여백/글자 크기 설정 (단위 pt)."""

    page_width: float = 595.27
    page_height: float = 841.89
    margin: float = 40.0
    title_font_size: float = 20.0
    section_title_font_size: float = 14.0
    body_font_size: float = 11.0
    line_height_multiplier: float = 1.4
    record_separator_height: float = 24.0
    section_spacing: float = 10.0
    font_name: str = "Helvetica"
    bold_font_name: str = "Helvetica-Bold"

    @classmethod
    def from_settings(cls, s: Settings) -> "PageGeometry":
        return cls(
            page_width=s.page_width,
            page_height=s.page_height,
            margin=s.margin,
            title_font_size=s.title_font_size,
            section_title_font_size=s.section_title_font_size,
            body_font_size=s.body_font_size,
            line_height_multiplier=s.line_height_multiplier,
            record_separator_height=s.record_separator_height,
            section_spacing=s.section_spacing,
            font_name=s.font_name,
            bold_font_name=s.bold_font_name,
        )

    @property
    def usable_height(self) -> float:
        return self.page_height - 2 * self.margin

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    @property
    def record_title_height(self) -> float:
        return self.title_font_size * self.line_height_multiplier

    @property
    def section_title_height(self) -> float:
        return self.section_title_font_size * self.line_height_multiplier

    @property
    def body_line_height(self) -> float:
        return self.body_font_size * self.line_height_multiplier


@dataclass(frozen=True)
class Section:
    title: str
    body: str


@dataclass(frozen=True)
class Record:
    identifier: str
    sections: Tuple[Section, ...] = ()


class InstructionKind(str, Enum):
    RECORD_TITLE = "record_title"
    SECTION_TITLE = "section_title"
    BODY_LINE = "body_line"
    SEPARATOR = "separator"


@dataclass(frozen=True)
class DrawInstruction:
    """Emitter 가 소비하는 최소 단위.

    y 는 상단 여백 기준 오프셋(그려질 당시 커서 위치)이다.
    record_index / section_index / line_index 는 어느 입력에서 나온 줄인지
    추적하기 위한 값이며, 해당하지 않으면 -1 이다.
    """

    kind: InstructionKind
    text: str
    x: float
    y: float
    height: float
    font_size: float
    record_index: int = -1
    section_index: int = -1
    line_index: int = -1


@dataclass
class Page:
    number: int
    instructions: List[DrawInstruction] = field(default_factory=list)

    def add(self, instruction: DrawInstruction) -> None:
        self.instructions.append(instruction)

    @property
    def used_height(self) -> float:
        if not self.instructions:
            return 0.0
        return max(i.y + i.height for i in self.instructions)


@dataclass
class Document:
    geometry: PageGeometry
    pages: List[Page] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def instructions(self) -> List[DrawInstruction]:
        """모든 페이지의 instruction 을 그린 순서대로 이어 붙여 반환한다."""

        return [i for page in self.pages for i in page.instructions]
