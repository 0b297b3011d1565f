from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from app.layout.document import InstructionKind, PageGeometry, Section
from app.layout.text_measurer import TextMeasurer


@dataclass(frozen=True)
class LayoutStyle:
    section_title_font_size: float
    body_font_size: float
    line_height_multiplier: float
    section_spacing: float

    @classmethod
    def from_geometry(cls, geometry: PageGeometry) -> "LayoutStyle":
        return cls(
            section_title_font_size=geometry.section_title_font_size,
            body_font_size=geometry.body_font_size,
            line_height_multiplier=geometry.line_height_multiplier,
            section_spacing=geometry.section_spacing,
        )

    @property
    def title_height(self) -> float:
        return self.section_title_font_size * self.line_height_multiplier

    @property
    def body_line_height(self) -> float:
        return self.body_font_size * self.line_height_multiplier


@dataclass(frozen=True)
class PlanEntry:
    kind: InstructionKind
    text: str
    height: float
    font_size: float


@dataclass(frozen=True)
class BlockPlan:
    entries: Tuple[PlanEntry, ...]
    total_height: float

    @property
    def title(self) -> PlanEntry:
        return self.entries[0]

    @property
    def body(self) -> Tuple[PlanEntry, ...]:
        return self.entries[1:]


def layout_section(
    section: Section,
    style: LayoutStyle,
    measurer: TextMeasurer,
    content_width: float,
    title_measurer: Optional[TextMeasurer] = None,
) -> BlockPlan:
    """Section 하나를 제목 1줄 + 본문 줄 목록으로 펼친다.

    페이지 상태와 무관한 순수 함수이다. 남은 공간 판단은 PageCursor 몫이다.
    본문이 비어 있어도 빈 줄 하나가 자리를 차지한다. 제목은 줄바꿈하지 않고,
    content_width 를 넘으면 글자 크기를 줄여 한 줄에 맞춘다 (줄 높이는 그대로).
    """

    title_measurer = title_measurer or measurer
    title = PlanEntry(
        kind=InstructionKind.SECTION_TITLE,
        text=section.title,
        height=style.title_height,
        font_size=title_measurer.fit_font_size(
            section.title, content_width, style.section_title_font_size
        ),
    )
    body_lines = measurer.wrap(section.body, content_width, style.body_font_size)
    body = tuple(
        PlanEntry(
            kind=InstructionKind.BODY_LINE,
            text=line.text,
            height=style.body_line_height,
            font_size=style.body_font_size,
        )
        for line in body_lines
    )

    total = title.height + sum(entry.height for entry in body) + style.section_spacing
    return BlockPlan(entries=(title,) + body, total_height=total)
