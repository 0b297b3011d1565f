from __future__ import annotations

import warnings
from typing import List, Optional, Sequence

from app.errors import EmptyInputWarning, LayoutError
from app.layout.block_layout import BlockPlan, LayoutStyle, PlanEntry, layout_section
from app.layout.document import (
    Document,
    DrawInstruction,
    InstructionKind,
    Page,
    PageGeometry,
    Record,
)
from app.layout.page_cursor import EPSILON, PageCursor
from app.layout.text_measurer import TextMeasurer
from app.logging_config import get_logger


logger = get_logger(__name__)

# 화면 표시명 치환은 이 하나뿐이다. 나머지는 첫 글자만 대문자로 바꾼다.
_DISPLAY_NAMES = {"x": "X (Twitter)"}


def record_display_name(identifier: str) -> str:
    if identifier in _DISPLAY_NAMES:
        return _DISPLAY_NAMES[identifier]
    return identifier[:1].upper() + identifier[1:]


def validate_geometry(geometry: PageGeometry) -> None:
    """빈 페이지에도 들어가지 않는 단위가 있으면 LayoutError."""

    usable = geometry.usable_height
    if usable <= 0 or geometry.content_width <= 0:
        raise LayoutError(
            f"Margins leave no room on a {geometry.page_width}x{geometry.page_height} page"
        )

    units = {
        "record heading": (
            geometry.record_title_height
            + geometry.section_title_height
            + geometry.body_line_height
        ),
        "record separator": geometry.record_separator_height,
    }
    for name, height in units.items():
        if height > usable + EPSILON:
            raise LayoutError(
                f"{name} needs {height:.2f}pt but a page only has {usable:.2f}pt"
            )


class _PaginationRun:
    """paginate() 한 번의 실행 상태. 호출마다 새로 만들어지고 공유되지 않는다."""

    def __init__(self, geometry: PageGeometry, measurer: TextMeasurer) -> None:
        self._geometry = geometry
        self._measurer = measurer
        # 제목은 굵은 글꼴로 그려지므로 그 메트릭으로 폭을 맞춘다.
        self._title_measurer = TextMeasurer(geometry.bold_font_name)
        self._style = LayoutStyle.from_geometry(geometry)
        self._cursor = PageCursor(geometry.usable_height)
        self._document = Document(geometry=geometry)
        # 첫 페이지는 순회 시작 시점에 암묵적으로 생성된다.
        self._page = Page(number=1)

    def run(self, records: Sequence[Record]) -> Document:
        for r_idx, record in enumerate(records):
            self._place_record(r_idx, record)
            if r_idx < len(records) - 1:
                self._place_separator(r_idx)

        self._document.pages.append(self._page)
        return self._document

    def _place_record(self, r_idx: int, record: Record) -> None:
        g = self._geometry
        plans: List[BlockPlan] = [
            layout_section(
                section, self._style, self._measurer, g.content_width, self._title_measurer
            )
            for section in record.sections
        ]

        # Record 제목은 첫 Section 의 제목+첫 줄과 한 덩어리로 예약해서 페이지 끝에 홀로 남지 않게 한다.
        title_height = g.record_title_height
        lead_height = self._lead_height(plans[0]) if plans else 0.0
        offset = self._reserve(title_height + lead_height)

        display_name = record_display_name(record.identifier)
        self._draw(
            InstructionKind.RECORD_TITLE,
            display_name,
            offset,
            title_height,
            self._title_measurer.fit_font_size(display_name, g.content_width, g.title_font_size),
            record_index=r_idx,
        )

        for s_idx, plan in enumerate(plans):
            if s_idx == 0:
                start = offset + title_height
            else:
                start = self._reserve(self._lead_height(plan))
            self._place_section(r_idx, s_idx, plan, start)

    def _place_section(self, r_idx: int, s_idx: int, plan: BlockPlan, start: float) -> None:
        title = plan.title
        body = plan.body

        self._draw_entry(title, start, r_idx, s_idx)
        self._draw_entry(body[0], start + title.height, r_idx, s_idx, line_index=0)

        # 이후 줄은 한 줄씩 예약하고, 넘치면 다음 페이지에서 이어 그린다.
        for l_idx, entry in enumerate(body[1:], start=1):
            offset = self._reserve(entry.height)
            self._draw_entry(entry, offset, r_idx, s_idx, line_index=l_idx)

        self._cursor.skip(self._style.section_spacing)

    def _place_separator(self, r_idx: int) -> None:
        height = self._geometry.record_separator_height
        offset = self._reserve(height)
        self._draw(InstructionKind.SEPARATOR, "", offset, height, 0.0, record_index=r_idx)

    @staticmethod
    def _lead_height(plan: BlockPlan) -> float:
        return plan.title.height + plan.body[0].height

    def _reserve(self, height: float) -> float:
        reservation = self._cursor.reserve(height)
        if reservation.fits:
            return reservation.offset

        logger.debug(
            "page %d full (%.2fpt left, %.2fpt needed); breaking",
            self._page.number,
            reservation.remaining,
            height,
        )
        self._break_page()
        reservation = self._cursor.reserve(height)
        if not reservation.fits:
            raise LayoutError(f"{height:.2f}pt does not fit on an empty page")
        return reservation.offset

    def _break_page(self) -> None:
        self._document.pages.append(self._page)
        self._cursor.advance_page()
        self._page = Page(number=self._cursor.page_count)

    def _draw_entry(
        self,
        entry: PlanEntry,
        offset: float,
        r_idx: int,
        s_idx: int,
        line_index: int = -1,
    ) -> None:
        self._draw(
            entry.kind,
            entry.text,
            offset,
            entry.height,
            entry.font_size,
            record_index=r_idx,
            section_index=s_idx,
            line_index=line_index,
        )

    def _draw(
        self,
        kind: InstructionKind,
        text: str,
        offset: float,
        height: float,
        font_size: float,
        record_index: int = -1,
        section_index: int = -1,
        line_index: int = -1,
    ) -> None:
        self._page.add(
            DrawInstruction(
                kind=kind,
                text=text,
                x=self._geometry.margin,
                y=offset,
                height=height,
                font_size=font_size,
                record_index=record_index,
                section_index=section_index,
                line_index=line_index,
            )
        )


def paginate(
    records: Sequence[Record],
    geometry: PageGeometry,
    measurer: Optional[TextMeasurer] = None,
    *,
    warn_empty: bool = True,
) -> Document:
    """Record 목록을 고정 크기 페이지들로 배치한다.

    입력 순서(Record, Section 모두)를 그대로 유지한다. 같은 입력이면 항상
    같은 결과를 낸다. Record 가 없으면 EmptyInputWarning 을 내고 빈 페이지
    하나짜리 Document 를 반환한다. 그 문서를 내보낼지는 호출자가 정한다.
    빈 입력 처리를 이미 결정한 호출자는 warn_empty=False 로 경고를 끈다.
    """

    validate_geometry(geometry)
    measurer = measurer or TextMeasurer(geometry.font_name)

    if not records and warn_empty:
        warnings.warn("No records to paginate; returning a single empty page", EmptyInputWarning)

    document = _PaginationRun(geometry, measurer).run(records)
    logger.info("paginated %d record(s) into %d page(s)", len(records), document.page_count)
    return document
