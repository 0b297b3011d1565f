from dataclasses import dataclass
from io import BytesIO
from typing import Callable, Optional

from reportlab.lib.colors import Color, HexColor
from reportlab.pdfgen import canvas

from app.errors import EmissionError, ExportCancelled
from app.layout.document import Document, DrawInstruction, InstructionKind
from app.logging_config import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class ColorScheme:
    background: Optional[Color]
    text: Color
    heading: Color
    divider: Color


COLOR_SCHEMES = {
    # light 는 배경을 칠하지 않는다 (흰 종이 그대로).
    "light": ColorScheme(
        background=None,
        text=HexColor("#1F2937"),
        heading=HexColor("#EA580C"),
        divider=HexColor("#D1D5DB"),
    ),
    "dark": ColorScheme(
        background=HexColor("#0F172A"),
        text=HexColor("#E5E7EB"),
        heading=HexColor("#FB923C"),
        divider=HexColor("#334155"),
    ),
}


class PDFGenerator:
    """배치가 끝난 Document 를 PDF 바이트로 직렬화한다.

    instruction 은 기록된 순서 그대로, 기록된 좌표(x=여백, y=여백+오프셋)에 그린다.
    색상은 생성자에 넘긴 color_scheme 으로만 결정되며 전역 상태를 건드리지 않는다.
    """

    def __init__(
        self,
        color_scheme: str = "light",
        font_name: str = "Helvetica",
        bold_font_name: str = "Helvetica-Bold",
        title: str = "Social Media Strategy",
    ) -> None:
        if color_scheme not in COLOR_SCHEMES:
            raise ValueError(f"Unknown color scheme: {color_scheme!r}")
        self._scheme = COLOR_SCHEMES[color_scheme]
        self._font_name = font_name
        self._bold_font_name = bold_font_name
        self._title = title

    def serialize(
        self,
        document: Document,
        should_cancel: Optional[Callable[[], bool]] = None,
    ) -> bytes:
        g = document.geometry
        buffer = BytesIO()
        try:
            c = canvas.Canvas(buffer, pagesize=(g.page_width, g.page_height))
            c.setTitle(self._title)

            for page in document.pages:
                if should_cancel is not None and should_cancel():
                    raise ExportCancelled(f"Export cancelled before page {page.number}")

                self._paint_background(c, g.page_width, g.page_height)
                for instruction in page.instructions:
                    self._draw(c, instruction, g.page_height, g.margin, g.content_width)
                c.showPage()

            c.save()
            data = buffer.getvalue()
        except ExportCancelled:
            logger.info("export cancelled; discarding partial output")
            raise
        except Exception as e:
            raise EmissionError(f"Failed to render PDF: {e}") from e
        finally:
            buffer.close()

        logger.info("rendered %d page(s), %d bytes", document.page_count, len(data))
        return data

    def _paint_background(self, c: canvas.Canvas, width: float, height: float) -> None:
        if self._scheme.background is None:
            return
        c.saveState()
        c.setFillColor(self._scheme.background)
        c.rect(0, 0, width, height, stroke=0, fill=1)
        c.restoreState()

    def _draw(
        self,
        c: canvas.Canvas,
        instruction: DrawInstruction,
        page_height: float,
        margin: float,
        content_width: float,
    ) -> None:
        # reportlab 은 좌하단 원점이므로 위에서부터의 오프셋을 뒤집는다.
        top = page_height - margin - instruction.y

        if instruction.kind is InstructionKind.SEPARATOR:
            mid = top - instruction.height / 2
            c.setStrokeColor(self._scheme.divider)
            c.setLineWidth(1)
            c.line(instruction.x, mid, instruction.x + content_width, mid)
            return

        if instruction.kind is InstructionKind.BODY_LINE:
            c.setFont(self._font_name, instruction.font_size)
            c.setFillColor(self._scheme.text)
        else:
            c.setFont(self._bold_font_name, instruction.font_size)
            c.setFillColor(self._scheme.heading)

        # 베이스라인은 줄 상자 위에서 글자 크기만큼 내려간 위치
        c.drawString(instruction.x, top - instruction.font_size, instruction.text)
