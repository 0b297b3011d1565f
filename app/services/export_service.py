import threading
from dataclasses import dataclass
from typing import Optional
from uuid import uuid4

from app.config import Settings, settings as default_settings
from app.errors import ExportCancelled, ExportError
from app.infra.pdf_generator import PDFGenerator
from app.infra.storage import Storage, get_storage
from app.layout.document import PageGeometry
from app.layout.paginator import paginate
from app.layout.text_measurer import TextMeasurer
from app.logging_config import get_logger
from app.models import StrategyContent


logger = get_logger(__name__)


@dataclass(frozen=True)
class ExportResult:
    export_id: str
    path: str
    file_name: str
    page_count: int


class ExportService:
    """전략 결과 → 페이지 배치 → PDF → 저장 파이프라인.

    호출마다 Document/커서/캔버스를 새로 만들기 때문에 동시에 여러 export 가
    돌아도 상태를 공유하지 않는다. 실패/취소 시에는 파일이 남지 않는다.
    """

    def __init__(
        self,
        storage: Optional[Storage] = None,
        app_settings: Optional[Settings] = None,
        geometry: Optional[PageGeometry] = None,
    ) -> None:
        self._settings = app_settings or default_settings
        self._storage = storage or get_storage()
        self._geometry = geometry or PageGeometry.from_settings(self._settings)

    def export(
        self,
        content: StrategyContent,
        *,
        color_scheme: Optional[str] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> Optional[ExportResult]:
        """PDF를 만들어 저장하고 ExportResult 를 반환한다.

        - 전략이 하나도 없고 empty_export_policy 가 "skip" 이면 None 을 반환한다.
        - 실패는 ExportError 하위 예외로 한 번만 올라간다. 재시도하지 않는다.
        """

        records = content.to_records()
        if not records and self._settings.empty_export_policy == "skip":
            logger.warning("no strategies to export; skipping")
            return None

        export_id = str(uuid4())
        is_cancelled = cancel_event.is_set if cancel_event is not None else None

        try:
            # 빈 입력 정책은 위에서 이미 결정했으므로 경고는 끈다.
            document = paginate(
                records,
                self._geometry,
                TextMeasurer(self._geometry.font_name),
                warn_empty=False,
            )

            generator = PDFGenerator(
                color_scheme=color_scheme or self._settings.color_scheme,
                font_name=self._geometry.font_name,
                bold_font_name=self._geometry.bold_font_name,
            )
            data = generator.serialize(document, should_cancel=is_cancelled)

            if is_cancelled is not None and is_cancelled():
                raise ExportCancelled("Export cancelled before storing")

            path = self._storage.save_export(export_id, data)
        except ExportCancelled:
            logger.info("export %s cancelled", export_id)
            raise
        except ExportError:
            logger.exception("export %s failed", export_id)
            raise
        except (ValueError, OSError) as e:
            logger.exception("export %s failed", export_id)
            raise ExportError(str(e)) from e

        logger.info("export %s stored at %s (%d pages)", export_id, path, document.page_count)
        return ExportResult(
            export_id=export_id,
            path=path,
            file_name=self._settings.export_file_name,
            page_count=document.page_count,
        )
