from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Response
from fastapi.responses import FileResponse

from app.config import settings
from app.errors import ExportError, GenerationError
from app.infra.storage import Storage, get_storage
from app.logging_config import get_logger
from app.models import StrategyContent, StrategyRequest
from app.services.export_service import ExportService
from app.services.strategy_service import StrategyService


logger = get_logger(__name__)

app = FastAPI(title="SocialBoost Strategy API")


@lru_cache
def get_strategy_service() -> StrategyService:
    return StrategyService()


def get_export_service() -> ExportService:
    # export 마다 새 서비스를 쓴다 (상태 공유 없음).
    return ExportService()


def get_download_storage() -> Storage:
    return get_storage()


@app.post("/strategies", response_model=StrategyContent, response_model_by_alias=True)
def create_strategy(
    request: StrategyRequest,
    service: StrategyService = Depends(get_strategy_service),
):
    try:
        return service.create_strategy(request)
    except GenerationError:
        logger.exception("strategy generation failed")
        raise HTTPException(
            status_code=502,
            detail="전략 생성 중 문제가 발생했습니다. 다시 시도해 주세요.",
        )


@app.post("/export")
def export_pdf(
    content: StrategyContent,
    color_scheme: Optional[Literal["light", "dark"]] = Query(None, alias="colorScheme"),
    service: ExportService = Depends(get_export_service),
):
    """전략 결과를 PDF 하나로 내보낸다.

    - 전략이 비어 있고 empty_export_policy 가 skip 이면 204
    - 실패 시 500, 파일은 제공하지 않는다
    """

    try:
        result = service.export(content, color_scheme=color_scheme)
    except ExportError:
        raise HTTPException(status_code=500, detail="PDF 생성에 실패했습니다.")

    if result is None:
        return Response(status_code=204)

    return FileResponse(
        result.path,
        media_type="application/pdf",
        filename=result.file_name,
        headers={"X-Export-Id": result.export_id, "X-Page-Count": str(result.page_count)},
    )


@app.get("/download/{export_id}")
def download(export_id: str, storage: Storage = Depends(get_download_storage)):
    path = Path(storage.get_export_path(export_id))

    if not path.exists():
        raise HTTPException(
            status_code=404,
            detail="존재하지 않는 export 입니다.",
        )

    return FileResponse(path, media_type="application/pdf", filename=settings.export_file_name)
