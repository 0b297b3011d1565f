from __future__ import annotations

import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from app.config import settings
from app.logging_config import get_logger


logger = get_logger(__name__)


class Storage(ABC):
    """export 된 PDF 파일 저장소 추상화.

    현재는 로컬 파일 시스템 구현(LocalStorage)만 제공한다.
    """

    @abstractmethod
    def save_export(self, export_id: str, data: bytes) -> str:  # returns path
        """PDF를 저장하고, 저장 경로를 문자열로 반환한다.

        쓰기가 끝나기 전까지는 최종 경로에 파일이 나타나지 않아야 한다.
        """

    @abstractmethod
    def get_export_path(self, export_id: str) -> str:
        """PDF의 예상 경로를 문자열로 반환한다.

        파일 존재 여부는 호출자가 Path.exists() 등으로 확인한다.
        """

    @abstractmethod
    def delete_export(self, export_id: str) -> None:
        """PDF를 삭제한다 (없으면 무시)."""


class LocalStorage(Storage):
    """로컬 디렉터리 기반 Storage 구현.

    기본 베이스 디렉터리는 settings.data_dir (기본 /data)를 사용한다.
    구조:
    - {base}/exports/{export_id}.pdf
    """

    def __init__(self, base_dir: Optional[str | Path] = None) -> None:
        self._base_dir = Path(base_dir or settings.data_dir)

    def _export_path(self, export_id: str) -> Path:
        return self._base_dir / "exports" / f"{export_id}.pdf"

    def save_export(self, export_id: str, data: bytes) -> str:
        path = self._export_path(export_id)
        path.parent.mkdir(parents=True, exist_ok=True)

        # 같은 디렉터리의 임시 파일에 다 쓴 뒤 rename 한다.
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{export_id}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, path)
        except BaseException:
            logger.exception("failed to store export %s", export_id)
            Path(tmp_name).unlink(missing_ok=True)
            raise
        return str(path)

    def get_export_path(self, export_id: str) -> str:
        return str(self._export_path(export_id))

    def delete_export(self, export_id: str) -> None:
        path = self._export_path(export_id)
        if path.exists():
            path.unlink()


def get_storage(backend: Optional[str] = None) -> Storage:
    """현재 설정(settings.storage_backend)에 따른 Storage 인스턴스를 반환한다.

    로컬 스토리지만 지원하며, 이후 S3/MinIO 등은 여기서 분기한다.
    """

    backend = backend or settings.storage_backend
    if backend == "local":
        return LocalStorage(base_dir=settings.data_dir)
    raise ValueError(f"Unsupported storage backend: {backend!r}")
