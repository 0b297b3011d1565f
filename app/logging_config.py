"""로깅 설정.

모듈에서는 아래처럼 사용한다::

    from app.logging_config import get_logger
    logger = get_logger(__name__)
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from app.config import settings


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_MAX_SIZE_MB = 10
LOG_BACKUP_COUNT = 3

_ROOT_LOGGER_NAME = "app"


def _configure_root() -> logging.Logger:
    root = logging.getLogger(_ROOT_LOGGER_NAME)

    # 핸들러 중복 등록 방지
    if root.handlers:
        return root

    root.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(console)

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=LOG_MAX_SIZE_MB * 1024 * 1024,
            backupCount=LOG_BACKUP_COUNT,
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(file_handler)

    return root


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """`app` 로거 하위의 로거를 반환한다.

    처음 호출될 때 콘솔(및 설정 시 파일) 핸들러를 한 번만 붙인다.
    """

    _configure_root()
    if not name or name == _ROOT_LOGGER_NAME:
        return logging.getLogger(_ROOT_LOGGER_NAME)
    if not name.startswith(_ROOT_LOGGER_NAME + "."):
        name = f"{_ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
