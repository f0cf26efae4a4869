# iproas/core/logging.py
# -----------------------------------------------------------------------------
# Loguru based logging setup
# - rotation/backtrace/level from settings
# - called once on application startup
# -----------------------------------------------------------------------------
from pathlib import Path

from loguru import logger

from iproas.core.config import settings


def setup_logging() -> None:
    log_dir = Path(settings.LOG_DIR)
    log_dir.mkdir(exist_ok=True, parents=True)

    logger.remove()  # drop the default stderr handler
    logger.add(
        log_dir / "app.log",
        rotation="10 MB",
        retention="10 files",
        enqueue=True,  # multiprocess safe
        backtrace=True,
        diagnose=settings.ENV == "dev",
        level=settings.LOG_LEVEL,
    )
    logger.info(f"[logging] {settings.APP_NAME} ({settings.ENV}) -> {log_dir}")
