import sys
import logging
import re
from typing import Any

from loguru import logger

from dpc_rankings.config.settings import settings

EMAIL_PATTERN = re.compile(r"[\w.+-]+@[\w-]+(\.[\w-]+)+")


def mask_email(value: str) -> str:
    """Masks the local part of any e-mail address found in ``value``."""

    def _mask(match: "re.Match[str]") -> str:
        local, _, domain = match.group(0).partition("@")
        return f"{local[:1]}****@{domain}"

    return EMAIL_PATTERN.sub(_mask, value)


def contact_info_filter(record: dict[str, Any]) -> bool:
    """Filter function to mask contact details (usually from the User-Agent) in log records."""
    record["message"] = mask_email(record["message"])

    if "extra" in record and isinstance(record["extra"], dict):
        for key, value in record["extra"].items():
            if isinstance(value, str):
                record["extra"][key] = mask_email(value)

    return True  # Keep the record after masking


def setup_logging() -> None:
    """Configures Loguru logger based on application settings."""
    logger.remove()  # Remove default handler

    logger.add(
        sys.stderr,
        level=settings.log_level.upper(),
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=True,
        diagnose=False,
        filter=contact_info_filter,
    )

    logger.info(f"Logging initialized with level: {settings.log_level}")

    # Intercept standard logging messages (httpx logs through stdlib logging)
    class InterceptHandler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            try:
                level = logger.level(record.levelname).name
            except ValueError:
                level = record.levelno

            # Find caller from where originated the logged message
            frame, depth = logging.currentframe(), 2
            while frame.f_code.co_filename == logging.__file__:
                frame = frame.f_back
                depth += 1

            logger.opt(depth=depth, exception=record.exc_info).log(
                level, record.getMessage()
            )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logger.debug("Standard logging intercepted.")
