from __future__ import annotations

from loguru import logger

from subsleuth.config import Settings

from .error import CacheDirectoryError, LoggingSetupError


def setup_logging(settings: Settings) -> int:
    """Send all log records to the log file in the cache directory.

    The default stderr sink is dropped, the terminal is owned by the TUI.
    The cache directory is created here since the log file lives in it.
    Returns the loguru handler id.
    """
    try:
        settings.cache_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise CacheDirectoryError(path=settings.cache_dir, error=exc) from exc

    logger.remove()
    try:
        return logger.add(
            settings.log_path,
            level=settings.log_level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} - {message}",
            encoding="utf-8",
        )
    except OSError as exc:
        raise LoggingSetupError(path=settings.log_path, error=exc) from exc
