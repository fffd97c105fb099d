"""
Error handling utilities: logging setup and retry logic for export writes.
"""

import time
from typing import Any, Callable, Optional, Tuple, Type

from loguru import logger

import src.config as cfg
from src.core.exceptions import ExportError


class ErrorHandler:
    """Centralised error handling and recovery utilities."""

    def __init__(self, log_to_file: bool = True) -> None:
        self.sink_id: Optional[int] = None
        if log_to_file:
            self.sink_id = self._setup_logging()

    # -- Logging -----------------------------------------------------------

    @staticmethod
    def _setup_logging() -> int:
        """Configure loguru sinks (console + rotating file)."""
        cfg.LOGS_DIR.mkdir(parents=True, exist_ok=True)
        log_path = cfg.LOGS_DIR / "search_{time:YYYY-MM-DD}.log"
        sink_id = logger.add(
            str(log_path),
            rotation="10 MB",
            retention="7 days",
            level="DEBUG",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level:<8} | {message}",
        )
        logger.info("Logging initialised  ->  {}", cfg.LOGS_DIR)
        return sink_id

    # -- Retry with exponential backoff ------------------------------------

    @staticmethod
    def retry_with_backoff(
        func: Callable,
        *args: Any,
        max_retries: int = cfg.MAX_RETRIES,
        retry_on: Tuple[Type[Exception], ...] = (ExportError,),
        **kwargs: Any,
    ) -> Any:
        """
        Call *func* up to *max_retries* times with exponential backoff.

        Only exceptions listed in *retry_on* trigger a retry; anything else
        propagates immediately. Raises the last exception if all retries fail.
        """
        last_exc: Exception | None = None
        for attempt in range(1, max_retries + 1):
            try:
                return func(*args, **kwargs)
            except retry_on as exc:
                last_exc = exc
                if attempt == max_retries:
                    break
                wait = min(
                    cfg.RETRY_BACKOFF_BASE ** attempt,
                    cfg.RETRY_BACKOFF_MAX,
                )
                logger.warning(
                    "Attempt {}/{} failed ({}). Retrying in {:.1f}s ...",
                    attempt,
                    max_retries,
                    exc,
                    wait,
                )
                time.sleep(wait)
        raise last_exc  # type: ignore[misc]
