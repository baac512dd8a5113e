"""App-level logging policy over the runtime logging pipeline."""

from __future__ import annotations

import logging
import os
from datetime import UTC, datetime

from broadside.infra.app_data import resolve_logs_dir
from broadside.runtime.logging import (
    JsonFormatter,
    LoggingConfig,
    configure_logging,
    resolve_log_level_name,
)

__all__ = ["JsonFormatter", "build_logging_config", "setup_logging"]


def build_logging_config(*, file_logging: bool = True) -> LoggingConfig:
    """Resolve the logging configuration from environment variables."""
    console_format = os.getenv("LOG_FORMAT", "text").strip().lower() or "text"
    return LoggingConfig(
        level_name=resolve_log_level_name(default="INFO"),
        console_format=console_format,
        file_path=_resolve_run_log_file_path() if file_logging else None,
    )


def setup_logging(*, file_logging: bool = True) -> None:
    """Configure application logging."""
    config = build_logging_config(file_logging=file_logging)
    configure_logging(config)
    if config.file_path:
        logging.getLogger(__name__).info("logging_file=%s", config.file_path)


def _resolve_run_log_file_path() -> str:
    base_dir = resolve_logs_dir()
    base_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S")
    return str(base_dir / f"broadside_run_{stamp}.jsonl")
