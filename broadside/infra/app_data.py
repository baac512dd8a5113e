"""App-data directory resolution."""

from __future__ import annotations

import os
from pathlib import Path


def resolve_project_root() -> Path:
    return Path(__file__).resolve().parents[2]


def resolve_app_data_root() -> Path:
    """Resolve app-data root directory for runtime state."""
    configured = os.getenv("BROADSIDE_APP_DATA_DIR", "").strip()
    if configured:
        candidate = Path(configured)
        if candidate.is_absolute():
            return candidate
        return resolve_project_root() / candidate
    return resolve_project_root() / "appdata"


def resolve_logs_dir() -> Path:
    """Resolve logs directory, honoring BROADSIDE_LOG_DIR."""
    configured = os.getenv("BROADSIDE_LOG_DIR", "").strip()
    if configured:
        candidate = Path(configured)
        if candidate.is_absolute():
            return candidate
        return resolve_app_data_root() / candidate
    return resolve_app_data_root() / "logs"
