"""Application configuration and env loading."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from pathlib import Path

from broadside.app.settings import (
    AUTOPILOT_TURN_DELAY_SECONDS,
    COMPUTER_TURN_DELAY_SECONDS,
    EngineSettings,
)
from broadside.ai.random_target import DEFAULT_SAMPLE_LIMIT
from broadside.core.fleet import PLACEMENT_ATTEMPT_LIMIT

logger = logging.getLogger(__name__)

DEFAULT_ENV_FILES: tuple[str, ...] = (
    "appdata/config/.env",
    "appdata/config/.env.local",
    ".env",
    ".env.local",
)


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> None:
    """Load KEY=VALUE pairs from an env file into process environment.

    By default, values from the env file overwrite existing environment variables.
    """
    env_path = _resolve_env_path(path)
    if not env_path.exists():
        return

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue

        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]

        if override_existing or key not in os.environ:
            os.environ[key] = value


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> None:
    """Load env files left-to-right; later files win."""
    for path in tuple(paths) if paths is not None else DEFAULT_ENV_FILES:
        load_env_file(path, override_existing=override_existing)


def load_engine_settings(*, seed: int | None = None) -> EngineSettings:
    """Build engine settings from BROADSIDE_* environment variables.

    An explicit `seed` overrides BROADSIDE_SEED.
    """
    return EngineSettings(
        computer_delay_seconds=_float("BROADSIDE_COMPUTER_DELAY_S", COMPUTER_TURN_DELAY_SECONDS),
        autopilot_delay_seconds=_float("BROADSIDE_AUTOPILOT_DELAY_S", AUTOPILOT_TURN_DELAY_SECONDS),
        target_sample_limit=_int("BROADSIDE_TARGET_SAMPLES", DEFAULT_SAMPLE_LIMIT),
        placement_attempt_limit=_int("BROADSIDE_PLACEMENT_ATTEMPTS", PLACEMENT_ATTEMPT_LIMIT),
        seed=seed if seed is not None else _optional_int("BROADSIDE_SEED"),
    )


def _float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("config_value_ignored name=%s value=%r", name, raw)
        return default


def _int(name: str, default: int) -> int:
    value = _optional_int(name)
    return default if value is None else value


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("config_value_ignored name=%s value=%r", name, raw)
        return None


def _resolve_env_path(path: str) -> Path:
    """Resolve env path from cwd, then project root."""
    candidate = Path(path)
    if candidate.exists() or candidate.is_absolute():
        return candidate
    # Fallback for IDE run configs with different working directory.
    project_root = Path(__file__).resolve().parents[2]
    return project_root / path
