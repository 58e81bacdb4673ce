"""Configuration loading (TOML, env vars)."""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from agentstream.types.config import StreamConfig

logger = logging.getLogger(__name__)

# Load .env from current directory (and parents), won't override existing env vars
load_dotenv()

ENV_MAP = {
    "tick_interval_ms": "AGENTSTREAM_TICK_MS",
    "replay_chunk_size": "AGENTSTREAM_CHUNK_SIZE",
}


def _coerce_int(key: str, value: Any, source: str) -> int | None:
    if isinstance(value, bool):
        logger.warning("Ignoring non-integer %s=%r from %s", key, value, source)
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-integer %s=%r from %s", key, value, source)
        return None


def load_env_config() -> dict[str, int]:
    """Load stream settings from environment variables."""
    config: dict[str, int] = {}
    for key, env_var in ENV_MAP.items():
        raw = os.environ.get(env_var)
        if raw is None or not raw.strip():
            continue
        value = _coerce_int(key, raw.strip(), env_var)
        if value is not None:
            config[key] = value
    return config


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning("Cannot read config file %s: %s", path, exc)
        return {}


def find_config_file(cwd: str | None = None) -> Path | None:
    """Locate the first config.toml in cwd, the current dir, or ~/.agentstream."""
    candidates: list[Path] = []
    if cwd:
        candidates.append(Path(cwd) / ".agentstream" / "config.toml")
    candidates.append(Path.cwd() / ".agentstream" / "config.toml")
    candidates.append(Path.home() / ".agentstream" / "config.toml")

    for path in candidates:
        if path.is_file():
            return path
    return None


def load_toml_config(cwd: str | None = None) -> dict[str, int]:
    """Load the ``[stream]`` table from the nearest config.toml."""
    path = find_config_file(cwd)
    if path is None:
        return {}

    section = _read_toml(path).get("stream", {})
    if not isinstance(section, dict):
        logger.warning("Ignoring non-table [stream] in %s", path)
        return {}

    config: dict[str, int] = {}
    for key in ENV_MAP:
        if key in section:
            value = _coerce_int(key, section[key], str(path))
            if value is not None:
                config[key] = value
    return config


def load_stream_config(cwd: str | None = None, **overrides: int | None) -> StreamConfig:
    """Build a StreamConfig from defaults, TOML, env vars, then explicit overrides.

    Overrides set to None are ignored, so CLI options can be passed straight
    through.
    """
    merged: dict[str, int] = {}
    merged.update(load_toml_config(cwd))
    merged.update(load_env_config())
    merged.update({k: v for k, v in overrides.items() if v is not None})
    return StreamConfig(**merged)
