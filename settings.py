import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List

from gateway import DEFAULT_COMMAND, DEFAULT_TIMEOUT
from utils import unique_paths

APP_NAME = "xdg-mimer"
ENV_DATA_DIR = "XDG_MIMER_DATA_DIR"
SETTINGS_FILENAME = "xdg_mimer_settings.json"
MIN_TIMEOUT = 0.5
MAX_TIMEOUT = 60.0
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class StoredSettings:
    geometry: str = ""
    extra_sources: List[str] = field(default_factory=list)
    registry_command: str = DEFAULT_COMMAND
    registry_timeout: float = DEFAULT_TIMEOUT
    log_level: str = ""


def app_data_dir(app_name: str = APP_NAME) -> str:
    override = os.getenv(ENV_DATA_DIR)
    if override:
        return override
    base = os.getenv("XDG_CONFIG_HOME") or os.path.join(os.path.expanduser("~"), ".config")
    return os.path.join(base, app_name)


def default_settings_path() -> str:
    return os.path.join(app_data_dir(), SETTINGS_FILENAME)


def _clamp_timeout(value: Any) -> float:
    if isinstance(value, bool):
        return DEFAULT_TIMEOUT
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return DEFAULT_TIMEOUT
    if seconds != seconds:
        return DEFAULT_TIMEOUT
    return max(MIN_TIMEOUT, min(MAX_TIMEOUT, seconds))


def load_settings(path: str) -> StoredSettings:
    settings = StoredSettings()
    if not os.path.exists(path):
        return settings
    try:
        with open(path, "r", encoding="utf-8") as fh:
            payload = json.load(fh)
    except (OSError, json.JSONDecodeError):
        return settings
    if not isinstance(payload, dict):
        return settings
    settings.geometry = str(payload.get("geometry") or "")
    sources = payload.get("extra_sources", [])
    if isinstance(sources, list):
        settings.extra_sources = unique_paths(value for value in sources if isinstance(value, str))
    command = payload.get("registry_command")
    if isinstance(command, str) and command.strip():
        settings.registry_command = command.strip()
    if "registry_timeout" in payload:
        settings.registry_timeout = _clamp_timeout(payload.get("registry_timeout"))
    level = payload.get("log_level")
    if isinstance(level, str) and level.strip().upper() in LOG_LEVELS:
        settings.log_level = level.strip().upper()
    return settings


def settings_payload(settings: StoredSettings) -> Dict[str, Any]:
    return {
        "geometry": settings.geometry,
        "extra_sources": list(settings.extra_sources),
        "registry_command": settings.registry_command or DEFAULT_COMMAND,
        "registry_timeout": _clamp_timeout(settings.registry_timeout),
        "log_level": settings.log_level,
    }


def save_settings(path: str, settings: StoredSettings) -> None:
    try:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w", encoding="utf-8") as fh:
            json.dump(settings_payload(settings), fh, indent=2)
    except OSError:
        pass
