"""
Configuration loader for the Logentries hook.

Purpose:
- Centralize how the account token and collector endpoint are assembled.
- Keep tracing simple: YAML -> environment overrides -> HookSettings -> handler.

Sources:
- logentries.yaml (optional, local file): a top-level `logentries` mapping
  with token/host/port/level/json_output keys.
- environment variables (.env is recommended, gitignored): the token and
  overrides for every YAML key.

Logic flow (high level):
1) load_settings() loads .env once, then reads the YAML file if given.
2) LOGENTRIES_* environment variables override YAML values.
3) The token is required; errors name the env var so the caller knows which
   source is incomplete.
4) HookSettings is consumed by logging_config.setup_logging() or directly by
   new_logentries_hook().
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import logging
import os

import yaml

from .hook import DEFAULT_HOST, DEFAULT_PORT, MAX_PORT

TOKEN_ENV = "LOGENTRIES_TOKEN"
_ENV_LOADED = False


@dataclass(frozen=True)
class HookSettings:
    """
    Resolved settings for one Logentries handler.
    """

    token: str
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    level: str = "INFO"
    json_output: bool = False


def _read_env(var_name: str) -> str | None:
    value = os.getenv(var_name)
    if value is None or value == "":
        return None
    return value


def _to_int(name: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"'{name}' must be an integer, got {value!r}.") from exc


def _to_port(value: Any) -> int:
    port = _to_int("port", value)
    if not 0 <= port <= MAX_PORT:
        raise ValueError(f"'port' must be between 0 and {MAX_PORT}, got {port}.")
    return port


def _to_level(value: Any) -> str:
    level = str(value).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Unknown log level {value!r}.")
    return level


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def _load_env_file(path: str = ".env") -> None:
    # Minimal .env loader to avoid external dependencies.
    global _ENV_LOADED
    if _ENV_LOADED:
        return
    if not os.path.exists(path):
        _ENV_LOADED = True
        return

    with open(path, "r", encoding="utf-8") as handle:
        for raw_line in handle:
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip("'\"")
            if key and value and key not in os.environ:
                os.environ[key] = value

    _ENV_LOADED = True


def _load_yaml_section(path: str) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path} must contain a mapping.")
    section = raw.get("logentries", {})
    if not isinstance(section, dict):
        raise ValueError("'logentries' must be a mapping of settings.")
    return section


def load_settings(path: str | None = None) -> HookSettings:
    """
    Resolve HookSettings from an optional YAML file plus the environment.

    Inputs:
    - path: optional logentries.yaml path. Missing keys fall back to
      defaults (the fixed collector endpoint, INFO, plain output).

    Outputs:
    - HookSettings with a non-empty token.

    Next:
    - Pass to setup_logging(settings=...) to attach the handler.
    """

    _load_env_file()
    section = _load_yaml_section(path) if path else {}

    token = _read_env(TOKEN_ENV) or section.get("token")
    if not token:
        raise ValueError(
            f"Missing Logentries token: set '{TOKEN_ENV}' or 'logentries.token' in the YAML file."
        )

    host = _read_env("LOGENTRIES_HOST") or section.get("host") or DEFAULT_HOST
    port = _read_env("LOGENTRIES_PORT") or section.get("port") or DEFAULT_PORT
    level = _read_env("LOGENTRIES_LOG_LEVEL") or section.get("level") or "INFO"
    json_output = _read_env("LOGENTRIES_JSON_LOGS") or section.get("json_output") or False

    return HookSettings(
        token=str(token),
        host=str(host),
        port=_to_port(port),
        level=_to_level(level),
        json_output=_to_bool(json_output),
    )
