"""Server configuration.

Values are read, in priority order, from:

1. os.environ (explicit environment variables take precedence)
2. a .env file (defaults to cwd/.env)
3. ~/.time-mcp/configuration.json
4. built-in defaults
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import dotenv_values

logger = logging.getLogger(__name__)

SERVER_NAME = "time-mcp"
SERVER_VERSION = "0.0.1"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 4001

TIME_MCP_CONFIG_FILE = Path.home() / ".time-mcp" / "configuration.json"

# env var -> key in configuration.json
_ENV_KEYS = {
    "TIME_MCP_TIMEZONE": "default_timezone",
    "MCP_HOST": "host",
    "MCP_PORT": "port",
    "LOG_LEVEL": "log_level",
    "LOG_FORMAT": "log_format",
}

_LOCALTIME_PATH = Path("/etc/localtime")


# ---------------------------------------------------------------------------
# Low-level config file access
# ---------------------------------------------------------------------------


def get_file_config(config_file: Path | None = None) -> dict[str, Any]:
    """Load configuration from ~/.time-mcp/configuration.json."""
    config_file = config_file or TIME_MCP_CONFIG_FILE
    if not config_file.exists():
        return {}
    try:
        with open(config_file, encoding="utf-8-sig") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable config file %s: %s", config_file, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: top level is not an object", config_file)
        return {}
    return data


def _is_valid_zone(name: str) -> bool:
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return False
    return True


def guess_local_timezone(localtime_path: Path | None = None) -> str:
    """Return the host's IANA timezone name.

    Checks the TZ environment variable first, then the /etc/localtime
    symlink target. Falls back to "UTC" when neither names a known zone.
    """
    tz_env = os.environ.get("TZ", "").lstrip(":").strip()
    if tz_env and _is_valid_zone(tz_env):
        return tz_env

    localtime_path = localtime_path or _LOCALTIME_PATH
    try:
        target = str(localtime_path.resolve())
    except OSError:
        target = ""
    if "zoneinfo/" in target:
        name = target.split("zoneinfo/", 1)[1]
        if _is_valid_zone(name):
            return name

    return "UTC"


# ---------------------------------------------------------------------------
# ServerConfig
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ServerConfig:
    """Runtime configuration for the time tools server."""

    default_timezone: str = field(default_factory=guess_local_timezone)
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    log_format: str = "auto"

    @classmethod
    def load(
        cls,
        dotenv_path: Path | None = None,
        config_file: Path | None = None,
    ) -> ServerConfig:
        """
        Build a config from the environment, .env and the config file.

        Args:
            dotenv_path: Optional path to .env file (defaults to cwd/.env)
            config_file: Optional path to configuration.json

        Raises:
            ValueError: If the port is not an integer or the log level is unknown
        """
        values: dict[str, Any] = {}

        file_config = get_file_config(config_file)
        for key in _ENV_KEYS.values():
            if file_config.get(key) not in (None, ""):
                values[key] = file_config[key]

        dotenv_path = dotenv_path or Path.cwd() / ".env"
        dotenv = dotenv_values(dotenv_path) if dotenv_path.exists() else {}

        for env_var, key in _ENV_KEYS.items():
            value = os.environ.get(env_var) or dotenv.get(env_var)
            if value:
                values[key] = value

        if "port" in values:
            try:
                values["port"] = int(values["port"])
            except (TypeError, ValueError) as e:
                raise ValueError(f"Invalid MCP_PORT: {values['port']!r}") from e

        if "log_level" in values:
            level = str(values["log_level"]).strip().upper()
            if level not in logging.getLevelNamesMapping():
                raise ValueError(f"Invalid LOG_LEVEL: {values['log_level']!r}")
            values["log_level"] = level

        return cls(**values)
