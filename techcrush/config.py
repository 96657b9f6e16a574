"""Load and validate the shared service/viewer configuration (YAML or JSON)."""

import json
import os
from dataclasses import asdict, dataclass
from typing import List, Optional

import yaml


DEFAULT_MESSAGE = "THIS IS MY TECH_CRUSH BACKEND!"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("console", "json")

ENV_PREFIX = "TECHCRUSH_"


class ConfigError(Exception):
    """Raised when the configuration fails validation."""


@dataclass
class AppConfig:
    host: str = "localhost"
    port: int = 5000
    path: str = "/api/message"
    message: str = DEFAULT_MESSAGE
    timeout: Optional[float] = None  # seconds; None waits on the transport
    log_level: str = "INFO"
    log_format: str = "console"

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    @property
    def message_url(self) -> str:
        return self.base_url + self.path


def load_config(path: Optional[str] = None) -> AppConfig:
    """Resolve the configuration both the service and the viewer read.

    The file named by ``path`` (or by ``TECHCRUSH_CONFIG`` when ``path`` is
    omitted) is read first, then ``TECHCRUSH_*`` environment variables are
    applied on top of it.

    Args:
        path: Optional path to a YAML or JSON config file.

    Returns:
        A validated AppConfig instance.

    Raises:
        ConfigError: If the file is missing, unreadable, or any value is invalid.
    """
    if path is None:
        path = os.environ.get(ENV_PREFIX + "CONFIG") or None

    raw = _read_file(path) if path else {}
    raw.update(_read_env())
    return _build_config(raw)


def config_to_dict(config: AppConfig) -> dict:
    d = asdict(config)
    d["base_url"] = config.base_url
    d["message_url"] = config.message_url
    return d


def _read_file(path: str) -> dict:
    if not os.path.isfile(path):
        raise ConfigError(f"config file not found: {path}")

    ext = os.path.splitext(path)[1].lower()
    try:
        with open(path, "r") as f:
            if ext in (".yaml", ".yml"):
                raw = yaml.safe_load(f)
            elif ext == ".json":
                raw = json.load(f)
            else:
                raise ConfigError(
                    f"unsupported file extension: {ext} (expected .yaml, .yml, or .json)"
                )
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigError(f"failed to parse {path}: {exc}") from exc

    # An empty YAML document is an empty config.
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError("config must be a mapping/object at the top level")
    return dict(raw)


def _read_env() -> dict:
    raw = {}
    for key in ("host", "port", "path", "message", "timeout", "log_level", "log_format"):
        value = os.environ.get(ENV_PREFIX + key.upper())
        if value is not None and value != "":
            raw[key] = value
    return raw


def _build_config(raw: dict) -> AppConfig:
    """Construct and validate an AppConfig from a raw dict."""
    errors: List[str] = []
    defaults = AppConfig()

    host = raw.get("host", defaults.host)
    if not host or not isinstance(host, str):
        errors.append("'host' must be a non-empty string")

    port = _parse_port(raw.get("port", defaults.port), errors)

    path = raw.get("path", defaults.path)
    if not isinstance(path, str) or not path.startswith("/"):
        errors.append("'path' must be a string starting with '/'")

    message = raw.get("message", defaults.message)
    if not message or not isinstance(message, str):
        errors.append("'message' must be a non-empty string")

    timeout = _parse_timeout(raw.get("timeout", defaults.timeout), errors)

    log_level = str(raw.get("log_level", defaults.log_level)).upper()
    if log_level not in LOG_LEVELS:
        errors.append(f"'log_level' must be one of {', '.join(LOG_LEVELS)}")

    log_format = str(raw.get("log_format", defaults.log_format)).lower()
    if log_format not in LOG_FORMATS:
        errors.append(f"'log_format' must be one of {', '.join(LOG_FORMATS)}")

    unknown = sorted(set(raw) - set(asdict(defaults)))
    for key in unknown:
        errors.append(f"unknown config key: '{key}'")

    if errors:
        raise ConfigError(
            "config validation failed:\n  - " + "\n  - ".join(errors)
        )

    return AppConfig(
        host=host,
        port=port,
        path=path,
        message=message,
        timeout=timeout,
        log_level=log_level,
        log_format=log_format,
    )


def _parse_port(value, errors: List[str]) -> int:
    # bool is an int subclass; "true" is not a port
    if isinstance(value, bool):
        errors.append("'port' must be an integer between 1 and 65535")
        return 0
    # 5000.7 is not a port either; int() would truncate it
    if isinstance(value, float) and not value.is_integer():
        errors.append("'port' must be an integer between 1 and 65535")
        return 0
    try:
        port = int(value)
    except (ValueError, TypeError):
        errors.append("'port' must be an integer between 1 and 65535")
        return 0
    if not 1 <= port <= 65535:
        errors.append("'port' must be an integer between 1 and 65535")
    return port


def _parse_timeout(value, errors: List[str]) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool):
        errors.append("'timeout' must be a non-negative number of seconds")
        return None
    try:
        timeout = float(value)
    except (ValueError, TypeError):
        errors.append("'timeout' must be a non-negative number of seconds")
        return None
    if timeout < 0:
        errors.append("'timeout' must be a non-negative number of seconds")
    return timeout
