# forwardhook/config.py
"""
Webhook configuration loading.

The config file is JSON:

    {
        "port": 8080,
        "userAgent": "my-forwarder/1.0",
        "debug": false,
        "webhooks": {
            "todo": {
                "forwardUrl": "https://example.com/hooks/todo",
                "forwardMethod": "POST",
                "fields": [
                    {"from": ["todos", 0, "description"], "to": ["description"]}
                ]
            }
        }
    }
"""

import json
from pathlib import Path
from typing import Any, Union

from pydantic import ValidationError

from .errors import ConfigError
from .logging import get_logger
from .webhooks.models import ServerConfig

logger = get_logger(__name__)

# sysexits.h: EX_IOERR
EXIT_UNREADABLE = 74


def _reject_constant(name: str):
    raise ValueError(f"`{name}` is not a JSON value")


def _location(loc) -> str:
    return ".".join(str(part) for part in loc) or "<root>"


def parse_config(data: Any) -> ServerConfig:
    """
    Validate raw config data.

    Args:
        data: Decoded JSON config

    Returns:
        Frozen server configuration

    Raises:
        ConfigError: Naming the first offending field
    """
    try:
        return ServerConfig.model_validate(data)
    except ValidationError as e:
        problems = [f"{_location(err['loc'])}: {err['msg']}" for err in e.errors()]
        raise ConfigError("Invalid config file: " + "; ".join(problems)) from e


def load_config(path: Union[str, Path]) -> ServerConfig:
    """
    Read and validate the config file at `path`.

    Raises:
        ConfigError: If the file cannot be read, is not JSON or is invalid
    """
    path = Path(path)
    try:
        contents = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Can't read config file {path}: {e}", exit_code=EXIT_UNREADABLE) from e

    try:
        data = json.loads(contents, parse_constant=_reject_constant)
    except ValueError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e

    config = parse_config(data)
    logger.info(
        "config_loaded",
        path=str(path),
        webhooks=len(config.webhooks),
        debug=config.debug,
    )
    return config
