# forwardhook/settings.py
"""
Process settings.

These cover how the process runs. Webhook definitions live in the JSON
config file (see forwardhook.config).
"""

import os
from dataclasses import dataclass

# Load .env file
from dotenv import load_dotenv
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Process configuration."""

    # Webhook config file, overridden by the CLI argument
    config_path: str = os.getenv("FORWARDHOOK_CONFIG", "forwardhook.json")

    # Listener address; the port comes from the config file
    host: str = os.getenv("FORWARDHOOK_HOST", "127.0.0.1")

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_json: bool = _env_flag("LOG_JSON", "true")


# Global settings instance
settings = Settings()
