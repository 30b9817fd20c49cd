# forwardhook/webhooks/models.py
"""
Configuration models.

The config file uses camelCase keys (`forwardUrl`, `userAgent`); the models
expose snake_case attributes. All models are frozen once loaded.
"""

from enum import Enum
from typing import Annotated, Any, Dict, List, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .. import __version__
from ..jsonpath import JsonPath, parse_path

DEFAULT_USER_AGENT = f"forwardhook/{__version__}"

# Path literal from the config file, parsed on load
ConfigPath = Annotated[JsonPath, BeforeValidator(parse_path)]


class _ConfigModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        arbitrary_types_allowed=True,
    )


class ForwardMethod(str, Enum):
    """HTTP methods a webhook can be forwarded with."""
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"


class FieldMapping(_ConfigModel):
    """Copy the value at `source` in the input to `to` in the output."""

    source: ConfigPath = Field(alias="from")
    to: ConfigPath
    optional: bool = False

    @field_validator("to")
    @classmethod
    def _to_not_root(cls, value: JsonPath) -> JsonPath:
        if value.is_root():
            raise ValueError("destination path must not be empty")
        return value


class WebhookEntry(_ConfigModel):
    """A named webhook: where to forward and which fields to carry."""

    # Set from the `webhooks` key by the registry, never from the entry body
    name: str = Field(default="", exclude=True)
    forward_url: str
    forward_method: ForwardMethod = ForwardMethod.POST
    fields: List[FieldMapping]
    # Returned to the caller instead of the upstream body on a 2xx forward
    reply: Optional[Dict[str, Any]] = None

    @model_validator(mode="before")
    @classmethod
    def _name_from_key(cls, data: Any) -> Any:
        if isinstance(data, dict) and "name" in data:
            raise ValueError("`name` is taken from the webhooks key and cannot be set")
        return data

    @field_validator("forward_method", mode="before")
    @classmethod
    def _upper_method(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.upper()
        return value

    @field_validator("forward_url")
    @classmethod
    def _valid_url(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https"):
            raise ValueError(f"invalid URL scheme {parsed.scheme!r}, only http/https allowed")
        if not parsed.hostname:
            raise ValueError("invalid URL, no hostname")
        return value


class ServerConfig(_ConfigModel):
    """Top level of the config file."""

    port: int = Field(ge=0, le=65535)
    user_agent: str = DEFAULT_USER_AGENT
    debug: bool = False
    webhooks: Dict[str, WebhookEntry]

    @field_validator("user_agent", mode="before")
    @classmethod
    def _default_user_agent(cls, value: Any) -> Any:
        # "userAgent": null means the default
        return DEFAULT_USER_AGENT if value is None else value
