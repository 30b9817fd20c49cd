# forwardhook/webhooks/dispatcher.py
"""
Dispatcher - turns one inbound webhook request into an outcome.

    resolve name -> parse body -> build document -> forward (or echo in debug)
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..errors import MalformedInput
from ..logging import get_logger
from .forwarder import Forwarder
from .mapping import build_document
from .models import ServerConfig
from .registry import WebhookRegistry

logger = get_logger(__name__)

JSON_MEDIA_TYPE = "application/json"


@dataclass
class DispatchResult:
    """What to send back to the inbound caller."""
    webhook: str
    document: Dict[str, Any]
    forwarded: bool
    status_code: int
    content: bytes
    media_type: Optional[str] = JSON_MEDIA_TYPE


def _dump(value: Any) -> bytes:
    return json.dumps(value, separators=(",", ":"), allow_nan=False).encode("utf-8")


def _reject_constant(name: str) -> Any:
    # json.loads accepts NaN and Infinity, which are not JSON
    raise MalformedInput(f"Request body is not valid JSON: `{name}` is not a JSON value")


def parse_body(body: bytes) -> Any:
    """
    Parse an inbound request body as JSON.

    Raises:
        MalformedInput: If the body is empty, not UTF-8, not JSON or nested
            too deeply to parse
    """
    if not body or not body.strip():
        raise MalformedInput("Request body is empty")
    try:
        return json.loads(body, parse_constant=_reject_constant)
    except RecursionError as e:
        raise MalformedInput("Request body is nested too deeply") from e
    except ValueError as e:
        raise MalformedInput(f"Request body is not valid JSON: {e}") from e


class Dispatcher:
    """
    Handles inbound webhooks against a fixed configuration.

    Holds no per-request state; `handle` may run concurrently.
    """

    def __init__(
        self,
        config: ServerConfig,
        forwarder: Forwarder,
        registry: Optional[WebhookRegistry] = None,
    ):
        self.config = config
        self.forwarder = forwarder
        self.registry = registry if registry is not None else WebhookRegistry.from_config(config)

    @property
    def debug(self) -> bool:
        return self.config.debug

    async def handle(self, webhook_name: str, body: bytes) -> DispatchResult:
        """
        Handle one inbound webhook.

        Args:
            webhook_name: Name taken from the request path
            body: Raw request body

        Returns:
            Dispatch result for the HTTP layer

        Raises:
            UnknownWebhook: 404
            MalformedInput: 400
            MissingRequiredField: 400
            StructuralConflict: 400
            UpstreamError: 502 (UpstreamTimeout: 504)
        """
        entry = self.registry.resolve(webhook_name)
        document = parse_body(body)
        try:
            output = build_document(entry.fields, document, webhook=entry.name)
        except RecursionError as e:
            raise MalformedInput(f"Field value in `{entry.name}` is nested too deeply") from e

        if self.debug:
            logger.info("webhook_debug_echo", webhook=entry.name, fields=len(entry.fields))
            return DispatchResult(
                webhook=entry.name,
                document=output,
                forwarded=False,
                status_code=200,
                content=_dump(output),
            )

        response = await self.forwarder.forward(entry, output)

        if entry.reply is not None and response.is_success:
            return DispatchResult(
                webhook=entry.name,
                document=output,
                forwarded=True,
                status_code=200,
                content=_dump(entry.reply),
            )

        return DispatchResult(
            webhook=entry.name,
            document=output,
            forwarded=True,
            status_code=response.status_code,
            content=response.content,
            media_type=response.headers.get("content-type"),
        )
