# forwardhook/webhooks/__init__.py
"""
Webhook module: configuration models, registry, field mapping and
forwarding of inbound webhooks.
"""

from .dispatcher import DispatchResult, Dispatcher
from .forwarder import Forwarder
from .models import FieldMapping, ForwardMethod, ServerConfig, WebhookEntry
from .registry import WebhookRegistry

__all__ = [
    "DispatchResult",
    "Dispatcher",
    "FieldMapping",
    "ForwardMethod",
    "Forwarder",
    "ServerConfig",
    "WebhookEntry",
    "WebhookRegistry",
]
