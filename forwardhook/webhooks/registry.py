# forwardhook/webhooks/registry.py
"""
Webhook registry - configured webhooks by name.

Built once from the loaded configuration and never mutated afterwards, so
concurrent requests read it without locking.
"""

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from ..errors import UnknownWebhook
from .models import ServerConfig, WebhookEntry


class WebhookRegistry:
    """
    Read-only lookup of webhook entries.

    The registry stores what the config loader validated; it does no
    validation of its own.
    """

    def __init__(self, entries: Mapping[str, WebhookEntry]):
        self._entries: Mapping[str, WebhookEntry] = MappingProxyType(dict(entries))

    @classmethod
    def from_config(cls, config: ServerConfig) -> "WebhookRegistry":
        """Build a registry from config, stamping each entry with its key."""
        entries: Dict[str, WebhookEntry] = {
            name: entry.model_copy(update={"name": name})
            for name, entry in config.webhooks.items()
        }
        return cls(entries)

    def get(self, name: str) -> Optional[WebhookEntry]:
        """Get a webhook entry, or None if not configured."""
        return self._entries.get(name)

    def resolve(self, name: str) -> WebhookEntry:
        """
        Get a webhook entry.

        Raises:
            UnknownWebhook: If no webhook is configured under `name`
        """
        entry = self._entries.get(name)
        if entry is None:
            raise UnknownWebhook(name)
        return entry

    def names(self) -> List[str]:
        """Names of all configured webhooks, sorted."""
        return sorted(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)
