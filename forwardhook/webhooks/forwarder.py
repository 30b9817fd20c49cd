# forwardhook/webhooks/forwarder.py
"""
Forwarder - sends a generated document to a webhook's upstream.

One request per inbound webhook: no retries, and no timeout beyond the
httpx client default.
"""

from typing import Any, Dict, Optional

import httpx

from ..errors import UpstreamError, UpstreamTimeout
from ..logging import get_logger
from .models import DEFAULT_USER_AGENT, WebhookEntry

logger = get_logger(__name__)


class Forwarder:
    """
    Issues outbound requests for webhook entries.

    Holds one httpx.AsyncClient for the lifetime of the app; requests on it
    are independent of each other.
    """

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.user_agent = user_agent
        self.client = httpx.AsyncClient(
            headers={"User-Agent": user_agent},
            transport=transport,
        )

    async def forward(self, entry: WebhookEntry, document: Dict[str, Any]) -> httpx.Response:
        """
        Send `document` as JSON to the entry's forward URL.

        Args:
            entry: Webhook entry holding URL and method
            document: Generated outbound document

        Returns:
            The upstream response, whatever its status

        Raises:
            UpstreamTimeout: If the upstream does not answer in time
            UpstreamError: If the request cannot be completed
        """
        method = entry.forward_method.value
        log = logger.bind(webhook=entry.name, url=entry.forward_url, method=method)

        try:
            response = await self.client.request(
                method,
                entry.forward_url,
                json=document,
                headers={"Content-Type": "application/json"},
            )
        except httpx.TimeoutException as e:
            log.warning("webhook_forward_timeout", error=str(e))
            raise UpstreamTimeout(
                f"Timed out forwarding `{entry.name}` to {entry.forward_url}",
                url=entry.forward_url,
            ) from e
        except httpx.HTTPError as e:
            log.error("webhook_forward_failed", error=str(e))
            raise UpstreamError(
                f"Failed forwarding `{entry.name}` to {entry.forward_url}: {e}",
                url=entry.forward_url,
            ) from e

        log.info("webhook_forwarded", status_code=response.status_code)
        return response

    async def aclose(self):
        """Close HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
