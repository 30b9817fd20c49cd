# forwardhook/api/routes_webhooks.py
"""
Inbound webhook route.

POST /{webhook_name} with a JSON body. The response is the generated
document (debug mode), the upstream's response, or an error detail.
"""

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import Response

from ..errors import DispatchError
from ..logging import get_logger
from ..webhooks import Dispatcher

router = APIRouter(tags=["webhooks"])

logger = get_logger(__name__)


def get_dispatcher(request: Request) -> Dispatcher:
    """Dispatcher attached to the app at startup."""
    return request.app.state.dispatcher


@router.post("/{webhook_name}")
async def receive_webhook(webhook_name: str, request: Request) -> Response:
    """
    Reshape an inbound webhook and forward it.

    Args:
        webhook_name: Configured webhook name

    Returns:
        Generated document in debug mode, otherwise the upstream response

    Raises:
        HTTPException 404: Unknown webhook
        HTTPException 400: Malformed JSON or field mapping failure
        HTTPException 502/504: Upstream unreachable or timed out
    """
    dispatcher = get_dispatcher(request)
    body = await request.body()

    try:
        result = await dispatcher.handle(webhook_name, body)
    except DispatchError as e:
        logger.warning(
            "webhook_rejected",
            webhook=webhook_name,
            error=e.error,
            status_code=e.status_code,
            message=str(e),
        )
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())

    return Response(
        content=result.content,
        status_code=result.status_code,
        media_type=result.media_type,
    )
