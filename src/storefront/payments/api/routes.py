"""FastAPI route receiving payment processor callbacks.

The body must be read raw: the signature covers the exact bytes sent.
"""

from fastapi import APIRouter, Header, Request
from fastapi.responses import JSONResponse

from storefront.exceptions import WebhookVerificationError
from storefront.payments.api.schemas import WebhookAck
from storefront.payments.gateway import get_gateway
from storefront.payments.webhooks import handle_webhook_event
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

webhook_router = APIRouter(prefix="/stripe", tags=["payments"])


@webhook_router.post("/webhook", response_model=WebhookAck)
async def receive_webhook(
    request: Request,
    stripe_signature: str = Header(default="", alias="stripe-signature"),
):
    """Verify and apply a payment callback.

    Signature failures answer 400. Processing failures answer 500 so the
    processor delivers the event again.
    """
    payload = await request.body()
    try:
        event = get_gateway().parse_webhook_event(payload, stripe_signature)
    except WebhookVerificationError as exc:
        logger.warning("Webhook rejected", reason=exc.message)
        raise

    try:
        handle_webhook_event(event)
    except Exception:
        logger.exception("Webhook handling failed", event_type=event.type)
        return JSONResponse(status_code=500, content={"received": False})

    return WebhookAck()
