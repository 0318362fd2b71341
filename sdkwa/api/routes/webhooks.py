"""
Inbound webhook routes.

The provider can POST notifications to an HTTP endpoint instead of queueing
them; the body has the same shape as a polled notification and goes through
the same dispatcher.
"""

from typing import Any

from fastapi import APIRouter, FastAPI, HTTPException, Request

from sdkwa.core.errors import DeliveryStage, NotificationError
from sdkwa.core.logging.logger import get_logger
from sdkwa.notifications.dispatcher import NotificationDispatcher
from sdkwa.notifications.models import Notification


def create_webhook_router(
    dispatcher: NotificationDispatcher, path: str = "/webhook"
) -> APIRouter:
    """
    Create the webhook router.

    Args:
        dispatcher: Dispatcher routing payloads to registered callbacks
        path: Endpoint path; only POST is accepted on it

    Returns:
        APIRouter configured with the webhook endpoint
    """
    router = APIRouter(
        tags=["Webhooks"],
        responses={
            400: {"description": "Bad Request - Invalid webhook payload"},
            405: {"description": "Method Not Allowed"},
            500: {"description": "Internal Server Error - Callback failed"},
        },
    )

    @router.post(path)
    async def process_webhook(request: Request) -> dict[str, Any]:
        """
        Classify and dispatch one pushed notification.

        Returns:
            Dict with status and the derived event kind
        """
        logger = get_logger(__name__)

        try:
            payload = await request.json()
        except ValueError as e:
            logger.error(f"Failed to parse webhook payload: {e}")
            raise HTTPException(status_code=400, detail="Invalid JSON") from e

        if not isinstance(payload, dict):
            raise HTTPException(status_code=400, detail="Invalid JSON")

        notification = Notification.from_payload(payload)
        try:
            handled = await dispatcher.dispatch(notification)
        except Exception as e:
            await dispatcher.report(
                NotificationError(DeliveryStage.DISPATCH, e, notification)
            )
            raise HTTPException(
                status_code=500, detail="Internal server error"
            ) from e

        return {"status": "ok", "kind": notification.kind, "handled": handled}

    return router


def create_webhook_app(
    dispatcher: NotificationDispatcher, path: str = "/webhook"
) -> FastAPI:
    """Standalone FastAPI app serving only the webhook endpoint."""
    app = FastAPI(title="SDKWA Webhook Receiver")
    app.include_router(create_webhook_router(dispatcher, path=path))
    return app
