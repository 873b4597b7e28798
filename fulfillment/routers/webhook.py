from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response

from fulfillment.config import settings
from fulfillment.logging_config import get_logger
from fulfillment.services.conversation_app import ConversationApp

logger = get_logger("webhook")


def create_webhook_router(app: ConversationApp, path: Optional[str] = None) -> APIRouter:
    """Expose `app` as a POST endpoint. The raw body is handed over untouched."""
    router = APIRouter()

    @router.post(path or settings.webhook_path)
    async def handle_fulfillment(request: Request):
        body = await request.body()
        headers = dict(request.headers)

        result = await app.handle_request(body, headers)
        if not result.ok:
            logger.info(
                "Fulfillment rejected",
                extra={"context": {"error_code": result.error_code}},
            )
            return JSONResponse(status_code=400, content=result.to_dict())

        return Response(content=result.value, media_type="application/json")

    return router
