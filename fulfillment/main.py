from typing import Optional

from fastapi import FastAPI

from fulfillment.config import settings
from fulfillment.constants import LIBRARY_VERSION
from fulfillment.logging_config import setup_logging
from fulfillment.routers.webhook import create_webhook_router
from fulfillment.services.conversation_app import ConversationApp


def create_app(conversation_app: ConversationApp, path: Optional[str] = None) -> FastAPI:
    """Build the HTTP service around a configured ConversationApp."""
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Fulfillment Webhook",
        description="Conversation fulfillment for Actions SDK and Dialogflow webhooks",
        version=LIBRARY_VERSION,
        debug=settings.debug,
    )
    app.include_router(create_webhook_router(conversation_app, path))

    @app.get("/health")
    async def health():
        return {"status": "ok", "intents": conversation_app.router.intents}

    return app
