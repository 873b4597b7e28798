from abc import ABC, abstractmethod
from typing import Callable, Mapping, Optional

from fulfillment.errors import FulfillmentError, HandlerContractError, MalformedRequestError
from fulfillment.logging_config import bind, get_logger
from fulfillment.result import Result
from fulfillment.services.action_request import ActionRequest, Body
from fulfillment.services.action_response import ActionResponse
from fulfillment.services.actions_sdk_request import ActionsSdkRequest
from fulfillment.services.dialogflow_request import DialogflowRequest
from fulfillment.services.response_builder import ResponseBuilder
from fulfillment.services.response_serializer import ResponseSerializer
from fulfillment.services.router import Handler, IntentRouter

logger = get_logger("conversation_app")

EMPTY_BODY_ERROR = "Invalid or empty JSON"


def _is_empty(body: Optional[Body]) -> bool:
    if body is None:
        return True
    if isinstance(body, (str, bytes, bytearray)):
        return not body.strip()
    return False


class ConversationApp(ABC):
    """
    Entry point for one webhook format.

    Subclasses decide how the body is parsed. Handlers are registered on the
    router at startup and receive the parsed request.
    """

    def __init__(self, router: Optional[IntentRouter] = None):
        self.router = router or IntentRouter()

    def handler(self, intent: str) -> Callable[[Handler], Handler]:
        return self.router.handler(intent)

    @abstractmethod
    def create_request(self, body: Body, headers: Optional[Mapping[str, str]] = None) -> ActionRequest: ...

    def get_response_builder(self, request: ActionRequest) -> ResponseBuilder:
        return ResponseBuilder.for_request(request)

    async def handle_request(self, body: Optional[Body], headers: Optional[Mapping[str, str]] = None) -> Result[str]:
        """Parse, route and serialize one webhook call. Never raises."""
        if _is_empty(body):
            logger.warning("Rejected empty webhook body")
            return Result.failure(EMPTY_BODY_ERROR, MalformedRequestError.code)

        try:
            request = self.create_request(body, headers)
            log = bind(logger, **request.log_context())
            log.info("Webhook request received")

            response = await self.router.route(request)
            if not isinstance(response, ActionResponse):
                raise HandlerContractError(response)

            serialized = ResponseSerializer(request.session_id).to_json(response)
        except FulfillmentError as e:
            logger.warning(
                "Webhook request failed",
                extra={"context": {"error": e.message, "error_code": e.code}},
            )
            return Result.failure(e.message, e.code)
        except Exception as e:
            logger.exception(
                "Intent handler raised",
                extra={"context": {"error": str(e)}},
            )
            return Result.failure(str(e) or type(e).__name__, "handler_error")

        log.info("Webhook response ready", context={"expect_user_response": response.expect_user_response})
        return Result.success(serialized)


class ActionsSdkApp(ConversationApp):
    def create_request(self, body: Body, headers: Optional[Mapping[str, str]] = None) -> ActionsSdkRequest:
        return ActionsSdkRequest.create(body, headers)


class DialogflowApp(ConversationApp):
    def create_request(self, body: Body, headers: Optional[Mapping[str, str]] = None) -> DialogflowRequest:
        return DialogflowRequest.create(body, headers)
