from fulfillment.constants import LIBRARY_VERSION
from fulfillment.errors import (
    FulfillmentError,
    HandlerContractError,
    IntentNotFoundError,
    MalformedRequestError,
    NoInputsError,
    SerializationError,
)
from fulfillment.result import Result
from fulfillment.services.action_request import ActionContext, ActionRequest, Locale
from fulfillment.services.action_response import ActionResponse, ActionsSdkResponse, DialogflowResponse
from fulfillment.services.actions_sdk_request import ActionsSdkRequest
from fulfillment.services.conversation_app import ActionsSdkApp, ConversationApp, DialogflowApp
from fulfillment.services.dialogflow_request import DialogflowRequest
from fulfillment.services.response_builder import ResponseBuilder
from fulfillment.services.response_serializer import ResponseSerializer
from fulfillment.services.router import IntentRouter

__version__ = LIBRARY_VERSION

__all__ = [
    "ActionContext",
    "ActionRequest",
    "ActionResponse",
    "ActionsSdkApp",
    "ActionsSdkRequest",
    "ActionsSdkResponse",
    "ConversationApp",
    "DialogflowApp",
    "DialogflowRequest",
    "DialogflowResponse",
    "FulfillmentError",
    "HandlerContractError",
    "IntentNotFoundError",
    "IntentRouter",
    "Locale",
    "MalformedRequestError",
    "NoInputsError",
    "ResponseBuilder",
    "ResponseSerializer",
    "Result",
    "SerializationError",
]
