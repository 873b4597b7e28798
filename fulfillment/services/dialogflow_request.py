from typing import Any, Mapping, Optional

from fulfillment.constants import APP_DATA_CONTEXT, CONTEXTS_SEGMENT, DEFAULT_CONTEXT_LIFESPAN, INVALID_INTENT
from fulfillment.schemas.conversation import AppRequest, Argument, Device, RawInput, Surface, User
from fulfillment.schemas.dialogflow import Context, QueryResult, WebhookRequest
from fulfillment.services.action_request import (
    ActionContext,
    ActionRequest,
    Body,
    Locale,
    load_payload,
    parse_model,
    qualify_name,
)
from fulfillment.services.actions_sdk_request import ActionsSdkRequest
from fulfillment.state import unpack_context_data


def _to_action_context(context: Context) -> ActionContext:
    lifespan = context.lifespanCount if context.lifespanCount is not None else DEFAULT_CONTEXT_LIFESPAN
    return ActionContext(name=context.name, lifespan=lifespan, parameters=context.parameters)


class DialogflowRequest(ActionRequest):
    """
    Request received from Dialogflow.

    When the original assistant payload is attached it is parsed into
    `actions_request` and assistant-level accessors delegate to it.
    """

    def __init__(self, webhook_request: WebhookRequest, headers: Optional[Mapping[str, str]] = None):
        self.webhook_request = webhook_request
        self.headers = dict(headers or {})

        self.actions_request: Optional[ActionsSdkRequest] = None
        original = webhook_request.originalDetectIntentRequest
        if original is not None and original.payload is not None:
            self.actions_request = ActionsSdkRequest(
                parse_model(AppRequest, original.payload),
                headers=headers,
                part_of_dialogflow=True,
            )

        data_context = self.get_context(APP_DATA_CONTEXT)
        if data_context is not None and data_context.parameters:
            self._conversation_data = unpack_context_data(data_context.parameters.get("data"))
        else:
            self._conversation_data = {}

    @classmethod
    def create(cls, body: Body, headers: Optional[Mapping[str, str]] = None) -> "DialogflowRequest":
        return cls(parse_model(WebhookRequest, load_payload(body)), headers=headers)

    @property
    def query_result(self) -> QueryResult:
        return self.webhook_request.queryResult or QueryResult()

    @property
    def intent(self) -> str:
        intent = self.query_result.intent
        if intent is None or not intent.displayName:
            return INVALID_INTENT
        return intent.displayName

    @property
    def uses_dialogflow(self) -> bool:
        return True

    @property
    def session_id(self) -> Optional[str]:
        return self.webhook_request.session

    @property
    def user(self) -> Optional[User]:
        return self.actions_request.user if self.actions_request else None

    @property
    def device(self) -> Optional[Device]:
        return self.actions_request.device if self.actions_request else None

    @property
    def surface(self) -> Optional[Surface]:
        return self.actions_request.surface if self.actions_request else None

    @property
    def available_surfaces(self) -> list[Surface]:
        return self.actions_request.available_surfaces if self.actions_request else []

    @property
    def is_in_sandbox(self) -> bool:
        return self.actions_request.is_in_sandbox if self.actions_request else False

    @property
    def raw_input(self) -> Optional[RawInput]:
        return self.actions_request.raw_input if self.actions_request else None

    @property
    def raw_text(self) -> Optional[str]:
        text = super().raw_text
        return text if text is not None else self.query_result.queryText

    @property
    def locale(self) -> Locale:
        if self.actions_request is not None:
            return self.actions_request.locale
        return Locale.from_tag(self.query_result.languageCode)

    @property
    def conversation_data(self) -> dict[str, Any]:
        return self._conversation_data

    @property
    def user_storage(self) -> dict[str, Any]:
        return self.actions_request.user_storage if self.actions_request else {}

    def get_argument(self, name: str) -> Optional[Argument]:
        return self.actions_request.get_argument(name) if self.actions_request else None

    def get_parameter(self, name: str) -> Any:
        parameters = self.query_result.parameters or {}
        return parameters.get(name)

    def get_contexts(self) -> list[ActionContext]:
        return [_to_action_context(context) for context in self.query_result.outputContexts or []]

    def get_context(self, name: str) -> Optional[ActionContext]:
        qualified = qualify_name(self.session_id, CONTEXTS_SEGMENT, name)
        for context in self.query_result.outputContexts or []:
            if context.name == qualified:
                return _to_action_context(context)
        return None
