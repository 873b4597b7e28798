import json
from typing import Any, Optional

from fulfillment.config import settings
from fulfillment.constants import (
    APP_DATA_CONTEXT,
    APP_DATA_CONTEXT_LIFESPAN,
    CONTEXTS_SEGMENT,
    ENTITY_TYPES_SEGMENT,
    INTENTS_REQUIRING_SIMPLE_RESPONSE,
    LIBRARY_NAME,
    LIBRARY_VERSION,
    SIMPLE_RESPONSE_REQUIRED,
    TEXT_INTENT,
)
from fulfillment.errors import SerializationError
from fulfillment.logging_config import get_logger
from fulfillment.schemas.dialogflow import Context, SessionEntityType, WebhookResponse
from fulfillment.schemas.rich_response import AppResponse, RichResponseItem
from fulfillment.services.action_request import ActionContext, qualify_name
from fulfillment.services.action_response import ActionResponse, ActionsSdkResponse, DialogflowResponse
from fulfillment.state import pack_context_data

logger = get_logger("response_serializer")


def library_metadata() -> dict[str, str]:
    return {"name": LIBRARY_NAME, "language": "python", "version": LIBRARY_VERSION}


def _item_requires_simple_response(item: RichResponseItem) -> bool:
    if (
        item.basicCard is not None
        or item.carouselBrowse is not None
        or item.htmlResponse is not None
        or item.tableCard is not None
        or item.mediaResponse is not None
    ):
        return True
    return item.structuredResponse is not None and item.structuredResponse.orderUpdate is not None


def check_simple_response_present(app_response: AppResponse) -> None:
    """
    Raise SerializationError when the prompt carries content the platform
    only renders next to plain text (option helpers, chips, link-outs,
    cards, carousels, tables, media, HTML, order updates) but has no
    simple response. Final responses are not checked.
    """
    if not app_response.expectedInputs:
        return
    expected_input = app_response.expectedInputs[0]
    prompt = expected_input.inputPrompt
    rich_response = prompt.richInitialPrompt if prompt else None
    items = (rich_response.items if rich_response else None) or []

    require_simple_response = any(
        intent.intent in INTENTS_REQUIRING_SIMPLE_RESPONSE for intent in expected_input.possibleIntents or []
    )
    if rich_response is not None:
        if rich_response.suggestions or rich_response.linkOutSuggestion is not None:
            require_simple_response = True
        if any(_item_requires_simple_response(item) for item in items):
            require_simple_response = True

    if not require_simple_response:
        return
    if not any(item.simpleResponse is not None for item in items):
        raise SerializationError(SIMPLE_RESPONSE_REQUIRED)


class ResponseSerializer:
    """Turns a built ActionResponse into the JSON body for its webhook format."""

    def __init__(self, session_id: Optional[str] = None, include_version_metadata: Optional[bool] = None):
        self.session_id = session_id
        if include_version_metadata is None:
            include_version_metadata = settings.include_version_metadata
        self.include_version_metadata = include_version_metadata

    def to_json(self, response: ActionResponse) -> str:
        return json.dumps(self.to_dict(response), ensure_ascii=False)

    def to_dict(self, response: ActionResponse) -> dict[str, Any]:
        if isinstance(response, DialogflowResponse):
            return self._serialize_dialogflow(response)
        if isinstance(response, ActionsSdkResponse):
            return self._serialize_actions_sdk(response)
        logger.warning(
            "Unable to serialize the response",
            extra={"context": {"type": type(response).__name__}},
        )
        raise SerializationError(f"Unable to serialize response of type {type(response).__name__}")

    def _serialize_actions_sdk(self, response: ActionsSdkResponse) -> dict[str, Any]:
        check_simple_response_present(response.app_response)
        body = response.app_response.model_dump(exclude_none=True)
        if self.include_version_metadata:
            body["ResponseMetadata"] = {"GoogleLibraryInfo": library_metadata()}
        return body

    def _serialize_dialogflow(self, response: DialogflowResponse) -> dict[str, Any]:
        check_simple_response_present(response.app_response)

        if response.webhook_response is not None:
            webhook_response = response.webhook_response.model_copy(deep=True)
        else:
            webhook_response = WebhookResponse()
        if webhook_response.fulfillmentText is None:
            webhook_response.fulfillmentText = response.fulfillment_text

        payload = dict(webhook_response.payload or {})
        if "google" not in payload:
            payload["google"] = self._google_payload(response)
        webhook_response.payload = payload

        if response.conversation_data is not None:
            data_context = ActionContext(
                name=APP_DATA_CONTEXT,
                lifespan=APP_DATA_CONTEXT_LIFESPAN,
                parameters={"data": pack_context_data(response.conversation_data)},
            )
            self._set_context(webhook_response, data_context)
        for context in response.contexts:
            self._set_context(webhook_response, context)
        for entity_type in response.session_entity_types:
            self._set_session_entity_type(webhook_response, entity_type)

        body = webhook_response.model_dump(exclude_none=True)
        if self.include_version_metadata:
            body["metadata"] = {"google_library": library_metadata()}
        return body

    def _google_payload(self, response: DialogflowResponse) -> dict[str, Any]:
        app_response = response.app_response
        google: dict[str, Any] = {}
        if app_response.expectUserResponse is not None:
            google["expectUserResponse"] = app_response.expectUserResponse

        rich_response = response.rich_response
        if rich_response is not None:
            google["richResponse"] = rich_response.model_dump(exclude_none=True)

        if app_response.expectedInputs and app_response.expectedInputs[0].possibleIntents:
            expected_intent = app_response.expectedInputs[0].possibleIntents[0]
            if expected_intent.intent != TEXT_INTENT:
                google["systemIntent"] = {
                    "intent": expected_intent.intent,
                    "data": expected_intent.inputValueData or {},
                }

        if app_response.userStorage is not None:
            google["userStorage"] = app_response.userStorage
        google["isSsml"] = False
        return google

    def _set_context(self, webhook_response: WebhookResponse, context: ActionContext) -> None:
        name = qualify_name(self.session_id, CONTEXTS_SEGMENT, context.name)
        contexts = webhook_response.outputContexts
        if contexts is None:
            contexts = webhook_response.outputContexts = []
        for existing in contexts:
            if existing.name == name:
                existing.lifespanCount = context.lifespan
                existing.parameters = context.parameters
                return
        contexts.append(Context(name=name, lifespanCount=context.lifespan, parameters=context.parameters))

    def _set_session_entity_type(self, webhook_response: WebhookResponse, entity_type: SessionEntityType) -> None:
        name = qualify_name(self.session_id, ENTITY_TYPES_SEGMENT, entity_type.name)
        entity_types = webhook_response.sessionEntityTypes
        if entity_types is None:
            entity_types = webhook_response.sessionEntityTypes = []
        for existing in entity_types:
            if existing.name == name:
                existing.entityOverrideMode = entity_type.entityOverrideMode
                existing.entities = entity_type.entities
                return
        entity_types.append(entity_type.model_copy(update={"name": name}, deep=True))
