"""Built responses, one per inbound format."""

from abc import ABC
from typing import TYPE_CHECKING, Any, Optional

from fulfillment.constants import TEXT_INTENT
from fulfillment.schemas.dialogflow import SessionEntityType, WebhookResponse
from fulfillment.schemas.rich_response import (
    AppResponse,
    ExpectedInput,
    ExpectedIntent,
    FinalResponse,
    InputPrompt,
    RichResponse,
)
from fulfillment.services.action_request import ActionContext
from fulfillment.services.helper_intents import HelperIntent
from fulfillment.state import pack_state

if TYPE_CHECKING:
    from fulfillment.services.response_builder import ResponseBuilder


def _rich_response(builder: "ResponseBuilder") -> Optional[RichResponse]:
    if builder.rich_response is not None:
        return builder.rich_response.model_copy(deep=True)
    if not (builder.items or builder.suggestions or builder.link_out_suggestion):
        return None
    return RichResponse(
        items=list(builder.items) or None,
        suggestions=list(builder.suggestions) or None,
        linkOutSuggestion=builder.link_out_suggestion,
    )


def prepare_app_response(builder: "ResponseBuilder") -> AppResponse:
    """Materialize an AppResponse from the builder's accumulated state."""
    if builder.app_response is not None:
        return builder.app_response.model_copy(deep=True)

    rich_response = _rich_response(builder)
    if builder.expect_user_response:
        if builder.helper_intent is not None:
            possible_intents = [builder.helper_intent.expected_intent()]
        else:
            possible_intents = [ExpectedIntent(intent=TEXT_INTENT, inputValueData={})]
        prompt = InputPrompt(richInitialPrompt=rich_response) if rich_response is not None else None
        app_response = AppResponse(
            expectUserResponse=True,
            expectedInputs=[ExpectedInput(inputPrompt=prompt, possibleIntents=possible_intents)],
        )
    else:
        app_response = AppResponse(
            expectUserResponse=False,
            finalResponse=FinalResponse(richResponse=rich_response),
        )

    if builder.conversation_data is not None:
        app_response.conversationToken = pack_state(builder.conversation_data)
    if builder.user_storage is not None:
        app_response.userStorage = pack_state(builder.user_storage)
    return app_response


class ActionResponse(ABC):
    """Snapshot of a ResponseBuilder, ready for serialization."""

    def __init__(self, builder: "ResponseBuilder"):
        self.expect_user_response = builder.expect_user_response
        self.helper_intent: Optional[HelperIntent] = builder.helper_intent
        self.conversation_data: Optional[dict[str, Any]] = builder.conversation_data
        self.user_storage: Optional[dict[str, Any]] = builder.user_storage
        self.app_response = prepare_app_response(builder)

    @property
    def rich_response(self) -> Optional[RichResponse]:
        """Rich response of the prompt when asking, of the final response when closing."""
        app_response = self.app_response
        if app_response.expectedInputs:
            prompt = app_response.expectedInputs[0].inputPrompt
            return prompt.richInitialPrompt if prompt else None
        if app_response.finalResponse is not None:
            return app_response.finalResponse.richResponse
        return None


class ActionsSdkResponse(ActionResponse):
    pass


class DialogflowResponse(ActionResponse):
    def __init__(self, builder: "ResponseBuilder"):
        super().__init__(builder)
        self.session_id = builder.session_id
        self.fulfillment_text = builder.fulfillment_text
        self.webhook_response: Optional[WebhookResponse] = (
            builder.webhook_response.model_copy(deep=True) if builder.webhook_response is not None else None
        )
        self.contexts: list[ActionContext] = list(builder.contexts)
        self.session_entity_types: list[SessionEntityType] = list(builder.session_entity_types)
