from typing import TYPE_CHECKING, Any, Iterable, Optional, Union

from fulfillment.schemas.dialogflow import SessionEntityType, WebhookResponse
from fulfillment.schemas.rich_response import (
    AppResponse,
    BasicCard,
    CarouselBrowse,
    HtmlResponse,
    Image,
    LinkOutSuggestion,
    MediaResponse,
    RichResponse,
    RichResponseItem,
    SimpleResponse,
    StructuredResponse,
    Suggestion,
    TableCard,
)
from fulfillment.services.action_request import ActionContext
from fulfillment.services.action_response import ActionResponse, ActionsSdkResponse, DialogflowResponse
from fulfillment.services.helper_intents import HelperIntent

if TYPE_CHECKING:
    from fulfillment.services.action_request import ActionRequest

Addable = Union[
    str,
    SimpleResponse,
    BasicCard,
    StructuredResponse,
    MediaResponse,
    CarouselBrowse,
    TableCard,
    HtmlResponse,
    Image,
    RichResponse,
    Suggestion,
    LinkOutSuggestion,
    HelperIntent,
    ActionContext,
    SessionEntityType,
]


class ResponseBuilder:
    """
    Accumulates the pieces of a reply for a single request.

    Every mutator returns the builder so calls can be chained:
        builder.add("Pick one").add(SelectionList(...)).build()
    """

    def __init__(
        self,
        uses_dialogflow: bool = True,
        session_id: Optional[str] = None,
        conversation_data: Optional[dict[str, Any]] = None,
        user_storage: Optional[dict[str, Any]] = None,
    ):
        self.uses_dialogflow = uses_dialogflow
        self.session_id = session_id
        self.conversation_data = conversation_data
        self.user_storage = user_storage

        self.expect_user_response = True
        self.items: list[RichResponseItem] = []
        self.suggestions: list[Suggestion] = []
        self.link_out_suggestion: Optional[LinkOutSuggestion] = None
        self.rich_response: Optional[RichResponse] = None
        self.helper_intent: Optional[HelperIntent] = None
        self.fulfillment_text: Optional[str] = None
        self.contexts: list[ActionContext] = []
        self.session_entity_types: list[SessionEntityType] = []

        self.app_response: Optional[AppResponse] = None
        self.webhook_response: Optional[WebhookResponse] = None

    @classmethod
    def for_request(cls, request: "ActionRequest") -> "ResponseBuilder":
        """Builder writing back the request's own conversation data and user storage."""
        return cls(
            uses_dialogflow=request.uses_dialogflow,
            session_id=request.session_id,
            conversation_data=request.conversation_data,
            user_storage=request.user_storage,
        )

    def add(self, value: Addable) -> "ResponseBuilder":
        if isinstance(value, str):
            self.items.append(RichResponseItem(simpleResponse=SimpleResponse(textToSpeech=value)))
            self.fulfillment_text = value
        elif isinstance(value, SimpleResponse):
            self.items.append(RichResponseItem(simpleResponse=value))
            self.fulfillment_text = value.displayText
        elif isinstance(value, BasicCard):
            self.items.append(RichResponseItem(basicCard=value))
        elif isinstance(value, StructuredResponse):
            self.items.append(RichResponseItem(structuredResponse=value))
        elif isinstance(value, MediaResponse):
            self.items.append(RichResponseItem(mediaResponse=value))
        elif isinstance(value, CarouselBrowse):
            self.items.append(RichResponseItem(carouselBrowse=value))
        elif isinstance(value, TableCard):
            self.items.append(RichResponseItem(tableCard=value))
        elif isinstance(value, HtmlResponse):
            self.items.append(RichResponseItem(htmlResponse=value))
        elif isinstance(value, Image):
            self.items.append(RichResponseItem(basicCard=BasicCard(image=value)))
        elif isinstance(value, RichResponse):
            self.rich_response = value
        elif isinstance(value, Suggestion):
            self.suggestions.append(value)
        elif isinstance(value, LinkOutSuggestion):
            self.link_out_suggestion = value
        elif isinstance(value, HelperIntent):
            self.helper_intent = value
        elif isinstance(value, ActionContext):
            self.contexts.append(value)
        elif isinstance(value, SessionEntityType):
            self.session_entity_types.append(value)
        else:
            raise TypeError(f"Cannot add {type(value).__name__} to a response")
        return self

    def add_suggestions(self, titles: Iterable[str]) -> "ResponseBuilder":
        self.suggestions.extend(Suggestion(title=title) for title in titles)
        return self

    def add_all(self, suggestions: Iterable[Suggestion]) -> "ResponseBuilder":
        self.suggestions.extend(suggestions)
        return self

    def remove_context(self, name: str) -> "ResponseBuilder":
        """Expire a context by sending it back with a lifespan of 0."""
        self.contexts.append(ActionContext(name=name, lifespan=0))
        return self

    def end_conversation(self) -> "ResponseBuilder":
        self.expect_user_response = False
        return self

    def use(self, response: Union[AppResponse, WebhookResponse]) -> "ResponseBuilder":
        """Send a fully formed native response instead of the accumulated items."""
        if isinstance(response, AppResponse):
            self.app_response = response
        elif isinstance(response, WebhookResponse):
            self.webhook_response = response
        else:
            raise TypeError(f"Cannot use {type(response).__name__} as a response")
        return self

    def build(self) -> ActionResponse:
        if self.uses_dialogflow:
            return DialogflowResponse(self)
        return ActionsSdkResponse(self)
