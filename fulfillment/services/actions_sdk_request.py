from typing import Any, Mapping, Optional

from fulfillment.errors import NoInputsError
from fulfillment.schemas.conversation import AppRequest, Argument, Device, Input, RawInput, Surface, User
from fulfillment.services.action_request import ActionContext, ActionRequest, Body, Locale, load_payload, parse_model
from fulfillment.state import unpack_state


class ActionsSdkRequest(ActionRequest):
    """Request received directly from the assistant (conversation webhook)."""

    def __init__(
        self,
        app_request: AppRequest,
        headers: Optional[Mapping[str, str]] = None,
        part_of_dialogflow: bool = False,
    ):
        self.app_request = app_request
        self.headers = dict(headers or {})
        self.part_of_dialogflow = part_of_dialogflow

        user = app_request.user
        self._user_storage = unpack_state(user.userStorage) if user else {}

        # Dialogflow reuses the conversation token for its own purposes
        conversation = app_request.conversation
        if part_of_dialogflow or conversation is None:
            self._conversation_data: dict[str, Any] = {}
        else:
            self._conversation_data = unpack_state(conversation.conversationToken)

    @classmethod
    def create(
        cls,
        body: Body,
        headers: Optional[Mapping[str, str]] = None,
        part_of_dialogflow: bool = False,
    ) -> "ActionsSdkRequest":
        app_request = parse_model(AppRequest, load_payload(body))
        return cls(app_request, headers=headers, part_of_dialogflow=part_of_dialogflow)

    @property
    def _first_input(self) -> Optional[Input]:
        inputs = self.app_request.inputs
        return inputs[0] if inputs else None

    @property
    def intent(self) -> str:
        first_input = self._first_input
        if first_input is None:
            raise NoInputsError()
        return first_input.intent

    @property
    def uses_dialogflow(self) -> bool:
        return False

    @property
    def session_id(self) -> Optional[str]:
        conversation = self.app_request.conversation
        return conversation.conversationId if conversation else None

    @property
    def user(self) -> Optional[User]:
        return self.app_request.user

    @property
    def device(self) -> Optional[Device]:
        return self.app_request.device

    @property
    def surface(self) -> Optional[Surface]:
        return self.app_request.surface

    @property
    def available_surfaces(self) -> list[Surface]:
        return list(self.app_request.availableSurfaces or [])

    @property
    def is_in_sandbox(self) -> bool:
        return bool(self.app_request.isInSandbox)

    @property
    def raw_input(self) -> Optional[RawInput]:
        first_input = self._first_input
        if first_input is None or not first_input.rawInputs:
            return None
        return first_input.rawInputs[0]

    @property
    def locale(self) -> Locale:
        user = self.app_request.user
        return Locale.from_tag(user.locale if user else None)

    @property
    def conversation_data(self) -> dict[str, Any]:
        return self._conversation_data

    @property
    def user_storage(self) -> dict[str, Any]:
        return self._user_storage

    def get_argument(self, name: str) -> Optional[Argument]:
        first_input = self._first_input
        if first_input is None or not first_input.arguments:
            return None
        for argument in first_input.arguments:
            if argument.name == name:
                return argument
        return None

    def get_parameter(self, name: str) -> Any:
        return None

    def get_context(self, name: str) -> Optional[ActionContext]:
        return None

    def get_contexts(self) -> list[ActionContext]:
        return []
