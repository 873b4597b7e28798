"""Request fixtures for exercising intent handlers without the platform."""

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from fulfillment.constants import APP_DATA_CONTEXT, APP_DATA_CONTEXT_LIFESPAN, Argument, Capability, CONTEXTS_SEGMENT
from fulfillment.services.actions_sdk_request import ActionsSdkRequest
from fulfillment.services.dialogflow_request import DialogflowRequest
from fulfillment.state import pack_context_data, pack_state


@dataclass
class MockRequestBuilder:
    intent: Optional[str] = None
    uses_dialogflow: bool = True
    raw_text: Optional[str] = None
    input_type: str = "KEYBOARD"
    arguments: list[dict[str, Any]] = field(default_factory=list)
    conversation_id: str = "1234"
    conversation_type: str = "ACTIVE"
    session: str = "session-id"
    conversation_data: Optional[dict[str, Any]] = None
    user_storage: Optional[dict[str, Any]] = None
    user_id: str = "abcd"
    locale: str = "en-US"
    last_seen: str = "2018-05-24T19:03:47Z"
    user_profile: Optional[dict[str, Any]] = None
    screen_output: bool = True
    media_output: bool = True
    device: Optional[dict[str, Any]] = None
    parameters: Optional[dict[str, Any]] = None

    def app_request_payload(self) -> dict[str, Any]:
        user: dict[str, Any] = {"userId": self.user_id, "locale": self.locale, "lastSeen": self.last_seen}
        if self.user_profile is not None:
            user["profile"] = self.user_profile
        if self.user_storage is not None:
            user["userStorage"] = pack_state(self.user_storage)

        conversation = {"conversationId": self.conversation_id, "type": self.conversation_type}
        if self.conversation_data is not None and not self.uses_dialogflow:
            conversation["conversationToken"] = pack_state(self.conversation_data)

        capabilities = [Capability.AUDIO_OUTPUT, Capability.WEB_BROWSER]
        if self.screen_output:
            capabilities.append(Capability.SCREEN_OUTPUT)
        if self.media_output:
            capabilities.append(Capability.MEDIA_RESPONSE_AUDIO)

        first_input: dict[str, Any] = {
            "intent": self.intent,
            "rawInputs": [{"inputType": self.input_type, "query": self.raw_text}],
        }
        if self.arguments:
            first_input["arguments"] = self.arguments

        payload: dict[str, Any] = {
            "user": user,
            "conversation": conversation,
            "inputs": [first_input] if self.intent is not None else [],
            "surface": {"capabilities": [{"name": capability.value} for capability in capabilities]},
        }
        if self.device is not None:
            payload["device"] = self.device
        return payload

    def webhook_request_payload(self) -> dict[str, Any]:
        query_result: dict[str, Any] = {
            "queryText": self.raw_text,
            "intent": {"displayName": self.intent},
            "parameters": self.parameters or {},
            "languageCode": self.locale,
        }
        if self.conversation_data is not None:
            query_result["outputContexts"] = [
                {
                    "name": f"{self.session}{CONTEXTS_SEGMENT}{APP_DATA_CONTEXT}",
                    "lifespanCount": APP_DATA_CONTEXT_LIFESPAN,
                    "parameters": {"data": pack_context_data(self.conversation_data)},
                }
            ]
        return {
            "responseId": "response-id",
            "session": self.session,
            "queryResult": query_result,
            "originalDetectIntentRequest": {
                "source": "google",
                "version": "2",
                "payload": self.app_request_payload(),
            },
        }

    def payload(self) -> dict[str, Any]:
        if self.uses_dialogflow:
            return self.webhook_request_payload()
        return self.app_request_payload()

    def build(self) -> Union[ActionsSdkRequest, DialogflowRequest]:
        if self.uses_dialogflow:
            return DialogflowRequest.create(self.webhook_request_payload())
        return ActionsSdkRequest.create(self.app_request_payload())

    @classmethod
    def welcome(cls, intent: str, uses_dialogflow: bool = True) -> "MockRequestBuilder":
        return cls(intent=intent, uses_dialogflow=uses_dialogflow, raw_text="talk to my app", conversation_type="NEW")

    @classmethod
    def user_confirmation(
        cls,
        confirmation: bool = True,
        intent: str = "actions.intent.CONFIRMATION",
        uses_dialogflow: bool = True,
    ) -> "MockRequestBuilder":
        return cls(
            intent=intent,
            uses_dialogflow=uses_dialogflow,
            raw_text="yes",
            arguments=[{"name": Argument.CONFIRMATION.value, "boolValue": confirmation}],
        )

    @classmethod
    def date_time(
        cls,
        date: dict[str, int],
        time: dict[str, int],
        intent: str = "actions.intent.DATETIME",
        uses_dialogflow: bool = True,
    ) -> "MockRequestBuilder":
        return cls(
            intent=intent,
            uses_dialogflow=uses_dialogflow,
            raw_text="5pm",
            arguments=[{"name": Argument.DATETIME.value, "datetimeValue": {"date": date, "time": time}}],
        )

    @classmethod
    def media_playback_status(
        cls,
        status: str = "FINISHED",
        intent: str = "actions.intent.MEDIA_STATUS",
        uses_dialogflow: bool = True,
    ) -> "MockRequestBuilder":
        return cls(
            intent=intent,
            uses_dialogflow=uses_dialogflow,
            raw_text="",
            arguments=[{"name": Argument.MEDIA_STATUS.value, "extension": {"status": status}}],
        )
