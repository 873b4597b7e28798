import json

import pytest

from fulfillment.schemas.dialogflow import SessionEntityType
from fulfillment.schemas.rich_response import (
    AppResponse,
    BasicCard,
    Image,
    LinkOutSuggestion,
    RichResponse,
    RichResponseItem,
    SimpleResponse,
    Suggestion,
)
from fulfillment.services.action_request import ActionContext
from fulfillment.services.action_response import ActionsSdkResponse, DialogflowResponse
from fulfillment.services.actions_sdk_request import ActionsSdkRequest
from fulfillment.services.helper_intents import Confirmation, SignIn
from fulfillment.services.response_builder import ResponseBuilder
from fulfillment.services.response_serializer import ResponseSerializer
from fulfillment.testing import MockRequestBuilder


def _serialize(builder):
    return json.loads(ResponseSerializer(builder.session_id).to_json(builder.build()))


@pytest.fixture
def builder():
    return ResponseBuilder(uses_dialogflow=False)


class TestAdd:
    def test_text_sets_fulfillment_text(self, builder):
        builder.add("Hello")
        assert builder.items == [RichResponseItem(simpleResponse=SimpleResponse(textToSpeech="Hello"))]
        assert builder.fulfillment_text == "Hello"

    def test_simple_response_uses_display_text(self, builder):
        builder.add(SimpleResponse(textToSpeech="<speak>Hi</speak>", displayText="Hi"))
        assert builder.fulfillment_text == "Hi"

    def test_image_becomes_basic_card(self, builder):
        image = Image(url="https://example.com/cat.png", accessibilityText="cat")
        builder.add(image)
        assert builder.items[0].basicCard == BasicCard(image=image)

    def test_order_is_preserved(self, builder):
        builder.add("one").add(BasicCard(title="card")).add("two")
        assert [item.simpleResponse is not None for item in builder.items] == [True, False, True]

    def test_suggestions(self, builder):
        builder.add(Suggestion(title="a")).add_suggestions(["b", "c"]).add_all([Suggestion(title="d")])
        assert [suggestion.title for suggestion in builder.suggestions] == ["a", "b", "c", "d"]

    def test_helper_last_write_wins(self, builder):
        builder.add(Confirmation("sure?")).add(SignIn())
        assert builder.helper_intent == SignIn()

    def test_contexts_and_entities(self):
        builder = ResponseBuilder(session_id="S")
        builder.add(ActionContext("c1", 3)).remove_context("c2")
        builder.add(SessionEntityType(name="fruit", entityOverrideMode="ENTITY_OVERRIDE_MODE_OVERRIDE"))
        assert builder.contexts == [ActionContext("c1", 3), ActionContext("c2", 0)]
        assert builder.session_entity_types[0].name == "fruit"

    def test_unknown_type_raises(self, builder):
        with pytest.raises(TypeError):
            builder.add(42)

    def test_use_rejects_other_types(self, builder):
        with pytest.raises(TypeError):
            builder.use({"expectUserResponse": False})


class TestBuild:
    def test_variant_follows_flag(self):
        assert isinstance(ResponseBuilder(uses_dialogflow=False).build(), ActionsSdkResponse)
        assert isinstance(ResponseBuilder(uses_dialogflow=True).build(), DialogflowResponse)

    def test_for_request_shares_state(self):
        request = MockRequestBuilder(intent="x", uses_dialogflow=False, conversation_data={"step": 1}).build()
        builder = ResponseBuilder.for_request(request)
        request.conversation_data["step"] = 2
        assert builder.conversation_data == {"step": 2}
        assert builder.uses_dialogflow is False
        assert builder.session_id == "1234"


class TestActionsSdkSerialization:
    def test_ask_with_text(self, builder):
        assert _serialize(builder.add("hi")) == {
            "expectUserResponse": True,
            "expectedInputs": [
                {
                    "inputPrompt": {"richInitialPrompt": {"items": [{"simpleResponse": {"textToSpeech": "hi"}}]}},
                    "possibleIntents": [{"intent": "actions.intent.TEXT", "inputValueData": {}}],
                }
            ],
        }

    def test_ask_without_content_has_no_prompt(self, builder):
        body = _serialize(builder)
        assert "inputPrompt" not in body["expectedInputs"][0]

    def test_helper_replaces_text_intent(self, builder):
        body = _serialize(builder.add("hi").add(Confirmation("sure?")))
        possible_intent = body["expectedInputs"][0]["possibleIntents"][0]
        assert possible_intent["intent"] == "actions.intent.CONFIRMATION"
        assert possible_intent["inputValueData"]["@type"] == "type.googleapis.com/google.actions.v2.ConfirmationValueSpec"
        assert possible_intent["inputValueData"]["dialogSpec"]["requestConfirmationText"] == "sure?"

    def test_close(self, builder):
        body = _serialize(builder.add("bye").end_conversation())
        assert body == {
            "expectUserResponse": False,
            "finalResponse": {"richResponse": {"items": [{"simpleResponse": {"textToSpeech": "bye"}}]}},
        }

    def test_suggestions_and_link_out(self, builder):
        builder.add("hi").add_suggestions(["yes"])
        builder.add(LinkOutSuggestion(destinationName="Site", url="https://example.com"))
        rich = _serialize(builder)["expectedInputs"][0]["inputPrompt"]["richInitialPrompt"]
        assert rich["suggestions"] == [{"title": "yes"}]
        assert rich["linkOutSuggestion"] == {"destinationName": "Site", "url": "https://example.com"}

    def test_explicit_rich_response_overrides_items(self, builder):
        rich = RichResponse(items=[RichResponseItem(simpleResponse=SimpleResponse(textToSpeech="explicit"))])
        builder.add("ignored").add(rich)
        prompt = _serialize(builder)["expectedInputs"][0]["inputPrompt"]["richInitialPrompt"]
        assert prompt["items"] == [{"simpleResponse": {"textToSpeech": "explicit"}}]

    def test_state_is_packed(self):
        builder = ResponseBuilder(uses_dialogflow=False, conversation_data={"step": 1}, user_storage={"visits": 3})
        body = _serialize(builder.add("hi"))
        assert json.loads(body["conversationToken"]) == {"data": {"step": 1}}
        assert json.loads(body["userStorage"]) == {"data": {"visits": 3}}

    def test_conversation_data_round_trip(self):
        first = MockRequestBuilder(intent="x", uses_dialogflow=False, conversation_data={"a": 1}).build()
        first.conversation_data["b"] = [1, 2]
        body = _serialize(ResponseBuilder.for_request(first).add("ok"))

        payload = MockRequestBuilder(intent="x", uses_dialogflow=False).app_request_payload()
        payload["conversation"]["conversationToken"] = body["conversationToken"]
        assert ActionsSdkRequest.create(payload).conversation_data == {"a": 1, "b": [1, 2]}

    def test_use_app_response_supersedes_everything(self):
        builder = ResponseBuilder(uses_dialogflow=False, conversation_data={"step": 1})
        builder.add("ignored").use(AppResponse(expectUserResponse=False, conversationToken="custom"))
        assert _serialize(builder) == {"expectUserResponse": False, "conversationToken": "custom"}

    def test_version_metadata(self, builder):
        body = json.loads(ResponseSerializer(include_version_metadata=True).to_json(builder.add("hi").build()))
        assert body["ResponseMetadata"]["GoogleLibraryInfo"]["name"] == "fulfillment-adapter"

    def test_serializing_twice_is_stable(self, builder):
        response = builder.add("hi").add(Confirmation("sure?")).build()
        serializer = ResponseSerializer()
        assert serializer.to_json(response) == serializer.to_json(response)
