import json
from unittest.mock import patch

import pytest

from fulfillment.services.conversation_app import ActionsSdkApp, DialogflowApp
from fulfillment.services.helper_intents import Confirmation, SelectionList
from fulfillment.services.response_builder import ResponseBuilder
from fulfillment.testing import MockRequestBuilder


def _build_app(app):
    @app.handler("welcome")
    def welcome(request):
        request.conversation_data["visits"] = request.conversation_data.get("visits", 0) + 1
        return app.get_response_builder(request).add("Hi!").add(Confirmation("Ready?")).build()

    @app.handler("async_bye")
    async def bye(request):
        return app.get_response_builder(request).add("Bye").end_conversation().build()

    @app.handler("broken")
    def broken(request):
        raise RuntimeError("database is down")

    @app.handler("wrong_type")
    async def wrong_type(request):
        return {"speech": "hi"}

    @app.handler("list_only")
    def list_only(request):
        return app.get_response_builder(request).add(SelectionList(title="Pick")).build()

    return app


@pytest.fixture
def actions_sdk_app():
    return _build_app(ActionsSdkApp())


@pytest.fixture
def dialogflow_app():
    return _build_app(DialogflowApp())


class TestActionsSdkApp:
    @pytest.mark.asyncio
    async def test_success(self, actions_sdk_app):
        body = json.dumps(MockRequestBuilder.welcome("welcome", uses_dialogflow=False).payload())
        result = await actions_sdk_app.handle_request(body, {"content-type": "application/json"})

        assert result.ok is True
        response = json.loads(result.value)
        assert response["expectedInputs"][0]["possibleIntents"][0]["intent"] == "actions.intent.CONFIRMATION"
        assert json.loads(response["conversationToken"]) == {"data": {"visits": 1}}

    @pytest.mark.asyncio
    async def test_async_handler(self, actions_sdk_app):
        body = MockRequestBuilder(intent="async_bye", uses_dialogflow=False).payload()
        result = await actions_sdk_app.handle_request(json.dumps(body))
        assert json.loads(result.value)["expectUserResponse"] is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [None, "", "   ", b""])
    async def test_empty_body(self, actions_sdk_app, body):
        result = await actions_sdk_app.handle_request(body)
        assert result.ok is False
        assert result.error == "Invalid or empty JSON"
        assert result.error_code == "invalid_request"

    @pytest.mark.asyncio
    async def test_malformed_json(self, actions_sdk_app):
        result = await actions_sdk_app.handle_request("{oops")
        assert result.ok is False
        assert result.error_code == "invalid_request"

    @pytest.mark.asyncio
    async def test_no_inputs(self, actions_sdk_app):
        result = await actions_sdk_app.handle_request('{"inputs": []}')
        assert result.error == "Request has no inputs"
        assert result.error_code == "no_inputs"

    @pytest.mark.asyncio
    async def test_unknown_intent(self, actions_sdk_app):
        body = MockRequestBuilder(intent="nope", uses_dialogflow=False).payload()
        result = await actions_sdk_app.handle_request(json.dumps(body))
        assert result.error == "Intent handler not found - nope"
        assert result.error_code == "intent_not_found"

    @pytest.mark.asyncio
    async def test_handler_exception_is_captured(self, actions_sdk_app):
        body = MockRequestBuilder(intent="broken", uses_dialogflow=False).payload()
        with patch("fulfillment.services.conversation_app.logger") as mock_logger:
            result = await actions_sdk_app.handle_request(json.dumps(body))

        assert result.ok is False
        assert result.error == "database is down"
        assert result.error_code == "handler_error"
        mock_logger.exception.assert_called_once()

    @pytest.mark.asyncio
    async def test_awaitable_resolving_to_wrong_type(self, actions_sdk_app):
        body = MockRequestBuilder(intent="wrong_type", uses_dialogflow=False).payload()
        result = await actions_sdk_app.handle_request(json.dumps(body))
        assert result.error_code == "handler_contract"

    @pytest.mark.asyncio
    async def test_missing_simple_response(self, actions_sdk_app):
        body = MockRequestBuilder(intent="list_only", uses_dialogflow=False).payload()
        result = await actions_sdk_app.handle_request(json.dumps(body))
        assert result.error_code == "serialization_error"


class TestDialogflowApp:
    @pytest.mark.asyncio
    async def test_success(self, dialogflow_app):
        body = MockRequestBuilder.welcome("welcome", uses_dialogflow=True)
        body.conversation_data = {"visits": 4}
        result = await dialogflow_app.handle_request(json.dumps(body.payload()).encode("utf-8"))

        assert result.ok is True
        response = json.loads(result.value)
        assert response["fulfillmentText"] == "Hi!"
        assert response["payload"]["google"]["systemIntent"]["intent"] == "actions.intent.CONFIRMATION"
        data_context = response["outputContexts"][0]
        assert data_context["name"] == "session-id/contexts/_actions_on_google"
        assert json.loads(data_context["parameters"]["data"]) == {"visits": 5}

    @pytest.mark.asyncio
    async def test_missing_intent_routes_to_invalid(self, dialogflow_app):
        result = await dialogflow_app.handle_request('{"session": "S", "queryResult": {}}')
        assert result.error == "Intent handler not found - INVALID"

    @pytest.mark.asyncio
    async def test_missing_simple_response(self, dialogflow_app):
        body = MockRequestBuilder(intent="list_only").payload()
        result = await dialogflow_app.handle_request(json.dumps(body))
        assert result.error == "A simple response is required in addition to this type of response"


class TestGetResponseBuilder:
    def test_wires_request_state(self, dialogflow_app):
        request = MockRequestBuilder(intent="welcome", conversation_data={"a": 1}).build()
        builder = dialogflow_app.get_response_builder(request)
        assert isinstance(builder, ResponseBuilder)
        assert builder.uses_dialogflow is True
        assert builder.session_id == "session-id"
        assert builder.conversation_data is request.conversation_data
