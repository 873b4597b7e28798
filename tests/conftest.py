import pytest

from fulfillment.testing import MockRequestBuilder


@pytest.fixture
def app_request_payload():
    """Minimal Actions SDK request for the welcome intent."""
    return {
        "user": {"userId": "abcd", "locale": "en-US", "lastSeen": "2018-05-24T19:03:47Z"},
        "conversation": {"conversationId": "1234", "type": "NEW"},
        "inputs": [
            {
                "intent": "actions.intent.MAIN",
                "rawInputs": [{"inputType": "VOICE", "query": "talk to my test app"}],
            }
        ],
        "surface": {
            "capabilities": [
                {"name": "actions.capability.SCREEN_OUTPUT"},
                {"name": "actions.capability.AUDIO_OUTPUT"},
            ]
        },
        "isInSandbox": True,
    }


@pytest.fixture
def webhook_request_payload(app_request_payload):
    """Dialogflow request wrapping `app_request_payload`."""
    return {
        "responseId": "abc-123",
        "session": "projects/test-agent/agent/sessions/S",
        "queryResult": {
            "queryText": "talk to my test app",
            "parameters": {"color": "blue"},
            "allRequiredParamsPresent": True,
            "intent": {"name": "projects/test-agent/agent/intents/1", "displayName": "Default Welcome Intent"},
            "intentDetectionConfidence": 1.0,
            "languageCode": "en-us",
            "outputContexts": [
                {
                    "name": "projects/test-agent/agent/sessions/S/contexts/actions_capability_screen_output",
                    "parameters": {},
                },
                {
                    "name": "projects/test-agent/agent/sessions/S/contexts/_actions_on_google",
                    "lifespanCount": 99,
                    "parameters": {"data": '{"count": 2}'},
                },
            ],
        },
        "originalDetectIntentRequest": {"source": "google", "version": "2", "payload": app_request_payload},
    }


@pytest.fixture
def mock_request_builder():
    return MockRequestBuilder()


@pytest.fixture
def mock_env(monkeypatch):
    """Set test environment variables."""
    monkeypatch.setenv("FULFILLMENT_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("FULFILLMENT_DEFAULT_LOCALE", "en-US")
