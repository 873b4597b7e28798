"""Dialogflow v2 webhook request and response payloads."""

from typing import Any, Optional

from fulfillment.schemas.conversation import WireModel


class Intent(WireModel):
    name: Optional[str] = None
    displayName: Optional[str] = None
    isFallback: Optional[bool] = None


class Context(WireModel):
    name: str
    lifespanCount: Optional[int] = None
    parameters: Optional[dict[str, Any]] = None


class QueryResult(WireModel):
    queryText: Optional[str] = None
    languageCode: Optional[str] = None
    speechRecognitionConfidence: Optional[float] = None
    action: Optional[str] = None
    parameters: Optional[dict[str, Any]] = None
    allRequiredParamsPresent: Optional[bool] = None
    fulfillmentText: Optional[str] = None
    fulfillmentMessages: Optional[list[dict[str, Any]]] = None
    outputContexts: Optional[list[Context]] = None
    intent: Optional[Intent] = None
    intentDetectionConfidence: Optional[float] = None
    diagnosticInfo: Optional[dict[str, Any]] = None


class OriginalDetectIntentRequest(WireModel):
    source: Optional[str] = None
    version: Optional[str] = None
    payload: Optional[dict[str, Any]] = None


class WebhookRequest(WireModel):
    responseId: Optional[str] = None
    session: Optional[str] = None
    queryResult: Optional[QueryResult] = None
    originalDetectIntentRequest: Optional[OriginalDetectIntentRequest] = None


class EntityTypeEntity(WireModel):
    value: str
    synonyms: list[str] = []


class SessionEntityType(WireModel):
    name: str
    entityOverrideMode: Optional[str] = None
    entities: Optional[list[EntityTypeEntity]] = None


class EventInput(WireModel):
    name: str
    parameters: Optional[dict[str, Any]] = None
    languageCode: Optional[str] = None


class WebhookResponse(WireModel):
    fulfillmentText: Optional[str] = None
    fulfillmentMessages: Optional[list[dict[str, Any]]] = None
    source: Optional[str] = None
    payload: Optional[dict[str, Any]] = None
    outputContexts: Optional[list[Context]] = None
    followupEventInput: Optional[EventInput] = None
    sessionEntityTypes: Optional[list[SessionEntityType]] = None
