"""Inbound Actions SDK conversation webhook payload (AppRequest)."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class WireModel(BaseModel):
    # Unknown fields are kept so payloads survive a parse/dump cycle
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class UserProfile(WireModel):
    displayName: Optional[str] = None
    givenName: Optional[str] = None
    familyName: Optional[str] = None


class User(WireModel):
    userId: Optional[str] = None
    idToken: Optional[str] = None
    profile: Optional[UserProfile] = None
    accessToken: Optional[str] = None
    permissions: Optional[list[str]] = None
    locale: Optional[str] = None
    lastSeen: Optional[str] = None
    userStorage: Optional[str] = None
    packageEntitlements: Optional[list[dict[str, Any]]] = None
    userVerificationStatus: Optional[str] = None


class LatLng(WireModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class PostalAddress(WireModel):
    regionCode: Optional[str] = None
    languageCode: Optional[str] = None
    postalCode: Optional[str] = None
    administrativeArea: Optional[str] = None
    locality: Optional[str] = None
    addressLines: Optional[list[str]] = None
    recipients: Optional[list[str]] = None


class Location(WireModel):
    coordinates: Optional[LatLng] = None
    formattedAddress: Optional[str] = None
    zipCode: Optional[str] = None
    city: Optional[str] = None
    postalAddress: Optional[PostalAddress] = None
    name: Optional[str] = None
    phoneNumber: Optional[str] = None
    notes: Optional[str] = None
    placeId: Optional[str] = None


class Device(WireModel):
    location: Optional[Location] = None


class CapabilityItem(WireModel):
    name: Optional[str] = None


class Surface(WireModel):
    capabilities: Optional[list[CapabilityItem]] = None


class Conversation(WireModel):
    conversationId: Optional[str] = None
    type: Optional[str] = None
    conversationToken: Optional[str] = None


class RawInput(WireModel):
    inputType: Optional[str] = None
    query: Optional[str] = None
    url: Optional[str] = None


class CalendarDate(WireModel):
    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None


class TimeOfDay(WireModel):
    hours: Optional[int] = None
    minutes: Optional[int] = None
    seconds: Optional[int] = None
    nanos: Optional[int] = None


class DateTime(WireModel):
    date: Optional[CalendarDate] = None
    time: Optional[TimeOfDay] = None


class Status(WireModel):
    code: Optional[int] = None
    message: Optional[str] = None
    details: Optional[list[dict[str, Any]]] = None


class Argument(WireModel):
    name: Optional[str] = None
    rawText: Optional[str] = None
    textValue: Optional[str] = None
    intValue: Optional[int] = None
    floatValue: Optional[float] = None
    boolValue: Optional[bool] = None
    datetimeValue: Optional[DateTime] = None
    placeValue: Optional[Location] = None
    extension: Optional[dict[str, Any]] = None
    structuredValue: Optional[dict[str, Any]] = None
    status: Optional[Status] = None


class Input(WireModel):
    intent: str
    rawInputs: Optional[list[RawInput]] = None
    arguments: Optional[list[Argument]] = None


class AppRequest(WireModel):
    user: Optional[User] = None
    device: Optional[Device] = None
    surface: Optional[Surface] = None
    conversation: Optional[Conversation] = None
    inputs: Optional[list[Input]] = None
    isInSandbox: Optional[bool] = None
    availableSurfaces: Optional[list[Surface]] = None
