"""Unified view over the two inbound webhook formats."""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ValidationError

from fulfillment.config import settings
from fulfillment.constants import DEFAULT_CONTEXT_LIFESPAN, Argument as ArgumentName
from fulfillment.errors import MalformedRequestError, NoInputsError
from fulfillment.schemas.conversation import Argument, DateTime, Device, Location, RawInput, Surface, User

Body = Union[str, bytes, bytearray, Mapping[str, Any]]


@dataclass(frozen=True)
class Locale:
    language: str
    region: Optional[str] = None

    @property
    def tag(self) -> str:
        return f"{self.language}-{self.region}" if self.region else self.language

    @classmethod
    def default(cls) -> "Locale":
        locale = cls._split(settings.default_locale)
        return locale if locale is not None and locale.language else cls("en", "US")

    @classmethod
    def from_tag(cls, tag: Optional[str]) -> "Locale":
        """Build a locale from "xx" or "xx-YY"; anything else gives the default."""
        return cls._split(tag) or cls.default()

    @classmethod
    def _split(cls, tag: Optional[str]) -> Optional["Locale"]:
        if tag is None:
            return None
        parts = tag.split("-")
        if len(parts) == 1:
            return cls(parts[0])
        if len(parts) == 2:
            return cls(parts[0], parts[1])
        return None


@dataclass
class ActionContext:
    name: str
    lifespan: int = DEFAULT_CONTEXT_LIFESPAN
    parameters: Optional[dict[str, Any]] = None


def qualify_name(session_id: Optional[str], segment: str, name: str) -> str:
    """Prefix `name` with `<session><segment>` unless it already carries it."""
    if session_id is None:
        return name
    prefix = f"{session_id}{segment}"
    if name.startswith(prefix):
        return name
    return prefix + name


def load_payload(body: Body) -> dict[str, Any]:
    """Decode a webhook body into a JSON object."""
    if isinstance(body, Mapping):
        return dict(body)
    if isinstance(body, (bytes, bytearray)):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedRequestError(f"Request body is not valid UTF-8: {e}")
    try:
        payload = json.loads(body)
    except (TypeError, ValueError) as e:
        raise MalformedRequestError(f"Request body is not valid JSON: {e}")
    if not isinstance(payload, dict):
        raise MalformedRequestError("Request body must be a JSON object")
    return payload


def parse_model(model: type[BaseModel], payload: Mapping[str, Any]):
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise MalformedRequestError(f"Invalid {model.__name__}: {e.error_count()} error(s): {e.errors()[0]['msg']}")


class ActionRequest(ABC):
    """
    Read-only request facade shared by Actions SDK and Dialogflow webhooks.

    Accessors never raise for missing data; they return None, False or an
    empty collection. The only exception is `intent` on an Actions SDK
    request without inputs.
    """

    headers: dict[str, str]

    @property
    @abstractmethod
    def intent(self) -> str: ...

    @property
    @abstractmethod
    def uses_dialogflow(self) -> bool: ...

    @property
    @abstractmethod
    def session_id(self) -> Optional[str]: ...

    @property
    @abstractmethod
    def user(self) -> Optional[User]: ...

    @property
    @abstractmethod
    def device(self) -> Optional[Device]: ...

    @property
    @abstractmethod
    def surface(self) -> Optional[Surface]: ...

    @property
    @abstractmethod
    def available_surfaces(self) -> list[Surface]: ...

    @property
    @abstractmethod
    def is_in_sandbox(self) -> bool: ...

    @property
    @abstractmethod
    def raw_input(self) -> Optional[RawInput]: ...

    @property
    @abstractmethod
    def locale(self) -> Locale: ...

    @property
    @abstractmethod
    def conversation_data(self) -> dict[str, Any]: ...

    @property
    @abstractmethod
    def user_storage(self) -> dict[str, Any]: ...

    @abstractmethod
    def get_argument(self, name: str) -> Optional[Argument]: ...

    @abstractmethod
    def get_parameter(self, name: str) -> Any: ...

    @abstractmethod
    def get_context(self, name: str) -> Optional[ActionContext]: ...

    @abstractmethod
    def get_contexts(self) -> list[ActionContext]: ...

    @property
    def raw_text(self) -> Optional[str]:
        raw_input = self.raw_input
        return raw_input.query if raw_input else None

    def has_capability(self, capability: str) -> bool:
        surface = self.surface
        if surface is None or not surface.capabilities:
            return False
        return any(item.name == capability for item in surface.capabilities)

    @property
    def reprompt_count(self) -> Optional[int]:
        argument = self.get_argument(ArgumentName.REPROMPT_COUNT.value)
        return argument.intValue if argument else None

    @property
    def is_final_prompt(self) -> bool:
        argument = self.get_argument(ArgumentName.IS_FINAL_REPROMPT.value)
        return bool(argument and argument.boolValue)

    def get_user_confirmation(self) -> bool:
        argument = self.get_argument(ArgumentName.CONFIRMATION.value)
        return bool(argument and argument.boolValue)

    def is_permission_granted(self) -> bool:
        argument = self.get_argument(ArgumentName.PERMISSION.value)
        return bool(argument and argument.textValue == "true")

    def is_sign_in_granted(self) -> bool:
        return self._extension_status(ArgumentName.SIGN_IN.value) == "OK"

    def is_update_registered(self) -> bool:
        return self._extension_status(ArgumentName.REGISTER_UPDATE.value) == "OK"

    def get_place(self) -> Optional[Location]:
        argument = self.get_argument(ArgumentName.PLACE.value)
        return argument.placeValue if argument else None

    def get_date_time(self) -> Optional[DateTime]:
        argument = self.get_argument(ArgumentName.DATETIME.value)
        return argument.datetimeValue if argument else None

    def get_media_status(self) -> Optional[str]:
        return self._extension_status(ArgumentName.MEDIA_STATUS.value)

    def get_selected_option(self) -> Optional[str]:
        argument = self.get_argument(ArgumentName.OPTION.value)
        return argument.textValue if argument else None

    def _extension_status(self, name: str) -> Optional[str]:
        argument = self.get_argument(name)
        if argument is None or not argument.extension:
            return None
        return argument.extension.get("status")

    def log_context(self) -> dict[str, Any]:
        """Fields bound to log records while this request is handled."""
        try:
            intent = self.intent
        except NoInputsError:
            intent = None
        return {"session_id": self.session_id, "intent": intent, "dialogflow": self.uses_dialogflow}
