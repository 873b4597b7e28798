"""
Helper intents: built-in platform dialogs (confirmation, permission, lists,
sign-in, transactions...) a handler can hand the conversation over to.

Each helper is an immutable value. Its wire parameters are derived on demand
by `to_wire_parameters`, so serializing the same helper twice yields the
same map and nothing is cached on the instance.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Optional

from pydantic import BaseModel

from fulfillment.constants import PermissionName
from fulfillment.schemas.rich_response import CarouselSelectCarouselItem, ExpectedIntent, ListSelectListItem

V2_TYPE = "type.googleapis.com/google.actions.v2."
V3_TRANSACTIONS_TYPE = "type.googleapis.com/google.actions.transactions.v3."


def _compact(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(exclude_none=True)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {key: _compact(item) for key, item in value.items() if item is not None}
    if isinstance(value, (list, tuple)):
        return [_compact(item) for item in value]
    return value


@dataclass(frozen=True)
class HelperIntent:
    name: ClassVar[str]

    def _spec(self) -> dict[str, Any]:
        raise NotImplementedError

    @property
    def parameters(self) -> dict[str, Any]:
        return to_wire_parameters(self)

    def expected_intent(self) -> ExpectedIntent:
        return ExpectedIntent(intent=self.name, inputValueData=self.parameters)


def to_wire_parameters(helper: HelperIntent) -> dict[str, Any]:
    """Build the `inputValueData` map for `helper`. Absent fields are omitted."""
    return _compact(helper._spec())


@dataclass(frozen=True)
class Confirmation(HelperIntent):
    name: ClassVar[str] = "actions.intent.CONFIRMATION"

    confirmation_text: Optional[str] = None

    def _spec(self) -> dict[str, Any]:
        return {
            "@type": V2_TYPE + "ConfirmationValueSpec",
            "dialogSpec": {"requestConfirmationText": self.confirmation_text},
        }


@dataclass(frozen=True)
class DateTimePrompt(HelperIntent):
    name: ClassVar[str] = "actions.intent.DATETIME"

    date_time_prompt: Optional[str] = None
    date_prompt: Optional[str] = None
    time_prompt: Optional[str] = None

    def _spec(self) -> dict[str, Any]:
        return {
            "@type": V2_TYPE + "DateTimeValueSpec",
            "dialogSpec": {
                "requestDatetimeText": self.date_time_prompt,
                "requestDateText": self.date_prompt,
                "requestTimeText": self.time_prompt,
            },
        }


@dataclass(frozen=True)
class Permission(HelperIntent):
    name: ClassVar[str] = "actions.intent.PERMISSION"

    permissions: tuple[str, ...] = ()
    context: Optional[str] = None

    def _spec(self) -> dict[str, Any]:
        return {
            "@type": V2_TYPE + "PermissionValueSpec",
            "optContext": self.context,
            "permissions": list(self.permissions),
        }


@dataclass(frozen=True)
class UpdatePermission(HelperIntent):
    """Ask for permission to push updates for `intent`."""

    name: ClassVar[str] = "actions.intent.PERMISSION"

    intent: str = ""
    arguments: Optional[tuple[dict[str, Any], ...]] = None
    context: Optional[str] = None

    def _spec(self) -> dict[str, Any]:
        return {
            "@type": V2_TYPE + "PermissionValueSpec",
            "optContext": self.context,
            "permissions": [PermissionName.UPDATE],
            "updatePermissionValueSpec": {
                "intent": self.intent,
                "arguments": list(self.arguments) if self.arguments is not None else None,
            },
        }


@dataclass(frozen=True)
class Place(HelperIntent):
    name: ClassVar[str] = "actions.intent.PLACE"

    request_prompt: Optional[str] = None
    permission_context: Optional[str] = None

    def _spec(self) -> dict[str, Any]:
        return {
            "@type": V2_TYPE + "PlaceValueSpec",
            "dialog_spec": {
                "extension": {
                    "@type": V2_TYPE + "PlaceValueSpec.PlaceDialogSpec",
                    "requestPrompt": self.request_prompt,
                    "permissionContext": self.permission_context,
                }
            },
        }


@dataclass(frozen=True)
class SelectionList(HelperIntent):
    name: ClassVar[str] = "actions.intent.OPTION"

    title: Optional[str] = None
    items: tuple[ListSelectListItem, ...] = ()

    def _spec(self) -> dict[str, Any]:
        return {
            "@type": V2_TYPE + "OptionValueSpec",
            "listSelect": {"title": self.title, "items": list(self.items)},
        }


@dataclass(frozen=True)
class SelectionCarousel(HelperIntent):
    name: ClassVar[str] = "actions.intent.OPTION"

    items: tuple[CarouselSelectCarouselItem, ...] = ()
    image_display_options: Optional[str] = None

    def _spec(self) -> dict[str, Any]:
        return {
            "@type": V2_TYPE + "OptionValueSpec",
            "carouselSelect": {"items": list(self.items), "imageDisplayOptions": self.image_display_options},
        }


@dataclass(frozen=True)
class SignIn(HelperIntent):
    name: ClassVar[str] = "actions.intent.SIGN_IN"

    context: Optional[str] = None

    def _spec(self) -> dict[str, Any]:
        return {"@type": V2_TYPE + "SignInValueSpec", "optContext": self.context}


@dataclass(frozen=True)
class NewSurface(HelperIntent):
    name: ClassVar[str] = "actions.intent.NEW_SURFACE"

    capabilities: tuple[str, ...] = ()
    context: Optional[str] = None
    notification_title: Optional[str] = None

    def _spec(self) -> dict[str, Any]:
        return {
            "@type": V2_TYPE + "NewSurfaceValueSpec",
            "capabilities": list(self.capabilities) or None,
            "context": self.context,
            "notificationTitle": self.notification_title,
        }


@dataclass(frozen=True)
class RegisterUpdate(HelperIntent):
    name: ClassVar[str] = "actions.intent.REGISTER_UPDATE"

    intent: str = ""
    arguments: Optional[tuple[dict[str, Any], ...]] = None
    frequency: str = "DAILY"

    def _spec(self) -> dict[str, Any]:
        return {
            "@type": V2_TYPE + "RegisterUpdateValueSpec",
            "intent": self.intent,
            "arguments": list(self.arguments) if self.arguments is not None else None,
            "triggerContext": {"timeContext": {"frequency": self.frequency}},
        }


@dataclass(frozen=True)
class DeepLink(HelperIntent):
    name: ClassVar[str] = "actions.intent.LINK"

    destination: Optional[str] = None
    url: Optional[str] = None
    package_name: Optional[str] = None
    reason: Optional[str] = None

    def _spec(self) -> dict[str, Any]:
        android_app = {"packageName": self.package_name} if self.package_name else None
        return {
            "@type": V2_TYPE + "LinkValueSpec",
            "dialogSpec": {"destinationName": self.destination, "requestLinkReason": self.reason},
            "openUrlAction": {"url": self.url, "androidApp": android_app},
        }


@dataclass(frozen=True)
class DeliveryAddress(HelperIntent):
    name: ClassVar[str] = "actions.intent.DELIVERY_ADDRESS"

    reason: Optional[str] = None

    def _spec(self) -> dict[str, Any]:
        return {"@type": V2_TYPE + "DeliveryAddressValueSpec", "addressOptions": {"reason": self.reason}}


# Transaction objects are passed through as opaque maps.


@dataclass(frozen=True)
class TransactionRequirements(HelperIntent):
    name: ClassVar[str] = "actions.intent.TRANSACTION_REQUIREMENTS_CHECK"

    order_options: Optional[dict[str, Any]] = field(default=None, hash=False)
    payment_options: Optional[dict[str, Any]] = field(default=None, hash=False)

    def _spec(self) -> dict[str, Any]:
        return {
            "@type": V2_TYPE + "TransactionRequirementsCheckSpec",
            "orderOptions": self.order_options,
            "paymentOptions": self.payment_options,
        }


@dataclass(frozen=True)
class TransactionDecision(HelperIntent):
    name: ClassVar[str] = "actions.intent.TRANSACTION_DECISION"

    order_options: Optional[dict[str, Any]] = field(default=None, hash=False)
    payment_options: Optional[dict[str, Any]] = field(default=None, hash=False)
    presentation_options: Optional[dict[str, Any]] = field(default=None, hash=False)
    proposed_order: Optional[dict[str, Any]] = field(default=None, hash=False)

    def _spec(self) -> dict[str, Any]:
        return {
            "@type": V2_TYPE + "TransactionDecisionValueSpec",
            "orderOptions": self.order_options,
            "paymentOptions": self.payment_options,
            "presentationOptions": self.presentation_options,
            "proposedOrder": self.proposed_order,
        }


@dataclass(frozen=True)
class TransactionDecisionV3(HelperIntent):
    name: ClassVar[str] = "actions.intent.TRANSACTION_DECISION"

    order_options: Optional[dict[str, Any]] = field(default=None, hash=False)
    payment_parameters: Optional[dict[str, Any]] = field(default=None, hash=False)
    presentation_options: Optional[dict[str, Any]] = field(default=None, hash=False)
    order: Optional[dict[str, Any]] = field(default=None, hash=False)

    def _spec(self) -> dict[str, Any]:
        return {
            "@type": V3_TRANSACTIONS_TYPE + "TransactionDecisionValueSpec",
            "orderOptions": self.order_options,
            "paymentParameters": self.payment_parameters,
            "presentationOptions": self.presentation_options,
            "order": self.order,
        }


@dataclass(frozen=True)
class CompletePurchase(HelperIntent):
    name: ClassVar[str] = "actions.intent.COMPLETE_PURCHASE"

    sku_id: Optional[str] = None
    sku_type: Optional[str] = None
    package_name: Optional[str] = None
    developer_payload: Optional[str] = None

    def _spec(self) -> dict[str, Any]:
        sku = {"id": self.sku_id, "skuType": self.sku_type, "packageName": self.package_name}
        return {
            "@type": V3_TRANSACTIONS_TYPE + "CompletePurchaseValueSpec",
            "skuId": sku if any(value is not None for value in sku.values()) else None,
            "developerPayload": self.developer_payload,
        }


@dataclass(frozen=True)
class DigitalPurchaseCheck(HelperIntent):
    name: ClassVar[str] = "actions.intent.DIGITAL_PURCHASE_CHECK"

    def _spec(self) -> dict[str, Any]:
        return {"@type": V3_TRANSACTIONS_TYPE + "DigitalPurchaseCheckSpec"}
