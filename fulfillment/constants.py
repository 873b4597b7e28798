from enum import Enum

# Reserved context carrying conversation data on the Dialogflow path
APP_DATA_CONTEXT = "_actions_on_google"
APP_DATA_CONTEXT_LIFESPAN = 99

CONTEXTS_SEGMENT = "/contexts/"
ENTITY_TYPES_SEGMENT = "/entityTypes/"

TEXT_INTENT = "actions.intent.TEXT"
OPTION_INTENT = "actions.intent.OPTION"
INVALID_INTENT = "INVALID"

DEFAULT_CONTEXT_LIFESPAN = 5

# Helper intents whose prompt must carry plain text alongside it
INTENTS_REQUIRING_SIMPLE_RESPONSE = frozenset({OPTION_INTENT})

SIMPLE_RESPONSE_REQUIRED = "A simple response is required in addition to this type of response"

LIBRARY_NAME = "fulfillment-adapter"
LIBRARY_VERSION = "0.1.0"


class Argument(str, Enum):
    """Names of arguments the platform attaches to an input."""

    CONFIRMATION = "CONFIRMATION"
    DATETIME = "DATETIME"
    IS_FINAL_REPROMPT = "IS_FINAL_REPROMPT"
    MEDIA_STATUS = "MEDIA_STATUS"
    OPTION = "OPTION"
    PERMISSION = "PERMISSION"
    PLACE = "PLACE"
    REGISTER_UPDATE = "REGISTER_UPDATE"
    REPROMPT_COUNT = "REPROMPT_COUNT"
    SIGN_IN = "SIGN_IN"
    UPDATES_USER_ID = "UPDATES_USER_ID"
    NEW_SURFACE = "NEW_SURFACE"
    TRANSACTION_DECISION_VALUE = "TRANSACTION_DECISION_VALUE"
    TRANSACTION_REQUIREMENTS_CHECK_RESULT = "TRANSACTION_REQUIREMENTS_CHECK_RESULT"
    DELIVERY_ADDRESS_VALUE = "DELIVERY_ADDRESS_VALUE"


class PermissionName(str, Enum):
    NAME = "NAME"
    DEVICE_PRECISE_LOCATION = "DEVICE_PRECISE_LOCATION"
    DEVICE_COARSE_LOCATION = "DEVICE_COARSE_LOCATION"
    UPDATE = "UPDATE"


class Capability(str, Enum):
    SCREEN_OUTPUT = "actions.capability.SCREEN_OUTPUT"
    AUDIO_OUTPUT = "actions.capability.AUDIO_OUTPUT"
    MEDIA_RESPONSE_AUDIO = "actions.capability.MEDIA_RESPONSE_AUDIO"
    WEB_BROWSER = "actions.capability.WEB_BROWSER"
    INTERACTIVE_CANVAS = "actions.capability.INTERACTIVE_CANVAS"


class EntityOverrideMode(str, Enum):
    OVERRIDE = "ENTITY_OVERRIDE_MODE_OVERRIDE"
    SUPPLEMENT = "ENTITY_OVERRIDE_MODE_SUPPLEMENT"


class MediaStatus(str, Enum):
    FINISHED = "FINISHED"
    STATUS_UNSPECIFIED = "STATUS_UNSPECIFIED"
