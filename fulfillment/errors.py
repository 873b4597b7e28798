from typing import Optional


class FulfillmentError(Exception):
    """Base error for request parsing, routing and serialization failures."""

    code = "fulfillment_error"

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        if code is not None:
            self.code = code
        super().__init__(message)


class MalformedRequestError(FulfillmentError):
    code = "invalid_request"


class NoInputsError(FulfillmentError):
    code = "no_inputs"

    def __init__(self, message: str = "Request has no inputs"):
        super().__init__(message)


class IntentNotFoundError(FulfillmentError):
    code = "intent_not_found"

    def __init__(self, intent: str):
        self.intent = intent
        super().__init__(f"Intent handler not found - {intent}")


class HandlerContractError(FulfillmentError):
    code = "handler_contract"

    def __init__(self, returned: object = None):
        self.returned_type = type(returned).__name__
        super().__init__(
            "The return value of an intent handler must be ActionResponse or an awaitable of ActionResponse"
        )


class SerializationError(FulfillmentError):
    code = "serialization_error"
