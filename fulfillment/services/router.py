import inspect
from typing import Awaitable, Callable, Mapping, Optional, Union

from fulfillment.errors import HandlerContractError, IntentNotFoundError
from fulfillment.services.action_request import ActionRequest
from fulfillment.services.action_response import ActionResponse

HandlerResult = Union[ActionResponse, Awaitable[ActionResponse]]
Handler = Callable[[ActionRequest], HandlerResult]


async def _resolved(response: ActionResponse) -> ActionResponse:
    return response


class IntentRouter:
    """Maps intent names to handlers. Lookup is exact and case-sensitive."""

    def __init__(self, handlers: Optional[Mapping[str, Handler]] = None):
        self._handlers: dict[str, Handler] = {}
        for intent, handler in (handlers or {}).items():
            self.register(intent, handler)

    @property
    def intents(self) -> list[str]:
        return list(self._handlers)

    def register(self, intent: str, handler: Handler) -> None:
        if intent in self._handlers:
            raise ValueError(f"Handler already registered for intent: {intent}")
        self._handlers[intent] = handler

    def handler(self, intent: str) -> Callable[[Handler], Handler]:
        """Decorator form of `register`."""

        def decorator(fn: Handler) -> Handler:
            self.register(intent, fn)
            return fn

        return decorator

    def route(self, request: ActionRequest) -> Awaitable[ActionResponse]:
        """
        Invoke the handler registered for the request's intent.

        Raises NoInputsError, IntentNotFoundError or HandlerContractError
        before anything is awaited. The returned awaitable may still resolve
        to a value that is not an ActionResponse; callers check that.
        """
        intent = request.intent
        handler = self._handlers.get(intent)
        if handler is None:
            raise IntentNotFoundError(intent)

        result = handler(request)
        if isinstance(result, ActionResponse):
            return _resolved(result)
        if inspect.isawaitable(result):
            return result
        raise HandlerContractError(result)
