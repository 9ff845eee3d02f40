"""In-process event bus.

Handlers subscribe to an ``EventName`` and receive its payload. ``emit`` is
fire-and-forget: synchronous handlers run inline in registration order,
coroutine handlers are scheduled on the running loop, and a failing handler
is logged without affecting the emitter or the other handlers.
``emit_awaited`` waits for every handler and reports failures to the caller.
"""

import asyncio
import inspect
import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set, Union

from ....core.exceptions import EventHandlingError, ValidationError
from ..entities import EVENT_PAYLOAD_TYPES, EventName

logger = logging.getLogger(__name__)

EventHandler = Callable[[Any], Union[None, Awaitable[None]]]

DEFAULT_MAX_LISTENERS = 50


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _handler_name(handler: EventHandler) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)


class EventBus:
    """Typed publish/subscribe bus for domain events."""

    def __init__(
        self,
        max_listeners: int = DEFAULT_MAX_LISTENERS,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.max_listeners = max_listeners
        self._clock = clock or _utcnow
        self._handlers: Dict[EventName, List[EventHandler]] = {}
        self._warned: Set[EventName] = set()
        self._pending: Set[asyncio.Task] = set()
        self._initialized = False

    # Initialization latch

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def mark_initialized(self) -> None:
        self._initialized = True

    # Subscription

    @staticmethod
    def _coerce_name(name: Union[EventName, str]) -> EventName:
        try:
            return EventName(name)
        except ValueError:
            raise ValidationError(f"Unknown event: {name}", field="event")

    def subscribe(self, name: Union[EventName, str], handler: EventHandler) -> Callable[[], bool]:
        """Register ``handler`` for ``name`` and return a callable that removes it."""
        event = self._coerce_name(name)
        handlers = self._handlers.setdefault(event, [])
        handlers.append(handler)

        if len(handlers) > self.max_listeners and event not in self._warned:
            self._warned.add(event)
            logger.warning(
                f"Event {event.value} has {len(handlers)} listeners "
                f"(max {self.max_listeners}); possible subscription leak"
            )

        return lambda: self.unsubscribe(event, handler)

    def once(self, name: Union[EventName, str], handler: EventHandler) -> Callable[[], bool]:
        """Register a handler that removes itself after its first call."""
        event = self._coerce_name(name)

        def wrapper(payload):
            self.unsubscribe(event, wrapper)
            return handler(payload)

        wrapper.__wrapped__ = handler
        wrapper.__qualname__ = _handler_name(handler)
        return self.subscribe(event, wrapper)

    def unsubscribe(self, name: Union[EventName, str], handler: EventHandler) -> bool:
        handlers = self._handlers.get(self._coerce_name(name), [])
        for registered in handlers:
            if registered == handler or getattr(registered, "__wrapped__", None) == handler:
                handlers.remove(registered)
                return True
        return False

    def listener_count(self, name: Union[EventName, str]) -> int:
        return len(self._handlers.get(self._coerce_name(name), []))

    # Emission

    def _prepare(self, name: Union[EventName, str], payload: Any):
        event = self._coerce_name(name)
        expected = EVENT_PAYLOAD_TYPES[event]
        if not isinstance(payload, expected):
            raise ValidationError(
                f"Event {event.value} expects {expected.__name__}, got {type(payload).__name__}",
                field="payload",
            )

        meta = getattr(payload, "meta", None)
        if meta is not None:
            payload = replace(payload, meta=replace(meta, timestamp=self._clock()))

        return event, payload, list(self._handlers.get(event, []))

    def emit(self, name: Union[EventName, str], payload: Any) -> bool:
        """Deliver ``payload`` to every handler of ``name`` without waiting.

        Returns:
            True if at least one handler was registered.
        """
        event, payload, handlers = self._prepare(name, payload)

        for handler in handlers:
            try:
                result = handler(payload)
            except Exception:
                logger.exception(f"Handler {_handler_name(handler)} failed for {event.value}")
                continue

            if inspect.isawaitable(result):
                self._schedule(event, handler, result)

        return bool(handlers)

    def _schedule(self, event: EventName, handler: EventHandler, awaitable: Awaitable) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.error(
                f"Async handler {_handler_name(handler)} for {event.value} "
                f"emitted outside an event loop; dropped"
            )
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            return

        async def run():
            try:
                await awaitable
            except Exception:
                logger.exception(f"Handler {_handler_name(handler)} failed for {event.value}")

        task = loop.create_task(run())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def emit_awaited(self, name: Union[EventName, str], payload: Any) -> bool:
        """Deliver ``payload`` and wait for every handler to finish.

        All handlers run to completion concurrently even if some fail.

        Raises:
            EventHandlingError: one or more handlers failed; chained to the first failure
        """
        event, payload, handlers = self._prepare(name, payload)

        failures: List[BaseException] = []
        awaitables = []
        for handler in handlers:
            try:
                result = handler(payload)
            except Exception as e:
                logger.exception(f"Handler {_handler_name(handler)} failed for {event.value}")
                failures.append(e)
                continue
            if inspect.isawaitable(result):
                awaitables.append((handler, result))

        if awaitables:
            results = await asyncio.gather(*(a for _, a in awaitables), return_exceptions=True)
            for (handler, _), result in zip(awaitables, results):
                if isinstance(result, Exception):
                    logger.error(f"Handler {_handler_name(handler)} failed for {event.value}: {result}")
                    failures.append(result)

        if failures:
            raise EventHandlingError(event.value, failures) from failures[0]

        return bool(handlers)

    async def drain(self) -> None:
        """Wait for every scheduled fire-and-forget handler."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def reset(self) -> None:
        """Drop every subscription, finish pending handlers and reopen the latch."""
        await self.drain()
        self._handlers.clear()
        self._warned.clear()
        self._initialized = False
