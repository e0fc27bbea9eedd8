"""Alert broker: the single debounce gate for tamper alerts.

Trigger sources publish into a bounded queue; one consumer task owns the
suppression window and broadcasts at most one AlertEvent per window to
every subscribed listener.  Triggers inside an open window are dropped,
and so are triggers that arrive while the queue is full.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from dataclasses import dataclass
from typing import Callable

from geocheckout.domain.model.security import DEFAULT_ALERT_MESSAGE, AlertEvent

logger = logging.getLogger(__name__)

SECURITY_MARKER = "🔒"
DEFAULT_WINDOW_SECONDS = 5.0
DEFAULT_QUEUE_SIZE = 64

AlertListener = Callable[[AlertEvent], None]


@dataclass(frozen=True)
class AlertTrigger:
    source: str
    message: str
    at: float  # broker clock reading when the trigger fired


class AlertBroker:

    def __init__(
        self,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        queue_size: int = DEFAULT_QUEUE_SIZE,
    ) -> None:
        self._window_seconds = window_seconds
        self._clock = clock
        self._queue: asyncio.Queue[AlertTrigger] = asyncio.Queue(maxsize=queue_size)
        self._listeners: list[AlertListener] = []
        self._window_opened_at: float | None = None
        self._consumer: asyncio.Task | None = None

    # --- Listeners ------------------------------------------------------------

    def subscribe(self, listener: AlertListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --- Publishing -----------------------------------------------------------

    def publish(self, source: str, message: str = DEFAULT_ALERT_MESSAGE) -> None:
        """Queue a trigger.  Safe to call from synchronous handlers."""
        try:
            self._queue.put_nowait(AlertTrigger(source, message, self._clock()))
        except asyncio.QueueFull:
            logger.debug("Alert queue full, dropping trigger from %s", source)

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    # --- Lifecycle ------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self._consumer is not None and not self._consumer.done()

    async def start(self) -> None:
        if not self.running:
            self._consumer = asyncio.create_task(self._consume())

    async def stop(self) -> None:
        if self._consumer is None:
            return
        self._consumer.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._consumer
        self._consumer = None

    async def drain(self) -> None:
        """Wait until every published trigger has been through the gate."""
        await self._queue.join()

    async def __aenter__(self) -> AlertBroker:
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()

    # --- Gate -----------------------------------------------------------------

    async def _consume(self) -> None:
        while True:
            trigger = await self._queue.get()
            try:
                self.process(trigger)
            finally:
                self._queue.task_done()

    def process(self, trigger: AlertTrigger) -> AlertEvent | None:
        """Apply the suppression window to *trigger*.

        Returns the emitted event, or None when the trigger was dropped.
        """
        if (
            self._window_opened_at is not None
            and trigger.at - self._window_opened_at < self._window_seconds
        ):
            logger.debug("Alert from %s suppressed inside window", trigger.source)
            return None

        self._window_opened_at = trigger.at
        event = AlertEvent(message=trigger.message, source=trigger.source)
        logger.warning(
            "%s Security Alert: unauthorized access attempt detected (%s)",
            SECURITY_MARKER,
            trigger.source,
        )
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Alert listener %r failed", listener)
        return event
