"""One-shot broadcast signal for long-polling waiters

A caller subscribes (arms a waiter), then blocks on the subscription until the
next notify(), a shutdown, or its own timeout. notify() releases every waiter
armed before it exactly once and leaves the hub idle for the next cycle.

Subscriptions remember the hub generation they were armed in, so a waiter
armed after a notify() never observes that notify.

    subscribe()            notify()              wait() returns
    IDLE ──────────► ARMED ─────────► FIRED ───────────────► (hub back to IDLE)
                       │  close()
                       └──────────► CLOSED

Example:
    >>> hub = NotificationHub()
    >>> subscription = hub.subscribe()
    >>> hub.notify()
    1
    >>> subscription.wait(timeout=1)
    <WaitOutcome.FIRED: 'fired'>
"""

import logging
import threading
from enum import StrEnum


logger = logging.getLogger(__name__)


class HubState(StrEnum):
    IDLE = 'idle'
    ARMED = 'armed'


class WaitOutcome(StrEnum):
    FIRED = 'fired'      # a notify() happened after the subscription was armed
    TIMEOUT = 'timeout'  # nothing happened within the caller's bound
    CLOSED = 'closed'    # the hub was closed (server shutdown)


class Subscription:
    """A single armed waiter. Obtain one from NotificationHub.subscribe()"""

    def __init__(self, hub: 'NotificationHub', generation: int, outcome: WaitOutcome | None = None):
        self._hub = hub
        self._generation = generation
        self._outcome = outcome

    @property
    def outcome(self) -> WaitOutcome | None:
        """Final outcome, or None while still armed"""
        return self._outcome

    def wait(self, timeout: float | None = None) -> WaitOutcome:
        """Block until the subscription is released or `timeout` seconds elapse

        A subscription is released once: after FIRED or CLOSED, further calls
        return the same outcome immediately. TIMEOUT disarms it.
        """
        if self._outcome is None:
            self._outcome = self._hub._wait(self._generation, timeout)
        return self._outcome

    def cancel(self) -> None:
        """Disarm without waiting. Does nothing once the subscription has an outcome."""
        if self._outcome is None:
            self._outcome = self._hub._disarm(self._generation)


class NotificationHub:
    """Broadcast, one-shot, multi-waiter signal

    Methods:
        subscribe() -> Subscription
        notify() -> int
        close() -> None
        wait_for_event(timeout) -> WaitOutcome
    """

    def __init__(self):
        self._condition = threading.Condition()
        self._generation = 0
        self._armed = 0
        self._closed = False

    @property
    def state(self) -> HubState:
        with self._condition:
            return HubState.ARMED if self._armed else HubState.IDLE

    @property
    def armed(self) -> int:
        with self._condition:
            return self._armed

    @property
    def closed(self) -> bool:
        with self._condition:
            return self._closed

    def subscribe(self) -> Subscription:
        with self._condition:
            if self._closed:
                return Subscription(self, self._generation, outcome=WaitOutcome.CLOSED)
            self._armed += 1
            return Subscription(self, self._generation)

    def notify(self) -> int:
        """Release every armed waiter; return how many were released"""
        with self._condition:
            released = self._armed
            self._generation += 1
            self._armed = 0
            self._condition.notify_all()
        logger.debug('Notified waiters.', extra={'released': released})
        return released

    def close(self) -> None:
        """Release armed waiters with CLOSED and refuse new ones. Idempotent."""
        with self._condition:
            if self._closed:
                return
            self._closed = True
            released = self._armed
            self._armed = 0
            self._condition.notify_all()
        logger.info('Notification hub closed.', extra={'released': released})

    def wait_for_event(self, timeout: float | None = None) -> WaitOutcome:
        """Subscribe and wait; an interrupted wait leaves nothing armed"""
        subscription = self.subscribe()
        try:
            return subscription.wait(timeout)
        finally:
            subscription.cancel()

    def _wait(self, generation: int, timeout: float | None) -> WaitOutcome:
        with self._condition:
            self._condition.wait_for(lambda: self._generation != generation or self._closed, timeout)
            return self._disarm(generation)

    def _disarm(self, generation: int) -> WaitOutcome:
        # Condition wraps an RLock, so _wait() may call this while holding it
        with self._condition:
            if self._generation != generation:
                return WaitOutcome.FIRED
            if self._closed:
                return WaitOutcome.CLOSED
            self._armed -= 1
            return WaitOutcome.TIMEOUT
