"""Cancellable one-shot liveness timer.

The timer is driven by a scheduler exposing ``call_later(delay, callback,
*args)`` and returning a handle with ``cancel()``; any
:class:`asyncio.AbstractEventLoop` qualifies.  All arming, cancelling and
firing happens on that scheduler's thread.

The scheduled callback only holds weak references, so a pending timer
never keeps its owner alive, and dropping the timer cancels the handle.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import weakref
from collections.abc import Callable
from typing import Any, Protocol

from pyshelly.exceptions import ShellySchedulerError

_logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle: ...


def _expire(timer_ref: weakref.ReferenceType[TtlTimer], generation: int) -> None:
    timer = timer_ref()
    if timer is not None:
        timer._fire(generation)  # noqa: SLF001


class TtlTimer:
    """One-shot timer invoking *on_expire* after the armed number of milliseconds.

    Every call to :meth:`arm` or :meth:`cancel` bumps a generation counter;
    a callback from an older generation is ignored even if its handle could
    not be cancelled in time.
    """

    def __init__(
        self,
        on_expire: Callable[[], None],
        *,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._on_expire: Callable[[], Callable[[], None] | None]
        if inspect.ismethod(on_expire):
            self._on_expire = weakref.WeakMethod(on_expire)
        else:
            self._on_expire = lambda: on_expire
        self._scheduler = scheduler
        self._handle: TimerHandle | None = None
        self._finalizer: weakref.finalize | None = None
        self._generation = 0

    @property
    def active(self) -> bool:
        return self._handle is not None

    def resolve_scheduler(self) -> Scheduler:
        """Return the scheduler timers would be armed on.

        Raises :class:`ShellySchedulerError` when none was given and no
        asyncio loop is running.
        """
        if self._scheduler is not None:
            return self._scheduler
        # Bound lazily so devices can be built outside a running loop.
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            raise ShellySchedulerError(
                "Arming a TTL timer needs a running asyncio loop or a device created with loop="
            ) from None

    def arm(self, ttl_ms: int) -> None:
        """Cancel any pending expiry and, for ``ttl_ms > 0``, schedule a new one."""
        if ttl_ms <= 0:
            self.cancel()
            return

        scheduler = self.resolve_scheduler()
        self.cancel()
        generation = self._generation
        handle = scheduler.call_later(ttl_ms / 1000, _expire, weakref.ref(self), generation)
        self._handle = handle
        self._finalizer = weakref.finalize(self, handle.cancel)
        _logger.debug("TTL timer armed for %d ms", ttl_ms)

    def cancel(self) -> None:
        self._generation += 1
        handle = self._handle
        self._handle = None
        if self._finalizer is not None:
            self._finalizer.detach()
            self._finalizer = None
        if handle is not None:
            handle.cancel()

    def _fire(self, generation: int) -> None:
        if generation != self._generation or self._handle is None:
            _logger.debug("Ignoring superseded TTL timer")
            return
        self._handle = None
        if self._finalizer is not None:
            self._finalizer.detach()
            self._finalizer = None
        callback = self._on_expire()
        if callback is not None:
            callback()
