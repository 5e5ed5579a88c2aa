"""Run-time state of a single networked device.

A :class:`Device` owns a registry of declared properties, a liveness flag
backed by a TTL timer and a listener registry.  Transport code feeds it
decoded :class:`~pyshelly.models.update.DeviceUpdate` records; consumers
subscribe to ``online``, ``offline``, ``change`` and ``change:<name>``
events.

A device is owned by a single event loop: property writes, TTL changes
and updates must be made from the loop that runs its timer.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Iterable, Iterator, Mapping
from typing import Any, ClassVar

from pyshelly.config import DeviceConfig
from pyshelly.exceptions import DuplicatePropertyIdError, UnknownPropertyError
from pyshelly.models.property import PropertyDescriptor, Validator
from pyshelly.models.update import DeviceUpdate, PayloadRecord, parse_payload
from pyshelly.state.events import EventEmitter, EventKind, Listener, change_of
from pyshelly.state.policy import normalize_ttl, should_apply_delta, valid_for_to_ttl
from pyshelly.state.ttl import Scheduler, TtlTimer

_logger = logging.getLogger(__name__)

_HOST = "host"


def _same_value(new: Any, old: Any) -> bool:
    # 0 and False (or 1 and 1.0) are distinct values for a device property.
    return type(new) is type(old) and new == old


class Device:
    """A device identified by ``(device_type, device_id)``.

    Parameters
    ----------
    device_type : str
        Device-type identifier such as ``"SHSW-1"``.  Opaque to the device
        itself; the registry in :mod:`pyshelly.devices` maps it to a class.
    device_id : str
        Serial/identifier of the device.
    host : str
        Current network address.
    loop : Scheduler, optional
        Scheduler for the TTL timer.  Defaults to the running asyncio loop
        at the time a positive TTL is set.
    config : DeviceConfig, optional
        Runtime options.
    """

    device_type: ClassVar[str | None] = None
    """Type identifier this class is registered under in :mod:`pyshelly.devices`."""

    def __init__(
        self,
        device_type: str,
        device_id: str,
        host: str,
        *,
        loop: Scheduler | None = None,
        config: DeviceConfig | None = None,
    ) -> None:
        self.type = device_type
        self.id = device_id
        self._config = config or DeviceConfig()
        self._emitter = EventEmitter(raise_errors=self._config.raise_listener_errors)
        self._timer = TtlTimer(self._expire, scheduler=loop)

        self._descriptors: dict[str, PropertyDescriptor] = {}
        self._values: dict[str, Any] = {}
        self._id_to_name: dict[int, str] = {}

        self._online = True
        self._ttl = 0
        self._serial: int | None = None

        self.define_property(_HOST, default=host)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(type={self.type!r}, id={self.id!r}, host={self.host!r}, online={self._online})"

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def on(self, event: str, listener: Listener) -> Callable[[], None]:
        """Register *listener* for *event*; returns an unsubscribe callable."""
        return self._emitter.on(event, listener)

    def once(self, event: str, listener: Listener) -> Callable[[], None]:
        return self._emitter.once(event, listener)

    def off(self, event: str, listener: Listener) -> None:
        self._emitter.off(event, listener)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    def define_property(
        self,
        name: str,
        id: int | None = None,  # noqa: A002
        default: Any = None,
        validator: Validator | None = None,
    ) -> None:
        """Declare property *name*, storing *default* without validation.

        Redefining a name replaces its descriptor and resets its value to
        the new default.  No event is emitted.
        """
        if not name:
            raise ValueError("property name must be non-empty")
        if id is not None:
            owner = self._id_to_name.get(id)
            if owner is not None and owner != name:
                raise DuplicatePropertyIdError(id, existing=owner, requested=name)

        previous = self._descriptors.get(name)
        if previous is not None and previous.id is not None:
            self._id_to_name.pop(previous.id, None)

        self._descriptors[name] = PropertyDescriptor(name=name, id=id, default=default, validator=validator)
        self._values[name] = default
        if id is not None:
            self._id_to_name[id] = name

    def get(self, name: str) -> Any:
        try:
            return self._values[name]
        except KeyError:
            raise UnknownPropertyError(name, device_id=self.id) from None

    def set(self, name: str, value: Any) -> None:
        """Write *value* to property *name*.

        The value passes through the property's validator first; exceptions
        from the validator propagate and leave the property untouched.  A
        write that does not change the stored value emits nothing.
        """
        descriptor = self._descriptors.get(name)
        if descriptor is None:
            raise UnknownPropertyError(name, device_id=self.id)

        new_value = descriptor.validate(value)
        old_value = self._values[name]
        if _same_value(new_value, old_value):
            return

        self._values[name] = new_value
        self._emitter.emit(change_of(name), new_value, old_value, self)
        self._emitter.emit(EventKind.CHANGE, name, new_value, old_value, self)

    def __getitem__(self, name: str) -> Any:
        return self.get(name)

    def __setitem__(self, name: str, value: Any) -> None:
        self.set(name, value)

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def __iter__(self) -> Iterator[tuple[str, Any]]:
        """Yield ``(name, value)`` for every property that has an ID."""
        snapshot = [(name, self._values[name]) for name in self._id_to_name.values()]
        return iter(snapshot)

    @property
    def properties(self) -> dict[str, Any]:
        """Snapshot of all property values, keyed by name."""
        return dict(self._values)

    @property
    def property_ids(self) -> dict[int, str]:
        """Snapshot of the property ID to name mapping."""
        return dict(self._id_to_name)

    def descriptor(self, name: str) -> PropertyDescriptor:
        try:
            return self._descriptors[name]
        except KeyError:
            raise UnknownPropertyError(name, device_id=self.id) from None

    @property
    def host(self) -> str:
        return self._values[_HOST]

    @host.setter
    def host(self, value: str) -> None:
        self.set(_HOST, value)

    # ------------------------------------------------------------------
    # Liveness
    # ------------------------------------------------------------------

    @property
    def online(self) -> bool:
        return self._online

    @online.setter
    def online(self, value: bool) -> None:
        online = bool(value)
        if online == self._online:
            return
        self._online = online
        _logger.debug("Device %s is now %s", self.id, "online" if online else "offline")
        self._emitter.emit(EventKind.ONLINE if online else EventKind.OFFLINE, self)

    @property
    def ttl(self) -> int:
        """Milliseconds until the device is marked offline; ``0`` disables expiry.

        Every assignment restarts the window, even with an unchanged value.
        Negative values are treated as ``0``.
        """
        return self._ttl

    @ttl.setter
    def ttl(self, value: int | float | None) -> None:
        ttl = normalize_ttl(value)
        self._timer.arm(ttl)
        self._ttl = ttl

    def _expire(self) -> None:
        _logger.debug("TTL of %d ms elapsed for device %s", self._ttl, self.id)
        self.online = False

    @property
    def serial(self) -> int | None:
        """Serial of the last update whose delta was applied."""
        return self._serial

    def close(self) -> None:
        """Cancel the pending TTL timer."""
        self._timer.cancel()

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    def update(self, message: DeviceUpdate | Mapping[str, Any]) -> None:
        """Apply a newly received message.

        Always marks the device online and refreshes the TTL when the
        message carries ``validFor``.  The host/property delta is applied
        only when the message's serial differs from the last applied one.
        """
        if not isinstance(message, DeviceUpdate):
            message = DeviceUpdate.model_validate(message)

        ttl: int | None = None
        if message.valid_for is not None:
            ttl = valid_for_to_ttl(message.valid_for, padding_ms=self._config.ttl_padding_ms)
            if ttl > 0:
                # Fail before any state changes when no timer can be armed.
                self._timer.resolve_scheduler()

        self.online = True

        if ttl is not None:
            self.ttl = ttl

        if should_apply_delta(self._serial, message.serial):
            self.apply_update(message, message.payload)
            self._serial = message.serial
        elif message.serial is not None:
            _logger.debug("Skipping replayed update serial=%s for device %s", message.serial, self.id)

    def apply_update(
        self,
        message: DeviceUpdate | Mapping[str, Any],
        payload: Iterable[PayloadRecord | Any] = (),
    ) -> None:
        """Apply the host change and property records carried by one update.

        Malformed records and records addressing unknown property IDs are
        ignored.
        """
        if not isinstance(message, DeviceUpdate):
            message = DeviceUpdate.model_validate(message)

        if message.host is not None:
            self.host = message.host

        for record in parse_payload(payload):
            name = None
            if isinstance(record.property_id, Hashable):
                name = self._id_to_name.get(record.property_id)
            if name is None:
                _logger.debug("Ignoring unknown property id=%s for device %s", record.property_id, self.id)
                continue
            self.set(name, record.value)
