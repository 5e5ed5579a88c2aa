"""Custom exception hierarchy for pyshelly."""

from __future__ import annotations


class ShellyError(Exception):
    """Base exception for all pyshelly errors."""


class ShellyConfigError(ShellyError):
    """Invalid configuration value."""


class ShellySchedulerError(ShellyError, RuntimeError):
    """No scheduler is available to run a TTL timer.

    Pass ``loop=`` to the device or set the TTL from inside a running
    asyncio event loop.
    """


class UnknownPropertyError(ShellyError, KeyError):
    """A property was read or written that the device never defined."""

    def __init__(self, name: str, *, device_id: str = "") -> None:
        self.name = name
        self.device_id = device_id
        super().__init__(f"Device {device_id!r} has no property {name!r}")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0])


class DuplicatePropertyIdError(ShellyError, ValueError):
    """A property ID is already bound to another property name.

    Payload records address properties by ID, so an ID may map to at
    most one name per device.
    """

    def __init__(self, property_id: int, *, existing: str, requested: str) -> None:
        self.property_id = property_id
        self.existing = existing
        self.requested = requested
        super().__init__(f"Property ID {property_id} is already used by {existing!r}, cannot assign it to {requested!r}")
