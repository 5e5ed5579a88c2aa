"""Device-type registry.

Maps device-type identifiers (as announced by the devices, e.g.
``"SHSW-1"``) to :class:`~pyshelly.device.Device` subclasses declaring the
properties of that hardware.  Unknown types resolve to ``None`` rather
than raising, so discovery code can skip devices it does not support.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from pyshelly.device import Device

DeviceT = TypeVar("DeviceT", bound=type[Device])

_DEVICE_CLASSES: dict[str, type[Device]] = {}


def register_device_type(device_type: str) -> Callable[[DeviceT], DeviceT]:
    """Class decorator registering a :class:`Device` subclass for *device_type*."""

    def _register(cls: DeviceT) -> DeviceT:
        existing = _DEVICE_CLASSES.get(device_type)
        if existing is not None and existing is not cls:
            raise ValueError(f"Device type {device_type!r} is already registered to {existing.__name__}")
        cls.device_type = device_type
        _DEVICE_CLASSES[device_type] = cls
        return cls

    return _register


def device_type_to_class(device_type: str) -> type[Device] | None:
    """Return the class registered for *device_type*, or ``None``."""
    return _DEVICE_CLASSES.get(device_type)


def known_device_types() -> list[str]:
    return sorted(_DEVICE_CLASSES)


def create_device(device_type: str, device_id: str, host: str, **kwargs: Any) -> Device | None:
    """Instantiate the registered class for *device_type*.

    Returns ``None`` for unknown device types.  Extra keyword arguments
    (``loop``, ``config``) are passed to the constructor.
    """
    cls = device_type_to_class(device_type)
    if cls is None:
        return None
    return cls(device_type, device_id, host, **kwargs)


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "on"}
    return bool(value)


def _to_watts(value: Any) -> float:
    return float(value)


@register_device_type("SHSW-1")
class Shelly1(Device):
    """Single-relay switch."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.define_property("relay0", 112, False, _to_bool)


@register_device_type("SHSW-21")
class Shelly2(Device):
    """Two-relay switch with a shared power meter."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.define_property("relay0", 112, False, _to_bool)
        self.define_property("relay1", 122, False, _to_bool)
        self.define_property("power_meter0", 111, 0.0, _to_watts)
