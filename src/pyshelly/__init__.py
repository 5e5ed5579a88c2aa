"""pyshelly - run-time state model for networked smart-home devices."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyshelly")
except PackageNotFoundError:
    __version__ = "0+local"
from pyshelly.config import DeviceConfig
from pyshelly.device import Device
from pyshelly.devices import (
    Shelly1,
    Shelly2,
    create_device,
    device_type_to_class,
    known_device_types,
    register_device_type,
)
from pyshelly.exceptions import (
    DuplicatePropertyIdError,
    ShellyConfigError,
    ShellyError,
    ShellySchedulerError,
    UnknownPropertyError,
)
from pyshelly.models import DeviceUpdate, PayloadRecord, PropertyDescriptor
from pyshelly.state.events import EventEmitter, EventKind, change_of

__all__ = [
    "__version__",
    "Device",
    "DeviceConfig",
    "DeviceUpdate",
    "DuplicatePropertyIdError",
    "EventEmitter",
    "EventKind",
    "PayloadRecord",
    "PropertyDescriptor",
    "Shelly1",
    "Shelly2",
    "ShellyConfigError",
    "ShellyError",
    "ShellySchedulerError",
    "UnknownPropertyError",
    "change_of",
    "create_device",
    "device_type_to_class",
    "known_device_types",
    "register_device_type",
]
