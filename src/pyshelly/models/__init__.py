"""Device message and property models."""

from pyshelly.models._base import ShellyBaseModel
from pyshelly.models.property import PropertyDescriptor, Validator
from pyshelly.models.update import DeviceUpdate, PayloadRecord

__all__ = [
    "DeviceUpdate",
    "PayloadRecord",
    "PropertyDescriptor",
    "ShellyBaseModel",
    "Validator",
]
