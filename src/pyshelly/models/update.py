"""Decoded update messages.

The transport layer decodes wire bytes into these records; a
:class:`pyshelly.device.Device` only ever sees the decoded form.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from pyshelly.models._base import ShellyBaseModel

_logger = logging.getLogger(__name__)


class PayloadRecord(BaseModel):
    """One position-encoded property update: ``[..., property_id, value]``.

    Only the last two positions are meaningful to a device; any leading
    elements (channel numbers and the like) are kept in ``extra``.  The ID
    is not restricted to integers: IDs a device does not know, whatever
    their type, are simply ignored.
    """

    model_config = ConfigDict(frozen=True)

    property_id: Any
    value: Any = None
    extra: tuple[Any, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _from_sequence(cls, values: Any) -> Any:
        if isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
            return values
        if len(values) < 2:
            raise ValueError(f"payload record needs at least [id, value], got {list(values)!r}")
        return {
            "property_id": values[-2],
            "value": values[-1],
            "extra": tuple(values[:-2]),
        }

    @field_validator("property_id", mode="before")
    @classmethod
    def _coerce_numeric_id(cls, value: Any) -> Any:
        if isinstance(value, str) and value.strip().isdigit():
            return int(value)
        return value


def parse_payload(records: Iterable[Any]) -> tuple[PayloadRecord, ...]:
    """Validate *records* into :class:`PayloadRecord`s, dropping malformed ones."""
    parsed: list[PayloadRecord] = []
    for item in records:
        if isinstance(item, PayloadRecord):
            parsed.append(item)
            continue
        try:
            parsed.append(PayloadRecord.model_validate(item))
        except ValidationError:
            _logger.debug("Dropping malformed payload record %r", item)
    return tuple(parsed)


class DeviceUpdate(ShellyBaseModel):
    """An already-decoded update addressed to a single device."""

    host: str | None = None
    """New network address of the device, if it changed."""

    serial: int | None = None
    """Update sequence number used to suppress replays."""

    valid_for: float | None = Field(default=None, ge=0)
    """Seconds the device should be considered online without another update."""

    payload: tuple[PayloadRecord, ...] = ()
    """Property updates carried by this message."""

    @field_validator("payload", mode="before")
    @classmethod
    def _drop_malformed_records(cls, value: Any) -> Any:
        if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
            return value
        return parse_payload(value)

    @field_validator("serial", mode="before")
    @classmethod
    def _coerce_serial(cls, value: Any) -> Any:
        if isinstance(value, str) and value.strip().isdigit():
            return int(value)
        return value
