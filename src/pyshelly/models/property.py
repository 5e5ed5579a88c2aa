"""Property descriptor records."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

Validator = Callable[[Any], Any]


@dataclass(frozen=True)
class PropertyDescriptor:
    """Declaration of a device property.

    ``default`` is stored as-is on definition; ``validator`` only runs on
    later writes.  Properties without an ``id`` cannot be addressed by
    payload records and are left out of device iteration.
    """

    name: str
    id: int | None = None
    default: Any = None
    validator: Validator | None = None

    def validate(self, value: Any) -> Any:
        if self.validator is None:
            return value
        return self.validator(value)
