"""Base model for decoded device messages.

Every message model inherits from :class:`ShellyBaseModel` which
provides:

* ``alias_generator=to_camel`` so camelCase wire keys (``validFor``) map
  automatically to snake_case fields.
* A ``model_validator(mode="before")`` that drops ``None`` values so the
  field default is used.
* A ``raw`` dict that captures the original mapping.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class ShellyBaseModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original mapping the model was validated from."""

    @model_validator(mode="before")
    @classmethod
    def _drop_none_and_stash_raw(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        cleaned = {key: value for key, value in values.items() if value is not None}
        # Keep an explicitly passed raw= (keyword construction).
        if "raw" not in values:
            cleaned["raw"] = dict(values)
        return cleaned
