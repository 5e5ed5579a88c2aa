"""Device configuration for pyshelly."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyshelly.exceptions import ShellyConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class DeviceConfig:
    """Runtime options shared by devices.

    Parameters
    ----------
    ttl_padding_ms : int
        Extra milliseconds added to the liveness window derived from an
        update's ``validFor``.  Defaults to ``0`` so that ``validFor=37``
        yields a TTL of exactly 37000 ms.
    raise_listener_errors : bool
        Re-raise exceptions thrown by event listeners instead of logging
        them and continuing with the remaining listeners.
    """

    ttl_padding_ms: int = 0
    raise_listener_errors: bool = False

    def __post_init__(self) -> None:
        if self.ttl_padding_ms < 0:
            raise ShellyConfigError(f"ttl_padding_ms must be >= 0, got {self.ttl_padding_ms}")

    @classmethod
    def from_env(cls, **overrides: Any) -> DeviceConfig:
        """Create configuration from ``PYSHELLY_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        padding_env = env.get("PYSHELLY_TTL_PADDING_MS")
        if padding_env is not None and "ttl_padding_ms" not in overrides:
            try:
                config_kwargs["ttl_padding_ms"] = int(padding_env)
            except ValueError as exc:
                raise ShellyConfigError(f"PYSHELLY_TTL_PADDING_MS is not an integer: {padding_env!r}") from exc

        if "raise_listener_errors" not in overrides:
            config_kwargs["raise_listener_errors"] = _env_bool(
                env.get("PYSHELLY_RAISE_LISTENER_ERRORS"),
                False,
            )

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
