"""Update acceptance policy.

This module intentionally contains *no* device state.  The
:class:`pyshelly.device.Device` entity asks it whether a delta should be
applied and how to turn wire values into a liveness window.
"""

from __future__ import annotations

import math
from typing import Any


def should_apply_delta(last_serial: int | None, incoming_serial: int | None) -> bool:
    """Decide whether the host/property delta of an update should be applied.

    Policy:
    - Updates without a serial never carry a delta.
    - The first serial seen is always applied.
    - Afterwards, any serial different from the last applied one is applied;
      a repeated serial is a replay and is skipped.
    """
    if incoming_serial is None:
        return False
    return last_serial is None or incoming_serial != last_serial


def normalize_ttl(value: Any) -> int:
    """Clamp a TTL assignment to a non-negative whole number of milliseconds.

    ``None``, negative numbers, NaN and infinity all become ``0`` (no expiry).
    """
    if value is None:
        return 0
    ttl = float(value)
    if not math.isfinite(ttl) or ttl <= 0:
        return 0
    return int(round(ttl))


def valid_for_to_ttl(valid_for: float, *, padding_ms: int = 0) -> int:
    """Convert an update's ``validFor`` (seconds) to a TTL in milliseconds."""
    ttl = normalize_ttl(valid_for * 1000)
    if ttl == 0:
        return 0
    return ttl + padding_ms
