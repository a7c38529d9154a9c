"""Capability-based device type matching."""
from __future__ import annotations

from enum import Enum
from typing import Iterable, List

from ..core.kinds import capabilities_of
from ..core.models import Device


def _requested(kind) -> str:
    return kind.value if isinstance(kind, Enum) else str(kind)


def matches(device: Device, kind) -> bool:
    """Return True if ``device`` is of ``kind`` or satisfies it as a capability.

    ``kind`` may be a concrete kind (``VirtualLsiLogicController``) or an
    abstract capability (``VirtualSCSIController``, ``VirtualController``).
    """
    return _requested(kind) in capabilities_of(device.kind)


def select_by_type(devices: Iterable[Device], kind) -> List[Device]:
    """Return the devices matching ``kind``, in their original order."""
    requested = _requested(kind)
    return [device for device in devices if requested in capabilities_of(device.kind)]


__all__ = ["matches", "select_by_type"]
