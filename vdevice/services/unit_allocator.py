"""Unit number allocation and per-controller attachment policy."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional, Tuple

from ..core.kinds import Capability, capabilities_of
from ..core.models import Controller, Device

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ControllerPolicy:
    """Attachment limits of a controller family.

    ``capacity`` is the maximum number of attached devices, None meaning
    unbounded. ``reserved_units`` are never handed out to child devices.
    """

    capacity: Optional[int] = None
    reserved_units: FrozenSet[int] = frozenset()


UNBOUNDED = ControllerPolicy()

# Ordered; the first capability a controller kind satisfies wins.
CONTROLLER_POLICIES: Tuple[Tuple[Capability, ControllerPolicy], ...] = (
    (Capability.IDE_CONTROLLER, ControllerPolicy(capacity=2)),
    (Capability.PS2_CONTROLLER, ControllerPolicy(capacity=2)),
    # 16 addresses per bus, unit 7 is the host adapter itself.
    (Capability.SCSI_CONTROLLER, ControllerPolicy(capacity=15, reserved_units=frozenset({7}))),
)


def policy_for(controller: Device) -> ControllerPolicy:
    """Return the attachment policy for a controller's kind."""
    capabilities = capabilities_of(controller.kind)
    for capability, policy in CONTROLLER_POLICIES:
        if capability.value in capabilities:
            return policy
    return UNBOUNDED


def has_free_slot(controller: Controller) -> bool:
    """Return True if the controller is below its capacity ceiling."""
    capacity = policy_for(controller).capacity
    if capacity is None:
        return True
    return len(controller.device) < capacity


def new_unit_number(devices: Iterable[Device], controller: Device) -> int:
    """Return the lowest unit number free on ``controller``.

    Scans upward from 0, skipping units used by devices attached to the
    controller and the units its policy reserves.
    """
    used = {
        device.unit_number
        for device in devices
        if device.controller_key == controller.key and device.unit_number is not None
    }
    used.update(policy_for(controller).reserved_units)

    unit = 0
    while unit in used:
        unit += 1

    logger.debug(
        "Allocated unit number %d on controller %d (%s)",
        unit,
        controller.key,
        controller.kind,
    )
    return unit


__all__ = [
    "CONTROLLER_POLICIES",
    "ControllerPolicy",
    "UNBOUNDED",
    "has_free_slot",
    "new_unit_number",
    "policy_for",
]
