"""Selection of a controller with room for one more device."""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..core.kinds import Capability
from ..core.models import Controller, Device
from .type_selector import matches
from .unit_allocator import has_free_slot

logger = logging.getLogger(__name__)


def pick_controller(devices: Iterable[Device], kind=Capability.CONTROLLER) -> Optional[Controller]:
    """Return the first controller matching ``kind`` that is not full.

    Controllers are considered in list order; occupancy is read from each
    controller's ``device`` key list, which the caller keeps current.
    Returns None when no matching controller has a free slot.
    """
    full = 0
    for device in devices:
        if not isinstance(device, Controller) or not matches(device, kind):
            continue
        if has_free_slot(device):
            logger.debug(
                "Picked controller %d (%s) for %s",
                device.key,
                device.kind,
                getattr(kind, "value", kind),
            )
            return device
        full += 1

    logger.debug(
        "No controller available for %s (%d full)", getattr(kind, "value", kind), full
    )
    return None


__all__ = ["pick_controller"]
