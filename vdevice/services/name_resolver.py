"""Display name synthesis for devices in a list.

Names follow the conventions shown in the vSphere UI so they can be used as
stable lookup keys:

* controllers: ``<protocol>-<bus number>`` (``ide-1``, ``pvscsi-0``)
* disks: ``disk-<controller index>-<unit number>``, the controller index
  being the position of the disk's controller among the list's controllers
  of the same bus family
* other known devices: ``<family>-<ordinal>`` (``cdrom-0``, ``ethernet-1``)
* anything else: ``device-<key>``
"""
from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Optional, Sequence

from ..core.kinds import NamingScheme, bus_family, kind_info
from ..core.models import Controller, Device


class NameResolver:
    """Names devices relative to one snapshot of a device list.

    Construction walks the list once; a resolver must be rebuilt after the
    list grows.
    """

    def __init__(self, devices: Sequence[Device]):
        # Positions are keyed by id(); holding the sequence keeps them valid.
        self._devices = devices
        self._positions: Dict[int, int] = {}
        self._ordinals: List[int] = []
        self._controller_index: Dict[int, int] = {}

        seen_families: Dict[str, int] = defaultdict(int)
        seen_buses: Dict[Optional[str], int] = defaultdict(int)

        for position, device in enumerate(devices):
            self._positions.setdefault(id(device), position)

            info = kind_info(device.kind)
            family = info.name_tag
            self._ordinals.append(seen_families[family])
            seen_families[family] += 1

            if isinstance(device, Controller) or info.is_controller:
                bus = bus_family(device.kind)
                self._controller_index.setdefault(device.key, seen_buses[bus])
                seen_buses[bus] += 1

    def ordinal(self, device: Device) -> int:
        """Position of ``device`` among list members of its family.

        A device that is not a member of the list is ranked first.
        """
        position = self._positions.get(id(device))
        if position is None:
            return 0
        return self._ordinals[position]

    def controller_index(self, controller_key: Optional[int]) -> int:
        if not controller_key:
            return 0
        return self._controller_index.get(controller_key, 0)

    def name(self, device: Device) -> str:
        info = kind_info(device.kind)

        if info.naming is NamingScheme.BUS:
            return f"{info.name_tag}-{getattr(device, 'bus_number', 0)}"

        if info.naming is NamingScheme.ADDRESS:
            index = self.controller_index(device.controller_key)
            return f"{info.name_tag}-{index}-{device.unit_number or 0}"

        if info.naming is NamingScheme.ORDINAL:
            return f"{info.name_tag}-{self.ordinal(device)}"

        return f"device-{device.key}"


def device_name(devices: Sequence[Device], device: Device) -> str:
    """Return the display name of ``device`` within ``devices``."""
    return NameResolver(devices).name(device)


__all__ = ["NameResolver", "device_name"]
