"""Ordered, append-only list of virtual devices.

``DeviceList`` ties the topology services together: capability-based
selection, display naming, controller picking and unit number allocation.
All lookups are pure functions of the current list contents. The only
mutation is ``append``; keeping controllers' child key lists current after an
allocation is the caller's job.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Callable, Iterable, Iterator, List, Optional, Union, overload

from ..core.kinds import Capability, DeviceKind
from ..core.models import Controller, Device, EthernetCard
from .controller_picker import pick_controller
from .name_resolver import NameResolver
from .type_selector import matches
from .unit_allocator import new_unit_number

logger = logging.getLogger(__name__)


class DeviceNotFoundError(LookupError):
    """Raised when a required device cannot be located in a list."""

    def __init__(self, kind: str, name: str = ""):
        if name:
            message = f"{kind} '{name}' not found"
        else:
            message = f"No {kind} device found"
        super().__init__(message)
        self.kind = kind
        self.name = name
        self.message = message


class DeviceList(Sequence):
    """An ordered sequence of device records."""

    def __init__(self, devices: Optional[Iterable[Device]] = None) -> None:
        self._devices: List[Device] = list(devices or [])

    # Sequence protocol

    @overload
    def __getitem__(self, index: int) -> Device: ...

    @overload
    def __getitem__(self, index: slice) -> "DeviceList": ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return DeviceList(self._devices[index])
        return self._devices[index]

    def __len__(self) -> int:
        return len(self._devices)

    def __iter__(self) -> Iterator[Device]:
        return iter(self._devices)

    def __repr__(self) -> str:
        return f"DeviceList({self.names()!r})"

    def append(self, device: Device) -> None:
        """Add a device to the end of the list."""
        self._devices.append(device)

    # Selection

    def select(self, predicate: Callable[[Device], bool]) -> "DeviceList":
        """Return the devices for which ``predicate`` holds, in list order."""
        return DeviceList(device for device in self._devices if predicate(device))

    def select_by_type(self, kind: Union[DeviceKind, Capability, str]) -> "DeviceList":
        """Return the devices of ``kind`` or satisfying it as a capability."""
        return self.select(lambda device: matches(device, kind))

    def children(self, controller: Device) -> "DeviceList":
        """Return the devices attached to ``controller``."""
        return self.select(lambda device: device.controller_key == controller.key)

    # Naming and lookup

    def name(self, device: Device) -> str:
        """Return the display name of ``device`` within this list."""
        return NameResolver(self._devices).name(device)

    def names(self) -> List[str]:
        """Return the display names of all devices, in list order."""
        resolver = NameResolver(self._devices)
        return [resolver.name(device) for device in self._devices]

    def find(self, name: str) -> Optional[Device]:
        """Return the first device named ``name``, or None."""
        resolver = NameResolver(self._devices)
        for device in self._devices:
            if resolver.name(device) == name:
                return device
        return None

    def find_by_key(self, key: int) -> Optional[Device]:
        """Return the first device with ``key``, or None."""
        for device in self._devices:
            if device.key == key:
                return device
        return None

    def _find_required(self, kind, label: str, name: str) -> Device:
        candidates = self.select_by_type(kind)
        if not name:
            if candidates:
                return candidates[0]
        else:
            resolver = NameResolver(self._devices)
            for device in candidates:
                if resolver.name(device) == name:
                    return device

        raise DeviceNotFoundError(label, name)

    def find_cdrom(self, name: str = "") -> Device:
        """Return the cdrom named ``name``, or the first cdrom if ``name`` is empty.

        Raises:
            DeviceNotFoundError: No matching cdrom exists
        """
        return self._find_required(DeviceKind.CDROM, "cdrom", name)

    def find_ide_controller(self, name: str = "") -> Controller:
        """Return the named IDE controller, or the first one if ``name`` is empty.

        Raises:
            DeviceNotFoundError: No matching IDE controller exists
        """
        return self._find_required(Capability.IDE_CONTROLLER, "IDE controller", name)

    def find_scsi_controller(self, name: str = "") -> Controller:
        """Return the named SCSI controller, or the first one if ``name`` is empty.

        Raises:
            DeviceNotFoundError: No matching SCSI controller exists
        """
        return self._find_required(Capability.SCSI_CONTROLLER, "SCSI controller", name)

    def primary_mac_address(self) -> str:
        """Return the MAC address of the first network adapter, if any."""
        for device in self.select_by_type(Capability.ETHERNET_CARD):
            if isinstance(device, EthernetCard):
                return device.mac_address
        return ""

    # Attachment

    def pick_controller(
        self, kind: Union[DeviceKind, Capability, str] = Capability.CONTROLLER
    ) -> Optional[Controller]:
        """Return the first non-full controller of ``kind``, or None."""
        return pick_controller(self._devices, kind)

    def new_unit_number(self, controller: Device) -> int:
        """Return the lowest free unit number on ``controller``."""
        return new_unit_number(self._devices, controller)

    def new_key(self) -> int:
        """Return a negative key lower than every key in the list.

        vSphere assigns real keys when the reconfiguration is applied;
        pending records use unique negative placeholders.
        """
        lowest = min((device.key for device in self._devices), default=0)
        return min(lowest, 0) - 1

    def assign_controller(self, device: Device, controller: Device) -> Device:
        """Return a copy of ``device`` addressed on ``controller``.

        Neither this list nor the controller is modified; the caller appends
        the returned record and records its key on the controller.
        """
        update = {
            "controller_key": controller.key,
            "unit_number": self.new_unit_number(controller),
        }
        if not device.key:
            update["key"] = self.new_key()

        assigned = device.model_copy(update=update, deep=True)
        logger.debug(
            "Assigned %s key %d to controller %d unit %d",
            assigned.kind,
            assigned.key,
            controller.key,
            assigned.unit_number,
        )
        return assigned


__all__ = ["DeviceList", "DeviceNotFoundError"]
