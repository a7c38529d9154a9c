"""Device kind and capability registry.

Every device record carries a ``kind`` naming its concrete vSphere type
(``VirtualCdrom``, ``VirtualLsiLogicController`` ...). Each kind is registered
with the set of abstract capabilities it satisfies, so polymorphic lookups
("any SCSI controller") become set-membership tests instead of class
hierarchy checks. Adding a new specialised kind only requires a
``register_kind`` call.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional


class Capability(str, Enum):
    """Abstract capabilities a device kind can satisfy."""
    DEVICE = "VirtualDevice"
    CONTROLLER = "VirtualController"
    IDE_CONTROLLER = "VirtualIDEController"
    PS2_CONTROLLER = "VirtualPS2Controller"
    PCI_CONTROLLER = "VirtualPCIController"
    SIO_CONTROLLER = "VirtualSIOController"
    SCSI_CONTROLLER = "VirtualSCSIController"
    ETHERNET_CARD = "VirtualEthernetCard"


class DeviceKind(str, Enum):
    """Built-in concrete device kinds, named after their vSphere types."""
    GENERIC = "VirtualDevice"

    IDE_CONTROLLER = "VirtualIDEController"
    PS2_CONTROLLER = "VirtualPS2Controller"
    PCI_CONTROLLER = "VirtualPCIController"
    SIO_CONTROLLER = "VirtualSIOController"
    LSI_LOGIC_CONTROLLER = "VirtualLsiLogicController"
    BUS_LOGIC_CONTROLLER = "VirtualBusLogicController"
    PARAVIRTUAL_SCSI_CONTROLLER = "ParaVirtualSCSIController"
    LSI_LOGIC_SAS_CONTROLLER = "VirtualLsiLogicSASController"

    DISK = "VirtualDisk"
    CDROM = "VirtualCdrom"
    FLOPPY = "VirtualFloppy"
    E1000 = "VirtualE1000"
    E1000E = "VirtualE1000e"
    PCNET32 = "VirtualPCNet32"
    VMXNET2 = "VirtualVmxnet2"
    VMXNET3 = "VirtualVmxnet3"
    POINTING_DEVICE = "VirtualPointingDevice"
    KEYBOARD = "VirtualKeyboard"
    VIDEO_CARD = "VirtualMachineVideoCard"
    SERIAL_PORT = "VirtualSerialPort"
    VMCI_DEVICE = "VirtualMachineVMCIDevice"


class NamingScheme(str, Enum):
    """How the display name of a kind is derived."""
    BUS = "bus"          # <tag>-<bus number>
    ADDRESS = "address"  # <tag>-<controller index>-<unit number>
    ORDINAL = "ordinal"  # <tag>-<position among the same family>
    KEY = "key"          # device-<key>


@dataclass(frozen=True)
class KindInfo:
    """Registered definition of a device kind."""

    name: str
    capabilities: FrozenSet[str]
    name_tag: str
    naming: NamingScheme

    @property
    def is_controller(self) -> bool:
        return Capability.CONTROLLER.value in self.capabilities


# Capabilities that identify the bus family of a controller kind. Disks are
# numbered relative to the controllers of their controller's family.
BUS_FAMILIES = (
    Capability.IDE_CONTROLLER,
    Capability.SCSI_CONTROLLER,
    Capability.PS2_CONTROLLER,
    Capability.PCI_CONTROLLER,
    Capability.SIO_CONTROLLER,
)

_registry: Dict[str, KindInfo] = {}
_known_capabilities = {capability.value for capability in Capability}


def _value(item) -> str:
    return item.value if isinstance(item, Enum) else str(item)


def register_kind(
    name,
    capabilities: Iterable = (),
    name_tag: str = "device",
    naming: NamingScheme = NamingScheme.KEY,
) -> KindInfo:
    """Register a device kind and the capabilities it satisfies.

    The kind always satisfies itself and ``VirtualDevice``. Capabilities may
    be abstract ``Capability`` members or already registered kinds, so a
    vendor specialisation can build on an existing concrete kind.

    Raises:
        ValueError: if a capability is unknown or ``name`` is already
            registered with a different definition.
    """
    kind_name = _value(name)
    resolved = {kind_name, Capability.DEVICE.value}
    for capability in capabilities:
        value = _value(capability)
        if value in _registry:
            resolved.update(_registry[value].capabilities)
        elif value in _known_capabilities:
            resolved.add(value)
        else:
            raise ValueError(f"Unknown capability '{value}' for kind '{kind_name}'")

    info = KindInfo(
        name=kind_name,
        capabilities=frozenset(resolved),
        name_tag=name_tag,
        naming=NamingScheme(naming),
    )
    existing = _registry.get(kind_name)
    if existing is not None and existing != info:
        raise ValueError(f"Device kind '{kind_name}' is already registered")
    _registry[kind_name] = info
    return info


def get_kind(name) -> Optional[KindInfo]:
    """Return the registered definition for ``name`` or None."""
    return _registry.get(_value(name))


def kind_info(name) -> KindInfo:
    """Return the definition for ``name``, falling back to the generic kind."""
    return _registry.get(_value(name)) or _registry[DeviceKind.GENERIC.value]


def capabilities_of(name) -> FrozenSet[str]:
    return kind_info(name).capabilities


def is_registered(name) -> bool:
    return _value(name) in _registry


def bus_family(name) -> Optional[str]:
    """Return the bus family capability of a controller kind, if any."""
    capabilities = capabilities_of(name)
    for family in BUS_FAMILIES:
        if family.value in capabilities:
            return family.value
    return None


def _register_builtin_kinds() -> None:
    register_kind(DeviceKind.GENERIC)

    controller = (Capability.CONTROLLER,)
    register_kind(DeviceKind.IDE_CONTROLLER, controller + (Capability.IDE_CONTROLLER,), "ide", NamingScheme.BUS)
    register_kind(DeviceKind.PS2_CONTROLLER, controller + (Capability.PS2_CONTROLLER,), "ps2", NamingScheme.BUS)
    register_kind(DeviceKind.PCI_CONTROLLER, controller + (Capability.PCI_CONTROLLER,), "pci", NamingScheme.BUS)
    register_kind(DeviceKind.SIO_CONTROLLER, controller + (Capability.SIO_CONTROLLER,), "sio", NamingScheme.BUS)

    scsi = controller + (Capability.SCSI_CONTROLLER,)
    register_kind(DeviceKind.LSI_LOGIC_CONTROLLER, scsi, "lsilogic", NamingScheme.BUS)
    register_kind(DeviceKind.BUS_LOGIC_CONTROLLER, scsi, "buslogic", NamingScheme.BUS)
    register_kind(DeviceKind.PARAVIRTUAL_SCSI_CONTROLLER, scsi, "pvscsi", NamingScheme.BUS)
    register_kind(DeviceKind.LSI_LOGIC_SAS_CONTROLLER, scsi, "lsilogic-sas", NamingScheme.BUS)

    register_kind(DeviceKind.DISK, (), "disk", NamingScheme.ADDRESS)
    register_kind(DeviceKind.CDROM, (), "cdrom", NamingScheme.ORDINAL)
    register_kind(DeviceKind.FLOPPY, (), "floppy", NamingScheme.ORDINAL)

    ethernet = (Capability.ETHERNET_CARD,)
    for kind in (
        DeviceKind.E1000,
        DeviceKind.E1000E,
        DeviceKind.PCNET32,
        DeviceKind.VMXNET2,
        DeviceKind.VMXNET3,
    ):
        register_kind(kind, ethernet, "ethernet", NamingScheme.ORDINAL)

    register_kind(DeviceKind.POINTING_DEVICE, (), "pointing", NamingScheme.ORDINAL)
    register_kind(DeviceKind.KEYBOARD, (), "keyboard", NamingScheme.ORDINAL)
    register_kind(DeviceKind.VIDEO_CARD, (), "video", NamingScheme.ORDINAL)
    register_kind(DeviceKind.SERIAL_PORT, (), "serialport", NamingScheme.ORDINAL)
    register_kind(DeviceKind.VMCI_DEVICE, (), "vmci", NamingScheme.ORDINAL)


_register_builtin_kinds()


__all__ = [
    "BUS_FAMILIES",
    "Capability",
    "DeviceKind",
    "KindInfo",
    "NamingScheme",
    "bus_family",
    "capabilities_of",
    "get_kind",
    "is_registered",
    "kind_info",
    "register_kind",
]
