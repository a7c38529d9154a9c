"""Device record models.

These models mirror the shape of vSphere ``VirtualDevice`` records as handed
over by the inventory layer. They carry no topology logic; selection,
allocation and naming live in ``vdevice.services``.
"""
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .kinds import Capability, DeviceKind, capabilities_of, kind_info


class Description(BaseModel):
    """Display description of a device."""
    label: str = ""
    summary: str = ""


class ConnectInfo(BaseModel):
    """Connection state of a removable or network device."""
    start_connected: bool = False
    allow_guest_control: bool = False
    connected: bool = False
    status: str = "untried"


class Device(BaseModel):
    """A single piece of virtual hardware.

    ``controller_key`` of 0 or None means the device is not attached to a
    controller (controllers on the top-level bus, or records pending
    placement). ``unit_number`` is None until an address is allocated.
    """
    kind: str = Field(
        DeviceKind.GENERIC.value,
        description="Registered device kind, e.g. VirtualCdrom",
    )
    key: int = Field(0, description="Key unique within a device list")
    controller_key: Optional[int] = Field(
        None,
        description="Key of the controller this device is attached to",
    )
    unit_number: Optional[int] = Field(
        None,
        ge=0,
        description="Address of the device on its controller",
    )
    device_info: Optional[Description] = None
    backing: Optional[Dict[str, Any]] = Field(
        None,
        description="Kind-specific backing payload, opaque to topology logic",
    )
    connectable: Optional[ConnectInfo] = None

    model_config = ConfigDict(validate_assignment=True)

    @field_validator("kind", mode="before")
    @classmethod
    def _kind_as_name(cls, value):
        if isinstance(value, Enum):
            return value.value
        return value

    @property
    def label(self) -> str:
        return self.device_info.label if self.device_info else ""

    @property
    def summary(self) -> str:
        return self.device_info.summary if self.device_info else ""

    @property
    def is_attached(self) -> bool:
        return bool(self.controller_key)

    @property
    def capabilities(self):
        """Capabilities registered for this device's kind."""
        return capabilities_of(self.kind)

    @property
    def is_controller(self) -> bool:
        return kind_info(self.kind).is_controller


class Controller(Device):
    """A device providing attachment points to other devices on a bus."""
    kind: str = DeviceKind.PCI_CONTROLLER.value
    bus_number: int = Field(0, ge=0, description="Bus number among controllers of the same kind")
    device: List[int] = Field(
        default_factory=list,
        description="Keys of the devices currently attached to this controller",
    )


class SCSIController(Controller):
    """SCSI host bus adapter."""
    kind: str = DeviceKind.LSI_LOGIC_CONTROLLER.value
    hot_add_remove: bool = True
    shared_bus: str = "noSharing"
    scsi_ctlr_unit_number: int = Field(
        7,
        description="Unit number the adapter itself occupies on its bus",
    )


class Disk(Device):
    """Virtual hard disk."""
    kind: str = DeviceKind.DISK.value
    capacity_in_kb: int = Field(0, ge=0)

    @property
    def capacity_in_bytes(self) -> int:
        return self.capacity_in_kb * 1024


class EthernetCard(Device):
    """Virtual network adapter of any emulated model."""
    kind: str = DeviceKind.E1000.value
    address_type: str = "generated"
    mac_address: str = ""
    wake_on_lan_enabled: bool = False


def model_for_kind(kind) -> type:
    """Return the record model class best suited to ``kind``."""
    capabilities = capabilities_of(kind)
    if Capability.SCSI_CONTROLLER.value in capabilities:
        return SCSIController
    if Capability.CONTROLLER.value in capabilities:
        return Controller
    if Capability.ETHERNET_CARD.value in capabilities:
        return EthernetCard
    if DeviceKind.DISK.value in capabilities:
        return Disk
    return Device


__all__ = [
    "ConnectInfo",
    "Controller",
    "Description",
    "Device",
    "Disk",
    "EthernetCard",
    "SCSIController",
    "model_for_kind",
]
