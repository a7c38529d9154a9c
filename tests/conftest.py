"""Test configuration for the vdevice test suite."""

import os

import pytest

# Lenient kind handling unless a test opts into strict mode.
# This must happen before vdevice.core.config builds its settings instance.
os.environ.setdefault("VDEVICE_STRICT_KINDS", "false")

from vdevice.core.kinds import DeviceKind
from vdevice.core.models import (
    ConnectInfo,
    Controller,
    Description,
    Device,
    Disk,
    EthernetCard,
    SCSIController,
)
from vdevice.services.device_list import DeviceList


def _info(label: str, summary: str = "") -> Description:
    return Description(label=label, summary=summary or label)


def build_inventory() -> DeviceList:
    """Device snapshot of a small VM: 6 controllers and 9 leaf devices."""
    return DeviceList([
        Controller(
            kind=DeviceKind.IDE_CONTROLLER,
            key=200,
            device_info=_info("IDE 0"),
            controller_key=0,
            unit_number=0,
            bus_number=0,
            device=[3001, 3000],
        ),
        Controller(
            kind=DeviceKind.IDE_CONTROLLER,
            key=201,
            device_info=_info("IDE 1"),
            controller_key=0,
            unit_number=0,
            bus_number=1,
            device=[3002],
        ),
        Controller(
            kind=DeviceKind.PS2_CONTROLLER,
            key=300,
            device_info=_info("PS2 controller 0"),
            controller_key=0,
            unit_number=0,
            bus_number=0,
            device=[600, 700],
        ),
        Controller(
            kind=DeviceKind.PCI_CONTROLLER,
            key=100,
            device_info=_info("PCI controller 0"),
            controller_key=0,
            unit_number=0,
            bus_number=0,
            device=[500, 12000, 1000, 4000],
        ),
        Controller(
            kind=DeviceKind.SIO_CONTROLLER,
            key=400,
            device_info=_info("SIO controller 0"),
            controller_key=0,
            unit_number=0,
            bus_number=0,
            device=[9000],
        ),
        Device(
            kind=DeviceKind.KEYBOARD,
            key=600,
            device_info=_info("Keyboard "),
            controller_key=300,
            unit_number=0,
        ),
        Device(
            kind=DeviceKind.POINTING_DEVICE,
            key=700,
            device_info=_info("Pointing device", "Pointing device; Device"),
            backing={"hostPointingDevice": "autodetect"},
            controller_key=300,
            unit_number=1,
        ),
        Device(
            kind=DeviceKind.VIDEO_CARD,
            key=500,
            device_info=_info("Video card "),
            controller_key=100,
            unit_number=0,
        ),
        Device(
            kind=DeviceKind.VMCI_DEVICE,
            key=12000,
            device_info=_info("VMCI device"),
            controller_key=100,
            unit_number=17,
        ),
        SCSIController(
            kind=DeviceKind.LSI_LOGIC_CONTROLLER,
            key=1000,
            device_info=_info("SCSI controller 0", "LSI Logic"),
            controller_key=100,
            unit_number=3,
            bus_number=0,
            device=[],
        ),
        Device(
            kind=DeviceKind.CDROM,
            key=3001,
            device_info=_info("CD/DVD drive 1", "ATAPI cdrom-200-1"),
            backing={"deviceName": "cdrom-200-1", "useAutoDetect": False},
            connectable=ConnectInfo(start_connected=True, allow_guest_control=True),
            controller_key=200,
            unit_number=1,
        ),
        Disk(
            key=3000,
            device_info=_info("Hard disk 1", "30,720 KB"),
            backing={"fileName": "[datastore1] bar/bar.vmdk", "diskMode": "persistent"},
            controller_key=200,
            unit_number=0,
            capacity_in_kb=30720,
        ),
        Disk(
            key=3002,
            device_info=_info("Hard disk 2", "10,000,000 KB"),
            backing={"fileName": "[datastore1] bar/disk-201-0.vmdk", "diskMode": "persistent"},
            controller_key=201,
            unit_number=0,
            capacity_in_kb=10000000,
        ),
        EthernetCard(
            kind=DeviceKind.E1000,
            key=4000,
            device_info=_info("Network adapter 1", "VM Network"),
            backing={"deviceName": "VM Network"},
            connectable=ConnectInfo(start_connected=True, allow_guest_control=True),
            controller_key=100,
            unit_number=7,
            mac_address="00:0c:29:93:d7:27",
            wake_on_lan_enabled=True,
        ),
        Device(
            kind=DeviceKind.SERIAL_PORT,
            key=9000,
            device_info=_info("Serial port 1", "Remote localhost:0"),
            backing={"serviceURI": "localhost:0", "direction": "client"},
            controller_key=400,
            unit_number=0,
        ),
    ])


@pytest.fixture
def devices() -> DeviceList:
    """A fresh copy of the inventory snapshot for each test."""
    return build_inventory()
