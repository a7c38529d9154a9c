"""Type selector tests.

Selection is capability based: asking for an abstract capability returns
every specialised kind that declares it.
"""
import pytest

from vdevice.core.kinds import Capability, DeviceKind, register_kind
from vdevice.core.models import Controller, Device, SCSIController
from vdevice.services.device_list import DeviceList
from vdevice.services.type_selector import matches, select_by_type


@pytest.mark.parametrize(
    "kind, expected",
    [
        (DeviceKind.CDROM, 1),
        (Capability.ETHERNET_CARD, 1),
        (DeviceKind.DISK, 2),
        (Capability.CONTROLLER, 6),
        (Capability.IDE_CONTROLLER, 2),
        (Capability.SCSI_CONTROLLER, 1),
        (DeviceKind.LSI_LOGIC_CONTROLLER, 1),
        (DeviceKind.PARAVIRTUAL_SCSI_CONTROLLER, 0),
        (Capability.DEVICE, 15),
    ],
)
def test_select_by_type_counts(devices, kind, expected):
    assert len(devices.select_by_type(kind)) == expected


def test_select_by_type_accepts_type_names(devices):
    assert len(devices.select_by_type("VirtualController")) == 6
    assert len(devices.select_by_type("VirtualE1000")) == 1


def test_select_by_type_preserves_order(devices):
    keys = [device.key for device in devices.select_by_type(Capability.CONTROLLER)]
    assert keys == [200, 201, 300, 100, 400, 1000]


def test_select_by_type_returns_same_records(devices):
    selected = devices.select_by_type(DeviceKind.CDROM)
    assert selected[0] is devices.find_by_key(3001)


def test_select_returns_empty_list_when_nothing_matches(devices):
    selected = devices.select(lambda device: device.key < 0)
    assert isinstance(selected, DeviceList)
    assert len(selected) == 0


class TestMatches:
    """Test single-device capability matching."""

    def test_specialised_scsi_controller_is_scsi_and_controller(self):
        pvscsi = SCSIController(kind=DeviceKind.PARAVIRTUAL_SCSI_CONTROLLER)

        assert matches(pvscsi, DeviceKind.PARAVIRTUAL_SCSI_CONTROLLER)
        assert matches(pvscsi, Capability.SCSI_CONTROLLER)
        assert matches(pvscsi, Capability.CONTROLLER)
        assert matches(pvscsi, Capability.DEVICE)
        assert not matches(pvscsi, DeviceKind.LSI_LOGIC_CONTROLLER)
        assert not matches(pvscsi, Capability.IDE_CONTROLLER)

    def test_leaf_device_is_not_a_controller(self):
        cdrom = Device(kind=DeviceKind.CDROM)

        assert matches(cdrom, DeviceKind.CDROM)
        assert not matches(cdrom, Capability.CONTROLLER)

    def test_unregistered_kind_matches_only_generic_device(self):
        mystery = Device(kind="VirtualMysteryDevice")

        assert matches(mystery, Capability.DEVICE)
        assert not matches(mystery, "VirtualMysteryDevice")

    def test_newly_registered_kind_is_selected_by_capability(self):
        register_kind(
            "VirtualTestSASController",
            [Capability.CONTROLLER, Capability.SCSI_CONTROLLER],
            name_tag="testsas",
        )
        devices = [
            Controller(kind=DeviceKind.IDE_CONTROLLER, key=200),
            SCSIController(kind="VirtualTestSASController", key=1000),
        ]

        selected = select_by_type(devices, Capability.SCSI_CONTROLLER)

        assert [device.key for device in selected] == [1000]
