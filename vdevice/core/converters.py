"""Conversion between vSphere-shaped device payloads and device records.

The inventory layer hands over devices as dictionaries using vSphere's
property names (``controllerKey``, ``unitNumber``, ``deviceInfo`` ...) with a
``_type`` discriminator naming the concrete device type. These helpers turn
such payloads into the pydantic records used by the topology services and
back again.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

from .config import settings
from .kinds import DeviceKind, is_registered
from .models import Device, model_for_kind

logger = logging.getLogger(__name__)


class UnknownDeviceKindError(ValueError):
    """Raised when a payload names a device type that is not registered."""

    def __init__(self, kind: str):
        super().__init__(f"Unknown device type '{kind}'")
        self.kind = kind


# vSphere property name -> record field name
_FIELD_MAP: Dict[str, str] = {
    "key": "key",
    "controllerKey": "controller_key",
    "unitNumber": "unit_number",
    "backing": "backing",
    "busNumber": "bus_number",
    "device": "device",
    "hotAddRemove": "hot_add_remove",
    "sharedBus": "shared_bus",
    "scsiCtlrUnitNumber": "scsi_ctlr_unit_number",
    "capacityInKB": "capacity_in_kb",
    "addressType": "address_type",
    "macAddress": "mac_address",
    "wakeOnLanEnabled": "wake_on_lan_enabled",
}

_CONNECTABLE_MAP: Dict[str, str] = {
    "startConnected": "start_connected",
    "allowGuestControl": "allow_guest_control",
    "connected": "connected",
    "status": "status",
}


def _resolve_kind(type_name: Optional[str], strict: bool) -> str:
    if not type_name:
        return DeviceKind.GENERIC.value
    if is_registered(type_name):
        return type_name
    if strict:
        raise UnknownDeviceKindError(type_name)
    logger.warning(
        "Unknown device type %s; treating it as a generic device", type_name
    )
    return DeviceKind.GENERIC.value


def device_from_dict(data: Dict[str, Any], strict: Optional[bool] = None) -> Device:
    """Build a device record from a vSphere-shaped payload.

    Args:
        data: Device payload with a ``_type`` discriminator
        strict: Override ``settings.strict_kinds`` for this call

    Returns:
        A record of the model class matching the device kind

    Raises:
        UnknownDeviceKindError: strict mode and ``_type`` is not registered
        pydantic.ValidationError: the payload has invalid field values
    """
    if strict is None:
        strict = settings.strict_kinds

    kind = _resolve_kind(data.get("_type"), strict)
    model = model_for_kind(kind)

    fields: Dict[str, Any] = {"kind": kind}
    for source, target in _FIELD_MAP.items():
        if source in data and target in model.model_fields:
            fields[target] = data[source]

    info = data.get("deviceInfo")
    if info:
        fields["device_info"] = {
            "label": info.get("label", ""),
            "summary": info.get("summary", ""),
        }

    connectable = data.get("connectable")
    if connectable:
        fields["connectable"] = {
            target: connectable[source]
            for source, target in _CONNECTABLE_MAP.items()
            if source in connectable
        }

    # Controllers report an empty child list as null.
    if fields.get("device", []) is None:
        fields["device"] = []

    return model.model_validate(fields)


def device_to_dict(device: Device) -> Dict[str, Any]:
    """Render a device record as a vSphere-shaped payload."""
    payload: Dict[str, Any] = {"_type": device.kind}
    values = device.model_dump()
    for source, target in _FIELD_MAP.items():
        if target in values and values[target] is not None:
            payload[source] = values[target]

    if device.device_info is not None:
        payload["deviceInfo"] = {
            "label": device.device_info.label,
            "summary": device.device_info.summary,
        }

    if device.connectable is not None:
        connect_values = device.connectable.model_dump()
        payload["connectable"] = {
            source: connect_values[target]
            for source, target in _CONNECTABLE_MAP.items()
        }

    return payload


def device_list_from_dicts(items: Iterable[Dict[str, Any]], strict: Optional[bool] = None):
    """Build a ``DeviceList`` from an inventory snapshot of device payloads."""
    from ..services.device_list import DeviceList

    devices: List[Device] = [device_from_dict(item, strict=strict) for item in items]
    logger.debug("Loaded %d device records from inventory payload", len(devices))
    return DeviceList(devices)


__all__ = [
    "UnknownDeviceKindError",
    "device_from_dict",
    "device_list_from_dicts",
    "device_to_dict",
]
