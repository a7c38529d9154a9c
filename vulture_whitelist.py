# Vulture whitelist file
# This file contains false positives that vulture incorrectly flags as dead code.
# These are typically Pydantic fields, validators and public API entry points
# used by callers outside this package.
#
# Usage: python3 -m vulture vdevice vulture_whitelist.py

# =============================================================================
# Pydantic Model Fields (accessed via serialization)
# =============================================================================

# models.py - ConnectInfo
start_connected
allow_guest_control
connected
status

# models.py - SCSIController
hot_add_remove
shared_bus
scsi_ctlr_unit_number

# models.py - EthernetCard
address_type
wake_on_lan_enabled

# models.py - Device validators (registered via decorator)
_kind_as_name

# config.py - Settings.model_config
model_config

# =============================================================================
# Public API (called by the inventory / reconfiguration layer)
# =============================================================================

summary  # models.py - Device.summary
is_attached  # models.py - Device.is_attached
capabilities  # models.py - Device.capabilities
capacity_in_bytes  # models.py - Disk.capacity_in_bytes
device_to_dict  # converters.py
device_list_from_dicts  # converters.py
configure_logging  # logging_config.py
find_cdrom  # device_list.py
find_ide_controller  # device_list.py
find_scsi_controller  # device_list.py
primary_mac_address  # device_list.py
assign_controller  # device_list.py
device_name  # name_resolver.py
