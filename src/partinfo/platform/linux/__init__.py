"""
partinfo Linux Platform Backend.

Reads the block device inventory using:
- lsblk for the device listing
- /sys/class/block for raw sector counts
- /sys/block device links for USB topology
"""

from partinfo.platform.linux.backend import LinuxInventory
from partinfo.platform.linux.parsers import (
    parse_lsblk_json,
    record_from_lsblk,
)

__all__ = [
    "LinuxInventory",
    "parse_lsblk_json",
    "record_from_lsblk",
]
