"""
partinfo Platform Abstraction Layer.

Provides the platform-specific block device inventory.
"""

from __future__ import annotations

import platform

from partinfo.core.exceptions import InventoryUnavailable
from partinfo.platform.base import CommandResult, InventorySource


def get_inventory_source() -> InventorySource:
    """Get the inventory source for the current OS."""
    system = platform.system().lower()

    if system == "linux":
        from partinfo.platform.linux import LinuxInventory

        return LinuxInventory()

    raise InventoryUnavailable(f"Unsupported platform: {system}")


__all__ = [
    "CommandResult",
    "InventorySource",
    "get_inventory_source",
]
