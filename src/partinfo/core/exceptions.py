"""
partinfo exceptions.

Defines the error hierarchy shared by the core and the command surface.
"""

from __future__ import annotations


class PartinfoError(Exception):
    """Base exception for partinfo errors."""


class ConfigurationError(PartinfoError):
    """Invalid option value, exclusion keyword or major-number list."""


class DeviceNotFoundError(PartinfoError):
    """Named device does not exist or is not a block device."""

    def __init__(self, device: str, reason: str | None = None) -> None:
        self.device = device
        message = f"Device not found: {device}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InventoryUnavailable(PartinfoError):
    """The block device listing could not be obtained."""
