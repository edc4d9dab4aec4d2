"""
partinfo Platform Backend Base.

Defines the abstract interface to the system's block device inventory.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from partinfo.core.models import DeviceRecord


class CommandResult:
    """Result of a command execution."""

    def __init__(
        self,
        returncode: int,
        stdout: str,
        stderr: str,
        command: str | list[str],
        duration_seconds: float = 0.0,
    ) -> None:
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.command = command
        self.duration_seconds = duration_seconds

    @property
    def success(self) -> bool:
        return self.returncode == 0

    def __repr__(self) -> str:
        cmd = self.command if isinstance(self.command, str) else " ".join(self.command)
        return f"CommandResult(rc={self.returncode}, cmd='{cmd[:50]}...')"


class InventorySource(ABC):
    """Read-only access to block devices and their kernel attributes."""

    @abstractmethod
    def list_devices(
        self,
        fields: Sequence[str] | None = None,
        major_numbers: Iterable[int] | None = None,
        parent: str | None = None,
        include_partitions: bool = True,
    ) -> list[DeviceRecord]:
        """
        List drives and (optionally) partitions in inventory order.

        ``major_numbers`` restricts the listing to those device majors and
        ``parent`` to one drive and its partitions. Raises
        InventoryUnavailable when the listing cannot be obtained.
        """

    @abstractmethod
    def read_raw_sector_count(self, device: str) -> int | None:
        """Size of a drive or partition in 512-byte sectors, None if unknown."""

    @abstractmethod
    def read_usb_topology(self, drive: str) -> bool:
        """Whether the drive hangs off a USB bus."""

    @abstractmethod
    def device_exists(self, device: str) -> bool:
        """Whether ``device`` names an existing block device."""
