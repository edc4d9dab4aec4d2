"""
partinfo data models.

Defines the inventory records read from the system and the enriched
entries produced by the filtering engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DeviceKind(Enum):
    """Kind of block device node."""

    DISK = "disk"
    PARTITION = "part"

    @classmethod
    def from_string(cls, value: str | None) -> DeviceKind | None:
        """Map an lsblk TYPE value to a kind; None for anything else."""
        value_lower = (value or "").lower().strip()
        aliases = {
            "disk": cls.DISK,
            "part": cls.PARTITION,
            "partition": cls.PARTITION,
        }
        return aliases.get(value_lower)


class PartitionRole(Enum):
    """Semantic role derived from a partition-type identifier."""

    EXTENDED = "extended"
    EFI_RESERVED = "efi-reserved"  # legacy 0xc, 0x27, 0xef family
    EFI_SYSTEM = "efi-system"
    MS_RESERVED = "ms-reserved"
    WINDOWS_RECOVERY = "win-recovery"
    LINUX_DATA = "linux"
    LINUX_SWAP = "linux-swap"
    LINUX_HOME = "linux-home"
    LINUX_ROOT = "linux-root"
    AMBIGUOUS = "data"  # untyped or Windows basic data
    OTHER = "other"

    @property
    def is_efi_or_reserved(self) -> bool:
        return self in (
            PartitionRole.EFI_RESERVED,
            PartitionRole.EFI_SYSTEM,
            PartitionRole.MS_RESERVED,
            PartitionRole.WINDOWS_RECOVERY,
        )

    @property
    def is_linux(self) -> bool:
        return self in (
            PartitionRole.LINUX_DATA,
            PartitionRole.LINUX_HOME,
            PartitionRole.LINUX_ROOT,
        )


@dataclass(frozen=True)
class DeviceRecord:
    """One block device as reported by the inventory."""

    name: str  # bare node name, e.g. sda1 or mmcblk0p3
    kind: DeviceKind
    size_bytes: int = 0
    rotational: bool | None = None
    removable: bool | None = None
    fstype: str | None = None
    parttype: str | None = None  # MBR code such as 0x83 or a GPT type GUID
    uuid: str | None = None
    model: str | None = None
    label: str | None = None
    parent: str | None = None
    major: int | None = None

    @property
    def is_disk(self) -> bool:
        return self.kind is DeviceKind.DISK

    @property
    def is_partition(self) -> bool:
        return self.kind is DeviceKind.PARTITION

    @property
    def is_swap(self) -> bool:
        return self.fstype == "swap"

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind.value,
            "size_bytes": self.size_bytes,
            "rotational": self.rotational,
            "removable": self.removable,
            "fstype": self.fstype,
            "parttype": self.parttype,
            "uuid": self.uuid,
            "model": self.model,
            "label": self.label,
            "parent": self.parent,
            "major": self.major,
        }


@dataclass
class PartitionEntry:
    """A partition that survived filtering."""

    record: DeviceRecord
    role: PartitionRole
    fstype: str = ""  # display name, possibly simplified

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def size_bytes(self) -> int:
        return self.record.size_bytes

    @property
    def label(self) -> str:
        return self.record.label or ""

    @property
    def uuid(self) -> str:
        return self.record.uuid or ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "size_bytes": self.size_bytes,
            "fstype": self.fstype,
            "role": self.role.value,
            "uuid": self.record.uuid,
            "label": self.record.label,
        }


@dataclass
class DriveEntry:
    """A drive that survived filtering, with derived attributes."""

    record: DeviceRecord
    removable: bool = False
    rotational: bool | None = None  # None when unknown or unreliable
    partition_count: int = 0
    labels: list[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def size_bytes(self) -> int:
        return self.record.size_bytes

    @property
    def model(self) -> str:
        return self.record.model or ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "size_bytes": self.size_bytes,
            "model": self.record.model,
            "removable": self.removable,
            "rotational": self.rotational,
            "partition_count": self.partition_count,
            "labels": list(self.labels),
        }
