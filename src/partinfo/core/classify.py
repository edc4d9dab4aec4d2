"""
Partition-type classification and filesystem-name normalization.
"""

from __future__ import annotations

import re

from partinfo.core.models import PartitionRole

_MBR_CODE = re.compile(r"^(?:0x)?([0-9a-f]{1,2})$")

# Legacy MBR codes, keyed by their canonical "0x.." spelling
MBR_TYPES: dict[str, PartitionRole] = {
    "0xf": PartitionRole.EXTENDED,
    "0xc": PartitionRole.EFI_RESERVED,
    "0x27": PartitionRole.EFI_RESERVED,
    "0xef": PartitionRole.EFI_RESERVED,
    "0x83": PartitionRole.LINUX_DATA,
    "0x82": PartitionRole.LINUX_SWAP,
}

# GPT partition type GUIDs, lower case
GPT_TYPES: dict[str, PartitionRole] = {
    "c12a7328-f81f-11d2-ba4b-00a0c93ec93b": PartitionRole.EFI_SYSTEM,
    "e3c9e316-0b5c-4db8-817d-f92df00215ae": PartitionRole.MS_RESERVED,
    "de94bba4-06d1-4d40-a16a-bfd50179d6ac": PartitionRole.WINDOWS_RECOVERY,
    "0fc63daf-8483-4772-8e79-3d69d8477de4": PartitionRole.LINUX_DATA,
    "0657fd6d-a4ab-43c4-84e5-0933c84b4f4f": PartitionRole.LINUX_SWAP,
    "933ac7e1-2eb4-4f13-b844-0e14e2aef915": PartitionRole.LINUX_HOME,
    "44479540-f297-41b2-9af7-d131d5f0458a": PartitionRole.LINUX_ROOT,  # x86
    "4f68bce3-e8cd-4db1-96e7-fbcaf984b709": PartitionRole.LINUX_ROOT,  # x86-64
    "ebd0a0a2-b9e5-4433-87c0-68b6b72699c7": PartitionRole.AMBIGUOUS,  # basic data
}

ESP_MBR_CODE = "0xef"

# Display names used when simplification is on
SIMPLE_FS_NAMES: dict[str, str] = {
    "ntfs-3g": "NTFS",
    "vfat": "Fat32",
    "hfsplus": "HPFS",
}

LINUX_FILESYSTEMS = frozenset(
    {"ext2", "ext3", "ext4", "btrfs", "xfs", "jfs", "reiserfs", "nilfs2", "f2fs"}
)


def canonical_type_id(parttype: str | None) -> str:
    """Lower-case a type identifier and spell MBR codes as ``0x..``."""
    value = (parttype or "").strip().lower()
    match = _MBR_CODE.match(value)
    if match:
        return hex(int(match.group(1), 16))
    return value


def classify_partition_type(parttype: str | None) -> PartitionRole:
    """Map an MBR code or GPT type GUID to a partition role."""
    value = canonical_type_id(parttype)
    if not value:
        return PartitionRole.AMBIGUOUS
    if value in MBR_TYPES:
        return MBR_TYPES[value]
    return GPT_TYPES.get(value, PartitionRole.OTHER)


def normalize_fs_name(fstype: str | None, simplify: bool = True) -> str:
    """Return the display name for a raw filesystem type."""
    raw = fstype or ""
    if not simplify:
        return raw
    return SIMPLE_FS_NAMES.get(raw, raw)


def is_linux_partition(parttype: str | None, fstype: str | None) -> bool:
    """
    Decide whether a partition holds a Linux filesystem.

    Linux type codes answer directly. Untyped and Windows basic-data
    partitions fall back to the filesystem type.
    """
    role = classify_partition_type(parttype)
    if role.is_linux:
        return True
    if role is PartitionRole.AMBIGUOUS:
        return (fstype or "").lower() in LINUX_FILESYSTEMS
    return False


def is_esp(parttype: str | None) -> bool:
    """True for an EFI system partition, GPT or legacy."""
    value = canonical_type_id(parttype)
    return value == ESP_MBR_CODE or classify_partition_type(value) is PartitionRole.EFI_SYSTEM
