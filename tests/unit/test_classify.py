"""
Tests for partinfo.core.classify module.
"""

import pytest

from partinfo.core.classify import (
    canonical_type_id,
    classify_partition_type,
    is_esp,
    is_linux_partition,
    normalize_fs_name,
)
from partinfo.core.models import PartitionRole


class TestClassifyPartitionType:
    """Tests for classify_partition_type."""

    @pytest.mark.parametrize(
        "parttype, role",
        [
            ("0xf", PartitionRole.EXTENDED),
            ("0xc", PartitionRole.EFI_RESERVED),
            ("0x27", PartitionRole.EFI_RESERVED),
            ("0xef", PartitionRole.EFI_RESERVED),
            ("c12a7328-f81f-11d2-ba4b-00a0c93ec93b", PartitionRole.EFI_SYSTEM),
            ("e3c9e316-0b5c-4db8-817d-f92df00215ae", PartitionRole.MS_RESERVED),
            ("de94bba4-06d1-4d40-a16a-bfd50179d6ac", PartitionRole.WINDOWS_RECOVERY),
            ("0x83", PartitionRole.LINUX_DATA),
            ("0fc63daf-8483-4772-8e79-3d69d8477de4", PartitionRole.LINUX_DATA),
            ("0x82", PartitionRole.LINUX_SWAP),
            ("0657fd6d-a4ab-43c4-84e5-0933c84b4f4f", PartitionRole.LINUX_SWAP),
            ("933ac7e1-2eb4-4f13-b844-0e14e2aef915", PartitionRole.LINUX_HOME),
            ("44479540-f297-41b2-9af7-d131d5f0458a", PartitionRole.LINUX_ROOT),
            ("4f68bce3-e8cd-4db1-96e7-fbcaf984b709", PartitionRole.LINUX_ROOT),
            ("", PartitionRole.AMBIGUOUS),
            (None, PartitionRole.AMBIGUOUS),
            ("ebd0a0a2-b9e5-4433-87c0-68b6b72699c7", PartitionRole.AMBIGUOUS),
            ("0x7", PartitionRole.OTHER),
            ("21686148-6449-6e6f-744e-656564454649", PartitionRole.OTHER),
        ],
    )
    def test_table(self, parttype: str | None, role: PartitionRole) -> None:
        assert classify_partition_type(parttype) is role

    def test_case_insensitive(self) -> None:
        assert classify_partition_type("0xF") is PartitionRole.EXTENDED
        assert classify_partition_type("0XEF") is PartitionRole.EFI_RESERVED
        assert (
            classify_partition_type("C12A7328-F81F-11D2-BA4B-00A0C93EC93B")
            is PartitionRole.EFI_SYSTEM
        )

    def test_leading_zero_code(self) -> None:
        assert classify_partition_type("0x0f") is PartitionRole.EXTENDED
        assert canonical_type_id("0x0C") == "0xc"


class TestNormalizeFsName:
    """Tests for normalize_fs_name."""

    def test_simplified_names(self) -> None:
        assert normalize_fs_name("ntfs-3g") == "NTFS"
        assert normalize_fs_name("vfat") == "Fat32"
        assert normalize_fs_name("hfsplus") == "HPFS"

    def test_passthrough(self) -> None:
        assert normalize_fs_name("ext4") == "ext4"
        assert normalize_fs_name("") == ""
        assert normalize_fs_name(None) == ""

    def test_simplify_off(self) -> None:
        assert normalize_fs_name("vfat", simplify=False) == "vfat"


class TestIsLinuxPartition:
    """Tests for is_linux_partition."""

    def test_linux_types(self) -> None:
        assert is_linux_partition("0x83", None) is True
        assert is_linux_partition("933ac7e1-2eb4-4f13-b844-0e14e2aef915", "ext4") is True

    def test_swap_is_not_linux_data(self) -> None:
        assert is_linux_partition("0x82", "swap") is False

    def test_untyped_uses_filesystem(self) -> None:
        assert is_linux_partition("", "ext4") is True
        assert is_linux_partition("ebd0a0a2-b9e5-4433-87c0-68b6b72699c7", "btrfs") is True
        assert is_linux_partition("ebd0a0a2-b9e5-4433-87c0-68b6b72699c7", "ntfs") is False

    def test_windows_type_not_linux(self) -> None:
        assert is_linux_partition("0x7", "ext4") is False


class TestIsEsp:
    """Tests for is_esp."""

    def test_gpt_esp(self) -> None:
        assert is_esp("C12A7328-F81F-11D2-BA4B-00A0C93EC93B") is True

    def test_mbr_esp(self) -> None:
        assert is_esp("0xef") is True

    def test_not_esp(self) -> None:
        assert is_esp("0xc") is False
        assert is_esp("e3c9e316-0b5c-4db8-817d-f92df00215ae") is False
        assert is_esp(None) is False
