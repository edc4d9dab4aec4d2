"""
partinfo classification and filtering engine.

Decides which inventory records are drives and which are partitions,
applies the exclusion policy from a ListingConfig and enriches the
survivors for display. Survivors keep their inventory order.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import Enum, auto
from typing import TYPE_CHECKING

from partinfo.core.classify import classify_partition_type, normalize_fs_name
from partinfo.core.logging import get_logger
from partinfo.core.models import (
    DeviceRecord,
    DriveEntry,
    PartitionEntry,
    PartitionRole,
)
from partinfo.core.naming import decompose

if TYPE_CHECKING:
    from partinfo.core.config import ListingConfig
    from partinfo.platform.base import InventorySource

logger = get_logger(__name__)

SECTOR_SIZE = 512
BYTES_PER_MB = 1024 * 1024


class ListMode(Enum):
    """What a listing reports."""

    PARTITIONS = auto()
    DRIVES = auto()
    SWAP = auto()


def parent_of(record: DeviceRecord) -> str:
    """Name of the drive a partition belongs to."""
    return record.parent or decompose(record.name).root


class DeviceFilter:
    """Applies a ListingConfig to inventory records."""

    def __init__(self, config: ListingConfig, source: InventorySource) -> None:
        self.config = config
        self.source = source

    def filter(
        self, records: Iterable[DeviceRecord], mode: ListMode = ListMode.PARTITIONS
    ) -> list[PartitionEntry] | list[DriveEntry]:
        """Run the pipeline for ``mode`` over ``records``."""
        if mode is ListMode.DRIVES:
            return self.drives(records)
        return self.partitions(records, swap_only=mode is ListMode.SWAP)

    # ==================== Shared checks ====================

    def _drop(self, record: DeviceRecord, reason: str) -> None:
        logger.debug("Dropping device", device=record.name, reason=reason)

    def _major_allowed(self, record: DeviceRecord) -> bool:
        return record.major is None or record.major in self.config.major_numbers

    def _is_live_boot(self, record: DeviceRecord) -> bool:
        boot_uuid = self.config.live_boot_uuid
        if not (self.config.exclude_boot and boot_uuid and record.uuid):
            return False
        return record.uuid.casefold() == boot_uuid.casefold()

    def size_mb(self, device: str) -> int | None:
        """Size in whole megabytes from the raw sector count."""
        sectors = self.source.read_raw_sector_count(device)
        if sectors is None:
            return None
        return sectors * SECTOR_SIZE // BYTES_PER_MB

    def _big_enough(self, record: DeviceRecord) -> bool:
        min_size = self.config.min_size_mb
        if min_size is None:
            return True
        size = self.size_mb(record.name)
        # unknown size fails closed
        return size is not None and size > min_size

    # ==================== Partitions ====================

    def partitions(
        self, records: Iterable[DeviceRecord], swap_only: bool = False
    ) -> list[PartitionEntry]:
        """Filter partition records; ``swap_only`` keeps swap and ignores swap exclusion."""
        config = self.config
        exclude_swap = config.exclude_swap and not swap_only
        survivors: list[PartitionEntry] = []

        for record in records:
            if not record.is_partition:
                continue
            if not self._major_allowed(record):
                self._drop(record, "major number")
                continue

            role = classify_partition_type(record.parttype)
            if role is PartitionRole.EXTENDED:
                self._drop(record, "extended boot record")
                continue

            if swap_only:
                if not record.is_swap:
                    continue
            elif exclude_swap and record.is_swap:
                self._drop(record, "swap")
                continue

            if self._is_live_boot(record):
                self._drop(record, "live boot medium")
                continue

            if config.exclude_efi and role.is_efi_or_reserved:
                self._drop(record, f"{role.value} partition")
                continue

            if not self._big_enough(record):
                self._drop(record, "below minimum size")
                continue

            survivors.append(
                PartitionEntry(
                    record=record,
                    role=role,
                    fstype=normalize_fs_name(record.fstype, config.simplify_fs_names),
                )
            )

        return survivors

    # ==================== Drives ====================

    def drives(self, records: Iterable[DeviceRecord]) -> list[DriveEntry]:
        """Filter drive records and derive their per-drive attributes."""
        records = list(records)
        children: dict[str, list[DeviceRecord]] = {}
        for record in records:
            if record.is_partition:
                children.setdefault(parent_of(record), []).append(record)

        survivors: list[DriveEntry] = []
        for record in records:
            if not record.is_disk:
                continue
            if not self._major_allowed(record):
                self._drop(record, "major number")
                continue

            partitions = children.get(record.name, [])
            if any(self._is_live_boot(part) for part in partitions):
                self._drop(record, "holds live boot medium")
                continue

            if not self._big_enough(record):
                self._drop(record, "below minimum size")
                continue

            survivors.append(self._enrich_drive(record, partitions))

        return survivors

    def _enrich_drive(
        self, record: DeviceRecord, partitions: Sequence[DeviceRecord]
    ) -> DriveEntry:
        removable = self.source.read_usb_topology(record.name) or bool(record.removable)
        # rotational is unreliable on removable media
        rotational = None if removable else record.rotational

        labels: list[str] = []
        for part in partitions:
            if part.label and part.label not in labels:
                labels.append(part.label)

        return DriveEntry(
            record=record,
            removable=removable,
            rotational=rotational,
            partition_count=sum(
                1
                for part in partitions
                if classify_partition_type(part.parttype) is not PartitionRole.EXTENDED
            ),
            labels=labels,
        )
