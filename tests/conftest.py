"""
Pytest configuration and fixtures for partinfo tests.
"""

import sys
from collections.abc import Iterable, Sequence
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from partinfo.core.config import ListingConfig  # noqa: E402
from partinfo.core.models import DeviceKind, DeviceRecord  # noqa: E402
from partinfo.platform.base import InventorySource  # noqa: E402

MB = 1024 * 1024
SECTORS_PER_MB = MB // 512


class FakeInventory(InventorySource):
    """In-memory inventory for engine and CLI tests."""

    def __init__(
        self,
        records: Sequence[DeviceRecord] = (),
        sectors: dict[str, int] | None = None,
        usb: Iterable[str] = (),
    ) -> None:
        self.records = list(records)
        self.sectors = sectors if sectors is not None else {
            r.name: r.size_bytes // 512 for r in self.records
        }
        self.usb = set(usb)
        self.calls: list[dict] = []

    def list_devices(self, fields=None, major_numbers=None, parent=None, include_partitions=True):
        self.calls.append({"major_numbers": major_numbers, "parent": parent})
        records = self.records
        if parent is not None:
            records = [r for r in records if r.name == parent or r.parent == parent]
        return list(records)

    def read_raw_sector_count(self, device: str) -> int | None:
        return self.sectors.get(device)

    def read_usb_topology(self, drive: str) -> bool:
        return drive in self.usb

    def device_exists(self, device: str) -> bool:
        return any(r.name == device for r in self.records)


def disk(name: str, size_mb: int = 1000, **kwargs) -> DeviceRecord:
    kwargs.setdefault("major", 8)
    return DeviceRecord(name=name, kind=DeviceKind.DISK, size_bytes=size_mb * MB, **kwargs)


def part(name: str, parent: str, size_mb: int = 100, **kwargs) -> DeviceRecord:
    kwargs.setdefault("major", 8)
    return DeviceRecord(
        name=name, kind=DeviceKind.PARTITION, size_bytes=size_mb * MB, parent=parent, **kwargs
    )


@pytest.fixture
def sample_records() -> list[DeviceRecord]:
    """One drive with a Linux partition and a swap partition."""
    return [
        disk("sda", 1000, model="Disk1", rotational=True, removable=False),
        part("sda1", "sda", 500, fstype="ext4", parttype="0x83", uuid="1111-aaaa", label="root"),
        part("sda2", "sda", 50, fstype="swap", parttype="0x82", uuid="2222-bbbb"),
    ]


@pytest.fixture
def sample_inventory(sample_records: list[DeviceRecord]) -> FakeInventory:
    return FakeInventory(sample_records)


@pytest.fixture
def make_inventory() -> type[FakeInventory]:
    return FakeInventory


@pytest.fixture
def listing_config() -> ListingConfig:
    """Listing configuration with nothing excluded."""
    return ListingConfig(exclude_boot=False)


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
