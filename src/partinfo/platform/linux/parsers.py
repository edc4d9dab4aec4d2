"""
Linux output parsers.

Turns lsblk JSON output into DeviceRecord objects.
"""

from __future__ import annotations

import json
from typing import Any

from partinfo.core.exceptions import InventoryUnavailable
from partinfo.core.logging import get_logger
from partinfo.core.models import DeviceKind, DeviceRecord

logger = get_logger(__name__)

# Columns requested from lsblk; JSON keys are the lower-cased names
LSBLK_COLUMNS = (
    "NAME",
    "SIZE",
    "TYPE",
    "FSTYPE",
    "PARTTYPE",
    "UUID",
    "LABEL",
    "MODEL",
    "RM",
    "ROTA",
    "PKNAME",
    "MAJ:MIN",
)


def parse_lsblk_json(output: str) -> list[dict[str, Any]]:
    """
    Parse JSON output from lsblk.

    Empty output means no devices. Anything that is not an lsblk JSON
    document raises InventoryUnavailable.
    """
    if not output.strip():
        return []
    try:
        data = json.loads(output)
    except json.JSONDecodeError as e:
        raise InventoryUnavailable(f"Unreadable lsblk output: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("blockdevices", []), list):
        raise InventoryUnavailable("Unexpected lsblk output layout")
    return data.get("blockdevices", [])


def parse_flag(value: Any) -> bool | None:
    """Parse an lsblk boolean column; None when not reported."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return value
    if value in (1, "1", "true"):
        return True
    if value in (0, "0", "false"):
        return False
    return None


def parse_size(value: Any) -> int:
    """Parse an lsblk byte size; 0 when missing or unreadable."""
    if isinstance(value, int):
        return max(value, 0)
    try:
        return max(int(str(value).strip()), 0)
    except (TypeError, ValueError):
        return 0


def parse_major(value: Any) -> int | None:
    """Extract the major number from a ``MAJ:MIN`` value."""
    if not value:
        return None
    major, _, _ = str(value).partition(":")
    try:
        return int(major.strip())
    except ValueError:
        return None


def _text(block: dict[str, Any], key: str) -> str | None:
    value = block.get(key)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def record_from_lsblk(block: dict[str, Any]) -> DeviceRecord | None:
    """
    Build a DeviceRecord from one lsblk entry.

    Returns None for entries without a name and for device types other
    than disks and partitions.
    """
    if not isinstance(block, dict):
        return None

    name = _text(block, "name")
    if not name:
        return None
    name = name.rsplit("/", 1)[-1]

    kind = DeviceKind.from_string(block.get("type"))
    if kind is None:
        return None

    parent = _text(block, "pkname")
    if parent:
        parent = parent.rsplit("/", 1)[-1]

    return DeviceRecord(
        name=name,
        kind=kind,
        size_bytes=parse_size(block.get("size")),
        rotational=parse_flag(block.get("rota")),
        removable=parse_flag(block.get("rm")),
        fstype=_text(block, "fstype"),
        parttype=_text(block, "parttype") if kind is DeviceKind.PARTITION else None,
        uuid=_text(block, "uuid"),
        model=_text(block, "model"),
        # labels are kept verbatim, only a missing label becomes None
        label=block.get("label") or None,
        parent=parent,
        major=parse_major(block.get("maj:min")),
    )


def records_from_lsblk(output: str) -> list[DeviceRecord]:
    """Build records for every usable entry of an lsblk listing, in order."""
    records: list[DeviceRecord] = []
    for block in parse_lsblk_json(output):
        record = record_from_lsblk(block)
        if record is None:
            logger.debug("Skipping lsblk entry", entry=block)
            continue
        records.append(record)
    return records
