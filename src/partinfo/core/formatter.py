"""
partinfo output formatting.

Renders filtered entries as aligned columns or tab-separated rows.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

import humanize
from rich.cells import cell_len

from partinfo.core.models import DriveEntry, PartitionEntry
from partinfo.core.naming import DEV_PREFIX

if TYPE_CHECKING:
    from partinfo.core.config import ListingConfig

Column = tuple[str, Callable[[Any], str]]


def format_size(size_bytes: int) -> str:
    """Human-readable size in the lsblk style, e.g. ``465.8G``."""
    return humanize.naturalsize(size_bytes, gnu=True)


def format_flag(value: bool | None) -> str:
    if value is None:
        return "?"
    return "1" if value else "0"


def quote_labels(labels: Sequence[str]) -> str:
    return " ".join(f'"{label}"' for label in labels)


PARTITION_COLUMNS: list[Column] = [
    ("NAME", lambda e: e.name),
    ("SIZE", lambda e: format_size(e.size_bytes)),
    ("FSTYPE", lambda e: e.fstype),
    ("LABEL", lambda e: e.label),
]

PARTITION_FULL_COLUMNS: list[Column] = [
    ("NAME", lambda e: e.name),
    ("SIZE", lambda e: format_size(e.size_bytes)),
    ("FSTYPE", lambda e: e.fstype),
    ("ROLE", lambda e: e.role.value),
    ("UUID", lambda e: e.uuid),
    ("LABEL", lambda e: e.label),
]

DRIVE_COLUMNS: list[Column] = [
    ("NAME", lambda e: e.name),
    ("SIZE", lambda e: format_size(e.size_bytes)),
    ("MODEL", lambda e: e.model),
]

DRIVE_FULL_COLUMNS: list[Column] = [
    ("NAME", lambda e: e.name),
    ("SIZE", lambda e: format_size(e.size_bytes)),
    ("ROTA", lambda e: format_flag(e.rotational)),
    ("RM", lambda e: format_flag(e.removable)),
    ("PARTS", lambda e: str(e.partition_count)),
    ("MODEL", lambda e: e.model),
    ("LABELS", lambda e: quote_labels(e.labels)),
]


def columns_for(
    entries: Sequence[PartitionEntry | DriveEntry], config: ListingConfig, drives: bool | None = None
) -> list[Column]:
    """Pick the column set for the entry type and field mode."""
    if drives is None:
        drives = bool(entries) and isinstance(entries[0], DriveEntry)
    if drives:
        return DRIVE_FULL_COLUMNS if config.full_fields else DRIVE_COLUMNS
    return PARTITION_FULL_COLUMNS if config.full_fields else PARTITION_COLUMNS


def build_rows(
    entries: Sequence[PartitionEntry | DriveEntry],
    columns: Sequence[Column],
    config: ListingConfig,
) -> list[list[str]]:
    rows = []
    for entry in entries:
        row = [getter(entry) for _, getter in columns]
        if config.dev_prefixed:
            row[0] = DEV_PREFIX + row[0]
        rows.append(row)
    return rows


def align(rows: Sequence[Sequence[str]]) -> list[str]:
    """Pad every column but the last to its widest printed value."""
    if not rows:
        return []
    widths = [max(cell_len(row[i]) for row in rows) for i in range(len(rows[0]))]

    lines = []
    for row in rows:
        cells = [
            value + " " * (widths[i] - cell_len(value)) for i, value in enumerate(row[:-1])
        ]
        cells.append(row[-1])
        lines.append(" ".join(cells))
    return lines


def render(
    entries: Sequence[PartitionEntry | DriveEntry],
    config: ListingConfig,
    drives: bool | None = None,
) -> str:
    """
    Render entries as text.

    ``drives`` selects the drive layout; by default it follows the entry
    type, which only matters for an empty listing with a header.
    """
    columns = columns_for(entries, config, drives)
    rows = build_rows(entries, columns, config)
    if config.show_header:
        rows.insert(0, [title for title, _ in columns])

    if config.tab_delimited:
        lines = ["\t".join(row) for row in rows]
    else:
        lines = align(rows)
    return "\n".join(lines)


def render_json(entries: Sequence[PartitionEntry | DriveEntry]) -> str:
    """Render entries as a JSON array."""
    return json.dumps([entry.to_dict() for entry in entries], indent=2, default=str)
