"""
Device name decomposition.

Splits a block device name such as ``sda12`` or ``mmcblk0p3`` into the
name of its root drive and its trailing partition number.
"""

from __future__ import annotations

import re
from typing import NamedTuple

DEV_PREFIX = "/dev/"

# Card-style names put a "p" between the drive number and the partition number
_CARD_NAME = re.compile(r"^(?P<root>mmcblk\d+|nvme\d+n\d+)(?:p(?P<number>\d+))?$")
_TRAILING_NUMBER = re.compile(r"^(?P<root>.*?)(?P<number>\d{1,2})$")


class DeviceName(NamedTuple):
    """A device name split into root drive and partition number."""

    root: str
    number: str | None = None

    @property
    def is_partition(self) -> bool:
        return self.number is not None

    def __str__(self) -> str:
        if self.number is None:
            return self.root
        return f"{self.root} {self.number}"


def strip_dev_prefix(name: str) -> str:
    """Return ``name`` without a leading ``/dev/``."""
    name = name.strip()
    if name.startswith(DEV_PREFIX):
        return name[len(DEV_PREFIX):]
    return name


def decompose(name: str) -> DeviceName:
    """
    Split a device name into (root, partition number).

    Never fails: a name without a recognizable partition suffix is
    returned as a root with no number.
    """
    name = strip_dev_prefix(name)

    card = _CARD_NAME.match(name)
    if card:
        return DeviceName(card.group("root"), card.group("number"))

    trailing = _TRAILING_NUMBER.match(name)
    if trailing and trailing.group("root"):
        return DeviceName(trailing.group("root"), trailing.group("number"))

    return DeviceName(name)
