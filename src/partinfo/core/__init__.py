"""
partinfo Core - Classification, filtering and formatting.

Contains the device-name and partition-type rules, the configuration
model, the filtering engine and the output formatter.
"""

from partinfo.core.classify import classify_partition_type, normalize_fs_name
from partinfo.core.config import ListingConfig, PartinfoSettings
from partinfo.core.engine import DeviceFilter, ListMode
from partinfo.core.exceptions import (
    ConfigurationError,
    DeviceNotFoundError,
    InventoryUnavailable,
    PartinfoError,
)
from partinfo.core.formatter import render
from partinfo.core.logging import get_logger, setup_logging
from partinfo.core.naming import decompose

__all__ = [
    "ConfigurationError",
    "DeviceFilter",
    "DeviceNotFoundError",
    "InventoryUnavailable",
    "ListMode",
    "ListingConfig",
    "PartinfoError",
    "PartinfoSettings",
    "classify_partition_type",
    "decompose",
    "get_logger",
    "normalize_fs_name",
    "render",
    "setup_logging",
]
