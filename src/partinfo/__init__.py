"""
partinfo - Drive and partition reporting for OS installers.

Lists the drives and partitions an installer can use, with swap, EFI and
reserved regions, extended boot records and the live-boot medium
filtered out on request.
"""

__version__ = "1.0.0"

from partinfo.core.config import ListingConfig, PartinfoSettings

__all__ = ["ListingConfig", "PartinfoSettings", "__version__"]
