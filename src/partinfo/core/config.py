"""
partinfo configuration management.

Application settings and the per-invocation listing configuration, both
validated with Pydantic.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from partinfo.core.exceptions import ConfigurationError
from partinfo.core.logging import get_logger

logger = get_logger(__name__)

# IDE, SCSI/SATA, second IDE channel, MMC, Xen, virtio, NVMe/extended
DEFAULT_MAJOR_NUMBERS: tuple[int, ...] = (3, 8, 22, 179, 202, 254, 259)
DEFAULT_LIVE_BOOT_FILE = Path("/live/config/initrd.out")
DEFAULT_CONFIG_PATH = Path.home() / ".partinfo" / "config.json"

EXCLUSION_KEYWORDS = ("boot", "efi", "swap", "all", "none")

_LIST_SEPARATOR = re.compile(r"[\s,]+")
_BOOT_UUID_LINE = re.compile(r"^\s*BOOT_UUID=(?P<value>.*)$")


def split_list(text: str) -> list[str]:
    """Split a comma and/or whitespace separated option value."""
    return [item for item in _LIST_SEPARATOR.split(text.strip()) if item]


def parse_major_numbers(value: Any) -> frozenset[int]:
    """
    Parse a major-number list.

    Accepts a separated string ("8,179") or an iterable of ints or
    digit strings. Every entry must be a positive integer.
    """
    if isinstance(value, str):
        items: Iterable[Any] = split_list(value)
    elif isinstance(value, Iterable):
        items = value
    else:
        raise ValueError(f"invalid major number list: {value!r}")

    numbers: set[int] = set()
    for item in items:
        if isinstance(item, bool):
            raise ValueError(f"invalid major number: {item!r}")
        if isinstance(item, int):
            number = item
        elif isinstance(item, str) and item.strip().isdigit():
            number = int(item)
        else:
            raise ValueError(f"invalid major number: {item!r}")
        if number <= 0:
            raise ValueError(f"major numbers must be positive: {number}")
        numbers.add(number)

    if not numbers:
        raise ValueError("major number list is empty")
    return frozenset(numbers)


def parse_exclusions(text: str) -> dict[str, bool]:
    """
    Parse an exclusion list into the three exclusion flags.

    ``all`` sets every flag, ``none`` clears the ones seen so far.
    """
    flags = {"exclude_boot": False, "exclude_efi": False, "exclude_swap": False}
    for word in split_list(text.lower()):
        if word == "all":
            flags = dict.fromkeys(flags, True)
        elif word == "none":
            flags = dict.fromkeys(flags, False)
        elif word in ("boot", "efi", "swap"):
            flags[f"exclude_{word}"] = True
        else:
            raise ConfigurationError(
                f"Unknown exclusion {word!r}; expected one of: {', '.join(EXCLUSION_KEYWORDS)}"
            )
    return flags


def read_live_boot_uuid(path: Path) -> str | None:
    """Return the BOOT_UUID assigned in a live-boot descriptor file, if any."""
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.debug("Live-boot descriptor unavailable", path=str(path), error=str(e))
        return None

    for line in text.splitlines():
        match = _BOOT_UUID_LINE.match(line)
        if match:
            value = match.group("value").strip().strip("\"'")
            return value or None
    return None


class LoggingConfig(BaseModel):
    """Configuration for structured logging."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    file_enabled: bool = False
    console_enabled: bool = True
    json_format: bool = False
    log_directory: Path = Field(default_factory=lambda: Path.home() / ".partinfo" / "logs")

    @field_validator("log_directory", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        return Path(v).expanduser().resolve()


class PartinfoSettings(BaseModel):
    """Application settings, optionally loaded from a JSON file."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    live_boot_file: Path = DEFAULT_LIVE_BOOT_FILE
    default_major_numbers: frozenset[int] = frozenset(DEFAULT_MAJOR_NUMBERS)

    @field_validator("default_major_numbers", mode="before")
    @classmethod
    def check_major_numbers(cls, v: Any) -> frozenset[int]:
        return parse_major_numbers(v)

    @classmethod
    def load(cls, config_path: Path | None = None) -> PartinfoSettings:
        """Load settings from file or fall back to defaults."""
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        if not config_path.exists():
            return cls()

        try:
            with open(config_path, encoding="utf-8") as f:
                data = json.load(f)
            return cls.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            raise ConfigurationError(f"Invalid settings file {config_path}: {e}") from e


class ListingConfig(BaseModel):
    """What to exclude and how to present it, fixed for one invocation."""

    model_config = ConfigDict(frozen=True)

    major_numbers: frozenset[int] = frozenset(DEFAULT_MAJOR_NUMBERS)
    exclude_boot: bool = True
    exclude_efi: bool = False
    exclude_swap: bool = False
    min_size_mb: int | None = Field(default=None, ge=0)
    show_header: bool = True
    tab_delimited: bool = False
    dev_prefixed: bool = False
    full_fields: bool = False
    simplify_fs_names: bool = False
    live_boot_uuid: str | None = None

    @field_validator("major_numbers", mode="before")
    @classmethod
    def check_major_numbers(cls, v: Any) -> frozenset[int]:
        return parse_major_numbers(v)

    @classmethod
    def from_options(
        cls,
        *,
        settings: PartinfoSettings | None = None,
        exclude: str | None = None,
        major_numbers: str | None = None,
        min_size_mb: int | None = None,
        show_header: bool = True,
        tab_delimited: bool = False,
        dev_prefixed: bool = False,
        full_fields: bool = False,
        simplify_fs_names: bool = False,
    ) -> ListingConfig:
        """
        Build the listing configuration from command-line option values.

        Raises ConfigurationError for any invalid value. The live-boot
        UUID is only looked up when boot exclusion is on.
        """
        settings = settings or PartinfoSettings()
        exclusions = {"exclude_boot": True, "exclude_efi": False, "exclude_swap": False}
        if exclude is not None:
            exclusions = parse_exclusions(exclude)

        live_boot_uuid = None
        if exclusions["exclude_boot"]:
            live_boot_uuid = read_live_boot_uuid(settings.live_boot_file)

        try:
            return cls(
                major_numbers=(
                    major_numbers if major_numbers is not None else settings.default_major_numbers
                ),
                min_size_mb=min_size_mb,
                show_header=show_header,
                tab_delimited=tab_delimited,
                dev_prefixed=dev_prefixed,
                full_fields=full_fields,
                simplify_fs_names=simplify_fs_names,
                live_boot_uuid=live_boot_uuid,
                **exclusions,
            )
        except ValidationError as e:
            errors = "; ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors())
            raise ConfigurationError(f"Invalid configuration: {errors}") from e
