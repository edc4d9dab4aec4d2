"""
Tests for partinfo.core.config module.
"""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from partinfo.core.config import (
    DEFAULT_MAJOR_NUMBERS,
    ListingConfig,
    LoggingConfig,
    PartinfoSettings,
    parse_exclusions,
    parse_major_numbers,
    read_live_boot_uuid,
)
from partinfo.core.exceptions import ConfigurationError


class TestParseMajorNumbers:
    """Tests for parse_major_numbers."""

    def test_comma_list(self) -> None:
        assert parse_major_numbers("8,179") == frozenset({8, 179})

    def test_whitespace_list(self) -> None:
        assert parse_major_numbers(" 8 179, 259 ") == frozenset({8, 179, 259})

    def test_iterable(self) -> None:
        assert parse_major_numbers([3, "8"]) == frozenset({3, 8})

    @pytest.mark.parametrize("value", ["0", "8,-1", "eight", "8,x", "", [True], None])
    def test_invalid(self, value: object) -> None:
        with pytest.raises(ValueError):
            parse_major_numbers(value)


class TestParseExclusions:
    """Tests for parse_exclusions."""

    def test_single(self) -> None:
        assert parse_exclusions("swap") == {
            "exclude_boot": False,
            "exclude_efi": False,
            "exclude_swap": True,
        }

    def test_all(self) -> None:
        assert all(parse_exclusions("all").values())

    def test_none_clears(self) -> None:
        assert not any(parse_exclusions("all,none").values())

    def test_mixed_case_and_separators(self) -> None:
        flags = parse_exclusions("Boot, EFI")
        assert flags["exclude_boot"] is True
        assert flags["exclude_efi"] is True
        assert flags["exclude_swap"] is False

    def test_unknown_keyword(self) -> None:
        with pytest.raises(ConfigurationError, match="home"):
            parse_exclusions("swap,home")


class TestReadLiveBootUuid:
    """Tests for read_live_boot_uuid."""

    def test_reads_assignment(self, tmp_path: Path) -> None:
        descriptor = tmp_path / "initrd.out"
        descriptor.write_text("BOOT_DEV=/dev/sdb1\nBOOT_UUID='ABCD-1234'\nSQFILE=x\n")
        assert read_live_boot_uuid(descriptor) == "ABCD-1234"

    def test_unquoted(self, tmp_path: Path) -> None:
        descriptor = tmp_path / "initrd.out"
        descriptor.write_text("BOOT_UUID=ABCD\n")
        assert read_live_boot_uuid(descriptor) == "ABCD"

    def test_missing_file(self, tmp_path: Path) -> None:
        assert read_live_boot_uuid(tmp_path / "missing") is None

    def test_no_assignment(self, tmp_path: Path) -> None:
        descriptor = tmp_path / "initrd.out"
        descriptor.write_text("BOOT_DEV=/dev/sdb1\nBOOT_UUID=\n")
        assert read_live_boot_uuid(descriptor) is None


class TestListingConfig:
    """Tests for ListingConfig."""

    def test_default_values(self) -> None:
        config = ListingConfig()
        assert config.major_numbers == frozenset(DEFAULT_MAJOR_NUMBERS)
        assert config.exclude_boot is True
        assert config.exclude_efi is False
        assert config.exclude_swap is False
        assert config.min_size_mb is None
        assert config.show_header is True
        assert config.simplify_fs_names is False

    def test_frozen(self) -> None:
        config = ListingConfig()
        with pytest.raises(ValidationError):
            config.exclude_swap = True

    def test_invalid_major_numbers(self) -> None:
        with pytest.raises(ValidationError):
            ListingConfig(major_numbers="8,0")

    def test_negative_min_size(self) -> None:
        with pytest.raises(ValidationError):
            ListingConfig(min_size_mb=-1)


class TestListingConfigFromOptions:
    """Tests for ListingConfig.from_options."""

    def test_defaults_exclude_boot(self, tmp_path: Path) -> None:
        descriptor = tmp_path / "initrd.out"
        descriptor.write_text("BOOT_UUID=ABCD\n")
        settings = PartinfoSettings(live_boot_file=descriptor)

        config = ListingConfig.from_options(settings=settings)

        assert config.exclude_boot is True
        assert config.live_boot_uuid == "ABCD"

    def test_boot_uuid_only_when_excluding_boot(self, tmp_path: Path) -> None:
        descriptor = tmp_path / "initrd.out"
        descriptor.write_text("BOOT_UUID=ABCD\n")
        settings = PartinfoSettings(live_boot_file=descriptor)

        config = ListingConfig.from_options(settings=settings, exclude="swap")

        assert config.exclude_boot is False
        assert config.exclude_swap is True
        assert config.live_boot_uuid is None

    def test_major_numbers_option(self, tmp_path: Path) -> None:
        settings = PartinfoSettings(live_boot_file=tmp_path / "missing")
        config = ListingConfig.from_options(settings=settings, major_numbers="8")
        assert config.major_numbers == frozenset({8})

    def test_invalid_major_numbers(self, tmp_path: Path) -> None:
        settings = PartinfoSettings(live_boot_file=tmp_path / "missing")
        with pytest.raises(ConfigurationError, match="major_numbers"):
            ListingConfig.from_options(settings=settings, major_numbers="8,zero")

    def test_invalid_exclusion(self, tmp_path: Path) -> None:
        settings = PartinfoSettings(live_boot_file=tmp_path / "missing")
        with pytest.raises(ConfigurationError):
            ListingConfig.from_options(settings=settings, exclude="everything")

    def test_presentation_flags(self, tmp_path: Path) -> None:
        settings = PartinfoSettings(live_boot_file=tmp_path / "missing")
        config = ListingConfig.from_options(
            settings=settings,
            show_header=False,
            tab_delimited=True,
            dev_prefixed=True,
            full_fields=True,
            simplify_fs_names=True,
        )
        assert config.show_header is False
        assert config.tab_delimited is True
        assert config.dev_prefixed is True
        assert config.full_fields is True
        assert config.simplify_fs_names is True


class TestPartinfoSettings:
    """Tests for PartinfoSettings."""

    def test_default_values(self) -> None:
        settings = PartinfoSettings()
        assert isinstance(settings.logging, LoggingConfig)
        assert settings.logging.level == "WARNING"
        assert settings.live_boot_file == Path("/live/config/initrd.out")

    def test_load_nonexistent(self, tmp_path: Path) -> None:
        settings = PartinfoSettings.load(tmp_path / "nonexistent.json")
        assert settings.default_major_numbers == frozenset(DEFAULT_MAJOR_NUMBERS)

    def test_load_file(self, tmp_path: Path) -> None:
        config_path = tmp_path / "config.json"
        config_path.write_text(
            json.dumps(
                {
                    "logging": {"level": "DEBUG"},
                    "live_boot_file": str(tmp_path / "initrd.out"),
                    "default_major_numbers": "8,179",
                }
            )
        )

        settings = PartinfoSettings.load(config_path)

        assert settings.logging.level == "DEBUG"
        assert settings.live_boot_file == tmp_path / "initrd.out"
        assert settings.default_major_numbers == frozenset({8, 179})

    def test_load_invalid_file(self, tmp_path: Path) -> None:
        config_path = tmp_path / "config.json"
        config_path.write_text("{not json")
        with pytest.raises(ConfigurationError):
            PartinfoSettings.load(config_path)

    def test_log_directory_expansion(self) -> None:
        config = LoggingConfig(log_directory="~/logs")
        assert "~" not in str(config.log_directory)
