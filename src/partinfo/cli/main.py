"""
partinfo CLI Main Entry Point.

Parses options into a ListingConfig, runs one listing or query against
the block device inventory and maps the outcome to an exit status.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from partinfo import __version__
from partinfo.core.classify import is_esp, is_linux_partition
from partinfo.core.config import EXCLUSION_KEYWORDS, ListingConfig, PartinfoSettings
from partinfo.core.engine import DeviceFilter, ListMode
from partinfo.core.exceptions import DeviceNotFoundError, PartinfoError
from partinfo.core.formatter import render, render_json
from partinfo.core.logging import get_logger, setup_logging
from partinfo.core.naming import DEV_PREFIX, decompose, strip_dev_prefix
from partinfo.platform import InventorySource, get_inventory_source

logger = get_logger(__name__)
err_console = Console(stderr=True)

EXIT_OK = 0
EXIT_NO = 1
EXIT_ERROR = 2

QUERY_COMMANDS = ("is-linux", "split-device", "find-esp")
LIST_MODES = {
    "all": ListMode.PARTITIONS,
    "drives": ListMode.DRIVES,
    "swap": ListMode.SWAP,
}


def split_command(command: str) -> tuple[str, str | None]:
    """Split ``name=device`` query commands; anything else is returned as is."""
    name, sep, value = command.partition("=")
    if sep and name in QUERY_COMMANDS:
        value = strip_dev_prefix(value)
        if not value:
            raise click.UsageError(f"{name} needs a device, e.g. {name}=sda")
        return name, value
    return command, None


def require_device(source: InventorySource, device: str) -> None:
    if not source.device_exists(device):
        raise DeviceNotFoundError(device, "not a block device")


def list_entries(
    source: InventorySource,
    listing: ListingConfig,
    mode: ListMode,
    json_output: bool,
    drive: str | None = None,
) -> int:
    """List partitions (of one drive or all), drives or swap partitions."""
    if drive is not None:
        require_device(source, drive)

    records = source.list_devices(major_numbers=listing.major_numbers, parent=drive)
    entries = DeviceFilter(listing, source).filter(records, mode)

    if json_output:
        click.echo(render_json(entries))
    else:
        text = render(entries, listing, drives=mode is ListMode.DRIVES)
        if text:
            click.echo(text)
    return EXIT_OK


def query_is_linux(source: InventorySource, device: str) -> int:
    """Exit status 0 when ``device`` is a Linux partition, 1 when it is not."""
    require_device(source, device)
    for record in source.list_devices(parent=device):
        if record.name == device and record.is_partition:
            return EXIT_OK if is_linux_partition(record.parttype, record.fstype) else EXIT_NO
    raise DeviceNotFoundError(device, "not a partition")


def query_split_device(device: str) -> int:
    """Print ``root [number]``; exit status 1 when there is no partition number."""
    name = decompose(device)
    click.echo(str(name))
    return EXIT_OK if name.is_partition else EXIT_NO


def query_find_esp(source: InventorySource, listing: ListingConfig, device: str) -> int:
    """Print the EFI system partitions on the drive holding ``device``."""
    drive = decompose(device).root
    require_device(source, drive)

    found = [
        record.name
        for record in source.list_devices(parent=drive)
        if record.is_partition and is_esp(record.parttype)
    ]
    for name in found:
        click.echo(DEV_PREFIX + name if listing.dev_prefixed else name)
    return EXIT_OK if found else EXIT_NO


def run(
    command: str,
    listing: ListingConfig,
    source: InventorySource,
    json_output: bool = False,
) -> int:
    """Dispatch one command and return its exit status."""
    name, device = split_command(command)

    if name == "split-device":
        return query_split_device(device or "")
    if name == "is-linux":
        return query_is_linux(source, device or "")
    if name == "find-esp":
        return query_find_esp(source, listing, device or "")
    if name in LIST_MODES:
        return list_entries(source, listing, LIST_MODES[name], json_output)
    return list_entries(
        source, listing, ListMode.PARTITIONS, json_output, drive=strip_dev_prefix(name)
    )


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="partinfo")
@click.option("-d", "--dev-output", is_flag=True, help="Prefix device names with /dev/")
@click.option(
    "-e",
    "--exclude",
    metavar="LIST",
    help=f"Exclude partition classes ({', '.join(EXCLUSION_KEYWORDS)}); default: boot",
)
@click.option("-f", "--full", is_flag=True, help="Show all fields")
@click.option(
    "-m",
    "--min-size",
    type=click.IntRange(min=0),
    metavar="N",
    help="Only show devices larger than N megabytes",
)
@click.option("-M", "--major-num", metavar="LIST", help="Only consider these major device numbers")
@click.option("-n", "--noheadings", is_flag=True, help="Don't print a header line")
@click.option(
    "--simplify/--raw",
    "-s/-r",
    default=False,
    help="Simplify filesystem names (ntfs-3g, vfat, hfsplus) or show them raw",
)
@click.option("-t", "--tabs", is_flag=True, help="Separate fields with tabs")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to settings file",
)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.argument("command")
@click.pass_context
def cli(
    ctx: click.Context,
    dev_output: bool,
    exclude: str | None,
    full: bool,
    min_size: int | None,
    major_num: str | None,
    noheadings: bool,
    simplify: bool,
    tabs: bool,
    json_output: bool,
    config_path: Path | None,
    debug: bool,
    command: str,
) -> None:
    """
    Report drives and partitions useful to an installer.

    COMMAND is a drive name (list its partitions), "all", "drives",
    "swap", is-linux=DEV, split-device=DEV or find-esp=DEV.
    """
    try:
        settings = PartinfoSettings.load(config_path)
        log_config = settings.logging
        if debug:
            log_config = log_config.model_copy(update={"level": "DEBUG"})
        setup_logging(log_config, force=True)

        listing = ListingConfig.from_options(
            settings=settings,
            exclude=exclude,
            major_numbers=major_num,
            min_size_mb=min_size,
            show_header=not noheadings,
            tab_delimited=tabs,
            dev_prefixed=dev_output,
            full_fields=full,
            simplify_fs_names=simplify,
        )
        logger.debug("Listing configuration", config=listing.model_dump(mode="json"))

        status = run(command, listing, get_inventory_source(), json_output)
    except PartinfoError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]", soft_wrap=True)
        status = EXIT_ERROR

    ctx.exit(status)


def main() -> None:
    """Main entry point."""
    try:
        cli()
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Operation cancelled[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    main()
