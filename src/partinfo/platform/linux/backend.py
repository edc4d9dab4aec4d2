"""
Linux Platform Backend Implementation.

Lists block devices with lsblk and reads size and topology from sysfs.
"""

from __future__ import annotations

import subprocess
import time
from collections.abc import Iterable, Sequence
from pathlib import Path

from partinfo.core.exceptions import InventoryUnavailable
from partinfo.core.logging import OperationLogger, get_logger
from partinfo.core.models import DeviceRecord
from partinfo.platform.base import CommandResult, InventorySource
from partinfo.platform.linux.parsers import LSBLK_COLUMNS, records_from_lsblk

logger = get_logger(__name__)


class LinuxInventory(InventorySource):
    """Linux implementation of the block device inventory."""

    # Tool paths (can be overridden for testing)
    LSBLK = "lsblk"

    def __init__(
        self,
        sys_block: Path = Path("/sys/block"),
        sys_class_block: Path = Path("/sys/class/block"),
        timeout: int = 30,
    ) -> None:
        self.sys_block = sys_block
        self.sys_class_block = sys_class_block
        self.timeout = timeout

    def run_command(
        self,
        command: list[str],
        timeout: int | None = None,
        check: bool = True,
    ) -> CommandResult:
        """Run a system command."""
        timeout = timeout or self.timeout
        logger.debug("Running command", command=command)
        start_time = time.time()

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            return CommandResult(
                returncode=-1,
                stdout="",
                stderr=f"Command timed out after {timeout}s",
                command=command,
                duration_seconds=timeout,
            )
        except OSError as e:
            return CommandResult(
                returncode=-1,
                stdout="",
                stderr=str(e),
                command=command,
                duration_seconds=time.time() - start_time,
            )

        cmd_result = CommandResult(
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
            command=command,
            duration_seconds=time.time() - start_time,
        )

        if check and result.returncode != 0:
            logger.warning(
                "Command failed",
                command=command,
                returncode=result.returncode,
                stderr=result.stderr[:500] if result.stderr else "",
            )

        return cmd_result

    def build_lsblk_command(
        self,
        fields: Sequence[str] | None = None,
        major_numbers: Iterable[int] | None = None,
        parent: str | None = None,
        include_partitions: bool = True,
    ) -> list[str]:
        """Build the lsblk invocation for a listing request."""
        command = [
            self.LSBLK,
            "--json",
            "--bytes",
            "--list",
            "--output",
            ",".join(fields or LSBLK_COLUMNS),
        ]
        if major_numbers:
            command += ["--include", ",".join(str(n) for n in sorted(major_numbers))]
        if not include_partitions:
            command.append("--nodeps")
        if parent:
            command.append(f"/dev/{parent}")
        return command

    def list_devices(
        self,
        fields: Sequence[str] | None = None,
        major_numbers: Iterable[int] | None = None,
        parent: str | None = None,
        include_partitions: bool = True,
    ) -> list[DeviceRecord]:
        """List drives and partitions using lsblk."""
        command = self.build_lsblk_command(fields, major_numbers, parent, include_partitions)

        with OperationLogger("inventory query", logger, parent=parent):
            result = self.run_command(command)
            if not result.success:
                raise InventoryUnavailable(
                    f"lsblk failed: {result.stderr.strip() or f'exit status {result.returncode}'}"
                )
            return records_from_lsblk(result.stdout)

    def read_raw_sector_count(self, device: str) -> int | None:
        """Read the 512-byte sector count from sysfs."""
        size_file = self.sys_class_block / device / "size"
        try:
            return int(size_file.read_text().strip())
        except (OSError, ValueError) as e:
            logger.debug("Sector count unavailable", device=device, error=str(e))
            return None

    def read_usb_topology(self, drive: str) -> bool:
        """Check whether the drive's sysfs device path runs through a USB bus."""
        try:
            device_path = (self.sys_block / drive).resolve(strict=True)
        except OSError:
            return False
        return any(part.startswith("usb") for part in device_path.parts)

    def device_exists(self, device: str) -> bool:
        """Check that ``device`` is a block device known to sysfs."""
        return (self.sys_class_block / device).exists()
