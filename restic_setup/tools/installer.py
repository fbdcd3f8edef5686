"""Binary installation.

Places an extracted binary at ``install_dir / name``:
- sets the executable bits on Unix (Windows relies on the .exe extension)
- creates ``install_dir`` and its parents if absent
- moves the binary next to its final name, then swaps it in with
  ``os.replace`` so a previous install is never left half-written
"""

from __future__ import annotations

import os
import shutil
import stat
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

from restic_setup.core.result import Err, Ok, Result
from restic_setup.tools.errors import InstallError

if TYPE_CHECKING:
    from restic_setup.output.console import ConsoleProtocol
    from restic_setup.platform.detection import Platform

__all__ = ["Installer"]

_EXEC_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


class Installer:
    """Move extracted binaries into the install directory.

    Usage:
        installer = Installer(Platform.LINUX, console)
        result = installer.install(extracted, Path("/usr/local/bin"), "restic")
    """

    def __init__(self, platform: Platform, console: ConsoleProtocol) -> None:
        self._platform = platform
        self._console = console

    def make_executable(self, path: Path) -> None:
        """chmod +x on Unix; no-op on Windows.

        Raises:
            OSError: If the mode cannot be read or changed
        """
        if not self._platform.is_unix:
            return
        self._console.info(f"Making {path} executable")
        path.chmod(path.stat().st_mode | _EXEC_BITS)

    def install(
        self,
        binary: Path,
        install_dir: Path,
        name: str,
    ) -> Result[Path, InstallError]:
        """Install ``binary`` as ``install_dir / name``.

        Args:
            binary: Extracted binary; consumed by the move
            install_dir: Target directory (created if missing)
            name: Canonical file name of the installed binary

        Returns:
            Ok with the final path, or Err(InstallError)
        """
        final_path = install_dir / name

        if not binary.is_file():
            return Err(InstallError(final_path=final_path, cause=f"binary not found at {binary}"))

        try:
            self.make_executable(binary)
            install_dir.mkdir(parents=True, exist_ok=True)

            if final_path.exists() and binary.resolve() == final_path.resolve():
                return Ok(final_path)

            self._console.info(f"Moving {binary} to {final_path}")
            self._move_into_place(binary, final_path)
        except OSError as e:
            return Err(InstallError(final_path=final_path, cause=str(e)))

        self._console.info(f"Moved to {final_path}")
        return Ok(final_path)

    def _move_into_place(self, binary: Path, final_path: Path) -> None:
        """Stage ``binary`` beside ``final_path`` and swap it in atomically.

        The staging copy may cross devices and fail partway; only the rename,
        which stays on one filesystem, ever touches ``final_path``.

        Raises:
            OSError: If staging or the final rename fails
        """
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{final_path.name}.",
            suffix=".tmp",
            dir=str(final_path.parent),
        )
        os.close(fd)
        tmp_path = Path(tmp_name)

        try:
            shutil.move(binary, tmp_path)
            os.replace(tmp_path, final_path)
        finally:
            if tmp_path.exists():
                tmp_path.unlink(missing_ok=True)
