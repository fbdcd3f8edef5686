"""Archive extraction strategies.

One strategy per ArchiveKind:
- Bz2Extractor: single compressed file, decompressed in place (bunzip2 style)
- TarGzExtractor: gzip tarball, extracted into a directory

Callers never pick a strategy from file contents or names; the choice comes
from the tool's ArchiveKind (see ``restic_setup.tools.locator.extractor_for``).
"""

from __future__ import annotations

import bz2
import contextlib
import os
import shutil
import tarfile
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Protocol

from restic_setup.core.result import Err, Ok, Result
from restic_setup.tools.errors import ExtractionError

if TYPE_CHECKING:
    from restic_setup.output.console import ConsoleProtocol

__all__ = [
    "ArchiveExtractor",
    "Bz2Extractor",
    "TarGzExtractor",
]


class ArchiveExtractor(Protocol):
    """Extract the tool binary from a downloaded archive."""

    def extract_binary(
        self, archive: Path, binary_name: str
    ) -> Result[Path, ExtractionError]:
        """Extract ``archive`` and return where the binary now lives.

        Args:
            archive: Downloaded archive
            binary_name: Expected file name of the binary inside the archive
                (only meaningful for multi-member archives)
        """
        ...


class Bz2Extractor:
    """Decompress a single ``.bz2`` file next to itself.

    ``tool_1.0_linux_amd64.bz2`` becomes ``tool_1.0_linux_amd64`` and the
    archive is removed, like ``bunzip2`` does.
    """

    SUFFIX = ".bz2"

    def __init__(self, console: ConsoleProtocol) -> None:
        self._console = console

    def extract_in_place(self, path: Path) -> Result[Path, ExtractionError]:
        """Decompress ``path`` and return the path without its suffix."""
        if path.suffix != self.SUFFIX:
            return Err(ExtractionError(path=path, cause=f"not a {self.SUFFIX} file"))

        target = path.with_suffix("")
        self._console.info(f"Extracting {path}")
        try:
            with bz2.open(path, "rb") as src, open(target, "wb") as dst:
                shutil.copyfileobj(src, dst)
            path.unlink()
        except (OSError, EOFError) as e:
            # bz2 reports corrupt streams as OSError and truncated ones as EOFError
            with contextlib.suppress(OSError):
                target.unlink(missing_ok=True)
            return Err(ExtractionError(path=path, cause=str(e) or type(e).__name__))

        self._console.info(f"Extracted to {target}")
        return Ok(target)

    def extract_binary(
        self, archive: Path, binary_name: str
    ) -> Result[Path, ExtractionError]:
        return self.extract_in_place(archive)


class TarGzExtractor:
    """Extract a ``.tar.gz`` archive into a directory.

    Only regular files are written. Members with absolute paths, ``..``
    segments, or that are links/devices are skipped.
    """

    def __init__(self, console: ConsoleProtocol) -> None:
        self._console = console

    def _safe_relative_path(self, member_name: str) -> Path | None:
        """Return a sanitized relative extraction path, or None if unsafe."""
        normalized = member_name.replace("\\", "/")
        if normalized.startswith("/"):
            return None

        parts = PurePosixPath(normalized).parts
        if not parts:
            return None
        if any(part in {"", ".."} for part in parts):
            return None
        if parts[0].endswith(":"):
            return None

        kept = [part for part in parts if part != "."]
        if not kept:
            return None
        return Path(*kept)

    def _is_within_root(self, root: Path, target: Path) -> bool:
        """Check whether target resolves under root."""
        try:
            return target.resolve().is_relative_to(root)
        except OSError:
            return False

    def extract_all(self, archive: Path, dest_dir: Path) -> Result[Path, ExtractionError]:
        """Extract every regular file of ``archive`` under ``dest_dir``.

        Returns:
            Ok(dest_dir), or Err(ExtractionError)
        """
        self._console.info(f"Extracting {archive} to {dest_dir}")
        try:
            dest_dir.mkdir(parents=True, exist_ok=True)
            root = dest_dir.resolve()

            with tarfile.open(archive, "r:gz") as tar:
                for member in tar.getmembers():
                    if not member.isreg():
                        continue

                    rel_path = self._safe_relative_path(member.name)
                    if rel_path is None:
                        continue

                    full_path = dest_dir / rel_path
                    if not self._is_within_root(root, full_path):
                        continue

                    src = tar.extractfile(member)
                    if src is None:
                        continue

                    full_path.parent.mkdir(parents=True, exist_ok=True)
                    with src, open(full_path, "wb") as dst:
                        shutil.copyfileobj(src, dst)

                    mode = member.mode & 0o777
                    if mode:
                        with contextlib.suppress(OSError):
                            os.chmod(full_path, mode)

        except tarfile.TarError as e:
            return Err(ExtractionError(path=archive, cause=f"Tar extraction failed: {e}"))
        except EOFError as e:
            return Err(ExtractionError(path=archive, cause=f"Truncated archive: {e}"))
        except OSError as e:
            return Err(ExtractionError(path=archive, cause=f"IO error: {e}"))

        self._console.info(f"Extracted to {dest_dir}")
        return Ok(dest_dir)

    def extract_binary(
        self, archive: Path, binary_name: str
    ) -> Result[Path, ExtractionError]:
        result = self.extract_all(archive, archive.parent)
        if isinstance(result, Err):
            return result
        return Ok(result.value / binary_name)
