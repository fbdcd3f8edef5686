"""Release asset download.

The Fetcher writes to exactly the path it is given; naming and the working
directory are the caller's business. There is no cache and no retry.
"""

from __future__ import annotations

import contextlib
from pathlib import Path
from typing import TYPE_CHECKING

from restic_setup.core.result import Err, Ok, Result
from restic_setup.tools.errors import DownloadError

if TYPE_CHECKING:
    from restic_setup.output.console import ConsoleProtocol
    from restic_setup.tools.http import HttpClient

__all__ = ["Fetcher"]


class Fetcher:
    """Download a URL to a local path.

    Usage:
        fetcher = Fetcher(http, console)
        result = fetcher.fetch(url, work_dir / descriptor.file_name)
    """

    def __init__(self, http: HttpClient, console: ConsoleProtocol) -> None:
        self._http = http
        self._console = console

    def fetch(self, url: str, dest: Path) -> Result[Path, DownloadError]:
        """Download ``url`` to ``dest``.

        Args:
            url: URL to download
            dest: Destination file; parent directories are created

        Returns:
            Ok with ``dest``, or Err(DownloadError) carrying the URL
        """
        self._console.info(f"Downloading from {url} to {dest}")

        result = self._http.download(url, dest)
        if isinstance(result, Err):
            # Clean up partial download
            with contextlib.suppress(OSError):
                dest.unlink(missing_ok=True)
            return Err(DownloadError(url=url, cause=result.error.cause))

        self._console.info(f"Downloaded to {result.value}")
        return Ok(result.value)
