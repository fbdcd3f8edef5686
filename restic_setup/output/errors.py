"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from restic_setup.core.errors import ErrorCode
from restic_setup.output.console import Style
from restic_setup.tools.errors import (
    DownloadError,
    ExtractionError,
    InstallError,
    MalformedMetadata,
    MetadataFetchError,
    SetupError,
    UnsupportedPlatform,
)

if TYPE_CHECKING:
    from restic_setup.output.console import ConsoleProtocol

__all__ = ["print_setup_error", "setup_error_exit_code"]


def print_setup_error(error: SetupError, console: ConsoleProtocol) -> None:
    """Print the run's failure line plus a hint where one helps."""
    console.error(error.message)
    match error:
        case UnsupportedPlatform():
            console.print(
                "hint: releases exist for linux, darwin and windows on amd64, arm64 and 386",
                Style.DIM,
            )
        case MetadataFetchError(url=url) | MalformedMetadata(url=url):
            console.print(f"hint: pin an explicit version to skip {url}", Style.DIM)
        case DownloadError(url=url):
            console.print(f"hint: check that {url} exists for this version", Style.DIM)
        case ExtractionError() | InstallError():
            pass


def setup_error_exit_code(error: SetupError) -> int:
    """Get exit code for a setup error."""
    match error:
        case UnsupportedPlatform():
            return int(ErrorCode.ENV_ERROR)
        case MetadataFetchError() | MalformedMetadata() | DownloadError():
            return int(ErrorCode.NETWORK_ERROR)
        case ExtractionError() | InstallError():
            return int(ErrorCode.IO_ERROR)
