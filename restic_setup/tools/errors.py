"""Failure values of the binary-acquisition pipeline.

Each step returns one of these inside ``Err``. They all expose ``message``
(used for console output and the final failure line) and keep the URL or
path involved so a failed run can be diagnosed from the log alone.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from restic_setup.platform.detection import UnsupportedPlatform

__all__ = [
    "UnsupportedPlatform",
    "MetadataFetchError",
    "MalformedMetadata",
    "DownloadError",
    "ExtractionError",
    "InstallError",
    "ResolveError",
    "SetupError",
]


@dataclass(frozen=True, slots=True)
class MetadataFetchError:
    """The release-metadata request failed (transport, HTTP status, bad JSON)."""

    owner: str
    repo: str
    url: str
    cause: str

    @property
    def message(self) -> str:
        return f"Failed to fetch latest release for {self.owner}/{self.repo}: {self.cause}"

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class MalformedMetadata:
    """The release metadata was returned but carries no tag."""

    owner: str
    repo: str
    url: str

    @property
    def message(self) -> str:
        return f"Failed to fetch latest release for {self.owner}/{self.repo}: No tag_name found"

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class DownloadError:
    url: str
    cause: str

    @property
    def message(self) -> str:
        return f"Failed to download from {self.url}: {self.cause}"

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class ExtractionError:
    path: Path
    cause: str

    @property
    def message(self) -> str:
        return f"Failed to extract {self.path}: {self.cause}"

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class InstallError:
    final_path: Path
    cause: str

    @property
    def message(self) -> str:
        return f"Failed to install {self.final_path}: {self.cause}"

    def __str__(self) -> str:
        return self.message


ResolveError = MetadataFetchError | MalformedMetadata

SetupError = (
    UnsupportedPlatform
    | MetadataFetchError
    | MalformedMetadata
    | DownloadError
    | ExtractionError
    | InstallError
)
