"""Base definitions for the tools being installed.

This module defines:
- ArchiveKind: compression/container format of a release asset
- ToolIdentity: immutable identity of a tool on GitHub Releases
- RESTIC, RESTICPROFILE: the two tools this package installs
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "ArchiveKind",
    "ToolIdentity",
    "RESTIC",
    "RESTICPROFILE",
]


class ArchiveKind(Enum):
    """Archive format of a release asset.

    BZIP2: a single compressed executable (``restic_*.bz2``)
    TAR_GZ: a gzip tarball holding the executable (``resticprofile_*.tar.gz``)
    """

    BZIP2 = "bz2"
    TAR_GZ = "tar.gz"

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def suffix(self) -> str:
        """File extension of assets of this kind, without the leading dot."""
        return self.value


@dataclass(frozen=True, slots=True)
class ToolIdentity:
    """Immutable identity of a tool published on GitHub Releases.

    Attributes:
        owner: GitHub owner (e.g., "creativeprojects")
        repo: GitHub repository, also the asset name prefix (e.g., "resticprofile")
        binary_name: Version-free name the binary is installed under
        archive_kind: Format of every release asset of this tool
    """

    owner: str
    repo: str
    binary_name: str
    archive_kind: ArchiveKind

    def __post_init__(self) -> None:
        if not self.owner or not self.repo:
            raise ValueError("Tool owner and repo cannot be empty")
        if not self.binary_name:
            raise ValueError("Tool binary name cannot be empty")

    def __str__(self) -> str:
        return self.binary_name


RESTIC = ToolIdentity(
    owner="restic",
    repo="restic",
    binary_name="restic",
    archive_kind=ArchiveKind.BZIP2,
)

RESTICPROFILE = ToolIdentity(
    owner="creativeprojects",
    repo="resticprofile",
    binary_name="resticprofile",
    archive_kind=ArchiveKind.TAR_GZ,
)
