"""Release asset location.

Pure functions from (tool, tag, platform) to the asset URL and file name,
plus the static ArchiveKind -> extraction strategy table.

Asset naming, identical for both tools:

    {repo}_{bare_version}_{os}_{arch}.{suffix}

e.g. ``restic_0.18.1_linux_amd64.bz2`` under tag ``v0.18.1``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from restic_setup.tools.base import ArchiveKind, ToolIdentity
from restic_setup.tools.extract import ArchiveExtractor, Bz2Extractor, TarGzExtractor
from restic_setup.tools.github import release_asset_url
from restic_setup.tools.resolver import VERSION_PREFIX

if TYPE_CHECKING:
    from restic_setup.output.console import ConsoleProtocol
    from restic_setup.platform.detection import PlatformInfo

__all__ = [
    "DownloadDescriptor",
    "asset_name",
    "bare_version",
    "extractor_for",
    "locate",
]


@dataclass(frozen=True, slots=True)
class DownloadDescriptor:
    """Where to fetch a release asset and what to call it locally.

    Attributes:
        url: Full download URL
        file_name: Asset file name (last URL segment)
    """

    url: str
    file_name: str


def bare_version(tag: str) -> str:
    """Strip one leading version marker: "v0.18.1" -> "0.18.1"."""
    return tag.removeprefix(VERSION_PREFIX)


def asset_name(identity: ToolIdentity, tag: str, platform: PlatformInfo) -> str:
    """Release asset file name for this tool, tag and platform."""
    return (
        f"{identity.repo}_{bare_version(tag)}_{platform.platform}_{platform.arch}"
        f".{identity.archive_kind.suffix}"
    )


def locate(identity: ToolIdentity, tag: str, platform: PlatformInfo) -> DownloadDescriptor:
    """Build the download descriptor of a release asset.

    Args:
        identity: Tool to download
        tag: Resolved release tag, with leading "v"
        platform: Target platform/arch

    Returns:
        DownloadDescriptor with URL and asset file name
    """
    name = asset_name(identity, tag, platform)
    url = release_asset_url(identity.owner, identity.repo, tag, name)
    return DownloadDescriptor(url=url, file_name=name)


def extractor_for(identity: ToolIdentity, console: ConsoleProtocol) -> ArchiveExtractor:
    """Extraction strategy for a tool, chosen by its ArchiveKind."""
    match identity.archive_kind:
        case ArchiveKind.BZIP2:
            return Bz2Extractor(console)
        case ArchiveKind.TAR_GZ:
            return TarGzExtractor(console)
