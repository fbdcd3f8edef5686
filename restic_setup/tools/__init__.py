"""Binary-acquisition pipeline.

This package provides:
- Tool identities and archive kinds (base.py)
- Failure values (errors.py)
- HTTP client for metadata and downloads (http.py)
- GitHub Releases URL shapes (github.py)
- Version resolution (resolver.py)
- Asset location and extractor selection (locator.py)
- Download, extraction and installation (download.py, extract.py, installer.py)
"""

from restic_setup.tools.base import RESTIC, RESTICPROFILE, ArchiveKind, ToolIdentity
from restic_setup.tools.download import Fetcher
from restic_setup.tools.errors import (
    DownloadError,
    ExtractionError,
    InstallError,
    MalformedMetadata,
    MetadataFetchError,
    SetupError,
    UnsupportedPlatform,
)
from restic_setup.tools.extract import ArchiveExtractor, Bz2Extractor, TarGzExtractor
from restic_setup.tools.http import HttpClient, HttpError, MockHttpClient, RealHttpClient
from restic_setup.tools.installer import Installer
from restic_setup.tools.locator import DownloadDescriptor, extractor_for, locate
from restic_setup.tools.resolver import VersionResolver, normalize_tag

__all__ = [
    # Identities
    "ArchiveKind",
    "ToolIdentity",
    "RESTIC",
    "RESTICPROFILE",
    # Errors
    "DownloadError",
    "ExtractionError",
    "InstallError",
    "MalformedMetadata",
    "MetadataFetchError",
    "SetupError",
    "UnsupportedPlatform",
    # HTTP
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
    # Pipeline
    "VersionResolver",
    "normalize_tag",
    "DownloadDescriptor",
    "locate",
    "extractor_for",
    "Fetcher",
    "ArchiveExtractor",
    "Bz2Extractor",
    "TarGzExtractor",
    "Installer",
]
