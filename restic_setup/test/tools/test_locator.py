"""Tests for restic_setup.tools.locator."""

from __future__ import annotations

import re

import pytest

from restic_setup.output.console import MockConsole
from restic_setup.platform.detection import Arch, Platform, PlatformInfo
from restic_setup.tools.base import RESTIC, RESTICPROFILE, ToolIdentity
from restic_setup.tools.extract import Bz2Extractor, TarGzExtractor
from restic_setup.tools.locator import (
    DownloadDescriptor,
    asset_name,
    bare_version,
    extractor_for,
    locate,
)

LINUX_AMD64 = PlatformInfo(platform=Platform.LINUX, arch=Arch.AMD64)

ALL_PLATFORMS = [PlatformInfo(platform=p, arch=a) for p in Platform for a in Arch]

URL_SHAPE = re.compile(
    r"^https://github\.com/(?P<owner>[^/]+)/(?P<repo>[^/]+)/releases/download/"
    r"(?P<tag>v[^/]+)/(?P=repo)_(?P<bare>[^_/]+)_(?P<os>linux|darwin|windows)_"
    r"(?P<arch>amd64|arm64|386)\.(?P<ext>bz2|tar\.gz)$"
)


class TestBareVersion:
    def test_strips_one_marker(self) -> None:
        assert bare_version("v0.18.1") == "0.18.1"
        assert bare_version("vv1") == "v1"

    def test_without_marker_unchanged(self) -> None:
        assert bare_version("0.18.1") == "0.18.1"


class TestLocate:
    def test_restic_linux_amd64(self) -> None:
        descriptor = locate(RESTIC, "v0.18.1", LINUX_AMD64)

        assert descriptor == DownloadDescriptor(
            url=(
                "https://github.com/restic/restic/releases/download/"
                "v0.18.1/restic_0.18.1_linux_amd64.bz2"
            ),
            file_name="restic_0.18.1_linux_amd64.bz2",
        )

    def test_resticprofile_darwin_arm64(self) -> None:
        descriptor = locate(
            RESTICPROFILE, "v0.32.0", PlatformInfo(platform=Platform.DARWIN, arch=Arch.ARM64)
        )

        assert descriptor.url == (
            "https://github.com/creativeprojects/resticprofile/releases/download/"
            "v0.32.0/resticprofile_0.32.0_darwin_arm64.tar.gz"
        )
        assert descriptor.file_name == "resticprofile_0.32.0_darwin_arm64.tar.gz"

    def test_windows_386(self) -> None:
        windows_386 = PlatformInfo(platform=Platform.WINDOWS, arch=Arch.I386)
        name = asset_name(RESTIC, "v0.17.3", windows_386)
        assert name == "restic_0.17.3_windows_386.bz2"

    @pytest.mark.parametrize("platform", ALL_PLATFORMS, ids=str)
    @pytest.mark.parametrize("tool", [RESTIC, RESTICPROFILE], ids=str)
    def test_url_shape_for_every_platform(
        self, tool: ToolIdentity, platform: PlatformInfo
    ) -> None:
        descriptor = locate(tool, "v1.2.3", platform)

        match = URL_SHAPE.match(descriptor.url)
        assert match is not None, descriptor.url
        assert match["owner"] == tool.owner
        assert match["repo"] == tool.repo
        assert match["tag"] == "v1.2.3"
        assert match["bare"] == "1.2.3"
        assert match["os"] == str(platform.platform)
        assert match["arch"] == str(platform.arch)
        assert match["ext"] == tool.archive_kind.suffix
        assert descriptor.url.endswith("/" + descriptor.file_name)

    def test_distinct_tools_never_share_a_descriptor(self) -> None:
        restic = locate(RESTIC, "v1.0.0", LINUX_AMD64)
        assert restic != locate(RESTICPROFILE, "v1.0.0", LINUX_AMD64)


class TestExtractorFor:
    def test_restic_uses_bz2(self) -> None:
        assert isinstance(extractor_for(RESTIC, MockConsole()), Bz2Extractor)

    def test_resticprofile_uses_tarball(self) -> None:
        assert isinstance(extractor_for(RESTICPROFILE, MockConsole()), TarGzExtractor)
