"""Tests for restic_setup.tools.extract."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from restic_setup.core.result import Err, Ok
from restic_setup.output.console import MockConsole
from restic_setup.test.archives import bz2_bytes, tar_gz_bytes, write
from restic_setup.tools.errors import ExtractionError
from restic_setup.tools.extract import Bz2Extractor, TarGzExtractor

BINARY = b"\x7fELF fake restic binary"


class TestBz2Extractor:
    def test_extract_in_place(self, tmp_path: Path) -> None:
        archive = write(tmp_path / "restic_0.18.1_linux_amd64.bz2", bz2_bytes(BINARY))

        result = Bz2Extractor(MockConsole()).extract_in_place(archive)

        target = tmp_path / "restic_0.18.1_linux_amd64"
        assert result == Ok(target)
        assert target.read_bytes() == BINARY
        assert not archive.exists()

    def test_extract_binary_ignores_member_name(self, tmp_path: Path) -> None:
        archive = write(tmp_path / "restic_0.18.1_darwin_arm64.bz2", bz2_bytes(BINARY))

        result = Bz2Extractor(MockConsole()).extract_binary(archive, "restic")

        assert result == Ok(tmp_path / "restic_0.18.1_darwin_arm64")

    def test_rejects_other_suffix(self, tmp_path: Path) -> None:
        archive = write(tmp_path / "resticprofile.tar.gz", tar_gz_bytes({"x": b"x"}))

        result = Bz2Extractor(MockConsole()).extract_in_place(archive)

        assert isinstance(result, Err)
        assert result.error.path == archive
        assert archive.exists()

    def test_corrupt_stream(self, tmp_path: Path) -> None:
        archive = write(tmp_path / "restic_1_linux_amd64.bz2", b"definitely not bzip2 data")

        result = Bz2Extractor(MockConsole()).extract_in_place(archive)

        assert isinstance(result, Err)
        assert isinstance(result.error, ExtractionError)
        assert result.error.message.startswith(f"Failed to extract {archive}")
        assert not (tmp_path / "restic_1_linux_amd64").exists()

    def test_truncated_stream(self, tmp_path: Path) -> None:
        data = bz2_bytes(BINARY * 100)
        archive = write(tmp_path / "restic_1_linux_amd64.bz2", data[: len(data) // 2])

        result = Bz2Extractor(MockConsole()).extract_in_place(archive)

        assert isinstance(result, Err)
        assert not (tmp_path / "restic_1_linux_amd64").exists()


class TestTarGzExtractor:
    def test_extract_all(self, tmp_path: Path) -> None:
        archive = write(
            tmp_path / "rp.tar.gz",
            tar_gz_bytes({"resticprofile": BINARY, "LICENSE": b"GPL", "docs/README.md": b"#"}),
        )
        dest = tmp_path / "out"

        result = TarGzExtractor(MockConsole()).extract_all(archive, dest)

        assert result == Ok(dest)
        assert (dest / "resticprofile").read_bytes() == BINARY
        assert (dest / "LICENSE").read_bytes() == b"GPL"
        assert (dest / "docs" / "README.md").read_bytes() == b"#"

    def test_extract_binary_returns_member_path_without_searching(self, tmp_path: Path) -> None:
        archive = write(tmp_path / "rp.tar.gz", tar_gz_bytes({"nested/resticprofile": BINARY}))

        result = TarGzExtractor(MockConsole()).extract_binary(archive, "resticprofile")

        assert result == Ok(tmp_path / "resticprofile")
        assert not (tmp_path / "resticprofile").exists()
        assert (tmp_path / "nested" / "resticprofile").exists()

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_preserves_member_mode(self, tmp_path: Path) -> None:
        archive = write(tmp_path / "rp.tar.gz", tar_gz_bytes({"resticprofile": BINARY}, mode=0o755))

        TarGzExtractor(MockConsole()).extract_all(archive, tmp_path)

        mode = (tmp_path / "resticprofile").stat().st_mode
        assert mode & stat.S_IXUSR

    def test_skips_parent_traversal(self, tmp_path: Path) -> None:
        archive = write(
            tmp_path / "work" / "rp.tar.gz",
            tar_gz_bytes({"../evil": b"x", "resticprofile": BINARY}),
        )

        result = TarGzExtractor(MockConsole()).extract_all(archive, tmp_path / "work")

        assert isinstance(result, Ok)
        assert not (tmp_path / "evil").exists()
        assert (tmp_path / "work" / "resticprofile").exists()

    def test_corrupt_archive(self, tmp_path: Path) -> None:
        archive = write(tmp_path / "rp.tar.gz", b"not a gzip stream")

        result = TarGzExtractor(MockConsole()).extract_all(archive, tmp_path / "out")

        assert isinstance(result, Err)
        assert result.error.path == archive

    def test_unwritable_destination(self, tmp_path: Path) -> None:
        archive = write(tmp_path / "rp.tar.gz", tar_gz_bytes({"resticprofile": BINARY}))
        blocker = write(tmp_path / "blocker", b"a file, not a directory")

        result = TarGzExtractor(MockConsole()).extract_all(archive, blocker)

        assert isinstance(result, Err)
        assert "IO error" in result.error.cause
