from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

import restic_setup.cli.app as app_module
from restic_setup import __version__
from restic_setup.core.errors import ErrorCode
from restic_setup.core.result import Err, Ok, Result
from restic_setup.output.console import ConsoleProtocol
from restic_setup.platform.detection import Arch, Platform, PlatformInfo, UnsupportedPlatform
from restic_setup.services.setup import SetupService
from restic_setup.test.archives import bz2_bytes, tar_gz_bytes
from restic_setup.tools.http import MockHttpClient

RESTIC_LATEST = "https://api.github.com/repos/restic/restic/releases/latest"
RESTICPROFILE_LATEST = "https://api.github.com/repos/creativeprojects/resticprofile/releases/latest"
RESTIC_URL = (
    "https://github.com/restic/restic/releases/download/v0.18.1/restic_0.18.1_linux_amd64.bz2"
)
RESTICPROFILE_URL = (
    "https://github.com/creativeprojects/resticprofile/releases/download/"
    "v0.32.0/resticprofile_0.32.0_linux_amd64.tar.gz"
)

# Keep Rich from wrapping long error lines.
runner = CliRunner(env={"COLUMNS": "200"})


def _linux_amd64() -> Result[PlatformInfo, UnsupportedPlatform]:
    return Ok(PlatformInfo(platform=Platform.LINUX, arch=Arch.AMD64))


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> MockHttpClient:
    http = MockHttpClient()
    http.set_json(RESTIC_LATEST, {"tag_name": "v0.18.1"})
    http.set_json(RESTICPROFILE_LATEST, {"tag_name": "v0.32.0"})
    http.set_download(RESTIC_URL, bz2_bytes(b"restic"))
    http.set_download(RESTICPROFILE_URL, tar_gz_bytes({"resticprofile": b"resticprofile"}))

    work_root = tmp_path / "work"
    work_root.mkdir()

    def fake_build_service(console: ConsoleProtocol) -> SetupService:
        return SetupService(
            http=http, console=console, detector=_linux_amd64, work_root=work_root
        )

    monkeypatch.setattr(app_module, "build_service", fake_build_service)
    for name in (
        "INPUT_INSTALL-RESTIC",
        "INPUT_RESTIC-VERSION",
        "INPUT_RESTICPROFILE-VERSION",
        "INPUT_PATH",
        "GITHUB_OUTPUT",
    ):
        monkeypatch.delenv(name, raising=False)
    return http


def test_version_flag() -> None:
    result = runner.invoke(app_module.app, ["--version"])

    assert result.exit_code == 0
    assert result.output.strip() == __version__


def test_install_both_with_flags(client: MockHttpClient, tmp_path: Path) -> None:
    bin_dir = tmp_path / "bin"
    output_file = tmp_path / "github_output"

    result = runner.invoke(
        app_module.app,
        ["install", "--path", str(bin_dir), "--restic-version", "0.18.1"],
        env={"GITHUB_OUTPUT": str(output_file)},
    )

    assert result.exit_code == 0, result.output
    assert (bin_dir / "restic").read_bytes() == b"restic"
    assert (bin_dir / "resticprofile").read_bytes() == b"resticprofile"
    assert client.calls_of("get_json") == [RESTICPROFILE_LATEST]
    assert output_file.read_text(encoding="utf-8") == (
        "restic-installed=true\nresticprofile-installed=true\n"
    )


def test_action_inputs_from_environment(client: MockHttpClient, tmp_path: Path) -> None:
    bin_dir = tmp_path / "bin"
    output_file = tmp_path / "github_output"

    result = runner.invoke(
        app_module.app,
        ["install"],
        env={
            "INPUT_INSTALL-RESTIC": "false",
            "INPUT_RESTICPROFILE-VERSION": "v0.32.0",
            "INPUT_PATH": str(bin_dir),
            "GITHUB_OUTPUT": str(output_file),
        },
    )

    assert result.exit_code == 0, result.output
    assert not (bin_dir / "restic").exists()
    assert (bin_dir / "resticprofile").exists()
    assert client.calls_of("get_json") == []
    assert "restic-installed=false" in output_file.read_text(encoding="utf-8")


def test_config_file_defaults_are_overridden_by_flags(
    client: MockHttpClient, tmp_path: Path
) -> None:
    bin_dir = tmp_path / "bin"
    config = tmp_path / "setup.toml"
    config.write_text(
        f'install_path = "{tmp_path / "ignored"}"\n\n[restic]\ninstall = false\n',
        encoding="utf-8",
    )

    result = runner.invoke(
        app_module.app,
        ["install", "--config", str(config), "--path", str(bin_dir)],
    )

    assert result.exit_code == 0, result.output
    assert (bin_dir / "resticprofile").exists()
    assert not (bin_dir / "restic").exists()
    assert not (tmp_path / "ignored").exists()


def test_missing_config_file_is_user_error(client: MockHttpClient, tmp_path: Path) -> None:
    result = runner.invoke(
        app_module.app,
        ["install", "--config", str(tmp_path / "nope.toml")],
    )

    assert result.exit_code == int(ErrorCode.USER_ERROR)
    assert "Config file not found" in result.output
    assert client.calls == []


def test_metadata_failure_exits_with_network_error(
    client: MockHttpClient, tmp_path: Path
) -> None:
    client.set_json(RESTICPROFILE_LATEST, {"name": "no tag here"})
    output_file = tmp_path / "github_output"

    result = runner.invoke(
        app_module.app,
        ["install", "--path", str(tmp_path / "bin"), "--no-install-restic"],
        env={"GITHUB_OUTPUT": str(output_file)},
    )

    assert result.exit_code == int(ErrorCode.NETWORK_ERROR)
    assert "No tag_name found" in result.output
    assert not output_file.exists()


def test_unsupported_platform_exits_with_env_error(
    client: MockHttpClient, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    def fake_build_service(console: ConsoleProtocol) -> SetupService:
        return SetupService(
            http=client,
            console=console,
            detector=lambda: Err(UnsupportedPlatform(kind="architecture", value="riscv64")),
        )

    monkeypatch.setattr(app_module, "build_service", fake_build_service)

    result = runner.invoke(app_module.app, ["install", "--path", str(tmp_path / "bin")])

    assert result.exit_code == int(ErrorCode.ENV_ERROR)
    assert "Unsupported architecture: riscv64" in result.output
    assert client.calls == []
