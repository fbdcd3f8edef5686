from __future__ import annotations

import os
from pathlib import Path

import typer

from restic_setup import __version__
from restic_setup.core.config import SetupConfig, load_config
from restic_setup.core.errors import ErrorCode
from restic_setup.core.result import Err
from restic_setup.output.actions import write_outputs
from restic_setup.output.console import ConsoleProtocol, RichConsole
from restic_setup.output.errors import print_setup_error, setup_error_exit_code
from restic_setup.services.setup import SetupService, plan_from_config
from restic_setup.tools.http import RealHttpClient

# GitHub Actions exposes `with:` inputs as INPUT_<NAME> with the name uppercased.
_INPUT = "INPUT_"

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Install restic and resticprofile release binaries."""


def build_service(console: ConsoleProtocol) -> SetupService:
    token = os.environ.get("GITHUB_TOKEN") or None
    return SetupService(http=RealHttpClient(token=token), console=console)


def _load_base_config(config_path: Path | None, console: ConsoleProtocol) -> SetupConfig:
    if config_path is None:
        return SetupConfig()
    result = load_config(config_path)
    if isinstance(result, Err):
        console.error(result.error.message)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    return result.value


@app.command()
def install(
    install_restic: bool | None = typer.Option(
        None,
        "--install-restic/--no-install-restic",
        envvar=f"{_INPUT}INSTALL-RESTIC",
        help="Install restic as well as resticprofile. [default: install]",
        show_default=False,
    ),
    restic_version: str | None = typer.Option(
        None,
        "--restic-version",
        envvar=f"{_INPUT}RESTIC-VERSION",
        help='restic version: "latest" or a tag such as v0.18.1.',
    ),
    resticprofile_version: str | None = typer.Option(
        None,
        "--resticprofile-version",
        envvar=f"{_INPUT}RESTICPROFILE-VERSION",
        help='resticprofile version: "latest" or a tag such as v0.32.0.',
    ),
    path: str | None = typer.Option(
        None,
        "--path",
        envvar=f"{_INPUT}PATH",
        help="Directory to install the binaries into. [default: /usr/local/bin]",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        help="TOML file with default settings (overridden by flags).",
    ),
) -> None:
    """Download restic and resticprofile release binaries and install them."""
    console = RichConsole()

    config = _load_base_config(config_path, console).with_overrides(
        install_restic=install_restic,
        restic_version=restic_version,
        resticprofile_version=resticprofile_version,
        install_path=path,
    )

    service = build_service(console)
    result = service.run(plan_from_config(config))
    if isinstance(result, Err):
        print_setup_error(result.error, console)
        raise typer.Exit(code=setup_error_exit_code(result.error))

    try:
        write_outputs(result.value.outputs(), console)
    except OSError as e:
        console.error(f"Failed to write outputs: {e}")
        raise typer.Exit(code=int(ErrorCode.IO_ERROR))


def main() -> None:
    app()
