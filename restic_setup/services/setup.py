from __future__ import annotations

import tempfile
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path

from restic_setup.core.config import SetupConfig
from restic_setup.core.result import Err, Ok, Result
from restic_setup.output.console import ConsoleProtocol, Style
from restic_setup.platform.detection import PlatformInfo, UnsupportedPlatform, detect
from restic_setup.tools.base import RESTIC, RESTICPROFILE, ToolIdentity
from restic_setup.tools.download import Fetcher
from restic_setup.tools.errors import SetupError
from restic_setup.tools.http import HttpClient
from restic_setup.tools.installer import Installer
from restic_setup.tools.locator import extractor_for, locate
from restic_setup.tools.resolver import VersionResolver

__all__ = [
    "InstallOutcome",
    "Requested",
    "SetupPlan",
    "SetupReport",
    "SetupService",
    "Skipped",
    "Stage",
    "ToolRequest",
    "plan_from_config",
]


@dataclass(frozen=True, slots=True)
class Requested:
    """Install the tool at this version request ("latest" or a tag)."""

    version: str


@dataclass(frozen=True, slots=True)
class Skipped:
    """Leave the tool alone; recorded as not installed, not as a failure."""

    reason: str


ToolRequest = Requested | Skipped


class Stage(Enum):
    RESOLVING = auto()
    DOWNLOADING = auto()
    EXTRACTING = auto()
    INSTALLING = auto()
    DONE = auto()

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True, slots=True)
class SetupPlan:
    install_dir: Path
    steps: tuple[tuple[ToolIdentity, ToolRequest], ...]


@dataclass(frozen=True, slots=True)
class InstallOutcome:
    tool: str
    installed: bool
    final_path: Path | None = None


@dataclass(frozen=True, slots=True)
class SetupReport:
    outcomes: tuple[InstallOutcome, ...]

    def outputs(self) -> dict[str, str]:
        """Caller-facing outputs, e.g. {"restic-installed": "true"}."""
        return {f"{o.tool}-installed": str(o.installed).lower() for o in self.outcomes}


def plan_from_config(config: SetupConfig) -> SetupPlan:
    """restic first (only if requested), then resticprofile unconditionally."""
    restic: ToolRequest
    if config.install_restic:
        restic = Requested(config.restic_version)
    else:
        restic = Skipped("install-restic is not true")

    return SetupPlan(
        install_dir=config.install_path,
        steps=(
            (RESTIC, restic),
            (RESTICPROFILE, Requested(config.resticprofile_version)),
        ),
    )


class SetupService:
    """Run the acquisition pipeline for every tool of a plan, in order.

    The first failing tool aborts the run; its error is returned unchanged
    and no report is produced, even for tools that already finished.
    """

    def __init__(
        self,
        *,
        http: HttpClient,
        console: ConsoleProtocol,
        detector: Callable[[], Result[PlatformInfo, UnsupportedPlatform]] = detect,
        work_root: Path | None = None,
    ) -> None:
        self._http = http
        self._console = console
        self._detector = detector
        self._work_root = work_root

        self._resolver = VersionResolver(http, console)
        self._fetcher = Fetcher(http, console)

    def run(self, plan: SetupPlan) -> Result[SetupReport, SetupError]:
        self._console.header("=== Setup restic and resticprofile ===")
        self._console.info(f"Install path: {plan.install_dir}")

        detected = self._detector()
        if isinstance(detected, Err):
            self._console.error(detected.error.message)
            return detected
        platform = detected.value
        self._console.info(f"Platform: {platform}")

        outcomes: list[InstallOutcome] = []
        for identity, request in plan.steps:
            match request:
                case Skipped(reason=reason):
                    self._console.info(f"Skipping {identity} installation ({reason})")
                    outcomes.append(InstallOutcome(tool=identity.binary_name, installed=False))
                case Requested(version=version):
                    result = self._install_tool(identity, version, plan.install_dir, platform)
                    if isinstance(result, Err):
                        self._console.error(
                            f"Failed to install {identity}: {result.error.message}"
                        )
                        return result
                    outcomes.append(result.value)

        self._console.success("Installation complete")
        return Ok(SetupReport(outcomes=tuple(outcomes)))

    def _install_tool(
        self,
        identity: ToolIdentity,
        version: str,
        install_dir: Path,
        platform: PlatformInfo,
    ) -> Result[InstallOutcome, SetupError]:
        self._console.info(f"Installing {identity} version: {version}")

        self._stage(identity, Stage.RESOLVING)
        resolved = self._resolver.resolve(identity.owner, identity.repo, version)
        if isinstance(resolved, Err):
            return resolved
        tag = resolved.value

        descriptor = locate(identity, tag, platform)
        binary_name = platform.platform.exe_name(identity.binary_name)
        extractor = extractor_for(identity, self._console)
        installer = Installer(platform.platform, self._console)

        # Download and extraction happen in a private directory removed on every exit path.
        with tempfile.TemporaryDirectory(
            prefix=f"{identity.repo}-", dir=self._work_root
        ) as work:
            self._stage(identity, Stage.DOWNLOADING)
            fetched = self._fetcher.fetch(descriptor.url, Path(work) / descriptor.file_name)
            if isinstance(fetched, Err):
                return fetched

            self._stage(identity, Stage.EXTRACTING)
            extracted = extractor.extract_binary(fetched.value, binary_name)
            if isinstance(extracted, Err):
                return extracted

            self._stage(identity, Stage.INSTALLING)
            installed = installer.install(extracted.value, install_dir, binary_name)
            if isinstance(installed, Err):
                return installed

        self._stage(identity, Stage.DONE)
        self._console.success(f"{identity} {tag} installed successfully at {installed.value}")
        return Ok(
            InstallOutcome(tool=identity.binary_name, installed=True, final_path=installed.value)
        )

    def _stage(self, identity: ToolIdentity, stage: Stage) -> None:
        self._console.print(f"{identity}: {stage}", Style.DIM)
