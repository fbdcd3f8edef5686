"""Platform and architecture detection.

Release assets of both tools are named ``<repo>_<version>_<os>_<arch>``, so
the host has to be mapped onto exactly the OS and architecture vocabulary
used upstream (``linux``/``darwin``/``windows`` and ``amd64``/``arm64``/``386``).
A host outside that vocabulary cannot be served; no architecture is guessed.
"""

from __future__ import annotations

import os as _os
import platform as _platform
import sys as _sys
from dataclasses import dataclass
from enum import Enum

from restic_setup.core.result import Err, Ok, Result

__all__ = [
    "Platform",
    "Arch",
    "PlatformInfo",
    "UnsupportedPlatform",
    "arch_from_machine",
    "detect",
    "host_machine",
    "host_system",
    "platform_from_system",
]


class Platform(Enum):
    """Operating system platform, valued by its release-asset name."""

    LINUX = "linux"
    DARWIN = "darwin"
    WINDOWS = "windows"

    def __str__(self) -> str:
        return self.value

    @property
    def is_unix(self) -> bool:
        """Check if this is a Unix-like platform (Linux or macOS)."""
        return self in (Platform.LINUX, Platform.DARWIN)

    @property
    def exe_suffix(self) -> str:
        """Get executable file suffix for this platform."""
        return ".exe" if self == Platform.WINDOWS else ""

    def exe_name(self, name: str) -> str:
        """Get executable name with platform-appropriate suffix.

        Example: exe_name("restic") -> "restic.exe" on Windows, "restic" elsewhere.
        """
        return f"{name}{self.exe_suffix}"


class Arch(Enum):
    """CPU architecture, valued by its release-asset name."""

    AMD64 = "amd64"
    ARM64 = "arm64"
    I386 = "386"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class PlatformInfo:
    """The (platform, architecture) pair a run downloads for."""

    platform: Platform
    arch: Arch

    @property
    def is_windows(self) -> bool:
        return self.platform == Platform.WINDOWS

    @property
    def is_unix(self) -> bool:
        return self.platform.is_unix

    def __str__(self) -> str:
        return f"{self.platform}/{self.arch}"


@dataclass(frozen=True, slots=True)
class UnsupportedPlatform:
    """The host reports an OS or architecture no release is published for.

    Attributes:
        kind: "platform" or "architecture"
        value: The raw host value that could not be mapped
    """

    kind: str
    value: str

    @property
    def message(self) -> str:
        return f"Unsupported {self.kind}: {self.value}"

    def __str__(self) -> str:
        return self.message


_MACHINE_ALIASES: dict[str, Arch] = {
    "x86_64": Arch.AMD64,
    "amd64": Arch.AMD64,
    "x64": Arch.AMD64,
    "aarch64": Arch.ARM64,
    "arm64": Arch.ARM64,
    "i386": Arch.I386,
    "i486": Arch.I386,
    "i586": Arch.I386,
    "i686": Arch.I386,
    "x86": Arch.I386,
}


def platform_from_system(system: str) -> Platform | None:
    """Map a ``sys.platform`` value onto Platform, or None if unknown."""
    system = system.lower()
    if system.startswith("linux"):
        return Platform.LINUX
    if system.startswith("darwin"):
        return Platform.DARWIN
    if system.startswith(("win32", "cygwin", "msys")):
        return Platform.WINDOWS
    return None


def arch_from_machine(machine: str) -> Arch | None:
    """Map a machine identifier (``uname -m`` style) onto Arch, or None."""
    return _MACHINE_ALIASES.get(machine.strip().lower())


def host_system() -> str:
    """Read the raw OS identifier of the current host."""
    # NOTE: avoid platform.system(); on Windows it may query WMI (slow/hangs on some machines).
    return _sys.platform


def host_machine(platform: Platform) -> str:
    """Read the raw machine identifier of the current host."""
    # NOTE: avoid platform.machine() on Windows.
    # It may call platform.uname(), which can query WMI as well.
    if platform == Platform.WINDOWS:
        return (
            _os.environ.get("PROCESSOR_ARCHITEW6432")
            or _os.environ.get("PROCESSOR_ARCHITECTURE")
            or ""
        )
    return _platform.machine()


def detect() -> Result[PlatformInfo, UnsupportedPlatform]:
    """Detect the (platform, architecture) pair of the current host.

    Returns:
        Ok(PlatformInfo), or Err(UnsupportedPlatform) if either the OS or the
        CPU architecture is outside the supported set.
    """
    system = host_system()
    platform = platform_from_system(system)
    if platform is None:
        return Err(UnsupportedPlatform(kind="platform", value=system))

    machine = host_machine(platform)
    arch = arch_from_machine(machine)
    if arch is None:
        return Err(UnsupportedPlatform(kind="architecture", value=machine))

    return Ok(PlatformInfo(platform=platform, arch=arch))
