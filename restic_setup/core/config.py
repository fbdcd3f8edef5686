"""Typed configuration for a setup run.

Settings come from three places, later ones winning:
built-in defaults, an optional TOML file, then environment/CLI values.

TOML layout:

    install_path = "/usr/local/bin"

    [restic]
    install = true
    version = "latest"

    [resticprofile]
    version = "v0.32.0"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_str, get_table

__all__ = [
    "SetupConfig",
    "ConfigError",
    "load_config",
    "DEFAULT_INSTALL_PATH",
    "LATEST",
]

LATEST = "latest"
DEFAULT_INSTALL_PATH = Path("/usr/local/bin")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class SetupConfig:
    """Run-time options, constant for one invocation."""

    install_restic: bool = True
    restic_version: str = LATEST
    resticprofile_version: str = LATEST
    install_path: Path = DEFAULT_INSTALL_PATH

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> SetupConfig:
        """Create SetupConfig from a mapping (parsed TOML)."""
        restic: StrDict = get_table(data, "restic") or {}
        resticprofile: StrDict = get_table(data, "resticprofile") or {}

        install_restic = get_bool(restic, "install")
        install_path = get_str(data, "install_path")

        return cls(
            install_restic=True if install_restic is None else install_restic,
            restic_version=get_str(restic, "version") or LATEST,
            resticprofile_version=get_str(resticprofile, "version") or LATEST,
            install_path=Path(install_path) if install_path else DEFAULT_INSTALL_PATH,
        )

    def with_overrides(
        self,
        *,
        install_restic: bool | None = None,
        restic_version: str | None = None,
        resticprofile_version: str | None = None,
        install_path: str | None = None,
    ) -> SetupConfig:
        """Return a copy with every non-blank override applied."""
        changes: dict[str, object] = {}
        if install_restic is not None:
            changes["install_restic"] = install_restic
        if restic_version and restic_version.strip():
            changes["restic_version"] = restic_version.strip()
        if resticprofile_version and resticprofile_version.strip():
            changes["resticprofile_version"] = resticprofile_version.strip()
        if install_path and install_path.strip():
            changes["install_path"] = Path(install_path.strip()).expanduser()
        return replace(self, **changes)


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[SetupConfig, ConfigError]:
    """Load and parse setup configuration from a TOML file.

    Args:
        path: Path to the TOML file

    Returns:
        Ok(SetupConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result
    return Ok(SetupConfig.from_dict(result.value))
