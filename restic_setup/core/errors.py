"""Error codes for CLI exit status.

These map the failure families of a setup run onto stable shell exit codes:
- 0: Success
- 1: User error (bad configuration, unreadable config file)
- 2: Environment error (host platform cannot be served)
- 4: Network error (release metadata or download failed)
- 5: I/O error (extraction or installation failed)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the setup command."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    NETWORK_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        """Return human-readable name."""
        return self.name.lower().replace("_", " ")
