"""Install restic and resticprofile release binaries from GitHub."""

__version__ = "0.1.0"
