"""GitHub Releases URLs.

Both tools publish on GitHub Releases, so two URL shapes cover everything:
- API: api.github.com/repos/{owner}/{repo}/releases/latest
- Asset: github.com/{owner}/{repo}/releases/download/{tag}/{asset}
"""

from __future__ import annotations

__all__ = [
    "GITHUB_API",
    "GITHUB_WEB",
    "latest_release_url",
    "release_asset_url",
]

GITHUB_API = "https://api.github.com"
GITHUB_WEB = "https://github.com"


def latest_release_url(owner: str, repo: str) -> str:
    """URL of the most recent published release of owner/repo."""
    return f"{GITHUB_API}/repos/{owner}/{repo}/releases/latest"


def release_asset_url(owner: str, repo: str, tag: str, asset: str) -> str:
    """Download URL of a release asset.

    Args:
        owner: GitHub owner
        repo: GitHub repository
        tag: Release tag, with its leading "v" (e.g., "v0.18.1")
        asset: Asset filename (e.g., "restic_0.18.1_linux_amd64.bz2")
    """
    return f"{GITHUB_WEB}/{owner}/{repo}/releases/download/{tag}/{asset}"
