"""Version resolution.

Turns the user's version request into a concrete release tag:
- "latest" is looked up on the GitHub Releases API
- anything else is taken as an explicit tag
- the result always carries the leading "v" that release tags use
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from restic_setup.core.config import LATEST
from restic_setup.core.result import Err, Ok, Result
from restic_setup.core.structured import as_str_dict
from restic_setup.tools.errors import MalformedMetadata, MetadataFetchError, ResolveError
from restic_setup.tools.github import latest_release_url

if TYPE_CHECKING:
    from restic_setup.output.console import ConsoleProtocol
    from restic_setup.tools.http import HttpClient

__all__ = ["VersionResolver", "normalize_tag", "VERSION_PREFIX"]

VERSION_PREFIX = "v"


def normalize_tag(tag: str) -> str:
    """Prepend the version marker if missing.

    Idempotent: normalize_tag("0.18.1") == normalize_tag("v0.18.1") == "v0.18.1".
    """
    if tag.startswith(VERSION_PREFIX):
        return tag
    return f"{VERSION_PREFIX}{tag}"


class VersionResolver:
    """Resolve version requests to release tags.

    No caching: two tools asking for "latest" issue two requests.

    Usage:
        resolver = VersionResolver(http, console)
        result = resolver.resolve("restic", "restic", "latest")
    """

    def __init__(self, http: HttpClient, console: ConsoleProtocol) -> None:
        self._http = http
        self._console = console

    def latest_tag(self, owner: str, repo: str) -> Result[str, ResolveError]:
        """Fetch the tag of the most recent published release."""
        url = latest_release_url(owner, repo)
        self._console.info(f"Fetching latest version from {url}")

        result = self._http.get_json(url)
        if isinstance(result, Err):
            return Err(
                MetadataFetchError(owner=owner, repo=repo, url=url, cause=result.error.cause)
            )

        # A body that parsed but is not an object (null, list) carries no tag either.
        release = as_str_dict(result.value) or {}
        tag_name = release.get("tag_name")
        if not isinstance(tag_name, str) or not tag_name.strip():
            return Err(MalformedMetadata(owner=owner, repo=repo, url=url))

        tag = tag_name.strip()
        self._console.info(f"Latest version: {tag}")
        return Ok(tag)

    def resolve(self, owner: str, repo: str, version: str) -> Result[str, ResolveError]:
        """Resolve a version request for owner/repo.

        Args:
            owner: GitHub owner
            repo: GitHub repository
            version: "latest" or an explicit tag, with or without leading "v"

        Returns:
            Ok with the normalized tag (e.g., "v0.18.1"), or Err
        """
        if version != LATEST:
            return Ok(normalize_tag(version))

        result = self.latest_tag(owner, repo)
        if isinstance(result, Err):
            return result
        return Ok(normalize_tag(result.value))
