"""HTTP client abstraction for release metadata and asset downloads.

This module provides:
- HttpClient: Protocol for HTTP operations (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Mock implementation for testing
"""

from __future__ import annotations

import json
import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from restic_setup import __version__
from restic_setup.core.result import Err, Ok, Result

__all__ = [
    "HttpClient",
    "RealHttpClient",
    "MockHttpClient",
    "HttpError",
]

USER_AGENT = f"restic-setup/{__version__}"


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    @property
    def cause(self) -> str:
        """Error description without the URL (callers attach their own context)."""
        if self.status:
            return f"HTTP {self.status}: {self.message}"
        return self.message

    def __str__(self) -> str:
        return f"{self.cause} ({self.url})"


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP operations.

    Components receive an HttpClient so tests can inject canned responses
    instead of reaching GitHub.
    """

    def get_json(self, url: str) -> Result[object, HttpError]:
        """Fetch URL and parse the body as JSON; the caller checks its shape."""
        ...

    def download(self, url: str, dest: Path) -> Result[Path, HttpError]:
        """Stream URL to ``dest``, creating parent directories."""
        ...


class RealHttpClient:
    """Real HTTP client using urllib.

    Handles:
    - HTTPS with system certificates
    - JSON parsing
    - Streaming downloads in fixed-size chunks
    - Optional bearer token for API requests
    """

    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: str = USER_AGENT,
        token: str | None = None,
    ) -> None:
        """Initialize HTTP client.

        Args:
            timeout: Request timeout in seconds
            user_agent: User-Agent header value
            token: GitHub token sent on JSON (API) requests only; asset
                downloads redirect to storage hosts that must not see it
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self._token = token
        self._ssl_context = ssl.create_default_context()

    def _open(self, url: str, headers: dict[str, str]) -> Any:
        req = urllib.request.Request(url, headers={"User-Agent": self.user_agent, **headers})
        return urllib.request.urlopen(req, timeout=self.timeout, context=self._ssl_context)

    def get_json(self, url: str) -> Result[object, HttpError]:
        """Fetch URL and parse as JSON."""
        headers = {"Accept": "application/vnd.github+json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        try:
            with self._open(url, headers) as response:
                body: bytes = response.read()
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except (ValueError, OSError) as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

        try:
            data: object = json.loads(body.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(HttpError(url=url, status=0, message=f"JSON parse error: {e}"))

        return Ok(data)

    def download(self, url: str, dest: Path) -> Result[Path, HttpError]:
        """Download URL to file."""
        try:
            with self._open(url, {}) as response:
                dest.parent.mkdir(parents=True, exist_ok=True)
                with open(dest, "wb") as f:
                    while True:
                        chunk = response.read(65536)
                        if not chunk:
                            break
                        f.write(chunk)
            return Ok(dest)
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Download timed out"))
        except (ValueError, OSError) as e:
            return Err(HttpError(url=url, status=0, message=str(e)))


class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        client = MockHttpClient()
        client.set_json("https://api.github.com/repos/restic/restic/releases/latest",
                        {"tag_name": "v0.18.1"})
        client.set_download(url, b"payload")
    """

    def __init__(self) -> None:
        self._json_responses: dict[str, object] = {}
        self._download_responses: dict[str, bytes | HttpError] = {}
        self.calls: list[tuple[str, str]] = []

    def set_json(self, url: str, response: object) -> None:
        """Set JSON response for URL."""
        self._json_responses[url] = response

    def set_download(self, url: str, response: bytes | HttpError) -> None:
        """Set download content for URL."""
        self._download_responses[url] = response

    def calls_of(self, kind: str) -> list[str]:
        """URLs requested through ``get_json`` or ``download``, in order."""
        return [url for k, url in self.calls if k == kind]

    def get_json(self, url: str) -> Result[object, HttpError]:
        """Get mocked JSON response."""
        self.calls.append(("get_json", url))

        if url not in self._json_responses:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))

        response = self._json_responses[url]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

    def download(self, url: str, dest: Path) -> Result[Path, HttpError]:
        """Mock download - writes predefined content to dest."""
        self.calls.append(("download", url))

        if url not in self._download_responses:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))

        response = self._download_responses[url]
        if isinstance(response, HttpError):
            return Err(response)

        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(response)
        return Ok(dest)
