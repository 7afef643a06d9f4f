"""Minimal GitHub REST client used to discover repositories and read files."""

from __future__ import annotations

import base64
import binascii
import http.client
import json
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple
from urllib.error import HTTPError
from urllib.parse import parse_qs, quote, urlencode, urlparse
from urllib.request import Request, urlopen

from ..logging import get_logger

_LINK_PATTERN = re.compile(r'<([^>]+)>\s*;\s*rel="([^"]+)"')


class GitHubError(RuntimeError):
    """Base class for failures talking to the GitHub API."""


class TransportError(GitHubError):
    """Raised when a request fails at the network or API level."""


class NotFoundError(GitHubError):
    """Raised when the requested resource does not exist."""


@dataclass
class HttpResponse:
    """Raw HTTP response handed back by a transport."""

    status: int
    body: bytes
    headers: Dict[str, str] = field(default_factory=dict)


Transport = Callable[[Request, float], HttpResponse]


class GitHubClient:
    """Explicit GitHub API client value; construct once and pass it where needed."""

    DEFAULT_API_URL = "https://api.github.com"
    API_VERSION = "2022-11-28"
    USER_AGENT = "trgchecks/0.1"

    def __init__(
        self,
        token: str | None = None,
        *,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        transport: Transport | None = None,
    ) -> None:
        self.token = token or None
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport or self._default_transport
        self.logger = get_logger("github")

    @property
    def authenticated(self) -> bool:
        return self.token is not None

    def list_org_repos(
        self, org: str, *, page: int = 1, per_page: int = 100
    ) -> Tuple[List[Dict[str, Any]], int]:
        """Return one page of public organization repositories and the next page number (0 when done)."""
        query = {"type": "public", "per_page": per_page}
        if page:
            query["page"] = page
        response = self._get(f"/orgs/{quote(org)}/repos", query)
        payload = self._decode_json(response)
        if not isinstance(payload, list):
            raise TransportError("Unexpected repository listing payload")
        return payload, _next_page(response.headers)

    def get_contents(self, owner: str, repo: str, path: str) -> bytes:
        """Return the decoded content of a file in a repository."""
        response = self._get(
            f"/repos/{quote(owner)}/{quote(repo)}/contents/{quote(path.lstrip('/'))}"
        )
        payload = self._decode_json(response)
        if not isinstance(payload, dict) or payload.get("type") != "file":
            raise NotFoundError(f"{path} is not a file in {owner}/{repo}")

        content = payload.get("content") or ""
        if payload.get("encoding", "base64") != "base64":
            return str(content).encode("utf-8")
        try:
            return base64.b64decode(content)
        except (binascii.Error, ValueError) as exc:
            raise TransportError(f"Could not decode {path} from {owner}/{repo}: {exc}") from exc

    # ------------------------------------------------------------------
    # Helpers

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": self.API_VERSION,
            "User-Agent": self.USER_AGENT,
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _get(self, path: str, query: Mapping[str, Any] | None = None) -> HttpResponse:
        url = f"{self.api_url}{path}"
        if query:
            url = f"{url}?{urlencode(query)}"
        request = Request(url, headers=self._headers(), method="GET")
        self.logger.debug("GET %s", url)
        response = self._transport(request, self.timeout)

        if response.status == 404:
            raise NotFoundError(f"Not found: {path}")
        if response.status >= 400:
            raise TransportError(
                f"GitHub API returned HTTP {response.status} for {path}: {_error_message(response)}"
            )
        return response

    @staticmethod
    def _decode_json(response: HttpResponse) -> Any:
        try:
            return json.loads(response.body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise TransportError(f"Invalid JSON from GitHub API: {exc}") from exc

    @staticmethod
    def _default_transport(request: Request, timeout: float) -> HttpResponse:
        try:
            with urlopen(request, timeout=timeout) as response:
                return HttpResponse(
                    status=response.status,
                    body=response.read(),
                    headers=dict(response.headers.items()),
                )
        except HTTPError as exc:
            try:
                body = exc.read() or b""
            except (OSError, http.client.HTTPException):
                body = b""
            return HttpResponse(
                status=exc.code,
                body=body,
                headers=dict(exc.headers.items()) if exc.headers else {},
            )
        except (OSError, http.client.HTTPException) as exc:
            raise TransportError(f"Request to {request.full_url} failed: {exc}") from exc


def _next_page(headers: Mapping[str, str]) -> int:
    link = _header(headers, "Link")
    if not link:
        return 0
    for target, rel in _LINK_PATTERN.findall(link):
        if rel != "next":
            continue
        values = parse_qs(urlparse(target).query).get("page")
        if values and values[0].isdigit():
            return int(values[0])
    return 0


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return None


def _error_message(response: HttpResponse) -> str:
    try:
        payload = json.loads(response.body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return response.body.decode("utf-8", errors="replace").strip() or "no details"
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return "no details"


__all__ = [
    "GitHubClient",
    "GitHubError",
    "HttpResponse",
    "NotFoundError",
    "TransportError",
]
