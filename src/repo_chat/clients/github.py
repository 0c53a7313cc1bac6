"""GitHub REST API client for repository metadata and contents."""

import base64
import binascii
import re
from datetime import datetime
from typing import Any
from urllib.parse import quote

import requests

from common.constants import USER_AGENT
from common.env import env
from common.logger import get_logger

from ..errors import ContentFetchError, InvalidUrl, NetworkError, RepositoryNotFound
from ..models import EntryKind, RepositoryMetadata, RepositoryReference, TreeEntry
from .base import RepositoryClient

logger = get_logger(__name__)

_REPO_URL = re.compile(r"^https://github\.com/([^/\s?#]+)/([^/\s?#]+)/?$")

_ENTRY_KINDS = {"file": EntryKind.FILE, "dir": EntryKind.DIRECTORY}


def parse_reference(url: str) -> RepositoryReference:
    """Extract owner and repository name from a GitHub URL.

    Args:
        url: URL of the form https://github.com/<owner>/<repo>, optionally
            with a trailing slash

    Returns:
        The parsed reference

    Raises:
        InvalidUrl: If the URL does not have exactly that shape

    Example:
        >>> parse_reference("https://github.com/octo/hello/")
        RepositoryReference(owner='octo', repo='hello')
    """
    match = _REPO_URL.match(url.strip())
    if not match:
        raise InvalidUrl(
            f"Invalid GitHub URL '{url}'. Use https://github.com/<owner>/<repo>"
        )
    return RepositoryReference(owner=match.group(1), repo=match.group(2))


class GitHubClient(RepositoryClient):
    """Unauthenticated client for the GitHub REST API.

    Only public repositories are reachable. Every call is a single attempt;
    there is no retry or rate-limit backoff.

    API Documentation: https://docs.github.com/en/rest/repos/contents
    """

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        """Initialize the GitHub client.

        Args:
            base_url: API root, defaults to env.github_api_url()
            timeout: Per-request timeout in seconds, defaults to env.request_timeout()
        """
        self.base_url = (base_url or env.github_api_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else env.request_timeout()
        self.session = requests.Session()
        self.session.headers.update(
            {"Accept": "application/vnd.github+json", "User-Agent": USER_AGENT}
        )

    def _repo_url(self, ref: RepositoryReference) -> str:
        return f"{self.base_url}/repos/{ref.owner}/{ref.repo}"

    def _contents_url(self, ref: RepositoryReference, path: str) -> str:
        return f"{self._repo_url(ref)}/contents/{quote(path.strip('/'))}"

    def fetch_metadata(self, ref: RepositoryReference) -> RepositoryMetadata:
        """Fetch repository metadata.

        Raises:
            RepositoryNotFound: If GitHub answers 404
            NetworkError: On any other transport or API failure
        """
        logger.debug(f"Fetching metadata for {ref.full_name}")
        try:
            response = self.session.get(self._repo_url(ref), timeout=self.timeout)
            if response.status_code == 404:
                raise RepositoryNotFound(
                    f"Repository {ref.full_name} not found. "
                    "Make sure the repository exists and is public."
                )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.Timeout as e:
            raise NetworkError(f"GitHub API timeout for {ref.full_name}") from e
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"GitHub API error for {ref.full_name}: {e}") from e
        except ValueError as e:
            raise NetworkError(f"GitHub API returned invalid JSON for {ref.full_name}") from e

        if not isinstance(data, dict):
            raise NetworkError(f"Unexpected metadata payload for {ref.full_name}")
        return _metadata_from_payload(data, ref)

    def list_directory(self, ref: RepositoryReference, path: str = "") -> list[TreeEntry]:
        """List a directory through the contents endpoint.

        Raises:
            NetworkError: If the listing cannot be fetched
        """
        label = path or "/"
        logger.debug(f"Listing {ref.full_name}:{label}")
        try:
            response = self.session.get(self._contents_url(ref, path), timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.Timeout as e:
            raise NetworkError(f"GitHub API timeout listing {label}") from e
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"GitHub API error listing {label}: {e}") from e
        except ValueError as e:
            raise NetworkError(f"GitHub API returned invalid JSON listing {label}") from e

        # A path naming a single file comes back as an object, not a list
        items = data if isinstance(data, list) else [data]
        entries: list[TreeEntry] = []
        for item in items:
            entry = _entry_from_payload(item)
            if entry is not None:
                entries.append(entry)
        return entries

    def fetch_file_content(self, ref: RepositoryReference, path: str) -> str:
        """Fetch a file through the contents endpoint and decode it to text.

        Raises:
            ContentFetchError: If the request fails, the path is not a file,
                or the content is not valid UTF-8
        """
        try:
            response = self.session.get(self._contents_url(ref, path), timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            raise ContentFetchError(f"Failed to fetch {path}: {e}") from e
        except ValueError as e:
            raise ContentFetchError(f"Invalid JSON for {path}") from e

        if not isinstance(data, dict) or data.get("type") != "file":
            raise ContentFetchError(f"{path} is not a file")
        return decode_content(data.get("content"), data.get("encoding"), path)


def decode_content(content: str | None, encoding: str | None, path: str = "") -> str:
    """Decode a contents-API payload into text.

    Args:
        content: The ``content`` field of the response
        encoding: The ``encoding`` field ("base64" for files up to 1 MB)
        path: File path, used in error messages

    Returns:
        The complete decoded text

    Raises:
        ContentFetchError: If the payload has no inline content or does not
            decode cleanly
    """
    if content is None:
        raise ContentFetchError(f"No inline content for {path}")
    if encoding in (None, "", "utf-8"):
        return content
    if encoding != "base64":
        raise ContentFetchError(f"Unsupported encoding '{encoding}' for {path}")
    try:
        raw = base64.b64decode(content)
    except (binascii.Error, ValueError) as e:
        raise ContentFetchError(f"Malformed base64 content for {path}") from e
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ContentFetchError(f"{path} is not UTF-8 text") from e


def _entry_from_payload(item: Any) -> TreeEntry | None:
    if not isinstance(item, dict):
        return None
    kind = _ENTRY_KINDS.get(item.get("type"))
    if kind is None:
        return None
    size = item.get("size")
    return TreeEntry(
        name=item.get("name", ""),
        path=item.get("path", ""),
        kind=kind,
        size=size if isinstance(size, int) else None,
    )


def _metadata_from_payload(data: dict[str, Any], ref: RepositoryReference) -> RepositoryMetadata:
    owner = (data.get("owner") or {}).get("login") or ref.owner
    license_info = data.get("license") or {}
    topics = data.get("topics") or []
    return RepositoryMetadata(
        name=data.get("name") or ref.repo,
        owner=owner,
        description=data.get("description") or "",
        language=data.get("language") or "Unknown",
        stars=int(data.get("stargazers_count") or 0),
        forks=int(data.get("forks_count") or 0),
        size_kb=int(data.get("size") or 0),
        created_at=_parse_timestamp(data.get("created_at")),
        updated_at=_parse_timestamp(data.get("updated_at")),
        topics=tuple(dict.fromkeys(str(topic) for topic in topics)),
        license=license_info.get("name") or "",
    )


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.debug(f"Unparseable timestamp from GitHub: {value!r}")
        return None
