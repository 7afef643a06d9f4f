"""Repository discovery and metadata lookup for a GitHub organization."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

from ..logging import get_logger
from ..metadata import METADATA_FILENAME, MetadataParseError, parse_metadata
from ..models import Metadata, Repository
from .client import GitHubClient, GitHubError, NotFoundError

T = TypeVar("T")

ListFunc = Callable[[int, int], Tuple[List[T], int]]


@dataclass
class PageResult:
    """Items gathered across pages, plus the error that stopped pagination early."""

    items: List[Any] = field(default_factory=list)
    error: Optional[GitHubError] = None


def paginate(list_func: ListFunc, *, per_page: int = 100, start_page: int = 1) -> PageResult:
    """Call `list_func(page, per_page)` until it reports no next page.

    `list_func` returns `(items, next_page)` where `next_page == 0` ends the loop.
    A `GitHubError` stops pagination; items gathered so far are kept.
    """
    result = PageResult()
    page = start_page
    while True:
        try:
            items, next_page = list_func(page, per_page)
        except GitHubError as exc:
            result.error = exc
            return result

        result.items.extend(items)
        if not next_page:
            return result
        page = next_page


@dataclass
class RepositoryListing:
    """Repositories discovered in the organization and the listing error, if any."""

    repositories: List[Repository]
    error: Optional[GitHubError] = None


class RepositorySource:
    """Lists organization repositories and resolves their product metadata."""

    def __init__(
        self,
        client: GitHubClient,
        organization: str,
        *,
        per_page: int = 100,
        metadata_path: str = METADATA_FILENAME,
    ) -> None:
        self.client = client
        self.organization = organization
        self.per_page = per_page
        self.metadata_path = metadata_path
        self.logger = get_logger("source")

    def list_organization_repositories(self) -> RepositoryListing:
        """Return every public repository of the organization across all pages."""

        def _list(page: int, per_page: int) -> Tuple[List[Dict[str, Any]], int]:
            return self.client.list_org_repos(self.organization, page=page, per_page=per_page)

        pages = paginate(_list, per_page=self.per_page)
        if pages.error is not None:
            self.logger.error(
                "Could not query repositories for GitHub organization %s: %s",
                self.organization,
                pages.error,
            )

        repositories: List[Repository] = []
        for item in pages.items:
            name = item.get("name")
            url = item.get("html_url")
            if not name or not url:
                self.logger.warning("Skipping repository entry without name or URL: %r", item)
                continue
            repositories.append(Repository(name=str(name), url=str(url)))

        self.logger.info(
            "Discovered %d repositories in %s", len(repositories), self.organization
        )
        return RepositoryListing(repositories=repositories, error=pages.error)

    def fetch_metadata(self, repo: Repository) -> Optional[Metadata]:
        """Return the repository's metadata, or None when it is missing or unusable."""
        self.logger.debug("Getting %s metadata for repository: %s", self.metadata_path, repo.name)
        try:
            raw = self.client.get_contents(self.organization, repo.name, self.metadata_path)
        except NotFoundError:
            self.logger.info("No %s metadata in repository: %s", self.metadata_path, repo.name)
            return None
        except GitHubError as exc:
            self.logger.warning(
                "Could not get %s metadata for repository %s: %s", self.metadata_path, repo.name, exc
            )
            return None

        try:
            return parse_metadata(raw)
        except MetadataParseError as exc:
            self.logger.warning(
                "Could not parse %s metadata for repository %s: %s",
                self.metadata_path,
                repo.name,
                exc,
            )
            return None


__all__ = ["PageResult", "RepositoryListing", "RepositorySource", "paginate"]
