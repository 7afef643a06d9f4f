"""GitHub access: API client and repository source."""

from .client import GitHubClient, GitHubError, HttpResponse, NotFoundError, TransportError
from .source import PageResult, RepositoryListing, RepositorySource, paginate

__all__ = [
    "GitHubClient",
    "GitHubError",
    "HttpResponse",
    "NotFoundError",
    "PageResult",
    "RepositoryListing",
    "RepositorySource",
    "TransportError",
    "paginate",
]
