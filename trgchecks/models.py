"""Core data models shared across trgchecks components."""

from dataclasses import dataclass, field
from typing import Iterator, List, Tuple


@dataclass(frozen=True)
class Repository:
    """A repository discovered in the GitHub organization. Identity is the URL."""

    name: str
    url: str


@dataclass(frozen=True)
class MetadataRepository:
    """Repository entry listed inside a product metadata file."""

    name: str = ""
    usage: str = ""
    url: str = ""


@dataclass(frozen=True)
class Metadata:
    """Product metadata declared by a repository in its `.tractusx` file."""

    product_name: str = ""
    leading_repository: str = ""
    repositories: Tuple[MetadataRepository, ...] = ()
    openapi_specs: Tuple[str, ...] = ()


@dataclass(frozen=True)
class RepoInfo:
    """A repository joined with its resolved metadata, used while assembling products."""

    metadata: Metadata
    repo_name: str
    repo_url: str


@dataclass
class Product:
    """Logical grouping of repositories sharing one leading repository."""

    name: str = ""
    leading_repo: str = ""
    repositories: List[Repository] = field(default_factory=list)
    declared_repositories: List[MetadataRepository] = field(default_factory=list)
    openapi_specs: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class GuidelineCheck:
    """Outcome of one guideline check executed against one repository."""

    passed: bool
    optional: bool
    error_description: str
    guideline_url: str
    guideline_name: str


@dataclass
class CheckedRepository:
    """All guideline outcomes for a single repository."""

    repo_url: str
    repo_name: str
    passed_all_guidelines: bool = True
    guideline_checks: List[GuidelineCheck] = field(default_factory=list)


@dataclass
class CheckedProduct:
    """Aggregated guideline outcomes for every repository of a product."""

    name: str
    leading_repo: str
    overall_passed: bool = True
    checked_repositories: List[CheckedRepository] = field(default_factory=list)
    declared_repositories: List[MetadataRepository] = field(default_factory=list)
    openapi_specs: List[str] = field(default_factory=list)


@dataclass
class CheckReport:
    """Result of a full check run: classified products plus unhandled repositories."""

    products: List[CheckedProduct] = field(default_factory=list)
    unhandled: List[Repository] = field(default_factory=list)

    def __iter__(self) -> Iterator[list]:
        # Allows `products, unhandled = orchestrator.check_products()`.
        yield self.products
        yield self.unhandled
