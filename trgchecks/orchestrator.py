"""Coordinates discovery, product assembly, cloning and guideline checks."""

from __future__ import annotations

from functools import partial
from typing import Dict, List

from .config import Config, ConfigError
from .git.clone import CloneError, Cloner
from .github.client import GitHubClient
from .github.source import RepositorySource
from .guidelines import initialize_checks_for_directory
from .logging import get_logger
from .models import (
    CheckedProduct,
    CheckedRepository,
    CheckReport,
    GuidelineCheck,
    Product,
    RepoInfo,
    Repository,
)
from .pipeline import ChecksFactory, run_quality_checks
from .products import build_products

CLONE_CHECK_NAME = "Repository clone"


class Orchestrator:
    """Runs a full check cycle over an organization's products."""

    def __init__(
        self,
        source: RepositorySource,
        cloner: Cloner | None = None,
        checks_factory: ChecksFactory = initialize_checks_for_directory,
    ) -> None:
        self.source = source
        self.cloner = cloner or Cloner()
        self.checks_factory = checks_factory
        self.logger = get_logger("orchestrator")

    @classmethod
    def from_config(cls, config: Config) -> "Orchestrator":
        """Build an orchestrator wired to GitHub and git using `config`."""
        client = GitHubClient(
            config.github_token,
            api_url=config.github.api_url,
            timeout=config.github.timeout,
        )
        source = RepositorySource(
            client, config.github.organization, per_page=config.github.per_page
        )
        cloner = Cloner(timeout=config.clone.timeout, depth=config.clone.depth)
        checks_factory = partial(
            initialize_checks_for_directory,
            enabled=config.guidelines.enabled or None,
            allowed_base_images=config.guidelines.allowed_base_images,
        )
        # Instantiate once so unknown guideline names fail before any clone.
        try:
            checks_factory(config.root)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
        return cls(source, cloner, checks_factory)

    def check_products(self) -> CheckReport:
        """Check every product of the organization.

        Returns the checked products and the repositories that declare no usable
        product metadata.
        """
        repo_info_by_url: Dict[str, RepoInfo] = {}
        unhandled: List[Repository] = []

        listing = self.source.list_organization_repositories()
        for repo in listing.repositories:
            metadata = self.source.fetch_metadata(repo)
            if metadata is None:
                unhandled.append(repo)
            else:
                repo_info_by_url[repo.url] = RepoInfo(
                    metadata=metadata, repo_name=repo.name, repo_url=repo.url
                )

        self.logger.info(
            "%d repositories declare metadata, %d are unhandled",
            len(repo_info_by_url),
            len(unhandled),
        )

        checked_products = [
            self.check_product(product) for product in build_products(repo_info_by_url)
        ]
        return CheckReport(products=checked_products, unhandled=unhandled)

    def check_product(self, product: Product) -> CheckedProduct:
        """Check each member repository and fold the results into the product."""
        checked = CheckedProduct(
            name=product.name,
            leading_repo=product.leading_repo,
            overall_passed=True,
            declared_repositories=list(product.declared_repositories),
            openapi_specs=list(product.openapi_specs),
        )
        for repo in product.repositories:
            checked_repo = self.check_repository(repo)
            checked.overall_passed = checked.overall_passed and checked_repo.passed_all_guidelines
            checked.checked_repositories.append(checked_repo)
        return checked

    def check_repository(self, repo: Repository) -> CheckedRepository:
        """Clone `repo` into a scoped directory and run the guideline checks."""
        self.logger.info("Starting checks for repo: %s", repo.name)
        try:
            with self.cloner.checkout(repo) as directory:
                return run_quality_checks(repo, directory, self.checks_factory)
        except CloneError as exc:
            self.logger.error("Could not clone repo %s: %s", repo.url, exc)
            return CheckedRepository(
                repo_url=repo.url,
                repo_name=repo.name,
                passed_all_guidelines=False,
                guideline_checks=[
                    GuidelineCheck(
                        passed=False,
                        optional=False,
                        error_description=str(exc),
                        guideline_url=repo.url,
                        guideline_name=CLONE_CHECK_NAME,
                    )
                ],
            )


__all__ = ["CLONE_CHECK_NAME", "Orchestrator"]
