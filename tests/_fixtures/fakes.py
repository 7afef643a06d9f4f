"""Test doubles for the GitHub source, the cloner and guideline checks."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, List, Mapping, Optional, Sequence

from trgchecks.git.clone import CloneError
from trgchecks.github.client import GitHubError
from trgchecks.github.source import RepositoryListing
from trgchecks.guidelines import QualityGuideline, TestResult
from trgchecks.models import Metadata, Repository


class StubSource:
    """Repository source backed by in-memory repositories and metadata."""

    def __init__(
        self,
        repositories: Sequence[Repository],
        metadata: Mapping[str, Metadata],
        *,
        error: GitHubError | None = None,
    ) -> None:
        self.repositories = list(repositories)
        self.metadata = dict(metadata)
        self.error = error
        self.fetched: List[str] = []

    def list_organization_repositories(self) -> RepositoryListing:
        return RepositoryListing(repositories=list(self.repositories), error=self.error)

    def fetch_metadata(self, repo: Repository) -> Optional[Metadata]:
        self.fetched.append(repo.name)
        return self.metadata.get(repo.url)


class StubCloner:
    """Cloner that hands out empty directories under `tmp_path`."""

    def __init__(self, tmp_path: Path, *, failing: Sequence[str] = ()) -> None:
        self.tmp_path = tmp_path
        self.failing = set(failing)
        self.cloned: List[str] = []
        self.released: List[Path] = []

    @contextmanager
    def checkout(self, repo: Repository) -> Iterator[Path]:
        if repo.url in self.failing:
            raise CloneError(f"Cloning {repo.url} failed: repository not found")
        directory = self.tmp_path / "clones" / repo.name
        directory.mkdir(parents=True)
        self.cloned.append(repo.name)
        try:
            yield directory
        finally:
            self.released.append(directory)


class FixedCheck(QualityGuideline):
    """Guideline returning a predetermined outcome."""

    def __init__(
        self,
        base_dir: Path,
        *,
        passed: bool,
        optional: bool = False,
        label: str = "fixed",
        error: str = "",
    ) -> None:
        super().__init__(base_dir)
        self._passed = passed
        self._optional = optional
        self._label = label
        self._error = error

    def test(self) -> TestResult:
        return TestResult(passed=self._passed, error_description="" if self._passed else self._error)

    def name(self) -> str:
        return self._label

    def external_description(self) -> str:
        return f"https://example.com/guidelines/{self._label}"

    def is_optional(self) -> bool:
        return self._optional


def outcomes_factory(outcomes: Dict[str, List[tuple[bool, bool]]]):
    """Return a checks factory keyed by clone directory name.

    Each outcome is `(passed, optional)`.
    """

    def _factory(directory: Path) -> List[QualityGuideline]:
        return [
            FixedCheck(directory, passed=passed, optional=optional, label=f"check-{index}", error="failed")
            for index, (passed, optional) in enumerate(outcomes.get(directory.name, []))
        ]

    return _factory


__all__ = ["FixedCheck", "StubCloner", "StubSource", "outcomes_factory"]
