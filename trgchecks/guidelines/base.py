"""Base classes for guideline check plugins."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

GUIDELINE_BASE_URL = "https://eclipse-tractusx.github.io/docs/release"


@dataclass(frozen=True)
class TestResult:
    """Pass/fail outcome of a single guideline check."""

    __test__ = False

    passed: bool
    error_description: str = ""


class QualityGuideline(ABC):
    """Contract for checks evaluated against a cloned repository directory."""

    def __init__(self, base_dir: str | Path) -> None:
        self.base_dir = Path(base_dir)

    @abstractmethod
    def test(self) -> TestResult:
        """Inspect the repository and report whether the guideline is met."""

    @abstractmethod
    def name(self) -> str:
        """Human readable guideline name."""

    @abstractmethod
    def external_description(self) -> str:
        """URL of the guideline documentation."""

    def is_optional(self) -> bool:
        return False


class FileExistsGuideline(QualityGuideline):
    """Passes when at least one of the candidate files exists at the repository root."""

    filenames: tuple[str, ...] = ()
    guideline_name = ""
    guideline_path = ""
    optional = False

    def test(self) -> TestResult:
        for filename in self.filenames:
            if (self.base_dir / filename).is_file():
                return TestResult(passed=True)
        return TestResult(
            passed=False,
            error_description=f"Did not find a {' or '.join(self.filenames)} file in the repository root.",
        )

    def name(self) -> str:
        return self.guideline_name

    def external_description(self) -> str:
        return f"{GUIDELINE_BASE_URL}/{self.guideline_path}"

    def is_optional(self) -> bool:
        return self.optional
