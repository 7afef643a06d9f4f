"""Runs the registered guideline checks against a cloned repository."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, List

from .guidelines import QualityGuideline, initialize_checks_for_directory
from .logging import get_logger
from .models import CheckedRepository, GuidelineCheck, Repository

ChecksFactory = Callable[[Path], List[QualityGuideline]]

logger = get_logger("pipeline")


def run_quality_checks(
    repo: Repository,
    directory: str | Path,
    checks_factory: ChecksFactory = initialize_checks_for_directory,
) -> CheckedRepository:
    """Run every registered check against `directory` and fold the outcomes.

    A repository passes when each check either passed or is optional.
    """
    return evaluate_checks(repo, checks_factory(Path(directory)))


def evaluate_checks(repo: Repository, checks: Iterable[QualityGuideline]) -> CheckedRepository:
    """Execute `checks` in order and record each outcome for `repo`."""
    checked = CheckedRepository(repo_url=repo.url, repo_name=repo.name, passed_all_guidelines=True)

    for check in checks:
        guideline_check = _run_check(repo, check)
        checked.passed_all_guidelines = checked.passed_all_guidelines and (
            guideline_check.passed or guideline_check.optional
        )
        checked.guideline_checks.append(guideline_check)

    logger.info(
        "Checks for %s %s",
        repo.name,
        "passed" if checked.passed_all_guidelines else "failed",
    )
    return checked


def _run_check(repo: Repository, check: QualityGuideline) -> GuidelineCheck:
    name = type(check).__name__
    url = ""
    optional = False
    try:
        name = check.name()
        url = check.external_description()
        optional = check.is_optional()
        result = check.test()
    except Exception as exc:
        logger.exception("Guideline %s raised while checking %s", name, repo.name)
        return GuidelineCheck(
            passed=False,
            optional=optional,
            error_description=f"Check failed with an unexpected error: {exc}",
            guideline_url=url,
            guideline_name=name,
        )
    return GuidelineCheck(
        passed=result.passed,
        optional=optional,
        error_description=result.error_description,
        guideline_url=url,
        guideline_name=name,
    )


__all__ = ["ChecksFactory", "evaluate_checks", "run_quality_checks"]
