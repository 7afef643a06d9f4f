"""Serialises check reports to JSON and renders the HTML dashboard."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .logging import get_logger
from .models import CheckedProduct, CheckedRepository, CheckReport, GuidelineCheck, Repository

HTML_FILENAME = "index.html"
JSON_FILENAME = "report.json"

logger = get_logger("report")


def report_to_dict(report: CheckReport) -> Dict[str, Any]:
    """Return a JSON-serialisable view of `report`."""
    return {
        "products": [_product_to_dict(product) for product in report.products],
        "unhandledRepositories": [_repository_to_dict(repo) for repo in report.unhandled],
    }


def _product_to_dict(product: CheckedProduct) -> Dict[str, Any]:
    return {
        "name": product.name,
        "leadingRepo": product.leading_repo,
        "overallPassed": product.overall_passed,
        "checkedRepositories": [_checked_repo_to_dict(repo) for repo in product.checked_repositories],
        "declaredRepositories": [
            {"name": repo.name, "usage": repo.usage, "url": repo.url}
            for repo in product.declared_repositories
        ],
        "openApiSpecs": list(product.openapi_specs),
    }


def _checked_repo_to_dict(repo: CheckedRepository) -> Dict[str, Any]:
    return {
        "repoName": repo.repo_name,
        "repoUrl": repo.repo_url,
        "passedAllGuidelines": repo.passed_all_guidelines,
        "guidelineChecks": [_check_to_dict(check) for check in repo.guideline_checks],
    }


def _check_to_dict(check: GuidelineCheck) -> Dict[str, Any]:
    return {
        "guidelineName": check.guideline_name,
        "guidelineUrl": check.guideline_url,
        "passed": check.passed,
        "optional": check.optional,
        "errorDescription": check.error_description,
    }


def _repository_to_dict(repo: Repository) -> Dict[str, str]:
    return {"name": repo.name, "url": repo.url}


class ReportRenderer:
    """Renders a check report into the HTML dashboard."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        directories: List[str] = []
        if templates_dir:
            directories.append(str(templates_dir))
        directories.append(str(Path(__file__).with_name("templates")))
        self._env = Environment(
            loader=FileSystemLoader(directories),
            autoescape=select_autoescape(["html", "j2"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render_html(
        self, report: CheckReport, *, generated_at: datetime | None = None
    ) -> str:
        template = self._env.get_template("dashboard.html.j2")
        timestamp = generated_at or datetime.now(timezone.utc)
        passed = sum(1 for product in report.products if product.overall_passed)
        return template.render(
            products=report.products,
            unhandled=report.unhandled,
            passed_products=passed,
            generated_at=timestamp.strftime("%Y-%m-%d %H:%M UTC"),
        )

    def render_json(self, report: CheckReport) -> str:
        return json.dumps(report_to_dict(report), indent=2) + "\n"


def write_report(
    report: CheckReport,
    output_dir: Path,
    formats: Sequence[str] = ("html", "json"),
    *,
    renderer: ReportRenderer | None = None,
) -> List[Path]:
    """Write the requested report formats into `output_dir` and return the written paths."""
    renderer = renderer or ReportRenderer()
    output_dir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    for fmt in formats:
        if fmt == "html":
            target = output_dir / HTML_FILENAME
            target.write_text(renderer.render_html(report), encoding="utf-8")
        elif fmt == "json":
            target = output_dir / JSON_FILENAME
            target.write_text(renderer.render_json(report), encoding="utf-8")
        else:
            raise ValueError(f"Unknown report format: {fmt}")
        logger.info("Wrote %s report to %s", fmt, target)
        written.append(target)
    return written


__all__ = ["ReportRenderer", "report_to_dict", "write_report"]
