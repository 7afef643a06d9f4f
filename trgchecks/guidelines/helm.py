"""Helm chart layout guideline."""

from __future__ import annotations

from pathlib import Path
from typing import List

import yaml

from .base import GUIDELINE_BASE_URL, QualityGuideline, TestResult

CHARTS_DIR = "charts"
REQUIRED_FILES = ("Chart.yaml", "values.yaml", "README.md", "LICENSE", ".helmignore")
REQUIRED_DIRS = ("templates",)
REQUIRED_CHART_FIELDS = ("apiVersion", "name", "version")


class HelmStructureExists(QualityGuideline):
    """Each chart under `charts/` follows the expected Helm layout.

    Repositories that do not ship a `charts/` directory pass.
    """

    def test(self) -> TestResult:
        charts_root = self.base_dir / CHARTS_DIR
        if not charts_root.is_dir():
            return TestResult(passed=True)

        charts = sorted(path for path in charts_root.iterdir() if path.is_dir())
        if not charts:
            return TestResult(
                passed=False,
                error_description=f"Directory {CHARTS_DIR}/ does not contain any Helm chart.",
            )

        problems: List[str] = []
        for chart in charts:
            problems.extend(_chart_problems(chart, self.base_dir))

        if problems:
            return TestResult(passed=False, error_description="; ".join(problems))
        return TestResult(passed=True)

    def name(self) -> str:
        return "TRG 5.02 - Helm chart structure"

    def external_description(self) -> str:
        return f"{GUIDELINE_BASE_URL}/trg-5/trg-5-02"


def _chart_problems(chart: Path, base_dir: Path) -> List[str]:
    relative = chart.relative_to(base_dir).as_posix()
    problems: List[str] = []

    missing = [name for name in REQUIRED_FILES if not (chart / name).is_file()]
    missing += [f"{name}/" for name in REQUIRED_DIRS if not (chart / name).is_dir()]
    if missing:
        problems.append(f"{relative} is missing {', '.join(missing)}")

    chart_file = chart / "Chart.yaml"
    if chart_file.is_file():
        try:
            data = yaml.safe_load(chart_file.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            problems.append(f"{relative}/Chart.yaml is not valid YAML: {exc}")
        else:
            if not isinstance(data, dict):
                problems.append(f"{relative}/Chart.yaml must contain a mapping")
            else:
                absent = [key for key in REQUIRED_CHART_FIELDS if not data.get(key)]
                if absent:
                    problems.append(f"{relative}/Chart.yaml lacks {', '.join(absent)}")
    return problems
