"""Tests for the Helm chart structure guideline."""

from __future__ import annotations

from trgchecks.guidelines.helm import HelmStructureExists

CHART_YAML = """
apiVersion: v2
name: demo
version: 0.1.0
"""


def _complete_chart(repo_builder, name: str = "demo", chart_yaml: str = CHART_YAML) -> None:
    repo_builder.write(
        {
            f"charts/{name}/Chart.yaml": chart_yaml,
            f"charts/{name}/values.yaml": "replicaCount: 1\n",
            f"charts/{name}/README.md": "# Chart\n",
            f"charts/{name}/LICENSE": "Apache-2.0\n",
            f"charts/{name}/.helmignore": ".git/\n",
            f"charts/{name}/templates/deployment.yaml": "kind: Deployment\n",
        }
    )


def test_passes_without_charts_directory(repo_builder) -> None:
    assert HelmStructureExists(repo_builder.path()).test().passed is True


def test_passes_with_complete_chart(repo_builder) -> None:
    _complete_chart(repo_builder)

    assert HelmStructureExists(repo_builder.path()).test().passed is True


def test_fails_with_empty_charts_directory(repo_builder) -> None:
    repo_builder.mkdir("charts")

    result = HelmStructureExists(repo_builder.path()).test()

    assert result.passed is False
    assert "does not contain any Helm chart" in result.error_description


def test_reports_missing_files_per_chart(repo_builder) -> None:
    _complete_chart(repo_builder)
    repo_builder.write({"charts/partial/Chart.yaml": CHART_YAML})

    result = HelmStructureExists(repo_builder.path()).test()

    assert result.passed is False
    assert "charts/partial is missing values.yaml" in result.error_description
    assert "templates/" in result.error_description
    assert "charts/demo" not in result.error_description


def test_reports_incomplete_chart_metadata(repo_builder) -> None:
    _complete_chart(repo_builder, chart_yaml="apiVersion: v2\nname: demo\n")

    result = HelmStructureExists(repo_builder.path()).test()

    assert result.passed is False
    assert "Chart.yaml lacks version" in result.error_description


def test_reports_invalid_chart_yaml(repo_builder) -> None:
    _complete_chart(repo_builder, chart_yaml="apiVersion: [v2\n")

    result = HelmStructureExists(repo_builder.path()).test()

    assert result.passed is False
    assert "not valid YAML" in result.error_description
