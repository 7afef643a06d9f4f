"""Tests for trgchecks.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from trgchecks.config import (
    DEFAULT_ALLOWED_BASE_IMAGES,
    Config,
    ConfigError,
    load_config,
)


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path, environ={})

    assert isinstance(config, Config)
    assert config.root == tmp_path.resolve()
    assert config.github.organization == "eclipse-tractusx"
    assert config.github.api_url == "https://api.github.com"
    assert config.github.per_page == 100
    assert config.clone.depth == 1
    assert config.guidelines.enabled == []
    assert config.guidelines.allowed_base_images == list(DEFAULT_ALLOWED_BASE_IMAGES)
    assert config.report.output_dir is None
    assert config.report.formats == ["html", "json"]
    assert config.github_token is None


def test_load_config_reads_token_from_environment(tmp_path: Path) -> None:
    config = load_config(tmp_path, environ={"GITHUB_ACCESS_TOKEN": "ghp_example"})

    assert config.github_token == "ghp_example"


def test_load_config_treats_empty_token_as_unauthenticated(tmp_path: Path) -> None:
    config = load_config(tmp_path, environ={"GITHUB_ACCESS_TOKEN": ""})

    assert config.github_token is None


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".trgchecks.yml"
    config_file.write_text(
        """
github:
  organization: "example-org"
  api_url: "https://github.example.com/api/v3/"
  per_page: 50
  timeout: 10
clone:
  timeout: 60
  depth: 5
guidelines:
  enabled: [readme, changelog]
  allowed_base_images:
    - eclipse-temurin
    - python
report:
  output_dir: "site"
  formats: [json]
""",
        encoding="utf-8",
    )

    config = load_config(config_file, environ={})

    assert config.github.organization == "example-org"
    assert config.github.api_url == "https://github.example.com/api/v3"
    assert config.github.per_page == 50
    assert config.github.timeout == pytest.approx(10.0)
    assert config.clone.timeout == pytest.approx(60.0)
    assert config.clone.depth == 5
    assert config.guidelines.enabled == ["readme", "changelog"]
    assert config.guidelines.allowed_base_images == ["eclipse-temurin", "python"]
    assert config.report.output_dir == tmp_path.resolve() / "site"
    assert config.report.formats == ["json"]


def test_load_config_rejects_non_mapping_root(tmp_path: Path) -> None:
    (tmp_path / ".trgchecks.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path, environ={})


def test_load_config_rejects_invalid_yaml(tmp_path: Path) -> None:
    (tmp_path / ".trgchecks.yml").write_text("github: [unterminated\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path, environ={})


@pytest.mark.parametrize(
    "content",
    [
        "github:\n  per_page: 500\n",
        "report:\n  formats: [pdf]\n",
    ],
)
def test_load_config_rejects_out_of_range_values(tmp_path: Path, content: str) -> None:
    (tmp_path / ".trgchecks.yml").write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path, environ={})


def test_load_config_empty_file_yields_defaults(tmp_path: Path) -> None:
    (tmp_path / ".trgchecks.yml").write_text("\n", encoding="utf-8")

    config = load_config(tmp_path, environ={})

    assert config.github.organization == "eclipse-tractusx"


def test_load_config_rejects_unknown_guideline_names(tmp_path: Path) -> None:
    (tmp_path / ".trgchecks.yml").write_text(
        "guidelines:\n  enabled: [readme, licence]\n", encoding="utf-8"
    )

    with pytest.raises(ConfigError, match="licence"):
        load_config(tmp_path, environ={})


def test_load_config_accepts_guideline_names_in_any_case(tmp_path: Path) -> None:
    (tmp_path / ".trgchecks.yml").write_text(
        "guidelines:\n  enabled: [README, Base_Image]\n", encoding="utf-8"
    )

    config = load_config(tmp_path, environ={})

    assert config.guidelines.enabled == ["README", "Base_Image"]
