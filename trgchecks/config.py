"""Configuration loading for trgchecks (.trgchecks.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

from .guidelines import guideline_names
from .guidelines.container import DEFAULT_ALLOWED_BASE_IMAGES

CONFIG_FILENAME = ".trgchecks.yml"
TOKEN_ENV_VAR = "GITHUB_ACCESS_TOKEN"

DEFAULT_ORGANIZATION = "eclipse-tractusx"
DEFAULT_API_URL = "https://api.github.com"

REPORT_FORMATS = ("html", "json")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class GitHubConfig:
    """GitHub API settings."""

    organization: str = DEFAULT_ORGANIZATION
    api_url: str = DEFAULT_API_URL
    per_page: int = 100
    timeout: float = 30.0


@dataclass
class CloneConfig:
    """Repository clone settings."""

    timeout: float = 300.0
    depth: int = 1


@dataclass
class GuidelineConfig:
    """Guideline selection and tuning."""

    enabled: List[str] = field(default_factory=list)
    allowed_base_images: List[str] = field(
        default_factory=lambda: list(DEFAULT_ALLOWED_BASE_IMAGES)
    )


@dataclass
class ReportConfig:
    """Where and how reports are written."""

    output_dir: Optional[Path] = None
    formats: List[str] = field(default_factory=lambda: list(REPORT_FORMATS))


@dataclass
class Config:
    """Represents the settings defined in .trgchecks.yml plus the environment."""

    root: Path
    github: GitHubConfig = field(default_factory=GitHubConfig)
    clone: CloneConfig = field(default_factory=CloneConfig)
    guidelines: GuidelineConfig = field(default_factory=GuidelineConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    github_token: Optional[str] = None


def load_config(
    config_path: Path, *, environ: Mapping[str, str] | None = None
) -> Config:
    """Load configuration from disk, falling back to defaults when absent."""
    env = os.environ if environ is None else environ
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()
    token = env.get(TOKEN_ENV_VAR) or None

    if not config_file.exists():
        return Config(root=root, github_token=token)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    github = GitHubConfig()
    github_data = _as_dict(data.get("github"))
    if github_data:
        github.organization = _as_str(github_data.get("organization")) or github.organization
        github.api_url = (_as_str(github_data.get("api_url")) or github.api_url).rstrip("/")
        per_page = _as_int(github_data.get("per_page"))
        if per_page is not None:
            if not 1 <= per_page <= 100:
                raise ConfigError("github.per_page must be between 1 and 100")
            github.per_page = per_page
        github.timeout = _as_float(github_data.get("timeout")) or github.timeout

    clone = CloneConfig()
    clone_data = _as_dict(data.get("clone"))
    if clone_data:
        clone.timeout = _as_float(clone_data.get("timeout")) or clone.timeout
        depth = _as_int(clone_data.get("depth"))
        if depth is not None:
            clone.depth = depth

    guidelines = GuidelineConfig()
    guideline_data = _as_dict(data.get("guidelines"))
    if guideline_data:
        guidelines.enabled = _as_str_list(guideline_data.get("enabled"))
        unknown = sorted({name.lower() for name in guidelines.enabled} - set(guideline_names()))
        if unknown:
            raise ConfigError(
                f"Unknown guidelines in guidelines.enabled: {', '.join(unknown)}"
                f" (known: {', '.join(guideline_names())})"
            )
        allowed = _as_str_list(guideline_data.get("allowed_base_images"))
        if allowed:
            guidelines.allowed_base_images = allowed

    report = ReportConfig()
    report_data = _as_dict(data.get("report"))
    if report_data:
        output_dir = _as_str(report_data.get("output_dir"))
        report.output_dir = root / output_dir if output_dir else None
        formats = [fmt.lower() for fmt in _as_str_list(report_data.get("formats"))]
        unknown = sorted(set(formats) - set(REPORT_FORMATS))
        if unknown:
            raise ConfigError(f"Unknown report formats: {', '.join(unknown)}")
        if formats:
            report.formats = formats

    return Config(
        root=root,
        github=github,
        clone=clone,
        guidelines=guidelines,
        report=report,
        github_token=token,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
