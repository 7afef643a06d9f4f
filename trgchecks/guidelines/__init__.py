"""Guideline check implementations and the registered check list."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List, Sequence, Set

from .base import QualityGuideline, TestResult
from .container import AllowedBaseImage
from .docs import ChangelogExists, InstallExists, ReadmeExists
from .helm import HelmStructureExists
from .repo import LeadingRepositoryDefined

GuidelineFactory = Callable[[Path], QualityGuideline]

# Registration order is the order checks run and are reported in.
_BUILTIN_FACTORIES: Dict[str, GuidelineFactory] = {
    "readme": ReadmeExists,
    "install": InstallExists,
    "changelog": ChangelogExists,
    "leading_repository": LeadingRepositoryDefined,
    "base_image": AllowedBaseImage,
    "helm_structure": HelmStructureExists,
}


def guideline_names() -> List[str]:
    """Return the names of all registered guidelines in execution order."""
    return list(_BUILTIN_FACTORIES)


def initialize_checks_for_directory(
    directory: str | Path,
    *,
    enabled: Sequence[str] | None = None,
    allowed_base_images: Sequence[str] | None = None,
) -> List[QualityGuideline]:
    """Instantiate the registered guidelines bound to a cloned repository directory."""
    base_dir = Path(directory)
    enabled_set: Set[str] | None = None
    if enabled:
        enabled_set = {name.lower() for name in enabled}
        unknown = enabled_set - set(_BUILTIN_FACTORIES)
        if unknown:
            raise ValueError(f"Unknown guidelines requested: {', '.join(sorted(unknown))}")

    checks: List[QualityGuideline] = []
    for name, factory in _BUILTIN_FACTORIES.items():
        if enabled_set is not None and name not in enabled_set:
            continue
        if factory is AllowedBaseImage:
            check = AllowedBaseImage(base_dir, allowed_base_images)
        else:
            check = factory(base_dir)
        checks.append(check)
    return checks


__all__ = [
    "AllowedBaseImage",
    "ChangelogExists",
    "HelmStructureExists",
    "InstallExists",
    "LeadingRepositoryDefined",
    "QualityGuideline",
    "ReadmeExists",
    "TestResult",
    "guideline_names",
    "initialize_checks_for_directory",
]
