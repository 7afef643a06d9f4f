"""Tractus-X release guideline checks for GitHub organizations."""

from .models import (
    CheckedProduct,
    CheckedRepository,
    CheckReport,
    GuidelineCheck,
    Metadata,
    Product,
    RepoInfo,
    Repository,
)
from .orchestrator import Orchestrator

__version__ = "0.1.0"

__all__ = [
    "CheckReport",
    "CheckedProduct",
    "CheckedRepository",
    "GuidelineCheck",
    "Metadata",
    "Orchestrator",
    "Product",
    "RepoInfo",
    "Repository",
]
