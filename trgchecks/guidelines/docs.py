"""Documentation file guidelines."""

from __future__ import annotations

from .base import FileExistsGuideline


class ReadmeExists(FileExistsGuideline):
    filenames = ("README.md",)
    guideline_name = "TRG 1.01 - README.md"
    guideline_path = "trg-1/trg-1-1"


class InstallExists(FileExistsGuideline):
    filenames = ("INSTALL.md",)
    guideline_name = "TRG 1.02 - INSTALL.md"
    guideline_path = "trg-1/trg-1-2"
    optional = True


class ChangelogExists(FileExistsGuideline):
    filenames = ("CHANGELOG.md",)
    guideline_name = "TRG 1.03 - CHANGELOG.md"
    guideline_path = "trg-1/trg-1-3"
