"""Repository metadata guidelines."""

from __future__ import annotations

from ..metadata import METADATA_FILENAME, MetadataParseError, parse_metadata
from .base import GUIDELINE_BASE_URL, QualityGuideline, TestResult


class LeadingRepositoryDefined(QualityGuideline):
    """The `.tractusx` metadata file exists and names the product's leading repository."""

    def test(self) -> TestResult:
        metadata_file = self.base_dir / METADATA_FILENAME
        if not metadata_file.is_file():
            return TestResult(
                passed=False,
                error_description=f"Metadata file {METADATA_FILENAME} does not exist.",
            )

        try:
            metadata = parse_metadata(metadata_file.read_bytes())
        except MetadataParseError as exc:
            return TestResult(
                passed=False,
                error_description=f"Could not parse {METADATA_FILENAME}: {exc}",
            )

        if not metadata.leading_repository:
            return TestResult(
                passed=False,
                error_description=f"Leading repository is not defined in {METADATA_FILENAME}.",
            )
        return TestResult(passed=True)

    def name(self) -> str:
        return "TRG 2.05 - Leading repository defined"

    def external_description(self) -> str:
        return f"{GUIDELINE_BASE_URL}/trg-2/trg-2-5"
