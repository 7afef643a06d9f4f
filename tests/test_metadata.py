"""Tests for trgchecks.metadata."""

from __future__ import annotations

import pytest

from trgchecks.metadata import MetadataParseError, parse_metadata
from trgchecks.models import MetadataRepository


def test_parse_metadata_reads_product_and_leading_repository() -> None:
    raw = b"""
product: "Eclipse Tractus-X Portal"
leadingRepository: "https://github.com/eclipse-tractusx/portal"
repositories:
  - name: "portal-frontend"
    usage: "Frontend"
    url: "https://github.com/eclipse-tractusx/portal-frontend"
openApiSpecs:
  - "https://example.com/openapi.yaml"
"""

    metadata = parse_metadata(raw)

    assert metadata.product_name == "Eclipse Tractus-X Portal"
    assert metadata.leading_repository == "https://github.com/eclipse-tractusx/portal"
    assert metadata.repositories == (
        MetadataRepository(
            name="portal-frontend",
            usage="Frontend",
            url="https://github.com/eclipse-tractusx/portal-frontend",
        ),
    )
    assert metadata.openapi_specs == ("https://example.com/openapi.yaml",)


def test_parse_metadata_defaults_missing_fields_to_empty() -> None:
    metadata = parse_metadata("leadingRepository: https://github.com/org/a\n")

    assert metadata.product_name == ""
    assert metadata.leading_repository == "https://github.com/org/a"
    assert metadata.repositories == ()


@pytest.mark.parametrize(
    "raw",
    [
        b"",
        b"   \n",
        b"product: [unterminated",
        b"- just\n- a list\n",
        b"plain string",
    ],
)
def test_parse_metadata_rejects_malformed_content(raw: bytes) -> None:
    with pytest.raises(MetadataParseError):
        parse_metadata(raw)
