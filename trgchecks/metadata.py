"""Parsing of the per-repository `.tractusx` product metadata file."""

from __future__ import annotations

from typing import Any, List

import yaml

from .models import Metadata, MetadataRepository

METADATA_FILENAME = ".tractusx"


class MetadataParseError(ValueError):
    """Raised when metadata content is not well-formed."""


def parse_metadata(raw: bytes | str) -> Metadata:
    """Decode raw `.tractusx` content into a :class:`Metadata` record."""
    text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    if not text.strip():
        raise MetadataParseError("metadata file is empty")

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise MetadataParseError(f"invalid YAML: {exc}") from exc

    if not isinstance(data, dict):
        raise MetadataParseError("metadata must contain a mapping at the root")

    return Metadata(
        product_name=_as_str(data.get("product")),
        leading_repository=_as_str(data.get("leadingRepository")),
        repositories=tuple(_parse_repositories(data.get("repositories"))),
        openapi_specs=tuple(
            _as_str(item) for item in _as_list(data.get("openApiSpecs")) if _as_str(item)
        ),
    )


def _parse_repositories(value: Any) -> List[MetadataRepository]:
    entries: List[MetadataRepository] = []
    for item in _as_list(value):
        if not isinstance(item, dict):
            continue
        entries.append(
            MetadataRepository(
                name=_as_str(item.get("name")),
                usage=_as_str(item.get("usage")),
                url=_as_str(item.get("url")),
            )
        )
    return entries


def _as_str(value: Any) -> str:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float, bool)):
        return str(value)
    return ""


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


__all__ = ["METADATA_FILENAME", "MetadataParseError", "parse_metadata"]
