# SPDX-License-Identifier: Apache 2.0
# Copyright (c) 2025 IBM

"""Projection of extraction results onto the requested output fields."""

from collections.abc import Callable
from typing import Any, Optional

from src.extraction import ExtractionResult

from .description import DEFAULT_OUTPUT_FIELDS
from .models import ContentFormat

OUTPUT_FIELDS: tuple[tuple[str, Callable[[ExtractionResult], Any]], ...] = (
    ("content", lambda r: r.content),
    ("contentMarkdown", lambda r: r.content_markdown),
    ("title", lambda r: r.title),
    ("author", lambda r: r.author),
    ("description", lambda r: r.description),
    ("domain", lambda r: r.domain),
    ("wordCount", lambda r: r.word_count),
    ("published", lambda r: r.published),
    ("image", lambda r: r.image),
    ("schemaOrgData", lambda r: r.schema_org_data),
)

_ACCESSORS = dict(OUTPUT_FIELDS)


def default_output_fields(content_format: ContentFormat) -> list[str]:
    """Fields emitted when the caller did not pick any."""
    fields = list(DEFAULT_OUTPUT_FIELDS)
    if content_format == ContentFormat.BOTH:
        fields.append("contentMarkdown")
    return fields


def project_result(
    result: ExtractionResult,
    output_fields: Optional[list[str]],
    content_format: ContentFormat,
) -> dict[str, Any]:
    """Keep only the requested fields that the extractor populated.

    Unknown field names and fields the extractor left empty are dropped
    silently.
    """
    fields = output_fields or default_output_fields(content_format)

    projected: dict[str, Any] = {}
    for name in fields:
        accessor = _ACCESSORS.get(name)
        if accessor is None:
            continue
        value = accessor(result)
        if value is not None:
            projected[name] = value
    return projected
