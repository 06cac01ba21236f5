# SPDX-License-Identifier: Apache 2.0
# Copyright (c) 2025 IBM

"""Typed records exchanged between the node and the extraction stack."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SandboxOptions(BaseModel):
    """Restrictions applied when turning untrusted HTML into a document."""

    model_config = ConfigDict(frozen=True)

    disable_scripts: bool = Field(
        default=True, description="Neutralise scripts and inline event handlers"
    )
    disable_external_resources: bool = Field(
        default=True,
        description="Drop frames, embeds and stylesheet/preload links",
    )
    headless: bool = Field(
        default=True, description="Parse without any layout or rendering step"
    )


class ExtractionOptions(BaseModel):
    """Options handed to the content extractor for a single document."""

    model_config = ConfigDict(frozen=True)

    debug: bool = False
    remove_images: bool = False
    remove_exact_selectors: bool = True
    remove_partial_selectors: bool = True
    url: str | None = None


class ExtractionResult(BaseModel):
    """Readable content and metadata extracted from one document.

    ``content`` is always set (possibly empty). Every other field is ``None``
    when the extractor could not infer it from the document.
    """

    content: str = ""
    title: str | None = None
    author: str | None = None
    description: str | None = None
    domain: str | None = None
    word_count: int | None = None
    published: str | None = None
    image: str | None = None
    schema_org_data: Any | None = None
    content_markdown: str | None = None
