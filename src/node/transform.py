# SPDX-License-Identifier: Apache 2.0
# Copyright (c) 2025 IBM

"""Content format post-processing."""

from src.extraction import ExtractionResult, convert_to_markdown

from .errors import TransformError
from .models import ContentFormat


def apply_content_format(
    result: ExtractionResult, content_format: ContentFormat, item_index: int = 0
) -> ExtractionResult:
    """Apply the configured content format to an extraction result.

    ``html`` keeps the result as is, ``markdown`` replaces the content with its
    Markdown rendering and ``both`` adds the rendering as ``content_markdown``.
    The input result is never modified.

    Raises:
        TransformError: If the Markdown conversion fails
    """
    if content_format == ContentFormat.HTML:
        return result

    try:
        markdown = convert_to_markdown(result.content)
    except Exception as e:
        raise TransformError(
            f"Markdown conversion failed: {e}", item_index=item_index
        ) from e

    if content_format == ContentFormat.MARKDOWN:
        return result.model_copy(update={"content": markdown})
    return result.model_copy(update={"content_markdown": markdown})
