# SPDX-License-Identifier: Apache 2.0
# Copyright (c) 2025 IBM

"""Bridge between node parameters and the extraction stack."""

import logging

from src.extraction import (
    ContentExtractor,
    ExtractionOptions,
    ExtractionResult,
    SandboxOptions,
    parse_document,
)

from .errors import ExtractionError, MissingInputError
from .models import NodeOptions

logger = logging.getLogger(__name__)


def build_extraction_options(options: NodeOptions, url: str = "") -> ExtractionOptions:
    """Translate the node options into extractor options.

    Unset toggles count as off, except the selector toggles, which stay on
    unless explicitly switched off. The URL is only passed along when one was
    given.
    """
    return ExtractionOptions(
        debug=bool(options.debug),
        remove_images=bool(options.remove_images),
        remove_exact_selectors=options.remove_exact_selectors is not False,
        remove_partial_selectors=options.remove_partial_selectors is not False,
        url=url or None,
    )


def extract_item(
    html: str, url: str, options: NodeOptions, item_index: int
) -> ExtractionResult:
    """Extract readable content from one item's HTML.

    Args:
        html: HTML source of the item
        url: Original page URL, may be empty
        options: Node options of the item
        item_index: Position of the item, used for error attribution

    Returns:
        ExtractionResult produced by the extractor, unchanged

    Raises:
        MissingInputError: If the HTML source is empty
        ExtractionError: If parsing or extraction fails
    """
    if not html:
        raise MissingInputError(item_index=item_index)

    extraction_options = build_extraction_options(options, url)
    try:
        document = parse_document(
            html,
            url=extraction_options.url,
            sandbox=SandboxOptions(
                disable_scripts=True, disable_external_resources=True, headless=True
            ),
        )
        return ContentExtractor(document, extraction_options).parse()
    except Exception as e:
        logger.debug(f"Extraction failed for item {item_index}: {e}")
        raise ExtractionError(str(e) or type(e).__name__, item_index=item_index) from e
