# SPDX-License-Identifier: Apache 2.0
# Copyright (c) 2025 IBM

"""Per-item parameter resolution."""

import logging

from .context import ExecutionContext
from .description import get_property
from .models import ContentFormat, NodeOptions, ResolvedParameters

logger = logging.getLogger(__name__)


def resolve_parameters(context: ExecutionContext, item_index: int) -> ResolvedParameters:
    """Resolve the node parameters for one item.

    Declared defaults are handed to the host accessor as fallbacks, so unset
    parameters never fail here. An empty HTML source is reported later by the
    extraction adapter.

    Args:
        context: Host execution context
        item_index: Position of the item being processed

    Returns:
        ResolvedParameters for the item
    """
    html_source = context.get_node_parameter(
        "htmlSource", item_index, get_property("htmlSource").default
    )
    url = context.get_node_parameter("url", item_index, get_property("url").default)
    raw_format = context.get_node_parameter(
        "contentFormat", item_index, get_property("contentFormat").default
    )
    raw_options = context.get_node_parameter(
        "options", item_index, get_property("options").default
    )

    return ResolvedParameters(
        html_source="" if html_source is None else str(html_source),
        url=url or "",
        content_format=_content_format(raw_format, item_index),
        options=NodeOptions.model_validate(raw_options or {}),
    )


def _content_format(value: object, item_index: int) -> ContentFormat:
    try:
        return ContentFormat(value)
    except ValueError:
        logger.warning(
            "Unknown content format %r for item %d, returning HTML", value, item_index
        )
        return ContentFormat.HTML
