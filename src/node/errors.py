# SPDX-License-Identifier: Apache 2.0
# Copyright (c) 2025 IBM

"""Errors raised while processing node items."""

from typing import Any, Optional


class NodeOperationError(Exception):
    """Failure of a single item, attributed to the node that raised it."""

    def __init__(
        self,
        message: str,
        item_index: Optional[int] = None,
        node: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.item_index = item_index
        self.node = node
        # Records emitted for earlier items when the batch was aborted
        self.partial_output: list[Any] = []


class MissingInputError(NodeOperationError):
    """The HTML source resolved to an empty or absent value."""

    def __init__(self, item_index: Optional[int] = None, node: Optional[Any] = None):
        super().__init__("HTML source is required", item_index=item_index, node=node)


class ExtractionError(NodeOperationError):
    """The sandboxed parser or the content extractor failed."""


class TransformError(NodeOperationError):
    """Markdown conversion of the extracted content failed."""
