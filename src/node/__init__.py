"""Readable content node.

Adapts the extraction package to a workflow host: parameters are read per
item through the host context, the extracted content is optionally rendered
as Markdown, and the result is projected onto the requested output fields.
"""

from .context import ExecutionContext, NodeIdentity, StaticExecutionContext
from .errors import ExtractionError, MissingInputError, NodeOperationError, TransformError
from .models import ContentFormat, FailurePolicy, NodeExecutionData, NodeOptions
from .node import ReadableContentNode

__all__ = [
    "ContentFormat",
    "ExecutionContext",
    "ExtractionError",
    "FailurePolicy",
    "MissingInputError",
    "NodeExecutionData",
    "NodeIdentity",
    "NodeOperationError",
    "NodeOptions",
    "ReadableContentNode",
    "StaticExecutionContext",
    "TransformError",
]
