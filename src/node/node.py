# SPDX-License-Identifier: Apache 2.0
# Copyright (c) 2025 IBM

"""Readable content node: per-item pipeline and failure isolation."""

import logging

from .adapter import extract_item
from .context import ExecutionContext
from .description import PROPERTIES
from .errors import NodeOperationError
from .models import FailurePolicy, NodeExecutionData, PairedItem
from .parameters import resolve_parameters
from .projection import project_result
from .transform import apply_content_format

logger = logging.getLogger(__name__)


class ReadableContentNode:
    """Extract readable main content from HTML items."""

    display_name = "Readable Content"
    name = "readableContent"
    version = 1
    properties = PROPERTIES

    async def execute(self, context: ExecutionContext) -> list[list[NodeExecutionData]]:
        """Process every input item of the execution.

        Args:
            context: Host execution context

        Returns:
            A single output branch with one record per input item

        Raises:
            NodeOperationError: On the first failing item, unless the host
                asked to continue on failure
        """
        policy = FailurePolicy.from_flag(context.continue_on_fail())
        return [await self.process_batch(context, policy)]

    async def process_batch(
        self, context: ExecutionContext, policy: FailurePolicy
    ) -> list[NodeExecutionData]:
        """Run the pipeline for each item in order under a failure policy."""
        items = context.get_input_data()
        logger.info(f"Processing {len(items)} item(s) with policy '{policy.value}'")

        return_data: list[NodeExecutionData] = []
        for i in range(len(items)):
            try:
                return_data.append(self.process_item(context, i))
            except Exception as e:
                error = self._attribute(e, context, i)
                if policy == FailurePolicy.CONTINUE:
                    logger.warning(f"Item {i} failed, recording error: {error.message}")
                    return_data.append(
                        NodeExecutionData(
                            json={"error": error.message}, paired_item=PairedItem(i)
                        )
                    )
                    continue
                logger.error(f"Item {i} failed, aborting batch: {error.message}")
                error.partial_output = list(return_data)
                if error is e:
                    raise
                raise error from e

        logger.info(f"Processed {len(return_data)} item(s)")
        return return_data

    def process_item(self, context: ExecutionContext, item_index: int) -> NodeExecutionData:
        """Resolve, extract, transform and project a single item."""
        params = resolve_parameters(context, item_index)
        result = extract_item(
            params.html_source, params.url, params.options, item_index
        )
        result = apply_content_format(result, params.content_format, item_index)
        projected = project_result(
            result, params.options.output_fields, params.content_format
        )
        logger.debug(f"Item {item_index} produced fields {list(projected)}")
        return NodeExecutionData(json=projected, paired_item=PairedItem(item_index))

    @staticmethod
    def _attribute(
        error: Exception, context: ExecutionContext, item_index: int
    ) -> NodeOperationError:
        """Attach node and item attribution, wrapping foreign exceptions."""
        if not isinstance(error, NodeOperationError):
            error = NodeOperationError(str(error), item_index=item_index)
        if error.item_index is None:
            error.item_index = item_index
        if error.node is None:
            error.node = context.get_node()
        return error
