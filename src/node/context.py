# SPDX-License-Identifier: Apache 2.0
# Copyright (c) 2025 IBM

"""Host execution context consumed by the node."""

import re
from abc import ABC, abstractmethod
from typing import Any, Optional

from pydantic import BaseModel, Field

# Marks "no fallback supplied" so that None stays a legal fallback value
_NO_FALLBACK: Any = object()

_JSON_FIELD_EXPRESSION = re.compile(r"^=\{\{\s*\$json\.([A-Za-z_]\w*)\s*\}\}$")


class NodeIdentity(BaseModel):
    """Identity of the node instance, used for error attribution."""

    name: str = Field(..., description="Display name of the node instance")
    type: str = Field(..., description="Registered node type")
    type_version: int = Field(default=1, description="Node type version")


class ExecutionContext(ABC):
    """Accessors the host runtime injects into a node execution."""

    @abstractmethod
    def get_input_data(self) -> list[dict[str, Any]]:
        """Return the ordered input items of this execution."""
        pass

    @abstractmethod
    def get_node_parameter(
        self, name: str, item_index: int, fallback: Any = _NO_FALLBACK
    ) -> Any:
        """Resolve a node parameter for one item.

        Args:
            name: Parameter name
            item_index: Position of the item the value is resolved for
            fallback: Value returned when the parameter is not set

        Returns:
            The resolved parameter value

        Raises:
            ValueError: If the parameter is not set and no fallback is given
        """
        pass

    @abstractmethod
    def continue_on_fail(self) -> bool:
        """Return whether item failures should be recorded instead of raised."""
        pass

    @abstractmethod
    def get_node(self) -> NodeIdentity:
        """Return the identity of the executing node."""
        pass


class StaticExecutionContext(ExecutionContext):
    """In-memory execution context.

    Parameters apply to every item unless overridden per item. Values of the
    form ``={{$json.<field>}}`` are resolved against the item's ``json``
    payload, which is how the HTML source is usually wired to the output of a
    previous step.
    """

    def __init__(
        self,
        items: list[dict[str, Any]],
        parameters: Optional[dict[str, Any]] = None,
        item_parameters: Optional[dict[int, dict[str, Any]]] = None,
        continue_on_fail: bool = False,
        node: Optional[NodeIdentity] = None,
    ) -> None:
        """Initialize context.

        Args:
            items: Input items in host shape (``{"json": {...}}``)
            parameters: Parameter values shared by all items
            item_parameters: Per-item overrides keyed by item index
            continue_on_fail: Whether item failures are recorded inline
            node: Node identity; a generic one is used when omitted
        """
        self.items = items
        self.parameters = parameters or {}
        self.item_parameters = item_parameters or {}
        self._continue_on_fail = continue_on_fail
        self.node = node or NodeIdentity(
            name="Readable Content", type="readableContent", type_version=1
        )

    def get_input_data(self) -> list[dict[str, Any]]:
        return self.items

    def get_node_parameter(
        self, name: str, item_index: int, fallback: Any = _NO_FALLBACK
    ) -> Any:
        overrides = self.item_parameters.get(item_index, {})
        if name in overrides:
            value = overrides[name]
        elif name in self.parameters:
            value = self.parameters[name]
        elif fallback is not _NO_FALLBACK:
            value = fallback
        else:
            raise ValueError(f"Could not get parameter '{name}'")
        return self._resolve_expression(value, item_index)

    def continue_on_fail(self) -> bool:
        return self._continue_on_fail

    def get_node(self) -> NodeIdentity:
        return self.node

    def _resolve_expression(self, value: Any, item_index: int) -> Any:
        if not isinstance(value, str):
            return value
        match = _JSON_FIELD_EXPRESSION.match(value)
        if match is None:
            return value
        item = self.items[item_index] if item_index < len(self.items) else {}
        return (item.get("json") or {}).get(match.group(1))
