# SPDX-License-Identifier: Apache 2.0
# Copyright (c) 2025 IBM

"""Data models for node parameters and node output."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ContentFormat(str, Enum):
    """Post-processing applied to the extracted content."""

    HTML = "html"
    MARKDOWN = "markdown"
    BOTH = "both"


class FailurePolicy(str, Enum):
    """What the batch does when an item fails."""

    STOP = "stop"
    CONTINUE = "continue"

    @classmethod
    def from_flag(cls, continue_on_fail: bool) -> "FailurePolicy":
        return cls.CONTINUE if continue_on_fail else cls.STOP


class NodeOptions(BaseModel):
    """The ``options`` collection of the node."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # Toggles may arrive as null from the host; the adapter maps them to defaults
    remove_images: bool | None = Field(default=False, alias="removeImages")
    remove_exact_selectors: bool | None = Field(
        default=True, alias="removeExactSelectors"
    )
    remove_partial_selectors: bool | None = Field(
        default=True, alias="removePartialSelectors"
    )
    debug: bool | None = False
    output_fields: list[str] | None = Field(default=None, alias="outputFields")


class ResolvedParameters(BaseModel):
    """Parameters resolved for a single item."""

    html_source: str
    url: str = ""
    content_format: ContentFormat = ContentFormat.HTML
    options: NodeOptions = Field(default_factory=NodeOptions)


@dataclass
class PairedItem:
    """Back-reference from an output record to its input item."""

    item: int


@dataclass
class NodeExecutionData:
    """One output record in host shape."""

    json: dict[str, Any]
    paired_item: PairedItem

    def to_dict(self) -> dict[str, Any]:
        """Render the record the way the host expects it."""
        return {"json": self.json, "pairedItem": {"item": self.paired_item.item}}
