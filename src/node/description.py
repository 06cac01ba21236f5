# SPDX-License-Identifier: Apache 2.0
# Copyright (c) 2025 IBM

"""Declarative configuration surface of the node."""

from typing import Any

from pydantic import BaseModel, Field


class PropertyOption(BaseModel):
    name: str
    value: str
    description: str = ""


class NodeProperty(BaseModel):
    display_name: str
    name: str
    type: str = Field(
        ...,
        json_schema_extra={
            "enum": ["string", "options", "boolean", "collection", "multiOptions"]
        },
    )
    default: Any = None
    required: bool = False
    description: str = ""
    options: list["PropertyOption | NodeProperty"] = Field(default_factory=list)


NodeProperty.model_rebuild()

OUTPUT_FIELD_OPTIONS = [
    PropertyOption(
        name="Content", value="content", description="The main extracted content"
    ),
    PropertyOption(
        name="Content Markdown",
        value="contentMarkdown",
        description="The content in Markdown format (only with HTML + Markdown)",
    ),
    PropertyOption(name="Title", value="title", description="The page title"),
    PropertyOption(name="Author", value="author", description="The article author"),
    PropertyOption(
        name="Description",
        value="description",
        description="The article summary/description",
    ),
    PropertyOption(name="Domain", value="domain", description="The website domain"),
    PropertyOption(
        name="Word Count",
        value="wordCount",
        description="The total number of words in the content",
    ),
    PropertyOption(
        name="Published Date", value="published", description="The publication date"
    ),
    PropertyOption(
        name="Image", value="image", description="The main article image URL"
    ),
    PropertyOption(
        name="Schema.org Data",
        value="schemaOrgData",
        description="Extracted structured data",
    ),
]

DEFAULT_OUTPUT_FIELDS = ["content", "title", "author", "description"]

PROPERTIES = [
    NodeProperty(
        display_name="HTML Source",
        name="htmlSource",
        type="string",
        default="={{$json.data}}",
        required=True,
        description="The HTML content to extract from. Usually from an HTTP request step.",
    ),
    NodeProperty(
        display_name="URL",
        name="url",
        type="string",
        default="",
        description="The original URL of the page (helps with relative links)",
    ),
    NodeProperty(
        display_name="Content Format",
        name="contentFormat",
        type="options",
        default="html",
        description="Choose the output format for the extracted content",
        options=[
            PropertyOption(
                name="HTML Only", value="html", description="Return content as HTML"
            ),
            PropertyOption(
                name="Markdown Only",
                value="markdown",
                description="Convert content to Markdown (content field holds Markdown)",
            ),
            PropertyOption(
                name="HTML + Markdown",
                value="both",
                description="Return both HTML (content) and Markdown (contentMarkdown)",
            ),
        ],
    ),
    NodeProperty(
        display_name="Options",
        name="options",
        type="collection",
        default={},
        options=[
            NodeProperty(
                display_name="Remove Images",
                name="removeImages",
                type="boolean",
                default=False,
                description="Whether to remove images from the extracted content",
            ),
            NodeProperty(
                display_name="Remove Exact Selectors",
                name="removeExactSelectors",
                type="boolean",
                default=True,
                description="Whether to remove elements matching exact selectors like ads, social buttons, etc.",
            ),
            NodeProperty(
                display_name="Remove Partial Selectors",
                name="removePartialSelectors",
                type="boolean",
                default=True,
                description="Whether to remove elements matching partial selectors like ads, social buttons, etc.",
            ),
            NodeProperty(
                display_name="Debug Mode",
                name="debug",
                type="boolean",
                default=False,
                description="Whether to enable verbose logging",
            ),
            NodeProperty(
                display_name="Output Fields",
                name="outputFields",
                type="multiOptions",
                default=list(DEFAULT_OUTPUT_FIELDS),
                description="Choose which fields to include in the output",
                options=OUTPUT_FIELD_OPTIONS,
            ),
        ],
    ),
]


def get_property(name: str) -> NodeProperty:
    """Look up a top-level property by name."""
    for prop in PROPERTIES:
        if prop.name == name:
            return prop
    raise KeyError(f"Unknown node property '{name}'")
