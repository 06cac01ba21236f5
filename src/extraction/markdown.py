# SPDX-License-Identifier: Apache 2.0
# Copyright (c) 2025 IBM

"""HTML to Markdown conversion."""

import re

from markdownify import ATX, MarkdownConverter

_EXCESS_BLANK_LINES = re.compile(r"\n{3,}")


def build_converter() -> MarkdownConverter:
    """Create a converter emitting ATX headings and fenced code blocks."""
    # markdownify always renders <pre> as a fenced block; code_language=""
    # keeps the fence bare when no language class is present
    return MarkdownConverter(
        heading_style=ATX,
        bullets="-",
        code_language="",
        strip=["script", "style"],
    )


def convert_to_markdown(html: str) -> str:
    """Convert an HTML fragment to Markdown.

    Args:
        html: HTML fragment (typically the extracted article body)

    Returns:
        Markdown text, without leading or trailing blank lines
    """
    if not html:
        return ""
    markdown = build_converter().convert(html)
    return _EXCESS_BLANK_LINES.sub("\n\n", markdown).strip()
