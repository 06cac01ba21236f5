#!/usr/bin/env python3
# SPDX-License-Identifier: Apache 2.0
# Copyright (c) 2025 IBM

"""
Readable content extraction example.

This example runs the node over a small batch of HTML items:
- Clean HTML output with page metadata
- Markdown output next to the HTML
- Selecting output fields
- Recording failing items instead of aborting the batch
"""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.node import NodeOperationError, ReadableContentNode, StaticExecutionContext

FIXTURES = Path(__file__).parent.parent / "tests" / "fixtures"


def load_page(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


async def main() -> None:
    """Demonstrate readable content extraction."""
    print("=" * 70)
    print("Readable Content Extraction Example")
    print("=" * 70)

    node = ReadableContentNode()

    # Items as a previous step would hand them over
    print("\n1. Preparing items...")
    items = [
        {"json": {"data": load_page("simple-article.html")}},
        {"json": {"data": load_page("complex-article.html")}},
        {"json": {"data": ""}},
    ]
    print(f"✓ Prepared {len(items)} items")

    print("\n2. Extracting HTML and Markdown...")
    context = StaticExecutionContext(
        items=items,
        parameters={
            "htmlSource": "={{$json.data}}",
            "url": "https://www.example.com/news/article",
            "contentFormat": "both",
            "options": {
                "outputFields": ["title", "author", "wordCount", "contentMarkdown"],
            },
        },
        continue_on_fail=True,
    )
    try:
        output = await node.execute(context)
    except NodeOperationError as e:
        print(f"✗ Extraction failed: {e.message}")
        return

    for record in output[0]:
        print(f"\n  Item {record.paired_item.item}:")
        if "error" in record.json:
            print(f"    Error: {record.json['error']}")
            continue
        print(f"    Title: {record.json.get('title')}")
        print(f"    Author: {record.json.get('author')}")
        print(f"    Words: {record.json.get('wordCount')}")
        preview = record.json.get("contentMarkdown", "")[:120].replace("\n", " ")
        print(f"    Markdown: {preview}...")

    print("\n3. Stopping on the first failure...")
    context = StaticExecutionContext(items=items, continue_on_fail=False)
    try:
        await node.execute(context)
    except NodeOperationError as e:
        print(f"✓ Item {e.item_index} aborted the batch: {e.message}")
        print(f"  Records emitted before the failure: {len(e.partial_output)}")

    print("\n" + "=" * 70)
    print("Example completed!")
    print("=" * 70)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
