# SPDX-License-Identifier: Apache 2.0
# Copyright (c) 2025 IBM

import asyncio
import json
import logging
import os
import sys
from typing import Any
from collections.abc import Awaitable

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import PlainTextResponse
from pydantic import BaseModel, Field

from src.node import ReadableContentNode, StaticExecutionContext
from src.node.models import ContentFormat


# Load environment variables from .env file
def load_env_file() -> None:
    """Load environment variables from .env file."""
    env_file = os.path.join(
        os.path.dirname(os.path.dirname(os.path.dirname(__file__))), ".env"
    )
    if os.path.exists(env_file):
        with open(env_file, "r") as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    os.environ[key] = value


# Load environment variables
load_env_file()

# Configure logging
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

node = ReadableContentNode()

# Default timeout (in seconds) for MCP tool execution. Can be overridden via env.
DEFAULT_TOOL_TIMEOUT = int(os.getenv("MCP_TOOL_TIMEOUT", "30"))

# Per-tool timeout defaults (seconds).
# Override via environment variables MCP_TIMEOUT_<TOOL>, e.g., MCP_TIMEOUT_EXTRACT_BATCH=300
TIMEOUT_DEFAULTS: dict[str, int] = {
    "extract_content": 30,
    "extract_batch": 120,
}


def get_timeout(category: str, fallback: int | None = None) -> int:
    """Resolve timeout for a category from env or defaults.

    Env var format: MCP_TIMEOUT_<CATEGORY>, e.g., MCP_TIMEOUT_EXTRACT_CONTENT=45
    """
    env_key = f"MCP_TIMEOUT_{category.upper()}"
    val = os.getenv(env_key)
    if val is not None:
        try:
            return int(val)
        except ValueError:
            pass
    if fallback is not None:
        return fallback
    return TIMEOUT_DEFAULTS.get(category, DEFAULT_TOOL_TIMEOUT)


async def run_with_timeout(
    awaitable: Awaitable[Any], tool_name: str, timeout_s: int | None = None
) -> tuple[bool, Any]:
    """Run an awaitable with a timeout, return (ok, result_or_error_message).

    If the awaitable completes, returns (True, result). If it times out, returns
    (False, error_message). Any other exception is caught and returned as (False, error_message).
    """
    to = timeout_s if timeout_s is not None else DEFAULT_TOOL_TIMEOUT
    try:
        result = await asyncio.wait_for(awaitable, timeout=to)
        return True, result
    except asyncio.TimeoutError:
        logger.error("Tool '%s' timed out after %s seconds", tool_name, to)
        return False, f"Error: '{tool_name}' timed out after {to} seconds"
    except Exception as e:
        logger.exception("Tool '%s' failed: %s", tool_name, e)
        return False, f"Error: {str(e)}"


# Pydantic models for tool inputs
class ExtractContentInput(BaseModel):
    html: str = Field(..., description="HTML document to extract readable content from")
    url: str = Field(
        default="", description="Original URL of the page (helps with relative links)"
    )
    content_format: ContentFormat = Field(
        default=ContentFormat.HTML,
        description="Output format of the extracted content",
    )
    options: dict[str, Any] = Field(
        default_factory=dict,
        description="Node options, e.g. {'removeImages': true, 'outputFields': ['content', 'title']}",
    )


class ExtractBatchInput(BaseModel):
    documents: list[str] = Field(..., description="HTML documents to process in order")
    url: str = Field(default="", description="Original URL shared by all documents")
    content_format: ContentFormat = Field(
        default=ContentFormat.HTML,
        description="Output format of the extracted content",
    )
    options: dict[str, Any] = Field(
        default_factory=dict, description="Node options shared by all documents"
    )
    continue_on_fail: bool = Field(
        default=True,
        description="Record failing documents as error entries instead of aborting",
    )


def build_context(
    documents: list[str],
    url: str,
    content_format: ContentFormat,
    options: dict[str, Any],
    continue_on_fail: bool,
) -> StaticExecutionContext:
    """Wrap tool input into an in-memory execution context."""
    return StaticExecutionContext(
        items=[{"json": {"data": html}} for html in documents],
        parameters={
            "htmlSource": "={{$json.data}}",
            "url": url,
            "contentFormat": content_format.value,
            "options": options,
        },
        continue_on_fail=continue_on_fail,
    )


async def run_extraction(input: ExtractContentInput) -> str:
    """Extract a single document and return the projected fields as JSON."""
    context = build_context(
        [input.html], input.url, input.content_format, input.options, False
    )
    ok, response = await run_with_timeout(
        node.execute(context), "extract_content", get_timeout("extract_content")
    )
    if not ok:
        return str(response)
    return json.dumps(response[0][0].json, indent=2, default=str)


async def run_batch_extraction(input: ExtractBatchInput) -> str:
    """Extract several documents and return one record per document as JSON."""
    context = build_context(
        input.documents,
        input.url,
        input.content_format,
        input.options,
        input.continue_on_fail,
    )
    ok, response = await run_with_timeout(
        node.execute(context), "extract_batch", get_timeout("extract_batch")
    )
    if not ok:
        return str(response)
    return json.dumps(
        [record.to_dict() for record in response[0]], indent=2, default=str
    )


async def create_mcp_server() -> FastMCP:
    """Create and configure the FastMCP server with content extraction tools."""

    # Create FastMCP server directly
    app = FastMCP("readable-content")

    @app.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> PlainTextResponse:
        return PlainTextResponse(
            f"{node.display_name} node v{node.version} is ready"
        )

    @app.tool()
    async def extract_content(input: ExtractContentInput) -> str:
        """Extract the readable main content of an HTML document."""
        logger.info(
            f"Extracting content ({len(input.html)} chars, format={input.content_format.value})"
        )
        return await run_extraction(input)

    @app.tool()
    async def extract_batch(input: ExtractBatchInput) -> str:
        """Extract the readable main content of several HTML documents."""
        logger.info(f"Extracting content from {len(input.documents)} documents")
        return await run_batch_extraction(input)

    return app


async def main() -> None:
    """Main entry point for the MCP server."""
    app = await create_mcp_server()
    await app.run_async()


async def run_http_server(host: str = "localhost", port: int = 8030) -> None:
    """Run the MCP server with HTTP interface."""
    # Create the MCP server
    mcp_app = await create_mcp_server()

    print(f"Starting FastMCP HTTP server on http://{host}:{port}")
    print(f"Health check: http://{host}:{port}/health")
    await mcp_app.run_http_async(host=host, port=port)


def run_server() -> None:
    """Entry point for running the server."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nServer stopped by user")
    except Exception as e:
        print(f"Error running server: {e}")
        sys.exit(1)


def run_http_server_sync(host: str | None = None, port: int | None = None) -> None:
    """Synchronous entry point for running the HTTP server."""
    host = host or os.getenv("MCP_HTTP_HOST", "localhost")
    port = port or int(os.getenv("MCP_HTTP_PORT", "8030"))
    try:
        asyncio.run(run_http_server(host, port))
    except KeyboardInterrupt:
        print("\nHTTP server stopped by user")
    except Exception as e:
        print(f"Error running HTTP server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    run_server()
