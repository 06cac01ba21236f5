"""Tests for the MCP server tool handlers."""

import asyncio
import json

import pytest

from src.content_mcp.server import (
    ExtractBatchInput,
    ExtractContentInput,
    create_mcp_server,
    get_timeout,
    run_batch_extraction,
    run_extraction,
    run_with_timeout,
)
from src.node.models import ContentFormat


@pytest.mark.unit
class TestTimeouts:
    """Test timeout configuration."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test per-tool defaults."""
        monkeypatch.delenv("MCP_TIMEOUT_EXTRACT_CONTENT", raising=False)
        monkeypatch.delenv("MCP_TIMEOUT_EXTRACT_BATCH", raising=False)

        assert get_timeout("extract_content") == 30
        assert get_timeout("extract_batch") == 120

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the environment overrides the default."""
        monkeypatch.setenv("MCP_TIMEOUT_EXTRACT_BATCH", "300")

        assert get_timeout("extract_batch") == 300

    def test_invalid_env_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a non-integer override falls back to the default."""
        monkeypatch.setenv("MCP_TIMEOUT_EXTRACT_CONTENT", "soon")

        assert get_timeout("extract_content") == 30

    @pytest.mark.asyncio
    async def test_run_with_timeout_expires(self) -> None:
        """Test slow work is reported as a timeout."""
        ok, message = await run_with_timeout(asyncio.sleep(5), "slow_tool", 0.01)

        assert ok is False
        assert "timed out" in message


@pytest.mark.integration
class TestToolHandlers:
    """Test the tool handlers end to end."""

    @pytest.mark.asyncio
    async def test_extract_content(self, simple_html: str) -> None:
        """Test a single document is extracted to JSON."""
        response = await run_extraction(
            ExtractContentInput(
                html=simple_html,
                url="https://www.example.com/news/simple",
                content_format=ContentFormat.BOTH,
                options={"outputFields": ["title", "domain", "contentMarkdown"]},
            )
        )
        payload = json.loads(response)

        assert payload["title"] == "Simple Test Article"
        assert payload["domain"] == "example.com"
        assert "first paragraph" in payload["contentMarkdown"]
        assert "content" not in payload

    @pytest.mark.asyncio
    async def test_extract_content_empty_html(self) -> None:
        """Test an empty document is reported as an error string."""
        response = await run_extraction(ExtractContentInput(html=""))

        assert response == "Error: HTML source is required"

    @pytest.mark.asyncio
    async def test_extract_batch_continue_on_fail(self, simple_html: str) -> None:
        """Test failing documents become error records."""
        response = await run_batch_extraction(
            ExtractBatchInput(documents=[simple_html, "", simple_html])
        )
        records = json.loads(response)

        assert [r["pairedItem"]["item"] for r in records] == [0, 1, 2]
        assert records[1]["json"] == {"error": "HTML source is required"}
        assert records[2]["json"]["title"] == "Simple Test Article"

    @pytest.mark.asyncio
    async def test_extract_batch_stop_on_fail(self, simple_html: str) -> None:
        """Test the batch aborts when failures are not tolerated."""
        response = await run_batch_extraction(
            ExtractBatchInput(documents=[simple_html, ""], continue_on_fail=False)
        )

        assert response == "Error: HTML source is required"

    @pytest.mark.asyncio
    async def test_server_creation(self) -> None:
        """Test the server is created."""
        app = await create_mcp_server()

        assert app.name == "readable-content"
