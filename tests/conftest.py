import os
import sys
from pathlib import Path
from typing import Any, Callable

import pytest

# Add the project root to the Python path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.node import StaticExecutionContext

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(filename: str) -> str:
    """Load an HTML fixture."""
    return (FIXTURES_DIR / filename).read_text(encoding="utf-8")


@pytest.fixture
def simple_html() -> str:
    return load_fixture("simple-article.html")


@pytest.fixture
def complex_html() -> str:
    return load_fixture("complex-article.html")


@pytest.fixture
def make_context() -> Callable[..., StaticExecutionContext]:
    """Build an execution context with one HTML source per item."""

    def _make(
        sources: list[Any],
        content_format: str = "html",
        options: dict[str, Any] | None = None,
        url: str = "",
        continue_on_fail: bool = False,
    ) -> StaticExecutionContext:
        return StaticExecutionContext(
            items=[{"json": {"html": source}} for source in sources],
            parameters={
                "url": url,
                "contentFormat": content_format,
                "options": options or {},
            },
            item_parameters={
                i: {"htmlSource": source} for i, source in enumerate(sources)
            },
            continue_on_fail=continue_on_fail,
        )

    return _make
