from __future__ import annotations

import pytest

from memorable_ids.wordlists import StaticWordListProvider, WordList


@pytest.fixture
def anyio_backend() -> str:
    """Force anyio-powered tests to use asyncio."""
    return "asyncio"


@pytest.fixture
def tiny_provider() -> StaticWordListProvider:
    """Three shapes and two colours: small enough to exhaust on purpose."""
    return StaticWordListProvider(
        {
            WordList.SHAPES: ("Circle", "Square", "Star"),
            WordList.COLOURS: ("Red", "Blue"),
        }
    )
