from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from ttt_bot.config import Settings
from ttt_bot.main import create_app


@pytest.fixture
def test_settings(tmp_path):
    """Settings with a known secret and a trace file under tmp_path."""
    return Settings(
        secret="secret",
        debug=False,
        dot_path=str(tmp_path / "log.dot"),
        random_seed=0,
    )


@pytest.fixture
def app(test_settings):
    """Create a test FastAPI application with test settings."""
    return create_app(test_settings)


@pytest.fixture
async def client(app):
    """Create a test HTTP client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
