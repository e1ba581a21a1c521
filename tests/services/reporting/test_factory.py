"""Tests for process-wide reporting wiring and shutdown."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.services.reporting.factory import close_report_generator, get_report_generator


@pytest.fixture
def fresh_generator_cache():
    get_report_generator.cache_clear()
    yield
    get_report_generator.cache_clear()


@pytest.mark.asyncio
async def test_close_without_generator_is_noop(fresh_generator_cache) -> None:
    await close_report_generator()

    assert get_report_generator.cache_info().currsize == 0


@pytest.mark.asyncio
async def test_close_releases_ledger_session(fresh_generator_cache) -> None:
    generator = get_report_generator()
    generator.ledger_reader.api.close = AsyncMock()

    await close_report_generator()

    generator.ledger_reader.api.close.assert_awaited_once()


def test_lifespan_closes_clients_on_shutdown() -> None:
    with patch("app.main.close_report_generator", new=AsyncMock()) as mock_close:
        with TestClient(app) as client:
            assert client.get("/").status_code == 200
        mock_close.assert_awaited_once()
