import asyncio
from unittest.mock import AsyncMock, MagicMock, Mock, patch

import aiohttp
import pytest

from app.lib.logger import configure_logger
from app.services.integrations.hiro import (
    HiroApi,
    HiroApiError,
    HiroApiRateLimitError,
    HiroApiTimeoutError,
    ReadOnlyCallResult,
)
from app.services.integrations.hiro.base import BaseHiroApi

logger = configure_logger(__name__)


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Rate limit windows are shared across instances."""
    BaseHiroApi._second_requests = []
    BaseHiroApi._minute_requests = []
    BaseHiroApi._second_limit = BaseHiroApi.DEFAULT_SECOND_LIMIT
    BaseHiroApi._minute_limit = BaseHiroApi.DEFAULT_MINUTE_LIMIT
    yield


@pytest.fixture
def hiro_api() -> HiroApi:
    """Fixture providing a HiroApi instance."""
    return HiroApi(base_url="https://test-hiro-api.com/", api_key="key-1", timeout_seconds=2)


def session_raising(error: Exception) -> Mock:
    context = MagicMock()
    context.__aenter__ = AsyncMock(side_effect=error)
    context.__aexit__ = AsyncMock(return_value=False)
    session = Mock()
    session.request.return_value = context
    return session


def test_initialization(hiro_api: HiroApi) -> None:
    """Test HiroApi initialization."""
    assert hiro_api.base_url == "https://test-hiro-api.com"
    assert hiro_api.api_key == "key-1"
    assert hiro_api.timeout.total == 2
    assert hiro_api._session is None


@pytest.mark.asyncio
async def test_call_read_only(hiro_api: HiroApi) -> None:
    """Test the read-only call endpoint and body."""
    with patch.object(
        hiro_api,
        "_amake_request",
        AsyncMock(return_value={"okay": True, "result": "0x0701"}),
    ) as mock_request:
        result = await hiro_api.acall_read_only(
            contract_address="SP2DEPLOYER",
            contract_name="vote-manager",
            function_name="get-proposal-data",
            arguments=["0x01"],
            sender="SP2SENDER",
        )

    assert result == ReadOnlyCallResult(okay=True, result="0x0701")
    mock_request.assert_awaited_once_with(
        "POST",
        "/v2/contracts/call-read/SP2DEPLOYER/vote-manager/get-proposal-data",
        json={"sender": "SP2SENDER", "arguments": ["0x01"]},
    )


@pytest.mark.asyncio
async def test_call_read_only_failure_cause(hiro_api: HiroApi) -> None:
    with patch.object(
        hiro_api,
        "_amake_request",
        AsyncMock(return_value={"okay": False, "cause": "Unchecked(NoSuchContract)"}),
    ):
        result = await hiro_api.acall_read_only("SP1", "c", "f", [], "SP1")

    assert not result.okay
    assert result.cause == "Unchecked(NoSuchContract)"


def test_result_from_unexpected_response() -> None:
    result = ReadOnlyCallResult.from_response(["not", "a", "dict"])
    assert not result.okay
    assert result.result is None


@pytest.mark.asyncio
async def test_timeout_is_mapped(hiro_api: HiroApi) -> None:
    with patch.object(
        hiro_api, "_get_session", return_value=session_raising(asyncio.TimeoutError())
    ):
        with pytest.raises(HiroApiTimeoutError):
            await hiro_api._amake_request("GET", "/v2/info")


@pytest.mark.asyncio
async def test_rate_limit_response_is_mapped(hiro_api: HiroApi) -> None:
    error = aiohttp.ClientResponseError(
        request_info=Mock(),
        history=(),
        status=429,
        message="Too Many Requests",
        headers={"retry-after": "3"},
    )
    with patch.object(hiro_api, "_get_session", return_value=session_raising(error)):
        with pytest.raises(HiroApiRateLimitError) as exc_info:
            await hiro_api._amake_request("GET", "/v2/info")

    assert exc_info.value.status_code == 429
    assert exc_info.value.retry_after == 3


@pytest.mark.asyncio
async def test_http_error_is_mapped(hiro_api: HiroApi) -> None:
    error = aiohttp.ClientResponseError(
        request_info=Mock(), history=(), status=500, message="Internal Server Error"
    )
    with patch.object(hiro_api, "_get_session", return_value=session_raising(error)):
        with pytest.raises(HiroApiError) as exc_info:
            await hiro_api._amake_request("GET", "/v2/info")

    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_client_error_is_mapped(hiro_api: HiroApi) -> None:
    error = aiohttp.ClientConnectionError("connection refused")
    with patch.object(hiro_api, "_get_session", return_value=session_raising(error)):
        with pytest.raises(HiroApiError, match="connection refused"):
            await hiro_api._amake_request("GET", "/v2/info")


def test_update_rate_limits(hiro_api: HiroApi) -> None:
    """Test limits are learned from response headers."""
    hiro_api._update_rate_limits(
        {
            "x-ratelimit-limit-stacks-second": "5",
            "x-ratelimit-limit-stacks-minute": "100",
            "x-ratelimit-remaining-stacks-second": "0",
        }
    )

    assert BaseHiroApi._second_limit == 5
    assert BaseHiroApi._minute_limit == 100


@pytest.mark.asyncio
async def test_rate_limit_waits_when_window_full(hiro_api: HiroApi) -> None:
    """Test a full per-second window sleeps before the next request."""
    BaseHiroApi._second_limit = 2
    await hiro_api._rate_limit()
    await hiro_api._rate_limit()

    with patch("asyncio.sleep", new=AsyncMock()) as mock_sleep:
        await hiro_api._rate_limit()

    mock_sleep.assert_awaited_once()
    assert len(BaseHiroApi._minute_requests) == 3
