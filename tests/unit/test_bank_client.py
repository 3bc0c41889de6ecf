"""Unit tests for the bank verification client retry behaviour"""

import asyncio
import httpx
import pytest
from unittest.mock import AsyncMock, patch
from trustrail_gateway.infrastructure.clients.bank import BankClient
from trustrail_gateway.domain.exceptions import BankAPIError, ValidationError
from trustrail_gateway.config import settings

RESOLVE_URL = "http://bank.test/bank/accounts/resolve"


def bank_response(status_code: int, json=None) -> httpx.Response:
    return httpx.Response(status_code, json=json, request=httpx.Request("GET", RESOLVE_URL))


@pytest.fixture
def bank_client() -> BankClient:
    return BankClient(base_url="http://bank.test", timeout=1, max_retries=3, backoff_base=0)


@patch("httpx.AsyncClient.get", new_callable=AsyncMock)
def test_verify_account_success(mock_get: AsyncMock, bank_client: BankClient):
    mock_get.return_value = bank_response(200, {"account_name": "Adaeze Okafor"})

    result = asyncio.run(bank_client.verify_account("058", "0123456789"))

    assert result.success is True
    assert result.account_name == "Adaeze Okafor"
    assert mock_get.await_args.kwargs["params"] == {"bank_code": "058", "account_number": "0123456789"}


@patch("httpx.AsyncClient.get", new_callable=AsyncMock)
def test_verify_account_not_found_is_not_retried(mock_get: AsyncMock, bank_client: BankClient):
    mock_get.return_value = bank_response(404, {"detail": "Account not found"})

    result = asyncio.run(bank_client.verify_account("058", "9999999999"))

    assert result.success is False
    assert result.error == "Account not found"
    assert mock_get.await_count == 1


@patch("httpx.AsyncClient.get", new_callable=AsyncMock)
def test_verify_account_retries_server_errors(mock_get: AsyncMock, bank_client: BankClient):
    mock_get.side_effect = [
        bank_response(503),
        httpx.ConnectError("connection refused"),
        bank_response(200, {"account_name": "Tunde Bakare"}),
    ]

    result = asyncio.run(bank_client.verify_account("044", "1234567890"))

    assert result.success is True
    assert result.account_name == "Tunde Bakare"
    assert mock_get.await_count == 3


@patch("httpx.AsyncClient.get", new_callable=AsyncMock)
def test_verify_account_gives_up_after_max_retries(mock_get: AsyncMock, bank_client: BankClient):
    mock_get.return_value = bank_response(500)

    with pytest.raises(BankAPIError):
        asyncio.run(bank_client.verify_account("044", "1234567890"))
    assert mock_get.await_count == 3


@patch("httpx.AsyncClient.get", new_callable=AsyncMock)
def test_verify_account_client_error_fails_fast(mock_get: AsyncMock, bank_client: BankClient):
    mock_get.return_value = bank_response(400)

    with pytest.raises(BankAPIError):
        asyncio.run(bank_client.verify_account("044", "1234567890"))
    assert mock_get.await_count == 1


@patch("httpx.AsyncClient.get", new_callable=AsyncMock)
def test_verify_account_malformed_payload(mock_get: AsyncMock, bank_client: BankClient):
    mock_get.return_value = bank_response(200, {"name": "missing key"})

    with pytest.raises(BankAPIError):
        asyncio.run(bank_client.verify_account("044", "1234567890"))


@patch("httpx.AsyncClient.get", new_callable=AsyncMock)
def test_verify_account_validates_account_number_first(mock_get: AsyncMock, bank_client: BankClient):
    with pytest.raises(ValidationError):
        asyncio.run(bank_client.verify_account("044", "12345"))
    mock_get.assert_not_awaited()


def test_explicit_zero_settings_are_kept():
    client = BankClient(base_url="http://bank.test", timeout=0, max_retries=0, backoff_base=0)

    assert client.timeout == 0
    assert client.max_retries == 0
    assert client.backoff_base == 0


def test_unset_settings_fall_back_to_config():
    client = BankClient()

    assert client.timeout == settings.http_timeout_seconds
    assert client.max_retries == settings.bank_max_retries
    assert client.backoff_base == settings.bank_backoff_base


@patch("httpx.AsyncClient.get", new_callable=AsyncMock)
def test_verify_account_without_retries_makes_single_attempt(mock_get: AsyncMock):
    mock_get.return_value = bank_response(502)
    client = BankClient(base_url="http://bank.test", timeout=1, max_retries=0, backoff_base=0)

    with pytest.raises(BankAPIError):
        asyncio.run(client.verify_account("044", "1234567890"))
    assert mock_get.await_count == 1
