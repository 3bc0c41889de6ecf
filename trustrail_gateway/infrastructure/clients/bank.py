"""Bank API HTTP client for account name verification, with exponential backoff retry"""

import asyncio
import logging
import httpx
from trustrail_gateway.domain.models import BankVerification
from trustrail_gateway.domain.exceptions import BankAPIError
from trustrail_gateway.domain.applications import validate_account_number
from trustrail_gateway.config import settings
from trustrail_gateway.infrastructure.observability.metrics import (
    bank_latency_histogram,
    bank_verification_failures_counter,
)

logger = logging.getLogger(__name__)


class BankClient:
    """Client for the external bank account verification API"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_base: float | None = None,
    ):
        self.base_url = base_url or settings.bank_api_base
        self.timeout = settings.http_timeout_seconds if timeout is None else timeout
        self.max_retries = settings.bank_max_retries if max_retries is None else max_retries
        self.backoff_base = settings.bank_backoff_base if backoff_base is None else backoff_base

    async def verify_account(self, bank_code: str, account_number: str) -> BankVerification:
        """
        Resolve the account holder's name.

        Retry strategy:
        - Exponential backoff: base, 2*base, 4*base, ... between attempts
        - Retries on 5xx errors and network failures, up to max_retries attempts
        - A 404 from the bank means the account does not exist (not retried)

        Raises:
            ValidationError: account number is not 10 digits
            BankAPIError: bank unavailable after all retries, or invalid response
        """
        validate_account_number(account_number)

        attempt = 0
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            while True:
                try:
                    with bank_latency_histogram.time():
                        response = await client.get(
                            f"{self.base_url}/bank/accounts/resolve",
                            params={"bank_code": bank_code, "account_number": account_number},
                        )

                    if response.status_code == 404:
                        return BankVerification(success=False, error="Account not found")

                    response.raise_for_status()
                    data = response.json()
                    return BankVerification(success=True, account_name=data["account_name"])

                except (httpx.TimeoutException, httpx.RequestError) as e:
                    error = BankAPIError(f"Bank API unreachable: {e}")
                except httpx.HTTPStatusError as e:
                    if e.response.status_code < 500:
                        bank_verification_failures_counter.inc()
                        raise BankAPIError(f"Bank API error: {e.response.status_code}") from e
                    error = BankAPIError(f"Bank API error: {e.response.status_code}")
                except (KeyError, ValueError, TypeError) as e:
                    bank_verification_failures_counter.inc()
                    raise BankAPIError(f"Invalid verification data from bank: {e}") from e

                attempt += 1
                bank_verification_failures_counter.inc()

                if attempt >= self.max_retries:
                    # Final failure after all retries
                    raise error

                backoff = self.backoff_base * (2 ** (attempt - 1))
                logger.warning(
                    "Bank verification failed, retrying",
                    extra={"attempt": attempt, "backoff_seconds": backoff},
                )
                await asyncio.sleep(backoff)
