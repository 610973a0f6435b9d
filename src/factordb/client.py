"""HTTP clients for the FactorDB API.

``FactorDbClient`` is the asyncio client, ``FactorDbBlockingClient``
the synchronous one. Both issue one ``GET {ENDPOINT}?query=<n>`` per
lookup and share the same status, retry and decode policy:

- transport failure or non-JSON body → ``RequestError``
- non-success HTTP status → ``InvalidNumber``
- JSON that does not match the wire format → ``DecodeError``

If you're making multiple requests, reuse the client to take
advantage of keep-alive connection pooling.
"""

from __future__ import annotations

import json
import logging
from types import TracebackType
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    Retrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from factordb.config import Settings
from factordb.constants import ENDPOINT, QUERY_PARAM
from factordb.decoding import format_decimal, parse_decimal
from factordb.errors import InvalidNumber, RequestError, is_retryable
from factordb.number import Number, decode_number

logger = logging.getLogger(__name__)


def _retry_options(settings: Settings) -> dict[str, Any]:
    """Shared tenacity policy: retry transient failures only."""
    return {
        "stop": stop_after_attempt(settings.max_attempts),
        "wait": wait_exponential_jitter(
            initial=settings.retry_initial_wait,
            max=settings.retry_max_wait,
        ),
        "retry": retry_if_exception(is_retryable),
        "before_sleep": before_sleep_log(logger, logging.WARNING),
        "reraise": True,
    }


def _query_text(number: object) -> str:
    if isinstance(number, int) and not isinstance(number, bool):
        return format_decimal(number)
    return str(number)


def _client_options(settings: Settings) -> dict[str, Any]:
    return {
        "timeout": settings.timeout_seconds,
        "follow_redirects": True,
        "headers": {"User-Agent": settings.user_agent},
    }


def _check_status(query: str, response: httpx.Response) -> httpx.Response:
    if not response.is_success:
        logger.debug(
            "event=invalid_number query=%s status=%d",
            query,
            response.status_code,
        )
        raise InvalidNumber(query, response.status_code)
    return response


def _decode_response(response: httpx.Response) -> Number:
    try:
        payload = json.loads(response.content, parse_int=parse_decimal)
    except ValueError as exc:
        raise RequestError(
            f"Malformed JSON response from {response.url}"
        ) from exc
    return decode_number(payload)


class FactorDbClient:
    """Asynchronous API client for the FactorDB API.

    If you need a blocking client, use ``FactorDbBlockingClient``.

    Example::

        async with FactorDbClient() as client:
            forty_two = await client.get(42)
            assert forty_two.flattened_factors() == [2, 3, 7]
    """

    def __init__(
        self,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            **_client_options(self._settings)
        )
        logger.debug("Creating async HTTP client")

    async def get(self, number: object) -> Number:
        """Look up ``number`` and decode the response.

        Raises:
            RequestError: the request failed or the body was not JSON.
            InvalidNumber: the service answered with a non-success status.
            DecodeError: the body did not match the wire format.
        """
        response = await self._fetch_response(number)
        return _decode_response(response)

    async def get_json(self, number: object) -> str:
        """Look up ``number`` and return the raw JSON body."""
        response = await self._fetch_response(number)
        return response.text

    async def _fetch_response(self, number: object) -> httpx.Response:
        query = _query_text(number)
        retrying = AsyncRetrying(**_retry_options(self._settings))
        return await retrying(self._send, query)

    async def _send(self, query: str) -> httpx.Response:
        logger.debug("Fetching API response from %s?query=%s", ENDPOINT, query)
        try:
            response = await self._client.get(
                ENDPOINT, params={QUERY_PARAM: query}
            )
        except httpx.HTTPError as exc:
            raise RequestError(f"Request error: {exc}") from exc
        return _check_status(query, response)

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> FactorDbClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


class FactorDbBlockingClient:
    """Blocking API client for the FactorDB API.

    Must not be used from inside a running event loop; use
    ``FactorDbClient`` there.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            **_client_options(self._settings)
        )
        logger.debug("Creating blocking HTTP client")

    def get(self, number: object) -> Number:
        """Look up ``number`` and decode the response.

        Raises the same errors as ``FactorDbClient.get``.
        """
        response = self._fetch_response(number)
        return _decode_response(response)

    def get_json(self, number: object) -> str:
        """Look up ``number`` and return the raw JSON body."""
        return self._fetch_response(number).text

    def _fetch_response(self, number: object) -> httpx.Response:
        query = _query_text(number)
        retrying = Retrying(**_retry_options(self._settings))
        return retrying(self._send, query)

    def _send(self, query: str) -> httpx.Response:
        logger.debug("Fetching API response from %s?query=%s", ENDPOINT, query)
        try:
            response = self._client.get(
                ENDPOINT, params={QUERY_PARAM: query}
            )
        except httpx.HTTPError as exc:
            raise RequestError(f"Request error: {exc}") from exc
        return _check_status(query, response)

    def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> FactorDbBlockingClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
