"""HTTP client for transport.opendata.ch requests.

Classifies every transport problem into a LookupFailure so callers only ever
see parsed data or a classified failure.
"""

import logging
from typing import TYPE_CHECKING, Any

import aiohttp

from departure_board.adapters.api_request_logger import log_api_request
from departure_board.adapters.transport_api.constants import (
    BODY_PREVIEW_LENGTH,
    DEFAULT_HEADERS,
    DEFAULT_TIMEOUT_SECONDS,
    TRANSPORT_BASE_URL,
)
from departure_board.domain.errors import HttpError, LookupTimeout, NetworkError

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientResponse, ClientSession


class TransportHttpClient:
    """HTTP client for the transport.opendata.ch JSON API."""

    def __init__(
        self,
        session: "ClientSession",
        base_url: str = TRANSPORT_BASE_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize with an aiohttp session.

        Args:
            session: Shared aiohttp ClientSession.
            base_url: API base URL without trailing slash.
            timeout_seconds: Default total timeout per request.
        """
        self._session = session
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds

    async def _read_json(self, response: "ClientResponse", url: str) -> dict[str, Any]:
        """Return the decoded body of a successful response or raise HttpError."""
        if response.status != 200:
            body = await response.text()
            preview = body[:BODY_PREVIEW_LENGTH]
            logger.warning(f"Transport API returned status {response.status} for {url}: {preview}")
            raise HttpError(response.status, preview)

        data = await response.json()
        if not isinstance(data, dict):
            raise NetworkError(f"Unexpected response from {url}: expected a JSON object")
        return data

    async def get_json(
        self,
        path: str,
        params: dict[str, str],
        timeout_seconds: float | None = None,
    ) -> dict[str, Any]:
        """GET a JSON object from the API.

        Args:
            path: Endpoint path, e.g. "/stationboard".
            params: Query parameters.
            timeout_seconds: Overrides the client's default timeout.

        Returns:
            Decoded JSON object.

        Raises:
            LookupTimeout: The request exceeded its timeout; the connection is aborted.
            HttpError: The API answered with a non-200 status.
            NetworkError: Connection failure or undecodable body.
        """
        url = f"{self._base_url}{path}"
        total = timeout_seconds if timeout_seconds is not None else self._timeout_seconds
        log_api_request("GET", url, params, total)

        try:
            async with self._session.get(
                url,
                params=params,
                headers=DEFAULT_HEADERS,
                timeout=aiohttp.ClientTimeout(total=total),
            ) as response:
                return await self._read_json(response, url)
        except TimeoutError as e:
            logger.warning(f"Transport API request to {url} timed out after {total:g}s")
            raise LookupTimeout(f"Request timed out after {total:g}s") from e
        except aiohttp.ClientError as e:
            logger.warning(f"Error calling transport API {url}: {e}")
            raise NetworkError(str(e) or type(e).__name__) from e
        except ValueError as e:
            logger.warning(f"Invalid JSON from transport API {url}: {e}")
            raise NetworkError("Invalid response body") from e
