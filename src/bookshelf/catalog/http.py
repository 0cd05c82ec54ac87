# ABOUTME: JSON-over-HTTP layer the Open Library client reads the catalog through.
# ABOUTME: Timeouts, error statuses, and bodies that are not JSON objects all become CatalogFetchError.

import logging
from typing import Any, Protocol, runtime_checkable

import httpx

from bookshelf import BookshelfError

logger = logging.getLogger(__name__)

USER_AGENT = "bookshelf-notes/0.1.0"


class CatalogFetchError(BookshelfError):
    """Raised when a catalog lookup cannot be completed."""


@runtime_checkable
class HttpClient(Protocol):
    """Fetches one JSON object from a catalog URL."""

    def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]: ...


def _log_response(response: httpx.Response) -> None:
    request = response.request
    logger.debug("%s %s -> %d", request.method, request.url, response.status_code)


def _json_object(response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError as exc:
        raise CatalogFetchError(f"Catalog sent a body that is not JSON: {response.url}") from exc
    if not isinstance(data, dict):
        raise CatalogFetchError(
            f"Catalog sent a JSON {type(data).__name__} instead of an object: {response.url}"
        )
    return data


class CatalogHttpClient:
    """Blocking catalog reader, one request per lookup.

    Requests are not retried. A timeout, transport failure or error status
    fails the lookup at once, and the command reports it to the user.
    """

    def __init__(
        self,
        timeout: float = 5.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._client = httpx.Client(
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
            event_hooks={"response": [_log_response]},
        )

    def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        """Fetch url and return its JSON object.

        Raises:
            CatalogFetchError: On a timeout, a transport failure, a 4xx/5xx
                status, or a body that is not a JSON object.
        """
        try:
            response = self._client.get(url, params=params)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise CatalogFetchError(
                f"Catalog did not answer within {self._timeout:g}s: {url}"
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise CatalogFetchError(
                f"Catalog answered HTTP {exc.response.status_code}: {url}"
            ) from exc
        except httpx.HTTPError as exc:
            raise CatalogFetchError(f"Catalog request failed: {url}: {exc}") from exc
        return _json_object(response)
