"""Transport collaborator contract and an httpx implementation.

The controller only needs an async callable taking a resource path
(``"News?$top=10"``) and returning the decoded JSON payload. Any callable with
that shape works; ``HttpxTransport`` is provided for real services::

    connect("https://clubs.example.com/api/v2")
    controller = PagedSortedController(get_transport(), "News")
"""

import logging
from typing import Any, Awaitable, Callable, Mapping, Optional

import httpx

from .errors import TransportError

logger = logging.getLogger("odatable")

FetchPage = Callable[[str], Awaitable[Mapping[str, Any]]]


class HttpxTransport:
    """GET ``<base_url>/<resource_path>`` and return the JSON body.

    Any httpx error, including a non-2xx status, is raised as TransportError.
    Pass ``client`` to reuse a configured ``httpx.AsyncClient`` (auth, retries,
    mock transports); otherwise a client is opened per request.
    """

    def __init__(
        self,
        base_url: str,
        headers: Optional[Mapping[str, str]] = None,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.headers = dict(headers or {})
        self.timeout = timeout
        self.client = client

    def url_for(self, resource_path: str) -> str:
        return f"{self.base_url}/{resource_path.lstrip('/')}"

    async def _get(self, client: httpx.AsyncClient, url: str) -> httpx.Response:
        response = await client.get(url, headers=self.headers)
        response.raise_for_status()
        return response

    async def __call__(self, resource_path: str) -> Mapping[str, Any]:
        url = self.url_for(resource_path)
        logger.debug("GET %s", url)
        try:
            if self.client is not None:
                response = await self._get(self.client, url)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await self._get(client, url)
        except httpx.HTTPStatusError as error:
            raise TransportError(
                f"{error.response.status_code} {error.response.reason_phrase} for {resource_path}"
            ) from error
        except httpx.HTTPError as error:
            raise TransportError(str(error) or type(error).__name__) from error
        try:
            return response.json()
        except ValueError as error:
            raise TransportError(f"Invalid JSON in response for {resource_path}") from error


_services: dict[str, dict[str, Any]] = {}


def connect(
    base_url: str,
    name: str = "default",
    headers: Optional[Mapping[str, str]] = None,
    timeout: float = 10.0,
) -> None:
    """Register a service root under ``name``."""
    _services[name] = {"base_url": base_url, "headers": dict(headers or {}), "timeout": timeout}


def get_transport(name: str = "default", client: Optional[httpx.AsyncClient] = None) -> HttpxTransport:
    """HttpxTransport for a service registered with connect()."""
    try:
        service = _services[name]
    except KeyError as error:
        raise ValueError(f"No service configured with name=`{name}`") from error
    return HttpxTransport(client=client, **service)
