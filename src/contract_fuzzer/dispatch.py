"""HTTP client boundary.

The executor only knows the :data:`Dispatcher` signature: an async callable
taking an :class:`HttpRequest` and returning an :class:`HttpResponse`. Any
exception it raises is treated as a transport failure. :class:`HttpxDispatcher`
is the default implementation.
"""

import time
from typing import Awaitable, Callable, Optional

import httpx

from .config import FuzzerConfig
from .models import HttpRequest, HttpResponse

# Type alias for the request dispatch callback
Dispatcher = Callable[[HttpRequest], Awaitable[HttpResponse]]


class HttpxDispatcher:
    """Sends requests with a shared ``httpx.AsyncClient``.

    Args:
        base_url: Base URL that relative scenario paths resolve against
        timeout: Per-request timeout in seconds
        verify: Whether to verify TLS certificates
        client: Pre-built client to use instead of creating one
        transport: Custom transport for a newly created client (e.g. ``httpx.MockTransport``)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = 10.0,
        verify: bool = True,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.client = client or httpx.AsyncClient(
            base_url=base_url or "",
            timeout=timeout,
            verify=verify,
            transport=transport,
        )

    @classmethod
    def from_config(
        cls, config: FuzzerConfig, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "HttpxDispatcher":
        return cls(
            base_url=config.base_url,
            timeout=config.request_timeout,
            verify=config.verify_tls,
            transport=transport,
        )

    async def __call__(self, request: HttpRequest) -> HttpResponse:
        start_time = time.time()
        response = await self.client.request(
            request.method,
            request.path,
            headers=request.headers,
            params=request.query_params,
            content=request.body,
        )
        return HttpResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.text,
            elapsed=time.time() - start_time,
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "HttpxDispatcher":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
