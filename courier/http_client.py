from __future__ import annotations

import logging
import re
import time
from collections.abc import Awaitable, Callable
from datetime import timedelta
from urllib.parse import urlparse

import httpx

from .config import DEFAULT_TIMEOUT
from .models import RequestDescriptor, RequestFailure, ResponseRecord

logger = logging.getLogger(__name__)

Requester = Callable[[RequestDescriptor], Awaitable[ResponseRecord]]

_METHOD_TOKEN = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


def _validate_url(url: str) -> None:
    parsed = urlparse(url)
    if parsed.scheme not in {"http", "https"}:
        raise ValueError(f"Unsupported URL scheme: {parsed.scheme or 'missing'}")
    if not parsed.netloc:
        raise ValueError("Missing host in URL.")


def _validate_method(method: str) -> None:
    if not _METHOD_TOKEN.match(method):
        raise ValueError(f"Invalid HTTP method: {method!r}")


def _decode_header_value(raw: bytes) -> str:
    try:
        return raw.decode("ascii")
    except UnicodeDecodeError:
        return ""


async def perform_http_request(
    descriptor: RequestDescriptor,
    client: httpx.AsyncClient | None = None,
    *,
    requester: Requester | None = None,
) -> ResponseRecord:
    """Send one request and read the whole body. Errors propagate to the caller."""
    _validate_url(descriptor.url)
    _validate_method(descriptor.method)
    if requester is not None:
        return await requester(descriptor)
    if client is None:
        raise RuntimeError("An httpx.AsyncClient is required when no requester is given.")

    content = descriptor.body.encode("utf-8") if descriptor.body is not None else None
    logger.debug("Sending %s %s", descriptor.method, descriptor.url)
    start = time.perf_counter()
    request = client.build_request(
        descriptor.method,
        descriptor.url,
        headers=list(descriptor.headers),
        content=content,
    )
    response = await client.send(request, stream=True)
    network_elapsed = time.perf_counter() - start
    try:
        await response.aread()
    finally:
        await response.aclose()
    total_elapsed = time.perf_counter() - start
    logger.debug(
        "Response %s from %s: headers after %.1f ms, body after %.1f ms",
        response.status_code,
        descriptor.url,
        network_elapsed * 1000,
        total_elapsed * 1000,
    )

    headers = tuple(
        (name.decode("latin-1"), _decode_header_value(value)) for name, value in response.headers.raw
    )
    return ResponseRecord(
        source_url=descriptor.url,
        source_method=descriptor.method,
        status=response.status_code,
        headers=headers,
        body=response.text,
        duration=timedelta(seconds=total_elapsed),
        size=len(response.content),
        network_duration=timedelta(seconds=network_elapsed),
    )


class RequestExecutor:
    """Runs composed requests on one shared ``httpx.AsyncClient``.

    The client is created on first use and reused by every slot; call
    ``aclose()`` (or use ``async with``) when the session ends.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        verify_tls: bool = True,
        requester: Requester | None = None,
    ) -> None:
        self._client = client
        self._timeout = timeout
        self._verify_tls = verify_tls
        self._requester = requester

    @property
    def verify_tls(self) -> bool:
        return self._verify_tls

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout, verify=self._verify_tls)
        return self._client

    async def execute(self, descriptor: RequestDescriptor) -> ResponseRecord | RequestFailure:
        client = None if self._requester is not None else self.client
        try:
            return await perform_http_request(descriptor, client, requester=self._requester)
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError, ValueError) as exc:
            logger.debug("Request to %r failed: %r", descriptor.url, exc)
            return RequestFailure(str(exc) or type(exc).__name__)

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> RequestExecutor:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
