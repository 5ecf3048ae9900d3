# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""HttpxTransport — default async HTTPS transport for fetching DID documents."""

from __future__ import annotations

from typing import Any, Mapping

import httpx

from .types import FetchResponse, TransportError

_ACCEPT = "application/did+json, application/json"


class HttpxTransport:
    """Fetches JSON documents with an :class:`httpx.AsyncClient`.

    Parameters
    ----------
    timeout:
        Per-request timeout in seconds. Defaults to 10.
    http_client:
        Optional pre-configured :class:`httpx.AsyncClient`. Useful for
        injecting test transports or custom SSL contexts. A client passed in
        is never closed by this transport.

    Per-call ``options`` given to :meth:`fetch` are keyword arguments for a
    short-lived :class:`httpx.AsyncClient` (for example ``{"verify": False}``
    against a server with a self-signed certificate).
    """

    def __init__(
        self,
        *,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._timeout = timeout
        self._owned_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=timeout,
            headers={"Accept": _ACCEPT},
        )

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if it was created internally."""
        if self._owned_client:
            await self._http.aclose()

    async def fetch(
        self, url: str, options: Mapping[str, Any] | None = None
    ) -> FetchResponse:
        """GET *url* and return its decoded JSON body.

        Raises
        ------
        TransportError
            On network errors and timeouts (``status`` is ``None``), non-2xx
            responses (``status`` and ``data`` carry the server's answer) and
            bodies that are not valid JSON.
        """
        if not options:
            return await self._get(self._http, url)

        client_options = {"timeout": self._timeout, **options}
        async with httpx.AsyncClient(**client_options) as client:
            return await self._get(client, url)

    async def _get(self, client: httpx.AsyncClient, url: str) -> FetchResponse:
        try:
            response = await client.get(url, headers={"Accept": _ACCEPT})
        except httpx.TimeoutException as exc:
            raise TransportError(
                f"timeout fetching DID document from {url}", url=url
            ) from exc
        except httpx.RequestError as exc:
            raise TransportError(
                f"network error fetching DID document from {url}: {exc}", url=url
            ) from exc

        if not response.is_success:
            raise TransportError(
                f"HTTP {response.status_code} fetching DID document from {url}",
                url=url,
                status=response.status_code,
                data=_error_body(response),
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise TransportError(
                f"failed to parse DID document JSON from {url}: {exc}",
                url=url,
                status=response.status_code,
            ) from exc

        return FetchResponse(data=data, status=response.status_code)


def _error_body(response: httpx.Response) -> Any:
    """Return the JSON error body if there is one, else the raw text or None."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
