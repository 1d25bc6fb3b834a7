"""Shared HTTP helpers for the httpx-based adapters.

Adapters receive one ``httpx.AsyncClient`` from the run context.  These
helpers translate HTTP-level failures into the project's exception types;
each adapter then converts those into a ``ProviderResult`` in its own
``query`` so nothing escapes the adapter boundary.
"""

from __future__ import annotations

from typing import Any

import httpx

from radio_venus.utils.errors import ProviderError, RateLimitError, TransportError

DEFAULT_HEADERS = {
    "User-Agent": "RadioVenus/1.0 (musician curation pipeline)",
    "Accept-Language": "en-US,en;q=0.9",
}


async def get_response(
    client: httpx.AsyncClient,
    url: str,
    provider: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """Issue a GET and return the response, raising on transport problems.

    404 is returned to the caller, who usually reads it as "no result".
    429 raises :class:`RateLimitError`; other 4xx/5xx and network errors
    raise :class:`TransportError`.
    """
    try:
        response = await client.get(
            url,
            params=params,
            headers={**DEFAULT_HEADERS, **(headers or {})},
            follow_redirects=True,
        )
    except httpx.HTTPError as exc:
        raise TransportError(f"GET {url} failed: {exc}", provider_name=provider) from exc

    if response.status_code == 429:
        raise RateLimitError(f"GET {url} was rate limited", provider_name=provider)
    if response.status_code >= 400 and response.status_code != 404:
        raise TransportError(
            f"GET {url} returned HTTP {response.status_code}", provider_name=provider
        )
    return response


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    provider: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> Any:
    """GET *url* and decode the JSON body; ``None`` on 404."""
    response = await get_response(client, url, provider, params=params, headers=headers)
    if response.status_code == 404:
        return None
    try:
        return response.json()
    except ValueError as exc:
        raise ProviderError(f"Malformed JSON from {url}", provider_name=provider) from exc


async def post_form_json(
    client: httpx.AsyncClient,
    url: str,
    provider: str,
    data: dict[str, str],
    auth: tuple[str, str] | None = None,
) -> Any:
    """POST a form body and decode the JSON answer.

    Error mapping matches :func:`get_response`, except that 404 is an error
    here as well: token endpoints have no "not found" answer.
    """
    try:
        response = await client.post(url, data=data, auth=auth, headers=DEFAULT_HEADERS)
    except httpx.HTTPError as exc:
        raise TransportError(f"POST {url} failed: {exc}", provider_name=provider) from exc

    if response.status_code == 429:
        raise RateLimitError(f"POST {url} was rate limited", provider_name=provider)
    if response.status_code >= 400:
        raise TransportError(
            f"POST {url} returned HTTP {response.status_code}", provider_name=provider
        )
    try:
        return response.json()
    except ValueError as exc:
        raise ProviderError(f"Malformed JSON from {url}", provider_name=provider) from exc
