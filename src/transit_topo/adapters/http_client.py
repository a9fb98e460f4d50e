from __future__ import annotations

from typing import TYPE_CHECKING, TypedDict, Unpack

import httpx

if TYPE_CHECKING:
    from types import TracebackType

    from httpx._client import UseClientDefault
    from httpx._types import (
        HeaderTypes,
        QueryParamTypes,
        RequestData,
        TimeoutTypes,
        URLTypes,
    )

    from transit_topo.config.http import HttpConfig


class RequestOptions(TypedDict, total=False):
    data: RequestData | None
    params: QueryParamTypes | None
    headers: HeaderTypes | None
    timeout: TimeoutTypes | UseClientDefault


class ClientOptions(TypedDict, total=False):
    timeout: TimeoutTypes
    headers: HeaderTypes
    transport: httpx.BaseTransport


class HttpClient:
    """Blocking HTTP client configured from an :class:`HttpConfig`.

    One instance is meant to live for a whole import run so that cookies set by the
    write API (the session the CSRF token belongs to) are sent back on later calls.
    """

    def __init__(
        self,
        config: HttpConfig,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.config = config

        client_kwargs: ClientOptions = {"timeout": config.timeout_seconds}
        if config.default_headers is not None:
            client_kwargs["headers"] = dict(config.default_headers)
        if transport is not None:
            client_kwargs["transport"] = transport

        self._client = httpx.Client(**client_kwargs)

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def request(
        self,
        method: str,
        url: URLTypes | None = None,
        **kwargs: Unpack[RequestOptions],
    ) -> httpx.Response:
        return self._client.request(method, url or self.config.url, **kwargs)

    def get(
        self,
        url: URLTypes | None = None,
        **kwargs: Unpack[RequestOptions],
    ) -> httpx.Response:
        return self.request("GET", url, **kwargs)

    def post(
        self,
        url: URLTypes | None = None,
        **kwargs: Unpack[RequestOptions],
    ) -> httpx.Response:
        return self.request("POST", url, **kwargs)
