from __future__ import annotations

import logging
import types
import typing

import httpx

from ._config import ClientConfig
from ._exceptions import NetworkError
from ._models import KeyValuePair, body_object

logger = logging.getLogger("qhttp.client")


class HTTPClient:
    """One ``httpx.AsyncClient`` carrying the configured default headers.

    Responses are returned with their body still unread; the caller awaits
    ``response.aread()`` (the renderer does) as a separate step.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or ClientConfig()
        self._client = httpx.AsyncClient(
            headers=self.config.headers,
            transport=transport,
        )

    async def __aenter__(self) -> HTTPClient:
        await self._client.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None = None,
        exc_value: BaseException | None = None,
        traceback: types.TracebackType | None = None,
    ) -> None:
        await self._client.__aexit__(exc_type, exc_value, traceback)

    async def get(self, url: str) -> httpx.Response:
        return await self._send("GET", url)

    async def post(
        self, url: str, pairs: typing.Iterable[KeyValuePair] = ()
    ) -> httpx.Response:
        return await self._send("POST", url, json=body_object(pairs))

    async def _send(self, method: str, url: str, **kwargs: typing.Any) -> httpx.Response:
        try:
            request = self._client.build_request(method, url, **kwargs)
            logger.debug("%s %s", request.method, request.url)
            response = await self._client.send(request, stream=True)
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            raise NetworkError(url, exc) from exc

        logger.debug(
            "%s %s -> %s %s",
            method,
            url,
            response.http_version,
            response.status_code,
        )
        return response
