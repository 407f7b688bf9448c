"""
The transport is the only place where I/O happens. Anything with an ``async send(request)``
returning a :py:class:`Response` can take the place of :py:class:`HttpxTransport`.
"""

import dataclasses
import json
import logging
import typing

import httpx

from .exceptions import TransportError

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class Request:
    method: str
    url: str
    model: typing.Optional[str] = None
    data: typing.Any = None
    headers: typing.Dict[str, str] = dataclasses.field(default_factory=dict)
    meta: typing.Dict[str, typing.Any] = dataclasses.field(default_factory=dict)
    params: typing.Optional[typing.Mapping[str, typing.Any]] = None


@dataclasses.dataclass
class Response:
    status: int
    headers: typing.Mapping[str, str] = dataclasses.field(default_factory=dict)
    data: typing.Any = None
    """
    The decoded JSON body, or ``None`` if the body is empty or not JSON.
    """
    content: bytes = b""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class Transport(typing.Protocol):
    async def send(self, request: Request) -> Response:
        ...  # pragma: nocover


def decode_body(content: bytes) -> typing.Any:
    if not content.strip():
        return None
    try:
        return json.loads(content)
    except ValueError:
        logger.debug("response body is not JSON (%d bytes)", len(content))
        return None


class HttpxTransport:
    """
    Sends requests through an :py:class:`httpx.AsyncClient`.

    :param str base_url: the API root every request URL is relative to.
    :param Optional[httpx.AsyncClient] client: a preconfigured client; it stays owned by the caller.
    :param float timeout: the timeout for a client created here.
    """

    _client: httpx.AsyncClient
    _owns_client: bool

    async def send(self, request: Request) -> Response:
        kwargs: typing.Dict[str, typing.Any] = {}
        if request.data is not None:
            kwargs["content"] = json.dumps(request.data).encode("utf-8")
        if request.params:
            kwargs["params"] = request.params
        logger.debug("%s %s", request.method, request.url)
        try:
            resp = await self._client.request(
                request.method,
                request.url,
                headers=request.headers,
                **kwargs,
            )
        except httpx.HTTPError as e:
            raise TransportError(f"{request.method} {request.url} failed: {e}") from e
        return Response(
            status=resp.status_code,
            headers=dict(resp.headers),
            data=decode_body(resp.content),
            content=resp.content,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def __init__(
        self,
        base_url: str = "",
        client: typing.Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        if client is None:
            self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout)
            self._owns_client = True
        else:
            self._client = client
            self._owns_client = False
