"""
:py:mod:`jsonapi_client.pipeline` sequences every call through an ordered, named list of
middleware entries.

Each :py:class:`Middleware` may contribute a handler to any of three phases:

``request``
    Run in list order, starting from the :py:class:`Payload`. Each handler receives what the
    previous one returned. Whatever the last one returns (conventionally the transport's
    :py:class:`~jsonapi_client.transport.Response`) is stored as ``payload.response``.
``response``
    Run in list order, starting from the payload. The value of the last one is the result
    of the call.
``error``
    Run in list order, starting from the exception raised in either of the phases above.
    The call always fails with what the last one returns, unless it returns
    :py:class:`Recover`.

Handlers are plain callables or coroutine functions. The handlers of a phase are picked
from the live list when the phase starts, so mutating a pipeline while calls are in flight
is visible to them; callers must serialize configuration changes relative to in-flight calls.
"""

import dataclasses
import inspect
import typing

from .exceptions import ConfigurationError, MiddlewareNotFoundError, RejectedError
from .logger import ClientLogger
from .transport import Request, Response

Handler = typing.Callable[[typing.Any], typing.Any]

PHASES = ("request", "response", "error")


@dataclasses.dataclass(frozen=True)
class Middleware:
    name: str
    request: typing.Optional[Handler] = None
    response: typing.Optional[Handler] = None
    error: typing.Optional[Handler] = None


@dataclasses.dataclass
class Payload:
    """
    The state of a single call. It is created per call and handed from handler to handler.
    """

    request: Request
    client: typing.Any = None
    response: typing.Optional[Response] = None


@dataclasses.dataclass(frozen=True)
class Recover:
    """
    Returned from an error handler to turn a failed call into a successful one yielding ``value``.
    """

    value: typing.Any = None


async def apply_handlers(handlers: typing.Iterable[Handler], value: typing.Any) -> typing.Any:
    for handler in handlers:
        value = handler(value)
        if inspect.isawaitable(value):
            value = await value
    return value


class Pipeline:
    _entries: typing.List[Middleware]
    _original: typing.Tuple[Middleware, ...]
    _index: typing.Dict[str, int]

    def _reindex(self) -> None:
        index: typing.Dict[str, int] = {}
        for i, entry in enumerate(self._entries):
            if entry.name in index:
                raise ConfigurationError(f'duplicate middleware name "{entry.name}"')
            index[entry.name] = i
        self._index = index

    def _insert(self, name: str, offset: int, entry: Middleware) -> bool:
        i = self._index.get(name)
        if i is None:
            return False
        if entry.name in self._index:
            raise ConfigurationError(f'duplicate middleware name "{entry.name}"')
        self._entries.insert(i + offset, entry)
        self._reindex()
        return True

    def insert_before(self, name: str, entry: Middleware) -> bool:
        """
        Inserts ``entry`` right before the entry named ``name``.
        Nothing happens if there is no such entry.

        :return: whether the entry was inserted.
        """
        return self._insert(name, 0, entry)

    def insert_after(self, name: str, entry: Middleware) -> bool:
        """
        Inserts ``entry`` right after the entry named ``name``.
        Nothing happens if there is no such entry.

        :return: whether the entry was inserted.
        """
        return self._insert(name, 1, entry)

    def replace(self, name: str, entry: Middleware) -> None:
        i = self._index.get(name)
        if i is None:
            raise MiddlewareNotFoundError(name)
        if entry.name != name and entry.name in self._index:
            raise ConfigurationError(f'duplicate middleware name "{entry.name}"')
        self._entries[i] = entry
        self._reindex()

    def reset(self) -> None:
        self._entries = list(self._original)
        self._reindex()

    def names(self) -> typing.List[str]:
        return [entry.name for entry in self._entries]

    def handlers(self, phase: str) -> typing.List[Handler]:
        if phase not in PHASES:
            raise ValueError(f"unknown phase {phase!r}")
        return [
            typing.cast(Handler, getattr(entry, phase))
            for entry in self._entries
            if getattr(entry, phase) is not None
        ]

    def __getitem__(self, name: str) -> Middleware:
        i = self._index.get(name)
        if i is None:
            raise MiddlewareNotFoundError(name)
        return self._entries[i]

    def __contains__(self, name: str) -> bool:
        return name in self._index

    def __iter__(self) -> typing.Iterator[Middleware]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self):
        return f"Pipeline({self.names()!r})"

    async def run(
        self, payload: Payload, logger: typing.Optional[ClientLogger] = None
    ) -> typing.Any:
        try:
            result = await apply_handlers(self.handlers("request"), payload)
            if result is not payload:
                payload.response = result
            return await apply_handlers(self.handlers("response"), payload)
        except Exception as e:
            failure = e
        if logger is not None:
            logger.error(
                "%s %s failed: %s", payload.request.method, payload.request.url, failure
            )
        outcome = await apply_handlers(self.handlers("error"), failure)
        if isinstance(outcome, Recover):
            return outcome.value
        if isinstance(outcome, BaseException):
            raise outcome
        raise RejectedError(outcome) from failure

    def __init__(self, entries: typing.Iterable[Middleware] = ()):
        self._original = tuple(entries)
        self._entries = list(self._original)
        self._reindex()
