"""
:py:mod:`jsonapi_client.client` ties the registry, the codec and the middleware pipeline together.

Synopsis
--------

.. code-block:: python

   from jsonapi_client import HasOne, JsonApiClient

   async with JsonApiClient("https://api.example.com") as api:
       api.define("article", {"title": {}, "author": HasOne("people")})
       api.define("person", {"name": {}})

       result = await api.find("article", "1", params={"include": "author"})
       print(result.data["author"]["name"])

       await api.one("article", "1").patch({"id": "1", "title": "New title"})
"""

import dataclasses
import typing

from .config import BasicAuth, TrailingSlash
from .deserializer import Deserializer
from .logger import ClientLogger
from .middleware import DEFAULT_MIDDLEWARE
from .models import FieldSpec, ModelDefinition, ModelOptions
from .pipeline import Middleware, Payload, Pipeline
from .registry import ModelRegistry, Pluralizer
from .serializer import Serializer, fetch_id
from .transport import HttpxTransport, Request, Transport

Params = typing.Optional[typing.Mapping[str, typing.Any]]
Headers = typing.Optional[typing.Mapping[str, str]]


@dataclasses.dataclass(frozen=True)
class BuilderStep:
    path: str
    model: typing.Optional[str] = None
    id: typing.Any = None
    is_resource: bool = False


class JsonApiClient:
    """
    A JSON:API client.

    :param str api_url: the API root, used by the default transport.
    :param Optional[Iterable[Middleware]] middleware: replaces the default middleware.
    :param bool logger: whether diagnostic logging is enabled.
    :param bool reset_builder_on_call: whether the path builder is cleared by each call made through it.
    :param auth: credentials for HTTP basic authentication, as :py:class:`BasicAuth` or ``(username, password)``.
    :param trailing_slash: a :py:class:`TrailingSlash`, or a bool that applies to both kinds of URL.
    :param pluralize: the function deriving collection names; ``False`` disables pluralization.
    :param Optional[Transport] transport: replaces the default :py:class:`HttpxTransport`.
    :param headers: headers sent with every request.
    """

    api_url: str
    models: ModelRegistry
    middleware: Pipeline
    serializer: Serializer
    deserializer: Deserializer
    transport: Transport
    logger: ClientLogger
    headers: typing.Dict[str, str]
    auth: typing.Optional[BasicAuth]
    trailing_slash: TrailingSlash
    reset_builder_on_call: bool
    builder_stack: typing.List[BuilderStep]
    _owns_transport: bool

    # models

    def define(
        self,
        model_name: str,
        attributes: typing.Mapping[str, FieldSpec],
        options: typing.Union[ModelOptions, typing.Mapping[str, typing.Any], None] = None,
    ) -> ModelDefinition:
        return self.models.define(model_name, attributes, options)

    def model_for(self, model_name: str) -> ModelDefinition:
        return self.models.lookup(model_name)

    # paths and URLs

    def collection_path_for(self, model_name: str) -> str:
        return self.models.collection_path(model_name)

    def resource_path_for(self, model_name: str, id: typing.Any) -> str:
        return self.models.resource_path(model_name, id)

    def collection_url_for(self, model_name: str) -> str:
        slash = "/" if self.trailing_slash.collection else ""
        return f"/{self.collection_path_for(model_name)}{slash}"

    def resource_url_for(self, model_name: str, id: typing.Any) -> str:
        slash = "/" if self.trailing_slash.resource else ""
        return f"/{self.resource_path_for(model_name, id)}{slash}"

    def url_for(self, model: typing.Optional[str] = None, id: typing.Any = None) -> str:
        if model is not None and id is not None:
            return self.resource_url_for(model, id)
        elif model is not None:
            return self.collection_url_for(model)
        return self.build_url()

    def path_for(self, model: typing.Optional[str] = None, id: typing.Any = None) -> str:
        if model is not None and id is not None:
            return self.resource_path_for(model, id)
        elif model is not None:
            return self.collection_path_for(model)
        return self.build_path()

    # path builder

    def one(self, model: str, id: typing.Any) -> "JsonApiClient":
        self.builder_stack.append(
            BuilderStep(path=self.resource_path_for(model, id), model=model, id=id, is_resource=True)
        )
        return self

    def all(self, model: str) -> "JsonApiClient":
        self.builder_stack.append(BuilderStep(path=self.collection_path_for(model), model=model))
        return self

    def relationships(self) -> "JsonApiClient":
        self.builder_stack.append(BuilderStep(path="relationships"))
        return self

    def reset_builder(self) -> None:
        self.builder_stack = []

    def stack_for_resource(self) -> bool:
        return bool(self.builder_stack) and self.builder_stack[-1].is_resource

    def add_slash(self) -> bool:
        if self.stack_for_resource():
            return self.trailing_slash.resource
        return self.trailing_slash.collection

    def build_path(self) -> str:
        return "/".join(step.path for step in self.builder_stack)

    def build_url(self) -> str:
        path = self.build_path()
        slash = "/" if path and self.add_slash() else ""
        return f"/{path}{slash}"

    def _last_model(self) -> typing.Optional[str]:
        return self.builder_stack[-1].model if self.builder_stack else None

    def _finish_builder_call(self) -> None:
        if self.reset_builder_on_call:
            self.reset_builder()

    # middleware

    def insert_middleware_before(self, middleware_name: str, new_middleware: Middleware) -> None:
        self.middleware.insert_before(middleware_name, new_middleware)

    def insert_middleware_after(self, middleware_name: str, new_middleware: Middleware) -> None:
        self.middleware.insert_after(middleware_name, new_middleware)

    def replace_middleware(self, middleware_name: str, new_middleware: Middleware) -> None:
        self.middleware.replace(middleware_name, new_middleware)

    def reset_middleware(self) -> None:
        self.middleware.reset()

    def enable_logging(self, enabled: bool = True) -> None:
        self.logger.set_enabled(enabled)

    async def run_middleware(self, request: Request) -> typing.Any:
        return await self.middleware.run(Payload(request=request, client=self), self.logger)

    # calls through the path builder

    async def get(self, params: Params = None, headers: Headers = None) -> typing.Any:
        request = Request(method="GET", url=self.url_for(), params=params, headers=dict(headers or {}))
        self._finish_builder_call()
        return await self.run_middleware(request)

    async def _write_through_builder(
        self,
        method: str,
        payload: typing.Any,
        meta: typing.Optional[typing.Mapping[str, typing.Any]],
        params: Params,
        headers: Headers,
    ) -> typing.Any:
        request = Request(
            method=method,
            url=self.url_for(),
            model=self._last_model(),
            data=payload,
            meta=dict(meta or {}),
            params=params,
            headers=dict(headers or {}),
        )
        self._finish_builder_call()
        return await self.run_middleware(request)

    async def post(
        self,
        payload: typing.Any,
        meta: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        params: Params = None,
        headers: Headers = None,
    ) -> typing.Any:
        return await self._write_through_builder("POST", payload, meta, params, headers)

    async def patch(
        self,
        payload: typing.Any,
        meta: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        params: Params = None,
        headers: Headers = None,
    ) -> typing.Any:
        return await self._write_through_builder("PATCH", payload, meta, params, headers)

    async def destroy(
        self,
        model: typing.Optional[str] = None,
        id: typing.Any = None,
        data: typing.Any = None,
        meta: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        params: Params = None,
        headers: Headers = None,
    ) -> typing.Any:
        """
        Deletes ``model`` with ``id``, or, when neither is given, whatever the path builder points at.
        """
        if model is not None:
            if id is None:
                raise ValueError("no ID specified")
            request = Request(
                method="DELETE",
                url=self.url_for(model, id),
                model=model,
                data=data,
                meta=dict(meta or {}),
                params=params,
                headers=dict(headers or {}),
            )
        else:
            request = Request(
                method="DELETE",
                url=self.url_for(),
                model=self._last_model(),
                data=data,
                meta=dict(meta or {}),
                params=params,
                headers=dict(headers or {}),
            )
            self._finish_builder_call()
        return await self.run_middleware(request)

    # calls by model

    async def find(
        self, model_name: str, id: typing.Any, params: Params = None, headers: Headers = None
    ) -> typing.Any:
        return await self.run_middleware(
            Request(
                method="GET",
                url=self.url_for(model_name, id),
                model=model_name,
                params=params,
                headers=dict(headers or {}),
            )
        )

    async def find_all(
        self, model_name: str, params: Params = None, headers: Headers = None
    ) -> typing.Any:
        return await self.run_middleware(
            Request(
                method="GET",
                url=self.url_for(model_name),
                model=model_name,
                params=params,
                headers=dict(headers or {}),
            )
        )

    async def _write_model(
        self,
        method: str,
        url: str,
        model_name: str,
        payload: typing.Any,
        meta: typing.Optional[typing.Mapping[str, typing.Any]],
        params: Params,
        headers: Headers,
    ) -> typing.Any:
        return await self.run_middleware(
            Request(
                method=method,
                url=url,
                model=model_name,
                data=payload,
                meta=dict(meta or {}),
                params=params,
                headers=dict(headers or {}),
            )
        )

    async def create(
        self,
        model_name: str,
        payload: typing.Any,
        meta: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        params: Params = None,
        headers: Headers = None,
    ) -> typing.Any:
        return await self._write_model(
            "POST", self.url_for(model_name), model_name, payload, meta, params, headers
        )

    async def update(
        self,
        model_name: str,
        payload: typing.Any,
        meta: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        params: Params = None,
        headers: Headers = None,
    ) -> typing.Any:
        return await self._write_model(
            "PATCH",
            self.url_for(model_name, fetch_id(payload)),
            model_name,
            payload,
            meta,
            params,
            headers,
        )

    async def put(
        self,
        model_name: str,
        payload: typing.Any,
        meta: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        params: Params = None,
        headers: Headers = None,
    ) -> typing.Any:
        return await self._write_model(
            "PUT",
            self.url_for(model_name, fetch_id(payload)),
            model_name,
            payload,
            meta,
            params,
            headers,
        )

    # raw calls

    async def request(
        self,
        url: str,
        method: str = "GET",
        data: typing.Any = None,
        params: Params = None,
        headers: Headers = None,
    ) -> typing.Any:
        return await self.run_middleware(
            Request(method=method, url=url, data=data, params=params, headers=dict(headers or {}))
        )

    async def custom_request(
        self,
        method: str = "GET",
        url: typing.Optional[str] = None,
        model: typing.Optional[str] = None,
        data: typing.Any = None,
        meta: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        params: Params = None,
        headers: Headers = None,
    ) -> typing.Any:
        return await self.run_middleware(
            Request(
                method=method,
                url=url if url is not None else self.url_for(),
                model=model,
                data=data,
                meta=dict(meta or {}),
                params=params,
                headers=dict(headers or {}),
            )
        )

    # lifecycle

    async def aclose(self) -> None:
        if self._owns_transport:
            await typing.cast(HttpxTransport, self.transport).aclose()

    async def __aenter__(self) -> "JsonApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def __init__(
        self,
        api_url: str = "",
        *,
        middleware: typing.Optional[typing.Iterable[Middleware]] = None,
        logger: bool = True,
        reset_builder_on_call: bool = True,
        auth: typing.Union[BasicAuth, typing.Tuple[str, str], typing.Mapping[str, str], None] = None,
        trailing_slash: typing.Union[TrailingSlash, bool, typing.Mapping[str, bool], None] = None,
        pluralize: typing.Union[Pluralizer, bool, None] = None,
        transport: typing.Optional[Transport] = None,
        headers: typing.Optional[typing.Mapping[str, str]] = None,
    ):
        self.api_url = api_url
        self.logger = ClientLogger(logger)
        self.models = ModelRegistry(pluralize)
        self.middleware = Pipeline(middleware if middleware is not None else DEFAULT_MIDDLEWARE)
        self.serializer = Serializer(self.models)
        self.deserializer = Deserializer(self.models, self.logger)
        if transport is None:
            self.transport = HttpxTransport(api_url)
            self._owns_transport = True
        else:
            self.transport = transport
            self._owns_transport = False
        self.headers = dict(headers or {})
        self.auth = BasicAuth.coerce(auth)
        self.trailing_slash = TrailingSlash.coerce(trailing_slash)
        self.reset_builder_on_call = bool(reset_builder_on_call)
        self.builder_stack = []
