"""
An asynchronous JSON:API client: a document codec that turns compound documents into
shared-instance object graphs and back, driven by a configurable middleware pipeline.
"""

from .client import JsonApiClient  # noqa
from .config import BasicAuth, TrailingSlash  # noqa
from .deserializer import Deserializer  # noqa
from .exceptions import (  # noqa
    ApiError,
    ConfigurationError,
    JSONAPIClientException,
    MalformedDocumentError,
    MiddlewareNotFoundError,
    RejectedError,
    RelatedResourceNotPersistedError,
    SerializationError,
    TransportError,
    UnknownModelError,
)
from .logger import ClientLogger  # noqa
from .models import Attr, HasMany, HasOne, ModelDefinition, ModelOptions  # noqa
from .pipeline import Middleware, Payload, Pipeline, Recover  # noqa
from .registry import ModelRegistry  # noqa
from .resources import Resource, Result, UnresolvedReference  # noqa
from .serializer import Serializer  # noqa
from .transport import HttpxTransport, Request, Response, Transport  # noqa
