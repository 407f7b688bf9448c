import abc
import typing

from .serde.models import ErrorRepr, Source
from .utils import english_enumerate


class JSONAPIClientException(Exception, metaclass=abc.ABCMeta):
    message: str

    def __str__(self):
        return self.message


class ConfigurationError(JSONAPIClientException):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnknownModelError(ConfigurationError):
    name: str
    known: typing.Sequence[str]

    @property  # type: ignore
    def message(self):
        known = english_enumerate((f'"{n}"' for n in self.known), conj=", ")
        return f'API resource definition for model "{self.name}" not found. Available models: {known or "(none)"}'

    def __init__(self, name: str, known: typing.Iterable[str] = ()):
        Exception.__init__(self, name)
        self.name = name
        self.known = tuple(known)


class MiddlewareNotFoundError(ConfigurationError):
    name: str

    @property  # type: ignore
    def message(self):
        return f'no middleware named "{self.name}" in the pipeline'

    def __init__(self, name: str):
        Exception.__init__(self, name)
        self.name = name


class SerializationError(JSONAPIClientException):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RelatedResourceNotPersistedError(SerializationError):
    model: str
    name: str

    @property  # type: ignore
    def message(self):
        return f'relationship ({self.name}) in "{self.model}" refers to a resource without an id'

    def __init__(self, model: str, name: str):
        Exception.__init__(self, model, name)
        self.model = model
        self.name = name


class MalformedDocumentError(JSONAPIClientException):
    payload: typing.Any
    pointer: typing.Optional[Source]

    @property
    def sources(self) -> typing.Sequence[Source]:
        if self.pointer is None:
            return []
        else:
            return [self.pointer]

    def __init__(
        self, message: str, pointer: typing.Optional[Source] = None, payload: typing.Any = None
    ):
        super().__init__(message)
        self.message = f"{pointer}: {message}" if pointer is not None else message
        self.pointer = pointer
        self.payload = payload


class ApiError(JSONAPIClientException):
    """
    Raised when the remote service answers with a document carrying an ``errors`` array.
    """

    errors: typing.Sequence[ErrorRepr]
    status: typing.Optional[int]
    response: typing.Any

    @property  # type: ignore
    def message(self):
        parts = []
        for e in self.errors:
            text = e.detail or e.title or e.code or "unknown error"
            parts.append(f"{e.field}: {text}")
        prefix = f"API error (HTTP {self.status})" if self.status is not None else "API error"
        return f"{prefix}: {'; '.join(parts)}"

    def as_dict(self) -> typing.Dict[str, typing.Dict[str, typing.Optional[str]]]:
        """
        Returns the errors keyed by the member they point at.
        """
        return {e.field: {"title": e.title, "detail": e.detail} for e in self.errors}

    def __init__(
        self,
        errors: typing.Sequence[ErrorRepr],
        status: typing.Optional[int] = None,
        response: typing.Any = None,
    ):
        Exception.__init__(self, errors)
        self.errors = errors
        self.status = status
        self.response = response


class TransportError(JSONAPIClientException):
    """
    Raised for failures of the transport: network errors or a non-2xx response.
    """

    response: typing.Any

    @property
    def status(self) -> typing.Optional[int]:
        return self.response.status if self.response is not None else None

    def __init__(self, message: str, response: typing.Any = None):
        super().__init__(message)
        self.message = message
        self.response = response


class RejectedError(JSONAPIClientException):
    """
    Raised when the error handlers of the pipeline end up with something other than an exception.
    """

    value: typing.Any

    @property  # type: ignore
    def message(self):
        return f"request rejected: {self.value!r}"

    def __init__(self, value: typing.Any):
        Exception.__init__(self, value)
        self.value = value
