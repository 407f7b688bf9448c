import collections.abc
import typing

from ..exceptions import ApiError, MalformedDocumentError, TransportError
from ..pipeline import Middleware, Payload
from ..resources import Result
from ..serde.deserializer import ReprDeserializer

AUTH = "HTTP_BASIC_AUTH"
POST = "POST"
PATCH = "PATCH"
PUT = "PUT"
DELETE = "DELETE"
GET = "GET"
HEADER = "HEADER"
ERRORS = "errors"
RESPONSE = "response"

MEDIA_TYPE = "application/vnd.api+json"


def _add_jsonapi_headers(payload: Payload) -> None:
    payload.request.headers = {
        **payload.request.headers,
        "Content-Type": MEDIA_TYPE,
        "Accept": MEDIA_TYPE,
    }


def _serialize_body(payload: Payload) -> None:
    request = payload.request
    if request.model is None:
        # e.g. a relationship endpoint; the body is expected to be a document already
        return
    request.data = payload.client.serializer.serialize_document(
        request.model, request.data, request.meta
    )


def _http_basic_auth(payload: Payload) -> Payload:
    auth = payload.client.auth
    if auth is not None:
        payload.request.headers = {**payload.request.headers, "Authorization": auth.header}
    return payload


def _write_handler(method: str) -> typing.Callable[[Payload], Payload]:
    def handler(payload: Payload) -> Payload:
        if payload.request.method == method:
            _add_jsonapi_headers(payload)
            _serialize_body(payload)
        return payload

    handler.__name__ = f"_{method.lower()}"
    return handler


def _delete(payload: Payload) -> Payload:
    request = payload.request
    if request.method == DELETE:
        _add_jsonapi_headers(payload)
        if isinstance(request.data, (list, tuple)) and request.model is not None:
            request.data = payload.client.serializer.serialize_document(
                request.model, request.data, request.meta
            )
        elif not (isinstance(request.data, collections.abc.Mapping) and "data" in request.data):
            request.data = None
    return payload


def _get(payload: Payload) -> Payload:
    if payload.request.method == GET:
        _add_jsonapi_headers(payload)
        payload.request.data = None
    return payload


def _header(payload: Payload) -> Payload:
    defaults = payload.client.headers
    if defaults:
        payload.request.headers = {**defaults, **payload.request.headers}
    return payload


def _error_documents(body: typing.Any) -> typing.Sequence[typing.Any]:
    if isinstance(body, collections.abc.Mapping) and body.get("errors"):
        return ReprDeserializer().errors(body)
    return ()


def _detect_errors(payload: Payload) -> Payload:
    response = payload.response
    if response is not None:
        errors = _error_documents(response.data)
        if errors:
            raise ApiError(errors, response.status, response)
    return payload


def _promote_errors(error: BaseException) -> BaseException:
    if isinstance(error, TransportError) and error.response is not None:
        try:
            errors = _error_documents(error.response.data)
        except MalformedDocumentError:
            return error
        if errors:
            api_error = ApiError(errors, error.response.status, error.response)
            api_error.__cause__ = error
            return api_error
    return error


def _deserialize_response(payload: Payload) -> Result:
    response = payload.response
    if response is None or response.data is None:
        if response is not None and response.content.strip():
            raise MalformedDocumentError("response body is not a JSON document", "/")
        return Result(response=response)
    result = payload.client.deserializer.deserialize_document(response.data)
    result.response = response
    return result


http_basic_auth = Middleware(name=AUTH, request=_http_basic_auth)
post = Middleware(name=POST, request=_write_handler(POST))
patch = Middleware(name=PATCH, request=_write_handler(PATCH))
put = Middleware(name=PUT, request=_write_handler(PUT))
delete = Middleware(name=DELETE, request=_delete)
get = Middleware(name=GET, request=_get)
header = Middleware(name=HEADER, request=_header)
errors = Middleware(name=ERRORS, response=_detect_errors, error=_promote_errors)
response = Middleware(name=RESPONSE, response=_deserialize_response)
