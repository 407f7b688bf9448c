"""
The default middleware a client is configured with. The names are stable and can be used
as anchors for :py:meth:`~jsonapi_client.client.JsonApiClient.insert_middleware_before`
and friends.
"""

from .json_api import (  # noqa
    AUTH,
    DELETE,
    ERRORS,
    GET,
    HEADER,
    PATCH,
    POST,
    PUT,
    RESPONSE,
    http_basic_auth,
    delete,
    errors,
    get,
    header,
    patch,
    post,
    put,
    response,
)
from .request import SEND_REQUEST, send_request  # noqa

DEFAULT_MIDDLEWARE = (
    http_basic_auth,
    post,
    patch,
    put,
    delete,
    get,
    header,
    send_request,
    errors,
    response,
)
