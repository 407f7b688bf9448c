from ..exceptions import TransportError
from ..pipeline import Middleware, Payload
from ..transport import Response

SEND_REQUEST = "send-request"


async def _send_request(payload: Payload) -> Response:
    request = payload.request
    response = await payload.client.transport.send(request)
    if not response.ok:
        raise TransportError(
            f"{request.method} {request.url} returned HTTP {response.status}", response
        )
    return response


send_request = Middleware(name=SEND_REQUEST, request=_send_request)
