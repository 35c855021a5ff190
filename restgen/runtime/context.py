"""
Request contexts handed to generated handlers and controllers.
"""

from typing import TYPE_CHECKING, Any, Dict, Optional

from .models import Request, Response

if TYPE_CHECKING:
    from .service import Service


class Context:
    """Holds the request being handled and the response being built."""

    def __init__(self, service: "Service", request: Request):
        self.service = service
        self.request = request
        self.response_headers: Dict[str, str] = {}
        self.response_status: Optional[int] = None
        self.response_body: Optional[bytes] = None
        self._payload: Any = None

    def get(self, name: str) -> str:
        """Return the raw value of a path or query string parameter, "" if absent."""
        if self.request.path_params and name in self.request.path_params:
            return self.request.path_params[name]
        if self.request.query_params and name in self.request.query_params:
            return self.request.query_params[name]
        return ""

    def request_header(self, name: str) -> str:
        return self.request.get_header(name)

    def header(self) -> Dict[str, str]:
        """Return the response headers."""
        return self.response_headers

    def respond(self, status: int, body: Any) -> None:
        """Encode the body with the service encoders and set the response."""
        self.respond_bytes(status, self.service.encode_response(self, body))

    def respond_bytes(self, status: int, body: Optional[bytes]) -> None:
        self.response_status = status
        self.response_body = body

    def raw_payload(self) -> Any:
        """Return the payload set by the action unmarshal function, if any."""
        return self._payload

    def set_payload(self, payload: Any) -> None:
        self._payload = payload

    def to_response(self) -> Response:
        status = self.response_status if self.response_status is not None else 204
        return Response(status, self.response_body, dict(self.response_headers))


class ActionContext:
    """Base class of generated action contexts.

    It wraps the request context and exposes the request access and response
    methods generated code relies on. Generated subclasses add one attribute
    per action parameter, so the public names below cannot be used as
    parameter names.
    """

    def __init__(self, context: Context):
        self._context = context

    @property
    def service(self) -> "Service":
        return self._context.service

    @property
    def request(self) -> Request:
        return self._context.request

    def get(self, name: str) -> str:
        return self._context.get(name)

    def request_header(self, name: str) -> str:
        return self._context.request_header(name)

    def header(self) -> Dict[str, str]:
        return self._context.header()

    def respond(self, status: int, body: Any) -> None:
        self._context.respond(status, body)

    def respond_bytes(self, status: int, body: Optional[bytes]) -> None:
        self._context.respond_bytes(status, body)

    def raw_payload(self) -> Any:
        return self._context.raw_payload()
