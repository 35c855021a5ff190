"""
Service and controller base used by generated mount functions.
"""

import logging
from abc import ABC
from dataclasses import replace
from typing import Any, Callable, Dict, Optional, Type

from .codecs import Decoder, Encoder
from .context import Context
from .error_models import ErrorResponse
from .errors import BadRequestError, DecodeError, RequestErrors
from .models import Request, Response
from .mux import Handler, ServeMux

# Set up logger for this module
logger = logging.getLogger(__name__)


class Service:
    """A service groups the controllers, codecs and routes of an API version."""

    def __init__(self, name: str, version_name: str = ""):
        self.name = name
        self._version_name = version_name
        self._encoders: Dict[str, Encoder] = {}
        self._decoders: Dict[str, Decoder] = {}
        self._default_encoder: Optional[str] = None
        self._default_decoder: Optional[str] = None
        self._mux = ServeMux()
        self._versions: Dict[str, "Service"] = {}

    def version(self, name: str) -> "Service":
        """Return the service handling the given API version, creating it if needed."""
        if name not in self._versions:
            self._versions[name] = Service(self.name, name)
        return self._versions[name]

    def version_name(self) -> str:
        return self._version_name

    def serve_mux(self) -> ServeMux:
        return self._mux

    def set_encoder(self, encoder: Encoder, make_default: bool, *content_types: str) -> None:
        """Register an encoder for the given content types.

        Registering an encoder of the same type again for a content type is a no-op.
        """
        for content_type in content_types:
            existing = self._encoders.get(content_type)
            if existing is not None and type(existing) is type(encoder):
                continue
            self._encoders[content_type] = encoder
        if make_default and content_types:
            self._default_encoder = content_types[0]

    def set_decoder(self, decoder: Decoder, make_default: bool, *content_types: str) -> None:
        """Register a decoder for the given content types.

        Registering a decoder of the same type again for a content type is a no-op.
        """
        for content_type in content_types:
            existing = self._decoders.get(content_type)
            if existing is not None and type(existing) is type(decoder):
                continue
            self._decoders[content_type] = decoder
        if make_default and content_types:
            self._default_decoder = content_types[0]

    def encoders(self) -> Dict[str, Encoder]:
        return dict(self._encoders)

    def decoders(self) -> Dict[str, Decoder]:
        return dict(self._decoders)

    def encode_response(self, ctx: Context, body: Any) -> bytes:
        """Encode a response body using the encoder matching the response content type."""
        content_type = ctx.header().get("Content-Type", "").split(";")[0].strip()
        encoder = self._encoders.get(content_type)
        if encoder is None and self._default_encoder is not None:
            encoder = self._encoders[self._default_encoder]
        if encoder is None:
            raise ValueError(f"No encoder registered for {content_type or 'responses'}")
        return encoder.encode(body)

    def decode_request(self, ctx: Context, target: Type[Any]) -> Any:
        """Decode the request body into an instance of the target type."""
        content_type = ctx.request.get_content_type() or ""
        decoder = self._decoders.get(content_type)
        if decoder is None and self._default_decoder is not None:
            decoder = self._decoders[self._default_decoder]
        if decoder is None:
            raise DecodeError(f"No decoder registered for {content_type or 'requests'}")
        return decoder.decode(ctx.request.body or b"", target)

    def info(self, msg: str, **fields: Any) -> None:
        """Log an informational message with key/value context."""
        pairs = " ".join(f"{key}={value!r}" for key, value in fields.items())
        logger.info(f"[{self.name}] {msg} {pairs}".rstrip())

    def serve(self, request: Request) -> Response:
        """Dispatch a request to the handler mounted for its verb and path."""
        found = None
        service = self
        for candidate in [self, *self._versions.values()]:
            found = candidate.serve_mux().lookup(request.method.value, request.path)
            if found is not None:
                service = candidate
                break
        if found is None:
            logger.debug(f"No route for {request.method.value} {request.path}")
            return Response(404, b"Not Found", {"Content-Type": "text/plain"})

        handler, params = found
        ctx = Context(service, replace(request, path_params=params))
        try:
            handler(ctx)
        except BadRequestError as e:
            logger.warning(f"Bad request {request.method.value} {request.path}: {e}")
            body = ErrorResponse.from_bad_request(e).model_dump_json()
            return Response(400, body.encode("utf-8"), {"Content-Type": "application/json"})
        return ctx.to_response()


class Controller(ABC):
    """Base class of the generated controller interfaces."""

    def __init__(self, service: Service, name: str = ""):
        self.service = service
        self.name = name or type(self).__name__

    def handle_func(
        self,
        action: str,
        handler: Handler,
        unmarshal: Optional[Callable[[Context], None]] = None,
    ) -> Handler:
        """Wrap an action handler so the request payload is unmarshalled first."""

        def handle(ctx: Context) -> Any:
            if unmarshal is not None:
                try:
                    unmarshal(ctx)
                except (RequestErrors, DecodeError) as e:
                    raise BadRequestError(e) from e
            logger.debug(f"{self.name} handling action {action}")
            return handler(ctx)

        return handle
