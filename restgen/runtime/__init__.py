"""
Support library for the code produced by restgen.

Generated contexts, controllers and types import everything they need from
this package.
"""

from .codecs import Decoder, Encoder, JSONDecoder, JSONEncoder
from .coercion import parse_bool, parse_datetime, parse_int, parse_number
from .context import ActionContext, Context
from .error_models import ErrorResponse
from .errors import (
    BadRequestError,
    DecodeError,
    InvalidParamTypeError,
    MissingHeaderError,
    MissingParamError,
    RequestError,
    RequestErrors,
    ValidationFailedError,
)
from .models import HTTPMethod, Request, Response
from .mux import ServeMux
from .service import Controller, Service

__all__ = [
    "ActionContext",
    "BadRequestError",
    "Context",
    "Controller",
    "DecodeError",
    "Decoder",
    "Encoder",
    "ErrorResponse",
    "HTTPMethod",
    "InvalidParamTypeError",
    "JSONDecoder",
    "JSONEncoder",
    "MissingHeaderError",
    "MissingParamError",
    "Request",
    "RequestError",
    "RequestErrors",
    "Response",
    "ServeMux",
    "Service",
    "ValidationFailedError",
    "parse_bool",
    "parse_datetime",
    "parse_int",
    "parse_number",
]
