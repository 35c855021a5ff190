"""
Encoders and decoders for request and response bodies.
"""

import json
from typing import Any, Type

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .errors import DecodeError


class Encoder:
    """Base class for response body encoders."""

    def encode(self, value: Any) -> bytes:
        raise NotImplementedError


class Decoder:
    """Base class for request body decoders."""

    def decode(self, body: bytes, target: Type[Any]) -> Any:
        raise NotImplementedError


class JSONEncoder(Encoder):
    """Encodes generated types, lists and dicts as JSON."""

    def encode(self, value: Any) -> bytes:
        data = TypeAdapter(type(value)).dump_python(value, mode="json")
        return json.dumps(data).encode("utf-8")


class JSONDecoder(Decoder):
    """Decodes JSON bodies into generated types."""

    def decode(self, body: bytes, target: Type[Any]) -> Any:
        try:
            return TypeAdapter(target).validate_json(body or b"null")
        except PydanticValidationError as e:
            raise DecodeError(f"Failed to decode JSON body: {e}", e) from e


def json_encoder_factory() -> JSONEncoder:
    return JSONEncoder()


def json_decoder_factory() -> JSONDecoder:
    return JSONDecoder()
