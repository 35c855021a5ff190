"""
Errors raised by generated code while handling a request.

Field-level problems are collected as :class:`RequestError` values and
raised together as one :class:`RequestErrors` so that a single bad request
reports every missing header, missing parameter, bad parameter type and
failed validation rule, in declaration order.
"""

import re
from typing import Any, Dict, Iterator, List, Optional, Sequence

# Separators of the segments of an error location, e.g. "response.tags[*]".
_SEPARATOR_RE = re.compile(r"[.\[]")


class RequestError(Exception):
    """Base class for a single problem found in a request."""

    kind = "request_error"

    def __init__(self, name: str, message: str):
        self.name = name
        self.message = message
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Return the error in the shape used by error response details."""
        return {"type": self.kind, "loc": [self.name], "msg": self.message}

    def within(self, path: str) -> "RequestError":
        """Return a copy of the error located under path.

        The first segment of the location, the context of the type that raised
        it, is replaced by path: "response.id" within "response.account" is
        "response.account.id".
        """
        root = _SEPARATOR_RE.split(self.name, maxsplit=1)[0]
        error = type(self).__new__(type(self))
        error.__dict__.update(self.__dict__)
        error.name = path + self.name[len(root):]
        error.message = self.message.replace(self.name, error.name, 1)
        error.args = (error.message,)
        return error


class MissingHeaderError(RequestError):
    """A required header is missing."""

    kind = "missing_header"

    def __init__(self, name: str):
        super().__init__(name, f"missing required HTTP header {name!r}")


class MissingParamError(RequestError):
    """A required parameter is missing."""

    kind = "missing_param"

    def __init__(self, name: str):
        super().__init__(name, f"missing required parameter {name!r}")


class InvalidParamTypeError(RequestError):
    """A parameter value could not be coerced to its declared type."""

    kind = "invalid_param_type"

    def __init__(self, name: str, value: Any, expected: str, cause: Optional[BaseException] = None):
        self.value = value
        self.expected = expected
        super().__init__(
            name, f"invalid value {value!r} for parameter {name!r}, must be a {expected}"
        )
        self.__cause__ = cause

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["input"] = self.value
        return data


class ValidationFailedError(RequestError):
    """A value does not satisfy a validation rule of the design."""

    kind = "validation_failed"

    def __init__(self, name: str, value: Any, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(name, f"{name} {reason}")

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["input"] = self.value
        return data


class RequestErrors(Exception):
    """All the problems found while processing a request.

    Attributes:
        errors: The individual errors, in the order they were found.
        context: The partially populated action context, if any.
    """

    def __init__(self, errors: Sequence[RequestError], context: Any = None):
        self.errors: List[RequestError] = list(errors)
        self.context = context
        super().__init__("; ".join(e.message for e in self.errors))

    def __iter__(self) -> Iterator[RequestError]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)


class DecodeError(Exception):
    """Raised when a request body cannot be decoded."""

    def __init__(self, message: str = "Failed to decode request body", original_exception=None):
        self.message = message
        self.original_exception = original_exception
        super().__init__(self.message)


class BadRequestError(Exception):
    """Raised by generated handlers to reject a request with a 400 response."""

    status_code = 400

    def __init__(self, error: Exception):
        self.error = error
        super().__init__(str(error))

    def details(self) -> List[Dict[str, Any]]:
        if isinstance(self.error, RequestErrors):
            return [e.to_dict() for e in self.error]
        if isinstance(self.error, RequestError):
            return [self.error.to_dict()]
        return [{"type": "bad_request", "loc": [], "msg": str(self.error)}]
