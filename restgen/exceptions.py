"""
Custom exceptions for the code generator.

These are generation-time faults: they abort the artifact being emitted and
are surfaced to the caller. Faults of the generated code itself are defined
in :mod:`restgen.runtime.errors`.
"""


class CodegenError(Exception):
    """Base exception for code generation errors."""

    pass


class ProjectionError(CodegenError):
    """Raised when a media type view cannot be computed."""

    pass


class UnknownMediaTypeError(CodegenError):
    """Raised when a design references a media type identifier that does not exist."""

    def __init__(self, identifier: str, referrer: str = ""):
        self.identifier = identifier
        self.referrer = referrer
        message = f"unknown media type {identifier!r}"
        if referrer:
            message += f" referenced by {referrer}"
        super().__init__(message)


class EncodingError(CodegenError):
    """Raised when no encoder or decoder package is known for a MIME type."""

    pass


class TemplateRenderError(CodegenError):
    """Raised when a template fails to render."""

    def __init__(self, artifact: str, original_exception: Exception):
        self.artifact = artifact
        self.original_exception = original_exception
        super().__init__(f"failed to render {artifact!r}: {original_exception}")


class ReservedNameError(CodegenError):
    """Raised when an action parameter would hide a member of its generated context."""

    def __init__(self, name: str, context: str):
        self.name = name
        self.context = context
        super().__init__(f"parameter {name!r} of {context} clashes with a member of the context class")
