"""
restgen: generates the glue code of a web API from its design.

From a design (resources, actions, media types and user types) restgen writes
a Python package holding the action contexts, controller interfaces, mount
functions, href builders and data types of the API. The generated code runs
on top of :mod:`restgen.runtime`.
"""

from .config import GeneratorSettings
from .design import (
    APIDefinition,
    APIVersionDefinition,
    ActionDefinition,
    AnyType,
    Array,
    AttributeDefinition,
    Boolean,
    DateTime,
    EncodingDefinition,
    Integer,
    LinkDefinition,
    MediaTypeDefinition,
    Number,
    Object,
    ResourceDefinition,
    ResponseDefinition,
    RouteDefinition,
    String,
    UserTypeDefinition,
    ValidationDefinition,
    ViewDefinition,
)
from .exceptions import (
    CodegenError,
    EncodingError,
    ProjectionError,
    ReservedNameError,
    TemplateRenderError,
    UnknownMediaTypeError,
)
from .generator import Generator

__version__ = "0.1.0"

__all__ = [
    "APIDefinition",
    "APIVersionDefinition",
    "ActionDefinition",
    "AnyType",
    "Array",
    "AttributeDefinition",
    "Boolean",
    "CodegenError",
    "DateTime",
    "EncodingDefinition",
    "EncodingError",
    "Generator",
    "GeneratorSettings",
    "Integer",
    "LinkDefinition",
    "MediaTypeDefinition",
    "Number",
    "Object",
    "ProjectionError",
    "ReservedNameError",
    "ResourceDefinition",
    "ResponseDefinition",
    "RouteDefinition",
    "String",
    "TemplateRenderError",
    "UnknownMediaTypeError",
    "UserTypeDefinition",
    "ValidationDefinition",
    "ViewDefinition",
]
