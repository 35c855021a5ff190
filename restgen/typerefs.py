"""
Python type annotations and field declarations for design data types.
"""

from typing import Any, List

from .design import AttributeDefinition, DataType, Kind, UserTypeDefinition
from .naming import safe_identifier

PRIMITIVE_TYPES = {
    Kind.BOOLEAN: "bool",
    Kind.INTEGER: "int",
    Kind.NUMBER: "float",
    Kind.STRING: "str",
    Kind.DATETIME: "datetime",
    Kind.ANY: "Any",
}

# Values given to non-optional fields that have no design default.
ZERO_VALUES = {
    Kind.BOOLEAN: "False",
    Kind.INTEGER: "0",
    Kind.NUMBER: "0.0",
    Kind.STRING: '""',
}


def type_ref(data_type: DataType, quoted: bool = False) -> str:
    """Return the annotation used to reference the given type.

    Args:
        data_type: The type to reference.
        quoted: Quote named types so the reference can be evaluated before
            they are defined (type aliases).
    """
    if isinstance(data_type, UserTypeDefinition):
        return f'"{data_type.type_name}"' if quoted else data_type.type_name
    if data_type.kind is Kind.ARRAY:
        return f"List[{type_ref(data_type.to_array().elem_type.type, quoted)}]"
    if data_type.kind is Kind.OBJECT:
        return "Dict[str, Any]"
    return PRIMITIVE_TYPES[data_type.kind]


def literal(value: Any) -> str:
    """Render a design default value as a Python literal."""
    return repr(value)


def field_type(parent: AttributeDefinition, name: str) -> str:
    """Annotation of a field of the given object attribute."""
    att = parent.fields()[name]
    ref = type_ref(att.type)
    if att.type.kind is Kind.ANY:
        return ref
    if att.type.kind in ZERO_VALUES and not parent.is_primitive_pointer(name):
        return ref
    if att.default is not None:
        return ref
    return f"Optional[{ref}]"


def field_default(parent: AttributeDefinition, name: str, in_dataclass: bool = False) -> str:
    """Initial value of a field of the given object attribute."""
    att = parent.fields()[name]
    if att.default is not None:
        if in_dataclass and isinstance(att.default, (list, dict)):
            return f"field(default_factory=lambda: {literal(att.default)})"
        return literal(att.default)
    if parent.is_primitive_pointer(name):
        return "None"
    return ZERO_VALUES.get(att.type.kind, "None")


def field_defs(user_type: UserTypeDefinition) -> List[str]:
    """Dataclass field declarations for an object user type.

    Required fields without a default come first since they take no default value.
    """
    att = user_type.attribute
    mandatory: List[str] = []
    optional: List[str] = []
    for name, child in att.fields().items():
        ident = safe_identifier(name)
        ref = type_ref(child.type)
        if att.is_required(name) and child.default is None:
            mandatory.append(f"{ident}: {ref}")
        elif child.default is not None:
            optional.append(f"{ident}: {ref} = {field_default(att, name, in_dataclass=True)}")
        elif child.type.kind is Kind.ANY:
            optional.append(f"{ident}: {ref} = None")
        else:
            optional.append(f"{ident}: Optional[{ref}] = None")
    return mandatory + optional
