"""
Generation of the code that coerces raw parameter text into typed values.

The emitted statements expect the enclosing function to define an ``errors``
list: coercion failures are appended to it as ``InvalidParamTypeError`` so
that every bad parameter of a request is reported, not just the first one.
"""

from typing import List

from .design import Kind
from .exceptions import CodegenError
from .naming import Namer, quote
from .template_data import CoerceData, array_attribute, new_coerce_data
from .typerefs import type_ref

INDENT = "    "

PARSERS = {
    Kind.BOOLEAN: "parse_bool",
    Kind.INTEGER: "parse_int",
    Kind.NUMBER: "parse_number",
    Kind.DATETIME: "parse_datetime",
}


def coerce(data: CoerceData, namer: Namer) -> str:
    """Return the statements assigning the coerced value of data.raw to data.target."""
    return "\n".join(coerce_lines(data, namer))


def coerce_lines(data: CoerceData, namer: Namer) -> List[str]:
    kind = data.attribute.type.kind
    pad = INDENT * data.depth
    if kind in PARSERS:
        return [
            f"{pad}try:",
            f"{pad}{INDENT}{data.target} = {PARSERS[kind]}({data.raw})",
            f"{pad}except ValueError as exc:",
            f"{pad}{INDENT}errors.append("
            f"InvalidParamTypeError({quote(data.name)}, {data.raw}, {quote(kind.value)}, exc))",
        ]
    if kind is Kind.STRING or kind is Kind.ANY:
        return [f"{pad}{data.target} = {data.raw}"]
    if kind is Kind.ARRAY:
        return _coerce_array(data, namer)
    raise CodegenError(f"cannot coerce {kind.value} parameter {data.name!r}")


def _coerce_array(data: CoerceData, namer: Namer) -> List[str]:
    pad = INDENT * data.depth
    elem = array_attribute(data.attribute)
    elems = namer.tempvar()
    lines = [f'{pad}{elems} = {data.raw}.split(",")']
    if elem.type.kind is Kind.STRING:
        lines.append(f"{pad}{data.target} = {elems}")
        return lines

    typed = namer.tempvar()
    index = namer.tempvar()
    raw_elem = namer.tempvar()
    lines.append(f"{pad}{typed}: List[Optional[{type_ref(elem.type)}]] = [None] * len({elems})")
    lines.append(f"{pad}for {index}, {raw_elem} in enumerate({elems}):")
    elem_data = new_coerce_data(data.name, elem, f"{typed}[{index}]", data.depth + 1, raw=raw_elem)
    lines.extend(coerce_lines(elem_data, namer))
    lines.append(f"{pad}{data.target} = {typed}")
    return lines
