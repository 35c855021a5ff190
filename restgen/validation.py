"""
Generation of the code that checks values against the design validation rules.

Like the coercion code, the emitted statements append to an ``errors`` list
defined by the enclosing function.
"""

from typing import List, Optional, Set

from .design import AttributeDefinition, UserTypeDefinition, ValidationDefinition
from .naming import Namer, quote, safe_identifier, snake_case
from .typerefs import literal

INDENT = "    "


def has_validation(att: AttributeDefinition, seen: Optional[Set[str]] = None) -> bool:
    """Whether validation code would be generated for values of the attribute."""
    seen = set() if seen is None else seen
    data_type = att.type
    if isinstance(data_type, UserTypeDefinition):
        if _has_rules(att.validation):
            return True
        if data_type.type_name in seen:
            return False
        return has_validation(data_type.attribute, seen | {data_type.type_name})
    if data_type.is_object():
        if att.required or att.non_zero:
            return True
        return any(has_validation(child, seen) for child in data_type.to_object().values())
    if _has_rules(att.validation):
        return True
    if data_type.is_array():
        return has_validation(data_type.to_array().elem_type, seen)
    return False


def recursive_validate(
    att: AttributeDefinition, target: str, context: str, depth: int, namer: Namer
) -> str:
    """Validation code for a named type instance held by target.

    Object types are validated field by field using attribute access on the
    target, other types are validated as a single value.
    """
    if att.type.is_object() and not isinstance(att.type, UserTypeDefinition):
        lines = _object_lines(att, target, context, depth, namer, mapping=False)
    else:
        lines = _value_lines(att, False, target, context, depth, namer)
    return "\n".join(lines)


def validation_checker(
    att: AttributeDefinition, non_zero: bool, target: str, context: str, depth: int, namer: Namer
) -> str:
    """Validation code for a single value, e.g. a coerced request parameter."""
    return "\n".join(_value_lines(att, non_zero, target, context, depth, namer))


def _has_rules(validation: Optional[ValidationDefinition]) -> bool:
    return validation is not None and validation.has_rules()


def _fail(pad: str, context: str, value: str, reason: str) -> str:
    return f"{pad}errors.append(ValidationFailedError({quote(context)}, {value}, {quote(reason)}))"


def _rule_lines(validation: ValidationDefinition, target: str, context: str, pad: str) -> List[str]:
    lines: List[str] = []
    if validation.values is not None:
        lines.append(f"{pad}if {target} not in {literal(list(validation.values))}:")
        lines.append(_fail(pad + INDENT, context, target, f"must be one of {validation.values!r}"))
    if validation.pattern is not None:
        lines.append(f"{pad}if re.search({quote(validation.pattern)}, {target}) is None:")
        lines.append(_fail(pad + INDENT, context, target, f"must match the regexp {validation.pattern!r}"))
    if validation.minimum is not None:
        lines.append(f"{pad}if {target} < {literal(validation.minimum)}:")
        lines.append(_fail(pad + INDENT, context, target, f"must be greater than or equal to {validation.minimum}"))
    if validation.maximum is not None:
        lines.append(f"{pad}if {target} > {literal(validation.maximum)}:")
        lines.append(_fail(pad + INDENT, context, target, f"must be lesser than or equal to {validation.maximum}"))
    if validation.min_length is not None:
        lines.append(f"{pad}if len({target}) < {validation.min_length}:")
        lines.append(_fail(
            pad + INDENT, context, target,
            f"length must be greater than or equal to {validation.min_length}",
        ))
    if validation.max_length is not None:
        lines.append(f"{pad}if len({target}) > {validation.max_length}:")
        lines.append(_fail(
            pad + INDENT, context, target,
            f"length must be lesser than or equal to {validation.max_length}",
        ))
    return lines


def _value_lines(
    att: AttributeDefinition, non_zero: bool, target: str, context: str, depth: int, namer: Namer
) -> List[str]:
    pad = INDENT * depth
    inner = pad + INDENT
    data_type = att.type
    checks: List[str] = []
    if att.validation is not None and not (
        data_type.is_object() and not isinstance(data_type, UserTypeDefinition)
    ):
        checks.extend(_rule_lines(att.validation, target, context, inner))
    if non_zero:
        checks.append(f"{inner}if not {target}:")
        checks.append(_fail(inner + INDENT, context, target, "must not be zero or empty"))

    if isinstance(data_type, UserTypeDefinition):
        if has_validation(data_type.attribute, {data_type.type_name}):
            if data_type.is_object():
                call = f"{target}.validate()"
            else:
                call = f"validate_{snake_case(data_type.type_name)}({target})"
            checks.extend([
                f"{inner}try:",
                f"{inner}{INDENT}{call}",
                f"{inner}except RequestErrors as exc:",
                f"{inner}{INDENT}errors.extend(e.within({quote(context)}) for e in exc.errors)",
            ])
    elif data_type.is_object():
        checks.extend(_object_lines(att, target, context, depth + 1, namer, mapping=True))
    elif data_type.is_array():
        elem = namer.tempvar()
        elem_lines = _value_lines(
            data_type.to_array().elem_type, False, elem, f"{context}[*]", depth + 2, namer
        )
        if elem_lines:
            checks.append(f"{inner}for {elem} in {target}:")
            checks.extend(elem_lines)

    if not checks:
        return []
    return [f"{pad}if {target} is not None:"] + checks


def _object_lines(
    att: AttributeDefinition, target: str, context: str, depth: int, namer: Namer, mapping: bool
) -> List[str]:
    pad = INDENT * depth
    lines: List[str] = []
    for name, child in att.fields().items():
        if mapping:
            expr = f"{target}.get({quote(name)})"
        else:
            expr = f"{target}.{safe_identifier(name)}"
        field_context = f"{context}.{name}"
        if att.is_required(name):
            lines.append(f"{pad}if {expr} is None:")
            lines.append(_fail(pad + INDENT, field_context, "None", "is required"))
        lines.extend(_value_lines(child, att.is_non_zero(name), expr, field_context, depth, namer))
    return lines
