"""
Design model consumed by the code generator.

These types describe a web API (resources, actions, routes, media types and
attributes). They are built by a front end and never mutated by the
generator: every projection returns new definitions.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .exceptions import ProjectionError

# Matches the {name} path variables of a route path.
PATH_PARAM_RE = re.compile(r"\{(\w+)\}")


class Kind(Enum):
    """Enumeration of the data type kinds."""

    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    DATETIME = "datetime"
    ANY = "any"
    ARRAY = "array"
    OBJECT = "object"


class DataType:
    """Base class for all data types."""

    kind: Kind

    def is_primitive(self) -> bool:
        return self.kind not in (Kind.ARRAY, Kind.OBJECT)

    def is_object(self) -> bool:
        return self.kind is Kind.OBJECT

    def is_array(self) -> bool:
        return self.kind is Kind.ARRAY

    def to_object(self) -> Optional["Object"]:
        """Return the object fields if the type is an object, None otherwise."""
        return None

    def to_array(self) -> Optional["Array"]:
        return None


class Primitive(DataType):
    """A scalar data type."""

    def __init__(self, kind: Kind):
        self.kind = kind

    def __repr__(self) -> str:
        return f"Primitive({self.kind.value})"


Boolean = Primitive(Kind.BOOLEAN)
Integer = Primitive(Kind.INTEGER)
Number = Primitive(Kind.NUMBER)
String = Primitive(Kind.STRING)
DateTime = Primitive(Kind.DATETIME)
AnyType = Primitive(Kind.ANY)


class Array(DataType):
    """A list of elements that all share the same attribute definition."""

    kind = Kind.ARRAY

    def __init__(self, elem_type: "AttributeDefinition"):
        self.elem_type = elem_type

    def to_array(self) -> "Array":
        return self

    def __repr__(self) -> str:
        return f"Array({self.elem_type.type!r})"


class Object(dict, DataType):
    """Ordered mapping of field names to attribute definitions."""

    kind = Kind.OBJECT

    def to_object(self) -> "Object":
        return self


@dataclass
class ValidationDefinition:
    """Validation rules attached to an attribute."""

    values: Optional[List[Any]] = None
    pattern: Optional[str] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None

    def has_rules(self) -> bool:
        return any(
            rule is not None
            for rule in (
                self.values,
                self.pattern,
                self.minimum,
                self.maximum,
                self.min_length,
                self.max_length,
            )
        )


@dataclass
class AttributeDefinition:
    """A typed field, optionally holding child fields when the type is an object."""

    type: DataType
    description: str = ""
    required: List[str] = field(default_factory=list)
    non_zero: List[str] = field(default_factory=list)
    default: Any = None
    validation: Optional[ValidationDefinition] = None
    # Sub-view to use when the attribute is a media type referenced by a view.
    view: str = ""

    def fields(self) -> "Object":
        """Return the child fields, empty if the attribute is not an object."""
        obj = self.type.to_object()
        return obj if obj is not None else Object()

    def is_required(self, name: str) -> bool:
        return name in self.required

    def is_non_zero(self, name: str) -> bool:
        return name in self.non_zero

    def has_default_value(self, name: str) -> bool:
        att = self.fields().get(name)
        return att is not None and att.default is not None

    def is_primitive_pointer(self, name: str) -> bool:
        """Whether the field value is optional at the language level.

        This is the case for primitive fields (other than Any) that are neither
        required nor given a default value.
        """
        att = self.fields().get(name)
        if att is None or not att.type.is_primitive() or att.type.kind is Kind.ANY:
            return False
        return not self.is_required(name) and not self.has_default_value(name)


class UserTypeDefinition(DataType):
    """A named data type declared in the design."""

    def __init__(self, type_name: str, attribute: AttributeDefinition):
        self.type_name = type_name
        self.attribute = attribute

    @property
    def kind(self) -> Kind:  # type: ignore[override]
        return self.attribute.type.kind

    @property
    def description(self) -> str:
        return self.attribute.description

    def to_object(self) -> Optional[Object]:
        return self.attribute.type.to_object()

    def to_array(self) -> Optional[Array]:
        return self.attribute.type.to_array()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.type_name!r})"


@dataclass
class ViewDefinition:
    """A named projection of a media type: the list of attribute names it renders."""

    name: str
    attributes: List[str] = field(default_factory=list)
    # Sub-views for attributes that are themselves media types.
    sub_views: Dict[str, str] = field(default_factory=dict)


@dataclass
class LinkDefinition:
    """A link to a related resource rendered with the given view of its media type."""

    name: str
    view: str = ""


# View rendering a media type as a link from another media type.
LINK_VIEW = "link"


class MediaTypeDefinition(UserTypeDefinition):
    """A user type used to render response bodies, with named views and links."""

    def __init__(
        self,
        type_name: str,
        identifier: str,
        attribute: AttributeDefinition,
        views: Optional[Dict[str, ViewDefinition]] = None,
        links: Optional[Dict[str, LinkDefinition]] = None,
    ):
        super().__init__(type_name, attribute)
        self.identifier = identifier
        self.views: Dict[str, ViewDefinition] = views or {}
        self.links: Dict[str, LinkDefinition] = links or {}
        # View this media type was projected with, "" for a declared media type.
        self.view = ""

    def project(self, view: str) -> Tuple["MediaTypeDefinition", Optional[UserTypeDefinition]]:
        """Compute the media type rendered by the given view.

        Returns the projected media type and, if the view renders the links
        attribute, the user type describing those links.

        Raises:
            ProjectionError: if the view is unknown or cannot be computed.
        """
        if view not in self.views:
            raise ProjectionError(f"unknown view {view!r} for media type {self.identifier!r}")
        array = self.to_array()
        if array is not None:
            return self._project_collection(view, array)
        return self._project_single(view)

    def _project_collection(
        self, view: str, array: Array
    ) -> Tuple["MediaTypeDefinition", Optional[UserTypeDefinition]]:
        elem = array.elem_type.type
        if not isinstance(elem, MediaTypeDefinition):
            raise ProjectionError(f"collection {self.identifier!r} elements are not a media type")
        projected_elem, links = elem.project(view)
        projected = MediaTypeDefinition(
            f"{projected_elem.type_name}Collection",
            _canonical(self.identifier, view),
            AttributeDefinition(
                type=Array(AttributeDefinition(type=projected_elem)),
                description=self.attribute.description,
                validation=self.attribute.validation,
            ),
        )
        projected.views = {"default": ViewDefinition("default")}
        projected.view = view
        return projected, links

    def _project_single(
        self, view: str
    ) -> Tuple["MediaTypeDefinition", Optional[UserTypeDefinition]]:
        view_def = self.views[view]
        type_name = self.type_name
        if view != "default":
            type_name += view[:1].upper() + view[1:]
        fields = self.attribute.fields()
        projected_fields = Object()
        links: Optional[UserTypeDefinition] = None
        for name in view_def.attributes:
            if name == "links":
                links = self._project_links(fields)
                projected_fields[name] = AttributeDefinition(
                    type=links, description="Links to related resources"
                )
                continue
            att = fields.get(name)
            if att is None:
                raise ProjectionError(
                    f"view {view!r} of media type {self.identifier!r} uses unknown attribute {name!r}"
                )
            if isinstance(att.type, MediaTypeDefinition):
                sub_view = view_def.sub_views.get(name) or att.view or "default"
                try:
                    sub_projected, _ = att.type.project(sub_view)
                except ProjectionError as e:
                    raise ProjectionError(
                        f"view {sub_view!r} on field {name!r} cannot be computed: {e}"
                    ) from e
                att = _copy_attribute(att, type=sub_projected)
            projected_fields[name] = att
        projected = MediaTypeDefinition(
            type_name,
            _canonical(self.identifier, view),
            AttributeDefinition(
                type=projected_fields,
                description=self.attribute.description,
                required=[n for n in self.attribute.required if n in projected_fields],
                non_zero=[n for n in self.attribute.non_zero if n in projected_fields],
                validation=self.attribute.validation,
            ),
        )
        projected.views = {"default": ViewDefinition("default", list(projected_fields))}
        projected.view = view
        return projected, links

    def _project_links(self, fields: Object) -> UserTypeDefinition:
        link_fields = Object()
        for name, link in self.links.items():
            att = fields.get(name)
            if att is None:
                raise ProjectionError(f"unknown attribute {name!r} used in links")
            if not isinstance(att.type, MediaTypeDefinition):
                raise ProjectionError(f"link {name!r} does not refer to a media type")
            linked, _ = att.type.project(link.view or LINK_VIEW)
            link_fields[name] = _copy_attribute(att, type=linked)
        links_name = f"{self.type_name}Links"
        return UserTypeDefinition(
            links_name,
            AttributeDefinition(
                type=link_fields,
                description=f"{links_name} contains links to related resources of {self.type_name}.",
            ),
        )


def _canonical(identifier: str, view: str) -> str:
    if view == "default":
        return identifier
    return f"{identifier}; view={view}"


def _copy_attribute(att: AttributeDefinition, **changes: Any) -> AttributeDefinition:
    values = dict(att.__dict__)
    values.update(changes)
    return AttributeDefinition(**values)


def join_paths(*paths: str) -> str:
    """Join URL path fragments with single slashes."""
    parts = [p.strip("/") for p in paths if p and p.strip("/")]
    return "/" + "/".join(parts)


@dataclass
class APIVersionDefinition:
    """An API version. The default version has an empty version string."""

    version: str = ""
    base_path: str = ""

    def is_default(self) -> bool:
        return self.version == ""


@dataclass
class RouteDefinition:
    """An HTTP verb and a path template with {name} variables."""

    verb: str
    path: str
    parent: Optional["ActionDefinition"] = field(default=None, repr=False, compare=False)

    def full_path(self, version: Optional[APIVersionDefinition] = None) -> str:
        base = ""
        if self.parent is not None and self.parent.parent is not None:
            base = self.parent.parent.full_path(version)
        return join_paths(base, self.path)

    def params(self, version: Optional[APIVersionDefinition] = None) -> List[str]:
        """Return the path variable names bound by the route, in order."""
        return PATH_PARAM_RE.findall(self.full_path(version))


@dataclass
class ResponseDefinition:
    """A response an action may send."""

    name: str
    status: int
    media_type: str = ""
    description: str = ""


@dataclass
class ActionDefinition:
    """One operation of a resource."""

    name: str
    routes: List[RouteDefinition] = field(default_factory=list)
    params: Optional[AttributeDefinition] = None
    payload: Optional[UserTypeDefinition] = None
    headers: Optional[AttributeDefinition] = None
    responses: Dict[str, ResponseDefinition] = field(default_factory=dict)
    description: str = ""
    parent: Optional["ResourceDefinition"] = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        for route in self.routes:
            route.parent = self


@dataclass
class ResourceDefinition:
    """A resource and its actions."""

    name: str
    base_path: str = ""
    media_type: str = ""
    description: str = ""
    canonical_action_name: str = "show"
    actions: Dict[str, ActionDefinition] = field(default_factory=dict)
    # Names of the API versions the resource belongs to, empty for the default version.
    versions: List[str] = field(default_factory=list)

    def __post_init__(self):
        for action in self.actions.values():
            action.parent = self

    def full_path(self, version: Optional[APIVersionDefinition] = None) -> str:
        base = version.base_path if version is not None else ""
        return join_paths(base, self.base_path)

    def canonical_action(self) -> Optional[ActionDefinition]:
        return self.actions.get(self.canonical_action_name)

    def supports_version(self, version: APIVersionDefinition) -> bool:
        if version.is_default():
            return not self.versions
        return version.version in self.versions


@dataclass
class EncodingDefinition:
    """MIME types handled by an encoder or decoder package."""

    mime_types: List[str]
    package_path: str = ""
    function: str = ""


@dataclass
class APIDefinition:
    """Root of the design."""

    name: str
    base_path: str = ""
    resources: Dict[str, ResourceDefinition] = field(default_factory=dict)
    media_types: Dict[str, MediaTypeDefinition] = field(default_factory=dict)
    user_types: Dict[str, UserTypeDefinition] = field(default_factory=dict)
    versions: Dict[str, APIVersionDefinition] = field(default_factory=dict)
    produces: List[EncodingDefinition] = field(default_factory=list)
    consumes: List[EncodingDefinition] = field(default_factory=list)

    def media_type_with_identifier(self, identifier: str) -> Optional[MediaTypeDefinition]:
        """Look up a media type by identifier.

        An exact match wins, otherwise the identifier parameters are ignored.
        """
        if not identifier:
            return None
        for mt in self.media_types.values():
            if mt.identifier == identifier:
                return mt
        base = identifier.split(";")[0].strip()
        for mt in self.media_types.values():
            if mt.identifier == base:
                return mt
        return None

    def default_version(self) -> APIVersionDefinition:
        return APIVersionDefinition("", self.base_path)

    def iterate_versions(self) -> List[APIVersionDefinition]:
        """Return the default version followed by the declared versions."""
        return [self.default_version()] + list(self.versions.values())
