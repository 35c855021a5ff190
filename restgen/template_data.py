"""
Data given to the templates.

Each dataclass below is the documented input of one template. The builder
functions project fragments of the design into these structures; they are
pure and build new values on every call.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from .design import (
    LINK_VIEW,
    PATH_PARAM_RE,
    APIDefinition,
    APIVersionDefinition,
    ActionDefinition,
    AttributeDefinition,
    EncodingDefinition,
    MediaTypeDefinition,
    ResourceDefinition,
    ResponseDefinition,
    RouteDefinition,
    UserTypeDefinition,
)
from .exceptions import EncodingError, ReservedNameError, UnknownMediaTypeError
from .naming import class_case, safe_identifier, snake_case
from .runtime.context import ActionContext

# Encoder and decoder factories of the MIME types supported out of the box.
KNOWN_ENCODINGS = {
    "application/json": ("restgen.runtime.codecs", "json"),
}

# Attributes and methods every generated context class inherits.
CONTEXT_MEMBERS = frozenset(
    [name for name in vars(ActionContext) if not name.startswith("__")] + ["_context"]
)


def response_method_name(response: str, view: str) -> str:
    """Name of the context method sending the response rendered with the view."""
    if view == "default":
        return snake_case(response)
    return f"{snake_case(response)}_{snake_case(view)}"


@dataclass
class HeaderData:
    """Data needed to render the top of a generated module."""

    title: str  # Module docstring
    tool: str  # Name of the generator, e.g. "restgen"
    import_groups: List[List[str]] = field(default_factory=list)


@dataclass
class ContextTemplateData:
    """Everything needed to render the context code of an action."""

    name: str  # e.g. "ListBottleContext"
    resource_name: str  # e.g. "bottles"
    action_name: str  # e.g. "list"
    params: Optional[AttributeDefinition]
    payload: Optional[UserTypeDefinition]
    headers: Optional[AttributeDefinition]
    routes: List[RouteDefinition]
    responses: Dict[str, ResponseDefinition]
    api: APIDefinition
    version: APIVersionDefinition
    default_pkg: str = "."

    def versioned(self) -> bool:
        """Whether the context was built for a non-default API version."""
        return not self.version.is_default()

    def is_path_param(self, param: str) -> bool:
        """Whether the parameter is a path parameter of all the action routes.

        Such a parameter is always present once the request was routed so it does
        not need to be validated.
        """
        params = self.params
        pp = False
        if params is not None and params.type.is_object():
            for route in self.routes:
                pp = False
                for p in route.params(self.version):
                    if p == param:
                        pp = True
                        break
                if not pp:
                    break
        return pp

    def must_validate(self, name: str) -> bool:
        """Whether code that checks for the presence of the parameter must be generated."""
        return self.params is not None and self.params.is_required(name) and not self.is_path_param(name)

    def response_methods(self) -> List[str]:
        """Names of the response methods of the context class."""
        names: List[str] = []
        for resp in self.responses.values():
            mt = self.api.media_type_with_identifier(resp.media_type)
            if mt is None:
                names.append(snake_case(resp.name))
            else:
                names.extend(response_method_name(resp.name, v) for v in mt.views if v != LINK_VIEW)
        return names

    def members(self) -> Set[str]:
        """Names of the context class attributes that are not parameters."""
        names = set(CONTEXT_MEMBERS) | set(self.response_methods())
        if self.payload is not None:
            names.add("payload")
        if self.versioned():
            names.add("version")
        return names


@dataclass
class EncoderTemplateData:
    """Data needed to render the registration of one encoder or decoder package."""

    package_path: str  # Module implementing the encoder / decoder.
    package_name: str  # Name the module is imported as.
    factory: str  # Name of the module function creating the encoder / decoder.
    mime_types: List[str] = field(default_factory=list)
    default: bool = False


@dataclass
class ActionTemplateData:
    """One action of a controller."""

    name: str
    routes: List[RouteDefinition]
    context: str  # Context class name
    unmarshal: str  # Payload unmarshal function name
    payload: Optional[UserTypeDefinition] = None


@dataclass
class ControllerTemplateData:
    """Data needed to render the controller interface and mount function of a resource."""

    resource: str  # e.g. "Bottle"
    actions: List[ActionTemplateData]
    version: APIVersionDefinition
    encoder_map: Dict[str, EncoderTemplateData] = field(default_factory=dict)
    decoder_map: Dict[str, EncoderTemplateData] = field(default_factory=dict)


@dataclass
class ResourceData:
    """Data needed to render the href builder of a resource."""

    name: str
    identifier: str
    description: str
    type: Optional[MediaTypeDefinition]
    canonical_template: str  # The canonical path as a str.format template
    canonical_params: List[str]  # Parameters of the canonical path, in order


@dataclass
class MediaTypeTemplateData:
    media_type: MediaTypeDefinition
    versioned: bool = False
    default_pkg: str = "."


@dataclass
class UserTypeTemplateData:
    user_type: UserTypeDefinition
    versioned: bool = False
    default_pkg: str = "."


@dataclass
class CoerceData:
    """Input of the coercion generator for one raw value."""

    name: str  # Parameter name used in error messages
    attribute: AttributeDefinition
    target: str  # Expression the coerced value is assigned to
    depth: int  # Indentation level
    raw: str  # Expression holding the raw text


def new_coerce_data(
    name: str,
    att: AttributeDefinition,
    target: str,
    depth: int,
    raw: Optional[str] = None,
) -> CoerceData:
    """Create the coercion generator input, the raw text defaults to the "raw_<name>" variable."""
    return CoerceData(
        name=name,
        attribute=att,
        target=target,
        depth=depth,
        raw=raw or f"raw_{safe_identifier(name)}",
    )


def array_attribute(att: AttributeDefinition) -> AttributeDefinition:
    """Return the array element attribute definition."""
    array = att.type.to_array()
    if array is None:
        raise TypeError(f"{att.type!r} is not an array")
    return array.elem_type


def context_name(action: ActionDefinition, resource: ResourceDefinition) -> str:
    return f"{class_case(action.name)}{class_case(resource.name)}Context"


def unmarshal_name(action: ActionDefinition, resource: ResourceDefinition) -> str:
    return f"unmarshal_{snake_case(action.name)}_{snake_case(resource.name)}_payload"


def new_context_data(
    api: APIDefinition,
    version: APIVersionDefinition,
    resource: ResourceDefinition,
    action: ActionDefinition,
) -> ContextTemplateData:
    """Build the context data of an action.

    Raises:
        ReservedNameError: if a parameter clashes with a member of the context class.
    """
    data = ContextTemplateData(
        name=context_name(action, resource),
        resource_name=resource.name,
        action_name=action.name,
        params=action.params,
        payload=action.payload,
        headers=action.headers,
        routes=list(action.routes),
        responses=dict(action.responses),
        api=api,
        version=version,
        default_pkg="." if version.is_default() else "..",
    )
    if data.params is not None:
        members = data.members()
        for name in data.params.fields():
            if safe_identifier(name) in members:
                raise ReservedNameError(name, data.name)
    return data


def new_controller_data(
    api: APIDefinition,
    version: APIVersionDefinition,
    resource: ResourceDefinition,
    encoders: Dict[str, EncoderTemplateData],
    decoders: Dict[str, EncoderTemplateData],
) -> ControllerTemplateData:
    actions = [
        ActionTemplateData(
            name=action.name,
            routes=list(action.routes),
            context=context_name(action, resource),
            unmarshal=unmarshal_name(action, resource),
            payload=action.payload,
        )
        for action in resource.actions.values()
    ]
    return ControllerTemplateData(
        resource=class_case(resource.name),
        actions=actions,
        version=version,
        encoder_map=encoders,
        decoder_map=decoders,
    )


def new_resource_data(
    api: APIDefinition,
    version: APIVersionDefinition,
    resource: ResourceDefinition,
) -> ResourceData:
    """Build the href builder data of a resource.

    Raises:
        UnknownMediaTypeError: if the resource media type is not defined.
    """
    media_type = None
    if resource.media_type:
        media_type = api.media_type_with_identifier(resource.media_type)
        if media_type is None:
            raise UnknownMediaTypeError(resource.media_type, f"resource {resource.name!r}")
    canonical_template = ""
    canonical_params: List[str] = []
    canonical = resource.canonical_action()
    if canonical is not None and canonical.routes:
        path = canonical.routes[0].full_path(version)
        canonical_params = [safe_identifier(p) for p in PATH_PARAM_RE.findall(path)]
        canonical_template = PATH_PARAM_RE.sub("{}", path)
    return ResourceData(
        name=resource.name,
        identifier=media_type.identifier if media_type else "",
        description=resource.description,
        type=media_type,
        canonical_template=canonical_template,
        canonical_params=canonical_params,
    )


def build_encoder_map(
    encodings: List[EncodingDefinition], encoder: bool = True
) -> Dict[str, EncoderTemplateData]:
    """Group the encodings by implementing module.

    The first encoding is registered as the default one.

    Raises:
        EncodingError: if a MIME type has no known implementation.
    """
    if not encodings:
        encodings = [EncodingDefinition(["application/json"])]
    suffix = "encoder_factory" if encoder else "decoder_factory"
    result: Dict[str, EncoderTemplateData] = {}
    for index, encoding in enumerate(encodings):
        for mime_type in encoding.mime_types:
            package_path = encoding.package_path
            factory = encoding.function or suffix
            if not package_path:
                known = KNOWN_ENCODINGS.get(mime_type)
                if known is None:
                    kind = "encoder" if encoder else "decoder"
                    raise EncodingError(f"no {kind} package known for MIME type {mime_type!r}")
                package_path = known[0]
                factory = encoding.function or f"{known[1]}_{suffix}"
            data = result.get(package_path)
            if data is None:
                data = EncoderTemplateData(
                    package_path=package_path,
                    package_name=safe_identifier(package_path.rsplit(".", 1)[-1]),
                    factory=factory,
                    default=index == 0,
                )
                result[package_path] = data
            if mime_type not in data.mime_types:
                data.mime_types.append(mime_type)
    return result
