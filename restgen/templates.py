"""
Templates of the generated Python modules.

Templates are rendered with ``trim_blocks`` and ``lstrip_blocks`` so block
tags on their own line leave no trace in the output. Each template documents
its input, always available as ``data``.
"""

# HEADER_T renders the top of a generated module.
# template input: HeaderData
HEADER_T = '''# Code generated by {{ data.tool }}, DO NOT EDIT.
"""{{ data.title }}"""

from __future__ import annotations
{% for group in data.import_groups %}

{% for line in group %}
{{ line }}
{% endfor %}
{% endfor %}
'''

# CTX_T renders the context class of an action.
# template input: ContextTemplateData
CTX_T = '''class {{ data.name }}(ActionContext):
    """{{ data.name }} provides the {{ data.resource_name }} {{ data.action_name }} action context."""

    def __init__(self, context: Context) -> None:
        super().__init__(context)
{% if data.params %}
{% for name in data.params.fields() %}
        self.{{ ident(name) }}: {{ field_type(data.params, name) }} = {{ field_default(data.params, name) }}
{% endfor %}
{% endif %}
{% if data.payload %}
        self.payload: Optional[{{ type_ref(data.payload) }}] = None
{% endif %}
{% if data.versioned() %}
        self.version: str = ""
{% endif %}
'''

# CTX_RESP_T renders the response methods of a context class, it is appended
# to CTX_T so the methods land in the class body.
# template input: ContextTemplateData
CTX_RESP_T = '''{% for resp in data.responses.values() %}
{% set mt = data.api.media_type_with_identifier(resp.media_type) %}
{% if mt %}
{% for view in mt.views if view != "link" %}
{% set projected = project(mt, view) %}
{% set method = response_method_name(resp.name, view) %}

    def {{ method }}(self, resp: {{ type_ref(projected) }}) -> None:
        """{{ method }} sends a HTTP response with status code {{ resp.status }}."""
        self.header()["Content-Type"] = {{ q(resp.media_type) }}
        self.respond({{ resp.status }}, resp)
{% endfor %}
{% else %}
{% set method = snake(resp.name) %}

    def {{ method }}(self{% if resp.media_type %}, resp: bytes{% endif %}) -> None:
        """{{ method }} sends a HTTP response with status code {{ resp.status }}."""
{% if resp.media_type %}
        self.header()["Content-Type"] = {{ q(resp.media_type) }}
{% endif %}
        self.respond_bytes({{ resp.status }}, {% if resp.media_type %}resp{% else %}None{% endif %})
{% endif %}
{% endfor %}
'''

# CTX_NEW_T renders the context factory function.
# template input: ContextTemplateData
CTX_NEW_T = '''def new_{{ snake(data.name) }}(c: Context) -> {{ data.name }}:
    """Create the context used by the {{ data.resource_name }} controller {{ data.action_name }} action.

    The request headers and parameters are checked, coerced and validated. All
    the problems found are raised together as RequestErrors, the partially
    populated context is available in its context attribute.
    """
    errors: List[RequestError] = []
    ctx = {{ data.name }}(c)
{% if data.headers %}
{% for name in data.headers.fields() %}
{% if data.headers.is_required(name) %}
    if not c.request_header({{ q(name) }}):
        errors.append(MissingHeaderError({{ q(name) }}))
{% endif %}
{% endfor %}
{% endif %}
{% if data.params %}
{% for name, att in data.params.fields().items() %}
    raw_{{ ident(name) }} = c.get({{ q(name) }})
{% if data.must_validate(name) %}
    if not raw_{{ ident(name) }}:
        errors.append(MissingParamError({{ q(name) }}))
    else:
{% else %}
    if raw_{{ ident(name) }}:
{% endif %}
{{ coerce(new_coerce_data(name, att, "ctx." ~ ident(name), 2)) }}
{% set validation = validation_checker(att, data.params.is_non_zero(name), "ctx." ~ ident(name), name, 2) %}
{% if validation %}
{{ validation }}
{% endif %}
{% endfor %}
{% endif %}
    if errors:
        raise RequestErrors(errors, context=ctx)
    return ctx
'''

# TYPEDEF_T renders a named type: a dataclass for object types, an alias
# otherwise, with its validation code when the design has validation rules.
# template input: variables ut, summary, identifier and context set by the
# including template.
TYPEDEF_T = '''{% set validation = recursive_validate(ut.attribute, "self" if ut.is_object() else "value", context, 2 if ut.is_object() else 1) %}
{% if ut.is_object() %}
@dataclass
class {{ ut.type_name }}:
{% if identifier %}
    """{{ summary }}

    Identifier: {{ identifier }}
    """
{% else %}
    """{{ summary }}"""
{% endif %}
{% for line in field_defs(ut) %}
{% if loop.first %}

{% endif %}
    {{ line }}
{% endfor %}
{% if validation %}

    def validate(self) -> None:
        """Run the validation rules defined in the design."""
        errors: List[RequestError] = []
{{ validation }}
        if errors:
            raise RequestErrors(errors)
{% endif %}
{% else %}
# {{ summary }}
{{ ut.type_name }} = {{ type_ref(ut.attribute.type, True) }}
{% if validation %}


def validate_{{ snake(ut.type_name) }}(value: {{ ut.type_name }}) -> None:
    """Run the validation rules defined in the design."""
    errors: List[RequestError] = []
{{ validation }}
    if errors:
        raise RequestErrors(errors)
{% endif %}
{% endif %}
'''

# PAYLOAD_T renders the payload type of an action.
# template input: ContextTemplateData
PAYLOAD_T = '''{% set ut = data.payload %}
{% set summary = ut.type_name ~ " is the " ~ data.resource_name ~ " " ~ data.action_name ~ " action payload." %}
{% set identifier = "" %}
{% set context = "payload" %}
''' + TYPEDEF_T

# MEDIA_TYPE_T renders a projected media type.
# template input: MediaTypeTemplateData
MEDIA_TYPE_T = '''{% set ut = data.media_type %}
{% set summary = describe(ut, "media type") %}
{% set identifier = ut.identifier %}
{% set context = "response" %}
''' + TYPEDEF_T

# USER_TYPE_T renders a user type.
# template input: UserTypeTemplateData
USER_TYPE_T = '''{% set ut = data.user_type %}
{% set summary = describe(ut, "type") %}
{% set identifier = "" %}
{% set context = ut.type_name %}
''' + TYPEDEF_T

# CTRL_T renders the controller interface of a resource.
# template input: ControllerTemplateData
CTRL_T = '''class {{ data.resource }}Controller(Controller):
    """{{ data.resource }}Controller is the controller interface for the {{ data.resource }} actions."""
{% for action in data.actions %}

    @abstractmethod
    def {{ snake(action.name) }}(self, ctx: {{ action.context }}) -> Any:
        """Handle the {{ action.name }} action."""
{% endfor %}
'''

# MOUNT_T renders the function mounting a resource controller on a service.
# template input: ControllerTemplateData
MOUNT_T = '''{% set versioned = not data.version.is_default() %}
{% set scope = "service.version(" ~ q(data.version.version) ~ ")" if versioned else "service" %}
def mount_{{ snake(data.resource) }}_controller(service: Service, ctrl: {{ data.resource }}Controller) -> None:
    """Mount a {{ data.resource }} resource controller on the given service."""
    # Setup encoders and decoders. This is idempotent and is done by each mount function.
{% for enc in data.encoder_map.values() %}
    {{ scope }}.set_encoder({{ enc.package_name }}.{{ enc.factory }}(), {{ enc.default }}, {{ quote_all(enc.mime_types) }})
{% endfor %}
{% for dec in data.decoder_map.values() %}
    {{ scope }}.set_decoder({{ dec.package_name }}.{{ dec.factory }}(), {{ dec.default }}, {{ quote_all(dec.mime_types) }})
{% endfor %}

    # Setup endpoint handler
    mux = {{ scope }}.serve_mux()
{% for action in data.actions %}

    def handle_{{ snake(action.name) }}(c: Context) -> Any:
        try:
            ctx = new_{{ snake(action.context) }}(c)
        except RequestErrors as err:
            raise BadRequestError(err) from err
{% if versioned %}
        ctx.version = service.version({{ q(data.version.version) }}).version_name()
{% endif %}
{% if action.payload %}
        ctx.payload = c.raw_payload()
{% endif %}
        return ctrl.{{ snake(action.name) }}(ctx)

{% for route in action.routes %}
{% set path = route.full_path(data.version) %}
    mux.handle({{ q(route.verb) }}, {{ q(path) }}, ctrl.handle_func({{ q(action.name) }}, handle_{{ snake(action.name) }}, {{ action.unmarshal if action.payload else "None" }}))
    service.info("mount", ctrl={{ q(data.resource) }},{% if versioned %} version={{ q(data.version.version) }},{% endif %} action={{ q(action.name) }}, route={{ q(route.verb ~ " " ~ path) }})
{% endfor %}
{% endfor %}
'''

# UNMARSHAL_T renders the payload unmarshal functions of a resource actions.
# template input: ControllerTemplateData
UNMARSHAL_T = '''{% for action in data.actions if action.payload %}
{% if not loop.first %}


{% endif %}
def {{ action.unmarshal }}(ctx: Context) -> None:
    """Decode the request body into a {{ type_ref(action.payload) }} and attach it to the context."""
    payload = ctx.service.decode_request(ctx, {{ type_ref(action.payload) }})
{% if recursive_validate(action.payload.attribute, "payload", "payload", 1) %}
{% if action.payload.is_object() %}
    payload.validate()
{% else %}
    validate_{{ snake(action.payload.type_name) }}(payload)
{% endif %}
{% endif %}
    ctx.set_payload(payload)
{% endfor %}
'''

# RESOURCE_T renders the href builder of a resource.
# template input: ResourceData
RESOURCE_T = '''{% if data.canonical_template %}
def {{ snake(data.name) }}_href({% for p in data.canonical_params %}{{ p }}: Any{% if not loop.last %}, {% endif %}{% endfor %}) -> str:
    """Return the href of a {{ data.name }} resource."""
    return {{ q(data.canonical_template) }}.format({{ join(data.canonical_params, ", ") }})
{% endif %}
'''
