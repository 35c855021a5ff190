"""Tests for the template data builders."""

import pytest

from restgen import (
    APIDefinition,
    APIVersionDefinition,
    ActionDefinition,
    Array,
    AttributeDefinition,
    EncodingDefinition,
    EncodingError,
    Integer,
    Object,
    ReservedNameError,
    ResourceDefinition,
    RouteDefinition,
    String,
    UnknownMediaTypeError,
)
from restgen.template_data import (
    array_attribute,
    build_encoder_map,
    new_coerce_data,
    new_context_data,
    new_controller_data,
    new_resource_data,
)


def context_for(api, action_name, version=None):
    resource = api.resources["bottle"]
    return new_context_data(
        api, version or api.default_version(), resource, resource.actions[action_name]
    )


class TestContextData:
    """Test the context template data."""

    def test_names(self, cellar_api):
        data = context_for(cellar_api, "show")
        assert data.name == "ShowBottleContext"
        assert data.resource_name == "bottle"
        assert data.action_name == "show"
        assert data.default_pkg == "."
        assert not data.versioned()

    def test_versioned(self, cellar_api):
        data = context_for(cellar_api, "show", APIVersionDefinition("v1", "/v1"))
        assert data.versioned()
        assert data.default_pkg == ".."

    def test_builder_copies_collections(self, cellar_api):
        action = cellar_api.resources["bottle"].actions["show"]
        data = context_for(cellar_api, "show")
        data.routes.clear()
        data.responses.clear()
        assert len(action.routes) == 1
        assert len(action.responses) == 2

    def test_response_methods(self, cellar_api):
        assert context_for(cellar_api, "show").response_methods() == ["ok", "ok_tiny", "not_found"]

    @pytest.mark.parametrize("name", ["request", "service", "respond", "header", "get", "ok_tiny", "not_found"])
    def test_param_clashing_with_context_member(self, cellar_api, name):
        action = cellar_api.resources["bottle"].actions["show"]
        action.params.type[name] = AttributeDefinition(String)
        with pytest.raises(ReservedNameError) as exc_info:
            context_for(cellar_api, "show")
        assert exc_info.value.name == name
        assert exc_info.value.context == "ShowBottleContext"

    def test_payload_is_reserved_with_a_payload(self, cellar_api):
        action = cellar_api.resources["bottle"].actions["create"]
        action.params.type["payload"] = AttributeDefinition(String)
        with pytest.raises(ReservedNameError):
            context_for(cellar_api, "create")

    def test_param_named_context_is_allowed(self, shelf_api):
        resource = shelf_api.resources["shelf"]
        data = new_context_data(shelf_api, shelf_api.default_version(), resource, resource.actions["show"])
        assert "context" in data.params.fields()


class TestIsPathParam:
    """Test path parameter classification."""

    def test_param_of_single_route(self, cellar_api):
        data = context_for(cellar_api, "show")
        assert data.is_path_param("bottleID")
        assert data.is_path_param("accountID")

    def test_query_param(self, cellar_api):
        data = context_for(cellar_api, "list")
        assert not data.is_path_param("years")
        assert data.is_path_param("accountID")

    def test_param_missing_from_one_route(self, cellar_api):
        data = context_for(cellar_api, "rate")
        assert data.is_path_param("accountID")
        assert not data.is_path_param("bottleID")

    def test_no_params(self, cellar_api):
        resource = cellar_api.resources["health"]
        action = resource.actions["check"]
        data = new_context_data(cellar_api, cellar_api.versions["v2"], resource, action)
        assert not data.is_path_param("anything")

    def test_no_routes(self, cellar_api):
        data = context_for(cellar_api, "show")
        data.routes = []
        assert not data.is_path_param("bottleID")

    def test_version_base_path_params(self):
        action = ActionDefinition(
            "show",
            routes=[RouteDefinition("GET", "/{id}")],
            params=AttributeDefinition(
                Object(tenant=AttributeDefinition(String), id=AttributeDefinition(Integer)),
                required=["tenant", "id"],
            ),
        )
        resource = ResourceDefinition("thing", base_path="/things", actions={"show": action})
        api = APIDefinition("things", resources={"thing": resource})
        versioned = new_context_data(api, APIVersionDefinition("v1", "/{tenant}"), resource, action)
        default = new_context_data(api, api.default_version(), resource, action)
        assert versioned.is_path_param("tenant")
        assert not default.is_path_param("tenant")
        assert versioned.is_path_param("id") and default.is_path_param("id")


class TestMustValidate:
    """Test which parameters get a presence check."""

    def test_required_path_param(self, cellar_api):
        assert not context_for(cellar_api, "show").must_validate("bottleID")

    def test_required_param_not_in_every_route(self, cellar_api):
        data = context_for(cellar_api, "rate")
        assert data.must_validate("bottleID")
        assert not data.must_validate("accountID")

    def test_required_query_param(self, cellar_api):
        assert context_for(cellar_api, "rate").must_validate("value")

    def test_optional_param(self, cellar_api):
        assert not context_for(cellar_api, "list").must_validate("years")

    def test_no_params(self, cellar_api):
        resource = cellar_api.resources["health"]
        data = new_context_data(
            cellar_api, cellar_api.versions["v2"], resource, resource.actions["check"]
        )
        assert not data.must_validate("anything")


class TestCoerceData:
    """Test the coercion generator input."""

    def test_default_raw_variable(self):
        data = new_coerce_data("bottleID", AttributeDefinition(Integer), "ctx.bottleID", 2)
        assert data.raw == "raw_bottleID"
        assert data.target == "ctx.bottleID"
        assert data.depth == 2

    def test_raw_variable_is_an_identifier(self):
        data = new_coerce_data("X-Page", AttributeDefinition(Integer), "ctx.X_Page", 1)
        assert data.raw == "raw_X_Page"

    def test_explicit_raw(self):
        data = new_coerce_data("ids", AttributeDefinition(Integer), "tmp2[tmp3]", 3, raw="tmp4")
        assert data.raw == "tmp4"

    def test_array_attribute(self):
        elem = AttributeDefinition(Integer)
        assert array_attribute(AttributeDefinition(Array(elem))) is elem

    def test_array_attribute_of_non_array(self):
        with pytest.raises(TypeError):
            array_attribute(AttributeDefinition(String))


class TestControllerData:
    """Test the controller template data."""

    def test_actions(self, cellar_api):
        resource = cellar_api.resources["bottle"]
        data = new_controller_data(cellar_api, cellar_api.default_version(), resource, {}, {})
        assert data.resource == "Bottle"
        assert [a.name for a in data.actions] == ["list", "show", "create", "rate"]
        create = data.actions[2]
        assert create.context == "CreateBottleContext"
        assert create.unmarshal == "unmarshal_create_bottle_payload"
        assert create.payload.type_name == "CreateBottlePayload"
        assert data.actions[0].payload is None


class TestResourceData:
    """Test the href builder data."""

    def test_canonical_template(self, cellar_api):
        resource = cellar_api.resources["bottle"]
        data = new_resource_data(cellar_api, cellar_api.default_version(), resource)
        assert data.canonical_template == "/accounts/{}/bottles/{}"
        assert data.canonical_params == ["accountID", "bottleID"]
        assert data.identifier == "application/vnd.bottle+json"
        assert data.type.type_name == "Bottle"

    def test_no_canonical_action(self, cellar_api):
        resource = cellar_api.resources["health"]
        data = new_resource_data(cellar_api, cellar_api.versions["v2"], resource)
        assert data.canonical_template == ""
        assert data.canonical_params == []
        assert data.type is None

    def test_unknown_media_type(self, cellar_api):
        resource = cellar_api.resources["bottle"]
        resource.media_type = "application/vnd.unknown+json"
        with pytest.raises(UnknownMediaTypeError) as exc_info:
            new_resource_data(cellar_api, cellar_api.default_version(), resource)
        assert exc_info.value.identifier == "application/vnd.unknown+json"
        assert "resource 'bottle'" in str(exc_info.value)


class TestEncoderMap:
    """Test the grouping of encoders and decoders by module."""

    def test_defaults_to_json(self):
        result = build_encoder_map([])
        assert list(result) == ["restgen.runtime.codecs"]
        data = result["restgen.runtime.codecs"]
        assert data.package_name == "codecs"
        assert data.factory == "json_encoder_factory"
        assert data.mime_types == ["application/json"]
        assert data.default

    def test_decoder_factory_name(self):
        data = build_encoder_map([], encoder=False)["restgen.runtime.codecs"]
        assert data.factory == "json_decoder_factory"

    def test_custom_package(self):
        result = build_encoder_map([
            EncodingDefinition(["application/json"]),
            EncodingDefinition(
                ["application/xml", "text/xml"], package_path="acme.codecs.xml", function="new_encoder"
            ),
        ])
        assert list(result) == ["restgen.runtime.codecs", "acme.codecs.xml"]
        xml = result["acme.codecs.xml"]
        assert xml.package_name == "xml"
        assert xml.factory == "new_encoder"
        assert xml.mime_types == ["application/xml", "text/xml"]
        assert not xml.default

    def test_mime_types_grouped_by_package(self):
        result = build_encoder_map([
            EncodingDefinition(["application/json"]),
            EncodingDefinition(["application/json"]),
        ])
        assert result["restgen.runtime.codecs"].mime_types == ["application/json"]

    def test_unknown_mime_type(self):
        with pytest.raises(EncodingError, match="no decoder package known"):
            build_encoder_map([EncodingDefinition(["application/msgpack"])], encoder=False)
