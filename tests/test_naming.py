"""Tests for identifier helpers."""

from restgen.naming import Namer, class_case, quote, safe_identifier, snake_case
from restgen.template_data import response_method_name


class TestIdentifiers:
    """Test conversion of design names to Python identifiers."""

    def test_safe_identifier_keeps_case(self):
        assert safe_identifier("bottleID") == "bottleID"

    def test_safe_identifier_replaces_punctuation(self):
        assert safe_identifier("X-Request-Id") == "X_Request_Id"

    def test_safe_identifier_leading_digit(self):
        assert safe_identifier("2fa") == "_2fa"

    def test_safe_identifier_keyword(self):
        assert safe_identifier("from") == "from_"

    def test_snake_case(self):
        assert snake_case("ListBottleContext") == "list_bottle_context"
        assert snake_case("NotFound") == "not_found"
        assert snake_case("OK") == "ok"
        assert snake_case("HTTPServer") == "http_server"

    def test_class_case(self):
        assert class_case("bottle") == "Bottle"
        assert class_case("wine_bottle") == "WineBottle"
        assert class_case("wine-bottle") == "WineBottle"

    def test_quote(self):
        assert quote('say "hi"') == '"say \\"hi\\""'

    def test_response_method_name(self):
        assert response_method_name("OK", "default") == "ok"
        assert response_method_name("OK", "tiny") == "ok_tiny"


class TestNamer:
    """Test temporary variable names."""

    def test_names_are_unique(self):
        namer = Namer()
        assert [namer.tempvar() for _ in range(3)] == ["tmp1", "tmp2", "tmp3"]

    def test_namers_are_independent(self):
        first, second = Namer(), Namer()
        first.tempvar()
        assert second.tempvar() == "tmp1"
