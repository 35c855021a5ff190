"""
Shared design fixtures.

The cellar API below is used across the test modules: accounts own bottles,
bottles are rendered with several views and link to their account.
"""

import importlib
import uuid

import pytest

from restgen import (
    APIDefinition,
    APIVersionDefinition,
    ActionDefinition,
    Array,
    AttributeDefinition,
    Generator,
    GeneratorSettings,
    Integer,
    LinkDefinition,
    MediaTypeDefinition,
    Object,
    ResourceDefinition,
    ResponseDefinition,
    RouteDefinition,
    String,
    UserTypeDefinition,
    ValidationDefinition,
    ViewDefinition,
)
from restgen.generator import version_package

BOTTLE_MT = "application/vnd.bottle+json"
BOTTLE_COLLECTION_MT = "application/vnd.bottle+json; type=collection"
ACCOUNT_MT = "application/vnd.account+json"
SHELF_MT = "application/vnd.shelf+json"


def account_media_type() -> MediaTypeDefinition:
    return MediaTypeDefinition(
        "Account",
        ACCOUNT_MT,
        AttributeDefinition(
            type=Object(
                id=AttributeDefinition(Integer, description="ID of account"),
                href=AttributeDefinition(String, description="API href of account"),
                name=AttributeDefinition(String, description="Name of account"),
            ),
            description="A tenant account",
            required=["id", "href"],
        ),
        views={
            "default": ViewDefinition("default", ["id", "href", "name"]),
            "link": ViewDefinition("link", ["id", "href"]),
        },
    )


def bottle_media_type(account: MediaTypeDefinition) -> MediaTypeDefinition:
    return MediaTypeDefinition(
        "Bottle",
        BOTTLE_MT,
        AttributeDefinition(
            type=Object(
                id=AttributeDefinition(Integer, description="ID of bottle"),
                href=AttributeDefinition(String, description="API href of bottle"),
                name=AttributeDefinition(
                    String, validation=ValidationDefinition(min_length=1)
                ),
                vintage=AttributeDefinition(
                    Integer, validation=ValidationDefinition(minimum=1900)
                ),
                rating=AttributeDefinition(
                    Integer, validation=ValidationDefinition(minimum=1, maximum=5)
                ),
                account=AttributeDefinition(account, description="Account that owns bottle"),
            ),
            description="A bottle of wine",
            required=["id", "href", "name"],
        ),
        views={
            "default": ViewDefinition(
                "default", ["id", "href", "name", "vintage", "rating", "account", "links"]
            ),
            "tiny": ViewDefinition("tiny", ["id", "href", "name"]),
            "link": ViewDefinition("link", ["id", "href"]),
        },
        links={"account": LinkDefinition("account")},
    )


def bottle_collection_media_type(bottle: MediaTypeDefinition) -> MediaTypeDefinition:
    return MediaTypeDefinition(
        "BottleCollection",
        BOTTLE_COLLECTION_MT,
        AttributeDefinition(type=Array(AttributeDefinition(bottle))),
        views={
            "default": ViewDefinition("default"),
            "tiny": ViewDefinition("tiny"),
        },
    )


def rating_type() -> UserTypeDefinition:
    return UserTypeDefinition(
        "Rating",
        AttributeDefinition(
            Integer,
            description="Rating of a bottle, from 1 to 5",
            validation=ValidationDefinition(minimum=1, maximum=5),
        ),
    )


def create_bottle_payload(rating: UserTypeDefinition) -> UserTypeDefinition:
    return UserTypeDefinition(
        "CreateBottlePayload",
        AttributeDefinition(
            type=Object(
                name=AttributeDefinition(String, validation=ValidationDefinition(min_length=1)),
                vintage=AttributeDefinition(Integer, validation=ValidationDefinition(minimum=1900)),
                rating=AttributeDefinition(rating),
                tags=AttributeDefinition(Array(AttributeDefinition(String))),
            ),
            required=["name"],
        ),
    )


def account_param() -> Object:
    return Object(accountID=AttributeDefinition(Integer))


def bottle_resource(payload: UserTypeDefinition) -> ResourceDefinition:
    list_params = account_param()
    list_params["years"] = AttributeDefinition(Array(AttributeDefinition(Integer)))
    list_params["sort"] = AttributeDefinition(
        String, validation=ValidationDefinition(values=["name", "vintage"])
    )
    show_params = account_param()
    show_params["bottleID"] = AttributeDefinition(Integer)
    rate_params = account_param()
    rate_params["bottleID"] = AttributeDefinition(Integer)
    rate_params["value"] = AttributeDefinition(
        Integer, validation=ValidationDefinition(minimum=1, maximum=5)
    )
    actions = {
        "list": ActionDefinition(
            "list",
            routes=[RouteDefinition("GET", "")],
            params=AttributeDefinition(list_params, required=["accountID"]),
            responses={"OK": ResponseDefinition("OK", 200, BOTTLE_COLLECTION_MT)},
        ),
        "show": ActionDefinition(
            "show",
            routes=[RouteDefinition("GET", "/{bottleID}")],
            params=AttributeDefinition(show_params, required=["accountID", "bottleID"]),
            responses={
                "OK": ResponseDefinition("OK", 200, BOTTLE_MT),
                "NotFound": ResponseDefinition("NotFound", 404),
            },
        ),
        "create": ActionDefinition(
            "create",
            routes=[RouteDefinition("POST", "")],
            params=AttributeDefinition(account_param(), required=["accountID"]),
            payload=payload,
            headers=AttributeDefinition(
                Object(**{"X-Request-Id": AttributeDefinition(String)}),
                required=["X-Request-Id"],
            ),
            responses={"Created": ResponseDefinition("Created", 201)},
        ),
        "rate": ActionDefinition(
            "rate",
            routes=[
                RouteDefinition("PUT", "/{bottleID}/rate"),
                RouteDefinition("PUT", "/rate"),
            ],
            params=AttributeDefinition(
                rate_params, required=["accountID", "bottleID", "value"]
            ),
            responses={"NoContent": ResponseDefinition("NoContent", 204)},
        ),
    }
    return ResourceDefinition(
        "bottle",
        base_path="/accounts/{accountID}/bottles",
        media_type=BOTTLE_MT,
        description="A wine bottle",
        actions=actions,
    )


def health_resource() -> ResourceDefinition:
    return ResourceDefinition(
        "health",
        actions={
            "check": ActionDefinition(
                "check",
                routes=[RouteDefinition("GET", "/health")],
                responses={"OK": ResponseDefinition("OK", 200, "text/plain")},
            ),
        },
        versions=["v2"],
    )


def build_cellar_api() -> APIDefinition:
    account = account_media_type()
    bottle = bottle_media_type(account)
    rating = rating_type()
    return APIDefinition(
        "cellar",
        resources={
            "bottle": bottle_resource(create_bottle_payload(rating)),
            "health": health_resource(),
        },
        media_types={
            "Account": account,
            "Bottle": bottle,
            "BottleCollection": bottle_collection_media_type(bottle),
        },
        user_types={"Rating": rating},
        versions={"v2": APIVersionDefinition("v2", "/v2")},
    )


def build_shelf_api() -> APIDefinition:
    """Shelves refer to their account with its link view."""
    account = account_media_type()
    shelf = MediaTypeDefinition(
        "Shelf",
        SHELF_MT,
        AttributeDefinition(
            type=Object(
                id=AttributeDefinition(Integer, description="ID of shelf"),
                account=AttributeDefinition(account, view="link"),
            ),
            required=["id"],
        ),
        views={"default": ViewDefinition("default", ["id", "account"])},
    )
    show = ActionDefinition(
        "show",
        routes=[RouteDefinition("GET", "/{shelfID}")],
        params=AttributeDefinition(
            Object(
                shelfID=AttributeDefinition(Integer),
                context=AttributeDefinition(String),
            ),
            required=["shelfID"],
        ),
        responses={
            "OK": ResponseDefinition("OK", 200, SHELF_MT),
            "NoContent": ResponseDefinition("NoContent", 204),
        },
    )
    return APIDefinition(
        "shelves",
        resources={"shelf": ResourceDefinition("shelf", base_path="/shelves", actions={"show": show})},
        media_types={"Account": account, "Shelf": shelf},
    )


@pytest.fixture
def cellar_api():
    return build_cellar_api()


@pytest.fixture
def shelf_api():
    return build_shelf_api()


@pytest.fixture
def bottle_mt(cellar_api):
    return cellar_api.media_types["Bottle"]


@pytest.fixture
def bottle_resource_def(cellar_api):
    return cellar_api.resources["bottle"]


@pytest.fixture
def package_name():
    """A fresh package name so each test imports its own generated code."""
    return f"cellar_{uuid.uuid4().hex[:8]}"


@pytest.fixture
def generate_package(tmp_path, monkeypatch):
    """Return a function generating the package of a design and importing it."""
    monkeypatch.syspath_prepend(str(tmp_path))

    def generate(api, package_name=None):
        package_name = package_name or f"gen_{uuid.uuid4().hex[:8]}"
        settings = GeneratorSettings(output_dir=tmp_path, package=package_name)
        Generator(settings).generate(api)
        importlib.invalidate_caches()
        package = importlib.import_module(package_name)
        for version in api.versions.values():
            importlib.import_module(f"{package_name}.{version_package(version)}")
        return package

    return generate


@pytest.fixture
def generated_package(generate_package, cellar_api, package_name):
    """Generate the cellar API package and import it."""
    return generate_package(cellar_api, package_name)
