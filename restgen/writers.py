"""
Writers of the generated modules.

A writer owns one output module (a SourceFile) and renders the artifacts of
that module with an ArtifactEmitter. Artifacts are rendered completely before
being added to the module so a failure never leaves a partial artifact behind.
"""

import logging
from dataclasses import replace
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Set, Union

from jinja2 import Environment, StrictUndefined, Template, TemplateError

from . import templates
from .coerce import coerce
from .design import LINK_VIEW, MediaTypeDefinition, UserTypeDefinition
from .exceptions import CodegenError, TemplateRenderError
from .naming import Namer, class_case, quote, safe_identifier, snake_case
from .template_data import (
    ContextTemplateData,
    ControllerTemplateData,
    EncoderTemplateData,
    HeaderData,
    MediaTypeTemplateData,
    ResourceData,
    UserTypeTemplateData,
    array_attribute,
    new_coerce_data,
    response_method_name,
)
from .typerefs import field_default, field_defs, field_type, type_ref
from .validation import has_validation, recursive_validate, validation_checker

# Set up logger for this module
logger = logging.getLogger(__name__)

INDENT = "    "

STDLIB_IMPORTS = [
    "import re",
    "from dataclasses import dataclass, field",
    "from datetime import datetime",
    "from typing import Any, Dict, List, Optional",
]

# Generated code is Python source, not markup: autoescaping would corrupt it.
_environment = Environment(  # nosec B701
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    undefined=StrictUndefined,
    autoescape=False,
)


@lru_cache(maxsize=None)
def _compile(source: str) -> Template:
    return _environment.from_string(source)


def describe(user_type: UserTypeDefinition, noun: str) -> str:
    """One line summary of a type, safe to use in a docstring or comment."""
    lines = user_type.description.strip().splitlines()
    text = lines[0] if lines else f"{user_type.type_name} {noun}."
    return text.replace("\\", "\\\\").replace('"""', "'''")


def import_line(package_path: str) -> str:
    """Statement importing an encoder package under its last name segment."""
    parent, _, name = package_path.rpartition(".")
    if not parent:
        return f"import {package_path}"
    return f"from {parent} import {name}"


def runtime_import(*names: str) -> str:
    body = "".join(f"    {name},\n" for name in sorted(names))
    return f"from restgen.runtime import (\n{body})"


class ArtifactEmitter:
    """Renders templates into code artifacts.

    Every render gets a fresh Namer so temporary variable names only need to
    be unique within one artifact.
    """

    def __init__(self, tool: str = "restgen"):
        self.tool = tool

    def base_helpers(self, namer: Namer) -> Dict[str, Callable[..., Any]]:
        """Helpers available to all the templates."""
        return {
            "class_name": class_case,
            "snake": snake_case,
            "ident": safe_identifier,
            "q": quote,
            "quote_all": lambda items: ", ".join(quote(item) for item in items),
            "join": lambda items, sep: sep.join(items),
            "type_ref": type_ref,
            "field_type": field_type,
            "field_default": field_default,
            "field_defs": field_defs,
            "describe": describe,
            "tabs": lambda depth: INDENT * depth,
            "tempvar": namer.tempvar,
            "has_validation": has_validation,
            "recursive_validate": lambda att, target, context, depth: recursive_validate(
                att, target, context, depth, namer
            ),
            "validation_checker": lambda att, non_zero, target, context, depth: validation_checker(
                att, non_zero, target, context, depth, namer
            ),
            "coerce": lambda data: coerce(data, namer),
            "new_coerce_data": new_coerce_data,
            "array_attribute": array_attribute,
        }

    def render(
        self,
        name: str,
        template: str,
        helpers: Optional[Dict[str, Callable[..., Any]]],
        data: Any,
    ) -> str:
        """Render the template with the given data.

        Args:
            name: Artifact name used in logs and errors.
            template: Template source.
            helpers: Extra helpers, they take precedence over the base ones.
            data: Template input, available as ``data``.

        Raises:
            CodegenError: if a helper fails or the template cannot be rendered.
        """
        variables = self.base_helpers(Namer())
        if helpers:
            variables.update(helpers)
        try:
            code = _compile(template).render(data=data, **variables)
        except CodegenError:
            raise
        except TemplateError as e:
            raise TemplateRenderError(name, e) from e
        logger.debug(f"Rendered {name} artifact")
        return code

    def header(self, title: str, import_groups: List[List[str]]) -> str:
        data = HeaderData(title=title, tool=self.tool, import_groups=import_groups)
        return self.render("header", templates.HEADER_T, None, data)


class SourceFile:
    """A generated module being assembled in memory."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.header = ""
        self.artifacts: List[str] = []

    def add(self, *artifacts: str) -> None:
        """Append artifacts to the module, blank ones are ignored."""
        for artifact in artifacts:
            code = artifact.strip("\n")
            if code.strip():
                self.artifacts.append(code)

    def text(self) -> str:
        text = self.header.strip("\n") + "\n"
        if self.artifacts:
            text += "\n\n" + "\n\n\n".join(self.artifacts) + "\n"
        return text

    def write(self) -> Path:
        """Write the module to disk, creating the parent directories."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(self.text(), encoding="utf-8")
        logger.info(f"Wrote {self.path}")
        return self.path


class ModuleWriter:
    """Base class of the writers, each one producing a single module."""

    def __init__(self, path: Union[str, Path], emitter: Optional[ArtifactEmitter] = None):
        self.source = SourceFile(path)
        self.emitter = emitter or ArtifactEmitter()

    def write_header(self, title: str, import_groups: List[List[str]]) -> None:
        self.source.header = self.emitter.header(title, import_groups)

    def write(self) -> Path:
        return self.source.write()


class ContextsWriter(ModuleWriter):
    """Writes the action contexts, their factories and payload types."""

    def write_header(self, title: str, default_pkg: str = ".") -> None:  # type: ignore[override]
        super().write_header(title, [
            STDLIB_IMPORTS,
            [runtime_import(
                "ActionContext",
                "Context",
                "InvalidParamTypeError",
                "MissingHeaderError",
                "MissingParamError",
                "RequestError",
                "RequestErrors",
                "ValidationFailedError",
                "parse_bool",
                "parse_datetime",
                "parse_int",
                "parse_number",
            )],
            [
                f"from {default_pkg}media_types import *  # noqa: F401,F403",
                f"from {default_pkg}user_types import *  # noqa: F401,F403",
            ],
        ])

    def execute(self, data: ContextTemplateData) -> None:
        response_helpers = {
            "project": lambda mt, view: mt.project(view)[0],
            "response_method_name": response_method_name,
        }
        artifacts = [
            self.emitter.render(
                "context", templates.CTX_T + templates.CTX_RESP_T, response_helpers, data
            ),
            self.emitter.render("new", templates.CTX_NEW_T, None, data),
        ]
        if data.payload is not None:
            artifacts.append(self.emitter.render("payload", templates.PAYLOAD_T, None, data))
        self.source.add(*artifacts)


class ControllersWriter(ModuleWriter):
    """Writes the controller interfaces, mount and unmarshal functions."""

    def write_header(  # type: ignore[override]
        self,
        title: str,
        encoders: List[EncoderTemplateData],
    ) -> None:
        packages = sorted({import_line(enc.package_path) for enc in encoders})
        super().write_header(title, [
            [
                "from abc import abstractmethod",
                "from typing import Any",
            ],
            [runtime_import("BadRequestError", "Context", "Controller", "RequestErrors", "Service")],
            packages,
            ["from .contexts import *  # noqa: F401,F403"],
        ])

    def execute(self, data: List[ControllerTemplateData]) -> None:
        for controller in data:
            self.source.add(
                self.emitter.render("controller", templates.CTRL_T, None, controller),
                self.emitter.render("mount", templates.MOUNT_T, None, controller),
                self.emitter.render("unmarshal", templates.UNMARSHAL_T, None, controller),
            )


class ResourcesWriter(ModuleWriter):
    """Writes the href builders of the resources."""

    def write_header(self, title: str) -> None:  # type: ignore[override]
        super().write_header(title, [["from typing import Any"]])

    def execute(self, data: ResourceData) -> None:
        self.source.add(self.emitter.render("resource", templates.RESOURCE_T, None, data))


class MediaTypesWriter(ModuleWriter):
    """Writes one type per view of the media types.

    The "link" view is not written on its own: a link representation is
    written once, after the first type referring to it, either through a field
    projected with the "link" view or through a links type.
    """

    def __init__(self, path: Union[str, Path], emitter: Optional[ArtifactEmitter] = None):
        super().__init__(path, emitter)
        self._written: Set[str] = set()

    def write_header(self, title: str) -> None:  # type: ignore[override]
        super().write_header(title, [
            STDLIB_IMPORTS,
            [runtime_import("RequestError", "RequestErrors", "ValidationFailedError")],
            ["from .user_types import *  # noqa: F401,F403"],
        ])

    def execute(self, data: MediaTypeTemplateData) -> None:
        media_type: MediaTypeDefinition = data.media_type
        artifacts: List[str] = []
        names: Set[str] = set()
        links: Optional[UserTypeDefinition] = None
        for view in media_type.views:
            if view == LINK_VIEW:
                continue
            projected, view_links = media_type.project(view)
            if links is None:
                links = view_links
            artifacts.extend(self._render_media_type(data, projected, names))
        if links is not None and links.type_name not in self._written:
            for att in links.attribute.fields().values():
                if isinstance(att.type, MediaTypeDefinition):
                    artifacts.extend(self._render_media_type(data, att.type, names))
            names.add(links.type_name)
            links_data = UserTypeTemplateData(links, data.versioned, data.default_pkg)
            artifacts.append(self.emitter.render(
                f"user type {links.type_name}", templates.USER_TYPE_T, None, links_data
            ))
        self.source.add(*artifacts)
        self._written |= names

    def _render_media_type(
        self, data: MediaTypeTemplateData, projected: MediaTypeDefinition, names: Set[str]
    ) -> List[str]:
        """Render a projected media type followed by the link representations it uses."""
        if projected.type_name in self._written or projected.type_name in names:
            return []
        names.add(projected.type_name)
        artifacts = [self.emitter.render(
            f"media type {projected.type_name}",
            templates.MEDIA_TYPE_T,
            None,
            replace(data, media_type=projected),
        )]
        for linked in link_representations(projected):
            artifacts.extend(self._render_media_type(data, linked, names))
        return artifacts


def link_representations(media_type: MediaTypeDefinition) -> List[MediaTypeDefinition]:
    """Media types projected with the "link" view that the media type refers to."""
    array = media_type.to_array()
    if array is not None:
        candidates = [array.elem_type]
    else:
        candidates = list(media_type.attribute.fields().values())
    linked: List[MediaTypeDefinition] = []
    for att in candidates:
        data_type = att.type
        if not isinstance(data_type, UserTypeDefinition) and data_type.is_array():
            data_type = data_type.to_array().elem_type.type
        if isinstance(data_type, MediaTypeDefinition) and data_type.view == LINK_VIEW:
            linked.append(data_type)
    return linked


class UserTypesWriter(ModuleWriter):
    """Writes the user types."""

    def write_header(self, title: str) -> None:  # type: ignore[override]
        super().write_header(title, [
            STDLIB_IMPORTS,
            [runtime_import("RequestError", "RequestErrors", "ValidationFailedError")],
        ])

    def execute(self, data: UserTypeTemplateData) -> None:
        self.source.add(self.emitter.render(
            f"user type {data.user_type.type_name}", templates.USER_TYPE_T, None, data
        ))
