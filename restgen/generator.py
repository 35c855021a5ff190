"""
Generation of the application package from a design.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

from .config import GeneratorSettings
from .design import APIDefinition, APIVersionDefinition
from .naming import safe_identifier
from .template_data import (
    EncoderTemplateData,
    MediaTypeTemplateData,
    UserTypeTemplateData,
    build_encoder_map,
    new_context_data,
    new_controller_data,
    new_resource_data,
)
from .writers import (
    ArtifactEmitter,
    ContextsWriter,
    ControllersWriter,
    MediaTypesWriter,
    ModuleWriter,
    ResourcesWriter,
    UserTypesWriter,
)

# Set up logger for this module
logger = logging.getLogger(__name__)


def version_package(version: APIVersionDefinition) -> str:
    """Name of the sub-package holding the code of a non-default API version."""
    return safe_identifier(version.version.lower())


class Generator:
    """Writes the contexts, controllers, hrefs and types modules of an API.

    The default version is generated in the package directory, the other
    versions in a sub-package named after the version. Types are shared by
    all the versions and live in the package directory.
    """

    def __init__(self, settings: GeneratorSettings, emitter: Optional[ArtifactEmitter] = None):
        self.settings = settings
        self.emitter = emitter or ArtifactEmitter(settings.tool)

    def generate(self, api: APIDefinition) -> List[Path]:
        """Generate the package of the API and return the paths of the written files.

        Raises:
            CodegenError: if an artifact cannot be generated. The module being
                generated is not written.
        """
        logger.info(f"Generating {api.name} into {self.settings.package_dir}")
        encoders = build_encoder_map(api.produces, encoder=True)
        decoders = build_encoder_map(api.consumes, encoder=False)
        files: List[Path] = []
        for version in api.iterate_versions():
            directory = self.settings.package_dir
            if not version.is_default():
                directory = directory / version_package(version)
            files.extend(self.generate_version(api, version, directory, encoders, decoders))
        files.append(self.generate_media_types(api, self.settings.package_dir))
        files.append(self.generate_user_types(api, self.settings.package_dir))
        logger.info(f"Generated {len(files)} files for {api.name}")
        return files

    def generate_version(
        self,
        api: APIDefinition,
        version: APIVersionDefinition,
        directory: Path,
        encoders: Dict[str, EncoderTemplateData],
        decoders: Dict[str, EncoderTemplateData],
    ) -> List[Path]:
        label = api.name if version.is_default() else f"{api.name} {version.version}"
        resources = [r for r in api.resources.values() if r.supports_version(version)]
        default_pkg = "." if version.is_default() else ".."

        contexts = ContextsWriter(directory / "contexts.py", self.emitter)
        contexts.write_header(f"{label}: Application Contexts", default_pkg)
        for resource in resources:
            for action in resource.actions.values():
                contexts.execute(new_context_data(api, version, resource, action))

        controllers = ControllersWriter(directory / "controllers.py", self.emitter)
        controllers.write_header(
            f"{label}: Application Controllers",
            list(encoders.values()) + list(decoders.values()),
        )
        controllers.execute([
            new_controller_data(api, version, resource, encoders, decoders)
            for resource in resources
            if resource.actions
        ])

        hrefs = ResourcesWriter(directory / "hrefs.py", self.emitter)
        hrefs.write_header(f"{label}: Application Resource Href Factories")
        for resource in resources:
            hrefs.execute(new_resource_data(api, version, resource))

        init = ModuleWriter(directory / "__init__.py", self.emitter)
        init.write_header(label, [[
            "from .controllers import *  # noqa: F401,F403",
            "from .hrefs import *  # noqa: F401,F403",
        ]])

        return [contexts.write(), controllers.write(), hrefs.write(), init.write()]

    def generate_media_types(self, api: APIDefinition, directory: Path) -> Path:
        writer = MediaTypesWriter(directory / "media_types.py", self.emitter)
        writer.write_header(f"{api.name}: Application Media Types")
        for media_type in api.media_types.values():
            writer.execute(MediaTypeTemplateData(media_type))
        return writer.write()

    def generate_user_types(self, api: APIDefinition, directory: Path) -> Path:
        writer = UserTypesWriter(directory / "user_types.py", self.emitter)
        writer.write_header(f"{api.name}: Application User Types")
        for user_type in api.user_types.values():
            writer.execute(UserTypeTemplateData(user_type))
        return writer.write()
