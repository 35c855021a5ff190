"""
Configuration of the code generator.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .naming import safe_identifier


class GeneratorSettings(BaseModel):
    """Settings of a generation run.

    Attributes:
        output_dir: Directory the generated package is written to.
        package: Name of the generated package.
        tool: Generator name written in the header of every module.
    """

    model_config = ConfigDict(frozen=True)

    output_dir: Path = Field(default=Path("."))
    package: str = "app"
    tool: str = "restgen"

    @field_validator("package")
    @classmethod
    def package_must_be_identifier(cls, v: str) -> str:
        if safe_identifier(v) != v:
            raise ValueError(f"package name {v!r} is not a valid Python identifier")
        return v

    @property
    def package_dir(self) -> Path:
        return self.output_dir / self.package
