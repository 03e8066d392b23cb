"""Project schemas.

Models shared between the project-creation workflow and the services it
talks to: examples, extension manifests and the project record.
"""

from enum import Enum, IntFlag
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CodeGenerationOption(str, Enum):
    """What to put into the new project folder."""

    NONE = "none"
    SCAFFOLDING = "scaffolding"
    EXAMPLE = "example"


class ExtensionTypes(IntFlag):
    """Extension anchors the project targets."""

    PANEL = 1
    COMPONENT = 2
    OVERLAY = 4
    MOBILE = 8


class ScaffoldingOptions(IntFlag):
    """Extras generated with scaffolding."""

    NONE = 0
    STORE_CONFIGURATION = 1
    RETRIEVE_CONFIGURATION = 2


class Example(BaseModel):
    """A pre-built project from the example catalog.

    ``backend_command`` may contain the ``{clientId}``, ``{secret}`` and
    ``{ownerId}`` placeholders.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., description="Example title")
    description: str = Field("", description="What the example does")
    frontend_folder_name: str = Field(
        "",
        alias="frontendFolderName",
        description="Folder holding the frontend inside the project",
    )
    frontend_command: str = Field(
        "",
        alias="frontendCommand",
        description="Command that serves the frontend",
    )
    backend_command: str = Field(
        "",
        alias="backendCommand",
        description="Command template that runs the backend",
    )


class ExtensionManifest(BaseModel):
    """Server-held metadata for an extension.

    Only ``id`` and ``name`` are interpreted; everything else the server
    returns is kept as-is.
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field("", description="Extension client id")
    name: str = Field("", description="Extension name")

    @property
    def is_loaded(self) -> bool:
        """True once a manifest was fetched successfully."""
        return bool(self.id)


class FrozenExtensionManifest(ExtensionManifest):
    """Read-only manifest carried by a finished descriptor."""

    model_config = ConfigDict(frozen=True)


class RigProject(BaseModel):
    """The project record edited by the workflow."""

    model_config = ConfigDict(populate_by_name=True)

    folder_path: str = Field(
        "",
        alias="projectFolderPath",
        description="Folder that will contain the project",
    )
    manifest: ExtensionManifest = Field(
        default_factory=ExtensionManifest,
        description="Manifest of the selected extension",
    )
    secret: str = Field("", description="Extension secret")
    frontend_folder_name: str = Field("", alias="frontendFolderName")
    frontend_command: str = Field("", alias="frontendCommand")
    backend_command: str = Field("", alias="backendCommand")


class ProjectDescriptor(RigProject):
    """The finished project handed to the caller. Immutable, manifest included."""

    model_config = ConfigDict(frozen=True)

    manifest: FrozenExtensionManifest = Field(
        default_factory=FrozenExtensionManifest,
        description="Manifest of the selected extension",
    )

    @field_validator("manifest", mode="before")
    @classmethod
    def _freeze_manifest(cls, value: Any) -> Any:
        if isinstance(value, ExtensionManifest) and not isinstance(value, FrozenExtensionManifest):
            return value.model_dump()
        return value
