"""Collaborators the project-creation workflow depends on."""

from typing import Any, Callable, Protocol

from schemas.project import CodeGenerationOption, Example, ExtensionManifest, ProjectDescriptor


class ExampleCatalog(Protocol):
    """Source of the examples offered for new projects."""

    async def fetch_examples(self) -> list[Example]: ...


class ManifestService(Protocol):
    """Looks up the manifest of a user's extension."""

    async def fetch_user_extension_manifest(
        self,
        user_id: str,
        secret: str,
        client_id: str,
        version: str,
    ) -> ExtensionManifest | dict[str, Any]: ...


class ProjectMaterializer(Protocol):
    """Creates the project folder and its content."""

    async def create_project(
        self,
        folder_path: str,
        code_generation_option: CodeGenerationOption,
        example_index: int,
    ) -> None: ...


SaveHandler = Callable[[ProjectDescriptor], None]
CloseHandler = Callable[[], None]
