"""Workflow state schema.

The single mutable record owned by the project-creation workflow.
"""

from enum import Enum

from pydantic import BaseModel, Field

from schemas.project import (
    CodeGenerationOption,
    Example,
    ExtensionTypes,
    RigProject,
    ScaffoldingOptions,
)


class Lifecycle(str, Enum):
    """Whether async continuations may still write to the state."""

    ACTIVE = "active"
    DISPOSED = "disposed"


class SaveStatus(str, Enum):
    """Save orchestrator status."""

    IDLE = "idle"
    SAVING = "saving"
    SUCCEEDED = "succeeded"


class ErrorKind(str, Enum):
    """Kind of failure recorded by the workflow."""

    VALIDATION = "validation"
    FETCH = "fetch"
    SAVE = "save"


class WorkflowError(BaseModel):
    """A failure with a human-readable message."""

    kind: ErrorKind = Field(..., description="Failure kind")
    message: str = Field(..., description="Message shown to the user")


class WorkflowState(BaseModel):
    """Complete workflow state.

    Replaced as a whole on every update; see ``workflow.normalizer.apply_update``.
    """

    project: RigProject = Field(default_factory=RigProject)

    # Remote extension identity, edited independently of project.manifest
    client_id: str = Field("", description="Extension client id to fetch")
    version: str = Field("", description="Extension version to fetch")

    code_generation_option: CodeGenerationOption = Field(
        CodeGenerationOption.EXAMPLE,
        description="Drives which save path is taken",
    )
    extension_types: int = Field(
        int(ExtensionTypes.PANEL),
        description="Bitmask of ExtensionTypes",
    )
    scaffolding_options: int = Field(
        int(ScaffoldingOptions.NONE),
        description="Bitmask of ScaffoldingOptions",
    )

    examples: list[Example] = Field(default_factory=list)
    # Not safe to dereference until examples are loaded; may be NaN after a bad edit
    selected_example_index: int | float = Field(0, description="Index into examples")

    # Status
    error_message: str | None = Field(None, description="Transient status or error")
    last_error: WorkflowError | None = Field(None, description="Most recent failure")
    manifest_error: WorkflowError | None = Field(None, description="Last manifest fetch failure")

    def selected_example(self) -> Example | None:
        """Return the selected example, or None if the index is not usable."""
        index = self.selected_example_index
        if isinstance(index, float):
            if not index.is_integer():
                return None
            index = int(index)
        if 0 <= index < len(self.examples):
            return self.examples[index]
        return None
