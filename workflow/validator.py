"""Save-eligibility checks. Pure functions over WorkflowState."""

from schemas.project import CodeGenerationOption
from schemas.workflow_state import ErrorKind, WorkflowError, WorkflowState


def needs_folder(state: WorkflowState) -> bool:
    """True when the chosen option requires a project folder that is missing."""
    return (
        state.code_generation_option != CodeGenerationOption.NONE
        and not state.project.folder_path.strip()
    )


def validate(state: WorkflowState) -> WorkflowError | None:
    """Return the first reason the state cannot be saved, or None.

    The project needs a folder unless no code is generated, and an online
    extension must be selected.
    """
    if needs_folder(state):
        return WorkflowError(
            kind=ErrorKind.VALIDATION,
            message="A project folder is required to add code to the project",
        )
    if not state.project.manifest.id:
        return WorkflowError(
            kind=ErrorKind.VALIDATION,
            message="Fetch the manifest of an online extension first",
        )
    return None


def can_save(state: WorkflowState) -> bool:
    return validate(state) is None


def invalid_fields(state: WorkflowState) -> set[str]:
    """Names of inputs a renderer should flag as invalid."""
    invalid = set()
    if not state.client_id.strip():
        invalid.add("client_id")
    if not state.project.secret.strip():
        invalid.add("secret")
    if not state.version.strip():
        invalid.add("version")
    if not state.project.manifest.id:
        invalid.add("manifest")
    if needs_folder(state):
        invalid.add("folder_path")
    return invalid
