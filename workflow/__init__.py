"""Project-creation workflow.

Collects the extension identity, project folder and example choice,
fetches the extension manifest and creates the project:
- fields: editable field registry
- normalizer: raw edits to state updates
- validator: save eligibility
- templates: backend command placeholders
- controller: lifecycle, manifest fetch and save orchestration
"""

from workflow.config import Config, get_config, load_config, reload_config
from workflow.controller import (
    IN_PROGRESS_MESSAGE,
    CreateProjectWorkflow,
    ProjectCreationError,
    WorkflowClosedError,
    build_descriptor,
)
from workflow.fields import FIELDS, FieldKind, FieldRegistry, FieldSpec, FieldTarget
from workflow.normalizer import (
    EditKind,
    FieldEdit,
    InvalidEditError,
    StateUpdate,
    apply_edit,
    apply_update,
    to_number,
    toggle_mask,
)
from workflow.services import ExampleCatalog, ManifestService, ProjectMaterializer
from workflow.templates import resolve_backend_command
from workflow.validator import can_save, invalid_fields, validate

__all__ = [
    # Config
    "Config",
    "get_config",
    "load_config",
    "reload_config",
    # Controller
    "CreateProjectWorkflow",
    "IN_PROGRESS_MESSAGE",
    "ProjectCreationError",
    "WorkflowClosedError",
    "build_descriptor",
    # Fields
    "FIELDS",
    "FieldKind",
    "FieldRegistry",
    "FieldSpec",
    "FieldTarget",
    # Normalizer
    "EditKind",
    "FieldEdit",
    "InvalidEditError",
    "StateUpdate",
    "apply_edit",
    "apply_update",
    "to_number",
    "toggle_mask",
    # Services
    "ExampleCatalog",
    "ManifestService",
    "ProjectMaterializer",
    # Validation
    "can_save",
    "invalid_fields",
    "validate",
    "resolve_backend_command",
]
