"""Schemas module for the project workflow.

Provides Pydantic models for:
- Examples and extension manifests
- The project record and the finished project descriptor
- Workflow state and recorded failures
"""

from .project import (
    CodeGenerationOption,
    Example,
    ExtensionManifest,
    ExtensionTypes,
    FrozenExtensionManifest,
    ProjectDescriptor,
    RigProject,
    ScaffoldingOptions,
)
from .workflow_state import (
    ErrorKind,
    Lifecycle,
    SaveStatus,
    WorkflowError,
    WorkflowState,
)

__all__ = [
    # Project
    "CodeGenerationOption",
    "Example",
    "ExtensionManifest",
    "ExtensionTypes",
    "FrozenExtensionManifest",
    "ProjectDescriptor",
    "RigProject",
    "ScaffoldingOptions",
    # Workflow state
    "ErrorKind",
    "Lifecycle",
    "SaveStatus",
    "WorkflowError",
    "WorkflowState",
]
