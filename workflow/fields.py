"""Field registry for the project-creation workflow.

Maps every editable field name to how its raw input is interpreted and
where the value is stored.
"""

from dataclasses import dataclass
from enum import Enum, IntFlag
from typing import Callable

from schemas.project import CodeGenerationOption, ExtensionTypes, ScaffoldingOptions


class FieldKind(str, Enum):
    """Stored type of a field."""

    STRING = "string"
    NUMBER = "number"
    BITMASK = "bitmask"
    BOOLEAN = "boolean"
    CHOICE = "choice"


class FieldTarget(str, Enum):
    """Record the field lives in."""

    PROJECT = "project"
    WORKFLOW = "workflow"


@dataclass(frozen=True)
class FieldSpec:
    """Defines one editable field."""

    name: str
    kind: FieldKind
    target: FieldTarget = FieldTarget.WORKFLOW
    flags: type[IntFlag] | None = None  # Bitmask fields only
    choices: Callable[[str], Enum] | None = None  # Choice fields only


# Names match the attributes of WorkflowState / RigProject
FIELDS: list[FieldSpec] = [
    FieldSpec("folder_path", FieldKind.STRING, FieldTarget.PROJECT),
    FieldSpec("secret", FieldKind.STRING, FieldTarget.PROJECT),
    FieldSpec("client_id", FieldKind.STRING),
    FieldSpec("version", FieldKind.STRING),
    FieldSpec("code_generation_option", FieldKind.CHOICE, choices=CodeGenerationOption),
    FieldSpec("extension_types", FieldKind.BITMASK, flags=ExtensionTypes),
    FieldSpec("scaffolding_options", FieldKind.BITMASK, flags=ScaffoldingOptions),
    FieldSpec("selected_example_index", FieldKind.NUMBER),
]


class FieldRegistry:
    """Lookup table of editable fields, built once per workflow."""

    def __init__(self, fields: list[FieldSpec] | None = None) -> None:
        self._fields: dict[str, FieldSpec] = {}
        for spec in fields if fields is not None else FIELDS:
            if spec.kind == FieldKind.BITMASK and spec.flags is None:
                raise ValueError(f"Bitmask field {spec.name} needs a flag type")
            if spec.kind == FieldKind.CHOICE and spec.choices is None:
                raise ValueError(f"Choice field {spec.name} needs choices")
            self._fields[spec.name] = spec

    def get(self, name: str) -> FieldSpec | None:
        return self._fields.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._fields

    def __iter__(self):
        return iter(self._fields.values())

    def names(self, target: FieldTarget | None = None) -> list[str]:
        """List field names, optionally only those stored in ``target``."""
        return [s.name for s in self._fields.values() if target is None or s.target == target]
