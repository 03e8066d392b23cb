"""Input normalizer.

Turns raw field-change events from the renderer into typed state updates.
Updates are applied by ``apply_update``, which returns a new state.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from functools import reduce
from operator import or_
from typing import Any

from schemas.workflow_state import WorkflowState
from workflow.fields import FieldKind, FieldRegistry, FieldSpec, FieldTarget


class InvalidEditError(Exception):
    """Raised when an edit cannot be applied to the workflow state."""

    pass


class EditKind(str, Enum):
    """How the renderer produced the edit."""

    TEXT = "text"
    TOGGLE = "toggle"


@dataclass(frozen=True)
class FieldEdit:
    """A single field-change event.

    For toggles, ``value`` carries the flag value and ``checked`` the new
    checkbox state.
    """

    name: str
    value: Any = ""
    kind: EditKind = EditKind.TEXT
    checked: bool = False


@dataclass
class StateUpdate:
    """Partial update split by target record."""

    workflow: dict[str, Any] = field(default_factory=dict)
    project: dict[str, Any] = field(default_factory=dict)


def to_number(raw: Any) -> int | float:
    """Convert raw input to a number; NaN when it is not one."""
    if isinstance(raw, bool):
        return int(raw)
    if isinstance(raw, (int, float)):
        return raw
    text = str(raw).strip()
    if not text:
        return 0
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return math.nan


def toggle_mask(mask: int, flag: int, enabled: bool) -> int:
    """Set or clear ``flag`` in ``mask``."""
    if enabled:
        return mask | flag
    return mask & ~flag


def _flag_value(spec: FieldSpec, raw: Any) -> int:
    number = to_number(raw)
    all_bits = reduce(or_, (int(member) for member in spec.flags), 0)
    if (
        isinstance(number, float)
        or number < 0
        or number & ~all_bits
    ):
        raise InvalidEditError(f"Invalid flag value for {spec.name}: {raw!r}")
    return int(number)


def _current_value(state: WorkflowState, spec: FieldSpec) -> Any:
    record = state.project if spec.target == FieldTarget.PROJECT else state
    return getattr(record, spec.name)


def apply_edit(state: WorkflowState, edit: FieldEdit, registry: FieldRegistry) -> StateUpdate:
    """Interpret ``edit`` against the current state.

    Every update also clears the status message.

    Raises:
        InvalidEditError: Unknown field, toggle on a non-toggle field,
            out-of-range flag or unknown choice.
    """
    spec = registry.get(edit.name)
    if spec is None:
        raise InvalidEditError(f"Unknown field: {edit.name}")

    if spec.kind == FieldKind.BOOLEAN:
        value: Any = edit.checked if edit.kind == EditKind.TOGGLE else bool(edit.value)
    elif spec.kind == FieldKind.BITMASK:
        if edit.kind != EditKind.TOGGLE:
            raise InvalidEditError(f"{spec.name} can only be toggled")
        value = toggle_mask(_current_value(state, spec), _flag_value(spec, edit.value), edit.checked)
    elif edit.kind == EditKind.TOGGLE:
        raise InvalidEditError(f"{spec.name} cannot be toggled")
    elif spec.kind == FieldKind.NUMBER:
        value = to_number(edit.value)
    elif spec.kind == FieldKind.CHOICE:
        try:
            raw = edit.value.value if isinstance(edit.value, Enum) else str(edit.value)
            value = spec.choices(raw)
        except ValueError:
            raise InvalidEditError(f"Invalid value for {spec.name}: {edit.value!r}")
    else:
        value = str(edit.value)

    update = StateUpdate(workflow={"error_message": None})
    if spec.target == FieldTarget.PROJECT:
        update.project[spec.name] = value
    else:
        update.workflow[spec.name] = value
    return update


def apply_update(state: WorkflowState, update: StateUpdate) -> WorkflowState:
    """Return a new state with ``update`` applied."""
    changes = dict(update.workflow)
    if update.project:
        changes["project"] = state.project.model_copy(update=update.project)
    return state.model_copy(update=changes)
