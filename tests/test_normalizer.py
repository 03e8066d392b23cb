"""Tests for workflow.normalizer."""

import math

import pytest

from schemas.project import CodeGenerationOption, ExtensionTypes, ScaffoldingOptions
from schemas.workflow_state import WorkflowState
from workflow.fields import FieldKind, FieldRegistry, FieldSpec, FieldTarget
from workflow.normalizer import (
    EditKind,
    FieldEdit,
    InvalidEditError,
    apply_edit,
    apply_update,
    to_number,
    toggle_mask,
)


def edit(state, field_edit, registry=None):
    registry = registry or FieldRegistry()
    return apply_update(state, apply_edit(state, field_edit, registry))


def toggle(name, flag, checked):
    return FieldEdit(name, flag, kind=EditKind.TOGGLE, checked=checked)


class TestToNumber:
    """Tests for numeric conversion."""

    def test_integer_text(self):
        assert to_number("3") == 3

    def test_float_text(self):
        assert to_number(" 2.5 ") == 2.5

    def test_empty_text_is_zero(self):
        assert to_number("") == 0

    def test_invalid_text_is_nan(self):
        assert math.isnan(to_number("abc"))

    def test_numbers_pass_through(self):
        assert to_number(7) == 7


class TestStringFields:
    """Tests for string and project-routed fields."""

    def test_project_field_goes_to_project(self):
        state = edit(WorkflowState(), FieldEdit("folder_path", "  my-ext "))

        assert state.project.folder_path == "  my-ext "

    def test_secret_goes_to_project(self):
        state = edit(WorkflowState(), FieldEdit("secret", "s3cr3t"))

        assert state.project.secret == "s3cr3t"

    def test_workflow_field_stays_top_level(self):
        state = edit(WorkflowState(), FieldEdit("client_id", "abc"))

        assert state.client_id == "abc"
        assert state.project.folder_path == ""

    def test_edit_clears_error_message(self):
        state = WorkflowState(error_message="Something failed")

        state = edit(state, FieldEdit("version", "0.0.1"))

        assert state.error_message is None

    def test_original_state_untouched(self):
        state = WorkflowState()

        edit(state, FieldEdit("folder_path", "x"))

        assert state.project.folder_path == ""

    def test_unknown_field_rejected(self):
        with pytest.raises(InvalidEditError):
            edit(WorkflowState(), FieldEdit("nope", "x"))


class TestChoiceAndNumberFields:
    """Tests for code generation option and example index."""

    def test_code_generation_option(self):
        state = edit(WorkflowState(), FieldEdit("code_generation_option", "none"))

        assert state.code_generation_option == CodeGenerationOption.NONE

    def test_invalid_option_rejected(self):
        with pytest.raises(InvalidEditError):
            edit(WorkflowState(), FieldEdit("code_generation_option", "everything"))

    def test_example_index_converted(self):
        state = edit(WorkflowState(), FieldEdit("selected_example_index", "1"))

        assert state.selected_example_index == 1

    def test_example_index_invalid_text_does_not_crash(self):
        state = edit(WorkflowState(), FieldEdit("selected_example_index", "first"))

        assert math.isnan(state.selected_example_index)
        assert state.selected_example() is None


class TestBitmaskFields:
    """Tests for toggle edits on bitmask fields."""

    def test_toggle_mask(self):
        assert toggle_mask(1, 4, True) == 5
        assert toggle_mask(5, 4, False) == 1

    def test_enable_twice_is_idempotent(self):
        state = WorkflowState()
        flag = int(ScaffoldingOptions.STORE_CONFIGURATION)

        once = edit(state, toggle("scaffolding_options", flag, True))
        twice = edit(once, toggle("scaffolding_options", flag, True))

        assert once.scaffolding_options == 1
        assert twice.scaffolding_options == 1

    def test_disable_unset_flag_is_noop(self):
        state = WorkflowState(extension_types=int(ExtensionTypes.PANEL | ExtensionTypes.MOBILE))

        state = edit(state, toggle("extension_types", "2", False))

        assert state.extension_types == 9

    def test_enable_then_disable_restores_mask(self):
        for original in range(16):
            state = WorkflowState(extension_types=original)
            flag = int(ExtensionTypes.OVERLAY)

            state = edit(state, toggle("extension_types", flag, True))
            state = edit(state, toggle("extension_types", flag, False))

            assert state.extension_types == original & ~flag

    def test_union_of_flags(self):
        state = edit(WorkflowState(), toggle("extension_types", ExtensionTypes.COMPONENT, True))
        state = edit(state, toggle("extension_types", ExtensionTypes.OVERLAY, True))

        assert state.extension_types == 1 | 2 | 4

    def test_out_of_range_flag_rejected(self):
        with pytest.raises(InvalidEditError):
            edit(WorkflowState(), toggle("extension_types", 16, True))

    def test_negative_flag_rejected(self):
        with pytest.raises(InvalidEditError):
            edit(WorkflowState(), toggle("scaffolding_options", -1, True))

    def test_text_edit_on_bitmask_rejected(self):
        with pytest.raises(InvalidEditError):
            edit(WorkflowState(), FieldEdit("extension_types", "3"))

    def test_toggle_on_string_field_rejected(self):
        with pytest.raises(InvalidEditError):
            edit(WorkflowState(), toggle("client_id", 1, True))

    def test_toggle_clears_error_message(self):
        state = WorkflowState(error_message="old")

        state = edit(state, toggle("extension_types", 2, True))

        assert state.error_message is None


class TestBooleanFields:
    """Boolean fields replace their value directly."""

    def test_boolean_toggle(self):
        registry = FieldRegistry(
            [FieldSpec("use_https", FieldKind.BOOLEAN, FieldTarget.PROJECT)]
        )
        update = apply_edit(
            WorkflowState(),
            FieldEdit("use_https", kind=EditKind.TOGGLE, checked=True),
            registry,
        )

        assert update.project["use_https"] is True
        assert update.workflow["error_message"] is None


class TestFieldRegistry:
    """Tests for workflow.fields."""

    def test_default_fields(self):
        registry = FieldRegistry()

        assert "folder_path" in registry
        assert registry.get("extension_types").kind == FieldKind.BITMASK
        assert set(registry.names(FieldTarget.PROJECT)) == {"folder_path", "secret"}

    def test_bitmask_needs_flags(self):
        with pytest.raises(ValueError):
            FieldRegistry([FieldSpec("mask", FieldKind.BITMASK)])
