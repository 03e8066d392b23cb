"""Tests for integrations.local_catalog."""

import asyncio

import pytest

from integrations.local_catalog import CatalogError, LocalExampleCatalog


class TestLocalExampleCatalog:
    """YAML example catalog."""

    def test_list_file(self, tmp_path):
        path = tmp_path / "examples.yaml"
        path.write_text(
            "- title: Hello World\n"
            "  frontendFolderName: public\n"
            "  backendCommand: node backend --owner-id {ownerId}\n"
        )

        examples = asyncio.run(LocalExampleCatalog(path).fetch_examples())

        assert examples[0].title == "Hello World"
        assert examples[0].frontend_folder_name == "public"
        assert examples[0].backend_command == "node backend --owner-id {ownerId}"

    def test_mapping_file(self, tmp_path):
        path = tmp_path / "examples.yaml"
        path.write_text("examples:\n  - title: A\n  - title: B\n")

        assert [e.title for e in LocalExampleCatalog(path).load()] == ["A", "B"]

    def test_empty_file(self, tmp_path):
        path = tmp_path / "examples.yaml"
        path.write_text("")

        assert LocalExampleCatalog(path).load() == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError):
            LocalExampleCatalog(tmp_path / "nope.yaml").load()

    def test_invalid_example(self, tmp_path):
        path = tmp_path / "examples.yaml"
        path.write_text("- description: no title\n")

        with pytest.raises(CatalogError):
            LocalExampleCatalog(path).load()
