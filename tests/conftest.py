"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add repo root to path (for 'schemas.*', 'workflow.*' and 'integrations.*' imports)
repo_root = Path(__file__).parent.parent
sys.path.insert(0, str(repo_root))

from schemas.project import Example, ExtensionManifest  # noqa: E402
from workflow.controller import CreateProjectWorkflow  # noqa: E402

from fakes import FakeCatalog, FakeManifests, FakeMaterializer  # noqa: E402


@pytest.fixture
def examples():
    """Two examples; the first uses all three placeholders."""
    return [
        Example(
            title="Hello World",
            description="A simple panel extension",
            frontend_folder_name="fe",
            frontend_command="npm start",
            backend_command="node s.js --id={clientId} --secret={secret} --owner={ownerId}",
        ),
        Example(
            title="Frontend only",
            description="No backend",
            frontend_folder_name="public",
            frontend_command="yarn host",
            backend_command="",
        ),
    ]


@pytest.fixture
def manifest():
    return ExtensionManifest(id="cid42", name="My Extension", version="0.0.1")


@pytest.fixture
def make_workflow(examples, manifest):
    """Build a workflow with fake services.

    Returns:
        Factory returning (workflow, saved descriptors list)
    """

    def factory(
        catalog=None,
        manifests=None,
        materializer=None,
        close_handler=None,
        save_handler=None,
        **kwargs,
    ):
        saved = []
        workflow = CreateProjectWorkflow(
            "user1",
            catalog or FakeCatalog(examples),
            manifests or FakeManifests(manifest),
            materializer or FakeMaterializer(),
            save_handler or saved.append,
            close_handler=close_handler,
            **kwargs,
        )
        return workflow, saved

    return factory
