"""Project-creation workflow controller.

Owns the workflow state and sequences everything that happens between the
user opening the dialog and the finished project being handed over:

- Examples are fetched once on start
- Field edits are normalized into state updates
- The extension manifest is fetched on request
- Save validates, materializes the project and emits a ProjectDescriptor

All methods run on a single event loop; the only guards needed are the
lifecycle flag (for continuations after teardown) and the save status
(for overlapping save requests).
"""

import logging
import math

from schemas.project import (
    CodeGenerationOption,
    Example,
    ExtensionManifest,
    ProjectDescriptor,
    RigProject,
)
from schemas.workflow_state import (
    ErrorKind,
    Lifecycle,
    SaveStatus,
    WorkflowError,
    WorkflowState,
)
from workflow.config import Config
from workflow.fields import FieldRegistry
from workflow.normalizer import FieldEdit, InvalidEditError, StateUpdate, apply_edit, apply_update
from workflow.services import (
    CloseHandler,
    ExampleCatalog,
    ManifestService,
    ProjectMaterializer,
    SaveHandler,
)
from workflow.templates import resolve_backend_command
from workflow.validator import can_save, invalid_fields, validate

logger = logging.getLogger(__name__)

IN_PROGRESS_MESSAGE = "Creating your project..."


class WorkflowClosedError(Exception):
    """Raised when a disposed workflow is edited."""

    pass


class ProjectCreationError(Exception):
    """Raised when the project descriptor cannot be assembled."""

    pass


def _error_text(error: BaseException) -> str:
    return str(error) or error.__class__.__name__


class CreateProjectWorkflow:
    """Guided workflow that creates a local project for an extension.

    Usage:
        workflow = CreateProjectWorkflow(user_id, catalog, manifests, api, on_save)
        await workflow.start()
        workflow.apply_edit(FieldEdit("folder_path", "my-ext"))
        await workflow.fetch_manifest()
        await workflow.save()
    """

    def __init__(
        self,
        user_id: str,
        catalog: ExampleCatalog,
        manifests: ManifestService,
        materializer: ProjectMaterializer,
        save_handler: SaveHandler,
        close_handler: CloseHandler | None = None,
        state: WorkflowState | None = None,
        registry: FieldRegistry | None = None,
        in_progress_message: str = IN_PROGRESS_MESSAGE,
    ) -> None:
        """Initialize the workflow.

        Args:
            user_id: Id of the acting user, used as ``{ownerId}``
            catalog: Example catalog service
            manifests: Manifest service
            materializer: Service that creates the project on disk
            save_handler: Receives the descriptor after a successful save
            close_handler: Called on cancel; None makes the workflow non-cancelable
            state: Initial state (defaults to WorkflowState())
            registry: Editable fields (defaults to the standard registry)
            in_progress_message: Status shown while saving
        """
        self.user_id = user_id
        self.catalog = catalog
        self.manifests = manifests
        self.materializer = materializer
        self.save_handler = save_handler
        self.close_handler = close_handler
        self.registry = registry or FieldRegistry()
        self.in_progress_message = in_progress_message

        self.state = state or WorkflowState()
        self.lifecycle = Lifecycle.ACTIVE
        self.save_status = SaveStatus.IDLE
        self._started = False

    @classmethod
    def from_config(
        cls,
        config: Config,
        user_id: str,
        catalog: ExampleCatalog,
        manifests: ManifestService,
        materializer: ProjectMaterializer,
        save_handler: SaveHandler,
        close_handler: CloseHandler | None = None,
    ) -> "CreateProjectWorkflow":
        """Create a workflow seeded with the configured extension defaults."""
        defaults = config.extension
        state = WorkflowState(
            project=RigProject(secret=defaults.secret),
            client_id=defaults.client_id,
            version=defaults.version,
        )
        return cls(
            user_id,
            catalog,
            manifests,
            materializer,
            save_handler,
            close_handler=close_handler,
            state=state,
            in_progress_message=config.workflow.in_progress_message,
        )

    # Lifecycle

    @property
    def is_active(self) -> bool:
        return self.lifecycle == Lifecycle.ACTIVE

    @property
    def can_cancel(self) -> bool:
        return self.close_handler is not None and self.is_active

    async def start(self) -> None:
        """Load the example catalog.

        Runs once. A failed fetch leaves the examples empty and shows the
        error. Results arriving after ``dispose`` are dropped.
        """
        if self._started:
            return
        self._started = True

        try:
            examples = await self.catalog.fetch_examples()
        except Exception as e:
            message = _error_text(e)
            logger.warning(f"Failed to fetch examples: {message}")
            if self.is_active:
                error = WorkflowError(kind=ErrorKind.FETCH, message=message)
                self._apply(StateUpdate(workflow={"error_message": message, "last_error": error}))
            return

        if not self.is_active:
            logger.debug("Workflow disposed before examples arrived, dropping them")
            return
        self._apply(StateUpdate(workflow={"examples": list(examples)}))
        logger.info(f"Loaded {len(examples)} examples")

    def dispose(self) -> None:
        """Tear the workflow down. Pending continuations stop writing state."""
        if self.lifecycle == Lifecycle.DISPOSED:
            return
        self.lifecycle = Lifecycle.DISPOSED
        logger.debug("Workflow disposed")

    def cancel(self) -> bool:
        """Abandon the workflow without producing a descriptor.

        Returns:
            False if the workflow cannot be cancelled
        """
        if not self.can_cancel:
            return False
        self.dispose()
        self.close_handler()
        return True

    # Edits

    def apply_edit(self, edit: FieldEdit) -> WorkflowState:
        """Apply a field-change event and return the new state.

        Raises:
            WorkflowClosedError: The workflow was disposed
            InvalidEditError: The edit does not fit the field
        """
        self._ensure_active()
        return self._apply(apply_edit(self.state, edit, self.registry))

    def select_example(self, index: int) -> WorkflowState:
        """Select the example at ``index``."""
        self._ensure_active()
        if not 0 <= index < len(self.state.examples):
            raise InvalidEditError(f"No example at index {index}")
        return self._apply(StateUpdate(workflow={"selected_example_index": index}))

    # Queries

    def can_save(self) -> bool:
        return self.is_active and self.save_status == SaveStatus.IDLE and can_save(self.state)

    def validation_error(self) -> WorkflowError | None:
        """Why the current state cannot be saved, if it cannot."""
        return validate(self.state)

    def invalid_fields(self) -> set[str]:
        return invalid_fields(self.state)

    # Manifest

    async def fetch_manifest(self) -> None:
        """Fetch the manifest for the entered client id, secret and version.

        On failure the manifest is cleared and the message kept in
        ``state.manifest_error``.
        """
        if not self.is_active:
            return
        client_id = self.state.client_id
        version = self.state.version
        secret = self.state.project.secret

        try:
            result = await self.manifests.fetch_user_extension_manifest(
                self.user_id, secret, client_id, version
            )
            manifest = (
                result
                if isinstance(result, ExtensionManifest)
                else ExtensionManifest.model_validate(result)
            )
        except Exception as e:
            message = _error_text(e)
            logger.warning(f"Failed to fetch manifest for {client_id} {version}: {message}")
            if self.is_active:
                error = WorkflowError(kind=ErrorKind.FETCH, message=message)
                self._apply(
                    StateUpdate(
                        workflow={"manifest_error": error, "last_error": error},
                        project={"manifest": ExtensionManifest()},
                    )
                )
            return

        if not self.is_active:
            return
        # Merged into the current state so edits made during the fetch survive
        self._apply(
            StateUpdate(workflow={"manifest_error": None}, project={"manifest": manifest})
        )
        logger.info(f"Loaded manifest for extension {manifest.id} ({manifest.name})")

    # Save

    async def save(self) -> ProjectDescriptor | None:
        """Create the project and hand the descriptor to the save handler.

        A no-op while another save is in flight, after disposal, or when
        the state cannot be saved. On failure, including a failing save
        handler, the message is shown and the workflow stays usable.

        If the workflow is cancelled while the project is being created,
        the descriptor is dropped and the save handler is not called.

        Returns:
            The emitted descriptor, or None if nothing was saved
        """
        if not self.is_active or self.save_status != SaveStatus.IDLE:
            logger.debug(f"Save ignored (lifecycle={self.lifecycle.value}, status={self.save_status.value})")
            return None
        if not can_save(self.state):
            logger.debug("Save ignored, state is not valid")
            return None

        self.save_status = SaveStatus.SAVING
        self._apply(StateUpdate(workflow={"error_message": self.in_progress_message}))
        state = self.state

        try:
            descriptor = await self._create(state)
            if not self.is_active:
                logger.warning("Workflow closed while the project was being created, descriptor dropped")
                self.save_status = SaveStatus.IDLE
                return None
            self.save_handler(descriptor)
        except Exception as e:
            logger.exception("Project creation failed")
            message = _error_text(e)
            self.save_status = SaveStatus.IDLE
            if self.is_active:
                error = WorkflowError(kind=ErrorKind.SAVE, message=message)
                self._apply(StateUpdate(workflow={"error_message": message, "last_error": error}))
            return None

        self.save_status = SaveStatus.SUCCEEDED
        logger.info(f"Project created for extension {descriptor.manifest.id}")
        self.dispose()
        return descriptor

    async def _create(self, state: WorkflowState) -> ProjectDescriptor:
        option = state.code_generation_option
        example = state.selected_example()
        if option == CodeGenerationOption.EXAMPLE and example is None:
            raise ProjectCreationError("Select an example for the project")

        folder_path = state.project.folder_path.strip()
        if option != CodeGenerationOption.NONE or folder_path:
            await self.materializer.create_project(folder_path, option, _example_index(state))

        return build_descriptor(state, example, self.user_id)

    # Internal

    def _ensure_active(self) -> None:
        if not self.is_active:
            raise WorkflowClosedError("The project workflow is closed")

    def _apply(self, update: StateUpdate) -> WorkflowState:
        self.state = apply_update(self.state, update)
        return self.state


def _example_index(state: WorkflowState) -> int:
    index = state.selected_example_index
    if isinstance(index, float) and not (math.isfinite(index) and index.is_integer()):
        return 0
    return int(index)


def build_descriptor(state: WorkflowState, example: Example | None, owner_id: str) -> ProjectDescriptor:
    """Assemble the descriptor for ``state``.

    Example commands are only carried over in example mode; the backend
    command has its placeholders resolved from the loaded manifest.
    """
    project = state.project
    use_example = state.code_generation_option == CodeGenerationOption.EXAMPLE and example is not None

    backend_command = ""
    if use_example and example.backend_command:
        backend_command = resolve_backend_command(
            example.backend_command,
            project.manifest.id,
            project.secret,
            owner_id,
        )

    return ProjectDescriptor(
        folder_path=project.folder_path,
        manifest=project.manifest,
        secret=project.secret,
        frontend_folder_name=example.frontend_folder_name if use_example else "",
        frontend_command=example.frontend_command if use_example else "",
        backend_command=backend_command,
    )
