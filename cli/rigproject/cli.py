"""Rig project CLI.

Drives the project-creation workflow from a terminal.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer

from cli.rigproject.output import (
    console,
    print_error,
    print_examples,
    print_info,
    print_json,
    print_manifest,
    print_success,
    print_warning,
)
from integrations import CatalogError, LocalExampleCatalog, RigApiClient, RigApiError
from schemas.project import CodeGenerationOption, ProjectDescriptor
from workflow import (
    Config,
    CreateProjectWorkflow,
    FieldEdit,
    InvalidEditError,
    load_config,
)

app = typer.Typer(
    name="rig-project",
    help="Create local projects for extensions",
    no_args_is_help=True,
)


def _setup_logging(config: Config, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.workflow.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _catalog(config: Config, api: RigApiClient, examples_file: Optional[Path]):
    path = examples_file or (Path(config.workflow.examples_file) if config.workflow.examples_file else None)
    if path:
        return LocalExampleCatalog(path)
    return api


@app.command()
def new(
    user_id: str = typer.Option(..., "--user-id", "-u", help="Id of the user owning the extension"),
    folder: Optional[str] = typer.Option(
        None,
        "--folder",
        "-f",
        help="Project folder to create (its parent must exist)",
    ),
    option: CodeGenerationOption = typer.Option(
        CodeGenerationOption.EXAMPLE,
        "--option",
        "-o",
        help="Code to add to the project: none|scaffolding|example",
    ),
    example: Optional[int] = typer.Option(
        None,
        "--example",
        "-e",
        help="Index of the example to start from",
    ),
    client_id: Optional[str] = typer.Option(None, "--client-id", help="Extension client id (default: EXT_CLIENT_ID)"),
    secret: Optional[str] = typer.Option(None, "--secret", help="Extension secret (default: EXT_SECRET)"),
    version: Optional[str] = typer.Option(None, "--version", help="Extension version (default: EXT_VERSION)"),
    examples_file: Optional[Path] = typer.Option(
        None,
        "--examples-file",
        help="Read examples from a YAML file instead of the rig API",
    ),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to rig.toml"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
) -> None:
    """Create a new extension project.

    Examples:
        rig-project new -u 12345 -f ./my-extension
        rig-project new -u 12345 -o none --client-id abc --version 0.0.1
    """
    config = load_config(config_path)
    _setup_logging(config, verbose)

    edits = [
        FieldEdit("code_generation_option", option.value),
    ]
    if folder is not None:
        edits.append(FieldEdit("folder_path", folder))
    if client_id is not None:
        edits.append(FieldEdit("client_id", client_id))
    if secret is not None:
        edits.append(FieldEdit("secret", secret))
    if version is not None:
        edits.append(FieldEdit("version", version))

    descriptor = asyncio.run(_create(config, user_id, edits, example, examples_file, yes))
    print_json(descriptor.model_dump(mode="json", by_alias=True))


async def _create(
    config: Config,
    user_id: str,
    edits: list[FieldEdit],
    example: Optional[int],
    examples_file: Optional[Path],
    yes: bool,
) -> ProjectDescriptor:
    saved: list[ProjectDescriptor] = []

    async with RigApiClient.from_config(config.api) as api:
        workflow = CreateProjectWorkflow.from_config(
            config,
            user_id,
            catalog=_catalog(config, api, examples_file),
            manifests=api,
            materializer=api,
            save_handler=saved.append,
            close_handler=lambda: print_warning("Cancelled"),
        )
        await workflow.start()
        if workflow.state.error_message:
            print_warning(f"Examples unavailable: {workflow.state.error_message}")

        try:
            for edit in edits:
                workflow.apply_edit(edit)

            if workflow.state.code_generation_option == CodeGenerationOption.EXAMPLE:
                print_examples(workflow.state.examples, workflow.state.selected_example_index)
                if example is None and workflow.state.examples and not yes:
                    example = typer.prompt("Example", type=int, default=0)
                if example is not None:
                    workflow.select_example(example)
        except InvalidEditError as e:
            print_error(str(e))
            raise typer.Exit(1)

        with console.status("Fetching extension manifest..."):
            await workflow.fetch_manifest()
        print_manifest(workflow.state)

        problem = workflow.validation_error()
        if problem:
            print_error(problem.message)
            invalid = sorted(workflow.invalid_fields())
            if invalid:
                print_info(f"Check: {', '.join(invalid)}")
            raise typer.Exit(1)

        if not yes and not typer.confirm("Create project?", default=True):
            workflow.cancel()
            raise typer.Exit(0)

        with console.status(workflow.in_progress_message):
            descriptor = await workflow.save()

    if descriptor is None:
        print_error(workflow.state.error_message or "Project was not created")
        raise typer.Exit(1)

    folder = descriptor.folder_path.strip()
    print_success(f"Project ready in {folder}" if folder else "Project ready")
    return saved[0]


@app.command()
def examples(
    examples_file: Optional[Path] = typer.Option(
        None,
        "--examples-file",
        help="Read examples from a YAML file instead of the rig API",
    ),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to rig.toml"),
) -> None:
    """List the examples new projects can start from."""
    config = load_config(config_path)
    _setup_logging(config, verbose=False)

    async def fetch():
        async with RigApiClient.from_config(config.api) as api:
            return await _catalog(config, api, examples_file).fetch_examples()

    try:
        print_examples(asyncio.run(fetch()))
    except (CatalogError, RigApiError) as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("version")
def show_version() -> None:
    """Show rig-project version."""
    from cli.rigproject import __version__

    console.print(f"rig-project v{__version__}")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
