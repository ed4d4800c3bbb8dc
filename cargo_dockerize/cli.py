"""Thin CLI wrapper for cargo_dockerize.

This module provides the command-line interface using Typer.
All business logic is delegated to core modules.

Installed as `cargo-dockerize`, so Cargo runs it for `cargo dockerize ...`
and passes `dockerize` as the first argument.
"""

import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from cargo_dockerize import __version__
from cargo_dockerize.config import get_settings, print_settings_json

app = typer.Typer(
    name="cargo-dockerize",
    help="Cargo Dockerize - build a Cargo project into a labelled container image",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def configure_logging(level: str) -> None:
    """Attach a Rich stderr handler to the package logger once."""
    package_logger = logging.getLogger("cargo_dockerize")
    package_logger.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(
            RichHandler(console=err_console, show_path=False, markup=False)
        )


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"cargo-dockerize version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Cargo Dockerize - build a Cargo project into a labelled container image."""
    configure_logging(get_settings().log_level)


@app.command()
def config(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show effective configuration."""
    settings = get_settings()
    if json_output:
        typer.echo(print_settings_json(settings))
    else:
        console.print("[bold]Effective Configuration:[/bold]")
        console.print()
        console.print("[bold]Project:[/bold]")
        console.print(f"  Manifest file:       {settings.manifest_name}")
        console.print()
        console.print("[bold]Tools:[/bold]")
        console.print(f"  Build tool:          {settings.build_tool}")
        console.print(f"  Build arguments:     {' '.join(settings.build_args)}")
        console.print(f"  Container engine:    {settings.container_engine}")
        console.print(f"  VCS tool:            {settings.vcs_tool}")
        console.print()
        console.print("[bold]Operational:[/bold]")
        console.print(f"  Log level:           {settings.log_level}")


@app.command()
def dockerize(
    export: Annotated[
        bool,
        typer.Option("--export", "-e", help="Export the Docker image as a TGZ archive"),
    ] = False,
    name: Annotated[
        str | None,
        typer.Option(
            "--name", "-n", help="Name of the Docker image (defaults to the package name)"
        ),
    ] = None,
    tag: Annotated[
        str | None,
        typer.Option(
            "--tag",
            "-t",
            help="Version tag of the Docker image (defaults to the package version)",
        ),
    ] = None,
    dockerfile: Annotated[
        str,
        typer.Option("--dockerfile", help="Path to the Dockerfile"),
    ] = "Dockerfile",
    tags: Annotated[
        str | None,
        typer.Option("--tags", help="Additional tags, comma-separated"),
    ] = None,
    application_name: Annotated[
        str | None,
        typer.Option("--application-name", help="Application name label"),
    ] = None,
    title: Annotated[
        str | None,
        typer.Option("--title", help="Image title label (defaults to the image name)"),
    ] = None,
    description: Annotated[
        str | None,
        typer.Option("--description", help="Image description label"),
    ] = None,
    authors: Annotated[
        str | None,
        typer.Option("--authors", help="Image authors label"),
    ] = None,
    url: Annotated[
        str | None,
        typer.Option("--url", help="Image URL label"),
    ] = None,
    source: Annotated[
        str | None,
        typer.Option("--source", help="Source repository URL label"),
    ] = None,
    vendor: Annotated[
        str | None,
        typer.Option("--vendor", help="Image vendor label"),
    ] = None,
    licenses: Annotated[
        str | None,
        typer.Option("--licenses", help="SPDX license expression label"),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Print the commands without running them"),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output the run summary as JSON"),
    ] = False,
) -> None:
    """Build the project, build a Docker image, and optionally export it.

    The image is tagged NAME:TAG plus NAME:<extra> for every entry in --tags,
    and stamped with org.opencontainers.image.* provenance labels.
    """
    from cargo_dockerize.builds.pipeline import Pipeline
    from cargo_dockerize.errors import DockerizeError
    from cargo_dockerize.types import DockerizeOptions, split_tags

    options = DockerizeOptions(
        export=export,
        name=name,
        tag=tag,
        dockerfile=dockerfile,
        extra_tags=split_tags(tags),
        application_name=application_name,
        title=title,
        description=description,
        authors=authors,
        url=url,
        source=source,
        vendor=vendor,
        licenses=licenses,
        dry_run=dry_run,
    )

    def progress(message: str) -> None:
        if not json_output:
            console.print(escape(message))

    pipeline = Pipeline(options, settings=get_settings(), progress=progress)
    try:
        result = pipeline.run()
    except DockerizeError as e:
        console.print(f"[red]Error ({e.code}): {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from None

    if json_output:
        typer.echo(result.model_dump_json(indent=2))
    elif dry_run:
        console.print("[yellow]Dry run: no commands were executed[/yellow]")


if __name__ == "__main__":
    app()
