from __future__ import annotations

import typer

from ecsdeploy import __version__
from ecsdeploy.cli.commands.build import build, build_deploy
from ecsdeploy.cli.commands.config_cmd import show_config
from ecsdeploy.cli.commands.deploy import deploy, rollback
from ecsdeploy.cli.commands.list_cmd import list_versions

_EPILOG = (
    "Typical flow: [bold]build[/bold] (image tagged with the commit hash), "
    "[bold]deploy[/bold], [bold]list[/bold] to see versions, "
    "[bold]rollback -t <hash>[/bold] if needed. "
    "Every deploy registers a new task definition revision; "
    "old images stay in ECR for rollback."
)

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="Build, push and deploy versioned container images to Amazon ECS.",
    epilog=_EPILOG,
)


# Commands
app.command()(build)
app.command()(deploy)
app.command()(rollback)
app.command("build-deploy")(build_deploy)
app.command("list")(list_versions)
app.command("config")(show_config)


@app.command("help")
def help_command(ctx: typer.Context) -> None:
    """Show this help."""
    typer.echo(ctx.find_root().get_help())


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    del version


def main() -> None:
    app()
