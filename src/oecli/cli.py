# cli.py
from __future__ import annotations

import sys
import time
from pathlib import Path

import click

from oecli.command import CLIStepExecutor
from oecli.commands import CloudHomeInit, Demo, PwaCreate, WorkflowFile
from oecli.errors import StepFailure, WorkflowLoadError
from oecli.log import LogLevel
from oecli.settings import OUTPUTS, Settings, load_settings
from oecli.ui.console import Console, get_console, set_console


def _execute(ctx: click.Context, command: CLIStepExecutor, label: str) -> None:
    """
    Run a step command and turn its outcome into an exit code.

    Exit codes:
        0    every step completed or was skipped
        1    a step failed, or the workflow could not be loaded
        130  interrupted
    """
    console = get_console()
    settings: Settings = ctx.obj["settings"]
    loud = settings.log_level is not LogLevel.SILENT

    if loud:
        console.print_run_started(label)
    console.print_debug(f"settings: {settings}")

    start_time = time.time()
    try:
        command.execute(settings)
    except StepFailure as e:
        console.print_step_failure(e)
        sys.exit(1)
    except WorkflowLoadError as e:
        console.print_error("Failed to load workflow", str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)

    if loud:
        console.print_run_finished("success", duration=time.time() - start_time)


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.option(
    "--log-level",
    type=click.Choice(LogLevel.choices(), case_sensitive=False),
    default=None,
    help="How much to report about each step [env: OECLI_LOG_LEVEL, default: info]",
)
@click.option(
    "--output",
    type=click.Choice(OUTPUTS, case_sensitive=False),
    default=None,
    help="Render progress bars or plain console lines [env: OECLI_OUTPUT, default: progress]",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=None,
    help="Max steps running at once per batch [env: OECLI_MAX_WORKERS]",
)
@click.version_option(package_name="oecli")
@click.pass_context
def cli(ctx, debug, log_level, output, workers):
    """oecli: resumable, parallel step runner for dev environment chores."""
    console = Console(debug=debug)
    set_console(console)

    try:
        settings = load_settings()
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["settings"] = settings.with_overrides(
        log_level=LogLevel.parse(log_level) if log_level else None,
        output=output.lower() if output else None,
        max_workers=workers,
        debug=debug,
    )


# ----------------------------------------------------------------------
# pwa
# ----------------------------------------------------------------------

@cli.group()
def pwa():
    """Manage progressive web apps."""


@pwa.command("create")
@click.option("--name", required=True, help="Name of the app, becomes the git repository name")
@click.option("--public/--private", default=False, show_default=True, help="Repository visibility")
@click.pass_context
def pwa_create(ctx, name, public):
    """Create a repo from the Yew template, clone it and run npm install."""
    _execute(ctx, PwaCreate(name=name, public=public), f"pwa create {name}")


# ----------------------------------------------------------------------
# cloud-home
# ----------------------------------------------------------------------

@cli.group("cloud-home")
def cloud_home():
    """Manage an OECloud@Home (K3s + flux) installation."""


@cloud_home.command("init")
@click.option("--name", required=True, help="Name of the cloud, becomes the git repository name")
@click.option("--public/--private", default=True, show_default=True, help="Repository visibility")
@click.pass_context
def cloud_home_init(ctx, name, public):
    """Create and clone the cluster repository and set up its tooling."""
    settings: Settings = ctx.obj["settings"]
    command = CloudHomeInit(name=name, public=public, age_key_dir=settings.age_key_dir)
    _execute(ctx, command, f"cloud-home init {name}")


# ----------------------------------------------------------------------
# run / demo
# ----------------------------------------------------------------------

@cli.command()
@click.option(
    "--workflow",
    "workflow_path",
    default="oecli_workflow.py",
    show_default=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Python file defining workflow() -> ExecutorProperties or PLAN",
)
@click.pass_context
def run(ctx, workflow_path):
    """Run the steps defined in a workflow file."""
    _execute(ctx, WorkflowFile(path=workflow_path), f"run {workflow_path}")


@cli.command()
@click.option("--delay-ms", default=1000, show_default=True, type=click.IntRange(min=0), help="Sleep per step")
@click.pass_context
def demo(ctx, delay_ms):
    """Run sleeping demo steps to watch the scheduler."""
    _execute(ctx, Demo(delay_ms=delay_ms), "demo")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
