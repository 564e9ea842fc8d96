"""SceneCut CLI entry point.

Wires scene-file loading, planning, ffmpeg extraction and tagging behind a
single ``scenecut`` command. Typed pipeline errors are shown as Rich panels
rather than tracebacks.
"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from scenecut.config import RunConfig
from scenecut.conform.transcode import FfmpegTranscoder
from scenecut.errors import ArgumentError, SceneCutError
from scenecut.metadata.writer import FfmpegMetadataWriter
from scenecut.models import GeneratedName, Scene
from scenecut.pipeline import ensure_destination, preview_pattern, process_pattern

SYNTAX = """\
Syntax: scenecut <filename> <destination folder> [options]
   Filenames should be .mp4 or .avi. Each file needs an accompanying
   '<name> scenes.csv' containing segments. Filenames may contain wildcards.

Options:
  -t   Tolerate dates out of order.
  -n   Dry run: show the planned scenes without writing anything.
  -v   Verbose logging.
"""

app = typer.Typer(
    name="scenecut",
    help="SceneCut: cut a long recording into dated, named scene clips.",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


def _describe_scene(scene: Scene, name: GeneratedName) -> None:
    console.print(f"[bold]{name.path.name}[/bold]")
    console.print(
        f"  start={scene.start} end={scene.end} date={scene.date:%Y-%m-%d} "
        f"ordinal={scene.ordinal} subject=\"{scene.subject}\" title=\"{scene.title}\"",
        markup=False,
        highlight=False,
    )


def _plan_table(source: Path, planned: list[tuple[Scene, GeneratedName]]) -> Table:
    table = Table(title=source.name)
    table.add_column("#", justify="right")
    table.add_column("Start")
    table.add_column("End")
    table.add_column("Output")
    for scene, name in planned:
        table.add_row(str(scene.ordinal), str(scene.start), str(scene.end), name.path.name)
    return table


@app.command(
    context_settings={
        "help_option_names": ["-h", "--help", "-?"],
        "allow_extra_args": True,
        "ignore_unknown_options": True,
    },
)
def main(
    ctx: typer.Context,
    source_pattern: Annotated[
        Optional[str],
        typer.Argument(help="Source video file; may contain wildcards."),
    ] = None,
    destination: Annotated[
        Optional[Path],
        typer.Argument(help="Existing folder for the produced scenes."),
    ] = None,
    tolerate_dates: Annotated[
        bool,
        typer.Option("-t", "--tolerate-dates", help="Tolerate dates out of order."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("-n", "--dry-run", help="Show the planned scenes without writing anything."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Log ffmpeg command lines and progress."),
    ] = False,
) -> None:
    """Produce one dated, tagged clip per Keep segment of each matching video."""
    if ctx.args:
        err = ArgumentError(f"Unexpected command-line argument: {ctx.args[0]}")
        err_console.print(Panel(str(err), title="[red]Input Error[/red]", border_style="red"))
        raise typer.Exit(1)

    if source_pattern is None or destination is None:
        console.print(SYNTAX, markup=False, highlight=False)
        raise typer.Exit(0)

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )

    config = RunConfig(
        destination=destination.expanduser().resolve(),
        tolerate_out_of_order=tolerate_dates,
    )

    try:
        ensure_destination(config)

        if dry_run:
            for source, planned in preview_pattern(source_pattern, config):
                console.print(_plan_table(source, planned))
            return

        produced = process_pattern(
            source_pattern,
            config,
            FfmpegTranscoder(),
            FfmpegMetadataWriter(),
            on_file=lambda source: console.print(f"\n[cyan]Processing:[/cyan] {source}"),
            on_scene=_describe_scene,
        )
        console.print(Panel(
            f"[bold green]Done[/bold green]\n\n"
            f"  Scenes:      {len(produced)}\n"
            f"  Destination: [dim]{config.destination}[/dim]",
            title="[green]SceneCut[/green]",
            border_style="green",
        ))

    except SceneCutError as e:
        err_console.print(Panel(
            str(e),
            title="[red]Pipeline Error[/red]",
            border_style="red",
        ))
        raise typer.Exit(1)
