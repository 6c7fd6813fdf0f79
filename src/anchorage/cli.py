"""Command-line interface for Anchorage."""

import sys
import logging

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.panel import Panel

from anchorage.config import TrackerConfig

console = Console()


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    logger = logging.getLogger("anchorage")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


def _anchor_table(tracker, title: str) -> Table:
    """Tabulate live results and diagnostics."""
    table = Table(title=title)
    table.add_column("Kind", style="cyan")
    table.add_column("Path")
    table.add_column("Range", style="green")
    table.add_column("Text")
    table.add_column("Content")

    for anchor in tracker.results:
        table.add_row(
            "result",
            tracker.source.document_path(anchor.document),
            repr(anchor.range),
            repr(anchor.text),
            anchor.content.payload.describe(),
        )
    for anchor in tracker.diagnostics:
        table.add_row(
            "[red]error[/red]",
            tracker.source.document_path(anchor.document),
            f"line {anchor.range.start.line + 1}",
            repr(anchor.text),
            anchor.content.hover,
        )
    return table


@click.group()
@click.version_option(version="0.1.0")
def main() -> None:
    """Anchorage - inline annotations that follow document edits."""
    pass


@main.command()
@click.argument("script", type=click.Path(exists=True, dir_okay=False))
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="JSON tracker config")
@click.option("--trace", is_flag=True, help="Show anchors after every step")
@click.option("-v", "--verbose", is_flag=True, help="Log tracker decisions")
def replay(script: str, config_path: str | None, trace: bool, verbose: bool) -> None:
    """Replay a JSON edit script and show the surviving anchors."""
    from anchorage import Tracker
    from anchorage.host.memory import MemoryEditor
    from anchorage.script import ReplayScript, describe_step

    _configure_logging(verbose)

    try:
        config = TrackerConfig.load(config_path) if config_path else TrackerConfig()
        replay_script = ReplayScript.load(script)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    editor = MemoryEditor()
    replay_script.setup(editor)

    def show_step(index: int, step) -> None:
        console.print(_anchor_table(tracker, f"Step {index + 1}: {describe_step(step)}"))

    with Tracker(editor, editor, config) as tracker:
        try:
            replay_script.run(tracker, editor, on_step=show_step if trace else None)
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            sys.exit(1)

        if not trace:
            console.print(_anchor_table(tracker, "Anchors"))
        console.print(
            f"\n{len(tracker.results)} result(s), {len(tracker.diagnostics)} diagnostic(s)"
        )


@main.command("check-config")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def check_config(path: str) -> None:
    """Validate a tracker config file."""
    try:
        config = TrackerConfig.load(path)
    except ValueError as e:
        console.print(f"[red]Invalid config: {e}[/red]")
        sys.exit(1)

    table = Table(show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for key, value in config.to_dict().items():
        table.add_row(key, repr(value))

    console.print(Panel.fit(f"[bold]{path}[/bold]", title="Tracker Config"))
    console.print(table)


if __name__ == "__main__":
    main()
