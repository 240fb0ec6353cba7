"""CLI entry point for Canhão Podcast."""

import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from canhao.config.logging import setup_logging
from canhao.config.manager import ConfigManager
from canhao.config.schema import GlobalConfig
from canhao.episodes.manager import EpisodeManager
from canhao.episodes.models import Episode
from canhao.utils.errors import CanhaoError, ConfigError

app = typer.Typer(
    name="canhao",
    help="Keep a list of podcast episodes and back it up as plain text",
    no_args_is_help=True,
)
console = Console()


@dataclass
class CLIState:
    """Per-invocation settings resolved by the callback."""

    config_manager: ConfigManager
    config: GlobalConfig


@app.callback()
def main(
    ctx: typer.Context,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable verbose (DEBUG) logging")
    ] = False,
    log_file: Annotated[
        Path | None, typer.Option("--log-file", help="Write logs to file")
    ] = None,
    data_dir: Annotated[
        Path | None, typer.Option("--data-dir", help="Directory holding the episode store")
    ] = None,
    sync: Annotated[
        bool, typer.Option("--sync", help="Save in the foreground instead of a worker thread")
    ] = False,
) -> None:
    """Canhão Podcast - add, list, delete, export and import episodes."""
    setup_logging(verbose=verbose, log_file=log_file)

    config_manager = ConfigManager()
    try:
        config = config_manager.load_config()
    except ConfigError as e:
        console.print(f"[red]✗[/red] {e}")
        sys.exit(1)

    setup_logging(verbose=verbose, log_file=log_file, level=config.log_level)

    overrides: dict[str, object] = {}
    if data_dir is not None:
        overrides["data_dir"] = data_dir
    if sync:
        overrides["background_saves"] = False
    if overrides:
        config = config.model_copy(update=overrides)

    ctx.obj = CLIState(config_manager=config_manager, config=config)


def _open_manager(ctx: typer.Context) -> EpisodeManager:
    state: CLIState = ctx.obj
    return EpisodeManager.from_config(state.config, state.config_manager)


def _render_cell(text: str, fallback: str) -> str:
    if text.strip():
        return escape(text)
    return f"[dim]{fallback}[/dim]"


def _render_episodes(episodes: tuple[Episode, ...]) -> None:
    table = Table(title="[bold]Episodes[/bold]")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title", style="bold")
    table.add_column("Description")

    for episode in episodes:
        table.add_row(
            str(episode.id),
            _render_cell(episode.title, episode.display_title),
            _render_cell(episode.description, episode.display_description),
        )

    console.print(table)
    console.print(f"\n[dim]Total: {len(episodes)} episode(s)[/dim]")


@app.command("version")
def show_version() -> None:
    """Show version information."""
    from canhao import __version__

    console.print(f"[bold cyan]Canhão Podcast[/bold cyan] v{__version__}")


@app.command("list")
def list_episodes(
    ctx: typer.Context,
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """List all episodes in the order they were added."""
    try:
        with _open_manager(ctx) as manager:
            episodes = manager.episodes

        if json_output:
            result = {
                "episodes": [ep.model_dump() for ep in episodes],
                "total": len(episodes),
            }
            print(json.dumps(result, indent=2, ensure_ascii=False))
            return

        if not episodes:
            console.print("[yellow]No episodes yet.[/yellow]")
            console.print(
                '\nAdd one: [cyan]canhao add "<title>" "<description>"[/cyan]'
            )
            return

        _render_episodes(episodes)

    except CanhaoError as e:
        console.print(f"[red]✗[/red] Error: {e}")
        sys.exit(1)


@app.command("add")
def add_episode(
    ctx: typer.Context,
    title: Annotated[str, typer.Argument(help="Episode title")],
    description: Annotated[str, typer.Argument(help="Episode description")] = "",
) -> None:
    """Add a new episode.

    Examples:
        canhao add "Episode 1" "Pilot with the whole crew"

        canhao add "Bonus episode"
    """
    title = title.strip()
    description = description.strip()
    if not title and not description:
        console.print("[red]✗[/red] Title and description cannot both be empty")
        sys.exit(1)

    try:
        with _open_manager(ctx) as manager:
            episode = manager.add(title, description)

        console.print(
            f"[green]✓[/green] Added episode [bold]{escape(episode.display_title)}[/bold] "
            f"[dim](id {episode.id})[/dim]"
        )

    except CanhaoError as e:
        console.print(f"[red]✗[/red] Error: {e}")
        sys.exit(1)


@app.command("delete")
def delete_episode(
    ctx: typer.Context,
    episode_id: Annotated[int, typer.Argument(help="ID of the episode to delete")],
) -> None:
    """Delete an episode by ID.

    Examples:
        canhao delete 1731000000000
    """
    try:
        with _open_manager(ctx) as manager:
            episode = manager.store.get(episode_id)
            removed = manager.delete(episode_id)

        if not removed or episode is None:
            console.print(f"[red]✗[/red] No episode with id [bold]{episode_id}[/bold]")
            console.print("  Use [cyan]canhao list[/cyan] to see episode ids.")
            sys.exit(1)

        console.print(
            f"[green]✓[/green] Deleted episode [bold]{escape(episode.display_title)}[/bold]"
        )

    except CanhaoError as e:
        console.print(f"[red]✗[/red] Error: {e}")
        sys.exit(1)


@app.command("export")
def export_episodes(
    ctx: typer.Context,
    path: Annotated[
        Path | None,
        typer.Argument(help="Destination file (default: canhao_podcast_backup.txt)"),
    ] = None,
) -> None:
    """Export all episodes to a plain text backup.

    IDs are not exported; importing the file assigns new ones.

    Examples:
        canhao export

        canhao export ~/backups/episodes.txt
    """
    state: CLIState = ctx.obj
    destination = path or Path(state.config.export_filename)

    try:
        with _open_manager(ctx) as manager:
            count = manager.export(destination)

        console.print(
            f"[green]✓[/green] Exported {count} episode(s) to [bold]{escape(str(destination))}[/bold]"
        )

    except CanhaoError as e:
        console.print(f"[red]✗[/red] Error: {e}")
        sys.exit(1)


@app.command("import")
def import_episodes(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="Backup file created by export")],
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Skip confirmation prompt")
    ] = False,
) -> None:
    """Replace the episode list with the contents of a backup file.

    Examples:
        canhao import canhao_podcast_backup.txt

        canhao import backup.txt --force  # Skip confirmation
    """
    try:
        with _open_manager(ctx) as manager:
            imported = manager.read_backup(path)
            if not imported:
                console.print("[yellow]Nothing imported; list unchanged.[/yellow]")
                console.print(f"[dim]  No episodes could be read from {escape(str(path))}[/dim]")
                sys.exit(1)

            current = len(manager.episodes)
            if current and not force:
                confirm: bool = typer.confirm(
                    f"Replace the current {current} episode(s) with {len(imported)} from {path}?"
                )
                if not confirm:
                    console.print("[yellow]Cancelled[/yellow]")
                    return

            manager.apply_import(imported)

        console.print(
            f"[green]✓[/green] Imported {len(imported)} episode(s) from "
            f"[bold]{escape(str(path))}[/bold]"
        )

    except CanhaoError as e:
        console.print(f"[red]✗[/red] Error: {e}")
        sys.exit(1)


@app.command("config")
def config_command(
    ctx: typer.Context,
    action: Annotated[str, typer.Argument(help="Action: show or set <key> <value>")],
    key: Annotated[str | None, typer.Argument(help="Config key (for 'set' action)")] = None,
    value: Annotated[str | None, typer.Argument(help="Config value (for 'set' action)")] = None,
) -> None:
    """Manage Canhão Podcast configuration.

    Actions:
        show: Display current configuration
        set:  Set a configuration value

    Examples:
        canhao config show

        canhao config set strict_ids false
    """
    state: CLIState = ctx.obj
    manager = state.config_manager

    try:
        if action == "show":
            config = manager.load_config()

            console.print("\n[bold]Canhão Podcast Configuration[/bold]\n")

            table = Table(show_header=False, box=None)
            table.add_column("Key", style="cyan")
            table.add_column("Value", style="white")

            table.add_row("Config file", str(manager.config_file))
            table.add_row("Episode store", str(manager.resolve_store_file(config)))
            table.add_row("", "")
            table.add_row("Export filename", config.export_filename)
            table.add_row("Log level", config.log_level)
            table.add_row("Strict ids", "✓" if config.strict_ids else "✗")
            table.add_row("Background saves", "✓" if config.background_saves else "✗")

            console.print(table)

        elif action == "set":
            if not key or value is None:
                console.print("[red]✗[/red] Usage: canhao config set <key> <value>")
                sys.exit(1)

            try:
                manager.set_value(key, value)
            except ConfigError as e:
                console.print(f"[red]✗[/red] {e}")
                console.print("\nAvailable keys:")
                for field_name in GlobalConfig.model_fields.keys():
                    console.print(f"  • {field_name}")
                sys.exit(1)

            console.print(
                f"[green]✓[/green] Set [cyan]{key}[/cyan] = [yellow]{escape(value)}[/yellow]"
            )

        else:
            console.print(f"[red]✗[/red] Unknown action: {action}")
            console.print("Valid actions: show, set")
            sys.exit(1)

    except CanhaoError as e:
        console.print(f"[red]✗[/red] Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    app()
