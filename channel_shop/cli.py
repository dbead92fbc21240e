"""CLI for the channel shop."""

import json
import time
from pathlib import Path
from typing import Any

import typer
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from channel_shop.channel.reconciler import apply_change_set
from channel_shop.channel.schemas import ShopConfig, SyncResult, dump_change_set
from channel_shop.core.config import get_credentials, get_settings, load_shop_config
from channel_shop.core.exceptions import ConfigurationError
from channel_shop.core.http_session import close_all_sessions
from channel_shop.core.logging_config import setup_logging
from channel_shop.pipeline.shop import YouTubeChannelShop

app = typer.Typer(help="Channel Shop - mirror a YouTube channel into a local store")
console = Console()


def _load_state(state_file: Path | None) -> dict[str, Any]:
    """Read the prior state JSON (identifier -> marker); missing file means empty."""
    if state_file is None or not state_file.exists():
        return {}
    data = json.loads(state_file.read_text(encoding="utf-8") or "{}")
    if not isinstance(data, dict):
        raise ConfigurationError(f"State file {state_file} must contain a JSON object", "state")
    return data


def _config_error(e: ConfigurationError) -> typer.Exit:
    field = f" [{e.field}]" if e.field else ""
    rprint(f"[red]✗ Configuration error{escape(field)}: {escape(str(e))}[/red]")
    return typer.Exit(1)


@app.command()
def credentials():
    """Show the credentials the shop needs and how to obtain them."""
    for name, instructions in YouTubeChannelShop().required_credentials().items():
        rprint(f"\n[bold cyan]{name}[/bold cyan]")
        rprint(escape(instructions))


@app.command()
def validate(
    config_file: Path = typer.Argument(..., help="Shop config file (YAML or JSON)"),
):
    """Validate a config file and show the effective filter policy."""
    try:
        config = load_shop_config(config_file)
    except ConfigurationError as e:
        raise _config_error(e) from e

    _display_config(config)


def _display_config(config: ShopConfig):
    """Display the effective shop options."""
    table = Table(show_header=False, box=None)
    table.add_column("Option", style="cyan", width=20)
    table.add_column("Value", style="white")

    def show(value: Any) -> str:
        return "-" if value is None else escape(str(value))

    table.add_row("Channel ID", config.channel_id)
    table.add_row("Mode", config.mode.value)
    table.add_row(
        "Title pattern", show(config.title_includes.pattern if config.title_includes else None)
    )
    table.add_row("Min duration (s)", show(config.duration_more_than))
    table.add_row("Max duration (s)", show(config.duration_less_than))
    table.add_row("Start date", show(config.start_date.isoformat() if config.start_date else None))
    table.add_row("Drop after", show(config.drop_after))
    table.add_row("No delete", "✓" if config.no_delete else "✗")
    table.add_row("Include header", "✓" if config.include_header else "✗")

    rprint("\n[bold blue]📄 Shop Configuration[/bold blue]\n")
    console.print(table)


def _display_summary(result: SyncResult):
    """Display sync pass summary."""
    rprint("\n[bold blue]📄 Sync Summary[/bold blue]\n")

    summary_table = Table(show_header=False, box=None)
    summary_table.add_column("Field", style="cyan", width=20)
    summary_table.add_column("Value", style="white")

    summary_table.add_row("Channel ID", result.channel_id)
    summary_table.add_row("Mode", result.mode.value)
    summary_table.add_row("Videos listed", str(result.items_listed))
    summary_table.add_row("Videos kept", str(result.items_kept))
    summary_table.add_row("Added", str(result.added))
    summary_table.add_row("Deleted", str(result.deleted))
    summary_table.add_row("Unchanged", str(result.unchanged))

    console.print(summary_table)


@app.command()
def sync(
    config_file: Path = typer.Argument(..., help="Shop config file (YAML or JSON)"),
    state: Path | None = typer.Option(None, help="Prior state JSON (identifier -> marker)"),
    output: Path | None = typer.Option(None, help="Write the change set JSON to this file"),
    write_state: bool = typer.Option(
        False, "--write-state", help="Apply the change set to the state file"
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Show debug logging"),
):
    """
    Run one sync pass and print the change set.

    The prior state is read from --state (empty if missing). With
    --write-state the state file is rewritten after the pass.
    """
    settings = get_settings()

    try:
        setup_logging("DEBUG" if verbose else settings.log_level, settings.log_file)
        config = load_shop_config(config_file)
        prior_state = _load_state(state)
        shop = YouTubeChannelShop(settings=settings)
        shop.init(get_credentials(settings), config)
    except ConfigurationError as e:
        raise _config_error(e) from e
    except json.JSONDecodeError as e:
        rprint(f"[red]✗ Error: invalid state file: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    try:
        change_set = shop.update(None, prior_state)
    finally:
        close_all_sessions()

    if shop.last_result is None:
        rprint("[red]✗ Sync failed; no changes produced (see log)[/red]")
        raise typer.Exit(1)

    _display_summary(shop.last_result)

    payload = dump_change_set(change_set)

    if output:
        output.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        rprint(f"\n[green]✓ Change set saved to: {output}[/green]")
    else:
        rprint("\n[dim]--- Change Set ---[/dim]")
        console.print_json(json.dumps(payload, ensure_ascii=False))

    if write_state:
        if state is None:
            rprint("[yellow]--write-state given without --state; nothing written[/yellow]")
        else:
            new_state = apply_change_set(prior_state, change_set, int(time.time() * 1000))
            state.write_text(json.dumps(new_state, indent=2, sort_keys=True), encoding="utf-8")
            rprint(f"[green]✓ State updated: {state} ({len(new_state)} entries)[/green]")


if __name__ == "__main__":
    app()
