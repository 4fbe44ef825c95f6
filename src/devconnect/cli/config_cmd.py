"""Config inspection CLI commands: protocols, tags, show."""

from __future__ import annotations

import logging
import sys
from typing import Optional

import typer
import yaml
from rich.console import Console
from rich.table import Table

from devconnect.core.config import build_allow_list, build_protocols, list_profiles, load_config
from devconnect.core.models import AppConfig

console = Console()
err_console = Console(stderr=True)
config_app = typer.Typer(name="config", help="Inspect sanitizer configuration.")


def load_cli_config(ctx: typer.Context, config: Optional[str]) -> AppConfig:
    """Load the command's config and set up logging; exit 1 if it cannot be read.

    ``--log-level`` on the root command wins over the configured level.
    """
    try:
        cfg = load_config(config)
        build_protocols(cfg)  # invalid schemes fail here
    except (OSError, ValueError, yaml.YAMLError) as exc:
        err_console.print(f"[red]Bad config:[/red] {exc}")
        raise typer.Exit(1)

    override = (ctx.obj or {}).get("log_level")
    level = override.upper() if override else cfg.log_level
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    return cfg


@config_app.command("protocols")
def list_protocols(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(None, "-c", "--config", help="YAML config file"),
) -> None:
    """List the URL schemes allowed in attributes and URLs."""
    cfg = load_cli_config(ctx, config)
    protocols = build_protocols(cfg)
    source = "config" if cfg.kses.protocols else "built-in"

    table = Table(title=f"Allowed Protocols ({source})")
    table.add_column("#", style="dim", width=3)
    table.add_column("Scheme", style="cyan")

    for i, scheme in enumerate(sorted(protocols), 1):
        table.add_row(str(i), scheme)

    console.print(table)


@config_app.command("tags")
def list_tags(
    ctx: typer.Context,
    profile: Optional[str] = typer.Option(None, "-p", "--profile", help="Allow-list profile"),
    config: Optional[str] = typer.Option(None, "-c", "--config", help="YAML config file"),
) -> None:
    """Show the tags and attribute validators of a profile."""
    cfg = load_cli_config(ctx, config)
    name = profile or cfg.kses.default_profile
    try:
        allowed = build_allow_list(cfg, name)
    except ValueError as exc:
        err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Profile: {name}")
    table.add_column("Tag", style="cyan")
    table.add_column("Attributes", style="white")

    for tag, attrs in sorted(allowed.to_dict().items()):
        attr_str = ", ".join(f"{a}[dim]:{kind}[/dim]" for a, kind in sorted(attrs.items()))
        table.add_row(tag, attr_str or "[dim]none[/dim]")

    console.print(table)


@config_app.command("show")
def show_config(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(None, "-c", "--config", help="YAML config file"),
) -> None:
    """Summarize the loaded configuration."""
    cfg = load_cli_config(ctx, config)
    protocols = build_protocols(cfg)

    console.print("\n[bold]Sanitizer Configuration[/bold]\n")
    console.print(f"  Default profile: [cyan]{cfg.kses.default_profile}[/cyan]")
    console.print(f"  Log level:       [cyan]{cfg.log_level}[/cyan]")
    console.print(f"  Protocols:       [cyan]{len(protocols)}[/cyan]"
                  f" ({'config' if cfg.kses.protocols else 'built-in'})")

    table = Table(title="Profiles")
    table.add_column("Profile", style="cyan")
    table.add_column("Tags", justify="right")
    table.add_column("Source", style="dim")

    for name in list_profiles(cfg):
        try:
            count = str(len(build_allow_list(cfg, name)))
        except ValueError as exc:
            count = f"[red]invalid: {exc}[/red]"
        source = "config" if name in cfg.kses.profiles else "built-in"
        table.add_row(name, count, source)

    console.print(table)
