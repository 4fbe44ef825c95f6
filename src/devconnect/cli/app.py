"""Root CLI application: sanitize, clean-url and escape commands."""

from __future__ import annotations

import sys
from enum import Enum
from pathlib import Path
from typing import Optional

import typer

from devconnect.cli.config_cmd import config_app, err_console, load_cli_config
from devconnect.core.config import build_policy, build_protocols
from devconnect.kses.entities import encode_entities
from devconnect.kses.protocols import clean_url
from devconnect.utils.escaping import esc_attr, esc_html, esc_js, esc_textarea, esc_url, esc_xml

app = typer.Typer(
    name="devconnect",
    help="DevConnect HTML sanitization tools.",
    no_args_is_help=True,
)

# Register sub-command groups
app.add_typer(config_app)


class EscapeContext(str, Enum):
    HTML = "html"
    ATTR = "attr"
    TEXTAREA = "textarea"
    XML = "xml"
    JS = "js"
    URL = "url"
    ENTITIES = "entities"


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override the configured log level"),
) -> None:
    """DevConnect HTML sanitization tools."""
    ctx.obj = {"log_level": log_level}


@app.command()
def sanitize(
    ctx: typer.Context,
    path: Optional[Path] = typer.Argument(None, help="HTML file to sanitize (stdin when omitted or '-')"),
    profile: Optional[str] = typer.Option(None, "-p", "--profile", help="Allow-list profile"),
    config: Optional[str] = typer.Option(None, "-c", "--config", help="YAML config file"),
) -> None:
    """Sanitize HTML against an allow-list profile and print the result."""
    cfg = load_cli_config(ctx, config)
    try:
        policy = build_policy(cfg, profile)
    except ValueError as exc:
        err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    if path is None or str(path) == "-":
        raw = sys.stdin.read()
    else:
        if not path.exists():
            err_console.print(f"[red]File not found:[/red] {path}")
            raise typer.Exit(1)
        raw = path.read_text(encoding="utf-8")

    # plain write so rich markup never touches the sanitized HTML
    sys.stdout.write(policy.sanitize(raw))


@app.command("clean-url")
def clean_url_cmd(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="URL to check"),
    config: Optional[str] = typer.Option(None, "-c", "--config", help="YAML config file"),
) -> None:
    """Print the cleaned URL, or exit 1 if its scheme is not allowed."""
    protocols = build_protocols(load_cli_config(ctx, config))
    cleaned = clean_url(url, protocols)
    if not cleaned:
        err_console.print(f"[red]Rejected:[/red] {url}")
        raise typer.Exit(1)
    sys.stdout.write(cleaned + "\n")


@app.command()
def escape(
    text: str = typer.Argument(..., help="Text to escape"),
    context: EscapeContext = typer.Option(EscapeContext.HTML, "--context", help="Output context"),
) -> None:
    """Escape text for an output context."""
    escapers = {
        EscapeContext.HTML: esc_html,
        EscapeContext.ATTR: esc_attr,
        EscapeContext.TEXTAREA: esc_textarea,
        EscapeContext.XML: esc_xml,
        EscapeContext.JS: esc_js,
        EscapeContext.URL: esc_url,
        EscapeContext.ENTITIES: encode_entities,
    }
    sys.stdout.write(escapers[context](text) + "\n")
