"""
tagsweep CLI

    tagsweep                          scan ./ with the default keywords
    tagsweep --path src               scan another directory
    tagsweep --config tagsweep.yaml   replace keywords/exclusions from a file
    tagsweep --indent                 aligned, table-style output
    tagsweep --json                   machine-readable output
"""

from __future__ import annotations

import typer
from loguru import logger
from rich.console import Console
from rich.text import Text

from tagsweep.config_loader import load_config
from tagsweep.errors import TagSweepError
from tagsweep.logging_setup import configure_logging
from tagsweep.sweep import Sweep

err_console = Console(stderr=True, highlight=False, soft_wrap=True)

app = typer.Typer(
    help="Inventory TODO / FIXME / BUG style annotations across a source tree.",
    add_completion=False,
    rich_markup_mode="rich",
    epilog="""\
[bold]Config file[/bold] (JSON or YAML) replaces the defaults entirely:

  keywords: [{text: TODO, color: yellow, priority: 1}]

  excluded: ["*.min.js", "./vendor/*"]

[dim]Exclusion globs match the walked path as-is, root prefix included.[/dim]""",
)


@app.command()
def main(
    path: str | None = typer.Option(
        None, "--path", help="Directory to scan (default: the config's path, else ./)",
    ),
    config: str | None = typer.Option(
        None, "--config", help="Config file overriding the default keywords and exclusions",
    ),
    indent: bool = typer.Option(False, "--indent", help="Align the output in columns"),
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored keyword labels"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr"),
) -> None:
    """Scan a directory tree and list every annotation, grouped by keyword."""
    configure_logging(verbose)

    try:
        cfg = load_config(config, path=path)
        sweep = Sweep(
            cfg,
            aligned=indent,
            color=False if no_color else None,
            as_json=json_output,
        )
        sweep.start()
    except (TagSweepError, OSError) as e:
        logger.debug(f"[CLI] Fatal: {e!r}")
        err_console.print(Text.assemble(("error:", "red"), f" {e}"))
        raise typer.Exit(code=1)


def main_entry() -> None:
    """Package entry point for ``tagsweep``."""
    app()
