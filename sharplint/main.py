from __future__ import annotations

"""
Typer CLI entry point and orchestration of the analysis pipeline.

Flow for one run:
- Take the .cs path from the command line, or prompt for it
- Read and parse it into a FileContext (sharplint.context)
- Run the enabled rules from config.py through the Engine
- Print diagnostics as "<problem> found on line <n>: <code>"

Acquisition and parse errors are reported on stderr with exit code 1 and
no diagnostics are printed.
"""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from sharplint.config import Config, get_default_config, rule_ids
from sharplint.context import create_context
from sharplint.engine import Engine
from sharplint.errors import AcquisitionError, ParseError
from sharplint.reporting.console import print_report

logger = logging.getLogger(__name__)

app = typer.Typer(help="sharplint - flags discouraged patterns in a C# source file.")

PATH_PROMPT = ".cs File path"


def _configure_logging(level: str) -> None:
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise typer.BadParameter(f"Unknown log level: {level}", param_hint="--log-level")
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _build_config(disable: List[str]) -> Config:
    known = set(rule_ids())
    unknown = sorted(set(disable) - known)
    if unknown:
        raise typer.BadParameter(
            f"Unknown rule id(s): {', '.join(unknown)}. Known: {', '.join(sorted(known))}",
            param_hint="--disable",
        )
    config = get_default_config()
    config.disabled_rules = frozenset(disable)
    return config


@app.command()
def analyze(
    path: Optional[str] = typer.Argument(
        None,
        help="C# file to analyze. Prompted for when omitted.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show remediation hints and a summary after the diagnostics.",
    ),
    disable: List[str] = typer.Option(
        [],
        "--disable",
        help="Rule id to skip (repeatable).",
    ),
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        help="Logging level for messages on stderr.",
    ),
) -> None:
    """
    Analyze a single C# file and print one diagnostic per problem found.

    Uses the rules registered in config.get_default_config().
    """
    _configure_logging(log_level)
    config = _build_config(disable)

    if path is None:
        path = typer.prompt(PATH_PROMPT, default="", show_default=False)
    if not path.strip():
        typer.echo("Invalid filepath")
        raise typer.Exit(code=1)

    try:
        ctx = create_context(Path(path.strip()))
    except (AcquisitionError, ParseError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)

    report = Engine.from_config(config).analyze(ctx.tree)
    print_report(report, console=Console(highlight=False), verbose=verbose)


def main() -> None:
    """Entry point for `python -m sharplint.main` and the `sharplint` script."""
    app()


if __name__ == "__main__":
    main()
