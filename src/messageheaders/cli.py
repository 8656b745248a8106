from __future__ import annotations

import sys
from pathlib import Path

import typer
from loguru import logger

from messageheaders.parser import ParseStatus
from messageheaders.settings import settings
from messageheaders.store import HeaderStore

app = typer.Typer(help="Inspect and re-fold internet message header blocks.")


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else settings.log_level)


@app.command()
def inspect(
    path: Path = typer.Argument(..., help="Raw message file (headers first)"),
    line_limit: int = typer.Option(
        0, help="Reject lines longer than this many bytes (0 disables)"
    ),
    verbose: bool = typer.Option(False, "--verbose/--quiet", help="Debug logging"),
) -> None:
    """Parse the header block of PATH and list its headers."""

    _configure_logging(verbose)
    if line_limit < 0:
        raise typer.BadParameter("line_limit cannot be negative")

    store = HeaderStore(line_length_limit=line_limit)
    result = store.parse_raw_message(path.read_bytes())

    for header in store.get_all():
        typer.echo(f"{header.name}: {header.value}")
    typer.echo(f"status: {result.status.value}")
    typer.echo(f"body offset: {result.body_offset}")
    typer.echo(f"valid: {'yes' if store.is_valid() else 'no'}")

    if result.status is not ParseStatus.COMPLETE:
        raise typer.Exit(code=1)


@app.command()
def refold(
    path: Path = typer.Argument(..., help="Raw message file (headers first)"),
    line_limit: int = typer.Option(78, help="Maximum bytes per output line"),
    output: Path | None = typer.Option(None, help="Write here instead of stdout"),
    verbose: bool = typer.Option(False, "--verbose/--quiet", help="Debug logging"),
) -> None:
    """Re-emit the message at PATH with its headers folded to LINE_LIMIT."""

    _configure_logging(verbose)
    if line_limit < 0:
        raise typer.BadParameter("line_limit cannot be negative")

    raw = path.read_bytes()
    store = HeaderStore(line_length_limit=0)
    result = store.parse_raw_message(raw)
    if result.status is not ParseStatus.COMPLETE:
        logger.error(
            "Cannot refold {path}: header block is {status}",
            path=str(path),
            status=result.status.value,
        )
        raise typer.Exit(code=1)

    store.set_line_limit(line_limit)
    rendered = store.generate_raw_headers() + raw[result.body_offset :]

    if output is None:
        typer.echo(rendered, nl=False)
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(rendered)
        logger.info(
            "Wrote {count} headers to {output}", count=len(store), output=str(output)
        )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
