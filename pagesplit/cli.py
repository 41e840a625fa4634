from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

import typer

from . import __version__
from .config import default_config, load_config
from .errors import OutputDirError, PageSplitError, PromptAborted, RasterizerFailedError
from .rasterize import split_pdf
from .spreads import mark_spreads, revert_spreads

app = typer.Typer(
    help="Split a pdf into per-page images and mark page spreads.",
    add_completion=False,
)


def _safe_exit(code: int, msg: str | None = None) -> None:
    if msg:
        typer.echo(msg, err=True)
    raise typer.Exit(code)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"pagesplit {__version__}")
        raise typer.Exit()


def _parse_pages(values: Optional[List[str]]) -> Optional[List[int]]:
    """Flatten ``-s 1,2 -s 31,32`` into ``[1, 2, 31, 32]``."""
    if not values:
        return None
    pages: List[int] = []
    for value in values:
        for token in value.split(","):
            token = token.strip()
            if not token:
                continue
            try:
                page = int(token)
            except ValueError:
                raise typer.BadParameter(f"'{token}' is not a page number")
            if page < 0:
                raise typer.BadParameter(f"page numbers must not be negative, got {page}")
            pages.append(page)
    if not pages:
        raise typer.BadParameter("no page numbers given")
    return pages


def _confirm_overwrite(output_dir: Path) -> None:
    if not output_dir.exists():
        return
    try:
        non_empty = any(output_dir.iterdir())
    except OSError as exc:
        raise OutputDirError(f"Failed to read the contents of `{output_dir}`: {exc}") from exc
    if not non_empty:
        return

    # only an exact y/Y line continues; anything else asks again
    while True:
        typer.echo(f"WARNING: `{output_dir}` not empty, continue? [y/N] ", nl=False)
        line = sys.stdin.readline()
        if not line:
            raise PromptAborted("stdin closed before the overwrite was confirmed")
        if line in ("y\n", "Y\n"):
            return


@app.command()
def main(
    ctx: typer.Context,
    input_file: Optional[Path] = typer.Argument(
        None,
        metavar="path/to/pdf",
        help="Path of pdf to split",
        exists=True,
        dir_okay=False,
        readable=True,
    ),
    output_dir: Optional[Path] = typer.Option(
        None,
        "-o",
        "--output-dir",
        metavar="path/to/output_directory",
        help="Directory to put split images (default: ./output/)",
    ),
    revert: bool = typer.Option(
        False,
        "-r",
        "--revert",
        help="Renames all files in the output directory from `*s.png` => `*.png`",
    ),
    spreads: Optional[List[str]] = typer.Option(
        None,
        "-s",
        "--spreads",
        metavar="page numbers",
        callback=_parse_pages,
        help="Renames files that you want to be spreads from `*.png` => `*s.png`, input as follows: 1,2,31,32",
    ),
    config: Optional[Path] = typer.Option(
        None, "-c", "--config", exists=True, dir_okay=False, readable=True, help="Config YAML path"
    ),
    version: bool = typer.Option(
        False, "-V", "--version", callback=_version_callback, is_eager=True, help="Show version and exit."
    ),
) -> None:
    if input_file is None and not spreads:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)

    try:
        cfg = load_config(config) if config else default_config()
        out_dir = output_dir if output_dir is not None else cfg.output.output_dir

        if revert:
            revert_spreads(out_dir)

        if input_file is not None:
            _confirm_overwrite(out_dir)
            split_pdf(input_file, out_dir, cfg.rasterizer)

        if spreads:
            mark_spreads(spreads, out_dir)
    except RasterizerFailedError as exc:
        typer.echo("ERROR: cpdf failed:", err=True)
        typer.echo(f"cpdf captured stdout: {exc.stdout}", err=True)
        typer.echo(f"cpdf captured stderr: {exc.stderr}", err=True)
        raise typer.Exit(exc.exit_code)
    except PageSplitError as exc:
        _safe_exit(exc.exit_code, f"ERROR: {exc}")


if __name__ == "__main__":  # pragma: no cover
    app()
