from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List

from .config import RasterizerConfig
from .errors import (
    InputNotFoundError,
    OutputDirError,
    PageSplitError,
    RasterizerFailedError,
    RasterizerLaunchError,
    RasterizerNotFoundError,
)
from .logging import log

RESOLUTION = 300
OUTPUT_PATTERN = "@N.png"


def locate_cpdf(config: RasterizerConfig) -> Path:
    cpdf_path = config.resolve_cpdf()
    try:
        return cpdf_path.resolve(strict=True)
    except OSError as exc:
        raise RasterizerNotFoundError(f"cpdf not found at `{cpdf_path}`: {exc}") from exc


def build_command(cpdf: Path, input_pdf: Path, output_dir: Path, gs: str = "gs") -> List[str]:
    # cpdf substitutes the page number for @N
    return [
        str(cpdf),
        str(input_pdf),
        "-gs-quiet",
        "-gs",
        gs,
        "-rasterize-res",
        str(RESOLUTION),
        "-output-image",
        str(input_pdf),
        "-o",
        f"{output_dir}/{OUTPUT_PATTERN}",
    ]


def _decode(stream: bytes, name: str) -> str:
    try:
        return stream.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise PageSplitError(f"cpdf {name} is not UTF-8: {exc}") from exc


def split_pdf(input_pdf: Path, output_dir: Path, config: RasterizerConfig) -> None:
    """Rasterize every page of ``input_pdf`` into ``output_dir`` as ``<N>.png``.

    Raises InputNotFoundError before touching cpdf when the PDF is missing and
    RasterizerFailedError (with the captured output) on a non-zero exit.
    """
    if not input_pdf.exists():
        raise InputNotFoundError(f"file `{input_pdf}` doesn't exist.")

    cpdf = locate_cpdf(config)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputDirError(f"Failed to create `{output_dir}`: {exc}") from exc
    cmd = build_command(cpdf, input_pdf, output_dir, gs=config.gs)
    log("rasterize", status="started", input=str(input_pdf), output_dir=str(output_dir))
    try:
        result = subprocess.run(cmd, capture_output=True)
    except OSError as exc:
        raise RasterizerLaunchError(f"cpdf failed: {exc}") from exc

    if result.returncode != 0:
        raise RasterizerFailedError(
            result.returncode,
            _decode(result.stdout, "stdout"),
            _decode(result.stderr, "stderr"),
        )
    log("rasterize", status="completed", input=str(input_pdf), output_dir=str(output_dir))


__all__ = ["build_command", "locate_cpdf", "split_pdf", "RESOLUTION", "OUTPUT_PATTERN"]
