"""Spread marking: ``<N>.png`` <-> ``<N>s.png`` renames in the output directory.

A page only counts as a spread when one of its neighbours (N-1 or N+1) is in
the same request; lonely pages are reported and left alone. Individual rename
failures are logged and skipped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Tuple

from .errors import OutputDirError
from .logging import log, warn

SPREAD_SUFFIX = "s.png"
PAGE_SUFFIX = ".png"


@dataclass
class SpreadSelection:
    kept: List[int] = field(default_factory=list)
    lonely: List[int] = field(default_factory=list)


@dataclass
class RenameResult:
    renamed: List[Tuple[Path, Path]] = field(default_factory=list)
    failed: List[Tuple[Path, Path, str]] = field(default_factory=list)


def select_spreads(pages: Iterable[int]) -> SpreadSelection:
    unique = list(dict.fromkeys(pages))
    present = set(unique)
    selection = SpreadSelection()
    for page in unique:
        if page - 1 in present or page + 1 in present:
            selection.kept.append(page)
        else:
            selection.lonely.append(page)
    return selection


def _rename(source: Path, target: Path, result: RenameResult, event: str) -> None:
    try:
        source.replace(target)
    except OSError as exc:
        warn(
            event,
            "rename_failed",
            f"Failed to rename `{source}` to `{target}`: {exc}",
            source=str(source),
            target=str(target),
        )
        result.failed.append((source, target, str(exc)))
        return
    log(event, status="renamed", source=str(source), target=str(target))
    result.renamed.append((source, target))


def mark_spreads(pages: Iterable[int], output_dir: Path) -> RenameResult:
    selection = select_spreads(pages)
    for page in selection.lonely:
        warn(
            "spreads",
            "no_neighbors",
            f"{page} has no neighbors, will not be marked as a page spread.",
            page=page,
        )

    result = RenameResult()
    for page in selection.kept:
        source = output_dir / f"{page}{PAGE_SUFFIX}"
        target = output_dir / f"{page}{SPREAD_SUFFIX}"
        _rename(source, target, result, "spreads")
    log("spreads", status="completed", renamed=len(result.renamed), failed=len(result.failed))
    return result


def revert_spreads(output_dir: Path) -> RenameResult:
    try:
        entries = sorted(output_dir.iterdir())
    except OSError as exc:
        raise OutputDirError(f"Failed to read the contents of `{output_dir}`: {exc}") from exc

    result = RenameResult()
    for entry in entries:
        if not entry.name.endswith(SPREAD_SUFFIX):
            continue
        prefix = entry.name[: -len(SPREAD_SUFFIX)]
        _rename(entry, output_dir / f"{prefix}{PAGE_SUFFIX}", result, "revert")
    log("revert", status="completed", renamed=len(result.renamed), failed=len(result.failed))
    return result


__all__ = [
    "RenameResult",
    "SpreadSelection",
    "mark_spreads",
    "revert_spreads",
    "select_spreads",
]
