from pathlib import Path

import pytest

from pagesplit.errors import OutputDirError
from pagesplit.spreads import mark_spreads, revert_spreads, select_spreads


def _pages(output_dir: Path, *names: str) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    for name in names:
        (output_dir / name).write_bytes(b"\x89PNG\r\n\x1a\n")
    return output_dir


def _names(output_dir: Path) -> set[str]:
    return {p.name for p in output_dir.iterdir()}


def test_select_spreads_requires_neighbour():
    selection = select_spreads([1, 2, 15, 31, 32])
    assert selection.kept == [1, 2, 31, 32]
    assert selection.lonely == [15]


def test_select_spreads_collapses_duplicates():
    selection = select_spreads([4, 5, 4, 9, 9])
    assert selection.kept == [4, 5]
    assert selection.lonely == [9]


def test_mark_spreads_renames_pairs_and_warns_on_lonely(tmp_path, capsys):
    output_dir = _pages(tmp_path / "out", "1.png", "2.png", "15.png", "31.png", "32.png")
    result = mark_spreads([1, 2, 31, 32, 15], output_dir)

    assert _names(output_dir) == {"1s.png", "2s.png", "15.png", "31s.png", "32s.png"}
    assert len(result.renamed) == 4
    assert not result.failed
    err = capsys.readouterr().err
    assert "no_neighbors" in err
    assert "15 has no neighbors" in err


def test_mark_spreads_missing_file_is_a_warning(tmp_path, capsys):
    output_dir = _pages(tmp_path / "out", "3.png")
    result = mark_spreads([3, 4], output_dir)

    assert _names(output_dir) == {"3s.png"}
    assert [src.name for src, _, _ in result.failed] == ["4.png"]
    assert "rename_failed" in capsys.readouterr().err


def test_revert_renames_suffixed_pages_only(tmp_path):
    output_dir = _pages(tmp_path / "out", "1s.png", "2s.png", "3.png", "notes.txt")
    result = revert_spreads(output_dir)

    assert _names(output_dir) == {"1.png", "2.png", "3.png", "notes.txt"}
    assert sorted(dst.name for _, dst in result.renamed) == ["1.png", "2.png"]


def test_revert_is_idempotent(tmp_path):
    output_dir = _pages(tmp_path / "out", "7s.png", "8s.png", "9.png")
    revert_spreads(output_dir)
    first = _names(output_dir)
    second = revert_spreads(output_dir)

    assert _names(output_dir) == first
    assert second.renamed == []


def test_mark_then_revert_round_trip(tmp_path):
    output_dir = _pages(tmp_path / "out", "1.png", "2.png")
    mark_spreads([1, 2], output_dir)
    assert _names(output_dir) == {"1s.png", "2s.png"}
    revert_spreads(output_dir)
    assert _names(output_dir) == {"1.png", "2.png"}


def test_revert_unreadable_directory_is_fatal(tmp_path):
    with pytest.raises(OutputDirError):
        revert_spreads(tmp_path / "missing")


def test_revert_rename_failure_is_a_warning(tmp_path, capsys):
    output_dir = _pages(tmp_path / "out", "1s.png", "2s.png")
    blocked = output_dir / "1.png"
    blocked.mkdir()
    (blocked / "keep.txt").write_text("x", encoding="utf-8")

    result = revert_spreads(output_dir)

    assert [src.name for src, _, _ in result.failed] == ["1s.png"]
    assert [dst.name for _, dst in result.renamed] == ["2.png"]
    assert (output_dir / "1s.png").exists()
    assert "rename_failed" in capsys.readouterr().err


def test_mark_spreads_replaces_existing_target(tmp_path):
    output_dir = _pages(tmp_path / "out", "1.png", "2.png", "1s.png")
    (output_dir / "1.png").write_bytes(b"fresh")
    result = mark_spreads([1, 2], output_dir)

    assert not result.failed
    assert (output_dir / "1s.png").read_bytes() == b"fresh"
    assert _names(output_dir) == {"1s.png", "2s.png"}
