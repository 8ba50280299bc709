from __future__ import annotations

import logging
from pathlib import Path

import pytest

from massif_combine.core.sources import delete_files, resolve_sources


def test_resolve_sources_expands_patterns_sorted(tmp_path: Path) -> None:
    for name in ["massif.out.30", "massif.out.10", "massif.out.20", "other.txt"]:
        (tmp_path / name).write_text("", encoding="utf-8")

    out = resolve_sources([str(tmp_path / "massif.out.*")])

    assert [p.name for p in out] == ["massif.out.10", "massif.out.20", "massif.out.30"]


def test_resolve_sources_keeps_token_order_and_literals(tmp_path: Path) -> None:
    a = tmp_path / "b.out"
    b = tmp_path / "a.out"
    a.write_text("", encoding="utf-8")
    b.write_text("", encoding="utf-8")

    out = resolve_sources([str(a), str(b)])

    assert out == [a, b]


def test_resolve_sources_skips_unmatched_and_dirs(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    (tmp_path / "dir.out").mkdir()

    with caplog.at_level(logging.WARNING):
        out = resolve_sources([str(tmp_path / "*.out"), str(tmp_path / "missing")])

    assert out == []
    assert "No input files match" in caplog.text


def test_delete_files_reports_failures(tmp_path: Path) -> None:
    present = tmp_path / "x.out"
    present.write_text("", encoding="utf-8")

    assert delete_files([present]) is True
    assert not present.exists()
    assert delete_files([tmp_path / "gone.out"]) is False


def test_delete_files_verbose_prints(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    f = tmp_path / "x.out"
    f.write_text("", encoding="utf-8")

    delete_files([f], verbose=True)

    assert f"Deleting file {f}" in capsys.readouterr().out
