from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

MARK = "#-----------"


def dump_text(
    snapshots: Sequence[tuple[int, Sequence[str]]],
    *,
    headers: Sequence[str] = (),
) -> str:
    """Build massif dump text from headers and (index, body lines) pairs."""
    lines = list(headers)
    for index, body in snapshots:
        lines += [MARK, f"snapshot={index}", MARK, *body]
    return "\n".join(lines) + "\n"


@pytest.fixture
def write_dump() -> Callable[..., Path]:
    def _write(
        path: Path,
        snapshots: Sequence[tuple[int, Sequence[str]]],
        *,
        headers: Sequence[str] = (),
    ) -> Path:
        path.write_text(dump_text(snapshots, headers=headers), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def dump_a(tmp_path: Path, write_dump) -> Path:
    return write_dump(
        tmp_path / "massif.out.100",
        [(0, ["time=100", "mem_heap_B=10"])],
        headers=["desc: x"],
    )


@pytest.fixture
def dump_b(tmp_path: Path, write_dump) -> Path:
    return write_dump(tmp_path / "massif.out.200", [(0, ["time=50", "mem_heap_B=5"])])
