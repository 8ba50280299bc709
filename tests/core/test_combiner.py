from __future__ import annotations

from pathlib import Path

import pytest

from massif_combine.core.combiner import add_source, combine_files
from massif_combine.core.errors import SourceUnavailable
from massif_combine.core.models import MassifDocument
from massif_combine.core.serializer import render_lines


@pytest.mark.asyncio
async def test_combine_keeps_first_source_headers(tmp_path: Path, write_dump) -> None:
    s1 = write_dump(tmp_path / "s1", [(0, ["time=1"])], headers=["desc: one", "cmd: ./one"])
    s2 = write_dump(tmp_path / "s2", [(0, ["time=2"])], headers=["desc: two"])

    forward = await combine_files([s1, s2])
    backward = await combine_files([s2, s1])

    assert forward.document.headers == ["desc: one", "cmd: ./one"]
    assert backward.document.headers == ["desc: two"]
    assert len(forward.document.snapshots) == len(backward.document.snapshots) == 2


@pytest.mark.asyncio
async def test_combine_headerless_first_source_defers_headers(
    tmp_path: Path, dump_a: Path, dump_b: Path
) -> None:
    result = await combine_files([dump_b, dump_a])

    assert result.ok
    assert result.document.headers == ["desc: x"]


@pytest.mark.asyncio
async def test_combine_continues_past_missing_source(tmp_path: Path, dump_a: Path, dump_b: Path) -> None:
    missing = tmp_path / "massif.out.gone"

    result = await combine_files([dump_a, missing, dump_b])

    assert not result.ok
    assert isinstance(result.last_error, SourceUnavailable)
    assert result.errors[0].source == missing
    assert [s.time for s in result.document.snapshots] == [100, 50]
    assert result.sources == [dump_a, missing, dump_b]


@pytest.mark.asyncio
async def test_combine_reports_last_error(tmp_path: Path, dump_a: Path) -> None:
    first = tmp_path / "missing-1"
    second = tmp_path / "missing-2"

    result = await combine_files([first, dump_a, second])

    assert len(result.errors) == 2
    assert result.last_error is result.errors[-1].error
    assert result.last_error.path == second


@pytest.mark.asyncio
async def test_combine_empty_input_list() -> None:
    result = await combine_files([])

    assert result.ok
    assert result.document.is_empty


@pytest.mark.asyncio
async def test_combine_progress_callback(dump_a: Path, dump_b: Path) -> None:
    seen: list[tuple[Path, int]] = []

    await combine_files([dump_a, dump_b], on_source=lambda p, doc: seen.append((p, len(doc.snapshots))))

    assert seen == [(dump_a, 1), (dump_b, 2)]


@pytest.mark.asyncio
async def test_add_source_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(SourceUnavailable):
        await add_source(tmp_path / "nope", MassifDocument())


@pytest.mark.asyncio
async def test_add_source_preserves_undecodable_bytes(tmp_path: Path) -> None:
    path = tmp_path / "latin1.out"
    path.write_bytes(
        b"desc: x\n#-----------\nsnapshot=0\n#-----------\ntime=3\nfn=caf\xe9 alloc\n"
    )
    doc = MassifDocument()

    added = await add_source(path, doc)

    assert added == 1
    body = doc.snapshots[0].contents[1]
    assert body.encode("utf-8", errors="surrogateescape") == b"fn=caf\xe9 alloc"


@pytest.mark.asyncio
async def test_recombining_output_keeps_snapshot_multiset(
    tmp_path: Path, dump_a: Path, dump_b: Path
) -> None:
    first = await combine_files([dump_a, dump_b])
    merged = tmp_path / "merged.out"
    merged.write_text("\n".join(render_lines(first.document)) + "\n", encoding="utf-8")

    again = await combine_files([merged, merged])

    pairs = sorted((s.time, tuple(s.contents)) for s in first.document.snapshots)
    doubled = sorted((s.time, tuple(s.contents)) for s in again.document.snapshots)
    assert doubled == sorted(pairs + pairs)
    # Headers come from the first copy only.
    assert again.document.headers == ["desc: x"]
