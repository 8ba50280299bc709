from __future__ import annotations

from pathlib import Path

import pytest

from massif_combine.core.config import CombineConfig, resolve_combine_config, safe_resolve


def test_default_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MASSIF_COMBINE_ENCODING", raising=False)
    monkeypatch.delenv("MASSIF_COMBINE_OUTPUT", raising=False)

    cfg = resolve_combine_config()

    assert cfg == CombineConfig()
    assert cfg.output_name == "massif.out.combine"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MASSIF_COMBINE_ENCODING", "latin-1")
    monkeypatch.setenv("MASSIF_COMBINE_OUTPUT", " all.massif ")

    cfg = resolve_combine_config()

    assert cfg.encoding == "latin-1"
    assert cfg.output_name == "all.massif"
    assert cfg.decode_errors == "surrogateescape"


def test_unknown_encoding_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MASSIF_COMBINE_ENCODING", "not-a-codec")

    with pytest.raises(ValueError, match="MASSIF_COMBINE_ENCODING"):
        resolve_combine_config()


def test_safe_resolve_rejects_escape(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MASSIF_COMBINE_BASE_DIR", str(tmp_path))

    assert safe_resolve("massif.out.1") == tmp_path.resolve() / "massif.out.1"
    with pytest.raises(ValueError):
        safe_resolve("../outside")
