# tests/conftest.py
# Shared fixtures: on-disk fixture and baseline trees built in tmp_path,
# zstd compression, and a table-driven stand-in for the hashing engine.

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Callable, Dict, List

import pytest
import zstandard

from hashparity.engine_adapter import EngineAdapter


def _zst(data: bytes) -> bytes:
    return zstandard.ZstdCompressor().compress(data)


@pytest.fixture
def zst() -> Callable[[bytes], bytes]:
    """Compress bytes into a single zstd frame."""
    return _zst


@pytest.fixture
def packs_dir(tmp_path: Path) -> Path:
    root = tmp_path / "packs"
    root.mkdir()
    return root


@pytest.fixture
def baseline_dir(tmp_path: Path) -> Path:
    root = tmp_path / "baseline-root"
    root.mkdir()
    return root


@pytest.fixture
def write_fixture(packs_dir: Path) -> Callable[[str, bytes], Path]:
    """Write zstd-compressed content at packs_dir/<rel>."""
    def _write(rel: str, content: bytes) -> Path:
        path = packs_dir / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(_zst(content))
        return path
    return _write


@pytest.fixture
def write_baseline(baseline_dir: Path) -> Callable[[bytes, List[dict]], Path]:
    """
    Record a baseline for fixture content: JSON entries compressed at
    <baseline_dir>/<md5[:2]>/<md5>.json.zst.
    """
    def _write(content: bytes, entries: List[dict]) -> Path:
        digest = hashlib.md5(content).hexdigest()
        path = baseline_dir / digest[:2] / f"{digest}.json.zst"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(_zst(json.dumps(entries).encode("utf-8")))
        return path
    return _write


class TableEngine:
    """
    Engine stand-in: returns the chart results registered for the exact raw
    content, and raises ValueError for content it does not know.
    """

    def __init__(self, table: Dict[bytes, List[dict]]):
        self.table = table
        self.calls: List[tuple] = []

    def __call__(self, raw: bytes, format_hint: str) -> List[dict]:
        self.calls.append((raw, format_hint))
        if raw not in self.table:
            raise ValueError("unparseable simfile")
        return self.table[raw]


@pytest.fixture
def make_engine() -> Callable[[Dict[bytes, List[dict]]], EngineAdapter]:
    def _make(table: Dict[bytes, List[dict]]) -> EngineAdapter:
        return EngineAdapter(TableEngine(table))
    return _make
