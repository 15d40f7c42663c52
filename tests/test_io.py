"""Tests for workbook file helpers: fingerprints, replace-in-place saves, config text."""

import os
from pathlib import Path

import pytest

from xlagent.io.fileops import (
    CHUNK_SIZE,
    digest_bytes,
    fingerprint,
    partial_path,
    read_config_text,
    replace_file,
)


def test_fingerprint(raw_data_workbook: Path):
    fp = fingerprint(raw_data_workbook)
    assert fp.startswith("sha256:")
    assert len(fp) == 71  # sha256: + 64 hex chars
    assert fingerprint(raw_data_workbook) == fp


def test_fingerprint_matches_digest_across_chunks(tmp_path: Path):
    data = os.urandom(CHUNK_SIZE * 2 + 17)
    path = tmp_path / "big.bin"
    path.write_bytes(data)
    assert fingerprint(path) == digest_bytes(data)


def test_replace_file_returns_fingerprint(tmp_path: Path):
    target = tmp_path / "output.xlsx"
    fp = replace_file(target, b"test data content")
    assert target.read_bytes() == b"test data content"
    assert fp == fingerprint(target)


def test_replace_file_overwrites(tmp_path: Path):
    target = tmp_path / "output.xlsx"
    target.write_bytes(b"old content")
    replace_file(target, b"new content")
    assert target.read_bytes() == b"new content"
    assert [p.name for p in tmp_path.iterdir()] == ["output.xlsx"]


def test_replace_file_failure_keeps_old_content(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    target = tmp_path / "output.xlsx"
    target.write_bytes(b"old content")

    def refuse(src, dst):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(os, "replace", refuse)
    with pytest.raises(PermissionError):
        replace_file(target, b"new content")
    assert target.read_bytes() == b"old content"
    assert not partial_path(target).exists()


def test_partial_path_is_hidden_sibling(tmp_path: Path):
    part = partial_path(tmp_path / "ventas.xlsx")
    assert part.parent == tmp_path
    assert part.name.startswith(".ventas.xlsx.")
    assert part.suffix == ".part"


def test_read_config_text_strips_bom(tmp_path: Path):
    path = tmp_path / "cfg.yaml"
    path.write_bytes(b"\xef\xbb\xbfmodel: x\n")
    assert read_config_text(path) == "model: x\n"
