"""Workbook file helpers: content fingerprints, replace-in-place saves, config text."""

from __future__ import annotations

import hashlib
import os
from functools import partial
from pathlib import Path

FINGERPRINT_PREFIX = "sha256:"
CHUNK_SIZE = 64 * 1024


def digest_bytes(data: bytes) -> str:
    """Fingerprint of an in-memory workbook image."""
    return FINGERPRINT_PREFIX + hashlib.sha256(data).hexdigest()


def fingerprint(path: str | Path) -> str:
    """Fingerprint of the file at ``path``, matching ``digest_bytes`` of its content."""
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(partial(f.read, CHUNK_SIZE), b""):
            h.update(chunk)
    return FINGERPRINT_PREFIX + h.hexdigest()


def partial_path(target: Path) -> Path:
    """Hidden sibling that receives the bytes before they replace ``target``."""
    return target.with_name(f".{target.name}.{os.getpid()}.part")


def replace_file(target: str | Path, data: bytes) -> str:
    """Put ``data`` at ``target`` in one rename and return its fingerprint.

    The bytes land in a sibling file first, so the target is either the old
    workbook or the new one, never a truncated mix. The sibling is removed
    when the write fails.
    """
    target = Path(target)
    part = partial_path(target)
    try:
        with open(part, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(part, target)
    except OSError:
        part.unlink(missing_ok=True)
        raise
    return digest_bytes(data)


def read_config_text(path: str | Path) -> str:
    """UTF-8 text of a config file; a leading BOM from Windows editors is dropped."""
    return Path(path).read_text(encoding="utf-8-sig")
