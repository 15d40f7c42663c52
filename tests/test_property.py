"""Property-based tests using Hypothesis.

These check invariants that hold for any input:
- the grammar is decided by whitespace tokens alone
- write-then-read returns the trimmed cells at their zero-based positions
- the digest never previews more than four data rows
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from xlagent.adapters.openpyxl_engine import read_workbook, write_data
from xlagent.contracts.common import WriteData
from xlagent.engine.grammar import parse_command
from xlagent.engine.summary import summarize_sheets

# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

token = st.text(
    alphabet=st.characters(whitelist_categories=("L", "N", "P", "S"), max_codepoint=0x2FF),
    min_size=1,
    max_size=12,
)
whitespace = st.text(alphabet=" \t", min_size=1, max_size=3)

cell = st.from_regex(r"[A-Za-z0-9][A-Za-z0-9 .-]{0,10}", fullmatch=True).map(str.strip)
grid = st.lists(st.lists(cell, min_size=1, max_size=5), min_size=1, max_size=6)
plain_text = st.text(alphabet="abcxyz019 ,.", max_size=6)


@given(st.lists(token, min_size=3, max_size=8), whitespace)
def test_write_command_joins_remaining_tokens(tokens, sep):
    line = sep.join(["escribir_excel", *tokens])
    cmd = parse_command(line)
    assert cmd == WriteData(path=tokens[0], data=" ".join(tokens[1:]))


@given(st.lists(token, min_size=1, max_size=6), whitespace, whitespace)
def test_parse_ignores_whitespace_layout(tokens, sep_a, sep_b):
    assert parse_command(sep_a.join(tokens)) == parse_command(sep_b + sep_b.join(tokens) + sep_a)


@given(st.lists(token, min_size=1, max_size=6))
def test_unknown_first_token_is_chat(tokens):
    words = {"leer_excel", "crear_excel", "escribir_excel"}
    if tokens[0] not in words:
        assert parse_command(" ".join(tokens)) is None


@settings(max_examples=25, deadline=None, suppress_health_check=[HealthCheck.too_slow])
@given(grid)
def test_write_then_read_places_cells(rows):
    raw = ";".join(",".join(f" {c} " for c in row) for row in rows)
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "p.xlsx"
        write_data(path, raw)
        read = read_workbook(path).sheets[0].rows

    width = max(len(r) for r in rows)
    assert len(read) == len(rows)
    for written, got in zip(rows, read):
        assert got[: len(written)] == written
        assert got[len(written):] == [""] * (width - len(written))


@given(st.dictionaries(
    plain_text.filter(bool),
    st.lists(st.lists(plain_text, max_size=3), max_size=12),
    max_size=4,
))
def test_digest_previews_at_most_four_rows(sheets):
    text = summarize_sheets(sheets)
    for name, rows in sheets.items():
        assert f"Hoja: {name} ({len(rows)} filas)\n" in text
    preview_lines = [line for line in text.split("\n") if line.startswith("  ")]
    assert len(preview_lines) == sum(min(4, max(0, len(r) - 1)) for r in sheets.values())
