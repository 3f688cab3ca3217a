"""
Tests that the package sources stay valid on every supported interpreter.

requires-python is >=3.9, and f-strings that reuse the enclosing quote inside
a replacement field only parse from 3.12 on.
"""
import sys
import tokenize
from pathlib import Path

import pytest

import billwerk_client

PACKAGE_DIR = Path(billwerk_client.__file__).parent
SOURCES = sorted(PACKAGE_DIR.rglob("*.py"))


def _delimiter(token_text: str) -> str:
    body = token_text.lstrip("rRbBuUfF")
    return body[:3] if body[:3] in ('"""', "'''") else body[:1]


def _clashes(inner: str, outer: str) -> bool:
    if len(outer) == 3:
        return inner == outer
    return inner[0] == outer


def nested_quote_clashes(path: Path):
    """Return (line, text) for strings that reuse an enclosing f-string's quote."""
    clashes = []
    open_fstrings = []
    with path.open("rb") as fh:
        for tok in tokenize.tokenize(fh.readline):
            name = tokenize.tok_name[tok.type]
            if name == "FSTRING_END":
                open_fstrings.pop()
                continue
            if name not in ("STRING", "FSTRING_START"):
                continue
            delimiter = _delimiter(tok.string)
            if any(_clashes(delimiter, outer) for outer in open_fstrings):
                clashes.append((tok.start[0], tok.line.strip()))
            if name == "FSTRING_START":
                open_fstrings.append(delimiter)
    return clashes


class TestSourceCompatibility:
    """Sources must parse on Python 3.9 through the current release."""

    # Boundary: the package has sources to check
    def test_sources_found(self):
        assert PACKAGE_DIR / "auth.py" in SOURCES

    # Path: every module compiles on the running interpreter
    @pytest.mark.parametrize("path", SOURCES, ids=lambda p: p.relative_to(PACKAGE_DIR).as_posix())
    def test_compiles(self, path):
        compile(path.read_text(encoding="utf-8"), str(path), "exec")

    # Decision: f-strings never nest the enclosing quote character
    @pytest.mark.skipif(sys.version_info < (3, 12), reason="f-strings tokenize as single STRING tokens before 3.12")
    @pytest.mark.parametrize("path", SOURCES, ids=lambda p: p.relative_to(PACKAGE_DIR).as_posix())
    def test_no_nested_quote_reuse(self, path):
        assert nested_quote_clashes(path) == []

    @pytest.mark.skipif(sys.version_info < (3, 12), reason="f-strings tokenize as single STRING tokens before 3.12")
    def test_detects_nested_quote_reuse(self, tmp_path):
        sample = tmp_path / "sample.py"
        sample.write_text(
            "a = f\"x {f'{b}:{c or ''}'}\"\n"
            "d = \"Basic \" + f\"{b}:{c or ''}\"\n",
            encoding="utf-8",
        )
        assert [line for line, _ in nested_quote_clashes(sample)] == [1]
