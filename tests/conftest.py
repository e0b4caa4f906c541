"""
Shared fixtures: small on-disk files in various encodings.
"""
import os
import sys
from pathlib import Path

import pytest

# Make the project root importable when the package is not installed.
_project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

UTF8_BOM = b"\xEF\xBB\xBF"

# "あいうえお\n" in Shift_JIS: odd length, so neither UTF-16 reading is clean.
SJIS_AIUEO = "あいうえお\n".encode("cp932")


@pytest.fixture
def make_file(tmp_path):
    """Factory writing ``data`` to ``tmp_path / name`` and returning the path."""
    def _make(name: str, data: bytes) -> Path:
        p = tmp_path / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(data)
        return p
    return _make


@pytest.fixture
def sjis_file(make_file):
    return make_file("sjis.csv", SJIS_AIUEO)


@pytest.fixture
def utf8_bom_file(make_file):
    return make_file("bom.csv", UTF8_BOM + b"ab")


@pytest.fixture
def xlsx_file(make_file):
    return make_file("book.xlsx", b"PK\x03\x04" + b"name,value\r\nplain,text\r\n")
