# encodingman/convert.py

from __future__ import annotations
from typing import List

from .candidates import Candidate, resolve
from .errors import DecodeFailure

UTF8_BOM = b"\xEF\xBB\xBF"
UTF16LE_BOM = b"\xFF\xFE"
UTF16BE_BOM = b"\xFE\xFF"

_BOMS = (UTF8_BOM, UTF16LE_BOM, UTF16BE_BOM)

# Normalized output forms; UTF-8 with a leading BOM is the only one.
TARGET_ENCODINGS = ("utf-8-bom",)


def strip_bom(data: bytes) -> bytes:
    """Remove every leading UTF-8 / UTF-16 byte-order mark."""
    stripped = True
    while stripped:
        stripped = False
        for bom in _BOMS:
            if data.startswith(bom):
                data = data[len(bom):]
                stripped = True
                break
    return data


def decode_lossy(data: bytes, encoding: str | Candidate) -> str:
    """Decode ``data`` under ``encoding``, substituting U+FFFD where needed.

    Raises:
        UnknownEncoding: If ``encoding`` is not a supported candidate.
    """
    cand = resolve(encoding)
    return cand.decode(strip_bom(data), errors="replace")


def convert(data: bytes, source_encoding: str | Candidate, strict: bool = False) -> bytes:
    """Re-encode ``data`` as UTF-8 with a leading BOM.

    Decoding is lossy by default: unmappable sequences become U+FFFD and
    the only failure is an unrecognized encoding name.

    Args:
        data (bytes): Raw file content, with or without a BOM.
        source_encoding (str | Candidate): Encoding to decode with.
        strict (bool): Fail on unmappable bytes instead of substituting.

    Returns:
        bytes: ``EF BB BF`` followed by the UTF-8 encoded text.

    Raises:
        UnknownEncoding: If ``source_encoding`` does not resolve.
        DecodeFailure: In strict mode, if any byte sequence is unmappable.
    """
    cand = resolve(source_encoding)
    payload = strip_bom(data)
    if strict:
        try:
            text = cand.decode(payload)
        except UnicodeDecodeError as exc:
            raise DecodeFailure(
                f"{cand.label} cannot decode byte(s) at offset {exc.start}: {exc.reason}"
            ) from exc
    else:
        text = cand.decode(payload, errors="replace")
    return UTF8_BOM + text.encode("utf-8")


def preview_lines(text: str, n: int) -> List[str]:
    """Return the first ``n`` lines of ``text`` for display.

    Lines are split on ``\\n``; a trailing ``\\r`` is dropped from each line.
    """
    if n <= 0 or not text:
        return []
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines[:n]]
