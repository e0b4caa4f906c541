# encodingman/candidates.py

"""
Closed set of source encodings the scorer evaluates and the UI offers.
"""
from __future__ import annotations
import codecs
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .errors import UnknownEncoding


class Candidate(Enum):
    """Supported source encodings, in scoring order.

    The enum value is the display label; ``codec`` is the Python codec
    used to decode bytes under that label.
    """

    SHIFT_JIS = "Shift_JIS"
    EUC_JP = "EUC-JP"
    ISO_2022_JP = "ISO-2022-JP"
    UTF_8 = "UTF-8"
    UTF_16LE = "UTF-16LE"
    UTF_16BE = "UTF-16BE"
    WINDOWS_1252 = "windows-1252"

    @property
    def label(self) -> str:
        return self.value

    @property
    def codec(self) -> str:
        return _CODECS[self]

    def decode(self, data: bytes, errors: str = "strict") -> str:
        """Decode ``data`` under this candidate.

        ``errors`` is "strict" or "replace". windows-1252 follows the WHATWG
        table: the five bytes cp1252 leaves undefined decode to C1 controls.

        Raises:
            UnicodeDecodeError: In strict mode, on an unmappable sequence.
        """
        if self is Candidate.WINDOWS_1252:
            errors = _C1_STRICT if errors == "strict" else _C1_REPLACE
        return data.decode(self.codec, errors=errors)

    def __str__(self) -> str:
        return self.value


# Shift_JIS decodes as cp932 so vendor extensions (NEC/IBM rows) map cleanly.
_CODECS: Dict[Candidate, str] = {
    Candidate.SHIFT_JIS: "cp932",
    Candidate.EUC_JP: "euc_jp",
    Candidate.ISO_2022_JP: "iso2022_jp",
    Candidate.UTF_8: "utf-8",
    Candidate.UTF_16LE: "utf-16-le",
    Candidate.UTF_16BE: "utf-16-be",
    Candidate.WINDOWS_1252: "cp1252",
}

# Bytes undefined in Python's cp1252 that WHATWG windows-1252 maps to U+0081 etc.
_C1_BYTES = frozenset({0x81, 0x8D, 0x8F, 0x90, 0x9D})
_C1_STRICT = "encodingman-c1-strict"
_C1_REPLACE = "encodingman-c1-replace"


def _c1_handler(fallback: Optional[str]):
    def handler(exc: UnicodeError) -> Tuple[str, int]:
        if not isinstance(exc, UnicodeDecodeError):
            raise exc
        bad = exc.object[exc.start:exc.end]
        if all(b in _C1_BYTES for b in bad):
            return "".join(chr(b) for b in bad), exc.end
        if fallback is None:
            raise exc
        return fallback, exc.end
    return handler


codecs.register_error(_C1_STRICT, _c1_handler(None))
codecs.register_error(_C1_REPLACE, _c1_handler("\ufffd"))

_ALIASES: Dict[str, Candidate] = {
    "sjis": Candidate.SHIFT_JIS,
    "shift-jis": Candidate.SHIFT_JIS,
    "shiftjis": Candidate.SHIFT_JIS,
    "ms932": Candidate.SHIFT_JIS,
    "windows-31j": Candidate.SHIFT_JIS,
    "eucjp": Candidate.EUC_JP,
    "euc_jp": Candidate.EUC_JP,
    "utf8": Candidate.UTF_8,
    "utf-16-le": Candidate.UTF_16LE,
    "utf-16-be": Candidate.UTF_16BE,
}

# Python codec names that WHATWG treats as labels of a candidate.
_CODEC_ALIASES: Dict[str, Candidate] = {
    codecs.lookup("latin-1").name: Candidate.WINDOWS_1252,  # latin1, iso-8859-1, l1, ...
}

# Order shown in encoding pickers; differs from the scoring order above.
SUPPORTED_ENCODINGS: List[str] = [
    Candidate.SHIFT_JIS.label,
    Candidate.UTF_8.label,
    Candidate.EUC_JP.label,
    Candidate.ISO_2022_JP.label,
    Candidate.UTF_16LE.label,
    Candidate.UTF_16BE.label,
    Candidate.WINDOWS_1252.label,
]


def _codec_name(name: str) -> Optional[str]:
    try:
        return codecs.lookup(name).name
    except LookupError:
        return None


def resolve(name: str | Candidate | None) -> Candidate:
    """Resolve a label, alias or Python codec name to a Candidate.

    Args:
        name (str | Candidate | None): Encoding name as typed by a user or
            produced by the scorer.

    Returns:
        Candidate: The matching candidate.

    Raises:
        UnknownEncoding: If the name matches no supported encoding.
    """
    if isinstance(name, Candidate):
        return name
    key = (name or "").strip().lower()
    if not key:
        raise UnknownEncoding(name)

    for cand in Candidate:
        if cand.label.lower() == key:
            return cand
    if key in _ALIASES:
        return _ALIASES[key]

    canonical = _codec_name(key)
    if canonical:
        for cand in Candidate:
            if _codec_name(cand.codec) == canonical:
                return cand
        if canonical in _CODEC_ALIASES:
            return _CODEC_ALIASES[canonical]
    raise UnknownEncoding(name)
