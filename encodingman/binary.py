# encodingman/binary.py

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Tuple

HEAD_BYTES = 4096


class Verdict(str, Enum):
    BINARY = "binary"
    TEXT = "text"


@dataclass(frozen=True)
class ClassifyResult:
    """Binary/text verdict with a short reason for reports."""
    verdict: Verdict
    reason: str  # e.g. "ext:xlsx", "magic:zip", "text"

    @property
    def is_binary(self) -> bool:
        return self.verdict is Verdict.BINARY


# --- extension denylist ---------------------------------------------------------

BINARY_EXTENSIONS = frozenset({
    # office documents
    "doc", "docx", "docm", "xls", "xlsx", "xlsm", "xlsb", "ppt", "pptx",
    "odt", "ods", "odp", "pdf", "epub",
    # archives
    "zip", "7z", "rar", "gz", "bz2", "xz", "tar", "tgz", "lzh",
    # images
    "jpg", "jpeg", "png", "gif", "bmp", "tif", "tiff", "webp", "ico",
    # audio
    "mp3", "wav", "flac", "ogg", "m4a", "wma",
    # video
    "mp4", "avi", "mov", "mkv", "wmv",
    # executables and libraries
    "exe", "dll", "so", "dylib", "bin", "class", "msi",
})


def _ext_of(path: Path) -> str:
    return path.suffix[1:].lower() if path.suffix else ""


# --- magic-byte sniffers --------------------------------------------------------


def _is_zip(head: bytes) -> bool:
    return head.startswith(b"PK\x03\x04")


def _is_ole2(head: bytes) -> bool:
    return head.startswith(b"\xD0\xCF\x11\xE0")


def _is_pdf(head: bytes) -> bool:
    return head.startswith(b"%PDF")


def _is_png(head: bytes) -> bool:
    return head.startswith(b"\x89PNG\r\n\x1a\n")


def _is_jpeg(head: bytes) -> bool:
    return head.startswith(b"\xFF\xD8\xFF")


def _is_gif(head: bytes) -> bool:
    return head.startswith(b"GIF87a") or head.startswith(b"GIF89a")


def _is_tiff(head: bytes) -> bool:
    return head.startswith(b"II*\x00") or head.startswith(b"MM\x00*")


def _is_riff(head: bytes) -> bool:
    return head[:4] == b"RIFF" and len(head) >= 12 and head[8:12] in (b"WAVE", b"AVI ", b"WEBP")


def _is_7z(head: bytes) -> bool:
    return head.startswith(b"7z\xBC\xAF\x27\x1C")


def _is_rar(head: bytes) -> bool:
    return head.startswith(b"Rar!\x1A\x07")


def _is_gz(head: bytes) -> bool:
    return head.startswith(b"\x1F\x8B\x08")


def _is_xz(head: bytes) -> bool:
    return head.startswith(b"\xFD7zXZ\x00")


def _is_elf(head: bytes) -> bool:
    return head.startswith(b"\x7FELF")


def _is_pe(head: bytes) -> bool:
    # "MZ" alone is too common in text; require the DOS header's e_lfanew to point inside.
    if not head.startswith(b"MZ") or len(head) < 64:
        return False
    offset = int.from_bytes(head[60:64], "little")
    return 64 <= offset <= len(head) - 4 and head[offset:offset + 4] == b"PE\x00\x00"


# First match wins; none of these prefixes collides with a UTF-8/UTF-16 BOM.
SIGNATURES: List[Tuple[str, Callable[[bytes], bool]]] = [
    ("zip", _is_zip),
    ("ole2", _is_ole2),
    ("pdf", _is_pdf),
    ("png", _is_png),
    ("jpeg", _is_jpeg),
    ("gif", _is_gif),
    ("tiff", _is_tiff),
    ("riff", _is_riff),
    ("7z", _is_7z),
    ("rar", _is_rar),
    ("gzip", _is_gz),
    ("xz", _is_xz),
    ("elf", _is_elf),
    ("pe", _is_pe),
]


def match_signature(head: bytes) -> Optional[str]:
    """Return the name of the first binary signature matching ``head``."""
    for name, check in SIGNATURES:
        if check(head):
            return name
    return None


# --- public API -----------------------------------------------------------------


def read_head(path: Path, size: int = HEAD_BYTES) -> bytes:
    """Read at most ``size`` bytes from the start of a file.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    with path.open("rb") as f:
        return f.read(size)


def sniff(path: Path, head: bytes | None = None) -> ClassifyResult:
    """Classify a file as binary or text.

    The extension is checked first and needs no I/O. Only when it is
    inconclusive is the head of the file read (unless ``head`` is given)
    and matched against the signature table.

    Args:
        path (Path): File to classify.
        head (bytes | None): Already-read prefix of the file, if any.

    Returns:
        ClassifyResult: Verdict plus reason.

    Raises:
        OSError: If the head has to be read and reading fails.
    """
    ext = _ext_of(path)
    if ext in BINARY_EXTENSIONS:
        return ClassifyResult(Verdict.BINARY, f"ext:{ext}")

    if head is None:
        head = read_head(path)
    sig = match_signature(head)
    if sig:
        return ClassifyResult(Verdict.BINARY, f"magic:{sig}")
    return ClassifyResult(Verdict.TEXT, "text")


def classify(path: Path, head: bytes | None = None) -> Verdict:
    """Return only the verdict of :func:`sniff`."""
    return sniff(path, head).verdict
