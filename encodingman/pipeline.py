# encodingman/pipeline.py

"""
Per-file decision procedure: classify -> read -> detect -> convert.

Every failure is captured on the returned FileOutcome; nothing raised by
the core escapes ``process_file``.
"""
from __future__ import annotations
from pathlib import Path
from typing import Optional

from .binary import sniff
from .candidates import resolve
from .config import PipelineConfig
from .convert import convert, preview_lines
from .errors import EncodingmanError, IoError, NotFound, describe
from .model import DetectionResult, FileOutcome, OutcomeStatus, RawFile
from .scorer import detect, is_already_utf8

DEFAULT_CONFIG = PipelineConfig()


def read_raw(path: Path) -> RawFile:
    """Read the whole file.

    Raises:
        NotFound: If the path does not exist.
        IoError: If reading fails for any other reason.
    """
    try:
        return RawFile(path=path, data=path.read_bytes())
    except FileNotFoundError as exc:
        raise NotFound(f"File not found: {path}") from exc
    except OSError as exc:
        raise IoError(f"Failed to read file {path}: {exc.strerror or exc}") from exc


def _error(path: Path, exc: BaseException, reason: str, encoding: str = "") -> FileOutcome:
    return FileOutcome(
        path=path,
        status=OutcomeStatus.ERROR,
        detected_encoding=encoding,
        error=describe(exc),
        reason=reason,
    )


def _converted(raw: RawFile, det: DetectionResult, cfg: PipelineConfig, strict: bool) -> FileOutcome:
    data = convert(raw.data, det.encoding, strict=strict)
    text = data[3:].decode("utf-8")
    return FileOutcome(
        path=raw.path,
        status=OutcomeStatus.CONVERTED,
        detected_encoding=det.encoding,
        confidence=det.confidence,
        data=data,
        reason=det.method,
        preview=preview_lines(text, cfg.preview_lines),
        low_confidence=det.confidence < cfg.confidence_threshold,
    )


def process_file(
    path: Path | str,
    config: Optional[PipelineConfig] = None,
    encoding: Optional[str] = None,
    strict: bool = False,
) -> FileOutcome:
    """Run one file through the pipeline.

    Args:
        path (Path | str): File to process. It is only ever opened for reading.
        config (PipelineConfig | None): Threshold and preview settings.
        encoding (str | None): Manual source encoding. Skips detection and
            the already-UTF-8 shortcut.
        strict (bool): Reject unmappable bytes instead of substituting U+FFFD.

    Returns:
        FileOutcome: converted, already_utf8, binary or error.
    """
    cfg = config or DEFAULT_CONFIG
    fp = Path(path)

    if not fp.exists():
        return _error(fp, NotFound(f"File not found: {fp}"), "missing")

    try:
        cls = sniff(fp)
    except OSError as exc:
        return _error(fp, IoError(f"Failed to read file {fp}: {exc.strerror or exc}"), "io")
    if cls.is_binary:
        return FileOutcome(path=fp, status=OutcomeStatus.BINARY, reason=cls.reason)

    try:
        raw = read_raw(fp)
    except EncodingmanError as exc:
        return _error(fp, exc, "io")

    if encoding is not None:
        try:
            det = DetectionResult(resolve(encoding).label, 1.0, "manual")
            return _converted(raw, det, cfg, strict)
        except EncodingmanError as exc:
            return _error(fp, exc, "manual", encoding)

    if is_already_utf8(raw.data):
        text = raw.data.decode("utf-8-sig")
        return FileOutcome(
            path=fp,
            status=OutcomeStatus.ALREADY_UTF8,
            detected_encoding="UTF-8",
            confidence=1.0,
            reason="utf8",
            preview=preview_lines(text, cfg.preview_lines),
        )

    det = detect(raw.data)
    try:
        return _converted(raw, det, cfg, strict)
    except EncodingmanError as exc:
        return _error(fp, exc, det.method, det.encoding)
