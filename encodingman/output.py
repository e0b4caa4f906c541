# encodingman/output.py

from __future__ import annotations
from pathlib import Path

from .model import FileOutcome, OutcomeStatus


def output_path_for(src: Path, out_dir: Path) -> Path:
    """Pick a destination for the converted copy of ``src``.

    The name is ``<stem>_utf8<suffix>`` inside ``out_dir``. If that file
    already exists, appends `_1`, `_2`, etc. The source path itself is
    never returned.

    Args:
        src (Path): Original input file.
        out_dir (Path): Directory receiving converted copies.

    Returns:
        Path: A path that does not exist yet.
    """
    stem = src.stem if src.suffix else src.name
    suffix = src.suffix
    candidate = out_dir / f"{stem}_utf8{suffix}"

    i = 1
    while candidate.exists() or candidate.resolve() == src.resolve():
        candidate = out_dir / f"{stem}_utf8_{i}{suffix}"
        i += 1
    return candidate


def write_converted(outcome: FileOutcome, out_dir: Path) -> Path:
    """Persist the normalized bytes of a converted outcome.

    Raises:
        ValueError: If the outcome carries no converted data.
        OSError: If the directory or file cannot be written.
    """
    if outcome.status is not OutcomeStatus.CONVERTED or outcome.data is None:
        raise ValueError(f"Nothing to write for {outcome.path} (status: {outcome.status.value})")
    out_dir.mkdir(parents=True, exist_ok=True)
    dest = output_path_for(outcome.path, out_dir)
    dest.write_bytes(outcome.data)
    return dest
