# encodingman/walk.py

from __future__ import annotations
from pathlib import Path
from typing import Iterable, Iterator


def iter_files(roots: Iterable[Path]) -> Iterator[Path]:
    """Expand inputs into file paths, walking directories recursively.

    Paths that are neither a file nor a directory (e.g. missing ones) are
    yielded unchanged so the pipeline can report them.

    Args:
        roots (Iterable[Path]): Files or directories given on the command line.

    Yields:
        Path: Paths to process, directories expanded in sorted order.
    """
    for root in roots:
        if root.is_dir():
            for p in sorted(root.rglob("*")):
                if p.is_file():
                    yield p
        else:
            yield root
