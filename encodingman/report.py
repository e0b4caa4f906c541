# encodingman/report.py

from __future__ import annotations
import csv
from pathlib import Path
from typing import Dict, Optional

from .model import BatchReport

COLUMNS = [
    "path", "file_name", "status", "detected_encoding", "confidence",
    "low_confidence", "output", "error", "reason",
]


def write_csv(out_path: Path, report: BatchReport, outputs: Optional[Dict[Path, Path]] = None) -> None:
    """Write batch outcomes to a CSV file.

    Args:
        out_path (Path): Destination CSV file path.
        report (BatchReport): Outcomes, written in input order.
        outputs (Dict[Path, Path] | None): Where converted copies were saved,
            keyed by input path.

    Returns:
        None
    """
    outputs = outputs or {}
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(COLUMNS)
        for o in report.outcomes:
            dest = outputs.get(o.path)
            writer.writerow([
                str(o.path),
                o.file_name,
                o.status.value,
                o.detected_encoding,
                f"{o.confidence:.2f}",
                str(o.low_confidence).lower(),
                str(dest) if dest else "",
                o.error,
                o.reason,
            ])
