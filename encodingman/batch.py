# encodingman/batch.py

from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .config import PipelineConfig
from .errors import describe
from .model import BatchReport, FileOutcome, OutcomeStatus
from .pipeline import process_file

ProgressCallback = Callable[[int, int, FileOutcome], None]


def _run_one(path: Path | str, config: Optional[PipelineConfig], encoding: Optional[str]) -> FileOutcome:
    """Process a single path; anything unexpected becomes an error outcome."""
    try:
        return process_file(path, config, encoding=encoding)
    except Exception as exc:  # noqa: BLE001
        return FileOutcome(
            path=Path(path),
            status=OutcomeStatus.ERROR,
            error=describe(exc),
            reason="exception",
        )


def run_batch(
    paths: Sequence[Path | str],
    config: Optional[PipelineConfig] = None,
    max_workers: int = 1,
    encoding: Optional[str] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> BatchReport:
    """Run every path through the pipeline and collect the outcomes.

    A failing path yields an ``error`` outcome and never stops the batch.
    Outcomes are always reported in input order, also when files are
    processed on a thread pool (``max_workers > 1``).

    Args:
        paths (Sequence[Path | str]): Files to process.
        config (PipelineConfig | None): Settings shared by every file.
        max_workers (int): Thread count; 1 processes files sequentially.
        encoding (str | None): Manual source encoding applied to every file.
        on_progress (ProgressCallback | None): Called as ``(done, total, outcome)``
            after each file finishes.

    Returns:
        BatchReport: One outcome per input path plus the tallies.
    """
    total = len(paths)
    results: List[Optional[FileOutcome]] = [None] * total

    if max_workers <= 1 or total <= 1:
        for idx, p in enumerate(paths):
            results[idx] = _run_one(p, config, encoding)
            if on_progress:
                on_progress(idx + 1, total, results[idx])
        return BatchReport(outcomes=[r for r in results if r is not None])

    done = 0
    with ThreadPoolExecutor(max_workers=max_workers) as ex:
        futures = {ex.submit(_run_one, p, config, encoding): i for i, p in enumerate(paths)}
        for fut in as_completed(futures):
            idx = futures[fut]
            outcome = fut.result()
            results[idx] = outcome
            done += 1
            if on_progress:
                on_progress(done, total, outcome)

    return BatchReport(outcomes=[r for r in results if r is not None])


def summarize(report: BatchReport) -> str:
    """One-line tally of a batch."""
    return (
        f"Total: {report.total} | Converted: {report.converted} | "
        f"Already UTF-8: {report.already_utf8} | Binary: {report.binary} | "
        f"Errors: {report.errors}"
    )
