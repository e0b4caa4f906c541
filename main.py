# main.py

"""
Orchestrator: read params (JSON + CLI), walk inputs, detect encodings, convert to UTF-8 (BOM),
write converted copies and an optional CSV report. Input files are never modified.
"""
from __future__ import annotations
import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from encodingman.batch import run_batch, summarize
from encodingman.candidates import SUPPORTED_ENCODINGS, resolve
from encodingman.config import PipelineConfig, load_config
from encodingman.errors import ConfigError, UnknownEncoding, describe
from encodingman.model import BatchReport, FileOutcome, OutcomeStatus
from encodingman.output import write_converted
from encodingman.report import write_csv
from encodingman.walk import iter_files

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_FILE_ERRORS = 3


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments.

    Returns:
        argparse.Namespace: Parsed command-line arguments.
    """
    p = argparse.ArgumentParser(
        description="Detect the encoding of text files and convert them to UTF-8 with BOM."
    )
    p.add_argument("inputs", nargs="*", help="Input files or directories (recursive).")
    p.add_argument("--output-dir", type=str, help="Directory for converted copies (not written if omitted).")
    p.add_argument("--report", type=str, help="Optional path to a CSV report.")
    p.add_argument("--encoding", type=str, help="Force a source encoding instead of detecting it.")
    p.add_argument("--workers", type=int, default=None, help="Files processed in parallel (default: 1).")
    p.add_argument("--preview", action="store_true", help="Print preview lines for each text file.")
    p.add_argument("--config", type=str, help="Optional JSON config (flags override).")
    p.add_argument("--list-encodings", action="store_true", help="Print supported encodings and exit.")
    return p.parse_args(argv)


def _get_effective_config(args: argparse.Namespace) -> Tuple[Dict[str, Any], Optional[Path]]:
    """Load the JSON configuration named by --config, if any."""
    config_path = Path(args.config) if args.config else None
    if config_path is not None and not config_path.exists():
        print(f"[WARN] Config not found: {config_path}", file=sys.stderr)
        return {}, config_path
    return load_config(config_path), config_path


def _resolve_settings(args: argparse.Namespace, cfg: Dict[str, Any]) -> Tuple[PipelineConfig, Optional[Path], int]:
    """Merge JSON settings with CLI flags, giving precedence to the flags."""
    pipeline_cfg = PipelineConfig.from_mapping(cfg)

    out = args.output_dir or cfg.get("output_dir")
    output_dir = Path(out) if out else None

    workers = args.workers if args.workers is not None else cfg.get("workers", 1)
    try:
        workers = int(workers)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"workers must be an integer: {exc}") from exc
    if workers < 1:
        raise ConfigError(f"workers must be >= 1, got {workers}")
    return pipeline_cfg, output_dir, workers


def _print_outcome(outcome: FileOutcome, show_preview: bool) -> None:
    """Print one line per file, plus preview lines when requested."""
    status = outcome.status
    if status is OutcomeStatus.CONVERTED:
        flag = " (low confidence)" if outcome.low_confidence else ""
        print(
            f"[INFO] {outcome.path}: {outcome.detected_encoding} -> UTF-8 BOM "
            f"(confidence {outcome.confidence:.2f}){flag}"
        )
    elif status is OutcomeStatus.ALREADY_UTF8:
        print(f"[INFO] {outcome.path}: already UTF-8")
    elif status is OutcomeStatus.BINARY:
        print(f"[INFO] {outcome.path}: binary ({outcome.reason}), left as-is")
    else:
        print(f"[ERR] {outcome.path}: {outcome.error}", file=sys.stderr)

    if show_preview and outcome.preview:
        for line in outcome.preview:
            print(f"    | {line}")


def _write_outputs(report: BatchReport, output_dir: Path) -> Tuple[Dict[Path, Path], int]:
    """Save converted copies; returns the written paths and the failure count."""
    written: Dict[Path, Path] = {}
    failures = 0
    for outcome in report.outcomes:
        if outcome.status is not OutcomeStatus.CONVERTED:
            continue
        try:
            written[outcome.path] = write_converted(outcome, output_dir)
        except OSError as exc:
            failures += 1
            print(f"[ERR] Failed to write {outcome.file_name}: {describe(exc)}", file=sys.stderr)
    return written, failures


def _print_summary(report: BatchReport, output_dir: Optional[Path], report_path: Optional[Path]) -> None:
    """Print summary information to stdout."""
    print(f"[INFO] Done. {summarize(report)}")
    if output_dir is not None:
        print(f"[INFO] Converted copies: {output_dir.resolve()}")
    else:
        print("[INFO] No --output-dir given (dry-run mode). Converted data was not saved.")
    if report_path is not None:
        print(f"[INFO] Report: {report_path.resolve()}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main orchestration function.

    Returns:
        int: Exit code.
    """
    args = parse_args(argv)

    if args.list_encodings:
        for name in SUPPORTED_ENCODINGS:
            print(name)
        return EXIT_OK

    if not args.inputs:
        print("[ERR] At least one input file or directory is required.", file=sys.stderr)
        return EXIT_USAGE

    cfg, _config_path = _get_effective_config(args)
    try:
        pipeline_cfg, output_dir, workers = _resolve_settings(args, cfg)
        if args.encoding:
            resolve(args.encoding)
    except (ConfigError, UnknownEncoding) as exc:
        print(f"[ERR] {exc}", file=sys.stderr)
        return EXIT_USAGE

    paths = list(iter_files(Path(p) for p in args.inputs))
    print(f"[INFO] Processing {len(paths)} file(s)")
    report = run_batch(
        paths,
        pipeline_cfg,
        max_workers=workers,
        encoding=args.encoding,
        on_progress=lambda _done, _total, outcome: _print_outcome(outcome, args.preview),
    )

    written: Dict[Path, Path] = {}
    write_failures = 0
    if output_dir is not None:
        written, write_failures = _write_outputs(report, output_dir)

    report_arg = args.report or cfg.get("report")
    report_path = Path(report_arg) if report_arg else None
    if report_path is not None:
        try:
            write_csv(report_path, report, written)
        except OSError as exc:
            write_failures += 1
            print(f"[ERR] Failed to write report {report_path}: {describe(exc)}", file=sys.stderr)
            report_path = None

    _print_summary(report, output_dir, report_path)

    if report.errors or write_failures:
        return EXIT_FILE_ERRORS
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
