"""
CLI orchestration through main.main(argv).
"""
import csv
import json

import main as cli

from conftest import SJIS_AIUEO, UTF8_BOM


def test_list_encodings(capsys):
    assert cli.main(["--list-encodings"]) == cli.EXIT_OK
    lines = capsys.readouterr().out.split()
    assert lines[:2] == ["Shift_JIS", "UTF-8"]
    assert len(lines) == 7


def test_no_inputs_is_a_usage_error(capsys):
    assert cli.main([]) == cli.EXIT_USAGE
    assert "[ERR]" in capsys.readouterr().err


def test_unknown_forced_encoding_is_a_usage_error(sjis_file, capsys):
    assert cli.main([str(sjis_file), "--encoding", "klingon"]) == cli.EXIT_USAGE
    assert "Unknown encoding: klingon" in capsys.readouterr().err


def test_bad_workers_is_a_usage_error(sjis_file):
    assert cli.main([str(sjis_file), "--workers", "0"]) == cli.EXIT_USAGE


def test_converts_directory_into_output_dir(make_file, tmp_path, capsys):
    make_file("in/a.csv", SJIS_AIUEO)
    make_file("in/b.csv", UTF8_BOM + b"ok")
    make_file("in/c.xlsx", b"PK\x03\x04")
    out_dir = tmp_path / "out"
    report = tmp_path / "report.csv"

    code = cli.main([str(tmp_path / "in"), "--output-dir", str(out_dir), "--report", str(report)])

    assert code == cli.EXIT_OK
    assert (out_dir / "a_utf8.csv").read_bytes() == UTF8_BOM + "あいうえお\n".encode("utf-8")
    assert sorted(p.name for p in out_dir.iterdir()) == ["a_utf8.csv"]
    with report.open(encoding="utf-8", newline="") as f:
        statuses = [row[2] for row in csv.reader(f)][1:]
    assert statuses == ["converted", "already_utf8", "binary"]
    out = capsys.readouterr().out
    assert "Shift_JIS -> UTF-8 BOM" in out
    assert "Converted: 1 | Already UTF-8: 1 | Binary: 1 | Errors: 0" in out


def test_missing_input_sets_error_exit_code(sjis_file, tmp_path, capsys):
    code = cli.main([str(sjis_file), str(tmp_path / "missing.csv")])
    assert code == cli.EXIT_FILE_ERRORS
    captured = capsys.readouterr()
    assert "NotFound" in captured.err
    assert "dry-run" in captured.out


def test_preview_flag_and_config_file(sjis_file, tmp_path, capsys):
    cfg = tmp_path / "params.json"
    cfg.write_text(json.dumps({"preview_lines": 1, "confidence_threshold": 0.99}), encoding="utf-8")
    assert cli.main([str(sjis_file), "--preview", "--config", str(cfg)]) == cli.EXIT_OK
    out = capsys.readouterr().out
    assert "    | あいうえお" in out
    assert "(low confidence)" in out


def test_invalid_config_value_is_a_usage_error(sjis_file, tmp_path):
    cfg = tmp_path / "params.json"
    cfg.write_text(json.dumps({"confidence_threshold": 3}), encoding="utf-8")
    assert cli.main([str(sjis_file), "--config", str(cfg)]) == cli.EXIT_USAGE


def test_unwritable_report_path_is_reported(sjis_file, tmp_path, capsys):
    # A directory cannot be opened as the CSV file.
    code = cli.main([str(sjis_file), "--report", str(tmp_path)])
    assert code == cli.EXIT_FILE_ERRORS
    assert "[ERR] Failed to write report" in capsys.readouterr().err
