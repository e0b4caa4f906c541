"""
Batch orchestration: partition invariant, input ordering, failure isolation.
"""
import encodingman.batch as batch_mod
from encodingman.batch import run_batch, summarize
from encodingman.model import OutcomeStatus
from encodingman.pipeline import process_file

from conftest import SJIS_AIUEO, UTF8_BOM


def _mixed_inputs(make_file, tmp_path):
    return [
        make_file("a_sjis.csv", SJIS_AIUEO),
        make_file("b_utf8.csv", UTF8_BOM + b"x,y\r\n"),
        make_file("c_book.xlsx", b"PK\x03\x04zip"),
        tmp_path / "d_missing.csv",
        make_file("e_euc.txt", "東京都千代田区\n".encode("euc_jp")),
        make_file("f_plain.txt", b"ascii only\n"),
    ]


def test_second_path_missing(make_file, tmp_path):
    paths = [
        make_file("one.csv", SJIS_AIUEO),
        tmp_path / "two.csv",
        make_file("three.csv", b"plain"),
    ]
    report = run_batch(paths)
    assert report.total == 3
    assert report.errors == 1
    assert [o.path for o in report.outcomes] == paths
    assert report.outcomes[0].status is OutcomeStatus.CONVERTED
    assert report.outcomes[1].status is OutcomeStatus.ERROR
    assert report.outcomes[2].status is OutcomeStatus.ALREADY_UTF8


def test_partition_invariant(make_file, tmp_path):
    paths = _mixed_inputs(make_file, tmp_path)
    report = run_batch(paths)
    assert report.is_consistent()
    assert report.converted + report.already_utf8 + report.binary + report.errors == len(paths)
    assert (report.converted, report.already_utf8, report.binary, report.errors) == (2, 2, 1, 1)


def test_empty_batch():
    report = run_batch([])
    assert report.total == 0
    assert report.is_consistent()


def test_threaded_run_keeps_input_order(make_file, tmp_path):
    paths = _mixed_inputs(make_file, tmp_path) * 3
    sequential = run_batch(paths)
    threaded = run_batch(paths, max_workers=4)
    assert [o.path for o in threaded.outcomes] == paths
    assert [o.status for o in threaded.outcomes] == [o.status for o in sequential.outcomes]
    assert [o.data for o in threaded.outcomes] == [o.data for o in sequential.outcomes]


def test_progress_callback(make_file, tmp_path):
    paths = _mixed_inputs(make_file, tmp_path)
    seen = []
    run_batch(paths, on_progress=lambda done, total, outcome: seen.append((done, total, outcome.path)))
    assert [s[0] for s in seen] == list(range(1, len(paths) + 1))
    assert all(s[1] == len(paths) for s in seen)


def test_unexpected_exception_is_isolated(make_file, monkeypatch):
    good = make_file("good.csv", SJIS_AIUEO)
    bad = make_file("bad.csv", SJIS_AIUEO)

    def flaky(path, config=None, encoding=None):
        if path == bad:
            raise RuntimeError("boom")
        return process_file(path, config, encoding=encoding)

    monkeypatch.setattr(batch_mod, "process_file", flaky)
    report = run_batch([bad, good])
    assert report.outcomes[0].status is OutcomeStatus.ERROR
    assert report.outcomes[0].error == "RuntimeError: boom"
    assert report.outcomes[1].status is OutcomeStatus.CONVERTED
    assert report.is_consistent()


def test_manual_encoding_applies_to_every_file(make_file):
    paths = [make_file("x.txt", "ｶﾅ".encode("cp932")), make_file("y.txt", b"abc")]
    report = run_batch(paths, encoding="Shift_JIS")
    assert report.converted == 2
    assert {o.detected_encoding for o in report.outcomes} == {"Shift_JIS"}


def test_summarize(make_file, tmp_path):
    report = run_batch(_mixed_inputs(make_file, tmp_path))
    assert summarize(report) == (
        "Total: 6 | Converted: 2 | Already UTF-8: 2 | Binary: 1 | Errors: 1"
    )
