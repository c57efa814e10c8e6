import pytest

from popreport.artifacts.store import digest_text, get_report, get_run_record, put_run_record


def _record(report):
    return {
        "backend": "local",
        "job_id": "j",
        "seed": "s",
        "threshold": 10,
        "partitions": [{"task_id": 0, "sources": ["a.csv"]}],
        "completion_order": [0],
        "skipped": [],
        "record_count": 1,
        "report_digest": digest_text(report),
    }


def test_saved_run_round_trip(tmp_path):
    report = "CA: 1\n- LA, 5000\n"
    d = put_run_record(_record(report), report, tmp_path)
    assert put_run_record(_record(report), report, tmp_path) == d
    stored = get_run_record(d, tmp_path)
    assert stored["job_id"] == "j"
    assert get_report(stored, tmp_path) == report


def test_rejects_record_that_does_not_match_report(tmp_path):
    with pytest.raises(ValueError):
        put_run_record(_record("CA: 1\n"), "NY: 1\n", tmp_path)
    rec = _record("x")
    del rec["seed"]
    with pytest.raises(ValueError):
        put_run_record(rec, "x", tmp_path)
