"""Content-addressed store for finished runs.

A saved run is two files under the store root: ``runs/<digest>.json`` holding
the run record, and ``reports/<report_digest>.txt`` holding the report the run
emitted. Nothing from inside the pipeline is stored.
"""

from pathlib import Path
from typing import Any, Dict
from blake3 import blake3
import orjson


STORE_ROOT = Path(".popreport/artifacts")

RUN_FIELDS = ("backend", "job_id", "seed", "threshold", "partitions", "completion_order", "skipped", "record_count", "report_digest")


def digest_text(text: str) -> str:
    return blake3(text.encode("utf-8")).hexdigest()


def digest_record(record: Dict[str, Any]) -> str:
    return blake3(orjson.dumps(record, option=orjson.OPT_SORT_KEYS)).hexdigest()


def put_run_record(record: Dict[str, Any], report: str, root: Path = STORE_ROOT) -> str:
    missing = [f for f in RUN_FIELDS if f not in record]
    if missing:
        raise ValueError(f"Run record is missing {missing}")
    if record["report_digest"] != digest_text(report):
        raise ValueError("Run record does not describe this report")
    (root / "runs").mkdir(parents=True, exist_ok=True)
    (root / "reports").mkdir(parents=True, exist_ok=True)
    report_path = root / "reports" / f"{record['report_digest']}.txt"
    if not report_path.exists():
        report_path.write_text(report, encoding="utf-8")
    d = digest_record(record)
    run_path = root / "runs" / f"{d}.json"
    if not run_path.exists():
        run_path.write_bytes(orjson.dumps(record, option=orjson.OPT_SORT_KEYS))
    return d


def get_run_record(digest: str, root: Path = STORE_ROOT) -> Dict[str, Any]:
    return orjson.loads((root / "runs" / f"{digest}.json").read_bytes())


def get_report(record: Dict[str, Any], root: Path = STORE_ROOT) -> str:
    return (root / "reports" / f"{record['report_digest']}.txt").read_text(encoding="utf-8")
