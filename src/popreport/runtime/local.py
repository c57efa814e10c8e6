from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Sequence
import importlib
import logging
import os

from ..artifacts.store import digest_text, put_run_record
from ..ir.model import IR, CombinedResult, PartialResult, Record, SkippedSource
from ..operators.filter import FilterTask

logger = logging.getLogger(__name__)


def _load(path: str):
    mod_name, cls_name = path.rsplit(":", 1) if ":" in path else path.rsplit(".", 1)
    mod = importlib.import_module(mod_name)
    return getattr(mod, cls_name)


def aggregate(tasks: Sequence[FilterTask], max_workers: int | None = None) -> CombinedResult:
    """Run every task on its own thread and merge the partials once all are done.

    Each future carries exactly one partial back to this thread; only the
    collector loop below touches the combined buffers. Partials are appended in
    completion order. There is no timeout: a task that never returns blocks
    the caller.
    """
    if not tasks:
        return CombinedResult(records=(), skipped=(), completion_order=())
    records: List[Record] = []
    skipped: List[SkippedSource] = []
    order: List[int] = []
    with ThreadPoolExecutor(max_workers=max_workers or len(tasks), thread_name_prefix="filter") as ex:
        futs = {ex.submit(t.run): t.task_id for t in tasks}
        for fut in as_completed(futs):
            partial: PartialResult = fut.result()
            logger.info("Task %d finished: %d record(s), %d skipped", futs[fut], len(partial.records), len(partial.skipped))
            records.extend(partial.records)
            skipped.extend(partial.skipped)
            order.append(futs[fut])
    return CombinedResult(records=tuple(records), skipped=tuple(skipped), completion_order=tuple(order))


def build_tasks(ir: IR) -> List[FilterTask]:
    Source = _load(ir.manifest["operators"]["source"])
    Filter = _load(ir.manifest["operators"]["filter"])
    source = Source(ir.source_root)
    return [FilterTask(p, ir.threshold, source, Filter()) for p in ir.partitions]


def run_ir(ir: IR, max_workers: int | None = None, save: bool = False, home: str = ".popreport") -> Dict[str, Any]:
    Reducer = _load(ir.manifest["operators"]["reduce"])
    Producer = _load(ir.manifest["operators"]["produce"])

    tasks = build_tasks(ir)
    logger.info("Launching %d filter task(s) with threshold %d", len(tasks), ir.threshold)
    combined = aggregate(tasks, max_workers=max_workers)

    report = Reducer().run(combined.records)

    output_dir = None
    if getattr(Producer, "writes_files", False):
        output_dir = Path(home) / "outputs" / ir.manifest.get("job_id", "job") / datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        output_dir.mkdir(parents=True, exist_ok=True)
        cwd = os.getcwd()
        try:
            os.chdir(output_dir)
            produce_out = Producer().run(report)
        finally:
            os.chdir(cwd)
    else:
        produce_out = Producer().run(report)

    run_record = {
        "backend": "local",
        "job_id": ir.manifest.get("job_id"),
        "seed": ir.manifest.get("seed"),
        "threshold": ir.threshold,
        "output_dir": str(output_dir) if output_dir else None,
        "partitions": ir.manifest.get("partitions", []),
        "completion_order": list(combined.completion_order),
        "skipped": [{"source": s.source, "reason": s.reason} for s in combined.skipped],
        "record_count": len(combined.records),
        "report_digest": digest_text(report),
        "produce": produce_out,
    }
    result: Dict[str, Any] = {"report": report, "record": run_record, "skipped": list(combined.skipped)}
    if save:
        result["run_digest"] = put_run_record(run_record, report, Path(home) / "artifacts")
    return result
