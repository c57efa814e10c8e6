from typing import Any, Dict, List, Tuple
from pathlib import Path
from blake3 import blake3
from .dsl.schema import JobSpec, normalize_json
from .errors import ConfigurationError
from .ir.model import IR, Partition
from .partition import check_cover, explicit_partitions, partition_sources
from .sources.csv_source import discover_sources


def derive_seed(job: JobSpec, sources: List[str]) -> str:
    payload = normalize_json(
        {
            "dsl_version": job.version,
            "job_id": job.job_id,
            "sources": sources,
            "threshold": job.threshold,
            "workers": job.workers,
            "policy": "explicit" if job.assignments is not None else job.policy,
            "operators": job.operators.model_dump(),
        }
    )
    return blake3(payload).hexdigest()


def resolve_sources(job: JobSpec) -> List[str]:
    if job.sources is not None:
        return list(job.sources)
    root = Path(job.input_dir)
    if not root.is_dir():
        raise ConfigurationError(f"Input directory {job.input_dir} does not exist")
    return discover_sources(job.input_dir, job.pattern)


def compile_job(job: JobSpec) -> Tuple[IR, Dict[str, Any]]:
    sources = resolve_sources(job)
    if job.assignments is not None:
        # The table must name every listed or discovered source, and nothing else.
        partitions: List[Partition] = explicit_partitions(job.assignments, sources)
    else:
        partitions = partition_sources(sources, job.workers, job.policy)
    if not check_cover(partitions, sources):
        raise ConfigurationError("Partitions do not cover the input sources exactly once")
    seed = derive_seed(job, sources)
    manifest: Dict[str, Any] = {
        "job_id": job.job_id,
        "seed": seed,
        "input_dir": job.input_dir,
        "threshold": job.threshold,
        "policy": "explicit" if job.assignments is not None else job.policy,
        "partitions": [{"task_id": p.task_id, "sources": list(p.sources)} for p in partitions],
        "operators": job.operators.model_dump(),
    }
    ir = IR(partitions=tuple(partitions), threshold=job.threshold, source_root=job.input_dir, manifest=manifest)
    return ir, manifest
