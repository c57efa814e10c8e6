"""Static assignment of input sources to filter tasks.

Assignments are fixed before any task starts; there is no rebalancing at
runtime. Every policy returns exactly ``workers`` partitions, some of which may
be empty when there are fewer sources than workers.
"""

from typing import Callable, Dict, List, Sequence

from .errors import ConfigurationError
from .ir.model import Partition


PolicyFn = Callable[[Sequence[str], int], List[List[str]]]


def contiguous(sources: Sequence[str], workers: int) -> List[List[str]]:
    per_task, remainder = divmod(len(sources), workers)
    chunks: List[List[str]] = []
    start = 0
    for idx in range(workers):
        end = start + per_task + (1 if idx < remainder else 0)
        chunks.append(list(sources[start:end]))
        start = end
    return chunks


def round_robin(sources: Sequence[str], workers: int) -> List[List[str]]:
    chunks: List[List[str]] = [[] for _ in range(workers)]
    for i, source in enumerate(sources):
        chunks[i % workers].append(source)
    return chunks


POLICIES: Dict[str, PolicyFn] = {
    "contiguous": contiguous,
    "round_robin": round_robin,
}


def _check_unique(sources: Sequence[str]) -> None:
    seen = set()
    for s in sources:
        if s in seen:
            raise ConfigurationError(f"Duplicate source: {s}")
        seen.add(s)


def partition_sources(sources: Sequence[str], workers: int, policy: str = "contiguous") -> List[Partition]:
    if workers < 1:
        raise ConfigurationError(f"workers must be >= 1, got {workers}")
    if policy not in POLICIES:
        raise ConfigurationError(f"Unknown partition policy {policy!r}; expected one of {sorted(POLICIES)}")
    _check_unique(sources)
    chunks = POLICIES[policy](list(sources), workers)
    return [Partition(task_id=i, sources=tuple(chunk)) for i, chunk in enumerate(chunks)]


def explicit_partitions(assignments: Sequence[Sequence[str]], sources: Sequence[str] | None = None) -> List[Partition]:
    """Build partitions from a fixed worker -> sources table.

    When ``sources`` is given the table must cover it exactly: every source in
    one task, nothing extra.
    """
    if not assignments:
        raise ConfigurationError("assignments must name at least one task")
    flat = [s for chunk in assignments for s in chunk]
    _check_unique(flat)
    if sources is not None:
        missing = set(sources) - set(flat)
        extra = set(flat) - set(sources)
        if missing or extra:
            raise ConfigurationError(
                f"assignments do not match sources (missing={sorted(missing)}, unknown={sorted(extra)})"
            )
    return [Partition(task_id=i, sources=tuple(chunk)) for i, chunk in enumerate(assignments)]


def check_cover(partitions: Sequence[Partition], sources: Sequence[str]) -> bool:
    assigned = [s for p in partitions for s in p.sources]
    return len(assigned) == len(set(assigned)) and set(assigned) == set(sources)
