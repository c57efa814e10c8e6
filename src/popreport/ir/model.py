from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Record:
    key: str  # state
    label: str  # city
    value: int  # population


@dataclass(frozen=True)
class Partition:
    task_id: int
    sources: Tuple[str, ...]


@dataclass(frozen=True)
class SkippedSource:
    source: str
    reason: str


@dataclass(frozen=True)
class PartialResult:
    task_id: int
    records: Tuple[Record, ...] = ()
    skipped: Tuple[SkippedSource, ...] = ()


@dataclass(frozen=True)
class CombinedResult:
    records: Tuple[Record, ...]
    skipped: Tuple[SkippedSource, ...]
    completion_order: Tuple[int, ...]


@dataclass(frozen=True)
class Group:
    key: str
    frequency: int
    members: Tuple[Record, ...]


@dataclass(frozen=True)
class IR:
    partitions: Tuple[Partition, ...]
    threshold: int
    source_root: str
    manifest: Dict[str, Any] = field(default_factory=dict)
