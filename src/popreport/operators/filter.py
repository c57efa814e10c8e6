import logging
from typing import List, Sequence, Tuple

from ..errors import SourceParseError
from ..ir.model import PartialResult, Partition, Record, SkippedSource
from ..sdk.base import FilterBase, RecordSourceBase

logger = logging.getLogger(__name__)


def _filter(
    sources: Sequence[str], threshold: int, source: RecordSourceBase
) -> Tuple[List[Record], List[SkippedSource]]:
    kept: List[Record] = []
    skipped: List[SkippedSource] = []
    for source_id in sources:
        try:
            records = source.read(source_id)
        except SourceParseError as e:
            # Skip the source and keep going; no retry.
            logger.warning("Skipping source %s: %s", source_id, e.reason)
            skipped.append(SkippedSource(source=source_id, reason=e.reason))
            continue
        kept.extend(r for r in records if r.value >= threshold)
    return kept, skipped


def filter_sources(sources: Sequence[str], threshold: int, source: RecordSourceBase) -> List[Record]:
    """Records from ``sources`` with ``value >= threshold``, in source then file order."""
    kept, _ = _filter(sources, threshold, source)
    return kept


class ThresholdFilter(FilterBase):
    def run(self, partition: Partition, threshold: int, source: RecordSourceBase) -> PartialResult:
        logger.debug("Task %d reading %d source(s)", partition.task_id, len(partition.sources))
        kept, skipped = _filter(partition.sources, threshold, source)
        logger.debug("Task %d kept %d record(s)", partition.task_id, len(kept))
        return PartialResult(task_id=partition.task_id, records=tuple(kept), skipped=tuple(skipped))


class FilterTask:
    """One map task bound to its partition; ``run`` is called on a worker thread."""

    def __init__(self, partition: Partition, threshold: int, source: RecordSourceBase, operator: FilterBase | None = None):
        self.partition = partition
        self.threshold = threshold
        self.source = source
        self.operator = operator or ThresholdFilter()

    @property
    def task_id(self) -> int:
        return self.partition.task_id

    def run(self) -> PartialResult:
        return self.operator.run(self.partition, self.threshold, self.source)
