from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence

from ..ir.model import PartialResult, Partition, Record


class RecordSourceBase(ABC):
    @abstractmethod
    def read(self, source_id: str) -> List[Record]:
        ...


class FilterBase(ABC):
    @abstractmethod
    def run(self, partition: Partition, threshold: int, source: RecordSourceBase) -> PartialResult:
        ...


class ReducerBase(ABC):
    @abstractmethod
    def run(self, records: Sequence[Record]) -> str:
        ...


class ProducerBase(ABC):
    @abstractmethod
    def run(self, report: str) -> Dict[str, Any]:
        ...
