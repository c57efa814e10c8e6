from typing import Dict, List

import pytest

from popreport.errors import SourceParseError
from popreport.ir.model import Record
from popreport.sdk.base import RecordSourceBase


class DictSource(RecordSourceBase):
    def __init__(self, data: Dict[str, List[Record]]):
        self.data = data
        self.reads: List[str] = []

    def read(self, source_id: str) -> List[Record]:
        self.reads.append(source_id)
        if source_id not in self.data:
            raise SourceParseError(source_id, detail="no such source")
        return list(self.data[source_id])


@pytest.fixture
def write_csv(tmp_path):
    def _write(name: str, rows: List[str]):
        p = tmp_path / name
        p.write_text("".join(row + "\n" for row in rows))
        return p

    return _write
