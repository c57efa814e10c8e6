import csv
import re
from pathlib import Path
from typing import List

from ..errors import SourceParseError
from ..ir.model import Record
from ..sdk.base import RecordSourceBase


def _natural_key(name: str):
    return [int(part) if part.isdigit() else part for part in re.split(r"(\d+)", name)]


def discover_sources(root: str, pattern: str = "*.csv") -> List[str]:
    base = Path(root)
    names = [p.name for p in base.glob(pattern) if p.is_file()]
    return sorted(names, key=_natural_key)


def parse_rows(source_id: str, rows) -> List[Record]:
    # Columns are city, state, population; one bad row fails the whole source.
    records: List[Record] = []
    for lineno, row in enumerate(rows, start=1):
        if not row or all(not cell.strip() for cell in row):
            continue
        if len(row) < 3:
            raise SourceParseError(source_id, detail=f"line {lineno}: expected 3 columns, got {len(row)}")
        city, state, population = (cell.strip() for cell in row[:3])
        try:
            value = int(population)
        except ValueError as e:
            raise SourceParseError(source_id, cause=e, detail=f"line {lineno}: invalid population {population!r}") from e
        records.append(Record(key=state, label=city, value=value))
    return records


class CsvRecordSource(RecordSourceBase):
    def __init__(self, root: str = "."):
        self.root = Path(root)

    def read(self, source_id: str) -> List[Record]:
        path = self.root / source_id
        try:
            with open(path, "r", newline="", encoding="utf-8-sig") as f:
                return parse_rows(source_id, csv.reader(f))
        except SourceParseError:
            raise
        except (OSError, csv.Error, UnicodeDecodeError) as e:
            raise SourceParseError(source_id, cause=e) from e
