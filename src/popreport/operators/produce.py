import sys
from pathlib import Path
from typing import Any, Dict

from ..sdk.base import ProducerBase


class StdoutProducer(ProducerBase):
    def run(self, report: str) -> Dict[str, Any]:
        sys.stdout.write(report)
        sys.stdout.flush()
        return {"emitted": "stdout", "bytes": len(report.encode("utf-8"))}


class FileProducer(ProducerBase):
    # Writes into the current directory; the runtime chdirs into the run's output dir.
    writes_files = True
    filename = "report.txt"

    def run(self, report: str) -> Dict[str, Any]:
        Path(self.filename).write_text(report, encoding="utf-8")
        return {"emitted": "file", "path": self.filename, "bytes": len(report.encode("utf-8"))}


class NullProducer(ProducerBase):
    def run(self, report: str) -> Dict[str, Any]:
        return {"emitted": None, "bytes": len(report.encode("utf-8"))}
