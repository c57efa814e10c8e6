from pydantic import BaseModel, Field, ConfigDict, ValidationError, model_validator
from typing import Any, Dict, List, Optional
import yaml
import orjson

from ..errors import ConfigurationError


class OperatorSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")
    source: str = "popreport.sources.csv_source:CsvRecordSource"
    filter: str = "popreport.operators.filter:ThresholdFilter"
    reduce: str = "popreport.operators.reduce:StateReducer"
    produce: str = "popreport.operators.produce:StdoutProducer"


class JobSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")
    version: str = "v0"
    job_id: str = "popreport"
    input_dir: str
    pattern: str = "*.csv"
    sources: Optional[List[str]] = None  # explicit list; discovered from input_dir when omitted
    threshold: int
    workers: int = Field(default=3, ge=1)
    policy: str = "contiguous"
    assignments: Optional[List[List[str]]] = None  # fixed worker -> sources table
    operators: OperatorSpec = Field(default_factory=OperatorSpec)

    @model_validator(mode="after")
    def _assignments_fix_workers(self) -> "JobSpec":
        if self.assignments is not None:
            self.workers = len(self.assignments)
        return self


def _validate(data: Any) -> JobSpec:
    try:
        return JobSpec.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid job: {e}") from e


def load_yaml(path: str) -> JobSpec:
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot load job file {path}: {e}") from e
    return _validate(data or {})


def job_from_args(input_dir: str, threshold: Any, workers: int = 3, policy: str = "contiguous", produce: Optional[str] = None) -> JobSpec:
    data: Dict[str, Any] = {"input_dir": input_dir, "threshold": threshold, "workers": workers, "policy": policy}
    if produce:
        data["operators"] = {"produce": produce}
    return _validate(data)


def normalize_json(data: Any) -> bytes:
    return orjson.dumps(data, option=orjson.OPT_SORT_KEYS)
