from enum import Enum
from typing import List
import sys, pathlib
import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

class Result(str, Enum):
    PASS = "PASS"
    FAIL = "FAIL"
    SKIP = "SKIP"

class Test(BaseModel):
    model_config = ConfigDict(frozen=True)
    name: str
    time: int = Field(0, ge=0, description="Elapsed time in milliseconds")
    result: Result
    output: List[str] = Field(default_factory=list)

    @field_validator("result", mode="before")
    @classmethod
    def _upper(cls, v):
        return v.upper() if isinstance(v, str) else v

class Package(BaseModel):
    model_config = ConfigDict(frozen=True)
    name: str
    time: int = Field(0, ge=0, description="Elapsed time in milliseconds")
    coverage_pct: str = Field("", description="Statement coverage, empty if not measured")
    tests: List[Test] = Field(default_factory=list)

    @field_validator("coverage_pct", mode="before")
    @classmethod
    def _coverage_str(cls, v):
        # YAML reads 87.5 as a float
        return "" if v is None else str(v)

class Report(BaseModel):
    model_config = ConfigDict(frozen=True)
    packages: List[Package] = Field(default_factory=list)

    def failures(self) -> int:
        return sum(1 for p in self.packages for t in p.tests if t.result is Result.FAIL)

def load_report(path: str) -> Report:
    """Load a parsed test report from YAML or JSON. ``-`` reads stdin."""
    text = sys.stdin.read() if path == "-" else pathlib.Path(path).read_text()
    data = yaml.safe_load(text) or {}
    return Report.model_validate(data)
