from typing import Literal
from pydantic import BaseModel, Field, field_validator
import yaml, pathlib

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]

class FormatterConfig(BaseModel):
    no_xml_header: bool = Field(False, description="Do not write the <?xml ...?> declaration")
    go_version: str = Field("", description="Value of the go.version property; empty asks the Go toolchain")
    log_level: LogLevel = Field("WARNING")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper(cls, v):
        return v.upper() if isinstance(v, str) else v

def load_config(path: str) -> FormatterConfig:
    data = yaml.safe_load(pathlib.Path(path).read_text()) or {}
    return FormatterConfig.model_validate(data)
