from datetime import time
from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel

HHMM = Annotated[str, StringConstraints(pattern=r"^([0-1][0-9]|2[0-3]):([0-5][0-9])$")]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def parse_hhmm(value: str | None) -> time | None:
    return time.fromisoformat(value) if value else None


def format_hhmm(value: time | None) -> str | None:
    return value.strftime("%H:%M") if value is not None else None
