import pathlib

import pydantic
from typing_extensions import Annotated

from . import errors
from .version import IncrementMode

__all__ = [
    "InvocationConfig",
    "build_config",
]


class InvocationConfig(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(frozen=True)

    filename: Annotated[str, pydantic.Field(description="Path of the target file")]
    mode: IncrementMode = IncrementMode.REVISION

    @pydantic.field_validator("filename")
    @classmethod
    def check_filename(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Version file name must not be empty")
        if not pathlib.Path(v).is_file():
            raise ValueError(f"Couldn't locate file '{v}'")
        return v

    @property
    def path(self) -> pathlib.Path:
        return pathlib.Path(self.filename)


def build_config(filename: str, mode: IncrementMode) -> InvocationConfig:
    try:
        return InvocationConfig(filename=filename, mode=mode)
    except pydantic.ValidationError as e:
        msgs = [err["msg"].removeprefix("Value error, ") for err in e.errors()]
        raise errors.ArgumentError("; ".join(msgs)) from e
