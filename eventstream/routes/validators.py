"""Pydantic models for query-string validation."""

from pydantic import BaseModel, Field, field_validator

from ..sse.stream import parse_retry


class StreamParams(BaseModel):
    event: str = Field(default="tick", min_length=1, max_length=64, pattern=r"^[^\r\n]+$")
    count: int = Field(default=10, ge=1, le=1000)
    interval: float | None = Field(default=None, ge=0, le=60)
    retry: int | None = None

    @field_validator("retry", mode="before")
    @classmethod
    def validate_retry(cls, v):
        if v is None or v == "":
            return None
        return parse_retry(v)
