from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class HeaderStoreConfig(BaseModel):
    """Tunables shared by parsing and generation on one header store."""

    # Maximum bytes per physical line, CRLF included. Zero disables the limit.
    line_length_limit: int = 0

    model_config = ConfigDict(validate_assignment=True)

    @field_validator("line_length_limit")
    @classmethod
    def _check_line_length_limit(cls, value: int) -> int:
        if value < 0:
            raise ValueError("line_length_limit must be zero or positive")
        return value
