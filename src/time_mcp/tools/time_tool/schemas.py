"""Tool names, argument models and the response envelope.

Each tool's argument model is both its published JSON schema and the
decoder that turns an untyped argument mapping into typed fields.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ToolName(StrEnum):
    """The closed catalog of time tools."""

    CURRENT_TIME = "current_time"
    RELATIVE_TIME = "relative_time"
    DAYS_IN_MONTH = "days_in_month"
    GET_TIMESTAMP = "get_timestamp"
    CONVERT_TIME = "convert_time"
    GET_WEEK_YEAR = "get_week_year"


# ---------------------------------------------------------------------------
# Arguments
# ---------------------------------------------------------------------------


class ToolArguments(BaseModel):
    """Base for argument models: primitive types only, no coercion."""

    model_config = ConfigDict(strict=True, extra="ignore", populate_by_name=True)


class CurrentTimeArgs(ToolArguments):
    format: str = Field(
        description=(
            "Output format. Day.js-style tokens such as 'YYYY-MM-DD HH:mm:ss', "
            "or a strftime pattern when it contains '%'."
        ),
    )
    timezone: str | None = Field(
        default=None,
        description="IANA timezone name (e.g. 'Asia/Tokyo'). Defaults to the server's zone.",
    )


class RelativeTimeArgs(ToolArguments):
    time: str = Field(description="ISO 8601 time, e.g. '2025-03-23T12:30:00'.")


class DaysInMonthArgs(ToolArguments):
    date: str | None = Field(
        default=None,
        description="ISO 8601 date, e.g. '2025-02-01'. Defaults to today.",
    )


class GetTimestampArgs(ToolArguments):
    time: str | None = Field(
        default=None,
        description="ISO 8601 time, parsed as UTC when it has no offset. Defaults to now.",
    )


class ConvertTimeArgs(ToolArguments):
    source_timezone: str = Field(
        alias="sourceTimezone",
        description="IANA timezone to convert from, e.g. 'Asia/Kolkata'.",
    )
    target_timezone: str = Field(
        alias="targetTimezone",
        description="IANA timezone to convert to, e.g. 'Europe/London'.",
    )
    time: str | None = Field(
        default=None,
        description="ISO 8601 time, parsed as UTC when it has no offset. Defaults to now.",
    )


class GetWeekYearArgs(ToolArguments):
    date: str | None = Field(
        default=None,
        description="ISO 8601 date, e.g. '2025-01-01'. Defaults to today.",
    )


# ---------------------------------------------------------------------------
# Response envelope
# ---------------------------------------------------------------------------


class TextBlock(BaseModel):
    """A single text content block."""

    type: Literal["text"] = "text"
    text: str


class ToolResponse(BaseModel):
    """Result of one tool call: exactly one text block, success or failure."""

    success: bool
    content: list[TextBlock]

    @classmethod
    def ok(cls, text: str) -> ToolResponse:
        return cls(success=True, content=[TextBlock(text=text)])

    @classmethod
    def failure(cls, text: str) -> ToolResponse:
        return cls(success=False, content=[TextBlock(text=text)])

    @property
    def text(self) -> str:
        return self.content[0].text
