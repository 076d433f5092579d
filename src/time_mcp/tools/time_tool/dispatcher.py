"""
Tool Dispatcher - decode, compute, and wrap one tool call.

The dispatcher never raises: unknown names, malformed arguments and
calculation failures all come back as a ToolResponse with success=False.

Usage:
    dispatcher = ToolDispatcher(default_timezone="Europe/Berlin")
    response = dispatcher.dispatch("convert_time", {
        "sourceTimezone": "Asia/Kolkata",
        "targetTimezone": "Asia/Kathmandu",
    })
    response.success  # True
    response.text     # "Current time in Asia/Kolkata is ..."
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from time_mcp.config import guess_local_timezone
from time_mcp.errors import InvalidArgumentsError, TimeToolError, UnknownToolError
from time_mcp.observability import clear_trace_context, set_trace_context

from . import calculations
from .schemas import (
    ConvertTimeArgs,
    CurrentTimeArgs,
    DaysInMonthArgs,
    GetTimestampArgs,
    GetWeekYearArgs,
    RelativeTimeArgs,
    ToolArguments,
    ToolName,
    ToolResponse,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class ToolSpec:
    """Catalog entry: what the tool is called, what it says, what it takes."""

    name: ToolName
    description: str
    arguments: type[ToolArguments]


TOOL_CATALOG: dict[ToolName, ToolSpec] = {
    spec.name: spec
    for spec in (
        ToolSpec(
            ToolName.CURRENT_TIME,
            "Get the current date and time in UTC and in a given timezone, "
            "formatted with the given pattern.",
            CurrentTimeArgs,
        ),
        ToolSpec(
            ToolName.RELATIVE_TIME,
            "Get how far a time is from now in words, e.g. '3 hours ago' or 'in 2 days'.",
            RelativeTimeArgs,
        ),
        ToolSpec(
            ToolName.DAYS_IN_MONTH,
            "Get the number of days in the month of a date (defaults to today).",
            DaysInMonthArgs,
        ),
        ToolSpec(
            ToolName.GET_TIMESTAMP,
            "Get the Unix timestamp in milliseconds of a time (defaults to now).",
            GetTimestampArgs,
        ),
        ToolSpec(
            ToolName.CONVERT_TIME,
            "Convert a time between two timezones and report the difference "
            "between their UTC offsets.",
            ConvertTimeArgs,
        ),
        ToolSpec(
            ToolName.GET_WEEK_YEAR,
            "Get the week of the year (Sunday-start) and the ISO 8601 week of a date "
            "(defaults to today).",
            GetWeekYearArgs,
        ),
    )
}

if set(TOOL_CATALOG) != set(ToolName):
    raise RuntimeError(f"Tool catalog is missing: {set(ToolName) - set(TOOL_CATALOG)}")


class ToolDispatcher:
    """
    Routes a named tool call to its calculation.

    Holds only immutable settings, so one instance can serve concurrent
    calls.

    Args:
        default_timezone: Zone used when current_time gets no timezone and
            for naive dates/times in relative_time, days_in_month and
            get_week_year. Defaults to the host's zone.
        clock: Returns the current aware datetime. Called once per dispatch.
    """

    def __init__(self, default_timezone: str | None = None, clock: Clock = utc_now):
        self.default_timezone = default_timezone or guess_local_timezone()
        self._clock = clock
        self._handlers: dict[ToolName, Callable[[Any, datetime], str]] = {
            ToolName.CURRENT_TIME: self._current_time,
            ToolName.RELATIVE_TIME: self._relative_time,
            ToolName.DAYS_IN_MONTH: self._days_in_month,
            ToolName.GET_TIMESTAMP: self._get_timestamp,
            ToolName.CONVERT_TIME: self._convert_time,
            ToolName.GET_WEEK_YEAR: self._get_week_year,
        }

    def dispatch(self, name: str, arguments: Any = None) -> ToolResponse:
        """Run one tool call and wrap the outcome in a ToolResponse."""
        set_trace_context(tool=name, call_id=uuid.uuid4().hex)
        started = time.perf_counter()
        try:
            tool = self._resolve(name)
            args = self._decode(tool, arguments)
            text = self._handlers[tool](args, self._clock())
        except TimeToolError as e:
            logger.info("Tool call failed: %s", e, extra={"event": "tool_failed"})
            return ToolResponse.failure(str(e))
        except Exception as e:
            logger.exception("Unexpected error in tool %s", name, extra={"event": "tool_crashed"})
            return ToolResponse.failure(f"Unexpected error in tool {name}: {e}")
        else:
            latency_ms = round((time.perf_counter() - started) * 1000, 3)
            logger.debug(
                "Tool call succeeded",
                extra={"event": "tool_succeeded", "latency_ms": latency_ms},
            )
            return ToolResponse.ok(text)
        finally:
            clear_trace_context()

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    @staticmethod
    def _resolve(name: str) -> ToolName:
        try:
            return ToolName(name)
        except ValueError:
            raise UnknownToolError(str(name)) from None

    @staticmethod
    def _decode(tool: ToolName, arguments: Any) -> ToolArguments:
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, Mapping):
            raise InvalidArgumentsError(tool, "arguments must be an object")
        try:
            return TOOL_CATALOG[tool].arguments.model_validate(dict(arguments))
        except ValidationError as e:
            logger.warning("Rejected arguments for %s: %s", tool, e.errors(include_url=False))
            raise InvalidArgumentsError(tool, str(e)) from e

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _current_time(self, args: CurrentTimeArgs, now: datetime) -> str:
        timezone = args.timezone if args.timezone is not None else self.default_timezone
        result = calculations.current_time(args.format, timezone, now=now)
        return (
            f"Current UTC time is {result.utc}, "
            f"and the time in {result.timezone} is {result.local}."
        )

    def _relative_time(self, args: RelativeTimeArgs, now: datetime) -> str:
        return calculations.relative_time(
            args.time, now=now, default_timezone=self.default_timezone
        )

    def _days_in_month(self, args: DaysInMonthArgs, now: datetime) -> str:
        days = calculations.days_in_month(
            args.date, now=now, default_timezone=self.default_timezone
        )
        return f"The number of days in month is {days}."

    def _get_timestamp(self, args: GetTimestampArgs, now: datetime) -> str:
        timestamp = calculations.get_timestamp(args.time, now=now)
        if args.time is not None:
            return f"The timestamp of {args.time} (parsed as UTC) is {timestamp} ms."
        return f"The current timestamp is {timestamp} ms."

    def _convert_time(self, args: ConvertTimeArgs, now: datetime) -> str:
        result = calculations.convert_time(
            args.source_timezone, args.target_timezone, args.time, now=now
        )
        return (
            f"Current time in {args.source_timezone} is {result.source_time}, "
            f"and the time in {args.target_timezone} is {result.target_time}. "
            f"The time difference is {result.time_diff}."
        )

    def _get_week_year(self, args: GetWeekYearArgs, now: datetime) -> str:
        result = calculations.week_of_year(
            args.date, now=now, default_timezone=self.default_timezone
        )
        return (
            f"The week of the year is {result.week}, "
            f"and the isoWeek of the year is {result.iso_week}."
        )
