"""Structured logging with JSON or key=value text output."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Any, Callable, Protocol, TextIO

RFC3339 = "%Y-%m-%dT%H:%M:%S%z"

_BAD_KEY = "!BADKEY"
_THIS_FILE = __file__


class Level(IntEnum):
    """Severity levels, ordered so that higher values are more severe."""

    DEBUG = -4
    INFO = 0
    WARN = 4
    ERROR = 8


def _level_name(value: int) -> str:
    for base in (Level.ERROR, Level.WARN, Level.INFO, Level.DEBUG):
        if value >= base:
            offset = value - base
            return base.name if offset == 0 else f"{base.name}{offset:+d}"
    return f"{Level.DEBUG.name}{value - Level.DEBUG:+d}"


@dataclass
class LoggerConfig:
    """Settings used to build a logger."""

    level: int = Level.INFO
    output: TextIO | None = None
    format: str = "json"
    add_source: bool = False
    with_time: bool = True
    time_format: str = RFC3339


Option = Callable[[LoggerConfig], None]


def _format_time(moment: datetime, fmt: str) -> str:
    if fmt == RFC3339:
        return moment.isoformat(timespec="seconds")
    return moment.strftime(fmt)


def _pairs(args: tuple[Any, ...]) -> list[tuple[str, Any]]:
    pairs: list[tuple[str, Any]] = []
    items = iter(args)
    for key in items:
        if isinstance(key, str):
            try:
                pairs.append((key, next(items)))
            except StopIteration:
                pairs.append((_BAD_KEY, key))
        else:
            pairs.append((_BAD_KEY, key))
    return pairs


def _text_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    text = value if isinstance(value, str) else str(value)
    if text == "" or any(ch.isspace() or ch in '"=' or not ch.isprintable() for ch in text):
        return json.dumps(text, ensure_ascii=False)
    return text


class _Handler(Protocol):
    def enabled(self, level: int) -> bool: ...

    def handle(self, level: int, msg: str, args: tuple[Any, ...], source: dict | None) -> None: ...


@dataclass
class _StreamHandler:
    config: LoggerConfig
    stream: TextIO = field(init=False)

    def __post_init__(self) -> None:
        self.stream = self.config.output if self.config.output is not None else sys.stdout

    def enabled(self, level: int) -> bool:
        return level >= self.config.level

    def handle(self, level: int, msg: str, args: tuple[Any, ...], source: dict | None) -> None:
        now = datetime.now().astimezone()
        record: list[tuple[str, Any]] = [
            ("time", now.isoformat(timespec="milliseconds")),
            ("level", _level_name(level)),
        ]
        if self.config.add_source and source is not None:
            record.append(("source", source))
        record.append(("msg", msg))
        record.extend(_pairs(args))
        if self.config.with_time and self.config.time_format != RFC3339:
            record.append(("time_formatted", _format_time(now, self.config.time_format)))

        if self.config.format == "text":
            parts = []
            for key, value in record:
                if isinstance(value, dict):
                    parts.extend(f"{key}.{k}={_text_value(v)}" for k, v in value.items())
                else:
                    parts.append(f"{key}={_text_value(value)}")
            line = " ".join(parts)
        else:
            line = json.dumps(dict(record), default=str, ensure_ascii=False)
        self.stream.write(line + "\n")


class Logger:
    """Logger that writes structured records through a handler.

    A logger without a handler discards every record.
    """

    def __init__(self, handler: _Handler | None) -> None:
        self._handler = handler

    def enabled(self, level: int) -> bool:
        """Report whether records at ``level`` would be written."""
        return self._handler is not None and self._handler.enabled(level)

    def log(self, level: int, msg: str, *args: Any) -> None:
        """Write a record at ``level`` with alternating key/value arguments."""
        if self._handler is None or not self._handler.enabled(level):
            return
        self._handler.handle(int(level), msg, args, self._caller())

    def info(self, msg: str, *args: Any) -> None:
        self.log(Level.INFO, msg, *args)

    def error(self, msg: str, *args: Any) -> None:
        self.log(Level.ERROR, msg, *args)

    def warn(self, msg: str, *args: Any) -> None:
        self.log(Level.WARN, msg, *args)

    def debug(self, msg: str, *args: Any) -> None:
        self.log(Level.DEBUG, msg, *args)

    @staticmethod
    def _caller() -> dict | None:
        frame = sys._getframe(1)
        while frame is not None and frame.f_code.co_filename == _THIS_FILE:
            frame = frame.f_back
        if frame is None:
            return None
        code = frame.f_code
        return {"function": code.co_name, "file": code.co_filename, "line": frame.f_lineno}


def default_config() -> LoggerConfig:
    """Return the default configuration: INFO, stdout, JSON, RFC 3339 time."""
    return LoggerConfig(
        level=Level.INFO,
        output=sys.stdout,
        format="json",
        add_source=False,
        with_time=True,
        time_format=RFC3339,
    )


def new_logger(config: LoggerConfig) -> Logger:
    """Build a logger from ``config``; unknown formats fall back to JSON."""
    return Logger(_StreamHandler(config))


def new_with_options(*args: Option) -> Logger:
    """Build a logger from the default configuration adjusted by options."""
    config = default_config()
    for option in args:
        option(config)
    return new_logger(config)


def new_with_format(output: TextIO, level: int, fmt: str) -> Logger:
    config = default_config()
    config.output = output
    config.format = fmt
    config.level = level
    return new_logger(config)


def new_json(output: TextIO, level: int) -> Logger:
    return new_with_format(output, level, "json")


def new_text(output: TextIO, level: int) -> Logger:
    return new_with_format(output, level, "text")


def new_default() -> Logger:
    return new_logger(default_config())


def new_json_default() -> Logger:
    config = default_config()
    config.format = "json"
    return new_logger(config)


def new_text_default() -> Logger:
    config = default_config()
    config.format = "text"
    return new_logger(config)


def noop_logger() -> Logger:
    """Return a logger that discards every record."""
    return Logger(None)


def with_level(level: int) -> Option:
    def apply(config: LoggerConfig) -> None:
        config.level = level

    return apply


def with_output(output: TextIO) -> Option:
    def apply(config: LoggerConfig) -> None:
        config.output = output

    return apply


def with_format(fmt: str) -> Option:
    def apply(config: LoggerConfig) -> None:
        config.format = fmt

    return apply


def with_source(enabled: bool) -> Option:
    def apply(config: LoggerConfig) -> None:
        config.add_source = enabled

    return apply


def with_time(enabled: bool) -> Option:
    def apply(config: LoggerConfig) -> None:
        config.with_time = enabled

    return apply


def with_time_format(fmt: str) -> Option:
    def apply(config: LoggerConfig) -> None:
        config.time_format = fmt

    return apply


def with_json_format() -> Option:
    return with_format("json")


def with_text_format() -> Option:
    return with_format("text")


def with_stdout() -> Option:
    return with_output(sys.stdout)


def with_stderr() -> Option:
    return with_output(sys.stderr)