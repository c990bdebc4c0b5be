from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import override

from rich.console import Console
from rich.markup import escape

from ...ports import LoggerPort


class LogLevel(IntEnum):
    NORMAL = 0
    VERBOSE = 1
    DEBUG = 2


@dataclass(slots=True)
class LogContext:
    message_id: str = ""
    schema_version: str = ""
    operation: str = ""
    start_time: datetime = field(default_factory=datetime.now)

    def elapsed_ms(self) -> float:
        return (datetime.now() - self.start_time).total_seconds() * 1000


class ConsoleLogger(LoggerPort):
    def __init__(self, console: Console | None = None, verbosity: int = 0) -> None:
        super().__init__()
        self.console = console or Console()
        self.verbosity = verbosity
        self._context: LogContext | None = None
        self._stats: dict[str, int] = {
            "files_written": 0,
            "bytes_written": 0,
            "warnings": 0,
            "errors": 0,
        }

    def set_context(self, **kwargs: str) -> None:
        if self._context is None:
            self._context = LogContext()
        for key, value in kwargs.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)

    def clear_context(self) -> None:
        self._context = None

    @override
    def info(self, message: str, *, level: int = LogLevel.NORMAL) -> None:
        if self.verbosity >= level:
            prefix = self._get_prefix()
            self.console.print(f"{prefix}{message}")

    @override
    def verbose(self, message: str) -> None:
        if self.verbosity >= LogLevel.VERBOSE:
            prefix = self._get_prefix()
            self.console.print(f"[dim]{prefix}{message}[/dim]")

    @override
    def debug(self, message: str) -> None:
        if self.verbosity >= LogLevel.DEBUG:
            prefix = self._get_prefix()
            self.console.print(f"[dim cyan]{prefix}{message}[/dim cyan]")

    @override
    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    @override
    def warning(self, message: str) -> None:
        self._stats["warnings"] += 1
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    @override
    def error(self, message: str) -> None:
        self._stats["errors"] += 1
        self.console.print(f"[red]✗[/red] {message}")

    def record_message_written(self, path: Path, size: int) -> None:
        self._stats["files_written"] += 1
        self._stats["bytes_written"] += size
        self.verbose(f"Recorded {path.name}")
        if self._context is not None:
            self.debug(f"  Elapsed: {self._context.elapsed_ms():.1f} ms")

    def log_final_stats(self) -> None:
        self.console.print()
        self.console.print(
            f"[bold]Files written:[/bold] {self._stats['files_written']} "
            f"({self._stats['bytes_written']:,} bytes)"
        )
        if self._stats["warnings"]:
            self.console.print(f"[yellow]Warnings:[/yellow] {self._stats['warnings']}")
        if self._stats["errors"]:
            self.console.print(f"[red]Errors:[/red] {self._stats['errors']}")

    def _get_prefix(self) -> str:
        if self._context is None or self.verbosity < LogLevel.DEBUG:
            return ""
        parts: list[str] = []
        if self._context.schema_version:
            parts.append(f"ERN {self._context.schema_version}")
        if self._context.message_id:
            parts.append(self._context.message_id)
        if self._context.operation:
            parts.append(self._context.operation)
        return escape(f"[{' | '.join(parts)}] ") if parts else ""
