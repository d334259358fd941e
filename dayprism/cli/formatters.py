"""Output formatter abstractions for CLI commands."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Mapping, MutableSequence, Sequence, TextIO

from rich.box import SIMPLE
from rich.console import Console
from rich.table import Table


class OutputFormatter:
    """Protocol-like base class for CLI output formatters."""

    name: str

    def render(
        self,
        rows: Sequence[Mapping[str, object]],
        *,
        stream: TextIO,
        columns: Sequence[str] | None = None,
        caption: str | None = None,
    ) -> None:
        """Render the provided rows to the target stream."""

        raise NotImplementedError


@dataclass(slots=True)
class TableFormatter(OutputFormatter):
    """Render output as a Rich table."""

    name: str = "table"
    no_color: bool = False

    def render(
        self,
        rows: Sequence[Mapping[str, object]],
        *,
        stream: TextIO,
        columns: Sequence[str] | None = None,
        caption: str | None = None,
    ) -> None:
        console = Console(file=stream, color_system=None if self.no_color else "auto", no_color=self.no_color)

        resolved_columns: MutableSequence[str]
        if columns:
            resolved_columns = list(columns)
        elif rows:
            resolved_columns = list(rows[0].keys())
        else:
            resolved_columns = []

        if not rows:
            if resolved_columns:
                console.print(self._create_table(resolved_columns, caption))
            console.print("No data available.")
            return

        table = self._create_table(resolved_columns, caption)
        for row in rows:
            table.add_row(*(self._format_cell(row.get(column)) for column in resolved_columns))
        console.print(table)

    def _create_table(self, columns: Sequence[str], caption: str | None = None) -> Table:
        table = Table(box=SIMPLE, show_lines=False, caption=caption)
        header_style = "" if self.no_color else "bold"
        for column in columns:
            justify = "left" if column == "day" else "right"
            table.add_column(column, header_style=header_style, justify=justify)
        return table

    def _format_cell(self, value: object) -> str:
        if value is None:
            return "-"
        if isinstance(value, float):
            return f"{value:.4f}"
        return str(value)


@dataclass(slots=True)
class JsonlFormatter(OutputFormatter):
    """Render output as JSON lines, one object per row."""

    name: str = "jsonl"

    def render(
        self,
        rows: Sequence[Mapping[str, object]],
        *,
        stream: TextIO,
        columns: Sequence[str] | None = None,
        caption: str | None = None,
    ) -> None:
        for row in rows:
            payload = {column: row.get(column) for column in columns} if columns else dict(row)
            stream.write(json.dumps(payload, ensure_ascii=False, default=str))
            stream.write("\n")


def create_formatter(name: str, *, no_color: bool = False) -> OutputFormatter:
    """Return the formatter registered under ``name``."""

    normalized = name.strip().lower()
    if normalized == "table":
        return TableFormatter(no_color=no_color)
    if normalized == "jsonl":
        return JsonlFormatter()
    raise ValueError(f"Unsupported format '{name}'. Expected one of: table, jsonl.")


__all__ = ["OutputFormatter", "TableFormatter", "JsonlFormatter", "create_formatter"]
