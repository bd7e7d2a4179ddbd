"""Table, JSON and YAML rendering of count records."""

from __future__ import annotations

import json
from collections.abc import Sequence
from enum import Enum

import yaml

from kube_count.domains.counting.models import Record
from kube_count.utils.errors import RenderError

TABLE_HEADERS = ["Namespace", "Kind", "GroupVersion", "Count"]
TABLE_ALIGNMENTS = ["l", "l", "l", "r"]


class OutputFormat(str, Enum):
    """Supported output formats."""

    TABLE = "table"
    JSON = "json"
    YAML = "yaml"

    @classmethod
    def parse(cls, value: str | None) -> OutputFormat:
        """Parse a flag value; accepts j/y/t abbreviations and defaults to table."""
        normalized = (value or "").strip().lower()
        if normalized in ("json", "j"):
            return cls.JSON
        if normalized in ("yaml", "y"):
            return cls.YAML
        return cls.TABLE


def format_table(
    headers: list[str],
    rows: list[list[str]],
    alignments: list[str] | None = None,
) -> str:
    """Render a fixed-width table with +---+ borders.

    Args:
        headers: Column header strings.
        rows: List of row data (each row is a list of strings).
        alignments: Per-column alignment ('l', 'r', 'c'). Defaults to left.
    """
    if not headers:
        return ""

    num_cols = len(headers)
    if alignments is None:
        alignments = ["l"] * num_cols

    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            if i < num_cols:
                col_widths[i] = max(col_widths[i], len(cell))

    def _pad(text: str, width: int, align: str) -> str:
        if align == "r":
            return text.rjust(width)
        if align == "c":
            return text.center(width)
        return text.ljust(width)

    def _line(cells: list[str], aligns: list[str]) -> str:
        padded = [
            _pad(cells[i] if i < len(cells) else "", col_widths[i], aligns[i])
            for i in range(num_cols)
        ]
        return "| " + " | ".join(padded) + " |"

    border = "+-" + "-+-".join("-" * w for w in col_widths) + "-+"
    header_line = _line(headers, ["l"] * num_cols)
    data_lines = [_line(row, alignments) for row in rows]

    return "\n".join([border, header_line, border, *data_lines, border])


def table_rows(records: Sequence[Record]) -> list[list[str]]:
    """Rows for the table view.

    Kind and GroupVersion are only printed on the first row of each run of
    records for the same resource type, like merged cells.
    """
    rows: list[list[str]] = []
    previous = None
    for record in records:
        same_group = record.identity == previous
        rows.append([
            record.namespace,
            "" if same_group else record.kind,
            "" if same_group else record.group_version,
            str(record.count),
        ])
        previous = record.identity
    return rows


def render_table(records: Sequence[Record]) -> str:
    return format_table(TABLE_HEADERS, table_rows(records), TABLE_ALIGNMENTS)


def render_json(records: Sequence[Record]) -> str:
    try:
        return json.dumps([r.to_dict() for r in records], indent=1)
    except (TypeError, ValueError) as e:
        raise RenderError("JSON", e) from e


def render_yaml(records: Sequence[Record]) -> str:
    try:
        return yaml.safe_dump(
            [r.to_dict() for r in records],
            sort_keys=False,
            default_flow_style=False,
        )
    except yaml.YAMLError as e:
        raise RenderError("YAML", e) from e


def render(records: Sequence[Record], output_format: OutputFormat = OutputFormat.TABLE) -> str:
    """Render records in the requested format.

    Raises:
        RenderError: If the records cannot be serialized.
    """
    if output_format == OutputFormat.JSON:
        return render_json(records)
    if output_format == OutputFormat.YAML:
        return render_yaml(records)
    return render_table(records)
