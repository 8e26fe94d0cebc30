"""Fixed-width box-drawing table used as the body of search prompts.

The table is pre-rendered: a header block, a footer block and one line per
record. The prompt only pages and highlights those lines, so every row shares
the column widths computed here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence


@dataclass(frozen=True)
class BorderCharset:
    left: str
    mid: str
    right: str
    default: str


@dataclass(frozen=True)
class TableStyle:
    header_top: BorderCharset
    header_bottom: BorderCharset
    table_bottom: BorderCharset
    vertical: str


DEFAULT_TABLE_STYLE = TableStyle(
    header_top=BorderCharset(left="┌", mid="┬", right="┐", default="─"),
    header_bottom=BorderCharset(left="├", mid="┼", right="┤", default="─"),
    table_bottom=BorderCharset(left="└", mid="┴", right="┘", default="─"),
    vertical="│",
)
CELL_PADDING = 1
MARGIN_LEFT = "  "


@dataclass(frozen=True)
class TableRow:
    line: str
    value: Any


@dataclass(frozen=True)
class Table:
    header: str
    footer: str
    rows: tuple[TableRow, ...]


def stringify(value: Any) -> str:
    return "" if value is None else str(value)


def _cell_text(record: Mapping[str, Any], field: str) -> str:
    return stringify(record.get(field))


def draw_cell(text: str, width: int, style: TableStyle = DEFAULT_TABLE_STYLE) -> str:
    # len(text) <= width by construction
    pad = " " * CELL_PADDING
    return f"{pad}{text.ljust(width)}{pad}{style.vertical}"


def column_widths(
    fields: Sequence[str],
    records: Sequence[Mapping[str, Any]],
    header_labels: Sequence[str],
) -> dict[str, int]:
    widths = {field: len(label) for field, label in zip(fields, header_labels)}
    for record in records:
        for field in fields:
            widths[field] = max(widths[field], len(_cell_text(record, field)))
    return widths


def draw_border(fields: Sequence[str], widths: Mapping[str, int], charset: BorderCharset) -> str:
    segments = [charset.default * (widths[field] + CELL_PADDING * 2) for field in fields]
    return f"{charset.left}{charset.mid.join(segments)}{charset.right}\n"


def build_table(
    fields: Sequence[str],
    records: Sequence[Mapping[str, Any]],
    header_labels: Sequence[str] | None = None,
    *,
    style: TableStyle = DEFAULT_TABLE_STYLE,
) -> Table:
    """Render ``records`` as a bordered table keyed by ``fields``.

    Missing or ``None`` values render as blank cells. Each row keeps the record
    it came from as its ``value``.
    """
    labels = list(header_labels) if header_labels is not None else list(fields)
    if len(labels) != len(fields):
        raise ValueError(
            f"Expected {len(fields)} header labels, got {len(labels)}"
        )

    widths = column_widths(fields, records, labels)

    # ┌─────┬─────┐
    header = MARGIN_LEFT + draw_border(fields, widths, style.header_top)
    # │ a   │ b   │
    header += MARGIN_LEFT + style.vertical
    header += "".join(draw_cell(label, widths[field], style) for field, label in zip(fields, labels))
    header += "\n"
    # ├─────┼─────┤
    header += MARGIN_LEFT + draw_border(fields, widths, style.header_bottom)

    # └─────┴─────┘
    footer = "\n" + MARGIN_LEFT + draw_border(fields, widths, style.table_bottom)

    rows = tuple(
        TableRow(
            line=style.vertical
            + "".join(draw_cell(_cell_text(record, field), widths[field], style) for field in fields),
            value=record,
        )
        for record in records
    )
    return Table(header=header, footer=footer, rows=rows)
