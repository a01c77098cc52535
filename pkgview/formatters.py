"""Rendering of component rows as a table or delimited text."""

from __future__ import annotations

import csv
import re
import unicodedata
from typing import List, Sequence, TextIO, Tuple

from .logging import get_logger
from .models import ComponentRow, OutputFormat

_logger = get_logger("formatters")

_LINE_BREAK = re.compile(r"\r\n|\r|\n")

_DELIMITERS = {
    OutputFormat.CSV: ",",
    OutputFormat.TSV: "\t",
}


class OutputError(RuntimeError):
    """Raised when rendered output cannot be written to the sink."""


def columns_for(split_parent: bool) -> Tuple[str, ...]:
    """Return the header labels for the active split mode."""
    if split_parent:
        return ("Type", "Parent", "Member")
    return ("Type", "Member")


def row_values(row: ComponentRow, split_parent: bool) -> Tuple[str, ...]:
    if split_parent:
        return (row.metadata_type, row.parent, row.member)
    return (row.metadata_type, row.member)


def render_table(rows: Sequence[ComponentRow], *, split_parent: bool = True) -> str:
    """Render ``rows`` as a box-drawn grid with a header row."""
    header = columns_for(split_parent)
    records = [list(header)] + [list(row_values(row, split_parent)) for row in rows]
    cells = [[_cell_lines(value) for value in record] for record in records]

    widths = [0] * len(header)
    for record in cells:
        for index, lines in enumerate(record):
            widths[index] = max(widths[index], max(_display_width(line) for line in lines))

    top = _border("┌", "┬", "┐", widths)
    separator = _border("├", "┼", "┤", widths)
    bottom = _border("└", "┴", "┘", widths)

    output: List[str] = [top]
    for position, record in enumerate(cells):
        if position:
            output.append(separator)
        height = max(len(lines) for lines in record)
        for line_no in range(height):
            parts = [
                f" {_pad(lines[line_no] if line_no < len(lines) else '', width)} "
                for lines, width in zip(record, widths)
            ]
            output.append("│" + "│".join(parts) + "│")
    output.append(bottom)
    return "\n".join(output) + "\n"


def write_delimited(
    rows: Sequence[ComponentRow],
    stream: TextIO,
    *,
    delimiter: str = ",",
    split_parent: bool = True,
) -> None:
    """Write a header record followed by one record per row.

    The header is written even when ``rows`` is empty. Fields containing the
    delimiter, a double quote or a line break are quoted.
    """
    writer = csv.writer(
        stream,
        delimiter=delimiter,
        quotechar='"',
        quoting=csv.QUOTE_MINIMAL,
        lineterminator="\n",
    )
    writer.writerow(columns_for(split_parent))
    for row in rows:
        writer.writerow(row_values(row, split_parent))


def write_output(
    rows: Sequence[ComponentRow],
    output_format: OutputFormat,
    stream: TextIO,
    *,
    split_parent: bool = True,
) -> bool:
    """Render ``rows`` to ``stream`` and flush it.

    Returns ``False`` when the reader closed the pipe before everything was
    written; that case is a normal early exit, not an error. Other write
    failures raise :class:`OutputError`.
    """
    _logger.debug("Writing %d row(s) as %s", len(rows), output_format.value)
    try:
        if output_format is OutputFormat.TABLE:
            stream.write(render_table(rows, split_parent=split_parent))
        else:
            write_delimited(
                rows,
                stream,
                delimiter=_DELIMITERS[output_format],
                split_parent=split_parent,
            )
        stream.flush()
    except BrokenPipeError:
        _logger.debug("Output consumer closed the pipe; stopping early")
        return False
    except (OSError, UnicodeEncodeError) as exc:
        raise OutputError(str(exc)) from exc
    return True


def _cell_lines(value: str) -> List[str]:
    return _LINE_BREAK.split(value)


def _display_width(text: str) -> int:
    """Terminal columns occupied by ``text``: wide glyphs count 2, combining marks 0."""
    width = 0
    for char in text:
        if unicodedata.combining(char):
            continue
        width += 2 if unicodedata.east_asian_width(char) in ("W", "F") else 1
    return width


def _pad(text: str, width: int) -> str:
    return text + " " * (width - _display_width(text))


def _border(left: str, middle: str, right: str, widths: Sequence[int]) -> str:
    return left + middle.join("─" * (width + 2) for width in widths) + right


__all__ = [
    "OutputError",
    "columns_for",
    "render_table",
    "row_values",
    "write_delimited",
    "write_output",
]
