"""
Table formatting of batch results as markdown or CSV.
"""

import csv
import io
from dataclasses import dataclass
from typing import List
import logging

from .batch import BatchResult, get_successful_results

logger = logging.getLogger(__name__)

COLUMNS = ['Zoom', 'Max Distance (m)', 'Tilt Angle (°)', 'Line Count', 'Focal Length (mm)']


@dataclass
class TableRow:
    """One zoom level of the analysis table."""
    zoom: float
    max_distance: float
    tilt_angle: float  # degrees
    line_count: int
    focal_length: float

    def values(self) -> List[float]:
        return [self.zoom, self.max_distance, self.tilt_angle, self.line_count, self.focal_length]


def rows_from_results(results: List[BatchResult], decimals: int = 2) -> List[TableRow]:
    """Build table rows from the successful batch results, rounding angles and focal lengths."""
    return [
        TableRow(
            zoom=r.zoom_level,
            max_distance=r.analysis.distance_meters,
            tilt_angle=round(r.analysis.tilt_angle_degrees, decimals),
            line_count=r.analysis.line_count,
            focal_length=round(r.analysis.focal_length_mm, decimals),
        )
        for r in get_successful_results(results)
    ]


def format_number(value: float) -> str:
    """Format a number, dropping the fractional part of whole numbers."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_markdown(rows: List[TableRow]) -> str:
    """Markdown table with right-aligned numeric columns."""
    widths = [len(c) for c in COLUMNS]
    header = '| ' + ' | '.join(COLUMNS) + ' |'
    separator = '|' + '|'.join(
        '-' * (w + 2) if i == 0 else '-' * (w + 1) + ':' for i, w in enumerate(widths)
    ) + '|'

    lines = [header, separator]
    for row in rows:
        cells = [format_number(v) for v in row.values()]
        padded = [cells[0].ljust(widths[0])] + [c.rjust(w) for c, w in zip(cells[1:], widths[1:])]
        lines.append('| ' + ' | '.join(padded) + ' |')

    return '\n'.join(lines)


def format_csv(rows: List[TableRow]) -> str:
    """RFC 4180 CSV with CRLF line endings."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator='\r\n')
    writer.writerow(COLUMNS)
    for row in rows:
        writer.writerow([format_number(v) for v in row.values()])
    return buffer.getvalue()


def save_csv(rows: List[TableRow], output_path: str) -> None:
    """Write the table to a CSV file."""
    with open(output_path, 'w', newline='', encoding='utf-8') as f:
        f.write(format_csv(rows))

    logger.info(f"Table saved to {output_path}")


def save_markdown(rows: List[TableRow], output_path: str) -> None:
    """Write the table to a markdown file."""
    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(format_markdown(rows) + '\n')

    logger.info(f"Table saved to {output_path}")
