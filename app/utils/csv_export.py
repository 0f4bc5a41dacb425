"""
CSV export utilities
"""
import csv
import io
from typing import Iterable, Dict, Iterator, List
from fastapi.responses import StreamingResponse


def iter_csv(headers: List[str], rows: Iterable[Dict]) -> Iterator[str]:
    """
    Yield CSV text chunk by chunk: the header line, then one line per row

    Missing keys and None values are written as empty strings.
    """
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=headers, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")

    writer.writeheader()
    yield output.getvalue()
    output.seek(0)
    output.truncate(0)

    for row in rows:
        writer.writerow({header: "" if row.get(header) is None else str(row[header]) for header in headers})
        yield output.getvalue()
        output.seek(0)
        output.truncate(0)


def stream_csv(headers: List[str], rows: Iterable[Dict], filename: str = "export.csv") -> StreamingResponse:
    """
    Stream CSV data as HTTP response

    Args:
        headers: List of column headers
        rows: Iterable of dictionaries with data rows
        filename: Filename for Content-Disposition header

    Returns:
        StreamingResponse with CSV content
    """
    return StreamingResponse(
        iter_csv(headers, rows),
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"'
        }
    )
