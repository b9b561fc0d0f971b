"""
CSV tokenizing and row materialization.

Responsibilities:
- split raw sheet text into rows of fields (RFC 4180 style quoting)
- zip data rows against the header row
- tolerate ragged and blank rows, reporting them when asked
"""

from __future__ import annotations

from typing import Dict, List, Optional

QUOTE = '"'
DELIMITER = ","


def parse(text: str) -> List[List[str]]:
    """
    Split CSV text into rows of raw fields.

    Rules:
    - A quote toggles quoted mode; a doubled quote inside quoted mode is a
      literal quote and does not leave quoted mode.
    - Outside quotes, a comma ends the field and LF or CR ends the row.
      CRLF counts as a single row terminator.
    - Input without a trailing newline still yields its last row.

    Field counts are not checked; ragged rows pass through as-is.
    """
    rows: List[List[str]] = []
    row: List[str] = []
    field: List[str] = []
    in_quotes = False

    i = 0
    n = len(text)
    while i < n:
        ch = text[i]

        if ch == QUOTE:
            if in_quotes and i + 1 < n and text[i + 1] == QUOTE:
                field.append(QUOTE)
                i += 2
                continue
            in_quotes = not in_quotes
            i += 1
            continue

        if not in_quotes and ch == DELIMITER:
            row.append("".join(field))
            field = []
            i += 1
            continue

        if not in_quotes and ch in ("\n", "\r"):
            row.append("".join(field))
            field = []
            rows.append(row)
            row = []
            if ch == "\r" and i + 1 < n and text[i + 1] == "\n":
                i += 1
            i += 1
            continue

        field.append(ch)
        i += 1

    if field or row:
        row.append("".join(field))
        rows.append(row)

    return rows


def materialize(rows: List[List[str]], issues: Optional[list] = None) -> List[Dict[str, str]]:
    """
    Turn parsed rows into header-keyed records.

    The first row is the header. Short rows are padded with empty text,
    long rows lose their extra fields, and rows that are blank after
    trimming are dropped. When ``issues`` is given, each of those
    tolerated problems is appended to it as a report item dict.
    """
    if not rows:
        return []

    headers = [(h or "").strip() for h in rows[0]]
    width = len(headers)
    records: List[Dict[str, str]] = []

    for offset, row in enumerate(rows[1:]):
        row_number = offset + 2  # header is row 1

        values = [(v or "").strip() for v in row]
        if not any(values):
            _report(issues, row_number, "blank_row", None, "dropped")
            continue

        if len(values) < width:
            _report(issues, row_number, "row_too_short", str(len(values)), f"padded_to_{width}")
            values = values + [""] * (width - len(values))
        elif len(values) > width:
            _report(issues, row_number, "row_too_long", str(len(values)), f"truncated_to_{width}")

        record: Dict[str, str] = {}
        for header, value in zip(headers, values):
            # duplicate headers: later columns win
            record[header] = value
        records.append(record)

    return records


def _report(issues: Optional[list], row: int, issue: str, value: Optional[str], action: str) -> None:
    if issues is None:
        return
    issues.append({
        "row": row,
        "column": None,
        "issue": issue,
        "value": value,
        "action": action,
    })
