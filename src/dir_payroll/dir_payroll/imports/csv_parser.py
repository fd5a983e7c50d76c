"""Parse the vendor's ticket CSV export.

Columns are found by substring in the header row, so their order may change
but their names may not: a missing column rejects the whole file. A row lists
every person who worked it in one (usually quoted) ``People`` cell.
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, List, Sequence

from ..common.datetime_utils import parse_us_short_date
from ..common.validators import require_positive_decimal
from ..core.exceptions import CsvFormatError, ValidationError

# field -> header substring
COLUMNS = {
    "ticket_number": "Ticket #",
    "project_title": "Ticket Name",
    "dir_number": "DIR #",
    "date_worked": "Deliverable Due Date",
    "hours": "Total Man Hours",
    "people": "People",
}


@dataclass(frozen=True)
class ParsedRow:
    line_number: int
    ticket_number: str
    project_title: str
    dir_number: str
    date_worked: date
    hours: Decimal
    people: Sequence[str]


@dataclass(frozen=True)
class RowFailure:
    line_number: int
    message: str
    person: str = ""


@dataclass
class ParsedCsv:
    rows: List[ParsedRow] = field(default_factory=list)
    failures: List[RowFailure] = field(default_factory=list)
    skipped: int = 0


def locate_columns(header: Sequence[str]) -> Dict[str, int]:
    found: Dict[str, int] = {}
    for name, needle in COLUMNS.items():
        for idx, cell in enumerate(header):
            if needle in cell:
                found[name] = idx
                break

    missing = [COLUMNS[name] for name in COLUMNS if name not in found]
    if missing:
        raise CsvFormatError(f"CSV header is missing column(s): {', '.join(missing)}")
    return found


def split_people(cell: str) -> List[str]:
    value = (cell or "").strip()
    if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
        value = value[1:-1]
    return [p.strip() for p in value.split(",") if p.strip()]


def parse_ticket_csv(text: str) -> ParsedCsv:
    reader = csv.reader(io.StringIO((text or "").lstrip("\ufeff")))
    try:
        header = next(reader)
    except StopIteration:
        raise CsvFormatError("CSV file is empty")

    idx = locate_columns(header)
    width = max(idx.values()) + 1
    result = ParsedCsv()

    for row in reader:
        line = reader.line_num
        if not any(cell.strip() for cell in row):
            continue
        if len(row) < width:
            result.failures.append(RowFailure(line, f"expected at least {width} columns, got {len(row)}"))
            continue

        people = split_people(row[idx["people"]])
        if not people:
            result.skipped += 1
            continue

        try:
            parsed = ParsedRow(
                line_number=line,
                ticket_number=row[idx["ticket_number"]].strip(),
                project_title=row[idx["project_title"]].strip(),
                dir_number=row[idx["dir_number"]].strip(),
                date_worked=parse_us_short_date(row[idx["date_worked"]]),
                hours=require_positive_decimal(row[idx["hours"]], "Total Man Hours"),
                people=tuple(people),
            )
        except ValidationError as e:
            result.failures.append(RowFailure(line, str(e)))
            continue

        result.rows.append(parsed)

    return result
