import re

from app.documents.models import Table

_COLUMN_SPLIT = re.compile(r"\t|\s{3,}")


def extract_tables(text: str) -> list[Table]:
    """Detect plain-text tables: consecutive lines split by tabs or 3+ spaces.

    A run needs at least two rows of two or more columns; the first row
    becomes the header.
    """
    tables: list[Table] = []
    current: list[list[str]] = []
    for line in text.split("\n") + [""]:
        columns = [col.strip() for col in _COLUMN_SPLIT.split(line) if col.strip()]
        if len(columns) > 1:
            current.append(columns)
            continue
        if len(current) > 1:
            tables.append(Table(headers=current[0], rows=current[1:]))
        current = []
    return tables
