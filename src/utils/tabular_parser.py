"""Parser CSV untuk export spreadsheet."""

import re
from typing import List

_LINE_BREAK = re.compile(r"\r?\n")


def parse_csv(text: str) -> List[List[str]]:
    """
    Parse delimited text into rows of trimmed string cells.

    Rows are split on line breaks before quotes are considered, so a quoted
    field never spans lines. An unterminated quote stays open until the end
    of its line: the rest of that line becomes part of the current cell and
    the next line starts unquoted. Blank lines are skipped. No header
    handling is done here.
    """
    rows: List[List[str]] = []
    for line in _LINE_BREAK.split(text or ""):
        if not line.strip():
            continue
        rows.append(parse_line(line))
    return rows


def parse_line(line: str) -> List[str]:
    """Split one line on commas outside quotes; ``""`` inside quotes is a literal quote."""
    cells: List[str] = []
    current: List[str] = []
    in_quotes = False
    i = 0
    length = len(line)

    while i < length:
        char = line[i]
        if char == '"':
            if in_quotes and i + 1 < length and line[i + 1] == '"':
                current.append('"')
                i += 2
                continue
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            cells.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1

    cells.append("".join(current).strip())
    return cells
