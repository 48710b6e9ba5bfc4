"""Journal entry number format: ``JE-<year>-<sequence>``."""

import re

ENTRY_PREFIX = "JE"
SEQUENCE_WIDTH = 4

_ENTRY_NUMBER = re.compile(rf"^{ENTRY_PREFIX}-(\d{{4}})-(\d{{{SEQUENCE_WIDTH},}})$")


def format_entry_number(fiscal_year: int, sequence: int) -> str:
    """Format an entry number, e.g. (2024, 7) -> 'JE-2024-0007'."""
    return f"{ENTRY_PREFIX}-{fiscal_year}-{sequence:0{SEQUENCE_WIDTH}d}"


def parse_entry_number(entry_number: str) -> tuple[int, int]:
    """Split an entry number into (fiscal_year, sequence).

    Raises:
        ValueError: If the string is not a valid entry number
    """
    match = _ENTRY_NUMBER.match(entry_number.strip().upper())
    if match is None:
        raise ValueError(
            f"Invalid entry number '{entry_number}' (expected {ENTRY_PREFIX}-YYYY-NNNN)"
        )
    return int(match.group(1)), int(match.group(2))
