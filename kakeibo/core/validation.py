from datetime import date, datetime
from typing import Optional
import re

from fastapi import HTTPException, status

YEAR_MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")

# Month ranges end on the first day of the next month, which must exist too.
MIN_YEAR = 1
MAX_YEAR = 9998


def _invalid(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)


def parse_year_month(value: str) -> tuple[int, int]:
    """Split a "YYYY-MM" string into (year, month).

    Raises HTTPException(422) when the value is not a real calendar month,
    e.g. "2026-13" or "2026/01".
    """
    match = YEAR_MONTH_PATTERN.match(value.strip())
    if not match:
        raise _invalid("year_month must be formatted as YYYY-MM")

    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise _invalid("year_month must be formatted as YYYY-MM")
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise _invalid(f"year_month year must be between {MIN_YEAR} and {MAX_YEAR}")
    return year, month


def parse_iso_date(value: Optional[str], field: str = "date") -> date:
    """Parse a YYYY-MM-DD string, raising HTTPException(422) when missing or malformed."""
    if value is None or str(value).strip() == "":
        raise _invalid(f"{field} is required")

    try:
        parsed = datetime.strptime(str(value).strip(), "%Y-%m-%d").date()
    except ValueError:
        raise _invalid(f"{field} must be formatted as YYYY-MM-DD")

    if parsed.year > MAX_YEAR:
        raise _invalid(f"{field} year must be between {MIN_YEAR} and {MAX_YEAR}")
    return parsed


def parse_optional_int(value: Optional[str], field: str) -> Optional[int]:
    """Blank query values mean "no constraint"; anything else must be an integer."""
    if value is None or str(value).strip() == "":
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        raise _invalid(f"{field} must be an integer")
