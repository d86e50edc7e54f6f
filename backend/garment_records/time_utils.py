from __future__ import annotations

from datetime import date, datetime
from typing import Optional


def today_iso() -> str:
    """Local calendar date as YYYY-MM-DD, the default for new documents."""
    return date.today().isoformat()


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    """
    Parse a document date.

    - None / "" -> None
    - "YYYY-MM-DD" -> date
    - a full ISO-8601 datetime is accepted and truncated to its date
    """
    if value is None:
        return None
    s = value.strip()
    if not s:
        return None

    if len(s) == 10:
        return date.fromisoformat(s)

    # Accept trailing Z
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    return datetime.fromisoformat(s).date()
