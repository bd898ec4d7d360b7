"""Display formatting for money, dates and optional text."""

import math
from datetime import datetime
from typing import Optional

NOT_AVAILABLE = "N/A"


def format_currency(value: Optional[float]) -> str:
    """Format a USD amount, e.g. 32.38 -> "$32.38"; None/NaN -> "N/A"."""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return NOT_AVAILABLE

    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_date(value: Optional[str]) -> str:
    """Format an ISO date or datetime as "Jul 04, 1996".

    Values that are not ISO dates are returned unchanged.
    """
    if not value:
        return NOT_AVAILABLE

    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value

    return parsed.strftime("%b %d, %Y")


def safe_text(value: Optional[str]) -> str:
    return value if value and value.strip() else NOT_AVAILABLE
