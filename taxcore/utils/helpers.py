"""Shared utility functions — amount parsing, rounding and financial years."""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Union

from taxcore.config import settings

# Currency markers: "₹", "Rs", "Rs.", "INR" (any case) and a trailing "/-"
_CURRENCY = re.compile(r"₹|\b(?:rs|inr)(?![a-z])\.?|/-\s*$", re.IGNORECASE)
_GROUPING = re.compile(r"[,\s]")


# ── Amounts ───────────────────────────────────────────────────────────────

def parse_amount(value: Union[str, int, float, None]) -> float:
    """Coerce a user-entered amount to a float.

    Currency markers, grouping commas and whitespace are stripped
    (``"Rs. 1,50,000"`` → ``150000.0``).  Anything left that is not a single
    finite number (``"1.2.3"``, stray letters) becomes ``0.0``.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    cleaned = _GROUPING.sub("", _CURRENCY.sub("", str(value)))
    try:
        amount = float(cleaned)
    except ValueError:
        return 0.0
    return amount if math.isfinite(amount) else 0.0


def round_currency(value: float, decimals: int = settings.CURRENCY_DECIMALS) -> float:
    """Round to *decimals* places."""
    return round(value, decimals)


# ── Financial years ───────────────────────────────────────────────────────

def financial_year_of(value: Union[date, datetime]) -> str:
    """Indian financial year label (April–March) for *value*, e.g. ``"2023-24"``."""
    start = value.year if value.month >= 4 else value.year - 1
    return f"{start}-{str(start + 1)[-2:]}"


def fy_start_year(label: str) -> int:
    """``"2015-16"`` → ``2015``."""
    return int(label.split("-")[0])
