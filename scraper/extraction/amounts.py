# scraper/extraction/amounts.py

"""
Swedish-style amount parsing.

"123 456 kr", "1.234.567,50 kr" and "75000kr" are all amounts; the digit run
may contain spaces, grouping dots and a decimal comma, but never a line break.
"""

import math
import re
from functools import lru_cache
from typing import List, Optional

DEFAULT_MARKER = "kr"

_HSPACE = r"[^\S\r\n]"


def normalize_text(text: Optional[str]) -> str:
    """NBSP / narrow NBSP -> space, trimmed."""
    if not text:
        return ""
    return text.replace("\u00a0", " ").replace("\u202f", " ").strip()


@lru_cache(maxsize=None)
def amount_pattern(marker: str = DEFAULT_MARKER) -> "re.Pattern[str]":
    return re.compile(
        rf"(\d(?:[\d.,]|{_HSPACE})*){_HSPACE}*{re.escape(marker)}\b",
        re.IGNORECASE,
    )


@lru_cache(maxsize=None)
def marker_pattern(marker: str = DEFAULT_MARKER) -> "re.Pattern[str]":
    # marker as a separate word, e.g. "100 kr" but not "kronor"
    return re.compile(rf"\s{re.escape(marker)}\b", re.IGNORECASE)


def has_currency_marker(text: Optional[str], marker: str = DEFAULT_MARKER) -> bool:
    return bool(marker_pattern(marker).search(normalize_text(text)))


def _to_number(digits: str) -> Optional[float]:
    num = re.sub(r"\s", "", digits).replace(".", "").replace(",", ".", 1)
    # leading numeric prefix only, "12.5.0" -> 12.5
    m = re.match(r"\d+(?:\.\d+)?", num)
    if not m:
        return None
    value = float(m.group(0))
    return value if math.isfinite(value) else None


def parse_amount(text: Optional[str], marker: str = DEFAULT_MARKER) -> Optional[int]:
    """
    First digit run directly followed by the currency marker, as a whole
    number of currency units (rounded half up). None when there is none.
    """
    clean = normalize_text(text)
    if not clean:
        return None

    m = amount_pattern(marker).search(clean)
    if not m:
        return None

    value = _to_number(m.group(1))
    if value is None:
        return None
    return int(math.floor(value + 0.5))


def find_amount_texts(text: Optional[str], marker: str = DEFAULT_MARKER) -> List[str]:
    """Every "number + marker" substring of `text`, in order."""
    clean = normalize_text(text)
    return [m.group(0).strip() for m in amount_pattern(marker).finditer(clean)]
