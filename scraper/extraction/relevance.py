# scraper/extraction/relevance.py

from typing import Iterable, Optional

from scraper.sources.scraper_config import DENYLIST


def is_acceptable(text: Optional[str], denylist: Iterable[str] = DENYLIST) -> bool:
    """
    False for text that talks about fees, merchandise, tickets, per-ticket
    maxima or promotions rather than the pot. Case-insensitive substring match.
    """
    if not text:
        return False

    low = text.lower()
    return not any(term in low for term in denylist)
