# scraper/extraction/selector.py

from typing import Iterable, List, Optional, Tuple

from scraper.extraction.amounts import normalize_text, parse_amount
from scraper.extraction.relevance import is_acceptable
from scraper.interfaces.models import ParsedAmount, RawFragment
from scraper.sources.scraper_config import DEFAULT_EXTRACTION_CONFIG, ExtractionConfig


def _parse_candidates(
    fragments: Iterable[RawFragment],
    config: ExtractionConfig,
) -> List[Tuple[str, int]]:
    candidates = []
    for frag in fragments:
        text = normalize_text(frag.text)
        if not is_acceptable(text, config.denylist):
            continue
        amount = parse_amount(text, config.currency_marker)
        if amount is None:
            continue
        candidates.append((text, amount))
    return candidates


def select_best(
    fragments: Iterable[RawFragment],
    config: ExtractionConfig = DEFAULT_EXTRACTION_CONFIG,
    allow_below_floor: bool = True,
) -> Optional[ParsedAmount]:
    """
    Pick the pot among the fragments of one strategy.

    Fragments rejected by the relevance filter or without an amount are
    dropped. Amounts below `config.min_amount` only count when nothing
    clears the floor (and `allow_below_floor` is set). The largest amount
    wins; ties go to the first fragment seen.
    """
    candidates = _parse_candidates(fragments, config)

    above = [c for c in candidates if c[1] >= config.min_amount]
    if not above and allow_below_floor:
        above = candidates
    if not above:
        return None

    # max() keeps the first of equal elements
    text, amount = max(above, key=lambda c: c[1])
    return ParsedAmount(amount=amount, text=text)
