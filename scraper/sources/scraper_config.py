# scraper/sources/scraper_config.py

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

SCRAPER_SETTINGS = {
    "TIMEOUT": 60000,
    "HEADLESS": True,
    "VIEWPORT": {"width": 1366, "height": 900},
    "LOCALE": "sv-SE",
    "TIMEZONE": "Europe/Stockholm",
    "USER_AGENT": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0 Safari/537.36"
    ),
}

# Hand-maintained selectors for pages where the generic heuristics misfire.
HARD_SELECTORS = MappingProxyType({
    "https://clubs.clubmate.se/roglebk/": 'h6.font-bold:has-text(" kr")',
})

DENYLIST = (
    # incremental amounts / purchase prompts
    "+",
    "sms",
    "köp",
    "avgift",
    "frakt",
    "porto",
    # non-pot money: gift cards, tickets, merchandise
    "presentkort",
    "biljett",
    "shop",
    "butik",
    "t-shirt",
    "hoodie",
    "tröja",
    "halsduk",
    # per-ticket maxima
    "max vinst",
    "maxvinst",
    "per lott",
    # promotions
    "kampanj",
    "erbjudande",
    "rabatt",
)

GENERIC_SELECTORS = (
    'h6.font-bold:has-text(" kr")',
    '.font-bold.text-2xl:has-text(" kr")',
    'h6:has-text(" kr")',
    '[class*="text-2xl"]:has-text(" kr")',
)


@dataclass(frozen=True)
class ExtractionConfig:
    """
    Immutable tuning for the extraction engine.

    Passed into every engine call; nothing in the engine reads module state.
    Label phrases are regex sources compiled as JS RegExp in the page,
    most specific first.
    """

    currency_marker: str = "kr"
    currency_code: str = "SEK"
    min_amount: int = 50
    denylist: Tuple[str, ...] = DENYLIST
    label_phrases: Tuple[str, ...] = (r"total\s+vinstpott", r"aktuell\s+vinstsumma")
    label_host_selector: str = "p,div,span,h5,h6"
    label_max_hops: int = 6
    # text before a body amount that is checked with it ("Avgift: +5 kr")
    body_context_chars: int = 24
    pulse_selector: str = ".animate-pulse"
    generic_selectors: Tuple[str, ...] = GENERIC_SELECTORS
    hard_selectors: Mapping[str, str] = field(default_factory=lambda: HARD_SELECTORS)

    navigation_timeout_ms: int = SCRAPER_SETTINGS["TIMEOUT"]
    jitter_ms: Tuple[int, int] = (900, 1800)
    settle_ms: int = 1800
    hard_selector_timeout_ms: int = 8000
    readiness_timeout_ms: int = 8000
    # one entry per retry pass
    retry_delays_ms: Tuple[int, ...] = (1500,)

    def hard_selector_for(self, url: str) -> Optional[str]:
        return self.hard_selectors.get(url)

    def with_overrides(self, **changes) -> "ExtractionConfig":
        if "hard_selectors" in changes:
            changes["hard_selectors"] = MappingProxyType(dict(changes["hard_selectors"]))
        return replace(self, **changes)


DEFAULT_EXTRACTION_CONFIG = ExtractionConfig()
