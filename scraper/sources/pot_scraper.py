# scraper/sources/pot_scraper.py

import asyncio
import random
from typing import Iterable, List, Optional

from playwright.async_api import Error as PlaywrightError

from scraper.errors.exceptions import ExtractionError, ScraperError
from scraper.extraction.orchestrator import extract_pot
from scraper.interfaces.models import ExtractionResult, Target
from scraper.sources.scraper_config import DEFAULT_EXTRACTION_CONFIG, SCRAPER_SETTINGS, ExtractionConfig
from scraper.sources.targets import CLUBS
from scraper.utils.browser import BrowserFactory
from scraper.utils.logging_utils import Logger


def format_result(result: ExtractionResult) -> str:
    """Konsolenzeile: 'Brynäs IF: 123456 kr  [pulse | Total vinstpott: 123 456 kr]'."""
    if result.error is not None:
        return f"❌ {result.target}: {result.error}"
    amount = f"{result.amount} kr" if result.amount is not None else "—"
    raw = f" | {result.raw_text}" if result.raw_text else ""
    return f"{result.target}: {amount}  [{result.strategy}{raw}]"


# ----------------------------------------------------------
# SCRAPE ONE TARGET
# ----------------------------------------------------------
async def scrape_target(
    session,
    target: Target,
    config: ExtractionConfig = DEFAULT_EXTRACTION_CONFIG,
    logger: Optional[Logger] = None,
) -> ExtractionResult:
    """
    Navigate to one target and extract its pot.

    Navigation or page failures end up in `error` on the returned record;
    they are not raised.
    """
    try:
        await session.navigate(target.url, config.navigation_timeout_ms)
        # etwas Jitter zwischen den Seiten
        await session.sleep(random.randint(*config.jitter_ms))

        try:
            outcome = await extract_pot(session, target, config, logger=logger)
        except PlaywrightError as e:
            raise ExtractionError(f"extraction failed on {target.url}: {e}") from e

    except ScraperError as e:
        return ExtractionResult.from_error(target, str(e), config.currency_code)

    return ExtractionResult.from_outcome(target, outcome, config.currency_code)


# ----------------------------------------------------------
# Complete Workflow: all targets on one browser session
# ----------------------------------------------------------
async def scrape_all(
    targets: Iterable[Target] = CLUBS,
    config: ExtractionConfig = DEFAULT_EXTRACTION_CONFIG,
    logger: Optional[Logger] = None,
    headless: Optional[bool] = None,
) -> List[ExtractionResult]:
    if logger is None:
        logger = print

    if headless is None:
        headless = SCRAPER_SETTINGS["HEADLESS"]

    targets = list(targets)
    logger(f"📦 {len(targets)} targets to scrape.")

    results: List[ExtractionResult] = []

    async with BrowserFactory(headless=headless, logger=logger) as session:
        for idx, target in enumerate(targets):
            logger(f"➡️ {idx + 1}/{len(targets)} → {target.url}")
            try:
                result = await scrape_target(session, target, config, logger=logger)
            except Exception as e:
                # crashed session etc.; the batch keeps going
                result = ExtractionResult.from_error(target, f"{type(e).__name__}: {e}", config.currency_code)
            results.append(result)
            logger(format_result(result))

    return results


# ----------------------------------------------------------
# Sync wrapper (für Pipelines)
# ----------------------------------------------------------
def scrape_all_sync(
    targets: Iterable[Target] = CLUBS,
    config: ExtractionConfig = DEFAULT_EXTRACTION_CONFIG,
    logger: Optional[Logger] = None,
    headless: Optional[bool] = None,
) -> List[ExtractionResult]:
    return asyncio.run(scrape_all(targets, config, logger=logger, headless=headless))
