import asyncio
import sys

from scraper.interfaces.models import Target
from scraper.sources.pot_scraper import format_result, scrape_target
from scraper.sources.scraper_config import DEFAULT_EXTRACTION_CONFIG
from scraper.utils.browser import BrowserFactory
from scraper.utils.logging_utils import make_logger


async def run(url: str, headless: bool = True):
    logger = make_logger(level="DEBUG")
    print(f"Scraping: {url}")

    async with BrowserFactory(headless=headless, logger=logger) as session:
        result = await scrape_target(session, Target(url, url), DEFAULT_EXTRACTION_CONFIG, logger=logger)

    print("\nExtracted:")
    print(format_result(result))
    return result


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("usage: python main.py <url> [--headed]")
        sys.exit(2)
    asyncio.run(run(sys.argv[1], headless="--headed" not in sys.argv[2:]))
