"""
Nightly pot scrape.

- Scrapes the 50/50 pots of all configured clubs
- Writes the ordered result list to the output JSON file
- Designed to be run from GitHub Actions / cron as well as locally.
"""

import sys

from config import ACTIVE_CONFIG
from pipelines.pot_scrape_and_export import main as scrape_and_export
from scraper.utils.logging_utils import make_logger


def run_nightly_scrape() -> int:
    """
    Main entrypoint for the nightly job. Returns the process exit code.

    Steuerbar über Env-Variablen:

    - POTS_OUTPUT_PATH (default: output/data.json)
    - POTS_CLUBS       (default: alle Clubs)
    - POTS_HEADLESS    (default: "true")
    - LOG_LEVEL        (default: DEBUG in dev, INFO with ENV=prod)
    """
    cfg = ACTIVE_CONFIG
    logger = make_logger(cfg.LOGGING["LOG_FILE"], cfg.LOGGING["LEVEL"])

    logger("========================================")
    logger(" 50/50 Pot Scrape")
    logger("========================================")
    logger(f"Output:   {cfg.OUTPUT['PATH']}")
    logger(f"Clubs:    {', '.join(cfg.SCRAPER['CLUBS']) or 'all'}")
    logger(f"Headless: {cfg.SCRAPER['HEADLESS']}")
    logger("========================================")

    try:
        scrape_and_export(cfg.OUTPUT["PATH"], logger=logger)
    except Exception as e:
        logger(f"❌ Critical error: {type(e).__name__}: {e}")
        return 1

    logger("✅ Nightly scrape finished.")
    return 0


if __name__ == "__main__":
    sys.exit(run_nightly_scrape())
