# pipelines/pot_scrape_and_export.py

import json
from pathlib import Path
from typing import Iterable, List, Optional, Union

from config import ACTIVE_CONFIG
from scraper.interfaces.models import ExtractionResult, Target
from scraper.sources.pot_scraper import scrape_all_sync
from scraper.sources.targets import CLUBS, targets_by_name
from scraper.utils.logging_utils import Logger, _log, make_logger


def write_results(results: Iterable[ExtractionResult], path: Union[str, Path]) -> Path:
    """
    Schreibt die Resultate (Reihenfolge = Targets) als JSON-Array.
    Returns the written path.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    rows = [r.to_dict() for r in results]
    with path.open("w", encoding="utf-8") as fh:
        json.dump(rows, fh, ensure_ascii=False, indent=2)
    return path


def selected_targets(names: Optional[List[str]] = None) -> List[Target]:
    if not names:
        return list(CLUBS)
    return targets_by_name(names)


def main(
    output_path: Optional[Union[str, Path]] = None,
    logger: Optional[Logger] = None,
) -> List[ExtractionResult]:
    cfg = ACTIVE_CONFIG
    if logger is None:
        logger = make_logger(cfg.LOGGING["LOG_FILE"], cfg.LOGGING["LEVEL"])
    output_path = output_path or cfg.OUTPUT["PATH"]

    targets = selected_targets(cfg.SCRAPER["CLUBS"])
    _log(logger, f"🚀 Scraping {len(targets)} pots ...")

    results = scrape_all_sync(targets, logger=logger, headless=cfg.SCRAPER["HEADLESS"])

    found = sum(1 for r in results if r.amount is not None)
    failed = sum(1 for r in results if r.error is not None)
    written = write_results(results, output_path)

    _log(logger, f"\n🎉 Done. Wrote {len(results)} rows to {written} (found={found}, errors={failed}).")
    _log(logger, "If a pot looks wrong, check debug.raw / debug.strategy in the output file.")
    return results


if __name__ == "__main__":
    main()
