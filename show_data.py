import json
import sys
from pathlib import Path
from textwrap import shorten

from config import OUTPUT


def main(path: str = OUTPUT["PATH"]):
    file = Path(path)
    if not file.exists():
        print(f"No output file at {file}. Run nightly_scrape.py first.")
        return

    rows = json.loads(file.read_text(encoding="utf-8"))
    if not rows:
        print("Output file is empty.")
        return

    rows = sorted(rows, key=lambda r: r.get("amount") or -1, reverse=True)
    print(f"\nShowing {len(rows)} pots, largest first:\n")

    for row in rows:
        debug = row.get("debug") or {}
        amount = row.get("amount")

        print("-" * 80)
        print(f"Club:      {row.get('club')}")
        print(f"URL:       {row.get('url')}")
        print(f"Pot (SEK): {amount:,}".replace(",", " ") if amount is not None else "Pot:       n/a")
        print(f"Fetched:   {row.get('fetched_at')}")
        if row.get("error"):
            print(f"Error:     {row['error']}")
        else:
            print(f"Strategy:  {debug.get('strategy')}")
            print(f"Raw:       {shorten(debug.get('raw') or '-', width=120, placeholder='...')}")
    print()


if __name__ == "__main__":
    main(*sys.argv[1:2])
