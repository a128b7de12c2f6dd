"""
PotScraper Config Module
------------------------
Zentrale Konfiguration für den Pot-Scraper.

Beinhaltet:
- Pfad-Management
- Umgebungsvariablen
- Scraper-Settings
- Output-Settings
- Logging-Konfiguration
- Auto-Verzeichnisgenerierung
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# -----------------------------
# Load .env if available
# -----------------------------
load_dotenv()

# -----------------------------
# Base project paths
# -----------------------------
BASE_DIR = Path(__file__).resolve().parent


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# Create folders if missing
def ensure_dirs():
    dirs = [
        BASE_DIR / "logs",
        BASE_DIR / "output",
    ]
    for d in dirs:
        d.mkdir(parents=True, exist_ok=True)

ensure_dirs()

# -----------------------------
# Scraper configuration
# -----------------------------
SCRAPER = {
    "HEADLESS": _env_bool("POTS_HEADLESS", True),
    # comma separated club names, empty = all clubs
    "CLUBS": [c for c in os.getenv("POTS_CLUBS", "").split(",") if c.strip()],
}

# -----------------------------
# Output configuration
# -----------------------------
OUTPUT = {
    "PATH": os.getenv("POTS_OUTPUT_PATH", str(BASE_DIR / "output" / "data.json")),
}

# -----------------------------
# Logging configuration
# -----------------------------
LOGGING = {
    "LOG_FILE": str(BASE_DIR / "logs" / "potscraper.log"),
    "LEVEL": os.getenv("LOG_LEVEL", "INFO"),
}

# -----------------------------
# Config classes
# -----------------------------
class Config:
    SCRAPER = SCRAPER
    OUTPUT = OUTPUT
    LOGGING = LOGGING


class DevConfig(Config):
    LOGGING = {**LOGGING, "LEVEL": os.getenv("LOG_LEVEL", "DEBUG")}


class ProdConfig(Config):
    SCRAPER = {**SCRAPER, "HEADLESS": True}
    LOGGING = {**LOGGING, "LEVEL": os.getenv("LOG_LEVEL", "INFO")}


# active config
ACTIVE_CONFIG = ProdConfig() if os.getenv("ENV") == "prod" else DevConfig()
