class ScraperError(Exception):
    """Base class for scraper exceptions."""
    pass


class ExtractionError(ScraperError):
    """Raised when the page breaks down while the pot is being extracted."""
    pass


class NetworkError(ScraperError):
    """Raised when network or page loading fails."""
    pass
