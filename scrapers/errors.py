# scrapers/errors.py


class ScraperError(Exception):
    """Base class for all scraper failures"""


class FetchError(ScraperError):
    """A listing or recipe page could not be fetched"""

    def __init__(self, url, message, status_code=None):
        self.url = url
        self.status_code = status_code
        super().__init__(f"{message} ({url})")


class ParseError(ScraperError):
    """Structured recipe data was found on a page but could not be read"""

    def __init__(self, url, message):
        self.url = url
        self.message = message
        super().__init__(f"{message} ({url})")


class ScrapeError(ScraperError):
    """A whole site scrape failed; ``summary`` says what was attempted"""

    def __init__(self, message, summary=None):
        self.summary = summary
        super().__init__(message)


class ScrapeAborted(ScrapeError):
    """The caller asked for the scrape to stop"""
