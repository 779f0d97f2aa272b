# processors/recipe_aggregator.py
import logging
from collections import namedtuple
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field

import config
from processors.rate_limiter import RateLimiter
from processors.recipe_processor import build_recipe_table
from scrapers.errors import FetchError, ParseError, ScrapeAborted, ScrapeError

logger = logging.getLogger(__name__)

RECIPE = 'recipe'
NOT_A_RECIPE = 'not_a_recipe'
FETCH_FAILED = 'fetch_failed'
PARSE_FAILED = 'parse_failed'
ERROR = 'error'
ABORTED = 'aborted'

FetchOutcome = namedtuple('FetchOutcome', ['status', 'record', 'error'])


@dataclass
class ScrapeSummary:
    """Counts of what one site scrape attempted and how it went"""

    site: str
    pages_attempted: int = 0
    pages_failed: int = 0
    links_found: int = 0
    duplicate_links: int = 0
    attempted: int = 0
    succeeded: int = 0
    skipped: int = 0
    fetch_errors: int = 0
    parse_errors: int = 0
    other_errors: int = 0
    failures: list = field(default_factory=list)  # (url, reason)

    @property
    def failed(self):
        return self.fetch_errors + self.parse_errors + self.other_errors

    def __str__(self):
        return (
            f"{self.site}: {self.succeeded}/{self.attempted} recipes scraped, "
            f"{self.skipped} skipped (not a recipe), {self.failed} failed "
            f"(fetch: {self.fetch_errors}, parse: {self.parse_errors}, other: {self.other_errors}); "
            f"{self.pages_failed}/{self.pages_attempted} listing pages failed, "
            f"{self.duplicate_links} duplicate links dropped"
        )


class RecipeAggregator:
    """
    Scrape a whole site into one recipe table

    Links are gathered from every listing page first, deduplicated, then each
    one is fetched. Failures are isolated per page and per link. Record IDs
    follow link order, so a parallel scrape yields the same table as a
    sequential one.
    """

    def __init__(self, scraper, max_workers=None, rate_limiter=None, max_pages=None, limit=None, stop_event=None):
        """
        Args:
            scraper (BaseScraper): Site to scrape
            max_workers (int, optional): Concurrent recipe fetches; 1 is sequential
            rate_limiter (RateLimiter, optional): Politeness policy between requests
            max_pages (int, optional): Only walk this many listing pages
            limit (int, optional): Fetch at most this many recipe links
            stop_event (threading.Event, optional): Set to abort the scrape
        """
        self.scraper = scraper
        self.max_workers = max(1, config.MAX_WORKERS if max_workers is None else max_workers)
        self.rate_limiter = rate_limiter or RateLimiter(config.SCRAPE_DELAY, config.SCRAPE_JITTER)
        self.max_pages = max_pages
        self.limit = limit
        self.stop_event = stop_event
        self.summary = ScrapeSummary(site=scraper.site_name)

    def run(self):
        """
        Run the scrape

        Returns:
            pandas.DataFrame: Recipe table with ids 1..n

        Raises:
            ScrapeError: if every listing page or every recipe fetch failed
            ScrapeAborted: if the stop event was set
        """
        self.summary = ScrapeSummary(site=self.scraper.site_name)
        logger.info(f"Starting {self.scraper.site_name} scrape")

        links = self._dedupe(self._collect_all_links())
        if self.limit is not None:
            links = links[:self.limit]

        outcomes = self._fetch_all(links)

        records = []
        for link, outcome in zip(links, outcomes):
            if outcome is None or outcome.status == ABORTED:
                continue
            self._count(link, outcome)
            if outcome.status == RECIPE:
                records.append(outcome.record)

        if self._stopped():
            logger.warning(f"{self.scraper.site_name} scrape aborted: {self.summary}")
            raise ScrapeAborted(f"{self.scraper.site_name} scrape aborted", self.summary)

        self._check_fatal()

        table = build_recipe_table(records, self.scraper.fields)
        logger.info(str(self.summary))
        for url, reason in self.summary.failures:
            logger.info(f"Failed: {url} - {reason}")
        return table

    def _collect_all_links(self):
        total_pages = self.scraper.total_pages
        if self.max_pages is not None:
            total_pages = min(total_pages, self.max_pages)

        links = []
        for page_index in range(1, total_pages + 1):
            if self._stopped():
                raise ScrapeAborted(f"{self.scraper.site_name} scrape aborted", self.summary)

            self.summary.pages_attempted += 1
            url = self.scraper.listing_url(page_index)
            self.rate_limiter.wait(url)
            try:
                links.extend(self.scraper.collect_links(page_index))
            except FetchError as e:
                logger.error(f"Skipping listing page {page_index}: {str(e)}")
                self.summary.pages_failed += 1
                self.summary.failures.append((url, str(e)))

        self.summary.links_found = len(links)
        logger.info(f"Found {len(links)} recipe links on {total_pages} listing pages")

        if self.summary.pages_attempted and self.summary.pages_failed == self.summary.pages_attempted:
            raise ScrapeError(
                f"Every listing page of {self.scraper.site_name} failed to load", self.summary)
        return links

    def _dedupe(self, links):
        seen = set()
        unique = []
        for link in links:
            if link not in seen:
                seen.add(link)
                unique.append(link)

        self.summary.duplicate_links = len(links) - len(unique)
        if self.summary.duplicate_links:
            logger.info(f"Dropped {self.summary.duplicate_links} duplicate recipe links")
        return unique

    def _fetch_all(self, links):
        if self.max_workers == 1 or len(links) < 2:
            outcomes = []
            for link in links:
                if self._stopped():
                    break
                outcomes.append(self._fetch_one(link))
            return outcomes

        # Each future fills only its own slot, so order follows the links
        outcomes = [None] * len(links)
        executor = ThreadPoolExecutor(max_workers=self.max_workers)
        try:
            futures = {executor.submit(self._fetch_one, link): index for index, link in enumerate(links)}
            for future in as_completed(futures):
                outcomes[futures[future]] = future.result()
        finally:
            executor.shutdown(wait=True, cancel_futures=True)
        return outcomes

    def _fetch_one(self, link):
        if self._stopped():
            return FetchOutcome(ABORTED, None, None)

        self.rate_limiter.wait(link)
        try:
            record = self.scraper.fetch_recipe(link)
        except FetchError as e:
            logger.error(f"Error fetching recipe {link}: {str(e)}")
            return FetchOutcome(FETCH_FAILED, None, str(e))
        except ParseError as e:
            logger.error(f"Error parsing recipe {link}: {str(e)}")
            return FetchOutcome(PARSE_FAILED, None, str(e))
        except Exception as e:
            logger.error(f"Unexpected error scraping recipe {link}: {str(e)}", exc_info=True)
            return FetchOutcome(ERROR, None, str(e))

        if record is None:
            return FetchOutcome(NOT_A_RECIPE, None, None)
        return FetchOutcome(RECIPE, record, None)

    def _count(self, link, outcome):
        summary = self.summary
        summary.attempted += 1

        if outcome.status == RECIPE:
            summary.succeeded += 1
        elif outcome.status == NOT_A_RECIPE:
            summary.skipped += 1
        elif outcome.status == FETCH_FAILED:
            summary.fetch_errors += 1
        elif outcome.status == PARSE_FAILED:
            summary.parse_errors += 1
        else:
            summary.other_errors += 1

        if outcome.error:
            summary.failures.append((link, outcome.error))

    def _check_fatal(self):
        summary = self.summary
        if summary.attempted and summary.fetch_errors == summary.attempted:
            raise ScrapeError(
                f"Every recipe page of {self.scraper.site_name} failed to load ({summary})", summary)
        if not summary.attempted:
            logger.warning(f"No recipe links found for {self.scraper.site_name}")

    def _stopped(self):
        return self.stop_event is not None and self.stop_event.is_set()


def scrape_site(scraper, **options):
    """
    Scrape every recipe of a site into one table

    Args:
        scraper (BaseScraper): Site to scrape
        **options: RecipeAggregator options (max_workers, rate_limiter, ...)

    Returns:
        pandas.DataFrame: Recipe table
    """
    return RecipeAggregator(scraper, **options).run()
