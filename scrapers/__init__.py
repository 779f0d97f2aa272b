# scrapers/__init__.py
import logging
from abc import ABC, abstractmethod
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

from processors.recipe_processor import RECIPE_FIELDS, empty_record, split_published_timestamp
from scrapers.page_fetcher import PageFetcher

logger = logging.getLogger(__name__)


class BaseScraper(ABC):
    """
    Abstract base class for all site scrapers

    A scraper knows how to page through one site's recipe listing and how to
    turn one of its recipe pages into a recipe record. Subclasses set the
    class attributes below and implement ``_extract_recipe_info``.
    """

    site_name = None
    base_url = None
    listing_url_template = None  # formatted with page=<1-based index>
    total_pages = 0
    link_selector = None  # CSS selector for recipe anchors on a listing page
    fields = RECIPE_FIELDS

    def __init__(self, fetcher=None, session=None):
        """
        Args:
            fetcher (PageFetcher, optional): Fetcher to use for every request
            session (requests.Session, optional): Session for a default fetcher
        """
        self.fetcher = fetcher or PageFetcher(session=session, referer=self.base_url)
        logger.info(f"Initialized {self.site_name} scraper with {self.total_pages} listing pages")

    def listing_url(self, page_index):
        """URL of the listing page at a 1-based index"""
        if not 1 <= page_index <= self.total_pages:
            raise ValueError(f"Page index {page_index} outside 1..{self.total_pages} for {self.site_name}")
        return self.listing_url_template.format(page=page_index)

    def collect_links(self, page_index):
        """
        Collect recipe links from one listing page

        Args:
            page_index (int): 1-based listing page index

        Returns:
            list: Absolute recipe URLs in document order

        Raises:
            FetchError: if the listing page could not be fetched
        """
        url = self.listing_url(page_index)
        logger.info(f"Getting recipe links from: {url}")

        soup = BeautifulSoup(self.fetcher.get(url), 'lxml')

        links = []
        for anchor in soup.select(self.link_selector):
            link = self._normalize_link(anchor.get('href'))
            if link:
                links.append(link)

        logger.info(f"Found {len(links)} recipe links on page {page_index}")
        return links

    def fetch_recipe(self, link):
        """
        Fetch one recipe page and extract its record

        Args:
            link (str): Recipe URL

        Returns:
            dict: Recipe record, or None if the page holds no recipe

        Raises:
            FetchError: if the page could not be fetched
            ParseError: if recipe data is present but malformed
        """
        logger.info(f"Scraping recipe: {link}")
        soup = BeautifulSoup(self.fetcher.get(link), 'lxml')
        return self._extract_recipe_info(soup, link)

    @abstractmethod
    def _extract_recipe_info(self, soup, url):
        """
        Extract structured recipe information from a parsed page

        Args:
            soup (BeautifulSoup): Parsed recipe page
            url (str): URL of the page

        Returns:
            dict: Recipe record, or None if the page holds no recipe
        """

    def _new_record(self, url):
        record = empty_record(self.fields)
        record['url'] = url
        return record

    def _normalize_link(self, href):
        if not href:
            return None
        href = href.strip()
        if not href or href.startswith(('#', 'mailto:', 'javascript:', 'tel:')):
            return None

        link = urljoin(self.base_url + '/', href)
        parsed = urlparse(link)
        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            return None
        return parsed._replace(fragment='').geturl()

    def _extract_published(self, soup):
        """Publish date and time from the page's article:published_time meta tag"""
        meta = soup.find('meta', attrs={'property': 'article:published_time'})
        if not meta or not meta.get('content'):
            return None, None
        return split_published_timestamp(meta['content'])
