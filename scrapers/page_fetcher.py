# scrapers/page_fetcher.py
import logging

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

import config
from scrapers.errors import FetchError

logger = logging.getLogger(__name__)

# Statuses worth another attempt; anything else non-200 fails straight away
RETRYABLE_STATUSES = [429, 500, 502, 503, 504]


def retry_policy(retries, backoff):
    """Retry policy mounted on every fetcher session"""
    return Retry(
        total=max(0, retries),
        backoff_factor=backoff,
        status_forcelist=RETRYABLE_STATUSES,
        allowed_methods=["HEAD", "GET"],
        raise_on_status=False,
    )


class PageFetcher:
    """Fetch raw page markup over HTTP with browser-like headers and retries"""

    def __init__(self, session=None, referer=None, timeout=None, retries=None, backoff=None):
        self.session = session or requests.Session()
        self.timeout = config.REQUEST_TIMEOUT if timeout is None else timeout
        self.retries = config.REQUEST_RETRIES if retries is None else retries
        self.backoff = config.RETRY_BACKOFF if backoff is None else backoff

        adapter = HTTPAdapter(max_retries=retry_policy(self.retries, self.backoff))
        self.session.mount('http://', adapter)
        self.session.mount('https://', adapter)

        self.headers = {
            'User-Agent': config.USER_AGENT,
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,image/apng,*/*;q=0.8',
            'Accept-Language': 'en-US,en;q=0.9',
            'Connection': 'keep-alive',
        }
        if referer:
            self.headers['Referer'] = referer

    def get(self, url):
        """
        Fetch a page and return its markup

        Args:
            url (str): Absolute URL of the page

        Returns:
            str: Response body

        Raises:
            FetchError: if the page could not be fetched after all retries
        """
        try:
            response = self.session.get(url, headers=self.headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Request error for {url}: {str(e)}")
            raise FetchError(url, f"Request failed: {str(e)}") from e

        if response.status_code != 200:
            logger.error(f"Error accessing URL: {url} - Status: {response.status_code}")
            raise FetchError(url, f"HTTP {response.status_code}", status_code=response.status_code)

        return response.text
