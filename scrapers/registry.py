# scrapers/registry.py
from scrapers.host_the_toast_scraper import HostTheToastScraper
from scrapers.pinchofyum_scraper import PinchOfYumScraper

SCRAPERS = {
    'pinchofyum': PinchOfYumScraper,
    'hostthetoast': HostTheToastScraper,
}


def get_scraper(site, **kwargs):
    """
    Build the scraper registered for a site key

    Args:
        site (str): Site key, e.g. 'pinchofyum'
        **kwargs: Passed to the scraper (fetcher, session)

    Returns:
        BaseScraper: Scraper instance
    """
    try:
        scraper_class = SCRAPERS[site]
    except KeyError:
        raise ValueError(f"Unknown site '{site}'. Known sites: {', '.join(sorted(SCRAPERS))}") from None
    return scraper_class(**kwargs)
