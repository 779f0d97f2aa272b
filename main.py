# main.py
import argparse
import logging
import sys

import config
from logging_setup import LOG_LEVELS, setup_logging
from processors.rate_limiter import RateLimiter
from scrapers.errors import ScrapeError
from scrapers.registry import SCRAPERS, get_scraper
from storage.recipe_storage import table_path
from storage.table_cache import load_or_scrape

logger = logging.getLogger(__name__)


def positive_int(value):
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Recipe blog scraper")
    parser.add_argument('--site', choices=['all'] + sorted(SCRAPERS), default='all',
                        help='Site to scrape (default: all)')
    parser.add_argument('--output-dir', default=config.DATA_DIR,
                        help=f'Directory for scraped recipe tables (default: {config.DATA_DIR})')
    parser.add_argument('--workers', type=positive_int, default=config.MAX_WORKERS,
                        help=f'Concurrent recipe fetches (default: {config.MAX_WORKERS})')
    parser.add_argument('--delay', type=float, default=config.SCRAPE_DELAY,
                        help=f'Minimum seconds between requests to a site (default: {config.SCRAPE_DELAY})')
    parser.add_argument('--max-pages', type=positive_int,
                        help='Only walk this many listing pages per site')
    parser.add_argument('--limit', type=positive_int,
                        help='Maximum number of recipes to fetch per site')
    parser.add_argument('--log-level', choices=LOG_LEVELS, type=str.upper, default=config.LOG_LEVEL.upper(),
                        help=f'Logging level (default: {config.LOG_LEVEL})')
    parser.add_argument('--refresh', action='store_true',
                        help='Scrape again even if a saved table exists')
    parser.add_argument('--list-sites', action='store_true',
                        help='List the supported sites and exit')
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point for the recipe scraper"""
    args = parse_args(argv)

    if args.list_sites:
        for key in sorted(SCRAPERS):
            scraper_class = SCRAPERS[key]
            print(f"{key}: {scraper_class.site_name} ({scraper_class.total_pages} listing pages)")
        return 0

    setup_logging(args.log_level)
    logger.info("Starting recipe scraper")

    sites = sorted(SCRAPERS) if args.site == 'all' else [args.site]
    failed = False

    for site in sites:
        path = table_path(site, args.output_dir)
        try:
            table = load_or_scrape(
                path,
                get_scraper(site),
                refresh=args.refresh,
                max_workers=args.workers,
                rate_limiter=RateLimiter(args.delay, config.SCRAPE_JITTER if args.delay else 0),
                max_pages=args.max_pages,
                limit=args.limit,
            )
            logger.info(f"{site}: {len(table)} recipes in {path}")
        except ScrapeError as e:
            logger.error(f"{site} scraping failed: {str(e)}")
            if e.summary is not None:
                logger.error(str(e.summary))
            failed = True

    logger.info("Recipe scraping completed")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
