# storage/table_cache.py
import logging

from processors.recipe_aggregator import RecipeAggregator
from storage.recipe_storage import RecipeStorage

logger = logging.getLogger(__name__)


def load_or_scrape(path, scraper, refresh=False, **options):
    """
    Return the recipe table persisted at ``path``, scraping it first if needed

    The file's existence is the only check: there is no expiry. An existing
    table is returned without touching the network.

    Args:
        path (str): Location of the persisted table
        scraper (BaseScraper): Site to scrape when there is no table yet
        refresh (bool): Scrape and overwrite even if a table exists
        **options: RecipeAggregator options

    Returns:
        pandas.DataFrame: Recipe table
    """
    storage = RecipeStorage(path)

    if storage.exists() and not refresh:
        logger.info(f"Using cached {scraper.site_name} recipes from {path}")
        return storage.load()

    table = RecipeAggregator(scraper, **options).run()
    storage.save(table)
    return table
