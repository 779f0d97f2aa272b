from scrapers.tasty_recipes_base_scraper import TastyRecipesBaseScraper


class HostTheToastScraper(TastyRecipesBaseScraper):
    """Scraper for Host the Toast blog using Tasty Recipes plugin"""

    site_name = "Host the Toast"
    base_url = "https://hostthetoast.com"
    listing_url_template = "https://hostthetoast.com/category/recipes/page/{page}/"
    total_pages = 40
    link_selector = "h2.entry-title a[href]"
