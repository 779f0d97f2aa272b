from scrapers.json_ld_scraper import JsonLdRecipeScraper


class PinchOfYumScraper(JsonLdRecipeScraper):
    """Scraper for Pinch of Yum, which embeds its recipes as JSON-LD"""

    site_name = "Pinch of Yum"
    base_url = "https://pinchofyum.com"
    listing_url_template = "https://pinchofyum.com/recipes/all/page/{page}"
    total_pages = 51
    link_selector = "article a.block[href]"
