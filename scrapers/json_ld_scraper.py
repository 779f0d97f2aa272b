# scrapers/json_ld_scraper.py
import html
import json
import logging

from processors.recipe_processor import (
    NUTRITION_FIELDS,
    RECIPE_FIELDS,
    clean_text,
    extract_count,
    extract_numeric_value,
    parse_iso_duration,
    split_published_timestamp,
)
from scrapers import BaseScraper
from scrapers.errors import ParseError

logger = logging.getLogger(__name__)


class JsonLdRecipeScraper(BaseScraper):
    """Base scraper for sites that publish schema.org Recipe data as JSON-LD"""

    fields = RECIPE_FIELDS + ('total_time', 'recipe_category', 'recipe_cuisine')

    def _extract_recipe_info(self, soup, url):
        recipe_data = self._find_recipe_data(soup, url)
        if recipe_data is None:
            logger.info(f"No JSON-LD recipe found in {url}, skipping")
            return None

        record = self._new_record(url)
        record['name'] = self._text(recipe_data.get('name'))
        record['description'] = self._text(recipe_data.get('description'))
        record['ingredients'] = self._ingredients(recipe_data.get('recipeIngredient'), url)
        record['prep_time'] = parse_iso_duration(recipe_data.get('prepTime'))
        record['cook_time'] = parse_iso_duration(recipe_data.get('cookTime'))
        record['total_time'] = parse_iso_duration(recipe_data.get('totalTime'))
        record['serving_size'] = self._serving_size(recipe_data.get('recipeYield'))
        record['recipe_category'] = self._joined(recipe_data.get('recipeCategory'))
        record['recipe_cuisine'] = self._joined(recipe_data.get('recipeCuisine'))

        rating = self._mapping(recipe_data, 'aggregateRating', url)
        record['rating'] = extract_numeric_value(rating.get('ratingValue'))
        record['review_count'] = extract_count(rating.get('reviewCount', rating.get('ratingCount')))

        nutrition = self._mapping(recipe_data, 'nutrition', url)
        for field in NUTRITION_FIELDS:
            if field in nutrition:
                record[field] = extract_numeric_value(nutrition[field])

        publish_date, publish_time = self._extract_published(soup)
        if publish_date is None:
            publish_date, publish_time = split_published_timestamp(recipe_data.get('datePublished'))
        record['publish_date'] = publish_date
        record['publish_time'] = publish_time

        logger.info(f"Successfully extracted recipe: {record['name']}")
        return record

    def _find_recipe_data(self, soup, url):
        """
        Find the Recipe object among the page's JSON-LD blocks

        Returns None when no block describes a recipe. A malformed block is
        only an error if no other block on the page has the recipe.
        """
        block_error = None

        for script in soup.find_all('script', attrs={'type': 'application/ld+json'}):
            raw = script.string or script.get_text()
            if not raw or not raw.strip():
                continue

            try:
                data = json.loads(raw)
            except json.JSONDecodeError as e:
                logger.warning(f"Error parsing JSON-LD in {url}: {str(e)}")
                block_error = f"Malformed JSON-LD: {e}"
                continue

            try:
                recipe_data = self._find_recipe_in(data, url)
            except ParseError as e:
                logger.warning(f"Unusable JSON-LD block in {url}: {e.message}")
                block_error = e.message
                continue

            if recipe_data is not None:
                return recipe_data

        if block_error is not None:
            raise ParseError(url, block_error)
        return None

    def _find_recipe_in(self, data, url):
        if isinstance(data, list):
            candidates = data
        elif isinstance(data, dict):
            graph = data.get('@graph', [])
            if not isinstance(graph, list):
                raise ParseError(url, "JSON-LD @graph is not a list")
            candidates = [data] + graph
        else:
            candidates = []

        for item in candidates:
            if isinstance(item, dict) and self._is_recipe(item):
                return item
        return None

    def _is_recipe(self, item):
        item_type = item.get('@type')
        if isinstance(item_type, list):
            return 'Recipe' in item_type
        return item_type == 'Recipe'

    def _mapping(self, recipe_data, key, url):
        value = recipe_data.get(key)
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ParseError(url, f"Recipe {key} is a {type(value).__name__}, expected an object")
        return value

    def _ingredients(self, value, url):
        if value is None:
            return None
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise ParseError(url, "recipeIngredient is not a list of strings")

        lines = [self._text(item) for item in value]
        return '\n'.join(line for line in lines if line) or None

    def _serving_size(self, value):
        # Yields often come as ["4", "4 servings"]; the first entry is kept
        if isinstance(value, list):
            value = value[0] if value else None
        return self._text(value)

    def _joined(self, value):
        if isinstance(value, list):
            value = ', '.join(str(item) for item in value if item)
        return self._text(value)

    def _text(self, value):
        if value is None or isinstance(value, (dict, list)):
            return None
        return clean_text(html.unescape(str(value)))
