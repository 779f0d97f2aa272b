import logging

from processors.recipe_processor import (
    RECIPE_FIELDS,
    clean_text,
    extract_count,
    extract_numeric_value,
    parse_time_text,
)
from scrapers import BaseScraper
from scrapers.errors import ParseError

logger = logging.getLogger(__name__)

# Tasty Recipes nutrition classes and the schema.org field each one fills
TASTY_NUTRITION_CLASSES = {
    'tasty-recipes-calories': 'calories',
    'tasty-recipes-carbohydrates': 'carbohydrateContent',
    'tasty-recipes-cholesterol': 'cholesterolContent',
    'tasty-recipes-fat': 'fatContent',
    'tasty-recipes-fiber': 'fiberContent',
    'tasty-recipes-protein': 'proteinContent',
    'tasty-recipes-saturated-fat': 'saturatedFatContent',
    'tasty-recipes-sodium': 'sodiumContent',
    'tasty-recipes-sugar': 'sugarContent',
    'tasty-recipes-trans-fat': 'transFatContent',
    'tasty-recipes-unsaturated-fat': 'unsaturatedFatContent',
}


class TastyRecipesBaseScraper(BaseScraper):
    """
    Base scraper for websites using the Tasty Recipes WordPress plugin

    Recipe fields are read straight from the labelled elements of the plugin's
    recipe card rather than from embedded structured data.
    """

    fields = RECIPE_FIELDS + ('total_time',)

    def _extract_recipe_info(self, soup, url):
        container = soup.select_one('.tasty-recipes') or soup.select_one('div[id^="tasty-recipes-"]')
        if not container:
            logger.info(f"No Tasty Recipes container found in {url}, skipping")
            return None

        title = self._text_of(container, '.tasty-recipes-title')
        if not title:
            raise ParseError(url, "Tasty Recipes card has no title")

        record = self._new_record(url)
        record['name'] = title
        record['description'] = self._text_of(
            container, '.tasty-recipes-description-body') or self._text_of(container, '.tasty-recipes-description')
        record['ingredients'] = self._extract_tasty_ingredients(container)

        record['prep_time'] = parse_time_text(self._text_of(container, '.tasty-recipes-prep-time'))
        record['cook_time'] = parse_time_text(self._text_of(container, '.tasty-recipes-cook-time'))
        record['total_time'] = parse_time_text(self._text_of(container, '.tasty-recipes-total-time'))
        record['serving_size'] = self._text_of(container, '.tasty-recipes-yield')

        record['rating'] = extract_numeric_value(self._text_of(container, '.tasty-recipes-rating .average'))
        record['review_count'] = extract_count(self._text_of(container, '.tasty-recipes-rating .count'))

        record.update(self._extract_tasty_nutrition(container))
        record['publish_date'], record['publish_time'] = self._extract_published(soup)

        logger.info(f"Successfully extracted recipe: {title}")
        return record

    def _extract_tasty_ingredients(self, container):
        """Ingredient lines from the card, newline separated"""
        # Modern format with checkboxes first
        items = container.select('li[data-tr-ingredient-checkbox]')
        if not items:
            items = container.select('.tasty-recipes-ingredients li')

        lines = [clean_text(item.get_text(' ')) for item in items]
        return '\n'.join(line for line in lines if line) or None

    def _extract_tasty_nutrition(self, container):
        nutrition = {}
        for css_class, field in TASTY_NUTRITION_CLASSES.items():
            text = self._text_of(container, f'.{css_class}')
            if text is not None:
                nutrition[field] = extract_numeric_value(text)
        return nutrition

    def _text_of(self, container, selector):
        elem = container.select_one(selector)
        if not elem:
            return None
        return clean_text(elem.get_text(' '))
