"""
Shared pytest fixtures

Every test talks to a FakeSession instead of the network: it serves canned
markup by URL and records each request it receives.
"""

import json

import pytest

from processors.rate_limiter import RateLimiter
from scrapers.host_the_toast_scraper import HostTheToastScraper
from scrapers.page_fetcher import PageFetcher
from scrapers.pinchofyum_scraper import PinchOfYumScraper

PUBLISHED = '2021-03-04T06:00:00+00:00'


class FakeResponse:
    def __init__(self, status_code=200, text=''):
        self.status_code = status_code
        self.text = text


class FakeSession:
    """Stands in for requests.Session; unknown URLs answer 404"""

    def __init__(self, pages=None):
        self.pages = dict(pages or {})
        self.requests = []
        self.adapters = {}

    def mount(self, prefix, adapter):
        self.adapters[prefix] = adapter

    def get(self, url, headers=None, timeout=None):
        self.requests.append(url)
        page = self.pages.get(url)
        if page is None:
            return FakeResponse(404, 'Not Found')
        if isinstance(page, Exception):
            raise page
        if isinstance(page, FakeResponse):
            return page
        return FakeResponse(200, page)


def sample_recipe_json():
    return {
        '@context': 'https://schema.org',
        '@type': 'Recipe',
        'name': 'Coconut Chicken Curry',
        'description': 'A cozy weeknight curry &amp; rice.',
        'recipeIngredient': ['1 lb chicken thighs', '2 cups rice', '1 can coconut milk'],
        'prepTime': 'PT15M',
        'cookTime': 'PT1H',
        'totalTime': 'PT1H15M',
        'recipeYield': ['4', '4 servings'],
        'recipeCategory': ['Dinner', 'Curry'],
        'recipeCuisine': 'Indian',
        'aggregateRating': {'@type': 'AggregateRating', 'ratingValue': '4.8', 'ratingCount': '120'},
        'nutrition': {
            '@type': 'NutritionInformation',
            'calories': '520 kcal',
            'carbohydrateContent': '45 g',
            'cholesterolContent': '80 mg',
            'fatContent': '22 g',
            'fiberContent': '3 g',
            'proteinContent': '35 g',
            'saturatedFatContent': '12 g',
            'sodiumContent': '1,150 mg',
            'sugarContent': '4 g',
            'transFatContent': '0 g',
            'unsaturatedFatContent': '8 g',
        },
    }


def json_ld_page(*payloads, published=PUBLISHED):
    """Recipe page carrying each payload in its own JSON-LD script"""
    scripts = ''
    for payload in payloads:
        body = payload if isinstance(payload, str) else json.dumps(payload)
        scripts += f'<script type="application/ld+json">{body}</script>'
    meta = f'<meta property="article:published_time" content="{published}">' if published else ''
    return f'<html><head>{meta}{scripts}</head><body><h1>Post</h1></body></html>'


def pinchofyum_listing(urls):
    articles = ''.join(
        f'<article><a class="block" href="{url}"><img src="x.jpg"></a>'
        f'<h3><a href="{url}">Recipe</a></h3></article>'
        for url in urls
    )
    return f'<html><body><div class="grid">{articles}</div><a href="/about">About</a></body></html>'


def tasty_page(title='French Onion Soup', nutrition=None, published=PUBLISHED,
               card_class='tasty-recipes', checkboxes=True):
    if nutrition is None:
        nutrition = {
            'calories': '410',
            'sugar': '9g',
            'sodium': '980mg',
            'fat': '21g',
            'saturated-fat': '11g',
            'unsaturated-fat': '8g',
            'trans-fat': '0g',
            'carbohydrates': '38g',
            'fiber': '3g',
            'protein': '18g',
            'cholesterol': '55mg',
        }
    nutrition_html = ''.join(
        f'<li><span class="tasty-recipes-label">{key}:</span> '
        f'<span class="tasty-recipes-{key}">{value}</span></li>'
        for key, value in nutrition.items()
    )
    title_html = f'<h2 class="tasty-recipes-title">{title}</h2>' if title else ''
    checkbox = ' data-tr-ingredient-checkbox=""' if checkboxes else ''
    return f"""
    <html><head><meta property="article:published_time" content="{published}"></head>
    <body><article>
      <div id="tasty-recipes-1234" class="{card_class}">
        {title_html}
        <div class="tasty-recipes-rating"><span class="rating-label">
          <span class="average">4.9</span> from <span class="count">37</span> reviews
        </span></div>
        <div class="tasty-recipes-description"><h3>Description</h3>
          <div class="tasty-recipes-description-body"><p>Deeply caramelized onions.</p></div>
        </div>
        <div class="tasty-recipes-details"><ul>
          <li><span class="tasty-recipes-label">Prep Time:</span> <span class="tasty-recipes-prep-time">20 minutes</span></li>
          <li><span class="tasty-recipes-label">Cook Time:</span> <span class="tasty-recipes-cook-time">1 hour 10 minutes</span></li>
          <li><span class="tasty-recipes-label">Total Time:</span> <span class="tasty-recipes-total-time">1 hour 30 minutes</span></li>
          <li><span class="tasty-recipes-label">Yield:</span> <span class="tasty-recipes-yield">6 servings</span></li>
        </ul></div>
        <div class="tasty-recipes-ingredients"><ul>
          <li{checkbox}><span>4</span> large onions, sliced</li>
          <li{checkbox}><span>6 cups</span> beef stock</li>
          <li{checkbox}><span>2 cups</span> gruyere, grated</li>
        </ul></div>
        <div class="tasty-recipes-nutrition"><ul>{nutrition_html}</ul></div>
      </div>
    </article></body></html>
    """


def hostthetoast_listing(urls):
    posts = ''.join(
        f'<article><h2 class="entry-title"><a href="{url}">Recipe</a></h2>'
        f'<a class="more-link" href="{url}">Read more</a></article>'
        for url in urls
    )
    return f'<html><body><main>{posts}</main></body></html>'


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def fetcher(session):
    return PageFetcher(session=session, retries=0, backoff=0)


@pytest.fixture
def pinchofyum(fetcher):
    return PinchOfYumScraper(fetcher=fetcher)


@pytest.fixture
def hostthetoast(fetcher):
    return HostTheToastScraper(fetcher=fetcher)


@pytest.fixture
def no_delay():
    return RateLimiter()
