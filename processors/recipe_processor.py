# processors/recipe_processor.py
import re
import logging
from datetime import datetime

import pandas as pd

logger = logging.getLogger(__name__)

BASE_FIELDS = (
    'url',
    'name',
    'publish_date',
    'publish_time',
    'description',
    'ingredients',
    'prep_time',
    'cook_time',
    'review_count',
    'rating',
    'serving_size',
)

# schema.org NutritionInformation property names
NUTRITION_FIELDS = (
    'calories',
    'carbohydrateContent',
    'cholesterolContent',
    'fatContent',
    'fiberContent',
    'proteinContent',
    'saturatedFatContent',
    'sodiumContent',
    'sugarContent',
    'transFatContent',
    'unsaturatedFatContent',
)

RECIPE_FIELDS = BASE_FIELDS + NUTRITION_FIELDS

# Column types of a recipe table; anything not listed is text
FIELD_DTYPES = {
    'id': 'int64',
    'prep_time': 'Int64',
    'cook_time': 'Int64',
    'total_time': 'Int64',
    'review_count': 'Int64',
    'rating': 'Float64',
}
FIELD_DTYPES.update({field: 'Float64' for field in NUTRITION_FIELDS})

_ISO_DURATION = re.compile(
    r'^P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+(?:\.\d+)?)S)?)?$',
    re.IGNORECASE
)
_NUMBER = re.compile(r'-?(?:\d+(?:\.\d*)?|\.\d+)')


def empty_record(fields):
    """Return a recipe record with every field missing"""
    return {field: None for field in fields}


def clean_text(value):
    """Collapse whitespace; empty strings become None"""
    if value is None:
        return None
    text = re.sub(r'\s+', ' ', str(value)).strip()
    return text or None


def parse_iso_duration(iso_duration):
    """
    Parse ISO 8601 duration to minutes

    Args:
        iso_duration (str|int): ISO 8601 duration string (e.g., 'PT1H30M') or integer minutes

    Returns:
        int: Duration in minutes or None if it can't be read
    """
    if iso_duration is None or iso_duration == '':
        return None

    if isinstance(iso_duration, bool):
        return None
    if isinstance(iso_duration, (int, float)):
        return int(iso_duration)

    iso_duration = str(iso_duration).strip()
    if iso_duration.isdigit():
        return int(iso_duration)

    match = _ISO_DURATION.match(iso_duration)
    if not match or not any(match.groups()):
        logger.debug(f"Unrecognised ISO duration: {iso_duration}")
        return None

    days, hours, minutes, seconds = match.groups()
    total = int(days or 0) * 24 * 60 + int(hours or 0) * 60 + int(minutes or 0)
    total += int(float(seconds or 0) // 60)
    return total


def parse_time_text(time_text):
    """
    Parse time text like "30 mins" or "1 hr 15 mins" into minutes

    Args:
        time_text (str): Time text to parse

    Returns:
        int: Time in minutes or None
    """
    if not time_text:
        return None

    total_minutes = 0
    found = False

    hr_match = re.search(r'(\d+)\s*(?:hours?|hrs?)\b', time_text, re.IGNORECASE)
    if hr_match:
        total_minutes += int(hr_match.group(1)) * 60
        found = True

    min_match = re.search(r'(\d+)\s*(?:minutes?|mins?)\b', time_text, re.IGNORECASE)
    if min_match:
        total_minutes += int(min_match.group(1))
        found = True

    return total_minutes if found else None


def extract_numeric_value(value):
    """
    Extract numeric value from string or number

    "250 kcal" -> 250.0, "1,200 mg" -> 1200.0, "N/A" -> None
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)

    match = _NUMBER.search(str(value).replace(',', ''))
    if not match:
        return None
    return float(match.group())


def extract_count(value):
    """Whole-number counts such as review totals"""
    number = extract_numeric_value(value)
    return int(number) if number is not None else None


def split_published_timestamp(timestamp):
    """
    Split an ISO 8601 publish timestamp into date and time strings

    Args:
        timestamp (str): e.g. '2021-03-04T06:00:00+00:00'

    Returns:
        tuple: ('2021-03-04', '06:00:00'); (None, None) if it can't be read
    """
    if not timestamp:
        return None, None

    text = str(timestamp).strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'

    try:
        published = datetime.fromisoformat(text)
    except ValueError:
        logger.warning(f"Could not parse publish timestamp: {timestamp}")
        return None, None

    publish_time = published.strftime('%H:%M:%S') if 'T' in text or ' ' in text else None
    return published.strftime('%Y-%m-%d'), publish_time


def build_recipe_table(records, fields):
    """
    Assemble recipe records into a typed table

    Records keep their order; ``id`` is assigned 1..n in that order.

    Args:
        records (list): Recipe records
        fields (tuple): Field set of the site the records came from

    Returns:
        pandas.DataFrame: One row per record, ``id`` first
    """
    rows = [{field: record.get(field) for field in fields} for record in records]
    table = pd.DataFrame(rows, columns=list(fields))
    table.insert(0, 'id', range(1, len(table) + 1))

    dtypes = {column: FIELD_DTYPES.get(column, 'string') for column in table.columns}
    return table.astype(dtypes)
