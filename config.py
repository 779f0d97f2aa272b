# config.py
import os
from dotenv import load_dotenv

# Try to load .env file if exists locally
load_dotenv()

# Scraping Configuration
USER_AGENT = os.environ.get(
    'USER_AGENT',
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36'
)
REQUEST_TIMEOUT = int(os.environ.get('REQUEST_TIMEOUT', '30'))
REQUEST_RETRIES = int(os.environ.get('REQUEST_RETRIES', '2'))
RETRY_BACKOFF = float(os.environ.get('RETRY_BACKOFF', '1.0'))  # seconds, doubled per attempt
SCRAPE_DELAY = float(os.environ.get('SCRAPE_DELAY', '2.0'))  # seconds between requests to one host
SCRAPE_JITTER = float(os.environ.get('SCRAPE_JITTER', '1.0'))
MAX_WORKERS = int(os.environ.get('MAX_WORKERS', '1'))

# Where scraped recipe tables are persisted
DATA_DIR = os.environ.get('DATA_DIR', 'data')

# Logging
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOG_FILE = 'recipe_scraper.log'
LOG_DIR = os.getenv('LOG_DIR', 'logs')
