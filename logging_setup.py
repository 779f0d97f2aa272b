# logging_setup.py
import logging
import os
from datetime import datetime

from config import LOG_DIR, LOG_FILE, LOG_LEVEL

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']


def setup_logging(level=None):
    """
    Log a scrape run to the console and to its own timestamped file

    Args:
        level (str, optional): Level name such as 'DEBUG'; defaults to LOG_LEVEL
    """
    os.makedirs(LOG_DIR, exist_ok=True)
    log_filename = os.path.join(LOG_DIR, f"{datetime.now():%Y%m%d_%H%M%S}_{LOG_FILE}")

    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_filename),
            logging.StreamHandler()
        ]
    )

    # Retry and connection pool chatter from requests
    logging.getLogger('urllib3').setLevel(logging.WARNING)

    return logging.getLogger(__name__)
