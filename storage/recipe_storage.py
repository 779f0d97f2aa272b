# storage/recipe_storage.py
import logging
import os

import pandas as pd

import config

logger = logging.getLogger(__name__)


def table_path(site, data_dir=None):
    """Default location of a site's persisted recipe table"""
    return os.path.join(data_dir or config.DATA_DIR, f"{site}_recipes.pkl")


class RecipeStorage:
    """Store scraped recipe tables on disk"""

    def __init__(self, path):
        self.path = path

    def exists(self):
        return os.path.isfile(self.path)

    def _validate_table(self, table):
        """
        Validate a recipe table before it is written

        Args:
            table (pandas.DataFrame): Recipe table

        Returns:
            bool: True if the table is valid, False otherwise
        """
        if 'id' not in table.columns:
            logger.warning("Recipe table has no id column")
            return False

        if list(table['id']) != list(range(1, len(table) + 1)):
            logger.warning("Recipe table ids are not contiguous from 1")
            return False

        return True

    def save(self, table):
        """
        Persist a recipe table, replacing any table already at the path

        Args:
            table (pandas.DataFrame): Recipe table

        Raises:
            ValueError: if the table is not a valid recipe table
        """
        if not self._validate_table(table):
            raise ValueError(f"Refusing to save invalid recipe table to {self.path}")

        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        # Write next to the target first so a crash never leaves half a table
        temp_path = f"{self.path}.tmp"
        try:
            table.to_pickle(temp_path, compression=None)
            os.replace(temp_path, self.path)
        except Exception:
            logger.error(f"Failed to save recipe table to {self.path}")
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise
        logger.info(f"Saved {len(table)} recipes to {self.path}")

    def load(self):
        """
        Load the persisted recipe table

        Returns:
            pandas.DataFrame: Recipe table
        """
        table = pd.read_pickle(self.path, compression=None)
        logger.info(f"Loaded {len(table)} recipes from {self.path}")
        return table
