"""
Catalogue settings.
Externalizes the tunables of the default contracts and built-in implementations.
"""
import os


class CatalogueSettings:
    """Catalogue settings with environment variable support."""

    def __init__(self):
        # Default retention bound of the built-in object pools
        self.pool_max_size: int = int(os.getenv("CATALOGUE_POOL_MAX_SIZE", "5"))
        # Number of recording observers the observer contract subscribes
        self.observer_probe_count: int = int(os.getenv("CATALOGUE_OBSERVER_PROBE_COUNT", "3"))
        # Upper bound on next() calls while probing an iterator
        self.iterator_probe_limit: int = int(os.getenv("CATALOGUE_ITERATOR_PROBE_LIMIT", "10000"))
        self.log_level: str = os.getenv("CATALOGUE_LOG_LEVEL", "INFO").upper()


settings = CatalogueSettings()
