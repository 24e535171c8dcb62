"""caching_map

A MutableMapping decorator that remembers the value resolved by the most
recent ``key in mapping`` probe and serves the following fetch of the same
key object without a second lookup.

Usage:
    cache = CachingMap(delegate)
    if key in cache:
        value = cache[key]
"""

from caching_map.exceptions import CachingMapError, InvalidArgumentError
from caching_map.logging_config import configure_logging
from caching_map.mapping import CachingMap

__all__ = ["CachingMap", "CachingMapError", "InvalidArgumentError", "configure_logging"]
__version__ = "0.1.0"
