"""
simplecache - a small get/set/delete/clear cache layer with two backends.

- ``LocalMemoryCache``: dictionary store scoped to the process or a session
- ``ExternalCache``: adapter over a native facility (Redis)
"""

__version__ = "0.1.0"

from simplecache.core import *  # noqa
