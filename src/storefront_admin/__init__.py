"""storefront-admin: session auth, RBAC, domain events and caching for a storefront admin backend."""

from .__version__ import __version__
from .config.logging_config import setup_logging

setup_logging()

__all__ = ["__version__"]
