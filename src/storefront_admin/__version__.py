"""Version information for storefront-admin."""

__version__ = "0.3.0"
