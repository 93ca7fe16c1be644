"""
Movie Catalog API package.

This package contains the REST API, the listing/search query logic,
database models and operations, and a small HTTP client.
"""

__version__ = "1.0.0"
