"""
Core query logic for listing and searching the catalog.
"""

from catalog.core.listing import Page, resolve_sort, page_offset, total_pages, contains_pattern

__all__ = ['Page', 'resolve_sort', 'page_offset', 'total_pages', 'contains_pattern']
