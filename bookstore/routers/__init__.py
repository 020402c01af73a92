"""
API Routers Package

- books.py: the four book endpoints, mounted under ``Settings.api_prefix``

Each router is imported and registered in main.py.
"""

from bookstore.routers.books import router as books_router

__all__ = [
    "books_router",
]
