"""Bookshelf: an in-memory RESTful book resource service.

The package holds the book store, the codec that turns books into JSON/HTML
views, and the FastAPI layer that dispatches requests onto them.
"""

__version__ = "0.1.0"
