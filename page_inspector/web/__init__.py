"""
Web module for the page inspector.

Provides a Flask-based web interface and JSON API for page inspection.
"""

from .app import create_app

__all__ = ["create_app"]
