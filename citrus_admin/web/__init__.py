"""
Web Module.

Flask application factory and HTTP controllers of the console.
"""

from citrus_admin.web.app import create_app

__all__ = ["create_app"]
