"""Mini README: Interactive interfaces for Moneyflow.

Exports the FastAPI application factory that serves the expense form in a
browser.
"""

from .web_app import create_application

__all__ = ["create_application"]
