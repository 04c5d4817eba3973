"""
WagerPoker Server - FastAPI HTTP layer over the heads-up engine
"""

from wagerpoker.server.app import app, create_app

__all__ = ["app", "create_app"]
