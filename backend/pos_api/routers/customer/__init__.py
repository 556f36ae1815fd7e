"""
Customer routers - /customer/*
Authenticated by the table access code only.
"""

from .routes import router

__all__ = ["router"]
