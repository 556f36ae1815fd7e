"""
Staff management routers - /manage/*
Every route requires a staff bearer token with an allowed role.
"""

from .routes import router

__all__ = ["router"]
