"""
Authentication routers - /auth/*
Handles registration, login and user info.
"""

from .routes import router

__all__ = ["router"]
