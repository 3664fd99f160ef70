"""Middlewares package."""

from wgbot.middlewares.database import DatabaseMiddleware
from wgbot.middlewares.auth import AuthMiddleware
from wgbot.middlewares.admin import AdminMiddleware

__all__ = ["DatabaseMiddleware", "AuthMiddleware", "AdminMiddleware"]