"""Database package."""

from wgbot.database.base import Base
from wgbot.database.session import sessionmanager
from wgbot.database import models

__all__ = ["Base", "sessionmanager", "models"]
