# API endpoints
from . import chat, files, health

__all__ = ["chat", "files", "health"]
