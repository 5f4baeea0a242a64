from .api import ApiClient, ApiError
from .board import Dashboard
from .session import Session, TokenStore
from .views import summarize

__all__ = ["ApiClient", "ApiError", "Dashboard", "Session", "TokenStore", "summarize"]
