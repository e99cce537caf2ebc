"""
Domain Entities

Each entity in its own file.
"""

from .user import DEFAULT_DISPLAY_NAME, User
from .password_reset_token import PasswordResetToken
from .content_item import ContentItem

__all__ = [
    "DEFAULT_DISPLAY_NAME",
    "User",
    "PasswordResetToken",
    "ContentItem",
]
