"""
Helpers shared by the auth use cases.
"""

import logging

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User

logger = logging.getLogger(__name__)

INVALID_PASSWORD = "INVALID_PASSWORD"


def normalize_email(email: str) -> str:
    return email.strip().lower()


def password_too_short_message(min_length: int) -> str:
    return f"Password must be at least {min_length} characters long"


async def merge_anonymous_content(uow: UnitOfWork, anonymous_id: str, user: User) -> int:
    """
    Reassign content created under an anonymous id to a registered user.

    Best-effort: runs in its own transaction after the account work has been
    committed, and a failure is logged and rolled back rather than raised.

    Returns:
        Number of items moved (0 on failure)
    """
    user_id = str(user.id)
    if not anonymous_id or anonymous_id == user_id:
        return 0

    try:
        moved = await uow.content_items.reassign_owner(anonymous_id, user_id)
        await uow.commit()
    except Exception:
        await uow.rollback()
        logger.exception(f"Anonymous content merge failed for user {user_id}")
        return 0

    if moved:
        logger.info(f"Merged {moved} anonymous item(s) into user {user_id}")
    return moved
