"""Phone-based login and SMS password resets."""

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from observer_api.core.security import InvalidPhoneNumber, issue_password, normalize_phone_number, verify_password
from observer_api.lib.roles import may_login
from observer_api.models import User
from observer_api.services.notification_service import SmsNotifier, mask_phone


async def find_user_by_phone(session: AsyncSession, phone: str) -> User | None:
    """Find a user by phone number in any common notation.

    Args:
        session: The database session.
        phone: Phone number as typed by the user.

    Returns:
        The User, or None if the number is malformed or unknown.
    """
    try:
        normalized = normalize_phone_number(phone)
    except InvalidPhoneNumber:
        return None
    result = await session.execute(select(User).where(User.phone == normalized))
    return result.scalar_one_or_none()


async def authenticate_user(session: AsyncSession, phone: str, password: str) -> User | None:
    """Authenticate a user by phone number and password.

    Returns:
        The User if the credentials match, None otherwise.
    """
    user = await find_user_by_phone(session, phone)
    if user is None or user.hashed_password is None:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


async def reset_password(session: AsyncSession, user: User, notifier: SmsNotifier) -> bool:
    """Replace the user's password with a new one and text it to them.

    Only users who may log in get a password; for anyone else this is a
    no-op.  The save skips field validation so that legacy records with
    out-of-range data can still recover access.

    Returns:
        True if a new password was issued.
    """
    if not may_login(user):
        logger.info(f"Password reset refused for user {user.id}: no login role")
        return False
    issue_password(user)
    try:
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    logger.info(f"Issued new password for {mask_phone(user.phone)}")
    await notifier.send_password(user)
    return True
