"""User account service: atomic saves, application merges and role edits.

Every write goes through :func:`save_user`, which is the single commit
boundary for a user.  It validates the record, runs the permission gate on
staged role changes, applies them, approves the source application of a
newly created account and commits, all in one transaction.
"""

import uuid
from collections.abc import Iterable, Sequence

from loguru import logger
from sqlalchemy import func, inspect, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from observer_api.core.security import PHONE_PATTERN, issue_password
from observer_api.lib.merger import ApplicationMerger, InvalidMergeInput
from observer_api.lib.roles import PolicyGate, RoleCatalog, RoleMembership, may_login
from observer_api.models import Role, User, UserApp
from observer_api.services.lookup_service import build_lookups
from observer_api.services.notification_service import SmsNotifier

YEAR_BORN_MIN = 1900
YEAR_BORN_MAX = 2000


class InvalidUserRecord(ValueError):
    """The user record fails field validation.

    Args:
        errors: One message per invalid field.
    """

    def __init__(self, errors: Sequence[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


def validate_user(user: User) -> None:
    """Check the stored-field invariants of a user.

    Raises:
        InvalidUserRecord: If the phone is not 10 digits or the year of birth
            is out of range.
    """
    errors: list[str] = []
    if not user.phone or not PHONE_PATTERN.match(user.phone):
        errors.append("phone must be exactly 10 digits")
    if user.year_born is not None and not (YEAR_BORN_MIN < user.year_born < YEAR_BORN_MAX):
        errors.append(f"year_born must be between {YEAR_BORN_MIN + 1} and {YEAR_BORN_MAX - 1}")
    if errors:
        raise InvalidUserRecord(errors)


async def save_user(
    session: AsyncSession,
    membership: RoleMembership,
    *,
    valid_roles: Iterable[Role | uuid.UUID | str] | None = None,
    notifier: SmsNotifier | None = None,
    validate: bool = True,
) -> User:
    """Persist a user together with its staged role changes.

    Args:
        session: The database session.
        membership: Role membership of the user being saved.
        valid_roles: Roles the acting user may change. None means unrestricted.
        notifier: When given, a newly created user who may log in is sent
            their password after commit.
        validate: Skip field validation when False (password resets).

    Returns:
        The saved user.

    Raises:
        InvalidUserRecord: If validation fails or the phone is already taken.
        RoleMutationForbidden: If staged role changes fall outside ``valid_roles``.
    """
    user = membership.user
    is_new = not inspect(user).has_identity
    phone = user.phone
    try:
        if validate:
            validate_user(user)
        PolicyGate(valid_roles).check(membership)
        membership.apply()
        membership.invalidate()
        if is_new:
            if user.hashed_password is None:
                issue_password(user)
            if user.user_app is not None and not user.user_app.approved:
                user.user_app.approve()
                logger.info(f"Approved application {user.user_app.id}")
        session.add(user)
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise InvalidUserRecord([f"phone {phone} is already registered"]) from None
    except Exception:
        await session.rollback()
        raise
    finally:
        membership.invalidate()

    logger.info(f"{'Created' if is_new else 'Updated'} user {user.id}")
    if is_new and notifier is not None and may_login(user):
        await notifier.send_password(user)
    return user


async def get_user(session: AsyncSession, user_id: uuid.UUID) -> User | None:
    """Get a user by ID."""
    result = await session.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def list_users(session: AsyncSession, page: int = 1, page_size: int = 20) -> tuple[list[User], int]:
    """List users ordered by creation time.

    Args:
        session: The database session.
        page: Page number (1-based).
        page_size: Items per page.

    Returns:
        Tuple of (users list, total count).
    """
    total = (await session.execute(select(func.count(User.id)))).scalar_one()
    offset = (page - 1) * page_size
    result = await session.execute(select(User).order_by(User.created_at).offset(offset).limit(page_size))
    return list(result.scalars().all()), total


async def load_applications(session: AsyncSession, app_ids: Sequence[uuid.UUID]) -> list[UserApp]:
    """Load applications, preserving the order of ``app_ids``.

    Raises:
        InvalidMergeInput: If no ids are given or any application is missing.
    """
    if not app_ids:
        msg = "At least one application is required"
        raise InvalidMergeInput(msg)
    result = await session.execute(select(UserApp).where(UserApp.id.in_(app_ids)))
    by_id = {app.id: app for app in result.scalars().all()}
    missing = [str(app_id) for app_id in app_ids if app_id not in by_id]
    if missing:
        msg = f"Applications not found: {', '.join(missing)}"
        raise InvalidMergeInput(msg)
    return [by_id[app_id] for app_id in app_ids]


async def merge_applications(
    session: AsyncSession,
    app_ids: Sequence[uuid.UUID],
    *,
    user_id: uuid.UUID | None = None,
    update_current_roles: bool = True,
    valid_roles: Iterable[Role | uuid.UUID | str] | None = None,
    notifier: SmsNotifier | None = None,
) -> User:
    """Create or update a user from applications and save it.

    Args:
        session: The database session.
        app_ids: Ordered application ids; the first one supplies requested values.
        user_id: Existing user to update. A new user is created when None.
        update_current_roles: Whether to create duty assignments.
        valid_roles: Roles the acting user may change. None means unrestricted.
        notifier: Used to send the password of a newly created user.

    Returns:
        The saved user.

    Raises:
        InvalidMergeInput: If applications are missing.
        ValueError: If ``user_id`` does not exist.
    """
    apps = await load_applications(session, app_ids)
    if user_id is None:
        user = User()
    else:
        user = await get_user(session, user_id)
        if user is None:
            msg = f"User {user_id} not found"
            raise ValueError(msg)

    catalog = await RoleCatalog.load(session)
    membership = RoleMembership(user, catalog)
    merger = ApplicationMerger(build_lookups(session))
    try:
        await merger.merge(membership, apps, update_current_roles=update_current_roles)
    except Exception:
        await session.rollback()
        raise
    return await save_user(session, membership, valid_roles=valid_roles, notifier=notifier)


async def create_user_from_application(
    session: AsyncSession,
    app_id: uuid.UUID,
    *,
    notifier: SmsNotifier | None = None,
) -> User:
    """Materialise a new account from a single application."""
    return await merge_applications(session, [app_id], notifier=notifier)


async def set_user_roles(
    session: AsyncSession,
    user: User,
    role_ids: Iterable[object],
    *,
    valid_roles: Iterable[Role | uuid.UUID | str] | None = None,
) -> User:
    """Replace a user's general roles as an acting user.

    Args:
        session: The database session.
        user: The user to edit.
        role_ids: The complete new set of role ids.
        valid_roles: Roles the acting user may change. None means unrestricted.

    Returns:
        The saved user.

    Raises:
        RoleNotFound: If an id is unknown.
        RoleMutationForbidden: If the change touches roles outside ``valid_roles``.
    """
    catalog = await RoleCatalog.load(session)
    membership = RoleMembership(user, catalog)
    membership.set_roles(role_ids)
    return await save_user(session, membership, valid_roles=valid_roles)
