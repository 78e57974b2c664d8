"""User management CLI commands."""

import asyncio
import uuid

import typer

user_app = typer.Typer()


def _parse_ids(values: list[str]) -> list[uuid.UUID]:
    """Parse UUID strings, exiting with an error on the first malformed one."""
    parsed: list[uuid.UUID] = []
    for value in values:
        try:
            parsed.append(uuid.UUID(value))
        except ValueError:
            typer.echo(f"Error: invalid id '{value}'", err=True)
            raise typer.Exit(code=1) from None
    return parsed


@user_app.command("merge")
def merge(
    app_ids: list[str] = typer.Argument(..., help="Application ids; the first one supplies requested values"),
    user_id: str | None = typer.Option(None, "--user-id", help="Existing user to update (default: create)"),
    current_roles: bool = typer.Option(
        True,
        "--current-roles/--no-current-roles",
        help="Create duty assignments for the commonly requested current roles",
    ),
) -> None:
    """Create or update a user from nomination applications."""
    parsed_user_id = _parse_ids([user_id])[0] if user_id else None
    asyncio.run(_merge(_parse_ids(app_ids), parsed_user_id, update_current_roles=current_roles))


async def _merge(app_ids: list[uuid.UUID], user_id: uuid.UUID | None, *, update_current_roles: bool) -> None:
    """Async implementation of application merge."""
    from observer_api.core.config import get_settings
    from observer_api.core.database import dispose_engine, init_engine, session_scope
    from observer_api.lib.merger import MergeError
    from observer_api.lib.roles import RoleError
    from observer_api.services.notification_service import SmsNotifier
    from observer_api.services.user_service import merge_applications

    settings = get_settings()
    init_engine(settings.database_url, schema=settings.database_schema)

    try:
        async with session_scope() as session:
            user = await merge_applications(
                session,
                app_ids,
                user_id=user_id,
                update_current_roles=update_current_roles,
                notifier=SmsNotifier.from_settings(settings),
            )
            typer.echo(f"User {user.id} ({user.phone}) saved from {len(app_ids)} application(s)")
    except (MergeError, RoleError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e
    finally:
        await dispose_engine()


@user_app.command("set-roles")
def set_roles(
    phone: str = typer.Argument(..., help="User phone number"),
    slugs: list[str] | None = typer.Argument(None, help="Role slugs the user should hold (none removes all)"),
) -> None:
    """Replace a user's general roles."""
    asyncio.run(_set_roles(phone, slugs or []))


async def _set_roles(phone: str, slugs: list[str]) -> None:
    """Async implementation of role replacement."""
    from observer_api.core.config import get_settings
    from observer_api.core.database import dispose_engine, init_engine, session_scope
    from observer_api.lib.roles import RoleCatalog, RoleError
    from observer_api.services.credential_service import find_user_by_phone
    from observer_api.services.user_service import set_user_roles

    settings = get_settings()
    init_engine(settings.database_url, schema=settings.database_schema)

    try:
        async with session_scope() as session:
            user = await find_user_by_phone(session, phone)
            if user is None:
                typer.echo(f"Error: no user with phone {phone}", err=True)
                raise typer.Exit(code=1)
            catalog = await RoleCatalog.load(session)
            role_ids = [catalog.role(slug).id for slug in slugs]
            await set_user_roles(session, user, role_ids)
            typer.echo(f"Roles of {user.phone}: {', '.join(sorted(user.role_slugs)) or '(none)'}")
    except (RoleError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e
    finally:
        await dispose_engine()


@user_app.command("reset-password")
def reset_password(
    phone: str = typer.Argument(..., help="User phone number"),
) -> None:
    """Issue a new password and send it by SMS."""
    asyncio.run(_reset_password(phone))


async def _reset_password(phone: str) -> None:
    """Async implementation of password reset."""
    from observer_api.core.config import get_settings
    from observer_api.core.database import dispose_engine, init_engine, session_scope
    from observer_api.services.credential_service import find_user_by_phone, reset_password
    from observer_api.services.notification_service import SmsNotifier

    settings = get_settings()
    init_engine(settings.database_url, schema=settings.database_schema)

    try:
        async with session_scope() as session:
            user = await find_user_by_phone(session, phone)
            if user is None:
                typer.echo(f"Error: no user with phone {phone}", err=True)
                raise typer.Exit(code=1)
            if not await reset_password(session, user, SmsNotifier.from_settings(settings)):
                typer.echo(f"Error: user {user.phone} has no role that allows login", err=True)
                raise typer.Exit(code=1)
            typer.echo(f"New password issued for {user.phone}")
    finally:
        await dispose_engine()


@user_app.command("list")
def list_users(
    page: int = typer.Option(1, "--page", min=1, help="Page number"),
    page_size: int = typer.Option(50, "--page-size", min=1, help="Users per page"),
) -> None:
    """List users."""
    asyncio.run(_list_users(page, page_size))


async def _list_users(page: int, page_size: int) -> None:
    """Async implementation of user listing."""
    from observer_api.core.config import get_settings
    from observer_api.core.database import dispose_engine, init_engine, session_scope
    from observer_api.schemas.user import UserSummary
    from observer_api.services.user_service import list_users

    settings = get_settings()
    init_engine(settings.database_url, schema=settings.database_schema)

    try:
        async with session_scope() as session:
            users, total = await list_users(session, page=page, page_size=page_size)
            typer.echo(f"{'Phone':<12} {'Name':<40} {'Roles':<30}")
            typer.echo("-" * 82)
            for user in users:
                summary = UserSummary.from_user(user)
                typer.echo(f"{summary.phone:<12} {summary.text:<40} {', '.join(summary.roles):<30}")
            typer.echo(f"\nTotal: {total}")
    finally:
        await dispose_engine()
