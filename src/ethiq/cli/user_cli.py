"""Flask CLI commands for user administration.

Provides ``flask user add``, ``flask user import``, ``flask user list``,
``flask user add-relationship`` and ``flask user create-admin``.
"""

from pathlib import Path

import click
from flask.cli import AppGroup

from ..models.user import UserType
from ..services.auth_provider import find_user_by_email
from ..services.csv_import import CSVImportError, import_users, parse_user_csv
from ..services.errors import DuplicateEmailError, EthiqError
from ..services.user_provisioning import (
    add_company_relationship,
    add_user,
    create_first_admin,
    list_users,
)

user_cli = AppGroup("user", help="User administration commands.")

USER_TYPES = [t.value for t in UserType]


@user_cli.command("add")
@click.option("--email", required=True, help="Email address of the new user.")
@click.option("--name", required=True, help="Full name.")
@click.option("--type", "user_type", type=click.Choice(USER_TYPES), required=True)
@click.option("--company", default=None, help="Company relationship (required unless admin).")
@click.option("--no-invite", is_flag=True, default=False, help="Do not send the invitation.")
def add_command(email: str, name: str, user_type: str, company: str | None, no_invite: bool) -> None:
    """Create a user with a temporary password."""
    try:
        result = add_user(
            email=email,
            name=name,
            user_type=user_type,
            company_relationship=company,
            send_invite=not no_invite,
        )
    except DuplicateEmailError as e:
        click.echo(f"Error: {e.message} (id {e.existing_user_id})", err=True)
        click.echo("Use 'flask user add-relationship' to link it to another company.", err=True)
        raise SystemExit(1)
    except EthiqError as e:
        click.echo(f"Error: {e.message}", err=True)
        raise SystemExit(1)

    click.echo("User created successfully:")
    click.echo(f"  ID:                 {result.user.id}")
    click.echo(f"  Email:              {result.user.email}")
    click.echo(f"  Temporary password: {result.temporary_password}")
    click.echo(f"  Invite sent:        {'yes' if result.invite_sent else 'no'}")


@user_cli.command("import")
@click.argument("csv_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--no-invite", is_flag=True, default=False, help="Do not send invitations.")
def import_command(csv_path: Path, no_invite: bool) -> None:
    """Bulk-create users from a CSV file."""
    try:
        parsed = parse_user_csv(csv_path.name, csv_path.read_bytes())
    except CSVImportError as e:
        for line in e.errors:
            click.echo(line, err=True)
        raise SystemExit(1)

    result = import_users(parsed, send_invites=not no_invite)
    click.echo(result.message)
    for line in result.errors:
        click.echo(f"  {line}")


@user_cli.command("list")
@click.option("--type", "user_type", type=click.Choice(USER_TYPES), default=None)
def list_command(user_type: str | None) -> None:
    """List users newest first in a formatted table."""
    users = list_users(user_type=user_type)
    if not users:
        click.echo("No users found.")
        return

    rows = [
        {
            "name": u.name,
            "email": u.email,
            "type": u.user_type.value,
            "companies": ", ".join(u.company_relationships or []) or "-",
            "invite": u.invite_status.value,
        }
        for u in users
    ]

    headers = {"name": "Name", "email": "Email", "type": "Type", "companies": "Companies", "invite": "Invite"}
    widths = {key: max(len(header), max(len(r[key]) for r in rows)) for key, header in headers.items()}

    click.echo("  ".join(h.ljust(widths[k]) for k, h in headers.items()))
    click.echo("  ".join("-" * widths[k] for k in headers))
    for row in rows:
        click.echo("  ".join(row[k].ljust(widths[k]) for k in headers))

    total = len(rows)
    click.echo(f"\n{total} user{'s' if total != 1 else ''}")


@user_cli.command("add-relationship")
@click.argument("email")
@click.argument("company")
def add_relationship_command(email: str, company: str) -> None:
    """Link an existing user to another company."""
    user = find_user_by_email(email)
    if user is None:
        click.echo(f"Error: no user with email {email}", err=True)
        raise SystemExit(1)

    try:
        add_company_relationship(user.id, company)
    except EthiqError as e:
        click.echo(f"Error: {e.message}", err=True)
        raise SystemExit(1)

    click.echo(f"Added '{company}' to {user.email}")


@user_cli.command("create-admin")
@click.option("--email", required=True)
@click.option("--name", required=True)
@click.password_option()
def create_admin_command(email: str, name: str, password: str) -> None:
    """Create the first admin account (only while no users exist)."""
    try:
        result = create_first_admin(email=email, name=name, password=password)
    except EthiqError as e:
        click.echo(f"Error: {e.message}", err=True)
        raise SystemExit(1)

    click.echo(f"Admin created: {result.user.email} (id {result.user.id})")
