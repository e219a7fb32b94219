# Overview: Flask CLI command groups for bootstrap, inspection, and maintenance.

# backend/erp/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap/repair:
# - python -m flask system init [--admin-password admin123]
#   Idempotent bootstrap: tables, permissions, default roles and grants, admin user.
# - python -m flask system seed-sample
#   Insert sample brands, categories, products and customers (only into an empty catalog).
# - python -m flask system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
#
# Users:
# - python -m flask users list
# - python -m flask users create --username jane --email jane@example.com --password secret1 --role sales
#
# Permissions:
# - python -m flask perms list [--role sales] [--category orders]
# - python -m flask perms grant sales delete_orders
# - python -m flask perms revoke sales delete_orders

import click
from flask.cli import with_appcontext

from .extensions import db
from .models import Permission, Role, User
from .permissions import DEFAULT_ROLE_PERMISSIONS
from .services import permission_service, seed_service, users_service
from .validation import ConflictError, ValidationError


@click.group('system')
def system_group():
    """System bootstrap and repair commands."""


@system_group.command('init')
@click.option('--admin-username', default='admin', show_default=True)
@click.option('--admin-email', default='admin@example.com', show_default=True)
@click.option('--admin-password', default='admin123', show_default=True, help='Only used when creating the admin')
@with_appcontext
def init_system(admin_username, admin_email, admin_password):
    """
    Create tables, the permission catalog, default roles and the admin user.

    SECURITY: Change the admin password immediately in production!
    """
    click.echo("START Initializing system...")
    db.create_all()

    result = seed_service.bootstrap(
        admin_username=admin_username,
        admin_email=admin_email,
        admin_password=admin_password,
    )
    click.echo(f"PASS Created {result['roles']} roles, {result['permissions']} permissions, "
               f"{result['grants']} role grants")
    if result["admin_created"]:
        click.echo(f"PASS Created admin user '{admin_username}'")
    else:
        click.echo(f"PASS Using existing admin user '{admin_username}'")


@system_group.command('seed-sample')
@with_appcontext
def seed_sample():
    """Insert sample catalog and customers."""
    if seed_service.seed_sample_data():
        click.echo("PASS Sample data added")
    else:
        click.echo("SKIP Sample data already present")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def reset_db(yes):
    """
    DANGER: Drop all tables and recreate schema.

    This will DELETE ALL DATA!
    """
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)

    click.echo("DELETE  Dropping all tables...")
    db.drop_all()

    click.echo("BUILD  Creating all tables...")
    db.create_all()

    click.echo("PASS Database reset complete. Run 'python -m flask system init' to initialize.")


@click.group('users')
def users_group():
    """User inspection and bootstrap commands."""


@users_group.command('create')
@click.option('--username', prompt=True, help='Username')
@click.option('--email', prompt=True, help='Email address')
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True, help='Password')
@click.option('--role', type=click.Choice(sorted(DEFAULT_ROLE_PERMISSIONS)), default='viewer', show_default=True)
@with_appcontext
def create_user_cli(username, email, password, role):
    """Create a user with one role."""
    role_obj = db.session.query(Role).filter_by(name=role).first()
    if not role_obj:
        click.echo(f"FAIL Role '{role}' not found. Run 'python -m flask system init' first.")
        return

    try:
        users_service.create_user(
            patch={"username": username, "email": email},
            password=password,
            role_ids=[role_obj.id],
        )
    except ValidationError as e:
        details = "; ".join(f"{k}: {v}" for k, v in e.errors.items()) or str(e)
        click.echo(f"FAIL {details}")
        return
    except ConflictError as e:
        click.echo(f"FAIL {e}")
        return

    click.echo(f"PASS Created user: {username} ({email}) with role '{role}'")


@users_group.command('list')
@with_appcontext
def list_users():
    """List all users with their roles."""
    users = db.session.query(User).order_by(User.username.asc()).all()

    if not users:
        click.echo("No users found.")
        return

    click.echo("\n" + "="*90)
    click.echo(f"{'ID':<5} {'Username':<20} {'Email':<35} {'Active':<8} {'Roles'}")
    click.echo("="*90)

    for user in users:
        roles_str = ", ".join(r.name for r in user.roles) or "none"
        active_str = "Yes" if user.is_active else "No"
        click.echo(f"{user.id:<5} {user.username:<20} {user.email:<35} {active_str:<8} {roles_str}")

    click.echo("="*90 + "\n")


@click.group('perms')
def perms_group():
    """Permission inspection and repair commands."""


@perms_group.command('list')
@click.option('--role', help='Filter by role name')
@click.option('--category', help='Filter by category')
@with_appcontext
def list_permissions_cli(role, category):
    """List all permissions, optionally filtered by role or category."""
    if role:
        role_obj = db.session.query(Role).filter_by(name=role).first()
        if not role_obj:
            click.echo(f"FAIL Role '{role}' not found")
            return
        perms = role_obj.permissions
        title = f"Permissions for role: {role}"
    else:
        query = db.session.query(Permission).order_by(Permission.name.asc())
        if category:
            query = query.filter_by(category=category)
        perms = query.all()
        title = f"Permissions in category: {category}" if category else "All permissions"

    click.echo(f"\n{'='*80}")
    click.echo(title)
    click.echo(f"{'='*80}\n")
    click.echo(f"{'Name':<25} {'Category':<15} {'Description'}")
    click.echo("-"*80)
    for perm in perms:
        click.echo(f"{perm.name:<25} {perm.category or '':<15} {perm.description or ''}")
    click.echo(f"\n Total: {len(perms)} permissions\n")


@perms_group.command('grant')
@click.argument('role_name')
@click.argument('permission_name')
@with_appcontext
def grant_permission_cli(role_name, permission_name):
    """Grant a permission to a role."""
    try:
        granted = permission_service.grant_permission_to_role(role_name, permission_name)
    except ValueError as e:
        click.echo(f"FAIL Error: {str(e)}")
        return

    if granted:
        click.echo(f"PASS Granted '{permission_name}' to role '{role_name}'")
    else:
        click.echo(f"WARN  Role '{role_name}' already has '{permission_name}'")


@perms_group.command('revoke')
@click.argument('role_name')
@click.argument('permission_name')
@with_appcontext
def revoke_permission_cli(role_name, permission_name):
    """Revoke a permission from a role."""
    try:
        revoked = permission_service.revoke_permission_from_role(role_name, permission_name)
    except ValueError as e:
        click.echo(f"FAIL Error: {str(e)}")
        return

    if revoked:
        click.echo(f"PASS Revoked '{permission_name}' from role '{role_name}'")
    else:
        click.echo(f"WARN  Permission '{permission_name}' was not granted to '{role_name}'")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(users_group)
    app.cli.add_command(perms_group)
