"""
Setup Commands
---------------

Commands:
    - init: Create the database schema
"""
import click
from sqlalchemy.exc import SQLAlchemyError

from antiblog.core.exceptions import AntiblogError
from antiblog.core.logging_manager import handle_cli_error
from . import get_db


@click.command()
@click.pass_context
def init(ctx):
    """Create all missing tables of the profile's database."""
    try:
        db = get_db(ctx, ensure_schema=False)
        click.echo("🗄️  Initializing database schema...")
        created = db.initialize_schema()
        if created:
            click.echo(f"  Created tables: {', '.join(created)}")
        else:
            click.echo("  Schema already up to date")
        click.echo("✅ Database initialized!")

    except (AntiblogError, SQLAlchemyError) as e:
        handle_cli_error(ctx, e, "init")
