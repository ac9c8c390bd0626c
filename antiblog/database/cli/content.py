"""
Content Commands
-----------------

Commands that change entries or their order.

Commands:
    - create: Create an entry from a JSON payload
    - update: Update (or restore) an entry from a JSON payload
    - rotate: Promote the last entry until a visible one is first

Payloads are JSON objects with the keys accepted by the publishing API:
id, title, body, summary, url, symlink, metalink, tags, series, signature.
"""
import json

import click
from sqlalchemy.exc import SQLAlchemyError

from antiblog.core.exceptions import AntiblogError
from antiblog.core.logging_manager import handle_cli_error
from . import echo_json, get_db


def _read_payload(source) -> dict:
    return json.load(source)


@click.command()
@click.argument("payload", type=click.File("r", encoding="utf-8"))
@click.pass_context
def create(ctx, payload):
    """Create an entry from PAYLOAD (a JSON file, or - for stdin)."""
    try:
        db = get_db(ctx)
        entry_id = db.create_entry(_read_payload(payload))
        echo_json({"id": entry_id})

    except (AntiblogError, SQLAlchemyError, json.JSONDecodeError) as e:
        handle_cli_error(ctx, e, "create", {"payload": payload.name})


@click.command()
@click.argument("payload", type=click.File("r", encoding="utf-8"))
@click.pass_context
def update(ctx, payload):
    """Update the entry described by PAYLOAD, creating it if unknown."""
    try:
        db = get_db(ctx)
        entry_id = db.update_entry(_read_payload(payload))
        echo_json({"id": entry_id})

    except (AntiblogError, SQLAlchemyError, json.JSONDecodeError) as e:
        handle_cli_error(ctx, e, "update", {"payload": payload.name})


@click.command()
@click.pass_context
def rotate(ctx):
    """Promote the last entry to the front (skipping invisible ones)."""
    try:
        db = get_db(ctx)
        echo_json({"promoted": db.rotate()})

    except (AntiblogError, SQLAlchemyError) as e:
        handle_cli_error(ctx, e, "rotate")
