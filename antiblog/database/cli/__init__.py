#!/usr/bin/env python3
"""
Antiblog Command Line Interface
--------------------------------

Command-line access to the publishing engine.

This module provides the main CLI group and the shared context setup
for all commands. Views are printed as JSON, exactly as they would be
handed to the renderer.

Command Structure:
    - Setup (init)
    - Content (create, update, rotate)
    - Views (index, page, entry, meta, rss)

Usage:
    # Create the schema of the profile's database
    antiblog --profile blog init

    # Publish an entry from a JSON payload
    antiblog --profile blog create post.json

    # Show the second page of entries tagged "stuff"
    antiblog --profile blog page stuff 2
"""
import json
import os
from dataclasses import replace
from pathlib import Path
from typing import Any

import click

from antiblog.core.paths import LOG_DIR, PROFILE_DIR, PROFILE_ENV
from antiblog.core.profile import Profile
from antiblog.database.manager import AntiblogDB


@click.group()
@click.option(
    "--profile",
    "profile_name",
    default=None,
    help=f"Profile name (defaults to ${PROFILE_ENV})",
)
@click.option(
    "--profile-dir",
    type=click.Path(),
    default=str(PROFILE_DIR),
    help="Directory holding profile files",
)
@click.option(
    "--database",
    default=None,
    help="SQLAlchemy database URL overriding the profile",
)
@click.option(
    "--log-dir",
    type=click.Path(),
    default=str(LOG_DIR),
    help="Path to log directory",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Show detailed errors and tracebacks",
)
@click.pass_context
def cli(ctx, profile_name, profile_dir, database, log_dir, verbose):
    """Antiblog publishing engine CLI"""
    ctx.ensure_object(dict)
    ctx.obj["profile_name"] = profile_name
    ctx.obj["profile_dir"] = Path(profile_dir)
    ctx.obj["database"] = database
    ctx.obj["log_dir"] = Path(log_dir)
    ctx.obj["verbose"] = verbose


def get_profile(ctx) -> Profile:
    """
    Resolve the profile for this invocation.

    A named profile (option or environment) is loaded from disk; without a
    name the built-in defaults are used. ``--database`` overrides the URL.
    """
    if "profile" not in ctx.obj:
        name = ctx.obj.get("profile_name") or os.environ.get(PROFILE_ENV)
        if name:
            profile = Profile.load(name, ctx.obj["profile_dir"])
        else:
            profile = Profile()
        if ctx.obj.get("database"):
            profile = replace(profile, database=ctx.obj["database"])
        ctx.obj["profile"] = profile
    return ctx.obj["profile"]


def get_db(ctx, ensure_schema: bool = True) -> AntiblogDB:
    """Get or create database instance from context."""
    if "db" not in ctx.obj:
        db = AntiblogDB(get_profile(ctx), log_dir=ctx.obj["log_dir"])
        ctx.obj["db"] = db
        ctx.obj["logger"] = db.logger
        ctx.call_on_close(db.dispose)
        if ensure_schema:
            db.initialize_schema()
    return ctx.obj["db"]


def echo_json(data: Any) -> None:
    """Print a view payload as indented JSON."""
    click.echo(json.dumps(data, indent=2, ensure_ascii=False, default=str))


# Import and register command modules
# These imports must come after CLI group definition
from .setup import init  # noqa: E402
from .content import create, update, rotate  # noqa: E402
from .query import index, page, entry, meta, rss  # noqa: E402

cli.add_command(init)
cli.add_command(create)
cli.add_command(update)
cli.add_command(rotate)
cli.add_command(index)
cli.add_command(page)
cli.add_command(entry)
cli.add_command(meta)
cli.add_command(rss)


if __name__ == "__main__":
    cli(obj={})
