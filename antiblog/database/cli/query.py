"""
View Commands
--------------

Read-only commands printing the JSON handed to the renderer.

Commands:
    - index: Id and signature of every entry
    - page: One page of a listing, optionally tag-filtered
    - entry: A single entry by alias, id or "random"
    - meta: A single entry by meta alias
    - rss: The recency feed
"""
import click
from sqlalchemy.exc import SQLAlchemyError

from antiblog.core.exceptions import AntiblogError
from antiblog.core.logging_manager import handle_cli_error
from . import echo_json, get_db


@click.command()
@click.pass_context
def index(ctx):
    """List the id and signature of every entry."""
    try:
        echo_json(get_db(ctx).api_index())
    except (AntiblogError, SQLAlchemyError) as e:
        handle_cli_error(ctx, e, "index")


@click.command()
@click.argument("a", required=False)
@click.argument("b", required=False)
@click.pass_context
def page(ctx, a, b):
    """
    Show a page of entries.

    \b
    Examples:
        antiblog page            first page
        antiblog page 3          third page
        antiblog page stuff      first page tagged "stuff"
        antiblog page stuff last last page tagged "stuff"
    """
    try:
        echo_json(get_db(ctx).page_view(a, b).to_dict())
    except (AntiblogError, SQLAlchemyError) as e:
        handle_cli_error(ctx, e, "page", {"a": a, "b": b})


@click.command()
@click.argument("ref")
@click.pass_context
def entry(ctx, ref):
    """Show the entry REF (alias, numeric id or "random")."""
    try:
        echo_json(get_db(ctx).entry_view(ref).to_dict())
    except (AntiblogError, SQLAlchemyError) as e:
        handle_cli_error(ctx, e, "entry", {"ref": ref})


@click.command()
@click.argument("ref")
@click.pass_context
def meta(ctx, ref):
    """Show the entry with meta alias REF."""
    try:
        echo_json(get_db(ctx).meta_view(ref).to_dict())
    except (AntiblogError, SQLAlchemyError) as e:
        handle_cli_error(ctx, e, "meta", {"ref": ref})


@click.command()
@click.pass_context
def rss(ctx):
    """Show the recency feed."""
    try:
        echo_json(get_db(ctx).rss_view().to_dict())
    except (AntiblogError, SQLAlchemyError) as e:
        handle_cli_error(ctx, e, "rss")
