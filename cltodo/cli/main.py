"""
Command-line entry point.

Every invocation is stateless: resolve the store, open a pooled engine,
make sure the schema exists, run exactly one handler, dispose the engine.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

import click
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cltodo import __version__
from cltodo.cli.params import PRIORITY, TIMESTAMP_OR_DATE
from cltodo.cli.render import render_todos
from cltodo.core.config import Settings, get_settings
from cltodo.core.database import create_db_engine, init_db, session_scope, sqlite_url
from cltodo.core.exceptions import CltodoError
from cltodo.core.location import FilesystemStoreResolver, StoreResolver, ensure_store
from cltodo.schemas import TodoCreate, TodoFilter
from cltodo.services.todo_crud import (
    create_todo,
    delete_todo,
    get_todo,
    list_todos,
    prune_todos,
)
from cltodo.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


@dataclass
class AppContext:
    settings: Settings
    resolver: StoreResolver
    use_global: bool = False

    def database_url(self) -> str:
        if self.settings.DATABASE_URL:
            return self.settings.DATABASE_URL
        return sqlite_url(ensure_store(self.resolver.resolve(self.use_global)))


@contextmanager
def open_store(app: AppContext) -> Iterator[Session]:
    # storage, location and corruption errors all end the process with status 1
    try:
        engine = create_db_engine(app.database_url(), app.settings)
        try:
            init_db(engine)
            with session_scope(engine) as session:
                yield session
        finally:
            engine.dispose()
    except (CltodoError, SQLAlchemyError) as exc:
        logger.debug("Command failed", exc_info=True)
        raise click.ClickException(str(exc)) from exc


@click.group()
@click.version_option(__version__, prog_name="cltodo")
@click.option(
    "-g",
    "--global",
    "use_global",
    is_flag=True,
    help="Use the store in the home directory instead of the project one.",
)
@click.pass_context
def cli(ctx: click.Context, use_global: bool):
    """Track todos per project, or globally with --global."""
    if ctx.obj is None:
        settings = get_settings()
        ctx.obj = AppContext(settings=settings, resolver=FilesystemStoreResolver(settings))
    ctx.obj.use_global = use_global
    configure_logging(ctx.obj.settings.DEBUG)


@cli.command()
@click.argument("text", nargs=-1, required=True)
@click.option("-p", "--priority", type=PRIORITY, required=True, help="Priority of the todo.")
@click.pass_obj
def add(app: AppContext, text: tuple[str, ...], priority):
    """Add a todo."""
    todo = TodoCreate(text=" ".join(text), priority=priority)
    with open_store(app) as session:
        created = create_todo(session, todo)
    click.echo(f"Added #{created.id}")


@cli.command()
@click.argument("todo_id", type=int)
@click.pass_obj
def delete(app: AppContext, todo_id: int):
    """Delete the todo with the given id."""
    with open_store(app) as session:
        delete_todo(session, todo_id)


@cli.command()
@click.argument("todo_id", type=int)
@click.option("-e", "--extended", is_flag=True, help="Show the full timestamp.")
@click.pass_obj
def show(app: AppContext, todo_id: int, extended: bool):
    """Show a single todo."""
    with open_store(app) as session:
        todo = get_todo(session, todo_id)
    render_todos([todo], extended=extended)


@cli.command()
@click.option("-p", "--priority", type=PRIORITY, default=None, help="Only this priority.")
@click.option(
    "-f",
    "--from",
    "date_from",
    type=TIMESTAMP_OR_DATE,
    default=None,
    help="Earliest date or timestamp, inclusive.",
)
@click.option(
    "-t",
    "--to",
    "date_to",
    type=TIMESTAMP_OR_DATE,
    default=None,
    help="Latest date or timestamp, inclusive.",
)
@click.option("-r", "--reversed", "reversed_", is_flag=True, help="Oldest first.")
@click.option("-e", "--extended", is_flag=True, help="Show the full timestamp.")
@click.option(
    "-c",
    "--chronological",
    is_flag=True,
    help="Sort by date only, ignoring priority.",
)
@click.pass_obj
def get(app: AppContext, priority, date_from, date_to, reversed_, extended, chronological):
    """List todos, most important and most recent first."""
    filters = TodoFilter(
        priority=priority,
        date_from=date_from,
        date_to=date_to,
        reversed=reversed_,
        chronological=chronological,
    )
    with open_store(app) as session:
        todos = list_todos(session, filters)
    render_todos(todos, extended=extended)


@cli.command()
@click.pass_obj
def prune(app: AppContext):
    """Delete every todo in the store."""
    with open_store(app) as session:
        prune_todos(session)


def main():
    cli(prog_name="cltodo")


if __name__ == "__main__":
    main()
