"""
Test fixtures - temporary SQLite store per test + CLI runner bound to it
"""
import pytest
from click.testing import CliRunner

from cltodo.cli.main import AppContext, cli
from cltodo.core.config import Settings
from cltodo.core.database import create_db_engine, init_db, session_scope, sqlite_url
from cltodo.core.location import FixedStoreResolver, ensure_store


@pytest.fixture()
def settings():
    return Settings(DEBUG=False, DATABASE_URL=None, VCS_MARKERS=[".git"])


@pytest.fixture()
def db_path(tmp_path):
    return tmp_path / "store" / ".cltodo" / "data.db"


@pytest.fixture()
def engine(db_path, settings):
    """Create a fresh database file for each test"""
    engine = create_db_engine(sqlite_url(ensure_store(db_path)), settings)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine):
    with session_scope(engine) as session:
        yield session


@pytest.fixture()
def app_context(db_path, settings):
    return AppContext(settings=settings, resolver=FixedStoreResolver(db_path))


@pytest.fixture()
def invoke(app_context):
    """Run the CLI against the temporary store"""
    runner = CliRunner()

    def _invoke(*args, obj=None):
        return runner.invoke(cli, list(args), obj=obj or app_context)

    return _invoke
