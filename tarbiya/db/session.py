from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from ..core.config import settings

# Required for SQLite (otherwise "no such table" and threading errors)
connect_args = {}
engine_kwargs = {}
url = make_url(settings.DATABASE_URL)
if url.get_backend_name() == "sqlite":
    connect_args = {"check_same_thread": False}
    if url.database in (None, "", ":memory:"):
        # a single shared connection, or every session would see its own empty database
        engine_kwargs["poolclass"] = StaticPool

# Create engine
engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.SQL_ECHO,
    future=True,
    connect_args=connect_args,
    **engine_kwargs,
)

if url.get_backend_name() == "sqlite":
    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        # ON DELETE CASCADE / SET NULL are ignored by SQLite unless this is on
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

# Session factory
SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    future=True
)
