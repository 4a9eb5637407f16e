from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from gym_classes.core.config import settings


def configure_sqlite(engine: Engine) -> Engine:
    """
    Make SQLite writers serialize instead of failing.

    pysqlite opens transactions lazily and only on DML, so a read followed by
    a write can deadlock two connections. Emitting BEGIN IMMEDIATE ourselves
    takes the write lock at the start of every transaction, which gives the
    same one-writer-per-session behaviour that SELECT ... FOR UPDATE gives
    on PostgreSQL.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def make_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        engine = create_engine(
            url, connect_args={"check_same_thread": False, "timeout": 30}
        )
        return configure_sqlite(engine)
    return create_engine(url, pool_pre_ping=True)


# The engine is the entry point to the database. It's configured with the
# database URL and handles the connection pooling.
engine = make_engine(settings.DATABASE_URL)

# SessionLocal is a factory for creating new Session objects, one per request
# or per background job.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
