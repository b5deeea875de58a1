# barbershop/db.py

import logging

from sqlalchemy import event
from sqlmodel import SQLModel, create_engine, Session

from .config import DATABASE_URL, DB_ECHO, SEED_DEFAULT_SERVICES

logger = logging.getLogger(__name__)


def make_engine(url: str = DATABASE_URL):
    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            echo=DB_ECHO,
            connect_args={"check_same_thread": False, "timeout": 30},  # required for SQLite + FastAPI
        )
        _use_explicit_sqlite_transactions(engine)
    else:
        engine = create_engine(url, echo=DB_ECHO, pool_pre_ping=True)
    return engine


def _use_explicit_sqlite_transactions(engine):
    # pysqlite defers BEGIN until the first write; emit it ourselves so a
    # booking transaction holds the write lock before its overlap query runs.
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        # WAL: open read transactions do not block the booking commit
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        if conn.get_execution_options().get("sqlite_immediate"):
            conn.exec_driver_sql("BEGIN IMMEDIATE")
        else:
            conn.exec_driver_sql("BEGIN")


engine = make_engine()


# Dependency: one session per request
def get_session():
    with Session(engine) as session:
        yield session


def begin_write_locked(session: Session) -> None:
    """Discard pending work and start a transaction that excludes other writers."""
    if session.in_transaction():
        session.rollback()
    if session.get_bind().dialect.name == "sqlite":
        options = {"sqlite_immediate": True}
    else:
        options = {"isolation_level": "SERIALIZABLE"}
    session.connection(execution_options=options)


def init_db(bind=None) -> None:
    """Create tables and run the one-time provisioning steps."""
    from .catalog import seed_default_services
    from .work_hours import initialize_default_work_hours

    bind = bind if bind is not None else engine
    SQLModel.metadata.create_all(bind)
    with Session(bind) as session:
        initialize_default_work_hours(session)
        if SEED_DEFAULT_SERVICES:
            seed_default_services(session)
    logger.info("Database initialised")
