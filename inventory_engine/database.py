# inventory_engine/database.py

from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker

from inventory_engine.core.config import settings


def _serialize_sqlite_writers(engine) -> None:
    # pysqlite defers BEGIN until the first write, so two checkouts can both
    # hold a read lock and then deadlock upgrading it. Taking the write lock
    # up front makes concurrent checkouts queue on the busy timeout instead.
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(url: str):
    # Heroku/Azure style URLs
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)

    if url.startswith("sqlite"):
        connect_args = {
            "check_same_thread": False,
            "timeout": settings.SQLITE_BUSY_TIMEOUT,
        }
        engine = create_engine(url, connect_args=connect_args)
        _serialize_sqlite_writers(engine)
        return engine

    return create_engine(url, pool_pre_ping=True)


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
