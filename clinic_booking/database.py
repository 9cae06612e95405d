"""
Database Connection and Session Management

Supports:
- SQLite (local development and tests)
- Any SQLAlchemy URL (MySQL, PostgreSQL) for a shared clinic database
"""

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool
from sqlalchemy.schema import CreateIndex, CreateTable
import logging

from clinic_booking.config import settings

logger = logging.getLogger(__name__)


def configure_sqlite(target: Engine, foreign_keys: bool = True) -> Engine:
    """Turn on PRAGMA foreign_keys for every new SQLite connection."""
    if target.dialect.name != "sqlite" or not foreign_keys:
        return target

    @event.listens_for(target, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return target


# Configure engine based on database type
if settings.DATABASE_URL.startswith("sqlite"):
    if ":memory:" in settings.DATABASE_URL:
        # One shared connection, otherwise every session sees an empty database
        engine = create_engine(
            settings.DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=settings.DEBUG
        )
    else:
        engine = create_engine(
            settings.DATABASE_URL,
            connect_args={"check_same_thread": False},
            echo=settings.DEBUG
        )
    configure_sqlite(engine, settings.SQLITE_FOREIGN_KEYS)
else:
    engine = create_engine(
        settings.DATABASE_URL,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
        pool_recycle=3600,
        echo=settings.DEBUG
    )

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Yield a session and always close it."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine = None):
    """Initialize database tables."""
    # Import models so every table is registered on Base.metadata
    import clinic_booking.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables initialized")


def reset_db(bind: Engine = None):
    """Drop and re-create every table."""
    import clinic_booking.models  # noqa: F401

    target = bind or engine
    Base.metadata.drop_all(bind=target)
    logger.warning("All clinic tables dropped")
    Base.metadata.create_all(bind=target)
    logger.info("Database tables re-created")


def render_ddl(dialect_name: str = "mysql") -> str:
    """Render CREATE TABLE / CREATE INDEX statements for the given dialect."""
    import clinic_booking.models  # noqa: F401
    from sqlalchemy.dialects import registry

    dialect = registry.load(dialect_name)()
    statements = []
    for table in Base.metadata.sorted_tables:
        statements.append(str(CreateTable(table).compile(dialect=dialect)).strip() + ";")
        for index in sorted(table.indexes, key=lambda ix: ix.name):
            statements.append(str(CreateIndex(index).compile(dialect=dialect)).strip() + ";")
    return "\n\n".join(statements) + "\n"


def health_check(bind: Engine = None):
    """Check database connectivity."""
    try:
        with (bind or engine).connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False
