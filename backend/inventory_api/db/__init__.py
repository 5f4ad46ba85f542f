import importlib
import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from inventory_api.config import settings

log = logging.getLogger(__name__)

DATABASE_URL = settings.DATABASE_URL

connect_args = {}
if DATABASE_URL.startswith("sqlite"):
    # sync routes run in the threadpool, so a connection may hop threads
    connect_args["check_same_thread"] = False

engine = create_engine(
    DATABASE_URL, future=True, echo=settings.SQL_ECHO, connect_args=connect_args
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

# every table module must be listed so metadata is complete before create_all
MODEL_MODULES = [
    "inventory_api.models.category",
    "inventory_api.models.product",
    "inventory_api.models.stock_movement",
    "inventory_api.models.user",
]


@event.listens_for(Engine, "connect")
def _sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE clauses unless foreign keys are switched on
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def import_models():
    for mod in MODEL_MODULES:
        importlib.import_module(mod)


def init_db(reset: bool = False):
    """
    Create the schema.

    With ``reset=True`` every table is dropped first, which is what the test
    suite and ``scripts/seed_data.py --reset`` rely on.
    """
    import_models()
    if reset:
        log.warning("Dropping all tables (reset requested)")
        Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    log.info("Database initialized at %s", engine.url.render_as_string(hide_password=True))


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
