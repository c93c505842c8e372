import importlib

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from serviceshop.config import settings
from serviceshop.utils.log import get_logger

log = get_logger("serviceshop.db", "DB")

DATABASE_URL = settings.DATABASE_URL
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, future=True, echo=False, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

# every module declaring a table; imported before create_all so metadata is populated
MODEL_MODULES = [
    "serviceshop.models.product",
    "serviceshop.models.booking",
    "serviceshop.models.c2c_request",
    "serviceshop.models.csc_booking",
    "serviceshop.models.contact_message",
    "serviceshop.models.setting",
]


def init_db(reset: bool = False):
    """
    Initialize DB schema.

    With reset=True (tests, or RESET_DB=1 at startup) all tables are dropped
    and recreated, otherwise existing tables are left in place.
    """
    for mod in MODEL_MODULES:
        importlib.import_module(mod)

    if reset:
        log.info("Resetting database...")
        Base.metadata.drop_all(bind=engine)

    Base.metadata.create_all(bind=engine)
    log.info("Database initialized.")


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
