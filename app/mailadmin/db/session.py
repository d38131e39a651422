import logging

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from app.mailadmin.core.config import settings

logger = logging.getLogger(__name__)

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    connect_args = {"check_same_thread": False}

engine = create_engine(settings.DATABASE_URL, echo=False, future=True, pool_pre_ping=True, connect_args=connect_args)


@event.listens_for(engine, "checkout")
def _receive_checkout(dbapi_connection, connection_record, connection_proxy):
    logger.debug("DB connection checkout from pool")


SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False, future=True)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
