from sqlalchemy import create_engine, text
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import sessionmaker, Session
from typing import Generator
from .config import settings

database_url = settings.get_database_url
engine_kwargs = {}

if database_url.startswith("sqlite"):
    # TestClient and the threadpool share the connection across threads
    engine_kwargs["connect_args"] = {"check_same_thread": False}
else:
    engine_kwargs.update(
        pool_size=5,
        max_overflow=10,
        pool_timeout=30,
        pool_recycle=1800,  # Recycle connections after 30 minutes
        pool_pre_ping=True,
    )

engine = create_engine(database_url, echo=settings.DEBUG, **engine_kwargs)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

# Database dependency
def get_db() -> Generator[Session, None, None]:
    """Get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def check_connection() -> None:
    """Round-trip a trivial query; raises if the store is unreachable."""
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))

# Database initialization
def init_db():
    """Create the tables for local development and tests."""
    # Register the models on Base.metadata before creating
    from ..models import appointment, doctor, patient  # noqa: F401

    Base.metadata.create_all(bind=engine)
