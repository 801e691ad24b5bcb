import os
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
import logging

from burnnote.models.base import Base

logger = logging.getLogger(__name__)

# =========================
# CONFIGURATION
# =========================

DB_USER = os.getenv("DB_USER", "burnnote")
DB_PASS = os.getenv("DB_PASS", "burnnote")
DB_HOST = os.getenv("DB_HOST", "localhost")
DB_PORT = os.getenv("DB_PORT", "5432")
DB_NAME = os.getenv("DB_NAME", "burnnote")

# A full URL wins over the individual parts (e.g. sqlite:///notes.db for local runs)
DATABASE_URL = os.getenv(
    "BURNNOTE_DATABASE_URL",
    f"postgresql://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}",
)

# =========================
# ENGINE CONFIGURATION
# =========================

def build_engine(url: str = DATABASE_URL, echo: bool = False):
    """Create an engine; SQLite gets a thread-shared connection, others a pool."""
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=echo, **kwargs)

    return create_engine(
        url,
        pool_pre_ping=True,  # Check connections before using them
        pool_size=5,         # Maintain 5 connections in the pool
        max_overflow=10,     # Allow 10 extra connections if needed
        pool_recycle=3600,   # Recycle connections every hour
        echo=echo,
    )


engine = build_engine()

# =========================
# SESSION CONFIGURATION
# =========================

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)

# =========================
# DATABASE FUNCTIONS
# =========================

def init_db(bind=None):
    """Create all tables based on registered models."""
    # Import models here to register them with Base
    from burnnote.models.note import Note  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables created")


def check_connection(bind=None) -> bool:
    """
    Test DB connection.
    """
    try:
        with (bind or engine).connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connection successful")
        return True
    except Exception as e:
        logger.error("Database connection failed: %s", e)
        return False
