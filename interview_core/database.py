"""Database Configuration and Connection Management Module

This module handles database connectivity, session management, and table operations
for the interview assessment core. It provides a PostgreSQL connection with connection
pooling, and falls back to a SQLite connection when DATABASE_URL points at one
(local development and tests).

Dependencies:
- sqlalchemy: For database ORM and connection management.
- dotenv: For environment variable loading.
- loguru: For logging operations.
- interview_core.models.interview_models: For database model definitions.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from dotenv import load_dotenv
import os
from loguru import logger
from interview_core.models.interview_models import Base
load_dotenv()


def build_database_url() -> str:
    """Resolve the database URL from DATABASE_URL or the DB_* variables.

    Raises:
        ValueError: If neither DATABASE_URL nor the full DB_* set is configured
    """
    database_url = os.getenv("DATABASE_URL")
    if database_url:
        return database_url

    required_vars = {
        "DB_USER": os.getenv("DB_USER"),
        "DB_PASSWORD": os.getenv("DB_PASSWORD"),
        "DB_HOST": os.getenv("DB_HOST"),
        "DB_PORT": os.getenv("DB_PORT"),
        "DB_NAME": os.getenv("DB_NAME"),
    }
    missing_vars = [var for var, value in required_vars.items() if not value]
    if missing_vars:
        raise ValueError(f"Missing required environment variables: {', '.join(missing_vars)}")

    return (
        f"postgresql+psycopg2://{required_vars['DB_USER']}:{required_vars['DB_PASSWORD']}"
        f"@{required_vars['DB_HOST']}:{required_vars['DB_PORT']}/{required_vars['DB_NAME']}?sslmode=require"
    )


def build_engine(database_url: str):
    """Create an engine suited to the backend named in the URL."""
    if database_url.startswith("sqlite"):
        # In-memory SQLite must share one connection across sessions
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(
        database_url,
        echo=False,
        pool_pre_ping=True, # verify connections before using
        pool_recycle=300 # Recycle connections every 5 minutes
    )


DATABASE_URL = build_database_url()
engine = build_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def get_db_session():
    """FastAPI dependency for database session management.

    Creates a new database session for each request and ensures proper
    cleanup after the request is completed.

    Yields:
        Session: SQLAlchemy database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def create_tables(bind=None):
    """Create all database tables defined in the models.

    Raises:
        Exception: If table creation fails

    Note:
        This operation is idempotent - existing tables won't be modified
    """
    try:
        Base.metadata.create_all(bind=bind or engine)
        logger.info("Database tables created successfully")
    except Exception as e:
        logger.error(f"Error creating database table: {e}")
        raise

def drop_tables(bind=None):
    """Drop all database tables defined in the models.

    WARNING: This will permanently delete all data in the tables.
    Use only in development/testing environments.
    """
    try:
        Base.metadata.drop_all(bind=bind or engine)
        logger.info("Database tables dropped successfully")
    except Exception as e:
        logger.error(f"Error dropping database tables: {e}")
        raise
