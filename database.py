from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker
import logging
from config import DATABASE_URL

# Configure logging
logger = logging.getLogger(__name__)


def build_engine(url: str):
    """Create an engine for either the local (SQLite) or networked (PostgreSQL) database"""
    connect_args = {}
    if url.startswith("sqlite"):
        # Requests are served from a threadpool
        connect_args["check_same_thread"] = False
    return create_engine(url, connect_args=connect_args, pool_pre_ping=True)


# Log the database URL (with password masked for security)
logger.info(f"Database URL is {make_url(DATABASE_URL).render_as_string(hide_password=True)}")

# Create SQLAlchemy engine and session
engine = build_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

# Function to get a database session
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# Function to create tables
def create_tables(bind=None):
    try:
        Base.metadata.create_all(bind=bind or engine)
        logger.info("Database tables created successfully")
    except Exception as e:
        logger.error(f"Error creating database tables: {str(e)}")
        raise
