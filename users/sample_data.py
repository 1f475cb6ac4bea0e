import logging
from sqlalchemy.orm import Session
from config import ADMIN_PASSWORD, ADMIN_USERNAME
from database import create_tables, get_db
from . import crud

logger = logging.getLogger(__name__)

def seed_admin(db: Session, username: str = ADMIN_USERNAME, password: str = ADMIN_PASSWORD):
    """
    Create the admin account from configuration if it does not exist yet.
    Does nothing when no credentials are configured.
    """
    if not username or not password:
        logger.info("ADMIN_USERNAME/ADMIN_PASSWORD not set, skipping admin account creation")
        return None

    existing = crud.get_account_by_username(db, username)
    if existing is not None:
        logger.info(f"Admin account '{username}' already exists, skipping")
        return existing

    account = crud.create_account(db, username, password, role="admin")
    logger.info(f"Created admin account '{username}'")
    return account

def initialize_admin_account():
    db: Session = next(get_db())
    try:
        seed_admin(db, ADMIN_USERNAME, ADMIN_PASSWORD)
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_tables()
    initialize_admin_account()
