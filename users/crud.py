from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import Optional
import logging
from exceptions import StorageError
from . import model
from .security import hash_password

logger = logging.getLogger(__name__)


def get_account_by_username(db: Session, username: str) -> Optional[model.Account]:
    """Exact, case-sensitive lookup of an account"""
    try:
        return db.query(model.Account).filter(model.Account.username == username).first()
    except SQLAlchemyError as e:
        logger.error(f"Account lookup failed: {e}")
        raise StorageError(str(e)) from e


def create_account(db: Session, username: str, password: str, role: str = "admin") -> model.Account:
    """Provision an account. Only used for seeding; there is no HTTP endpoint for this."""
    db_account = model.Account(
        username=username,
        password_hash=hash_password(password),
        role=role,
    )
    try:
        db.add(db_account)
        db.commit()
        db.refresh(db_account)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Could not create account '{username}': {e}")
        raise StorageError(str(e)) from e
    return db_account
