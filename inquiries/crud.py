from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy import desc
from typing import List
import logging
from exceptions import StorageError
from . import model, schema

logger = logging.getLogger(__name__)

# ---------- Inquiry CRUD operations ---------- #
# Mutations on an unknown id are not errors: they report 0 affected rows.

def _storage_error(db: Session, action: str, e: SQLAlchemyError) -> StorageError:
    db.rollback()
    logger.error(f"Failed to {action}: {e}")
    return StorageError(str(e))

def create_inquiry(db: Session, inquiry: schema.InquiryCreate) -> int:
    """Store a new inquiry with status 'New' and return its id"""
    db_inquiry = model.Inquiry(**inquiry.model_dump(include=set(model.MUTABLE_FIELDS)))
    try:
        db.add(db_inquiry)
        db.commit()
        db.refresh(db_inquiry)
    except SQLAlchemyError as e:
        raise _storage_error(db, "create inquiry", e) from e

    logger.info(f"Inquiry {db_inquiry.id} received")
    return db_inquiry.id

def list_inquiries(db: Session) -> List[model.Inquiry]:
    """All inquiries, newest first"""
    try:
        return (
            db.query(model.Inquiry)
            .order_by(desc(model.Inquiry.submission_date), desc(model.Inquiry.id))
            .all()
        )
    except SQLAlchemyError as e:
        raise _storage_error(db, "list inquiries", e) from e

def update_inquiry(db: Session, inquiry_id: int, inquiry: schema.InquiryUpdate) -> int:
    """Overwrite every mutable field; omitted fields become null"""
    values = inquiry.model_dump(include=set(model.MUTABLE_FIELDS))
    try:
        changes = (
            db.query(model.Inquiry)
            .filter(model.Inquiry.id == inquiry_id)
            .update(values, synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as e:
        raise _storage_error(db, f"update inquiry {inquiry_id}", e) from e

    logger.info(f"Updated inquiry {inquiry_id} ({changes} row(s))")
    return changes

def update_inquiry_status(db: Session, inquiry_id: int, status: str) -> int:
    try:
        changes = (
            db.query(model.Inquiry)
            .filter(model.Inquiry.id == inquiry_id)
            .update({model.Inquiry.status: status}, synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as e:
        raise _storage_error(db, f"update status of inquiry {inquiry_id}", e) from e

    logger.info(f"Status of inquiry {inquiry_id} set to '{status}' ({changes} row(s))")
    return changes

def delete_inquiry(db: Session, inquiry_id: int) -> int:
    try:
        changes = (
            db.query(model.Inquiry)
            .filter(model.Inquiry.id == inquiry_id)
            .delete(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as e:
        raise _storage_error(db, f"delete inquiry {inquiry_id}", e) from e

    logger.info(f"Deleted inquiry {inquiry_id} ({changes} row(s))")
    return changes
