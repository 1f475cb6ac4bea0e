from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
import logging
from database import get_db
from users.dependencies import require_auth
from users.schema import TokenClaims
from . import crud, schema

logger = logging.getLogger(__name__)

# Public form endpoint
submission_router = APIRouter(
    prefix="/project-submission",
    tags=["submissions"]
)

# Admin endpoints, all behind the bearer token gate
projects_router = APIRouter(
    prefix="/projects",
    tags=["projects"],
    dependencies=[Depends(require_auth)]
)

@submission_router.post("", response_model=schema.SubmissionResponse, status_code=status.HTTP_201_CREATED)
def submit_inquiry(inquiry: schema.InquiryCreate, db: Session = Depends(get_db)):
    inquiry_id = crud.create_inquiry(db, inquiry)
    return schema.SubmissionResponse(id=inquiry_id)

@projects_router.get("", response_model=List[schema.InquiryResponse])
def read_projects(
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(require_auth),
):
    inquiries = crud.list_inquiries(db)
    logger.info(f"'{current_user.username}' listed {len(inquiries)} inquiries")
    return inquiries

@projects_router.put("/{inquiry_id}", response_model=schema.ChangeResponse)
def update_project(
    inquiry_id: int,
    inquiry: schema.InquiryUpdate,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(require_auth),
):
    changes = crud.update_inquiry(db, inquiry_id, inquiry)
    logger.info(f"'{current_user.username}' updated inquiry {inquiry_id} ({changes} row(s))")
    return schema.ChangeResponse(message="Project updated", changes=changes)

@projects_router.patch("/{inquiry_id}/status", response_model=schema.ChangeResponse)
def update_project_status(
    inquiry_id: int,
    status_update: schema.StatusUpdate,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(require_auth),
):
    changes = crud.update_inquiry_status(db, inquiry_id, status_update.status)
    logger.info(
        f"'{current_user.username}' set status of inquiry {inquiry_id} to '{status_update.status}' ({changes} row(s))"
    )
    return schema.ChangeResponse(message=f"Status updated to {status_update.status}", changes=changes)

@projects_router.delete("/{inquiry_id}", response_model=schema.ChangeResponse)
def delete_project(
    inquiry_id: int,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(require_auth),
):
    changes = crud.delete_inquiry(db, inquiry_id)
    logger.info(f"'{current_user.username}' deleted inquiry {inquiry_id} ({changes} row(s))")
    return schema.ChangeResponse(message="Project deleted", changes=changes)
