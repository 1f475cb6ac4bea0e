from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging
from database import get_db
from exceptions import InvalidCredentials
from . import crud, schema
from .dependencies import get_token_service
from .security import TokenService, dummy_verify, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["auth"]
)

@router.post("/login", response_model=schema.LoginResponse)
def login(
    credentials: schema.LoginRequest,
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
):
    account = crud.get_account_by_username(db, credentials.username)

    # Unknown user and wrong password must be indistinguishable
    if account is None:
        dummy_verify()
        logger.info(f"Failed login for unknown user '{credentials.username}'")
        raise InvalidCredentials()

    if not verify_password(credentials.password, account.password_hash):
        logger.info(f"Failed login for '{credentials.username}'")
        raise InvalidCredentials()

    token = token_service.issue(
        schema.TokenClaims(id=account.id, username=account.username, role=account.role)
    )
    logger.info(f"User '{account.username}' logged in")
    return schema.LoginResponse(token=token, username=account.username)
