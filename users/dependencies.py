from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from typing import Optional
import logging
from exceptions import InvalidToken, Unauthenticated
from .schema import TokenClaims
from .security import TokenService

logger = logging.getLogger(__name__)

# Missing or non-bearer headers are reported by require_auth, not by FastAPI
bearer_scheme = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def require_auth(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    token_service: TokenService = Depends(get_token_service),
) -> TokenClaims:
    """Gate for protected endpoints: returns the caller's claims or rejects the request"""
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()

    try:
        claims = token_service.verify(credentials.credentials)
    except InvalidToken as e:
        logger.warning(f"Rejected bearer token: {type(e).__name__}")
        raise

    request.state.user = claims
    return claims
