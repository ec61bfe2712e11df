"""Bearer token to identity claim."""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from ticketstream.application.services.auth_service import claim_for, decode_access_token
from ticketstream.core.exceptions import UnauthorizedException
from ticketstream.domain.claims import IdentityClaim
from ticketstream.domain.repositories.user_repository import UserRepository
from ticketstream.interfaces.deps import get_user_repository

security = HTTPBearer(auto_error=False)


def get_current_claim(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    users: UserRepository = Depends(get_user_repository),
) -> IdentityClaim:
    """Extract and validate the caller's identity from the JWT token.

    The account must still exist and be active; the role is taken from the
    stored account so that a role change applies to tokens already issued.
    """
    if credentials is None:
        raise UnauthorizedException("Missing bearer token")

    claim = decode_access_token(credentials.credentials)
    if claim is None:
        raise UnauthorizedException("Invalid or expired token")

    user = users.get_by_id(claim.user_id)
    if user is None or not user.is_active:
        raise UnauthorizedException("User not found or inactive")

    return claim_for(user)


def get_optional_claim(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[IdentityClaim]:
    """Claim carried by a valid bearer token, if the request has one."""
    if credentials is None:
        return None
    return decode_access_token(credentials.credentials)
