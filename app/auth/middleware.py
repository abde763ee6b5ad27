"""Authentication Middleware"""
import logging
from functools import lru_cache
from typing import Optional
from jose import JWTError
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app import config
from app.auth.models import Identity, Principal
from app.auth.jwt_verifier import IdentityVerifier, JWTVerifier
from app.auth.permissions_manager import PermissionsManager
from app.db.postgres import get_db
from app.users.repository import UserRepository
from app.utils.exceptions import AuthenticationException, AuthorizationException

logger = logging.getLogger(__name__)

# Missing credentials are reported by verify_token as 401, not by HTTPBearer
security = HTTPBearer(auto_error=False)
permissions_manager = PermissionsManager()


@lru_cache
def get_identity_verifier() -> IdentityVerifier:
    return JWTVerifier(
        jwks_url=config.IDENTITY_JWKS_URL,
        issuer=config.IDENTITY_ISSUER,
        audience=config.IDENTITY_AUDIENCE,
        algorithm=config.JWT_ALGORITHM,
    )


async def optional_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> Optional[Identity]:
    """
    Verify the bearer token if one was sent.

    Expected JWT claims:
    - sub: user_id
    - email: optional
    """
    if credentials is None:
        return None

    try:
        payload = verifier.verify_and_decode(credentials.credentials)
    except JWTError as e:
        raise AuthenticationException(f"Invalid token: {str(e)}")
    except Exception as e:
        logger.error(f"Token verification failed: {e}")
        raise AuthenticationException("Invalid token")

    if not payload.get("sub"):
        raise AuthenticationException("Invalid token: missing subject")

    return Identity(
        sub=payload["sub"],
        email=payload.get("email", ""),
        iat=payload.get("iat"),
        exp=payload.get("exp"),
    )


async def verify_token(identity: Optional[Identity] = Depends(optional_identity)) -> Identity:
    """Require a verified bearer token."""
    if identity is None:
        raise AuthenticationException("No token provided")
    return identity


async def get_principal(
    identity: Identity = Depends(verify_token),
    db: AsyncSession = Depends(get_db),
) -> Principal:
    """Resolve the caller's registered account and role permissions."""
    user = await UserRepository(db).get_by_id(identity.user_id)
    if not user:
        raise AuthorizationException("User is not registered")

    return Principal(
        user_id=user.user_id,
        email=user.email,
        role=user.role,
        permissions=permissions_manager.get_permissions_for_role(user.role),
    )


def check_permission(principal: Principal, required_permission: str):
    """
    Check if user has required permission.

    Raises:
        AuthorizationException: If user lacks required permission
    """
    if not principal.has(required_permission):
        raise AuthorizationException(f"Missing required permission: {required_permission}")


def ensure_self_or_permission(principal: Principal, owner_id: Optional[str], permission: str):
    """Allow the resource owner, or anyone holding `permission`."""
    if owner_id is not None and principal.user_id == owner_id:
        return
    if principal.has(permission):
        return
    raise AuthorizationException("You are not authorized to access this resource")
