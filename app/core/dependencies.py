"""
Core dependencies for route protection and service wiring
"""

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.database.supabase_client import get_supabase, get_request_supabase
from app.core.exceptions import AuthenticationError
from app.modules.auth.service import AuthService
from app.modules.auth.schemas import Identity
from app.modules.profiles.service import ProfileService
from app.modules.profiles.storage import ResumeStorage, build_resume_storage
from supabase import Client
from typing import Optional
import logging

logger = logging.getLogger(__name__)

# auto_error=False so the profile form can render its unauthenticated view
security = HTTPBearer(auto_error=False)


def get_optional_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security)
) -> Optional[str]:
    """Extract JWT token from Authorization header, if any"""
    if credentials is None:
        return None
    return credentials.credentials


def get_caller_supabase(token: Optional[str] = Depends(get_optional_token)) -> Client:
    """Service client when configured, otherwise a client carrying the caller's JWT"""
    return get_request_supabase(token)


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_resume_storage(supabase: Client = Depends(get_caller_supabase)) -> ResumeStorage:
    return build_resume_storage(supabase)


def get_profile_service(
    supabase: Client = Depends(get_caller_supabase),
    storage: ResumeStorage = Depends(get_resume_storage),
    auth_service: AuthService = Depends(get_auth_service)
) -> ProfileService:
    return ProfileService(supabase, storage, auth_service)


def get_current_token(token: Optional[str] = Depends(get_optional_token)) -> str:
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return token


def get_current_identity(
    token: str = Depends(get_current_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> Identity:
    """Resolve the caller's identity from the bearer token"""
    try:
        return auth_service.get_current_user(token)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
