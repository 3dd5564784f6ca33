import hashlib
import logging
import time
from supabase import Client
from app.core.exceptions import AuthenticationError, NOT_AUTHENTICATED_MESSAGE
from app.modules.auth.schemas import LoginRequest, TokenResponse, Identity
from fastapi import HTTPException
from typing import Dict, Optional

logger = logging.getLogger(__name__)

# In-memory cache for resolve_identity to reduce Supabase auth calls (e.g. many parallel requests with same token)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500


def _cache_key(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def clear_identity_cache():
    _AUTH_USER_CACHE.clear()


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate user using Supabase Auth"""
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })

            if not auth_response.user or not auth_response.session:
                raise HTTPException(status_code=401, detail="Invalid credentials")

            return TokenResponse(
                access_token=auth_response.session.access_token,
                token_type="bearer",
                user_id=auth_response.user.id,
                email=auth_response.user.email or login_data.email
            )
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            if "invalid" in error_message.lower() or "credentials" in error_message.lower():
                raise HTTPException(status_code=401, detail="Invalid email or password")
            raise HTTPException(status_code=500, detail=f"Login failed: {error_message}")

    def resolve_identity(self, token: Optional[str]) -> Optional[Identity]:
        """Resolve the identity behind a JWT, or None when it cannot be resolved. Uses short TTL cache."""
        if not token:
            return None
        cache_key = _cache_key(token)
        now = time.monotonic()
        if cache_key in _AUTH_USER_CACHE:
            identity, expiry = _AUTH_USER_CACHE[cache_key]
            if now < expiry:
                return identity
            del _AUTH_USER_CACHE[cache_key]
        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            logger.info("Could not resolve identity from token: %s", e)
            return None
        if not user_response or not user_response.user:
            return None
        user = user_response.user
        identity = Identity(
            id=str(user.id),
            email=user.email,
            user_metadata=user.user_metadata or {},
            app_metadata=user.app_metadata or {},
        )
        if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
            _AUTH_USER_CACHE[cache_key] = (identity, now + _AUTH_CACHE_TTL_SEC)
        return identity

    def get_current_user(self, token: Optional[str]) -> Identity:
        """Like resolve_identity, but raises AuthenticationError when no identity is found."""
        identity = self.resolve_identity(token)
        if identity is None:
            raise AuthenticationError(NOT_AUTHENTICATED_MESSAGE)
        return identity

    def logout(self, token: str) -> bool:
        """Invalidate the session behind token with Supabase Auth"""
        _AUTH_USER_CACHE.pop(_cache_key(token), None)
        try:
            self.supabase.auth.admin.sign_out(token)
            return True
        except Exception as e:
            logger.warning("Sign out failed: %s", e)
            return False
