from fastapi import APIRouter, Depends
from app.modules.auth.schemas import LoginRequest, TokenResponse, Identity, SignOutResponse
from app.modules.auth.service import AuthService
from app.core.dependencies import get_auth_service, get_current_token, get_current_identity
from app.config.settings import settings

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access token"""
    return service.login(login_data)


@router.post("/logout", response_model=SignOutResponse)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return SignOutResponse(message="Logged out successfully", redirect_to=settings.login_redirect_path)


@router.get("/me", response_model=Identity)
async def get_current_user(current_user: Identity = Depends(get_current_identity)):
    """Get current authenticated identity"""
    return current_user
