from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, Form
from app.modules.profiles.schemas import (
    ProfileUpdate, ProfileResponse, CurrentUserProfileResponse, ResumeUpload,
    ResumeUploadResponse, ProfileFormState,
)
from app.modules.profiles.service import ProfileService
from app.modules.profiles.form import ProfileForm, READY
from app.modules.auth.schemas import Identity, SignOutResponse
from app.modules.auth.service import AuthService
from app.core.dependencies import (
    get_profile_service, get_auth_service, get_current_identity,
    get_current_token, get_optional_token,
)
from typing import Optional

router = APIRouter(prefix="/profiles", tags=["profiles"])
form_router = APIRouter(prefix="/profile-form", tags=["profile-form"])

FORM_FIELDS = (
    "skills", "interests", "experience_level", "preferred_location",
    "bio", "github_url", "linkedin_url", "portfolio_url",
)


def _raise_declined(result):
    raise HTTPException(status_code=result.status_code or 500, detail=result.error)


async def _read_resume(file: UploadFile) -> ResumeUpload:
    return ResumeUpload(
        filename=file.filename or "",
        content_type=file.content_type or "",
        content=await file.read(),
    )


@router.get("/me", response_model=CurrentUserProfileResponse)
async def get_my_profile(
    token: str = Depends(get_current_token),
    service: ProfileService = Depends(get_profile_service)
):
    """Get the current user and their profile (profile is null until first save)"""
    result = service.load_current_user_with_profile(token)
    if not result.success:
        _raise_declined(result)
    return CurrentUserProfileResponse(user=result.user, profile=result.profile)


@router.put("/me", response_model=ProfileResponse)
async def save_my_profile(
    profile_data: ProfileUpdate,
    identity: Identity = Depends(get_current_identity),
    service: ProfileService = Depends(get_profile_service)
):
    """Create or update the current user's profile"""
    result = service.save_profile(profile_data, identity)
    if not result.success:
        _raise_declined(result)
    return result.data


@router.post("/me/resume", response_model=ResumeUploadResponse, status_code=201)
async def upload_my_resume(
    file: UploadFile = File(...),
    identity: Identity = Depends(get_current_identity),
    service: ProfileService = Depends(get_profile_service)
):
    """
    Upload a resume (PDF, DOC or DOCX, max 10MB) under the caller's
    storage prefix. Returns its public URL; store it on the profile
    with PUT /profiles/me.
    """
    result = service.upload_resume(await _read_resume(file), identity.id)
    if not result.success:
        _raise_declined(result)
    return ResumeUploadResponse(url=result.url, message="Resume uploaded successfully")


@form_router.get("", response_model=ProfileFormState)
async def get_profile_form(
    token: Optional[str] = Depends(get_optional_token),
    service: ProfileService = Depends(get_profile_service),
    auth_service: AuthService = Depends(get_auth_service)
):
    """Load the profile form: draft fields, current resume link, or the unauthenticated view"""
    return ProfileForm(service, auth_service, token).activate().snapshot()


@form_router.post("", response_model=ProfileFormState)
async def submit_profile_form(
    skills: Optional[str] = Form(None),
    interests: Optional[str] = Form(None),
    experience_level: Optional[str] = Form(None),
    preferred_location: Optional[str] = Form(None),
    bio: Optional[str] = Form(None),
    github_url: Optional[str] = Form(None),
    linkedin_url: Optional[str] = Form(None),
    portfolio_url: Optional[str] = Form(None),
    resume: Optional[UploadFile] = File(None),
    token: Optional[str] = Depends(get_optional_token),
    service: ProfileService = Depends(get_profile_service),
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Submit the profile form. Omitted fields keep their loaded values;
    a resume file, when attached, is uploaded before the profile is saved.
    The outcome is reported in the returned state's error/success notice.
    """
    form = ProfileForm(service, auth_service, token).activate()
    if form.state != READY:
        return form.snapshot()

    submitted = {
        "skills": skills,
        "interests": interests,
        "experience_level": experience_level,
        "preferred_location": preferred_location,
        "bio": bio,
        "github_url": github_url,
        "linkedin_url": linkedin_url,
        "portfolio_url": portfolio_url,
    }
    for name in FORM_FIELDS:
        if submitted[name] is not None:
            form.update_field(name, submitted[name])

    if resume is not None and resume.filename:
        form.stage_resume(await _read_resume(resume))

    return form.submit().snapshot()


@form_router.post("/sign-out", response_model=SignOutResponse)
async def sign_out_profile_form(
    token: str = Depends(get_current_token),
    service: ProfileService = Depends(get_profile_service),
    auth_service: AuthService = Depends(get_auth_service)
):
    """Sign out and return where the client should navigate"""
    redirect_to = ProfileForm(service, auth_service, token).sign_out()
    return SignOutResponse(message="Signed out", redirect_to=redirect_to)
