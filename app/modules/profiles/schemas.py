from pydantic import BaseModel
from typing import Optional, List, Literal
from datetime import datetime
from app.modules.auth.schemas import Identity

ExperienceLevel = Literal["intern", "entry", "mid", "senior"]

EXPERIENCE_LEVELS = [
    {"value": "intern", "label": "Intern"},
    {"value": "entry", "label": "Entry Level"},
    {"value": "mid", "label": "Mid Level"},
    {"value": "senior", "label": "Senior Level"},
]


class ProfileUpdate(BaseModel):
    resume_url: Optional[str] = None
    skills: Optional[List[str]] = None
    interests: Optional[List[str]] = None
    experience_level: Optional[ExperienceLevel] = None
    preferred_location: Optional[str] = None
    bio: Optional[str] = None
    github_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    portfolio_url: Optional[str] = None

    class Config:
        # owner_id, id and updated_at are assigned server-side
        extra = "forbid"


class ProfileResponse(BaseModel):
    id: str
    owner_id: str
    resume_url: Optional[str] = None
    skills: Optional[List[str]] = None
    interests: Optional[List[str]] = None
    experience_level: Optional[ExperienceLevel] = None
    preferred_location: Optional[str] = None
    bio: Optional[str] = None
    github_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ResumeUpload(BaseModel):
    """A candidate resume file, already read into memory."""
    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def extension(self) -> str:
        return self.filename.rsplit(".", 1)[-1]


class UploadResult(BaseModel):
    success: bool
    url: Optional[str] = None
    error: Optional[str] = None
    status_code: Optional[int] = None


class ProfileResult(BaseModel):
    success: bool
    data: Optional[ProfileResponse] = None
    error: Optional[str] = None
    status_code: Optional[int] = None


class UserProfileResult(BaseModel):
    success: bool
    user: Optional[Identity] = None
    profile: Optional[ProfileResponse] = None
    error: Optional[str] = None
    status_code: Optional[int] = None


class CurrentUserProfileResponse(BaseModel):
    user: Identity
    profile: Optional[ProfileResponse] = None


class ResumeUploadResponse(BaseModel):
    url: str
    message: str


class ProfileFormData(BaseModel):
    """Editable draft; sequences are kept as comma-delimited display text."""
    skills: str = ""
    interests: str = ""
    experience_level: str = ""
    preferred_location: str = ""
    bio: str = ""
    github_url: str = ""
    linkedin_url: str = ""
    portfolio_url: str = ""


class ProfileFormState(BaseModel):
    state: str
    user: Optional[Identity] = None
    profile: Optional[ProfileResponse] = None
    data: ProfileFormData
    existing_resume_url: str = ""
    staged_resume: Optional[str] = None
    error: str = ""
    success: str = ""
    experience_levels: List[dict] = EXPERIENCE_LEVELS
