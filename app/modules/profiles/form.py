"""
Profile form session.

Holds the editable draft for one caller and drives load/submit against
ProfileService. States:

    loading -> ready -> saving -> ready
    error (load failed), unauthenticated (no identity)

The session only branches on result.success; it never raises for
backend or validation failures.
"""
import logging
from typing import List, Optional

from app.config.settings import settings
from app.core.exceptions import AuthenticationError, NOT_AUTHENTICATED_MESSAGE
from app.modules.auth.schemas import Identity
from app.modules.auth.service import AuthService
from app.modules.profiles.schemas import (
    EXPERIENCE_LEVELS, ProfileFormData, ProfileFormState, ProfileResponse, ProfileUpdate, ResumeUpload,
)
from app.modules.profiles.service import ProfileService

logger = logging.getLogger(__name__)

LOADING = "loading"
READY = "ready"
SAVING = "saving"
ERROR = "error"
UNAUTHENTICATED = "unauthenticated"

SAVED_MESSAGE = "Profile saved successfully!"
EXPERIENCE_LEVEL_VALUES = [level["value"] for level in EXPERIENCE_LEVELS]


def split_list_field(text: str) -> List[str]:
    """'React, Node, React' -> ['React', 'Node', 'React']; blanks dropped, order kept"""
    return [item.strip() for item in (text or "").split(",") if item.strip()]


def join_list_field(items: Optional[List[str]]) -> str:
    return ", ".join(items) if items else ""


class ProfileForm:
    def __init__(self, service: ProfileService, auth_service: AuthService, token: Optional[str]):
        self.service = service
        self.auth_service = auth_service
        self.token = token

        self.state = LOADING
        self.user: Optional[Identity] = None
        self.profile: Optional[ProfileResponse] = None
        self.data = ProfileFormData()
        self.existing_resume_url = ""
        self.resume_file: Optional[ResumeUpload] = None
        self.error = ""
        self.success = ""

    def _set_error(self, message: str):
        self.error = message
        self.success = ""

    def _set_success(self, message: str):
        self.success = message
        self.error = ""

    def _fill_from_profile(self, profile: ProfileResponse):
        self.profile = profile
        self.existing_resume_url = profile.resume_url or ""
        self.data = ProfileFormData(
            skills=join_list_field(profile.skills),
            interests=join_list_field(profile.interests),
            experience_level=profile.experience_level or "",
            preferred_location=profile.preferred_location or "",
            bio=profile.bio or "",
            github_url=profile.github_url or "",
            linkedin_url=profile.linkedin_url or "",
            portfolio_url=profile.portfolio_url or "",
        )

    def activate(self) -> "ProfileForm":
        self.state = LOADING
        self.error = ""

        result = self.service.load_current_user_with_profile(self.token)
        if not result.success:
            if result.status_code == AuthenticationError.status_code:
                self.state = UNAUTHENTICATED
            else:
                self._set_error(result.error)
                self.state = ERROR
            return self

        self.user = result.user
        if result.profile:
            self._fill_from_profile(result.profile)
        self.state = READY
        return self

    def update_field(self, name: str, value: str):
        """Edit the local draft only; nothing is written until submit()"""
        if name not in ProfileFormData.model_fields:
            raise ValueError(f"Unknown profile form field: {name}")
        setattr(self.data, name, value if value is not None else "")

    def stage_resume(self, file: Optional[ResumeUpload]):
        """Stage a replacement resume; upload is deferred to submit()"""
        if file is None:
            return
        self.resume_file = file
        # stale "current resume" link must not show once a new file is staged
        self.existing_resume_url = ""

    def build_update(self, resume_url: str) -> ProfileUpdate:
        return ProfileUpdate(
            resume_url=resume_url or None,
            skills=split_list_field(self.data.skills),
            interests=split_list_field(self.data.interests),
            experience_level=self.data.experience_level or None,
            preferred_location=self.data.preferred_location or None,
            bio=self.data.bio or None,
            github_url=self.data.github_url or None,
            linkedin_url=self.data.linkedin_url or None,
            portfolio_url=self.data.portfolio_url or None,
        )

    def submit(self) -> "ProfileForm":
        if self.user is None:
            self._set_error(NOT_AUTHENTICATED_MESSAGE)
            return self

        self.state = SAVING
        self.error = ""
        self.success = ""
        try:
            if self.data.experience_level and self.data.experience_level not in EXPERIENCE_LEVEL_VALUES:
                self._set_error(f"Invalid experience level: {self.data.experience_level}")
                return self

            resume_url = self.existing_resume_url

            if self.resume_file is not None:
                upload_result = self.service.upload_resume(self.resume_file, self.user.id)
                if not upload_result.success:
                    self._set_error(upload_result.error)
                    return self
                resume_url = upload_result.url

            save_result = self.service.save_profile(self.build_update(resume_url), self.user)
            if not save_result.success:
                self._set_error(save_result.error)
                return self

            self.profile = save_result.data
            self.existing_resume_url = save_result.data.resume_url or ""
            self.resume_file = None
            self._set_success(SAVED_MESSAGE)
            logger.info("Profile form saved for %s", self.user.id)
            return self
        finally:
            self.state = READY

    def sign_out(self) -> str:
        """Invalidate the session; returns where the caller should navigate next"""
        if self.token:
            self.auth_service.logout(self.token)
        return settings.login_redirect_path

    def snapshot(self) -> ProfileFormState:
        return ProfileFormState(
            state=self.state,
            user=self.user,
            profile=self.profile,
            data=self.data.model_copy(),
            existing_resume_url=self.existing_resume_url,
            staged_resume=self.resume_file.filename if self.resume_file else None,
            error=self.error,
            success=self.success,
        )
