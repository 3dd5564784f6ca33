import logging
import time
from datetime import datetime, timezone
from typing import Optional

from supabase import Client

from app.config.settings import settings
from app.core.exceptions import (
    ProfileServiceError, ValidationError, AuthenticationError, BackendError,
    NOT_AUTHENTICATED_MESSAGE,
)
from app.modules.auth.schemas import Identity
from app.modules.auth.service import AuthService
from app.modules.profiles.models import (
    PROFILES_TABLE, OWNER_COLUMN, ALLOWED_RESUME_TYPES, NO_ROWS_ERROR_CODE,
)
from app.modules.profiles.schemas import (
    ProfileUpdate, ProfileResponse, ResumeUpload,
    UploadResult, ProfileResult, UserProfileResult,
)
from app.modules.profiles.storage import ResumeStorage

logger = logging.getLogger(__name__)


def _error_message(exc: Exception) -> str:
    """Best human-readable message from a postgrest/storage/boto exception."""
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    if exc.args and isinstance(exc.args[0], dict):
        return str(exc.args[0].get("message") or exc.args[0])
    return str(exc)


class ProfileService:
    """
    Profile and resume operations for the authenticated caller.

    Every operation returns a result model instead of raising: declined
    results carry success=False, a human-readable error and the status
    code of the error kind. Ownership is enforced here explicitly since
    the client in use may bypass row-level security.
    """

    def __init__(self, supabase: Client, storage: ResumeStorage, auth_service: AuthService):
        self.supabase = supabase
        self.storage = storage
        self.auth_service = auth_service

    def _validate_resume(self, file: ResumeUpload):
        if file.content_type not in ALLOWED_RESUME_TYPES:
            raise ValidationError("Invalid file type. Please upload a PDF, DOC, or DOCX file.")
        if file.size > settings.max_resume_size_bytes:
            raise ValidationError("File size too large. Please upload a file smaller than 10MB.")

    def upload_resume(self, file: ResumeUpload, owner_id: str) -> UploadResult:
        """Validate and store a resume under {owner_id}/{unix_millis}.{ext}"""
        try:
            self._validate_resume(file)
            key = f"{owner_id}/{int(time.time() * 1000)}.{file.extension}"
            try:
                self.storage.upload(key, file.content, file.content_type)
                url = self.storage.public_url(key)
            except Exception as e:
                logger.error(f"Upload error: {e}")
                raise BackendError(f"Upload failed: {_error_message(e)}")
            logger.info("Stored resume %s in bucket %s", key, self.storage.bucket_name)
            return UploadResult(success=True, url=url)
        except ProfileServiceError as e:
            return UploadResult(success=False, error=e.message, status_code=e.status_code)

    def remove_resume(self, url: str, owner_id: str) -> bool:
        """Delete a stored resume by its public URL, only if owner_id owns its key"""
        key = self.storage.key_from_url(url)
        if not key or key.split("/", 1)[0] != owner_id:
            logger.warning("Refusing to delete resume not owned by %s: %s", owner_id, url)
            return False
        return self.storage.delete(key)

    def _fetch_row(self, owner_id: str) -> Optional[dict]:
        try:
            result = self.supabase.table(PROFILES_TABLE)\
                .select("*")\
                .eq(OWNER_COLUMN, owner_id)\
                .maybe_single()\
                .execute()
        except Exception as e:
            if getattr(e, "code", None) == NO_ROWS_ERROR_CODE:
                return None
            logger.error(f"Load profile error: {e}")
            raise BackendError(f"Failed to load profile: {_error_message(e)}")
        # maybe_single() yields no response at all on newer postgrest clients
        if result is None or not result.data:
            return None
        if str(result.data.get(OWNER_COLUMN)) != str(owner_id):
            raise BackendError("Failed to load profile: ownership mismatch")
        return result.data

    def load_profile(self, owner_id: str) -> ProfileResult:
        """Load the single profile row for owner_id; a missing row is success with data=None"""
        try:
            row = self._fetch_row(owner_id)
        except ProfileServiceError as e:
            return ProfileResult(success=False, error=e.message, status_code=e.status_code)
        if row is None:
            return ProfileResult(success=True, data=None)
        return ProfileResult(success=True, data=ProfileResponse(**row))

    def save_profile(self, fields: ProfileUpdate, identity: Optional[Identity]) -> ProfileResult:
        """Upsert the caller's profile keyed on owner_id; only fields that were set are written"""
        try:
            if identity is None:
                raise AuthenticationError(NOT_AUTHENTICATED_MESSAGE)

            profile_to_save = fields.model_dump(exclude_unset=True)
            profile_to_save[OWNER_COLUMN] = identity.id
            profile_to_save["updated_at"] = datetime.now(timezone.utc).isoformat()

            previous_resume_url = None
            if settings.delete_replaced_resumes and "resume_url" in profile_to_save:
                try:
                    previous = self._fetch_row(identity.id)
                    previous_resume_url = previous.get("resume_url") if previous else None
                except BackendError as e:
                    logger.warning(f"Skipping replaced resume cleanup for {identity.id}: {e.message}")

            try:
                result = self.supabase.table(PROFILES_TABLE)\
                    .upsert(profile_to_save, on_conflict=OWNER_COLUMN)\
                    .execute()
            except Exception as e:
                logger.error(f"Save profile error: {e}")
                raise BackendError(f"Failed to save profile: {_error_message(e)}")

            if not result.data:
                raise BackendError("Failed to save profile: no row returned")

            saved = ProfileResponse(**result.data[0])
            if previous_resume_url and previous_resume_url != saved.resume_url:
                self.remove_resume(previous_resume_url, identity.id)
            return ProfileResult(success=True, data=saved)
        except ProfileServiceError as e:
            return ProfileResult(success=False, error=e.message, status_code=e.status_code)

    def load_current_user_with_profile(self, token: Optional[str]) -> UserProfileResult:
        """Resolve the caller, then load their profile; profile errors pass through unchanged"""
        identity = self.auth_service.resolve_identity(token)
        if identity is None:
            return UserProfileResult(
                success=False,
                error=NOT_AUTHENTICATED_MESSAGE,
                status_code=AuthenticationError.status_code,
            )

        profile_result = self.load_profile(identity.id)
        if not profile_result.success:
            return UserProfileResult(
                success=False,
                error=profile_result.error,
                status_code=profile_result.status_code,
            )

        return UserProfileResult(success=True, user=identity, profile=profile_result.data)
