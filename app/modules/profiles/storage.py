"""Resume object storage backed by a Supabase Storage bucket."""
import logging
from typing import Optional

from supabase import Client

from app.config.settings import settings

logger = logging.getLogger(__name__)


class ResumeStorage:
    """Interface shared by the Supabase and S3 resume stores."""

    bucket_name: str

    def upload(self, key: str, content: bytes, content_type: str) -> None:
        raise NotImplementedError

    def public_url(self, key: str) -> str:
        raise NotImplementedError

    def key_from_url(self, url: str) -> Optional[str]:
        raise NotImplementedError

    def delete(self, key: str) -> bool:
        raise NotImplementedError


class SupabaseResumeStorage(ResumeStorage):
    def __init__(self, supabase: Client, bucket_name: Optional[str] = None):
        self.supabase = supabase
        self.bucket_name = bucket_name or settings.resumes_bucket

    @property
    def _bucket(self):
        return self.supabase.storage.from_(self.bucket_name)

    def upload(self, key: str, content: bytes, content_type: str) -> None:
        """Create the object at key; fails if it already exists."""
        self._bucket.upload(
            key,
            content,
            {
                "content-type": content_type,
                "cache-control": settings.resume_cache_control,
                "upsert": "false",
            },
        )

    def public_url(self, key: str) -> str:
        return self._bucket.get_public_url(key)

    def key_from_url(self, url: str) -> Optional[str]:
        marker = f"/object/public/{self.bucket_name}/"
        if not url or marker not in url:
            return None
        return url.split(marker, 1)[1].split("?", 1)[0] or None

    def delete(self, key: str) -> bool:
        try:
            self._bucket.remove([key])
            return True
        except Exception as e:
            logger.warning("Failed to delete from Supabase Storage (%s): %s", key, e)
            return False


def build_resume_storage(supabase: Client) -> ResumeStorage:
    """Pick the configured resume store; S3 when RESUME_STORAGE_BACKEND=s3."""
    if settings.uses_s3_storage:
        from app.modules.profiles.s3_storage import S3ResumeStorage
        return S3ResumeStorage()
    return SupabaseResumeStorage(supabase)
