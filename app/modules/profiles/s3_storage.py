import boto3
from botocore.exceptions import ClientError
from app.config.settings import settings
from app.modules.profiles.storage import ResumeStorage
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class S3ResumeStorage(ResumeStorage):
    def __init__(self, s3_client=None):
        if not settings.s3_bucket_name:
            raise ValueError("S3 bucket name must be configured")
        if s3_client is None:
            if not all([settings.aws_access_key_id, settings.aws_secret_access_key]):
                raise ValueError("AWS S3 credentials and bucket name must be configured")
            s3_client = boto3.client(
                's3',
                aws_access_key_id=settings.aws_access_key_id,
                aws_secret_access_key=settings.aws_secret_access_key,
                region_name=settings.aws_region
            )
        self.s3_client = s3_client
        self.bucket_name = settings.s3_bucket_name
        self.region = settings.aws_region

    @property
    def _url_prefix(self) -> str:
        return f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com/"

    def upload(self, key: str, content: bytes, content_type: str) -> None:
        """Upload file to S3; IfNoneMatch makes an existing key fail instead of being replaced"""
        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=content,
                ContentType=content_type,
                CacheControl=f"max-age={settings.resume_cache_control}",
                IfNoneMatch="*"
            )
        except ClientError as e:
            logger.error(f"Failed to upload file to S3: {str(e)}")
            raise

    def public_url(self, key: str) -> str:
        return f"{self._url_prefix}{key}"

    def key_from_url(self, url: str) -> Optional[str]:
        if not url or not url.startswith(self._url_prefix):
            return None
        return url[len(self._url_prefix):] or None

    def delete(self, key: str) -> bool:
        """Delete file from S3"""
        try:
            self.s3_client.delete_object(Bucket=self.bucket_name, Key=key)
            return True
        except ClientError as e:
            logger.error(f"Failed to delete file from S3: {str(e)}")
            return False
